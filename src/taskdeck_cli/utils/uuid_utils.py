"""UUID utility functions for TaskDeck CLI.

Provides short UUID display and resolution of abbreviated IDs.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from taskdeck_cli.exceptions import NotFoundError, ValidationError

MIN_PREFIX_LENGTH = 4


class _HasId(Protocol):
    id: str


def shorten_uuid(uuid: str, length: int = 8) -> str:
    """Get shortened version of UUID (first N characters)."""
    return uuid[:length]


def resolve_id(
    short_or_full_id: str,
    candidates: Iterable[_HasId],
    kind: str = "Task",
    min_length: int = MIN_PREFIX_LENGTH,
) -> str:
    """Resolve a full ID or unique ID prefix against known records.

    Args:
        short_or_full_id: Full UUID or a prefix of at least ``min_length`` chars
        candidates: Records to match against
        kind: Record name used in error messages
        min_length: Minimum prefix length

    Returns:
        Full ID string

    Raises:
        ValidationError: If the prefix is too short or ambiguous
        NotFoundError: If nothing matches
    """
    needle = short_or_full_id.lower().strip()
    records = list(candidates)

    for record in records:
        if record.id.lower() == needle:
            return record.id

    if len(needle) < min_length:
        raise ValidationError(
            f"ID must be at least {min_length} characters. "
            f"Got: {needle} ({len(needle)} chars)"
        )

    matches = [r for r in records if r.id.lower().startswith(needle)]
    if not matches:
        raise NotFoundError(f"{kind} not found: {short_or_full_id}")

    if len(matches) > 1:
        shown = ", ".join(shorten_uuid(r.id) for r in matches[:5])
        if len(matches) > 5:
            shown += f", ... ({len(matches)} total)"
        raise ValidationError(
            f"Ambiguous ID '{short_or_full_id}' matches {len(matches)} {kind.lower()}s: {shown}"
        )

    return matches[0].id
