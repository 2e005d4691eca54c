"""Helpers shared by command modules."""

from __future__ import annotations

from typing import Any

from taskdeck_cli.config import get_config_manager
from taskdeck_cli.exceptions import ValidationError
from taskdeck_cli.models import Category, Task
from taskdeck_cli.utils.ui.formatters import OUTPUT_FORMATS


def resolve_output(
    output: str | None, json_opt: bool = False, profile: str = "default"
) -> str:
    """Pick the output format: --json, then --output, then the config default."""
    if json_opt:
        return "json"
    if output is None:
        output = get_config_manager(profile).get("output.format") or "pretty"
    if output not in OUTPUT_FORMATS:
        raise ValidationError(
            f"Unknown output format '{output}'. Choose from: {', '.join(OUTPUT_FORMATS)}"
        )
    return output


def task_to_dict(task: Task) -> dict[str, Any]:
    return task.model_dump(mode="json", exclude={"category_id"})


def tasks_payload(tasks: list[Task], overdue_ids: list[str] | None = None) -> dict[str, Any]:
    """Wrap a task list for format_output."""
    payload: dict[str, Any] = {"tasks": [task_to_dict(t) for t in tasks]}
    if overdue_ids:
        payload["overdue_ids"] = overdue_ids
    return payload


def categories_payload(categories: list[Category]) -> dict[str, Any]:
    return {"categories": [c.model_dump(mode="json") for c in categories]}


def truncate(text: str, limit: int = 60) -> str:
    return text if len(text) <= limit else text[: limit - 3] + "..."
