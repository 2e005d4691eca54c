"""Reference time used by the date-relative filters and notifications."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo

import tzlocal


@dataclass(frozen=True)
class ReferenceTime:
    """A fixed "now" plus the zone used to read calendar days.

    All comparisons happen on naive local wall-clock values: aware datetimes
    are converted into ``zone`` first, naive ones are taken as already local.
    """

    now: datetime
    zone: tzinfo

    @classmethod
    def at(cls, now: datetime | None = None) -> ReferenceTime:
        if now is None:
            now = datetime.now()
        zone = now.tzinfo or tzlocal.get_localzone()
        return cls(now=_to_naive(now, zone), zone=zone)

    @property
    def today(self) -> datetime:
        """Midnight at the start of the current local day."""
        return self.now.replace(hour=0, minute=0, second=0, microsecond=0)

    def localize(self, value: datetime) -> datetime:
        return _to_naive(value, self.zone)

    def days_ahead(self, days: int) -> datetime:
        return self.today + timedelta(days=days)


def _to_naive(value: datetime, zone: tzinfo) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(zone).replace(tzinfo=None)
