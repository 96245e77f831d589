"""Humanized "time ago" strings for listing pages."""

from datetime import datetime, timezone
from typing import Optional

# (divisor to reach the next unit, unit name)
_UNITS = [
    (60, "second"),
    (60, "minute"),
    (24, "hour"),
    (7, "day"),
    (4.3, "week"),
    (12, "month"),
    (None, "year"),
]


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def time_ago(moment: datetime, now: Optional[datetime] = None) -> str:
    """
    Describe how long ago ``moment`` was, e.g. ``"3 days ago"``.

    Naive datetimes are treated as UTC. Moments in the future are reported
    as ``"0 seconds ago"``.
    """
    now = _as_utc(now or datetime.now(timezone.utc))
    value = max(int((now - _as_utc(moment)).total_seconds()), 0)

    index = 0
    while _UNITS[index][0] is not None and value >= _UNITS[index][0]:
        value /= _UNITS[index][0]
        index += 1

    count = int(value)
    unit = _UNITS[index][1]
    return f"{count} {unit}{'' if count == 1 else 's'} ago"
