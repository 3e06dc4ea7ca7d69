"""Resolve "today" as a civil date in a named timezone."""

from datetime import date, datetime, timezone
from typing import Optional

from dateutil import tz

from chequetrack.domain.errors import ValidationError

DEFAULT_TIMEZONE = "UTC"


def resolve_timezone_name(*candidates: Optional[str]) -> str:
    """Return the first non-empty candidate, or UTC."""
    for candidate in candidates:
        if candidate and candidate.strip():
            return candidate.strip()
    return DEFAULT_TIMEZONE


def today_in_timezone(tz_name: str, now: Optional[datetime] = None) -> date:
    """Return the calendar date that ``now`` falls on in ``tz_name``.

    Args:
        tz_name: IANA timezone name (e.g. "Asia/Kathmandu")
        now: Aware instant to convert; defaults to the current time.
            Naive datetimes are treated as UTC.

    Returns:
        Civil date in that timezone

    Raises:
        ValidationError: If the timezone name is unknown
    """
    zone = tz.gettz(tz_name)
    if zone is None:
        raise ValidationError(f"Unknown timezone: '{tz_name}'")

    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    return now.astimezone(zone).date()
