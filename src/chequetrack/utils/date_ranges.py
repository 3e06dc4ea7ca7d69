"""Civil-date window helpers.

Every function here takes and returns plain ``date`` values. Nothing reads the
system clock: callers resolve "today" in a timezone first (see
``chequetrack.utils.clock``) and pass it in.
"""

from datetime import date, timedelta
from enum import Enum
from typing import Iterator

from dateutil.relativedelta import relativedelta

from chequetrack.domain.entities import ProjectionRange
from chequetrack.domain.errors import (
    InvalidRangeError,
    ValidationError,
    invalid_range,
    negative_buffer,
)

DEFAULT_MONTH_BUFFER_DAYS = 7


class QuickRange(str, Enum):
    """Named windows relative to a supplied "today"."""

    LAST_WEEK = "last-week"
    LAST_MONTH = "last-month"
    NEXT_WEEK = "next-week"
    NEXT_MONTH = "next-month"
    THIS_MONTH = "this-month"


_QUICK_RANGE_ALIASES = {
    "lastweek": QuickRange.LAST_WEEK,
    "lastmonth": QuickRange.LAST_MONTH,
    "nextweek": QuickRange.NEXT_WEEK,
    "nextmonth": QuickRange.NEXT_MONTH,
    "thismonth": QuickRange.THIS_MONTH,
}


def iter_dates(start_date: date, end_date: date) -> Iterator[date]:
    """Yield every date from ``start_date`` to ``end_date`` inclusive.

    Raises:
        InvalidRangeError: If start_date is after end_date
    """
    if start_date > end_date:
        raise InvalidRangeError(invalid_range(start_date, end_date))

    cursor = start_date
    while cursor <= end_date:
        yield cursor
        cursor += timedelta(days=1)


def buffered_range(
    start_date: date,
    end_date: date,
    leading_days: int = 0,
    trailing_days: int = 0,
) -> ProjectionRange:
    """Expand ``[start_date, end_date]`` outward by the given day counts.

    Args:
        start_date: First day of the base window
        end_date: Last day of the base window
        leading_days: Days to add before start_date
        trailing_days: Days to add after end_date

    Returns:
        Buffered ProjectionRange

    Raises:
        InvalidRangeError: If the base window is inverted or a buffer is negative
    """
    if start_date > end_date:
        raise InvalidRangeError(invalid_range(start_date, end_date))
    if leading_days < 0 or trailing_days < 0:
        raise InvalidRangeError(negative_buffer(leading_days, trailing_days))

    return ProjectionRange(
        start_date=start_date - timedelta(days=leading_days),
        end_date=end_date + timedelta(days=trailing_days),
    )


def month_bounds(reference_date: date) -> tuple[date, date]:
    """Return first and last day of the month containing ``reference_date``."""
    first = reference_date.replace(day=1)
    last = first + relativedelta(months=1) - timedelta(days=1)
    return first, last


def month_range(
    reference_date: date,
    leading_buffer_days: int = DEFAULT_MONTH_BUFFER_DAYS,
    trailing_buffer_days: int = DEFAULT_MONTH_BUFFER_DAYS,
) -> ProjectionRange:
    """Calendar month containing ``reference_date``, then buffered.

    Calendar views show a few days of the neighbouring months, so the
    default buffer is a week on each side.
    """
    first, last = month_bounds(reference_date)
    return buffered_range(first, last, leading_buffer_days, trailing_buffer_days)


def parse_quick_range(value: "QuickRange | str") -> QuickRange:
    """Resolve a quick range name.

    Accepts enum members, their values (``last-week``) and the camelCase
    spellings used by the web client (``lastWeek``).

    Raises:
        ValidationError: If the name is not recognized
    """
    if isinstance(value, QuickRange):
        return value

    normalized = value.strip().lower()
    try:
        return QuickRange(normalized)
    except ValueError:
        pass

    key = normalized.replace("-", "").replace("_", "")
    if key in _QUICK_RANGE_ALIASES:
        return _QUICK_RANGE_ALIASES[key]

    supported = ", ".join(item.value for item in QuickRange)
    raise ValidationError(f"Unknown quick range: '{value}'. Supported ranges: {supported}")


def quick_range(kind: "QuickRange | str", today: date) -> ProjectionRange:
    """Return the named window relative to ``today``.

    Args:
        kind: Quick range name or member
        today: Civil date considered "today" by the caller

    Returns:
        ProjectionRange for the window
    """
    kind = parse_quick_range(kind)

    if kind is QuickRange.LAST_WEEK:
        return ProjectionRange(today - timedelta(days=7), today)
    elif kind is QuickRange.LAST_MONTH:
        return ProjectionRange(today - timedelta(days=30), today)
    elif kind is QuickRange.NEXT_WEEK:
        return ProjectionRange(today, today + timedelta(days=7))
    elif kind is QuickRange.NEXT_MONTH:
        return ProjectionRange(today, today + timedelta(days=30))
    else:
        first, last = month_bounds(today)
        return ProjectionRange(first, last)
