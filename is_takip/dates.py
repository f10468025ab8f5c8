"""
Date helpers for the İş Takip project.

All aggregation compares naive datetimes in local time. Backend dates arrive as
either ``YYYY-MM-DD`` calendar dates or full ISO timestamps (often UTC with a
trailing ``Z``); both are normalized here.
"""

from datetime import date, datetime, time, timedelta
from typing import Optional, Tuple, Union

DateLike = Union[str, date, datetime]

DEFAULT_REPORT_START = date(2023, 1, 1)


def parse_date(value: DateLike) -> datetime:
    """
    Parse a backend date into a naive local datetime.

    Calendar dates (``2024-03-05``) are taken as local midnight. Timezone-aware
    timestamps are converted to local time, then stripped of tzinfo.

    Raises:
        ValueError: If the string is not an ISO 8601 date or timestamp.
        TypeError: If the value is not a string, date or datetime.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime.combine(value, time.min)
    elif isinstance(value, str):
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    else:
        raise TypeError(f"Unsupported date value: {value!r}")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def start_of_day(value: DateLike) -> datetime:
    return datetime.combine(parse_date(value).date(), time.min)


def end_of_day(value: DateLike) -> datetime:
    return datetime.combine(parse_date(value).date(), time.max)


def in_month(value: datetime, month: int, year: int) -> bool:
    """True if ``value`` falls in the given calendar month (1-12) and year."""
    return value.month == month and value.year == year


def in_range(
    value: datetime,
    start: Optional[DateLike] = None,
    end: Optional[DateLike] = None,
) -> bool:
    """
    Inclusive day-bounded range check.

    ``start`` is widened to 00:00:00 and ``end`` to 23:59:59.999999. A missing
    bound is open.
    """
    if start is not None and value < start_of_day(start):
        return False
    if end is not None and value > end_of_day(end):
        return False
    return True


def start_of_month(day: date) -> date:
    return day.replace(day=1)


def end_of_month(day: date) -> date:
    first_of_next = (day.replace(day=28) + timedelta(days=4)).replace(day=1)
    return first_of_next - timedelta(days=1)


def resolve_date_range(period: str, today: Optional[date] = None) -> Tuple[date, date]:
    """
    Resolve a named report period into an inclusive (start, end) date pair.

    Args:
        period: One of "this_month", "last_month", "this_year" or "default".
                "default" spans from 2023-01-01 to the end of the current month.
        today: Reference day. Defaults to the local current date.

    Raises:
        ValueError: For an unknown period name.
    """
    today = today or date.today()
    if period == "this_month":
        return start_of_month(today), end_of_month(today)
    if period == "last_month":
        last_month = start_of_month(today) - timedelta(days=1)
        return start_of_month(last_month), end_of_month(last_month)
    if period == "this_year":
        return date(today.year, 1, 1), today
    if period == "default":
        return DEFAULT_REPORT_START, end_of_month(today)
    raise ValueError(f"Unknown report period: {period}")
