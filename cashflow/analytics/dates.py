"""Resolution of symbolic periods and explicit date strings into ranges."""
from __future__ import annotations

import calendar
import re
from datetime import datetime, time, timedelta
from typing import Optional

from cashflow.schemas.common import DateRange

SUPPORTED_PERIODS = (
    "last_30_days",
    "last_90_days",
    "last_6_months",
    "last_year",
    "current_month",
    "current_year",
    "yesterday",
    "last_week",
    "last_month",
    "last_quarter",
)
CUSTOM_PERIOD = "custom"

_YEAR_PATTERN = re.compile(r"^\d{4}$")
_DAY_END = time(23, 59, 59, 999000)
_ONE_MS = timedelta(milliseconds=1)


class ParseError(ValueError):
    """Raised when a period or date string cannot be turned into a valid range."""


def parse_date(value: str, *, field: str = "date") -> datetime:
    """Parse ``YYYY-MM-DD`` or an ISO-8601 timestamp into a naive local datetime."""

    text = str(value).strip()
    if not text:
        raise ParseError(f"{field} is empty")
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise ParseError(f"Invalid {field} {value!r}; expected YYYY-MM-DD") from exc
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def shift_months(moment: datetime, months: int) -> datetime:
    """Move ``moment`` by whole calendar months, clamping to the month's last day."""

    index = moment.year * 12 + (moment.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def _year_range(year: int) -> tuple[datetime, datetime]:
    if not datetime.min.year <= year <= datetime.max.year:
        raise ParseError(f"Year {year:04d} is out of range")
    return (
        datetime(year, 1, 1),
        datetime.combine(datetime(year, 12, 31), _DAY_END),
    )


def _period_range(period: Optional[str], now: datetime) -> tuple[datetime, datetime]:
    key = (period or "").strip().lower()

    if _YEAR_PATTERN.match(key):
        return _year_range(int(key))

    if key == "last_90_days":
        return now - timedelta(days=90), now
    if key == "last_6_months":
        return shift_months(now, -6), now
    if key == "last_year":
        return shift_months(now, -12), now
    if key == "current_month":
        last_day = calendar.monthrange(now.year, now.month)[1]
        return (
            datetime(now.year, now.month, 1),
            datetime.combine(now.date().replace(day=last_day), _DAY_END),
        )
    if key == "current_year":
        return _year_range(now.year)
    if key == "yesterday":
        start = datetime.combine(now.date() - timedelta(days=1), time.min)
        return start, start + timedelta(days=1) - _ONE_MS
    if key == "last_week":
        return now - timedelta(days=7), now
    if key == "last_month":
        return shift_months(now, -1), now
    if key == "last_quarter":
        return shift_months(now, -3), now

    # last_30_days and anything unrecognised
    return now - timedelta(days=30), now


def resolve_date_range(
    period: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    *,
    now: Optional[datetime] = None,
) -> DateRange:
    """Turn a period name or explicit start/end strings into a ``DateRange``.

    Explicit dates take priority over ``period``. With only ``start_date`` the
    range ends now; with only ``end_date`` it starts 30 days earlier. A range
    whose start falls after its end is rejected with ``ParseError``.
    """

    current = now or datetime.now()

    start = parse_date(start_date, field="startDate") if start_date else None
    end = parse_date(end_date, field="endDate") if end_date else None

    try:
        if start is None and end is None:
            start, end = _period_range(period, current)
        elif end is None:
            end = current
        elif start is None:
            start = end - timedelta(days=30)
    except OverflowError as exc:
        raise ParseError(f"Date range falls outside the supported calendar: {exc}") from exc

    if start > end:
        raise ParseError(
            f"Start date {start.isoformat()} is after end date {end.isoformat()}"
        )
    return DateRange(start_date=start, end_date=end)


def describe_period(
    period: Optional[str],
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> str:
    """Label reported alongside results: ``custom`` for explicit dates."""

    if start_date or end_date:
        return CUSTOM_PERIOD
    return period or "last_30_days"
