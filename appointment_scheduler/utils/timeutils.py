# appointment_scheduler/utils/timeutils.py
"""
UTC instant and civil-date helpers.

Instants are timezone-aware ``datetime`` objects in UTC; civil dates are plain
``date`` objects. Both are immutable, so all arithmetic here returns new values.
"""
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterator, Optional

from appointment_scheduler.core.exceptions import ValidationError

UTC = timezone.utc


def utcnow() -> datetime:
    """Current instant, aware UTC"""
    return datetime.now(UTC)


def ensure_utc(value: datetime) -> datetime:
    """Normalise a datetime to aware UTC. Naive values are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def anchor(day: date, time_of_day: time) -> datetime:
    """Pin a time-of-day to a UTC calendar date, giving an absolute instant"""
    return datetime.combine(day, time_of_day.replace(tzinfo=None), tzinfo=UTC)


def start_of_day(day: date) -> datetime:
    return anchor(day, time.min)


def day_of_week(day: date) -> int:
    """Weekday number with 0 = Sunday ... 6 = Saturday"""
    return day.isoweekday() % 7


def date_range(start_date: date, end_date: date) -> Iterator[date]:
    """Every calendar date from start_date to end_date, inclusive. Empty if end < start."""
    current = start_date
    while current <= end_date:
        yield current
        current += timedelta(days=1)


def parse_date(value: Optional[str], field: str = "date") -> date:
    if not value:
        raise ValidationError(f"{field} is required (YYYY-MM-DD).")
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise ValidationError(f"{field} must be in YYYY-MM-DD format.")


def parse_instant(value: Optional[str], field: str = "start_time") -> datetime:
    if not value:
        raise ValidationError(f"{field} is required.")
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return ensure_utc(datetime.fromisoformat(text))
    except ValueError:
        raise ValidationError(f"Invalid {field} format. Use an ISO 8601 timestamp.")


def format_instant(value: datetime) -> str:
    """Unambiguous fixed-offset representation, e.g. 2024-01-01T09:00:00+00:00"""
    return ensure_utc(value).isoformat()
