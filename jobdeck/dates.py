"""
JobDeck - Date utilities.

Normalize the date and time values found on applications, interviews and
reminders into naive local datetimes so they can be compared and sorted.

Accepted inputs:
    - datetime objects (aware values are converted to local time)
    - date objects (midnight)
    - ISO strings: "2026-10-16", "2026-10-16T14:30", "2026-10-16T14:30:00Z"
"""
from datetime import date, datetime, time
from typing import Optional, Union
import re

DateInput = Union[datetime, date, str]

_TIME_PATTERN = re.compile(r"^\s*(\d{1,2}):(\d{2})(?::(\d{2}))?\s*$")


def _to_local_naive(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def parse_date(value: DateInput) -> datetime:
    """
    Parse a date-like value into a naive local datetime.

    Plain dates (and date-only strings) resolve to local midnight rather than
    UTC midnight so that "2026-10-16" is always the 16th on the user's calendar.

    Raises:
        ValueError: If the value cannot be interpreted as a date
    """
    if isinstance(value, datetime):
        return _to_local_naive(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Invalid date: {value!r}")

    text = value.strip()
    if len(text) == 10:
        return datetime.combine(date.fromisoformat(text), time.min)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return _to_local_naive(datetime.fromisoformat(text))


def parse_time(value: str) -> time:
    """Parse a 24-hour "HH:MM" or "HH:MM:SS" string."""
    match = _TIME_PATTERN.match(value or "")
    if not match:
        raise ValueError(f"Invalid time: {value!r}")
    hour, minute, second = match.groups()
    return time(int(hour), int(minute), int(second or 0))


def parse_datetime(day: DateInput, at: Optional[str] = None) -> datetime:
    """Combine a date-like value with an optional "HH:MM" time of day."""
    base = parse_date(day)
    if not at:
        return base
    return datetime.combine(base.date(), parse_time(at))


def is_today(value: DateInput, now: Optional[datetime] = None) -> bool:
    now = now or datetime.now()
    return parse_date(value).date() == now.date()


def is_past(value: DateInput, now: Optional[datetime] = None) -> bool:
    now = now or datetime.now()
    return parse_date(value) < now


def is_future(value: DateInput, now: Optional[datetime] = None) -> bool:
    now = now or datetime.now()
    return parse_date(value) > now


def format_month_day(value: DateInput) -> str:
    """Format as abbreviated month and day without padding, e.g. "Oct 3"."""
    moment = parse_date(value)
    return f"{moment:%b} {moment.day}"
