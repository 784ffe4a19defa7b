"""
Datetime formatting utilities
"""
from datetime import date, datetime
from typing import Optional, Union
import math


def format_datetime_to_iso(dt: Optional[datetime]) -> Optional[str]:
    """
    Convert datetime to ISO format with UTC timezone indicator

    Args:
        dt: datetime object or None

    Returns:
        ISO string with 'Z' suffix (e.g., "2025-01-09T10:30:00Z") or None
    """
    if dt is None:
        return None

    return dt.strftime('%Y-%m-%dT%H:%M:%SZ')


def parse_date(value: Union[str, date, datetime, None]) -> Optional[date]:
    """Accept a date, datetime or ISO string ("2023-09-01" or full timestamp)"""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if "T" in text:
        return parse_datetime(text).date()
    return date.fromisoformat(text)


def parse_datetime(value: Union[str, datetime, None]) -> Optional[datetime]:
    """Parse an ISO timestamp into a naive UTC datetime"""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    text = str(value).strip().replace("Z", "+00:00")
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is not None:
        parsed = parsed.replace(tzinfo=None) - parsed.utcoffset()
    return parsed


def days_until(end: date, now: Optional[datetime] = None) -> int:
    """
    Whole days from now until the end date, rounded up.

    Measured to 00:00 of the end date, so any time during the day before
    counts as 1 day remaining and the end date itself gives zero or less.
    """
    now = now or datetime.utcnow()
    end_of_term = datetime(end.year, end.month, end.day)
    return math.ceil((end_of_term - now).total_seconds() / 86400)
