"""Presentation math shared by the page services: day differences, urgency, progress bars, sizes."""

from datetime import date, datetime
from typing import Optional, Union

from pydantic import TypeAdapter

DASHBOARD_URGENT_DAYS = 7
VISA_DEADLINE_URGENT_DAYS = 14
VISA_RENEWAL_WARNING_DAYS = 90
RESIDENCY_WARNING_DAYS = 30

VISA_PROGRESS_FLOOR = 5.0
DAYS_PER_YEAR = 365

_KB = 1024
_MB = 1024 * 1024

# PostgREST trims trailing zeros from fractional seconds
_TIMESTAMP = TypeAdapter(datetime)


def to_date(value: Union[str, date, datetime, None]) -> Optional[date]:
    """Parse an ISO date/timestamp coming back from the backend; None stays None."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value)
    if len(text) > 10:
        return _TIMESTAMP.validate_python(text).date()
    return date.fromisoformat(text)


def days_until(due: Union[str, date, datetime, None], today: Optional[date] = None) -> Optional[int]:
    """Calendar-day difference between a due date and today. Negative once the date has passed."""
    due_date = to_date(due)
    if due_date is None:
        return None
    return (due_date - (today or date.today())).days


def is_urgent(days_remaining: Optional[int], threshold: int) -> bool:
    # no clamping: overdue deadlines (negative days) are urgent too
    if days_remaining is None:
        return False
    return days_remaining <= threshold


def visa_progress_width(days_until_expiration: Optional[int]) -> float:
    """
    Width (percent) of the visa validity bar: max(5, 100 - days/365 * 100).
    A visa at or past its expiration date, or with no expiration date, shows the floor.
    """
    if days_until_expiration is None or days_until_expiration <= 0:
        return VISA_PROGRESS_FLOOR
    return max(VISA_PROGRESS_FLOOR, 100 - (days_until_expiration / DAYS_PER_YEAR) * 100)


def completion_percentage(paid: float, total: float) -> float:
    if not total:
        return 0.0
    return paid / total * 100


def occupancy_percentage(current: Optional[int], capacity: Optional[int]) -> float:
    return completion_percentage(float(current or 0), float(capacity or 0))


def human_readable_size(size_bytes: Optional[int]) -> str:
    size = int(size_bytes or 0)
    if size < _MB:
        return f"{size / _KB:.1f} KB"
    return f"{size / _MB:.1f} MB"
