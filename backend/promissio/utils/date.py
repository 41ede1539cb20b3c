"""Date and time helpers.

All instants are handled as timezone-aware UTC datetimes. Naive datetimes
coming from the database or from callers are interpreted as UTC.
"""

from collections.abc import Callable
from datetime import UTC, date, datetime, time

from dateutil import parser

from promissio.core.errors import ValidationError

Clock = Callable[[], datetime]

DISPLAY_MINUTE_FORMAT = "%b %d, %Y %H:%M"
DISPLAY_SECOND_FORMAT = "%b %d, %Y %H:%M:%S"


def utc_now() -> datetime:
    """Current wall-clock time in UTC."""
    return datetime.now(UTC)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def start_of_day(value: date) -> datetime:
    """Midnight UTC at the start of a calendar date."""
    return datetime.combine(value, time.min, tzinfo=UTC)


def calendar_days_between(start: date, end: date) -> int:
    """Number of calendar days from ``start`` to ``end`` (negative if end is earlier)."""
    return (end - start).days


def parse_datetime(value: str | datetime, field_name: str = "datetime") -> datetime:
    """
    Parse a timestamp string as ``dateutil`` reads it.

    ISO 8601 (including a trailing ``Z``) and common forms such as
    ``2025/03/05`` are accepted; values without an offset are taken as UTC.
    """
    if isinstance(value, datetime):
        return ensure_utc(value)
    try:
        return ensure_utc(parser.parse(value))
    except (TypeError, OverflowError, ValueError, parser.ParserError) as e:
        raise ValidationError(
            f"{field_name} must be a date or timestamp", field=field_name
        ) from e


def parse_date(value: str | date, field_name: str = "date") -> date:
    """Parse a calendar date; full timestamps are reduced to their UTC date."""
    if isinstance(value, datetime):
        return ensure_utc(value).date()
    if isinstance(value, date):
        return value
    return parse_datetime(value, field_name).date()


def format_display(value: datetime, with_seconds: bool = False) -> str:
    """Human-readable timestamp, e.g. ``Mar 05, 2025 14:30``."""
    pattern = DISPLAY_SECOND_FORMAT if with_seconds else DISPLAY_MINUTE_FORMAT
    return value.strftime(pattern)


__all__ = [
    "Clock",
    "calendar_days_between",
    "ensure_utc",
    "format_display",
    "parse_date",
    "parse_datetime",
    "start_of_day",
    "utc_now",
]
