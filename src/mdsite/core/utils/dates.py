"""Date parsing and normalization for resource front matter"""

from datetime import date, datetime, timezone

from dateutil import parser as date_parser

from mdsite.errors import InvalidDateError


def parse_date(value: str, message: str) -> datetime:
    """Parse a date/time string, raising InvalidDateError with message on failure."""
    try:
        return date_parser.parse(value)
    except (ValueError, OverflowError) as e:
        raise InvalidDateError(f"Invalid date '{value}': {message}") from e


def to_datetime(value) -> datetime | None:
    """Return value as a naive UTC datetime, or None if it is not a date/time.

    Aware datetimes are converted to UTC first so naive and aware values compare.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    return None
