"""
Centralized date and time utilities for the application.

Fill records carry a calendar date (``YYYY-MM-DD``) rather than a
timestamp, so most helpers here work on ``datetime.date``. Timestamps
(``created_at`` and friends) are handled as timezone-aware datetimes,
defaulting to UTC.

Parsing goes through ``dateutil`` so that both plain dates and full ISO
8601 timestamps are accepted from API payloads.
"""

import logging
from datetime import UTC, date, datetime

from dateutil import parser

logger = logging.getLogger(__name__)


def get_current_utc_time() -> datetime:
    """Return the current time as a timezone-aware datetime object in UTC."""
    return datetime.now(UTC)


def parse_timestamp(ts: str | datetime) -> datetime | None:
    """
    Parse a timestamp string (or datetime object) and ensure it is
    timezone-aware, defaulting to UTC.

    Args:
        ts: The timestamp to parse, either as an ISO 8601 string or a
            datetime object.

    Returns:
        A timezone-aware datetime object, or None if parsing fails.
    """
    if not ts:
        logger.debug("Received empty timestamp; returning None.")
        return None

    if isinstance(ts, datetime):
        if ts.tzinfo is None:
            return ts.replace(tzinfo=UTC)
        return ts

    try:
        parsed_time = parser.isoparse(ts)
        if parsed_time.tzinfo is None:
            return parsed_time.replace(tzinfo=UTC)
        return parsed_time
    except (ValueError, TypeError) as e:
        logger.warning("Failed to parse timestamp '%s': %s", ts, e)
        return None


def parse_calendar_date(value: str | datetime | date | None) -> date | None:
    """Return the calendar date of a date-like value, or None if it is unusable.

    Timestamps keep the day they were written in; they are not shifted to
    UTC first, since a fill logged at 23:30 local time belongs to that day.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, date):
        return value

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return datetime.strptime(text, "%Y-%m-%d").date()
        except ValueError:
            pass
        try:
            return parser.isoparse(text).date()
        except (ValueError, TypeError, OverflowError):
            logger.debug("Unable to interpret '%s' as a calendar date", value)
            return None

    logger.warning("Unsupported date input type '%s'", type(value))
    return None


def normalize_calendar_date(value: str | datetime | date | None) -> str | None:
    """Normalize a date-like input to a YYYY-MM-DD string."""
    parsed = parse_calendar_date(value)
    return parsed.isoformat() if parsed else None


def month_key(value: str | datetime | date | None) -> str | None:
    """Return the ``YYYY-MM`` bucket key for a date-like value."""
    parsed = parse_calendar_date(value)
    if parsed is None:
        return None
    return f"{parsed.year:04d}-{parsed.month:02d}"


def days_between(start: date, end: date) -> int:
    """Whole days from start to end (negative when end is earlier)."""
    return (end - start).days
