"""Serialization utilities for fill data."""

from datetime import date, datetime

from date_utils import normalize_calendar_date


def parse_fill_date(value: str | datetime | date) -> str:
    """Normalize a fill date to ``YYYY-MM-DD``.

    Raises:
        ValueError: If the value cannot be read as a calendar date
    """
    parsed = normalize_calendar_date(value)
    if not parsed:
        raise ValueError(f"Invalid fill date: {value!r}")
    return parsed


def format_currency(value: float | None) -> str:
    """Format an amount in euros, or ``N/A`` when absent."""
    if value is None:
        return "N/A"
    return f"{value:.2f} €"


def format_consumption(value: float | None) -> str:
    if not value:
        return "N/A"
    return f"{value:.1f} L/100km"
