"""Sorting and filtering helpers for fill history lists."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from typing import Literal

from date_utils import parse_calendar_date
from fills.models import FuelFillRecord

SortDirection = Literal["asc", "desc"]


def _by_date(fill: FuelFillRecord) -> date:
    return parse_calendar_date(fill.date) or date.min


_SORT_KEYS = {
    "date": _by_date,
    "amount": lambda fill: fill.amount or 0.0,
    "price_per_liter": lambda fill: fill.price_per_liter or 0.0,
}


@dataclass(frozen=True)
class FillQuery:
    vehicle_id: int | None = None
    year: int | None = None
    month: int | None = None  # 1-12
    sort_by: str = "date"
    sort_direction: SortDirection = "desc"


def sort_fills(
    fills: Sequence[FuelFillRecord],
    sort_by: str = "date",
    sort_direction: SortDirection = "desc",
) -> list[FuelFillRecord]:
    """Sort fills by date, amount or price per liter.

    Absent amounts and prices sort as 0. Unknown keys fall back to date.
    ``desc`` puts the newest or highest first.
    """
    key = _SORT_KEYS.get(sort_by, _by_date)
    return sorted(fills, key=key, reverse=sort_direction == "desc")


def filter_fills(
    fills: Sequence[FuelFillRecord],
    vehicle_id: int | None = None,
    year: int | None = None,
    month: int | None = None,
) -> list[FuelFillRecord]:
    """Keep fills matching every given criterion; None means any."""
    result = []
    for fill in fills:
        if vehicle_id is not None and fill.vehicle_id != vehicle_id:
            continue
        if year is not None or month is not None:
            fill_date = parse_calendar_date(fill.date)
            if fill_date is None:
                continue
            if year is not None and fill_date.year != year:
                continue
            if month is not None and fill_date.month != month:
                continue
        result.append(fill)
    return result


def process_fills(
    fills: Sequence[FuelFillRecord], query: FillQuery
) -> list[FuelFillRecord]:
    filtered = filter_fills(fills, query.vehicle_id, query.year, query.month)
    return sort_fills(filtered, query.sort_by, query.sort_direction)
