"""Pydantic models for fill records, vehicles and derived statistics.

Optional numeric fields go through ``optional_float``/``optional_int`` so
that malformed values (``"abc"``, ``NaN``, negatives) arrive as ``None``.
Every consumer then deals with an explicit absent value instead of a
falsy zero.
"""

from __future__ import annotations

import time
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator

from core.casting import optional_float, optional_int
from fills.serializers import parse_fill_date

FillDate = Annotated[str, BeforeValidator(parse_fill_date)]
OptionalNumber = Annotated[float | None, BeforeValidator(optional_float)]
OptionalOdometer = Annotated[int | None, BeforeValidator(optional_int)]

_LENIENT_NUMBER_FIELDS = {
    "odometer": optional_int,
    "liters": optional_float,
    "amount": optional_float,
    "price_per_liter": optional_float,
}


def placeholder_fill_id() -> int:
    """Temporary id for a fill that has not been confirmed by the server yet."""
    return time.time_ns() // 1_000_000


class FuelFillCreate(BaseModel):
    """A new fill as submitted, before it has an id."""

    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    vehicle_id: int
    date: FillDate
    odometer: OptionalOdometer = None  # km
    liters: OptionalNumber = None
    amount: OptionalNumber = None  # currency
    price_per_liter: OptionalNumber = None
    is_full: bool | None = None
    notes: str | None = None
    created_at: str | None = None

    # Display only, joined in by the fill API
    vehicle_name: str | None = None


class FuelFillRecord(FuelFillCreate):
    """One fuel purchase event. Every stored fill has an id."""

    id: int


class FuelFillUpdate(BaseModel):
    """Partial fields merged into an existing fill.

    Use ``model_dump(exclude_unset=True)`` to get only what the caller sent.
    Setting ``id`` re-keys a placeholder record with its server id.
    """

    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    vehicle_id: int | None = None
    date: FillDate | None = None
    odometer: OptionalOdometer = None
    liters: OptionalNumber = None
    amount: OptionalNumber = None
    price_per_liter: OptionalNumber = None
    is_full: bool | None = None
    notes: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _drop_malformed_numbers(cls, data: Any) -> Any:
        # A malformed number was not really sent; only an explicit None clears
        if not isinstance(data, dict):
            return data
        return {
            key: value
            for key, value in data.items()
            if not (
                key in _LENIENT_NUMBER_FIELDS
                and value is not None
                and _LENIENT_NUMBER_FIELDS[key](value) is None
            )
        }


class MonthlyBucket(BaseModel):
    month: str  # YYYY-MM
    amount: float = 0.0
    count: int = 0
    odometer: int | None = None


class StatisticsSnapshot(BaseModel):
    """Derived statistics for a collection of fills. Never persisted."""

    total_fills: int = 0
    total_liters: float = 0.0
    total_cost: float = 0.0
    avg_price_per_liter: float = 0.0
    avg_consumption: float = 0.0  # L/100km
    last_fill_date: str | None = None
    last_odometer: int | None = None
    monthly_chart: list[MonthlyBucket] = Field(default_factory=list)

    @classmethod
    def empty(cls) -> StatisticsSnapshot:
        return cls()


class VehicleSummary(BaseModel):
    """Vehicle metadata needed for labels and chart colours."""

    model_config = ConfigDict(extra="ignore")

    id: int
    name: str | None = None
    make: str | None = None
    model: str | None = None
    color: str | None = None
    fuel_type: str | None = None
