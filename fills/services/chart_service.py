"""Chart series built from fills."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from core.constants import CHART_COLOR_PALETTE
from fills.models import FuelFillRecord, VehicleSummary
from fills.services.statistics_service import sort_by_date


def build_odometer_series(
    fills: Sequence[FuelFillRecord],
    vehicles: Sequence[VehicleSummary],
    selected_vehicle_ids: Sequence[int],
    vehicle_name: Callable[[int], str],
) -> list[dict[str, Any]]:
    """Odometer-over-time points for each selected vehicle.

    Args:
        fills: All loaded fills
        vehicles: Known vehicles, in display order
        selected_vehicle_ids: Vehicles to include
        vehicle_name: Label lookup for a vehicle id

    Returns:
        One series per selected vehicle that has at least one reading
    """
    selected = set(selected_vehicle_ids)
    series = []

    for index, vehicle in enumerate(v for v in vehicles if v.id in selected):
        readings = sort_by_date(
            f for f in fills if f.vehicle_id == vehicle.id and f.odometer is not None
        )
        if not readings:
            continue
        series.append(
            {
                "vehicle_id": vehicle.id,
                "vehicle_name": vehicle_name(vehicle.id),
                "color": vehicle.color
                or CHART_COLOR_PALETTE[index % len(CHART_COLOR_PALETTE)],
                "points": [
                    {"date": f.date, "odometer": f.odometer, "amount": f.amount}
                    for f in readings
                ],
            }
        )

    return series
