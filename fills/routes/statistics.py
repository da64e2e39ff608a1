"""API routes for fill statistics and chart data."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query

from fills.routes.dependencies import get_fill_session
from fills.serializers import format_consumption, format_currency
from fills.services import FillSession

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/api/fill-statistics")
async def get_fill_statistics(
    vehicle_id: int | None = Query(None, description="Limit to one vehicle"),
    selected: bool = Query(False, description="Use the selected vehicles"),
    session: FillSession = Depends(get_fill_session),
) -> dict[str, Any]:
    """Statistics for all fills, one vehicle, or the current selection."""
    if selected:
        stats = session.selected_statistics()
    else:
        stats = session.store.statistics_for(vehicle_id)

    payload = stats.model_dump(mode="json")
    payload["display"] = {
        "avg_consumption": format_consumption(stats.avg_consumption),
        "total_cost": format_currency(stats.total_cost),
        "avg_price_per_liter": format_currency(stats.avg_price_per_liter),
    }
    return payload


@router.get("/api/fill-charts/odometer")
async def get_odometer_chart(
    session: FillSession = Depends(get_fill_session),
) -> dict[str, Any]:
    """Odometer series for each selected vehicle."""
    series = session.odometer_series()
    return {"series": series, "has_data": bool(series)}
