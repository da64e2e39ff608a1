"""API routes for the fill collection and its optimistic mutations."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query

from date_utils import get_current_utc_time
from fills.models import (
    FuelFillCreate,
    FuelFillRecord,
    FuelFillUpdate,
    placeholder_fill_id,
)
from fills.routes.dependencies import get_fill_session
from fills.services import FillSession
from fills.services.query_service import FillQuery, process_fills

logger = logging.getLogger(__name__)
router = APIRouter()


def _dump(record: FuelFillRecord) -> dict[str, Any]:
    return record.model_dump(mode="json")


@router.get("/api/fills")
async def get_fills(
    vehicle_id: int | None = Query(None, description="Filter by vehicle"),
    year: int | None = Query(None, description="Filter by year"),
    month: int | None = Query(None, ge=1, le=12, description="Filter by month"),
    sort_by: str = Query("date", description="date, amount or price_per_liter"),
    sort_direction: str = Query("desc", pattern="^(asc|desc)$"),
    session: FillSession = Depends(get_fill_session),
) -> dict[str, Any]:
    """List loaded fills with optional filters."""
    query = FillQuery(
        vehicle_id=vehicle_id,
        year=year,
        month=month,
        sort_by=sort_by,
        sort_direction=sort_direction,
    )
    fills = process_fills(session.store.records, query)
    return {
        "fills": [_dump(f) for f in fills],
        "count": len(fills),
        "loading": session.loading,
        "error": session.error,
    }


@router.put("/api/fills")
async def replace_fills(
    fills: list[FuelFillRecord],
    session: FillSession = Depends(get_fill_session),
) -> dict[str, Any]:
    """Replace the whole collection, as a refresh would."""
    try:
        session.store.replace_all(fills)
        return {
            "status": "success",
            "count": len(fills),
            "statistics": session.store.statistics.model_dump(mode="json"),
        }
    except Exception as e:
        logger.error("Error replacing fills: %s", e)
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/api/fills")
async def add_fill(
    payload: FuelFillCreate,
    session: FillSession = Depends(get_fill_session),
) -> dict[str, Any]:
    """Add a fill before the persistence write is acknowledged."""
    try:
        data = payload.model_dump()
        if data["id"] is None:
            data["id"] = placeholder_fill_id()
        if data["created_at"] is None:
            data["created_at"] = get_current_utc_time().isoformat()
        fill = FuelFillRecord.model_validate(data)

        session.store.add_optimistic(fill)
        return {
            "fill": _dump(fill),
            "statistics": session.store.statistics.model_dump(mode="json"),
        }
    except Exception as e:
        logger.error("Error adding fill: %s", e)
        raise HTTPException(status_code=500, detail=str(e))


@router.patch("/api/fills/{fill_id}")
async def update_fill(
    fill_id: int,
    changes: FuelFillUpdate,
    session: FillSession = Depends(get_fill_session),
) -> dict[str, Any]:
    """Merge the sent fields into a fill. Unknown ids are a no-op."""
    try:
        matched = session.store.update_optimistic(fill_id, changes)
        fill = session.store.get(changes.id or fill_id) if matched else None
        return {
            "matched": matched,
            "fill": _dump(fill) if fill else None,
            "statistics": session.store.statistics.model_dump(mode="json"),
        }
    except Exception as e:
        logger.error("Error updating fill %s: %s", fill_id, e)
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/api/fills/{fill_id}")
async def delete_fill(
    fill_id: int,
    session: FillSession = Depends(get_fill_session),
) -> dict[str, Any]:
    """Remove a fill. Unknown ids are a no-op."""
    matched = session.store.delete_optimistic(fill_id)
    return {
        "matched": matched,
        "statistics": session.store.statistics.model_dump(mode="json"),
    }


@router.post("/api/fills/refresh")
async def refresh_fills(
    session: FillSession = Depends(get_fill_session),
) -> dict[str, Any]:
    """Reload fills from the fill API now."""
    refreshed = await session.refresh()
    return {
        "refreshed": refreshed,
        "count": len(session.store),
        "error": session.error,
    }
