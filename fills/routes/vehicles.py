"""API routes for the vehicles known to the fill session."""

import logging
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from fills.models import VehicleSummary
from fills.routes.dependencies import get_fill_session
from fills.services import FillSession

logger = logging.getLogger(__name__)
router = APIRouter()


class VehicleSelectionModel(BaseModel):
    vehicle_ids: list[int]


def _vehicle_payload(session: FillSession) -> dict[str, Any]:
    return {
        "vehicles": [
            {**v.model_dump(), "display_name": session.vehicle_name(v.id)}
            for v in session.vehicles
        ],
        "selected_vehicle_ids": session.selected_vehicle_ids,
    }


@router.get("/api/vehicles")
async def get_vehicles(
    session: FillSession = Depends(get_fill_session),
) -> dict[str, Any]:
    return _vehicle_payload(session)


@router.put("/api/vehicles")
async def set_vehicles(
    vehicles: list[VehicleSummary],
    session: FillSession = Depends(get_fill_session),
) -> dict[str, Any]:
    """Replace the vehicle list; every vehicle becomes selected."""
    session.set_vehicles(vehicles)
    logger.info("Vehicle list updated (%d vehicles)", len(vehicles))
    return _vehicle_payload(session)


@router.put("/api/vehicles/selection")
async def set_vehicle_selection(
    selection: VehicleSelectionModel,
    session: FillSession = Depends(get_fill_session),
) -> dict[str, Any]:
    session.set_selected_vehicle_ids(selection.vehicle_ids)
    return _vehicle_payload(session)
