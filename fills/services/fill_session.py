"""Per-consumer fill state: store, vehicle selection and refresh lifecycle.

A FillSession is created and disposed by whoever owns it (the FastAPI app
on startup/shutdown, or a test). Once disposed, results of in-flight
refreshes are dropped instead of being written into the store.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from fills.models import StatisticsSnapshot, VehicleSummary
from fills.services.chart_service import build_odometer_series
from fills.services.fetcher import FillFetcher
from fills.services.fill_store import FillStore
from fills.services.refresh import RefreshPoller

logger = logging.getLogger(__name__)


class FillSession:
    """Owns a FillStore and keeps it in sync with the fill API."""

    def __init__(
        self,
        fetcher: FillFetcher | None = None,
        *,
        vehicles: Sequence[VehicleSummary] | None = None,
        refresh_interval: float = 60.0,
        store: FillStore | None = None,
    ) -> None:
        self.fetcher = fetcher
        self.store = store if store is not None else FillStore()
        self.vehicles: list[VehicleSummary] = []
        self.selected_vehicle_ids: list[int] = []
        self.loading = False
        self.error: str | None = None
        self._active = True
        self._poller = RefreshPoller(self.refresh, refresh_interval)

        if vehicles:
            self.set_vehicles(vehicles)

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def is_ready(self) -> bool:
        """True once at least one vehicle is selected."""
        return bool(self.selected_vehicle_ids)

    @property
    def polling(self) -> bool:
        return self._poller.running

    def start(self) -> None:
        """Begin periodic refreshes. Does nothing without a fetcher."""
        if not self._active:
            logger.warning("Ignoring start() on a disposed fill session")
            return
        if self.fetcher is None:
            logger.info("No fill API configured; periodic refresh disabled")
            return
        self._poller.start()

    async def dispose(self) -> None:
        """Stop refreshing. Later refresh results are discarded."""
        self._active = False
        await self._poller.stop()

    def set_vehicles(self, vehicles: Iterable[VehicleSummary]) -> None:
        """Replace the known vehicles and select all of them."""
        self.vehicles = list(vehicles)
        self.set_selected_vehicle_ids(v.id for v in self.vehicles)

    def set_selected_vehicle_ids(self, vehicle_ids: Iterable[Any]) -> None:
        selected = set()
        for value in vehicle_ids:
            try:
                vehicle_id = int(value)
            except (TypeError, ValueError):
                continue
            if vehicle_id > 0:
                selected.add(vehicle_id)
        self.selected_vehicle_ids = sorted(selected)

    def vehicle_name(self, vehicle_id: int) -> str:
        for vehicle in self.vehicles:
            if vehicle.id != vehicle_id:
                continue
            if vehicle.name:
                return vehicle.name
            label = f"{vehicle.make or ''} {vehicle.model or ''}".strip()
            if label:
                return label
            break
        return f"Vehicle #{vehicle_id}"

    async def refresh(self) -> bool:
        """Reload every fill for the selected vehicles.

        On failure the error is recorded and the store keeps its current
        records.

        Returns:
            True if the store was replaced
        """
        if not self.is_ready or self.fetcher is None:
            return False

        self.loading = True
        self.error = None
        try:
            fills = await self.fetcher.fetch_all_fills(self.selected_vehicle_ids)
        except Exception as e:
            self.error = str(e) or type(e).__name__
            logger.error("Error refreshing fills: %s", e)
            return False
        finally:
            self.loading = False

        if not self._active:
            logger.debug("Fill session disposed during refresh; dropping result")
            return False

        self.store.replace_all(fills)
        return True

    def selected_statistics(self) -> StatisticsSnapshot:
        return self.store.statistics_for_vehicles(self.selected_vehicle_ids)

    def odometer_series(self) -> list[dict[str, Any]]:
        return build_odometer_series(
            self.store.records,
            self.vehicles,
            self.selected_vehicle_ids,
            self.vehicle_name,
        )
