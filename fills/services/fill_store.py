"""In-memory fill collection with optimistic mutations.

The cached ``statistics`` always equal ``compute_statistics(records)``
once a mutation returns. Snapshots are regenerated, never patched.

``replace_all`` swaps the whole collection. A refresh that lands between
an optimistic change and its server acknowledgement therefore drops that
change; the next refresh brings it back once the write is stored.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from fills.models import FuelFillRecord, FuelFillUpdate, StatisticsSnapshot
from fills.services.statistics_service import compute_statistics

logger = logging.getLogger(__name__)

# Merged updates may not clear these
_REQUIRED_FIELDS = frozenset({"id", "vehicle_id", "date"})


class FillStore:
    """Holds the current fills and a statistics snapshot consistent with them."""

    def __init__(self, records: Iterable[FuelFillRecord] | None = None) -> None:
        self._records: list[FuelFillRecord] = list(records or [])
        self._statistics = compute_statistics(self._records)

    @property
    def records(self) -> list[FuelFillRecord]:
        return list(self._records)

    @property
    def statistics(self) -> StatisticsSnapshot:
        """A copy of the cached snapshot; edits to it never reach the store."""
        return self._statistics.model_copy(deep=True)

    def __len__(self) -> int:
        return len(self._records)

    def _commit(self, records: list[FuelFillRecord]) -> None:
        self._records = records
        self._statistics = compute_statistics(records)

    def get(self, fill_id: int) -> FuelFillRecord | None:
        for record in self._records:
            if record.id == fill_id:
                return record
        return None

    def replace_all(self, records: Iterable[FuelFillRecord]) -> None:
        """Swap in a freshly fetched collection."""
        self._commit(list(records))
        logger.debug("Replaced fill collection (%d records)", len(self._records))

    def add_optimistic(self, record: FuelFillRecord) -> None:
        """Prepend a fill. Duplicate ids are not checked."""
        self._commit([record, *self._records])

    def update_optimistic(
        self,
        fill_id: int,
        changes: FuelFillUpdate | Mapping[str, Any],
    ) -> int:
        """Merge partial fields into every fill with this id.

        Args:
            fill_id: Id of the fill to update
            changes: Fields to merge; for a FuelFillUpdate only the fields
                explicitly set are applied

        Returns:
            Number of fills updated (0 when the id is unknown)
        """
        if self.get(fill_id) is None:
            logger.debug("update_optimistic: no fill with id %s", fill_id)
            return 0

        if not isinstance(changes, FuelFillUpdate):
            changes = FuelFillUpdate.model_validate(changes)
        patch = {
            key: value
            for key, value in changes.model_dump(exclude_unset=True).items()
            if value is not None or key not in _REQUIRED_FIELDS
        }

        matched = 0
        updated: list[FuelFillRecord] = []
        for record in self._records:
            if record.id == fill_id:
                record = FuelFillRecord.model_validate({**record.model_dump(), **patch})
                matched += 1
            updated.append(record)

        self._commit(updated)
        return matched

    def delete_optimistic(self, fill_id: int) -> int:
        """Remove every fill with this id.

        Returns:
            Number of fills removed (0 when the id is unknown)
        """
        remaining = [r for r in self._records if r.id != fill_id]
        removed = len(self._records) - len(remaining)
        if not removed:
            logger.debug("delete_optimistic: no fill with id %s", fill_id)
            return 0
        self._commit(remaining)
        return removed

    def filter_by_vehicle(self, vehicle_id: int | None) -> list[FuelFillRecord]:
        """Fills for one vehicle, or all of them when vehicle_id is None."""
        if vehicle_id is None:
            return self.records
        return [r for r in self._records if r.vehicle_id == vehicle_id]

    def statistics_for(self, vehicle_id: int | None) -> StatisticsSnapshot:
        if vehicle_id is None:
            return self.statistics
        return compute_statistics(self.filter_by_vehicle(vehicle_id))

    def filter_by_vehicles(
        self, vehicle_ids: Iterable[int] | None
    ) -> list[FuelFillRecord]:
        """Fills for a set of vehicles; an empty or missing selection means all."""
        selected = set(vehicle_ids or ())
        if not selected:
            return self.records
        return [r for r in self._records if r.vehicle_id in selected]

    def statistics_for_vehicles(
        self, vehicle_ids: Iterable[int] | None
    ) -> StatisticsSnapshot:
        return compute_statistics(self.filter_by_vehicles(vehicle_ids))
