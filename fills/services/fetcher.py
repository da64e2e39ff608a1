"""Client for the fill API that provides the full fill collection."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import Any, Protocol

from pydantic import ValidationError

from core.exceptions import ExternalServiceException
from core.http import get_session, request_json, retry_async
from fills.models import FuelFillRecord

logger = logging.getLogger(__name__)


class FillFetcher(Protocol):
    async def fetch_all_fills(
        self, vehicle_ids: Iterable[int]
    ) -> list[FuelFillRecord]: ...


class HttpFillFetcher:
    """Loads fills for a set of vehicles from ``GET /api/fills/get``."""

    def __init__(
        self,
        base_url: str,
        *,
        token: str | None = None,
        session_factory: Callable[[], Awaitable[Any]] = get_session,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self._session_factory = session_factory

    @retry_async(max_retries=2, retry_delay=0.5)
    async def _get(self, vehicle_ids: str) -> Any:
        session = await self._session_factory()
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else None
        return await request_json(
            "GET",
            f"{self.base_url}/api/fills/get",
            session=session,
            params={"vehicleIds": vehicle_ids},
            headers=headers,
            service_name="Fill API",
        )

    async def fetch_all_fills(self, vehicle_ids: Iterable[int]) -> list[FuelFillRecord]:
        """Fetch every fill for the given vehicles.

        Rows that do not validate are skipped and logged.

        Raises:
            ExternalServiceException: On a non-200 response or a body
                without a ``fills`` list
        """
        key = ",".join(str(v) for v in sorted(set(vehicle_ids)))
        body = await self._get(key)

        rows = body.get("fills") if isinstance(body, dict) else None
        if not isinstance(rows, list):
            msg = "Fill API returned an unexpected payload"
            raise ExternalServiceException(msg, {"body": body})

        fills: list[FuelFillRecord] = []
        for row in rows:
            try:
                fills.append(FuelFillRecord.model_validate(row))
            except ValidationError as e:
                logger.warning("Skipping invalid fill %s: %s", row, e)

        logger.info("Fetched %d fills for vehicles %s", len(fills), key)
        return fills
