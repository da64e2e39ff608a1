"""
Shared JSON request helper for the fill API client.

Maps non-success responses to ``ExternalServiceError`` so callers handle a
single exception type regardless of the status code.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from core.exceptions import ExternalServiceException

logger = logging.getLogger(__name__)


async def request_json(
    method: str,
    url: str,
    *,
    session: Any,
    params: dict[str, Any] | None = None,
    json: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    expected_status: int | Iterable[int] = 200,
    service_name: str = "Service",
) -> Any:
    if isinstance(expected_status, int):
        expected = {expected_status}
    else:
        expected = set(expected_status)

    async with session.request(
        method.upper(), url, params=params, json=json, headers=headers
    ) as response:
        if response.status not in expected:
            body = await response.text()
            msg = f"{service_name} error: {response.status}"
            raise ExternalServiceException(
                msg,
                {
                    "status": response.status,
                    "body": body,
                    "url": str(getattr(response, "url", url)),
                },
            )
        logger.debug("%s %s -> %s", method.upper(), url, response.status)
        return await response.json()
