"""Retry utilities for async HTTP operations.

Transient transport failures (connection resets, timeouts) are retried
with exponential backoff using tenacity. HTTP status errors are raised as
``ExternalServiceError`` by ``request_json`` and are not retried.
"""

from __future__ import annotations

import asyncio
import logging

from aiohttp import ClientConnectionError, ClientPayloadError
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)

TRANSIENT_ERRORS: tuple[type[BaseException], ...] = (
    ClientConnectionError,
    ClientPayloadError,
    asyncio.TimeoutError,
)


def retry_async(
    max_retries: int = 3,
    retry_delay: float = 1.0,
    backoff_factor: float = 2.0,
    retry_exceptions: tuple[type[BaseException], ...] = TRANSIENT_ERRORS,
):
    """Build a tenacity retry decorator for a coroutine.

    Args:
        max_retries: Retries after the first attempt.
        retry_delay: Initial delay in seconds (backoff multiplier).
        backoff_factor: Exponential backoff base.
        retry_exceptions: Exception types that trigger a retry.

    Example:
        @retry_async(max_retries=5, retry_delay=2.0)
        async def fetch_fills():
            ...
    """
    return retry(
        stop=stop_after_attempt(max_retries + 1),
        wait=wait_exponential(multiplier=retry_delay, exp_base=backoff_factor),
        retry=retry_if_exception_type(retry_exceptions),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
