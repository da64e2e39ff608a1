"""Fill tracking services."""

from fills.services.fetcher import HttpFillFetcher
from fills.services.fill_session import FillSession
from fills.services.fill_store import FillStore
from fills.services.refresh import RefreshPoller
from fills.services.statistics_service import StatisticsCalculator, compute_statistics

__all__ = [
    "FillSession",
    "FillStore",
    "HttpFillFetcher",
    "RefreshPoller",
    "StatisticsCalculator",
    "compute_statistics",
]
