"""Global constants for the core package.

This module contains shared constants used across the application core.
"""

from typing import Final

# HTTP Client Constants
HTTP_CONNECTION_LIMIT: Final[int] = 10
HTTP_TIMEOUT_CONNECT: Final[float] = 10.0
HTTP_TIMEOUT_SOCK_READ: Final[float] = 30.0
HTTP_TIMEOUT_TOTAL: Final[float] = 60.0

# Consumption estimation (L/100km)
ASSUMED_DAILY_DISTANCE_KM: Final[float] = 35.0
MAX_FILL_INTERVAL_DAYS: Final[int] = 90
PLAUSIBLE_CONSUMPTION_MIN: Final[float] = 3.0
PLAUSIBLE_CONSUMPTION_MAX: Final[float] = 15.0
CRUDE_LITERS_MULTIPLIER: Final[float] = 2.0
CRUDE_CONSUMPTION_MIN: Final[float] = 6.0
CRUDE_CONSUMPTION_MAX: Final[float] = 8.0

# Charting
MONTHLY_CHART_LIMIT: Final[int] = 12
CHART_COLOR_PALETTE: Final[tuple[str, ...]] = (
    "#7C3AED",
    "#4F46E5",
    "#60A5FA",
    "#8B5CF6",
    "#C084FC",
    "#1E293B",
)
