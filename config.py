"""Centralized configuration for environment variables.

This module is the single source of truth for configuration used across the
application. Import constants from here rather than calling os.getenv directly
in multiple places.
"""

from __future__ import annotations

import os
from typing import Final

from dotenv import load_dotenv

# Load environment variables from .env if present
load_dotenv()


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# --- Fill API (fetch collaborator) ---
# Empty means no remote source: the store is fed only through the API.
FILLS_API_URL: Final[str] = os.getenv("FILLS_API_URL", "").rstrip("/")
FILLS_API_TOKEN: Final[str] = os.getenv("FILLS_API_TOKEN", "")
FILLS_REFRESH_INTERVAL_SECONDS: Final[float] = _env_float(
    "FILLS_REFRESH_INTERVAL_SECONDS", 60.0
)

# --- Server ---
LOG_LEVEL: Final[str] = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ALLOWED_ORIGINS: Final[list[str]] = [
    origin.strip()
    for origin in os.getenv("CORS_ALLOWED_ORIGINS", "").split(",")
    if origin.strip()
]


__all__ = [
    "CORS_ALLOWED_ORIGINS",
    "FILLS_API_TOKEN",
    "FILLS_API_URL",
    "FILLS_REFRESH_INTERVAL_SECONDS",
    "LOG_LEVEL",
]
