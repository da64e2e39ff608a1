from __future__ import annotations

import math
from typing import Any


def optional_float(value: Any) -> float | None:
    """Coerce value to a non-negative finite float, or None when absent/malformed."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", ".")
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number < 0:
        return None
    return number


def optional_int(value: Any) -> int | None:
    """Like optional_float, rounded to the nearest integer."""
    number = optional_float(value)
    if number is None:
        return None
    return round(number)
