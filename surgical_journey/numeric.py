from __future__ import annotations

import math
from typing import Iterable, List, Optional


def safe_float(value: object, default: Optional[float] = None) -> Optional[float]:
    if isinstance(value, bool):
        return float(value)
    try:
        val = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(val) or math.isinf(val):
        return default
    return val


def valid_positive(value: object) -> bool:
    """True for a finite number strictly greater than zero."""
    val = safe_float(value)
    return val is not None and val > 0


def finite_values(values: Iterable[object]) -> List[float]:
    out: List[float] = []
    for value in values:
        val = safe_float(value)
        if val is not None:
            out.append(val)
    return out


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round with .5 going up, as display code expects (10.5 -> 11)."""
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def round_int(value: float) -> int:
    # tolerate products like 5 * 0.7 landing a hair under .5
    return int(math.floor(value + 0.5 + 1e-9))


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
