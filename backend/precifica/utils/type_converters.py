"""
Type converters — lenient value coercion for grid cells and stored JSON.

Anything that is not a finite number reads as zero so the grid never
shows NaN.
"""
import math
from typing import Any


def to_float(value: Any, default: float = 0.0) -> float:
    """Convert value to float, returning default if missing, invalid or not finite."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, str):
        value = value.strip()
        # pt-BR decimal comma ("12,50")
        if "," in value and "." not in value:
            value = value.replace(",", ".")
        if not value:
            return default
    try:
        val = float(value)
    except (ValueError, TypeError):
        return default
    return val if math.isfinite(val) else default


def to_text(value: Any) -> str:
    """Convert value to a display string; None becomes empty."""
    if value is None:
        return ""
    return str(value)
