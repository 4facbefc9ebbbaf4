"""Math helpers — number formatting and grid snapping. No svg/pdf imports."""

from __future__ import annotations

import math

# Snapped values are rounded to this many decimals to drop float noise
# (3 * 0.1 -> 0.3, not 0.30000000000000004).
_SNAP_DECIMALS = 6


def format_number(value: float) -> str:
    """Render a number the way SVG authors write it: 10, 2.5, -0.25.

    Integral values lose their trailing ``.0`` and negative zero prints as ``0``.
    """
    if math.isfinite(value) and value == int(value) and abs(value) < 1e16:
        return str(int(value))
    return repr(float(value))


def snap_value(value: float, interval: float) -> float:
    """Round ``value`` to the nearest multiple of ``interval``, halves rounding up.

    A non-positive interval leaves the value untouched.
    """
    if interval <= 0:
        return value
    return round(math.floor(value / interval + 0.5) * interval, _SNAP_DECIMALS)


def parse_float(text: str | None, default: float = 0.0) -> float:
    """Lenient float parse for SVG attribute values (``"2px"`` -> 2.0)."""
    if text is None:
        return default
    stripped = text.strip()
    for suffix in ("px", "pt", "mm"):
        if stripped.endswith(suffix):
            stripped = stripped[: -len(suffix)]
            break
    try:
        return float(stripped)
    except ValueError:
        return default
