"""Unit conversion. All internal lengths are millimeters; PDF space is points."""

from __future__ import annotations

import math
import re
from typing import Literal

Unit = Literal["mm", "in"]

MM_PER_INCH = 25.4
POINTS_PER_INCH = 72.0

_INCH_RE = re.compile(r'^([\d.]+)\s*(in|inch|inches|")$')
_MM_RE = re.compile(r"^([\d.]+)\s*(mm|millimeters?)$")


def mm_to_inches(mm: float) -> float:
    return mm / MM_PER_INCH


def inches_to_mm(inches: float) -> float:
    return inches * MM_PER_INCH


def mm_to_points(mm: float) -> float:
    """1 inch = 72 points = 25.4 mm."""
    return mm * POINTS_PER_INCH / MM_PER_INCH


def points_to_mm(points: float) -> float:
    return points * MM_PER_INCH / POINTS_PER_INCH


def convert(value: float, from_unit: Unit, to_unit: Unit) -> float:
    """Convert a length between display units."""
    if from_unit == to_unit:
        return value
    if from_unit == "mm" and to_unit == "in":
        return mm_to_inches(value)
    if from_unit == "in" and to_unit == "mm":
        return inches_to_mm(value)
    return value


def format_with_unit(value: float, unit: Unit, decimals: int = 1) -> str:
    return f"{value:.{decimals}f} {unit}"


def parse_value_with_unit(value: str, default_unit: Unit = "mm") -> float | None:
    """Parse ``"2in"``, ``"5 mm"`` or a bare number into millimeters.

    Returns None when the text is not a number.
    """
    trimmed = value.strip().lower()

    match = _INCH_RE.match(trimmed)
    if match:
        try:
            return inches_to_mm(float(match.group(1)))
        except ValueError:
            return None

    match = _MM_RE.match(trimmed)
    if match:
        try:
            return float(match.group(1))
        except ValueError:
            return None

    try:
        number = float(trimmed)
    except ValueError:
        return None
    return inches_to_mm(number) if default_unit == "in" else number


def round_to_decimals(value: float, decimals: int) -> float:
    factor = 10**decimals
    return math.floor(value * factor + 0.5) / factor
