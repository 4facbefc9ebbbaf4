"""Colour parsing for PDF output. Components are normalized to 0..1."""

from __future__ import annotations

import re
from typing import NamedTuple

from reportlab.lib import colors


class RGB(NamedTuple):
    r: float
    g: float
    b: float


BLACK = RGB(0.0, 0.0, 0.0)
WHITE = RGB(1.0, 1.0, 1.0)

_HEX6_RE = re.compile(r"^#([0-9A-Fa-f]{6})$")
_HEX3_RE = re.compile(r"^#([0-9A-Fa-f]{3})$")
_RGB_RE = re.compile(r"^rgb\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*\)$")
_RGBA_RE = re.compile(r"^rgba\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*,\s*[\d.]+\s*\)$")

# Fill values that mean "paint nothing".
NO_PAINT = frozenset({"", "none", "transparent"})


def parse_hex_color(text: str) -> RGB | None:
    match = _HEX6_RE.match(text)
    if not match:
        return None
    digits = match.group(1)
    return RGB(
        int(digits[0:2], 16) / 255,
        int(digits[2:4], 16) / 255,
        int(digits[4:6], 16) / 255,
    )


def parse_hex_color_short(text: str) -> RGB | None:
    match = _HEX3_RE.match(text)
    if not match:
        return None
    r, g, b = match.group(1)
    return RGB(int(r * 2, 16) / 255, int(g * 2, 16) / 255, int(b * 2, 16) / 255)


def parse_rgb_color(text: str) -> RGB | None:
    match = _RGB_RE.match(text) or _RGBA_RE.match(text)
    if not match:
        return None
    return clamp_rgb(RGB(*(int(match.group(i)) / 255 for i in (1, 2, 3))))


def parse_named_color(text: str) -> RGB | None:
    """CSS colour keywords (``black``, ``navy``, ...) from reportlab's colour table.

    Looked up by name only; ``colors.toColor`` would ``eval`` unknown strings.
    """
    color = colors.getAllNamedColors().get(text.lower())
    if color is None:
        return None
    return clamp_rgb(RGB(color.red, color.green, color.blue))


def parse_color(text: str) -> RGB:
    """Parse any supported colour notation. Unknown input falls back to white."""
    trimmed = text.strip()
    return (
        parse_hex_color(trimmed)
        or parse_hex_color_short(trimmed)
        or parse_rgb_color(trimmed)
        or parse_named_color(trimmed)
        or WHITE
    )


def paint_or_none(text: str | None, current: RGB | None = None) -> RGB | None:
    """Resolve a fill attribute: None when it paints nothing.

    ``currentColor`` resolves to ``current``, falling back to white without one.
    """
    if text is None or text.strip().lower() in NO_PAINT:
        return None
    if text.strip().lower() == "currentcolor":
        return current or WHITE
    return parse_color(text)


def rgb_to_hex(color: RGB) -> str:
    return "#" + "".join(f"{round(c * 255):02x}" for c in color)


def clamp_rgb(color: RGB) -> RGB:
    return RGB(*(max(0.0, min(1.0, c)) for c in color))
