"""ViewBox value type — the ``minX minY width height`` coordinate frame of a tile."""

from __future__ import annotations

import re
from dataclasses import dataclass

from sashiko.utils.math_helpers import format_number

_NUM = r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?"
_VIEWBOX_RE = re.compile(rf"^\s*({_NUM})[\s,]+({_NUM})[\s,]+({_NUM})[\s,]+({_NUM})\s*$")


@dataclass(frozen=True)
class ViewBox:
    min_x: float
    min_y: float
    width: float
    height: float

    @property
    def center(self) -> tuple[float, float]:
        return (self.min_x + self.width / 2, self.min_y + self.height / 2)

    def __str__(self) -> str:
        return format_viewbox(self)


def parse_viewbox(text: str | None) -> ViewBox | None:
    """Parse a viewBox attribute. Anything but four numbers with positive size is None."""
    if not text:
        return None
    match = _VIEWBOX_RE.match(text)
    if not match:
        return None
    min_x, min_y, width, height = (float(g) for g in match.groups())
    if width <= 0 or height <= 0:
        return None
    return ViewBox(min_x, min_y, width, height)


def format_viewbox(viewbox: ViewBox) -> str:
    return " ".join(
        format_number(v) for v in (viewbox.min_x, viewbox.min_y, viewbox.width, viewbox.height)
    )


def default_viewbox(width: float = 10.0, height: float = 10.0) -> ViewBox:
    return ViewBox(0.0, 0.0, width, height)
