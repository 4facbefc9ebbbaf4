"""SVG transform engine — mirror, rotate, snap-to-grid and thread styling on tile strings.

Every operation parses the tile, rewrites the tree and returns freshly serialized
text; the input string is never modified. Parse failures propagate as SvgError.
"""

from __future__ import annotations

import dataclasses
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from sashiko.svg.document import (
    DRAWABLE_TAGS,
    SHAPE_TAGS,
    SvgElement,
    parse_document,
    serialize_document,
)
from sashiko.svg.path_parser import (
    HorizontalLineTo,
    LineTo,
    MoveTo,
    VerticalLineTo,
    parse_path,
    serialize_path,
    to_absolute,
)
from sashiko.svg.viewbox import ViewBox, format_viewbox
from sashiko.utils.math_helpers import format_number, snap_value

logger = logging.getLogger(__name__)

# Attributes holding a single coordinate or length.
SNAP_ATTRIBUTES = ("x", "y", "cx", "cy", "r", "width", "height", "x1", "y1", "x2", "y2")

# The snap grid treats the viewBox width as a 100 mm reference square.
SNAP_REFERENCE_MM = 100.0

_POINTS_NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")

# Path commands whose coordinates are snapped; curves and arcs keep theirs.
_SNAPPED_PATH_COMMANDS = (MoveTo, LineTo, HorizontalLineTo, VerticalLineTo)


@dataclass(frozen=True)
class ThreadStyle:
    stroke_color: str
    stroke_width_mm: float
    stitch_length_mm: float
    gap_length_mm: float


def _outermost_drawables(element: SvgElement):
    """Drawable elements with no drawable ancestor below the root.

    Nested drawables inherit a rewritten group's transform, so only these get one.
    """
    for child in element.element_children:
        if child.tag in DRAWABLE_TAGS:
            yield child
        else:
            yield from _outermost_drawables(child)


def _prepend_transform(svg_text: str, prefix: str) -> str:
    doc = parse_document(svg_text)
    for el in _outermost_drawables(doc.svg):
        existing = el.get("transform", "")
        el.set("transform", f"{prefix} {existing}".strip())
    return serialize_document(doc)


def mirror_horizontal(svg_text: str, viewbox: ViewBox) -> str:
    """Flip the tile left-to-right inside its viewBox."""
    shift = 2 * viewbox.min_x + viewbox.width
    return _prepend_transform(svg_text, f"scale(-1, 1) translate({format_number(-shift)}, 0)")


def mirror_vertical(svg_text: str, viewbox: ViewBox) -> str:
    """Flip the tile top-to-bottom inside its viewBox."""
    shift = 2 * viewbox.min_y + viewbox.height
    return _prepend_transform(svg_text, f"scale(1, -1) translate(0, {format_number(-shift)})")


def rotate_90(svg_text: str, viewbox: ViewBox) -> str:
    """Rotate the tile 90° clockwise about the viewBox centre."""
    cx, cy = (format_number(c) for c in viewbox.center)
    neg_cx, neg_cy = (format_number(-c) for c in viewbox.center)
    return _prepend_transform(
        svg_text, f"translate({cx}, {cy}) rotate(90) translate({neg_cx}, {neg_cy})"
    )


def _snap_points(points: str, snap: Callable[[float], float]) -> str:
    numbers = [float(n) for n in _POINTS_NUMBER_RE.findall(points)]
    pairs = [
        f"{format_number(snap(numbers[i]))},{format_number(snap(numbers[i + 1]))}"
        for i in range(0, len(numbers) - 1, 2)
    ]
    return " ".join(pairs)


def _snap_path(d: str, snap: Callable[[float], float]) -> str:
    snapped = []
    for cmd in to_absolute(parse_path(d)):
        if isinstance(cmd, _SNAPPED_PATH_COMMANDS):
            fields = cmd.X_FIELDS + cmd.Y_FIELDS
            cmd = dataclasses.replace(cmd, **{f: snap(getattr(cmd, f)) for f in fields})
        snapped.append(cmd)
    return serialize_path(snapped)


def snap_to_grid(svg_text: str, viewbox: ViewBox, grid_size_mm: float) -> str:
    """Round every coordinate to a grid of ``grid_size_mm``.

    A grid that works out to zero or less viewBox units is a no-op and returns the
    input text unchanged.
    """
    doc = parse_document(svg_text)

    scale = viewbox.width / SNAP_REFERENCE_MM
    interval = grid_size_mm / scale
    if interval <= 0:
        return svg_text

    def snap(value: float) -> float:
        return snap_value(value, interval)

    count = 0
    for el in doc.svg.descendants():
        for name in SNAP_ATTRIBUTES:
            value = el.get(name)
            if value is None:
                continue
            try:
                number = float(value)
            except ValueError:
                continue
            el.set(name, format_number(snap(number)))

        if el.tag == "path" and el.get("d"):
            el.set("d", _snap_path(el.get("d"), snap))
        elif el.tag in ("polyline", "polygon") and el.get("points"):
            el.set("points", _snap_points(el.get("points"), snap))
        count += 1

    logger.debug("Snapped %d element(s) to a %.4g-unit grid", count, interval)
    return serialize_document(doc)


def apply_thread_style(svg_text: str, viewbox: ViewBox, style: ThreadStyle) -> str:
    """Give every shape a dashed, round-capped stroke that reads as running stitches.

    Lengths are written in viewBox units, which tiles treat as millimeters.
    """
    doc = parse_document(svg_text)
    dasharray = f"{style.stitch_length_mm:.2f} {style.gap_length_mm:.2f}"
    for el in doc.svg.descendants():
        if el.tag not in SHAPE_TAGS:
            continue
        el.set("stroke", style.stroke_color)
        el.set("stroke-width", f"{style.stroke_width_mm:.2f}")
        el.set("stroke-dasharray", dasharray)
        el.set("stroke-linecap", "round")
        fill = el.get("fill")
        if not fill or fill == "none":
            el.set("fill", "none")
    return serialize_document(doc)


def reset_thread_style(svg_text: str) -> str:
    """Remove the stitch dash and cap; colour and width stay."""
    doc = parse_document(svg_text)
    for el in doc.svg.descendants():
        if el.tag in SHAPE_TAGS:
            el.remove("stroke-dasharray")
            el.remove("stroke-linecap")
    return serialize_document(doc)


def set_viewbox(svg_text: str, viewbox: ViewBox) -> str:
    doc = parse_document(svg_text)
    doc.svg.set("viewBox", format_viewbox(viewbox))
    return serialize_document(doc)
