"""PDF tile renderer — stamps one tile's SVG shapes onto a page as dashed stitch lines.

Every point goes through the same mapping: the element's composed ``transform``
(ancestors first), then viewBox units → millimeters → points with the Y axis flipped,
since SVG grows downward and PDF upward.

Stroke colour, width and dash always come from the render options, never from the
element, so a tile prints in one ink whatever its on-screen styling. Fills are kept.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
from svgpathtools import Arc, CubicBezier, QuadraticBezier

from sashiko.pdf.page import Page, Point
from sashiko.svg.document import SHAPE_TAGS, SvgElement, parse_document
from sashiko.svg.errors import SvgError
from sashiko.svg.path_parser import (
    ArcTo,
    ClosePath,
    CubicCurveTo,
    HorizontalLineTo,
    LineTo,
    MoveTo,
    QuadraticCurveTo,
    SmoothCubicTo,
    SmoothQuadraticTo,
    VerticalLineTo,
    parse_path,
    to_absolute,
)
from sashiko.utils.color import RGB, paint_or_none
from sashiko.utils.geometry import (
    apply_transform,
    circle_points,
    is_axis_aligned,
    parse_transform,
    transform_points,
)
from sashiko.utils.math_helpers import parse_float
from sashiko.utils.units import mm_to_points

logger = logging.getLogger(__name__)

# Circles have no dashed primitive; they are traced as a regular polygon.
CIRCLE_SEGMENTS = 24

_POINTS_NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


@dataclass(frozen=True)
class TileRenderOptions:
    """Everything one tile stamp depends on."""

    view_box_width: float
    view_box_height: float
    scale: float  # tile mm per viewBox unit
    offset_x: float  # points
    offset_y: float  # points
    stroke_color: RGB
    stroke_width_pt: float
    dash_length_pt: float
    gap_length_pt: float
    view_box_min_x: float = 0.0
    view_box_min_y: float = 0.0
    flatten_curves: bool = True
    curve_samples: int = 16

    @property
    def dash(self) -> tuple[float, float]:
        return (self.dash_length_pt, self.gap_length_pt)


def to_page_point(options: TileRenderOptions, x: float, y: float) -> Point:
    """Map a viewBox point onto the page, flipping Y."""
    px = options.offset_x + mm_to_points((x - options.view_box_min_x) * options.scale)
    py = options.offset_y + mm_to_points(
        (options.view_box_min_y + options.view_box_height - y) * options.scale
    )
    return (px, py)


class _Stamp:
    """Draws one element's geometry through its transform matrix."""

    def __init__(self, page: Page, options: TileRenderOptions, matrix: NDArray[np.float64]) -> None:
        self.page = page
        self.options = options
        self.matrix = matrix
        self.segments = 0

    def point(self, x: float, y: float) -> Point:
        tx, ty = apply_transform(self.matrix, x, y)
        return to_page_point(self.options, tx, ty)

    def points(self, local: NDArray[np.float64]) -> list[Point]:
        return [to_page_point(self.options, x, y) for x, y in transform_points(self.matrix, local)]

    def line(self, start: Point, end: Point) -> None:
        """Dashed stitch line between two page points."""
        self.page.draw_line(
            start,
            end,
            thickness=self.options.stroke_width_pt,
            color=self.options.stroke_color,
            dash=self.options.dash,
        )
        self.segments += 1

    def segment(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self.line(self.point(x1, y1), self.point(x2, y2))

    def polyline(self, page_points: list[Point], closed: bool = False) -> None:
        for start, end in zip(page_points, page_points[1:]):
            self.line(start, end)
        if closed and len(page_points) >= 3:
            self.line(page_points[-1], page_points[0])

    def fill(self, page_points: list[Point], color: RGB | None) -> None:
        if color is not None and len(page_points) >= 3:
            self.page.draw_polygon(page_points, fill_color=color)


def _parse_points(text: str) -> NDArray[np.float64]:
    values = [float(n) for n in _POINTS_NUMBER_RE.findall(text)]
    pairs = len(values) // 2
    return np.array(values[: pairs * 2], dtype=float).reshape(pairs, 2)


def _draw_line(stamp: _Stamp, el: SvgElement) -> None:
    stamp.segment(
        parse_float(el.get("x1")),
        parse_float(el.get("y1")),
        parse_float(el.get("x2")),
        parse_float(el.get("y2")),
    )


def _draw_rect(stamp: _Stamp, el: SvgElement, fill: RGB | None) -> None:
    x, y = parse_float(el.get("x")), parse_float(el.get("y"))
    width, height = parse_float(el.get("width")), parse_float(el.get("height"))
    if width <= 0 or height <= 0:
        logger.debug("Skipping rect with non-positive size %sx%s", width, height)
        return

    if not is_axis_aligned(stamp.matrix):
        corners = np.array([[x, y], [x + width, y], [x + width, y + height], [x, y + height]])
        outline = stamp.points(corners)
        stamp.fill(outline, fill)
        stamp.polyline(outline, closed=True)
        return

    (ax, ay), (bx, by) = stamp.point(x, y), stamp.point(x + width, y + height)
    rect = (min(ax, bx), min(ay, by), abs(bx - ax), abs(by - ay))
    # Fill and dashed outline are separate draws: one rectangle cannot carry both.
    if fill is not None:
        stamp.page.draw_rectangle(*rect, fill_color=fill)
    stamp.page.draw_rectangle(
        *rect,
        border_color=stamp.options.stroke_color,
        border_width=stamp.options.stroke_width_pt,
        dash=stamp.options.dash,
    )
    stamp.segments += 4


def _draw_poly(stamp: _Stamp, el: SvgElement, closed: bool, fill: RGB | None) -> None:
    local = _parse_points(el.get("points") or "")
    if len(local) < 2:
        return
    page_points = stamp.points(local)
    if closed:
        stamp.fill(page_points, fill)
    stamp.polyline(page_points, closed=closed)


def _draw_circle(stamp: _Stamp, el: SvgElement, fill: RGB | None) -> None:
    r = parse_float(el.get("r"))
    if r <= 0:
        return
    ring = stamp.points(circle_points(parse_float(el.get("cx")), parse_float(el.get("cy")), r, CIRCLE_SEGMENTS))
    stamp.fill(ring[:-1], fill)
    stamp.polyline(ring)


def _reflect(point: complex | None, about: complex) -> complex:
    return about if point is None else 2 * about - point


def _flatten(stamp: _Stamp, curve) -> None:
    ts = np.linspace(0.0, 1.0, stamp.options.curve_samples + 1)
    samples = [curve.point(t) for t in ts]
    stamp.polyline([stamp.point(p.real, p.imag) for p in samples])


def _draw_path(stamp: _Stamp, el: SvgElement) -> None:
    d = el.get("d")
    if not d:
        return
    commands = to_absolute(parse_path(d))
    flatten = stamp.options.flatten_curves

    current = start = 0j
    # Last control points, for the reflection in S and T.
    cubic_ctrl: complex | None = None
    quad_ctrl: complex | None = None

    for cmd in commands:
        prev_cubic, prev_quad = cubic_ctrl, quad_ctrl
        cubic_ctrl = quad_ctrl = None

        if isinstance(cmd, MoveTo):
            current = start = complex(cmd.x, cmd.y)
            continue
        if isinstance(cmd, ClosePath):
            stamp.segment(current.real, current.imag, start.real, start.imag)
            current = start
            continue

        if isinstance(cmd, LineTo):
            end = complex(cmd.x, cmd.y)
        elif isinstance(cmd, HorizontalLineTo):
            end = complex(cmd.x, current.imag)
        elif isinstance(cmd, VerticalLineTo):
            end = complex(current.real, cmd.y)
        else:
            end = complex(cmd.x, cmd.y)
            curve = None
            if isinstance(cmd, CubicCurveTo):
                cubic_ctrl = complex(cmd.x2, cmd.y2)
                curve = CubicBezier(current, complex(cmd.x1, cmd.y1), cubic_ctrl, end)
            elif isinstance(cmd, SmoothCubicTo):
                cubic_ctrl = complex(cmd.x2, cmd.y2)
                curve = CubicBezier(current, _reflect(prev_cubic, current), cubic_ctrl, end)
            elif isinstance(cmd, QuadraticCurveTo):
                quad_ctrl = complex(cmd.x1, cmd.y1)
                curve = QuadraticBezier(current, quad_ctrl, end)
            elif isinstance(cmd, SmoothQuadraticTo):
                quad_ctrl = _reflect(prev_quad, current)
                curve = QuadraticBezier(current, quad_ctrl, end)
            elif isinstance(cmd, ArcTo):
                curve = _arc(current, cmd, end)

            if not flatten:
                logger.debug("Curve command %s not drawn (flattening off)", cmd.letter)
            elif curve is not None:
                _flatten(stamp, curve)
            elif isinstance(cmd, ArcTo) and end != current:
                # Zero radius: the arc degenerates to a straight line.
                stamp.segment(current.real, current.imag, end.real, end.imag)
            current = end
            continue

        stamp.segment(current.real, current.imag, end.real, end.imag)
        current = end


def _arc(start: complex, cmd: ArcTo, end: complex) -> Arc | None:
    """svgpathtools arc, or None when the arc is degenerate (zero radius or no movement)."""
    if start == end or cmd.rx == 0 or cmd.ry == 0:
        return None
    return Arc(start, complex(abs(cmd.rx), abs(cmd.ry)), cmd.rotation, cmd.large_arc, cmd.sweep, end)


def _draw_element(page: Page, el: SvgElement, options: TileRenderOptions, matrix) -> int:
    stamp = _Stamp(page, options, matrix)
    fill = paint_or_none(el.get("fill"), current=options.stroke_color)
    tag = el.tag
    if tag == "line":
        _draw_line(stamp, el)
    elif tag == "rect":
        _draw_rect(stamp, el, fill)
    elif tag == "polyline":
        _draw_poly(stamp, el, closed=False, fill=None)
    elif tag == "polygon":
        _draw_poly(stamp, el, closed=True, fill=fill)
    elif tag == "path":
        _draw_path(stamp, el)
    elif tag == "circle":
        _draw_circle(stamp, el, fill)
    return stamp.segments


def _walk(page: Page, element: SvgElement, options: TileRenderOptions, matrix, counts: list[int]) -> None:
    for child in element.element_children:
        child_matrix = matrix @ parse_transform(child.get("transform"))
        if child.tag in SHAPE_TAGS:
            counts[0] += 1
            counts[1] += _draw_element(page, child, options, child_matrix)
        _walk(page, child, options, child_matrix, counts)


def draw_tile(page: Page, svg_content: str, options: TileRenderOptions) -> int:
    """Draw every shape of one tile in document order; later shapes land on top.

    Returns the number of stroke segments drawn. A tile that does not parse draws
    nothing.
    """
    try:
        doc = parse_document(svg_content)
    except SvgError as e:
        logger.warning("Tile not drawn: %s", e)
        return 0

    counts = [0, 0]
    _walk(page, doc.svg, options, np.eye(3), counts)
    logger.debug("Tile drawn: %d element(s), %d segment(s)", counts[0], counts[1])
    return counts[1]
