"""Shared test fixtures."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from sashiko.pdf.renderer import TileRenderOptions
from sashiko.utils.color import BLACK
from sashiko.utils.units import mm_to_points


# Sample tiles

LINE_TILE_SVG = '<svg viewBox="0 0 10 10"><line x1="2" y1="2" x2="8" y2="8"/></svg>'

DIAGONAL_TILE_SVG = '<svg viewBox="0 0 10 10"><line x1="0" y1="0" x2="10" y2="10"/></svg>'

ASYMMETRIC_TILE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 10 10">
  <line x1="1" y1="2" x2="7" y2="3"/>
  <polyline points="2,8 4,9 9,5"/>
  <g transform="translate(1, 0)"><path d="M2 2 L3 6 H5"/></g>
</svg>'''

ASANOHA_TILE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 10 10">
  <g>
    <path d="M0 0 L5 5 L10 0 M0 10 L5 5 L10 10"/>
    <polygon points="5,0 10,5 5,10 0,5" fill="none"/>
  </g>
  <circle cx="5" cy="5" r="2"/>
</svg>'''

UNSAFE_SVG = '<svg><script>alert(1)</script><rect onclick="x()" width="1" height="1"/></svg>'

MALFORMED_SVG = '<svg viewBox="0 0 10 10"><line x1="0"</svg>'

NOT_SVG = '<html><body/></html>'


@dataclass
class RecordedLine:
    start: tuple[float, float]
    end: tuple[float, float]
    thickness: float
    color: tuple[float, float, float]
    dash: tuple[float, float] | None


@dataclass
class RecordedRectangle:
    x: float
    y: float
    width: float
    height: float
    fill_color: tuple[float, float, float] | None
    border_color: tuple[float, float, float] | None
    border_width: float
    dash: tuple[float, float] | None


@dataclass
class RecordingPage:
    """Page double that keeps every draw call for assertions."""

    width: float = mm_to_points(210)
    height: float = mm_to_points(297)
    lines: list[RecordedLine] = field(default_factory=list)
    rectangles: list[RecordedRectangle] = field(default_factory=list)
    polygons: list[tuple[list, tuple]] = field(default_factory=list)
    texts: list[tuple[str, float, float, float]] = field(default_factory=list)

    def draw_line(self, start, end, *, thickness, color, dash=None):
        self.lines.append(RecordedLine(tuple(start), tuple(end), thickness, color, dash))

    def draw_rectangle(self, x, y, width, height, *, fill_color=None, border_color=None, border_width=0.0, dash=None):
        self.rectangles.append(
            RecordedRectangle(x, y, width, height, fill_color, border_color, border_width, dash)
        )

    def draw_polygon(self, points, *, fill_color):
        self.polygons.append((list(points), fill_color))

    def draw_text(self, text, x, y, *, size, font="Helvetica"):
        self.texts.append((text, x, y, size))

    @property
    def dashed_lines(self) -> list[RecordedLine]:
        return [line for line in self.lines if line.dash]


def tile_options(**overrides) -> TileRenderOptions:
    """Unit tile: 10x10 viewBox at 1 mm per unit, placed at the page origin."""
    values = dict(
        view_box_width=10.0,
        view_box_height=10.0,
        scale=1.0,
        offset_x=0.0,
        offset_y=0.0,
        stroke_color=BLACK,
        stroke_width_pt=1.0,
        dash_length_pt=mm_to_points(3),
        gap_length_pt=mm_to_points(1.5),
    )
    values.update(overrides)
    return TileRenderOptions(**values)


@pytest.fixture
def page() -> RecordingPage:
    return RecordingPage()


@pytest.fixture
def line_tile_svg() -> str:
    return LINE_TILE_SVG


@pytest.fixture
def asanoha_tile_svg() -> str:
    return ASANOHA_TILE_SVG
