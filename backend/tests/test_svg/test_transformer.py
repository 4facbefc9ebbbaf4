"""Tests for the tile transform engine, checked through rendered coordinates."""

from __future__ import annotations

import pytest

from sashiko.pdf.renderer import draw_tile
from sashiko.svg.document import parse_document
from sashiko.svg.transformer import (
    ThreadStyle,
    apply_thread_style,
    mirror_horizontal,
    mirror_vertical,
    reset_thread_style,
    rotate_90,
    set_viewbox,
    snap_to_grid,
)
from sashiko.svg.errors import SvgSyntaxError
from sashiko.svg.viewbox import ViewBox
from sashiko.utils.units import mm_to_points
from tests.conftest import ASYMMETRIC_TILE_SVG, MALFORMED_SVG, RecordingPage, tile_options

VB = ViewBox(0, 0, 10, 10)


def _rendered(svg: str) -> list[tuple[float, float, float, float]]:
    page = RecordingPage()
    draw_tile(page, svg, tile_options())
    return [(*line.start, *line.end) for line in page.lines]


def _assert_same_geometry(a: str, b: str) -> None:
    lines_a, lines_b = _rendered(a), _rendered(b)
    assert len(lines_a) == len(lines_b) > 0
    for la, lb in zip(lines_a, lines_b):
        assert la == pytest.approx(lb, abs=1e-9)


class TestMirror:
    def test_horizontal_moves_x(self):
        result = mirror_horizontal('<svg viewBox="0 0 10 10"><line x1="2" y1="0" x2="2" y2="10"/></svg>', VB)
        (line,) = _rendered(result)
        assert line[0] == pytest.approx(mm_to_points(8))

    def test_vertical_moves_y(self):
        result = mirror_vertical('<svg viewBox="0 0 10 10"><line x1="0" y1="2" x2="10" y2="2"/></svg>', VB)
        (line,) = _rendered(result)
        # y=8 in SVG space is 2 mm above the tile bottom on the page
        assert line[1] == pytest.approx(mm_to_points(2))

    def test_horizontal_twice_is_identity(self):
        twice = mirror_horizontal(mirror_horizontal(ASYMMETRIC_TILE_SVG, VB), VB)
        _assert_same_geometry(twice, ASYMMETRIC_TILE_SVG)

    def test_vertical_twice_is_identity(self):
        twice = mirror_vertical(mirror_vertical(ASYMMETRIC_TILE_SVG, VB), VB)
        _assert_same_geometry(twice, ASYMMETRIC_TILE_SVG)

    def test_transform_text(self):
        result = mirror_horizontal('<svg viewBox="0 0 10 10"><line/></svg>', VB)
        assert 'transform="scale(-1, 1) translate(-10, 0)"' in result

    def test_offset_viewbox(self):
        vb = ViewBox(-5, -5, 10, 10)
        result = mirror_horizontal('<svg viewBox="-5 -5 10 10"><line x1="-3" y1="0" x2="-3" y2="1"/></svg>', vb)
        page = RecordingPage()
        draw_tile(page, result, tile_options(view_box_min_x=-5, view_box_min_y=-5))
        # x=-3 mirrors to x=3, which is 8 mm from the tile's left edge
        assert page.lines[0].start[0] == pytest.approx(mm_to_points(8))

    def test_only_outermost_drawables_rewritten(self):
        result = mirror_horizontal('<svg><g><line/></g><line/></svg>', VB)
        doc = parse_document(result)
        g, outer_line = doc.svg.element_children
        assert g.get("transform")
        assert g.element_children[0].get("transform") is None
        assert outer_line.get("transform")

    def test_existing_transform_kept_after_prefix(self):
        result = mirror_horizontal('<svg><line transform="translate(1, 0)"/></svg>', VB)
        assert 'transform="scale(-1, 1) translate(-10, 0) translate(1, 0)"' in result

    def test_malformed_raises(self):
        with pytest.raises(SvgSyntaxError):
            mirror_horizontal(MALFORMED_SVG, VB)


class TestRotate:
    def test_quarter_turn(self):
        result = rotate_90('<svg viewBox="0 0 10 10"><line x1="5" y1="0" x2="5" y2="5"/></svg>', VB)
        (line,) = _rendered(result)
        # (5, 0) turns clockwise to (10, 5)
        assert line[:2] == pytest.approx((mm_to_points(10), mm_to_points(5)))

    def test_four_turns_is_identity(self):
        svg = ASYMMETRIC_TILE_SVG
        for _ in range(4):
            svg = rotate_90(svg, VB)
        _assert_same_geometry(svg, ASYMMETRIC_TILE_SVG)

    def test_two_turns_equals_both_mirrors(self):
        half = rotate_90(rotate_90(ASYMMETRIC_TILE_SVG, VB), VB)
        mirrored = mirror_vertical(mirror_horizontal(ASYMMETRIC_TILE_SVG, VB), VB)
        _assert_same_geometry(half, mirrored)


class TestSnap:
    VB100 = ViewBox(0, 0, 100, 100)

    def test_zero_grid_returns_input_unchanged(self):
        assert snap_to_grid(ASYMMETRIC_TILE_SVG, VB, 0) == ASYMMETRIC_TILE_SVG

    def test_negative_grid_returns_input_unchanged(self):
        assert snap_to_grid(ASYMMETRIC_TILE_SVG, VB, -1) == ASYMMETRIC_TILE_SVG

    def test_attributes(self):
        result = snap_to_grid('<svg><line x1="3" y1="1" x2="12.4" y2="18"/></svg>', self.VB100, 5)
        assert result == '<svg><line x1="5" y1="0" x2="10" y2="20"/></svg>'

    def test_half_rounds_up(self):
        result = snap_to_grid('<svg><circle cx="2.5" cy="7.5" r="1"/></svg>', self.VB100, 5)
        assert result == '<svg><circle cx="5" cy="10" r="0"/></svg>'

    def test_points(self):
        result = snap_to_grid('<svg><polyline points="1,1 7,8"/></svg>', self.VB100, 5)
        assert result == '<svg><polyline points="0,0 5,10"/></svg>'

    def test_path_lines_snapped_curves_kept(self):
        result = snap_to_grid('<svg><path d="M1 1 L7 8 C1 2 3 4 6 6"/></svg>', self.VB100, 5)
        assert result == '<svg><path d="M0 0 L5 10 C1 2 3 4 6 6"/></svg>'

    def test_relative_path_normalized(self):
        result = snap_to_grid('<svg><path d="m1 1 l6 7 h4"/></svg>', self.VB100, 5)
        assert result == '<svg><path d="M0 0 L5 10 H10"/></svg>'

    def test_grid_scaled_by_viewbox_width(self):
        # Grid size is divided by viewBox width / 100: 0.1 on a 10-unit tile is 1 unit.
        result = snap_to_grid('<svg><line x1="2.4" y1="2.6"/></svg>', VB, 0.1)
        assert result == '<svg><line x1="2" y1="3"/></svg>'

    def test_non_numeric_attribute_left_alone(self):
        result = snap_to_grid('<svg><rect width="50%" x="3"/></svg>', self.VB100, 5)
        assert result == '<svg><rect width="50%" x="5"/></svg>'


class TestThreadStyle:
    STYLE = ThreadStyle(stroke_color="#123456", stroke_width_mm=0.6, stitch_length_mm=3, gap_length_mm=1.5)

    def test_apply(self):
        result = apply_thread_style('<svg><line x1="0"/><g/></svg>', VB, self.STYLE)
        assert result == (
            '<svg><line x1="0" stroke="#123456" stroke-width="0.60" '
            'stroke-dasharray="3.00 1.50" stroke-linecap="round" fill="none"/><g/></svg>'
        )

    def test_existing_fill_kept(self):
        result = apply_thread_style('<svg><rect fill="#fff"/></svg>', VB, self.STYLE)
        assert 'fill="#fff"' in result

    def test_reset(self):
        styled = apply_thread_style('<svg><line x1="0"/></svg>', VB, self.STYLE)
        result = reset_thread_style(styled)
        assert "stroke-dasharray" not in result
        assert "stroke-linecap" not in result
        assert 'stroke="#123456"' in result


def test_set_viewbox():
    result = set_viewbox('<svg viewBox="0 0 10 10"><line/></svg>', ViewBox(-1, -1, 12, 12))
    assert result == '<svg viewBox="-1 -1 12 12"><line/></svg>'
