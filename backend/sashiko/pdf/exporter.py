"""PDF exporter — lays a tile grid out on one paper-sized page.

Order of drawing: white background over the pattern area, the tiles, then the
optional calibration square, settings summary and crop marks.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sashiko.models.export import FinalSize, PatternExportOptions, SizeMode
from sashiko.pdf.config import RenderConfig
from sashiko.pdf.page import Page, PdfDocument
from sashiko.pdf.paper import get_paper_dimensions
from sashiko.pdf.renderer import TileRenderOptions, draw_tile
from sashiko.svg.viewbox import ViewBox, parse_viewbox
from sashiko.utils.color import BLACK, RGB, WHITE, parse_color
from sashiko.utils.units import convert, mm_to_points

logger = logging.getLogger(__name__)

CALIBRATION_CAPTION = "This square should measure 50mm"


class ExportError(Exception):
    """The export options cannot produce a document."""


@dataclass(frozen=True)
class PatternDimensions:
    tile_size_mm: float
    width_mm: float
    height_mm: float


def calculate_dimensions(
    size_mode: SizeMode,
    tile_size_mm: float,
    rows: int,
    cols: int,
    row_offset: float,
    final_size_mm: FinalSize | None,
) -> PatternDimensions:
    """Tile size and overall pattern size in mm.

    In final-size mode the tile is the largest square that fits the grid, so a
    mismatched aspect ratio leaves slack rather than stretching the tile.
    Without a final size the tile-size rules apply.
    """
    if size_mode == "final-size" and final_size_mm is not None:
        tile = min(final_size_mm.width / cols, final_size_mm.height / rows)
        return PatternDimensions(tile, final_size_mm.width, final_size_mm.height)

    width = tile_size_mm * cols
    if row_offset > 0:
        width += tile_size_mm * row_offset
    return PatternDimensions(tile_size_mm, width, tile_size_mm * rows)


def tile_origin_mm(row: int, col: int, rows: int, tile_size_mm: float, row_offset: float) -> tuple[float, float]:
    """Bottom-left corner of tile (row, col) relative to the pattern origin.

    Row 0 is the top row; odd rows shift right by the stagger.
    """
    x = col * tile_size_mm
    if row_offset > 0 and row % 2 == 1:
        x += tile_size_mm * row_offset
    y = (rows - 1 - row) * tile_size_mm
    return x, y


def _colors(options: PatternExportOptions, config: RenderConfig) -> tuple[RGB, RGB]:
    if config.print_safe_colors:
        return BLACK, WHITE
    return parse_color(options.thread_color), parse_color(options.background_color)


def _draw_tiles(
    page: Page,
    options: PatternExportOptions,
    config: RenderConfig,
    viewbox: ViewBox,
    dims: PatternDimensions,
    ink: RGB,
) -> int:
    margin_pt = mm_to_points(options.margin_mm)
    segments = 0
    for row in range(options.rows):
        for col in range(options.cols):
            x_mm, y_mm = tile_origin_mm(row, col, options.rows, dims.tile_size_mm, options.row_offset)
            tile_options = TileRenderOptions(
                view_box_width=viewbox.width,
                view_box_height=viewbox.height,
                view_box_min_x=viewbox.min_x,
                view_box_min_y=viewbox.min_y,
                scale=dims.tile_size_mm / viewbox.width,
                offset_x=margin_pt + mm_to_points(x_mm),
                offset_y=margin_pt + mm_to_points(y_mm),
                stroke_color=ink,
                stroke_width_pt=mm_to_points(options.stroke_width_mm),
                dash_length_pt=mm_to_points(options.stitch_length_mm),
                gap_length_pt=mm_to_points(options.gap_length_mm),
                flatten_curves=config.flatten_curves,
                curve_samples=config.curve_samples,
            )
            segments += draw_tile(page, options.svg_content, tile_options)
    return segments


def _draw_calibration(page: Page, options: PatternExportOptions, config: RenderConfig) -> None:
    margin_pt = mm_to_points(options.margin_mm)
    size_pt = mm_to_points(config.calibration_size_mm)
    y = page.height - margin_pt - size_pt - config.calibration_gap_pt
    page.draw_rectangle(
        margin_pt,
        y,
        size_pt,
        size_pt,
        border_color=BLACK,
        border_width=config.calibration_border_pt,
    )
    page.draw_text(
        CALIBRATION_CAPTION,
        margin_pt,
        y - 12,
        size=config.calibration_font_size,
        font=config.font_name,
    )


def summary_lines(options: PatternExportOptions, dims: PatternDimensions) -> list[str]:
    unit = options.unit

    def show(mm: float) -> str:
        return f"{convert(mm, 'mm', unit):.2f}"

    return [
        f"Pattern: {options.pattern_name}",
        f"Tile Size: {show(dims.tile_size_mm)} {unit}",
        f"Tiles: {options.rows} × {options.cols}",
        f"Final Size: {show(dims.width_mm)} × {show(dims.height_mm)} {unit}",
        f"Paper: {options.paper_size}" + (" (landscape)" if options.landscape else ""),
    ]


def _draw_summary(page: Page, options: PatternExportOptions, config: RenderConfig, dims: PatternDimensions) -> None:
    margin_pt = mm_to_points(options.margin_mm)
    y = page.height - margin_pt - mm_to_points(config.calibration_size_mm) - config.summary_gap_pt
    for line in summary_lines(options, dims):
        page.draw_text(line, margin_pt, y, size=config.summary_font_size, font=config.font_name)
        y -= config.summary_line_height_pt


def crop_mark_lines(
    x: float, y: float, width: float, height: float, length: float
) -> list[tuple[tuple[float, float], tuple[float, float]]]:
    """Two lines per corner of the box: one running outward vertically, one along the edge inward."""
    top, right = y + height, x + width
    return [
        ((x, top), (x, top + length)),
        ((x, top), (x + length, top)),
        ((right, top), (right, top + length)),
        ((right, top), (right - length, top)),
        ((x, y), (x, y - length)),
        ((x, y), (x + length, y)),
        ((right, y), (right, y - length)),
        ((right, y), (right - length, y)),
    ]


def _draw_crop_marks(page: Page, options: PatternExportOptions, config: RenderConfig, dims: PatternDimensions) -> None:
    margin_pt = mm_to_points(options.margin_mm)
    lines = crop_mark_lines(
        margin_pt,
        margin_pt,
        mm_to_points(dims.width_mm),
        mm_to_points(dims.height_mm),
        mm_to_points(config.crop_mark_length_mm),
    )
    for start, end in lines:
        page.draw_line(start, end, thickness=config.crop_mark_width_pt, color=BLACK)


def render_pattern(page: Page, options: PatternExportOptions, config: RenderConfig | None = None) -> PatternDimensions:
    """Draw the whole pattern sheet onto ``page``.

    Raises ExportError when the viewBox does not parse.
    """
    config = config or RenderConfig()
    viewbox = parse_viewbox(options.view_box)
    if viewbox is None:
        raise ExportError(f"Invalid viewBox: {options.view_box!r}")

    dims = calculate_dimensions(
        options.size_mode,
        options.tile_size_mm,
        options.rows,
        options.cols,
        options.row_offset,
        options.final_size_mm,
    )
    margin_pt = mm_to_points(options.margin_mm)
    width_pt, height_pt = mm_to_points(dims.width_mm), mm_to_points(dims.height_mm)
    if margin_pt + width_pt > page.width or margin_pt + height_pt > page.height:
        logger.warning(
            "Pattern %.1fx%.1f mm overflows %s paper at %.1f mm margin",
            dims.width_mm,
            dims.height_mm,
            options.paper_size,
            options.margin_mm,
        )

    ink, background = _colors(options, config)
    page.draw_rectangle(margin_pt, margin_pt, width_pt, height_pt, fill_color=background)

    segments = _draw_tiles(page, options, config, viewbox, dims, ink)
    logger.info(
        "Rendered %dx%d tiles at %.2f mm (%d segments)",
        options.rows,
        options.cols,
        dims.tile_size_mm,
        segments,
    )

    if options.include_calibration:
        _draw_calibration(page, options, config)
    if options.include_settings_summary:
        _draw_summary(page, options, config, dims)
    if options.include_crop_marks:
        _draw_crop_marks(page, options, config, dims)
    return dims


def export_pattern_pdf(options: PatternExportOptions, config: RenderConfig | None = None) -> bytes:
    """Export the pattern as a single-page PDF and return its bytes."""
    paper = get_paper_dimensions(options.paper_size, options.landscape)
    document = PdfDocument(
        mm_to_points(paper.width),
        mm_to_points(paper.height),
        title=options.pattern_name,
        author=options.author,
        subject="Sashiko pattern",
    )
    render_pattern(document.page, options, config)
    return document.save()
