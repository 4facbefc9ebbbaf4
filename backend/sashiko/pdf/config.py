"""Render configuration — knobs for tile drawing and page furniture."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class RenderConfig:
    """Controls how a pattern is laid out and stroked on the page."""

    # Ink black on white paper regardless of the on-screen colours
    print_safe_colors: bool = True

    # Curves and arcs in path data: flatten into segments, or skip them
    flatten_curves: bool = True
    curve_samples: int = 16

    # Calibration square
    calibration_size_mm: float = 50.0
    calibration_border_pt: float = 1.0
    calibration_gap_pt: float = 20.0  # below the top margin
    calibration_font_size: float = 10.0

    # Settings summary block, starts this far below the calibration square's top
    summary_gap_pt: float = 60.0
    summary_font_size: float = 9.0
    summary_line_height_pt: float = 12.0

    # Crop marks
    crop_mark_length_mm: float = 5.0
    crop_mark_width_pt: float = 0.5

    font_name: str = "Helvetica"
