"""Export options for the PDF exporter."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from sashiko.models.pattern import Pattern
from sashiko.pdf.paper import DEFAULT_PAPER_SIZE, PaperSize
from sashiko.utils.units import Unit

SizeMode = Literal["tile-size", "final-size"]


class FinalSize(BaseModel):
    width: float = Field(..., gt=0, description="Overall width in mm")
    height: float = Field(..., gt=0, description="Overall height in mm")


class PatternExportOptions(BaseModel):
    svg_content: str = Field(..., description="Tile SVG markup")
    view_box: str = Field(..., description="Tile viewBox string")
    tile_size_mm: float = Field(10.0, ge=1, le=100)
    rows: int = Field(4, ge=1, le=50)
    cols: int = Field(4, ge=1, le=50)
    row_offset: float = Field(0.0, ge=0, le=1, description="Stagger of odd rows, fraction of a tile")
    final_size_mm: FinalSize | None = None
    size_mode: SizeMode = "tile-size"
    paper_size: PaperSize = DEFAULT_PAPER_SIZE
    landscape: bool = False
    unit: Unit = "mm"
    background_color: str = "#f5f5dc"
    thread_color: str = "#334e68"
    stroke_width_mm: float = Field(0.6, ge=0.1, le=5)
    stitch_length_mm: float = Field(3.0, ge=0.5, le=20)
    gap_length_mm: float = Field(1.5, gt=0)
    pattern_name: str = "Untitled Pattern"
    pattern_id: str = ""
    author: str = ""
    margin_mm: float = Field(10.0, ge=0)
    include_calibration: bool = True
    include_crop_marks: bool = True
    include_settings_summary: bool = True

    @classmethod
    def from_pattern(cls, pattern: Pattern, **overrides) -> "PatternExportOptions":
        """Options seeded from a library pattern's tile and stitch defaults."""
        values = {
            "svg_content": pattern.tile.svg,
            "view_box": pattern.tile.view_box,
            "stroke_width_mm": pattern.defaults.stroke_width_mm,
            "stitch_length_mm": pattern.defaults.stitch_length_mm,
            "gap_length_mm": pattern.defaults.gap_length_mm,
            "pattern_name": pattern.name,
            "pattern_id": pattern.id,
            "author": pattern.author,
        }
        values.update(overrides)
        return cls(**values)
