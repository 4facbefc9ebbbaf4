"""API request models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from sashiko.svg.viewbox import ViewBox, default_viewbox, parse_viewbox


class SvgRequest(BaseModel):
    svg: str = Field(..., description="Tile SVG markup")


class TileRequest(SvgRequest):
    view_box: str = Field(
        default="",
        description="Tile viewBox; falls back to the SVG's own viewBox, then 0 0 10 10",
    )

    def resolve_viewbox(self, document_viewbox: ViewBox | None = None) -> ViewBox:
        return parse_viewbox(self.view_box) or document_viewbox or default_viewbox()


class MirrorRequest(TileRequest):
    axis: Literal["horizontal", "vertical"] = "horizontal"


class SnapRequest(TileRequest):
    grid_size_mm: float = Field(1.0, description="Grid spacing in mm")


class ThreadStyleRequest(TileRequest):
    stroke_color: str = "#334e68"
    stroke_width_mm: float = Field(0.6, gt=0)
    stitch_length_mm: float = Field(3.0, gt=0)
    gap_length_mm: float = Field(1.5, gt=0)


class SetViewBoxRequest(SvgRequest):
    view_box: str = Field(..., description='"minX minY width height"')


class PathParseRequest(BaseModel):
    d: str = Field(..., description="Path data")
    absolute: bool = Field(default=False, description="Normalize relative commands to absolute")
