"""Pattern bundle — the library's read-only input to export. Persistence lives elsewhere."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field, ValidationError

_VIEWBOX_PATTERN = r"^-?\d+(\.\d+)?\s+-?\d+(\.\d+)?\s+\d+(\.\d+)?\s+\d+(\.\d+)?$"

EMPTY_TILE_SVG = '<svg viewBox="0 0 10 10" xmlns="http://www.w3.org/2000/svg"></svg>'


class PatternTile(BaseModel):
    """The repeating unit."""

    svg: str = Field(..., min_length=1, description="Tile SVG markup")
    view_box: str = Field(..., pattern=_VIEWBOX_PATTERN, description='"minX minY width height"')


class StitchDefaults(BaseModel):
    stitch_length_mm: float = Field(3.0, gt=0)
    gap_length_mm: float = Field(1.5, gt=0)
    stroke_width_mm: float = Field(0.6, gt=0)
    snap_grid_mm: float = Field(1.0, gt=0)


class Pattern(BaseModel):
    id: str = Field(..., pattern=r"^[a-z0-9-]+$", description="kebab-case identifier")
    name: str = Field(..., min_length=1)
    author: str = Field(..., min_length=1)
    license: str = "CC BY 4.0"
    notes: str | None = None
    created_at: str = ""
    updated_at: str = ""
    tile: PatternTile
    defaults: StitchDefaults = Field(default_factory=StitchDefaults)


def validate_pattern(data: dict) -> list[str]:
    """Validation messages as ``"field.path: message"``; empty when the data is a valid Pattern."""
    try:
        Pattern.model_validate(data)
    except ValidationError as e:
        return [".".join(str(p) for p in err["loc"]) + ": " + err["msg"] for err in e.errors()]
    return []


def create_empty_pattern(pattern_id: str, name: str) -> Pattern:
    """A blank 10x10 tile with the default stitch settings.

    Built without validation since the author is filled in later.
    """
    now = datetime.now(timezone.utc).isoformat()
    return Pattern.model_construct(
        id=pattern_id,
        name=name,
        author="",
        license="CC BY 4.0",
        notes="",
        created_at=now,
        updated_at=now,
        tile=PatternTile(svg=EMPTY_TILE_SVG, view_box="0 0 10 10"),
        defaults=StitchDefaults(),
    )
