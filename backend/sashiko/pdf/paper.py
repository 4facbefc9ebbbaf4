"""Paper sizes for export. All dimensions are millimeters, portrait."""

from __future__ import annotations

from typing import Literal, NamedTuple

PaperSize = Literal["A4", "A3", "Letter", "Legal"]


class Dimensions(NamedTuple):
    width: float
    height: float


PAPER_SIZES: dict[str, Dimensions] = {
    "A4": Dimensions(210.0, 297.0),
    "A3": Dimensions(297.0, 420.0),
    "Letter": Dimensions(215.9, 279.4),
    "Legal": Dimensions(215.9, 355.6),
}

DEFAULT_PAPER_SIZE: PaperSize = "A4"


def get_paper_dimensions(size: PaperSize, landscape: bool = False) -> Dimensions:
    """Paper size in mm; landscape swaps width and height."""
    dims = PAPER_SIZES[size]
    if landscape:
        return Dimensions(dims.height, dims.width)
    return dims


def available_paper_sizes() -> list[str]:
    return list(PAPER_SIZES)
