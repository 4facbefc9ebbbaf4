"""Leaf-node geometry helpers: SVG transform matrices and point sampling. No svg/pdf imports."""

from __future__ import annotations

import logging
import math
import re

import numpy as np
from numpy.typing import NDArray

logger = logging.getLogger(__name__)

_TRANSFORM_FN_RE = re.compile(r"([a-zA-Z]+)\s*\(([^)]*)\)")
_NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")

# Off-diagonal terms smaller than this count as zero (axis-aligned).
_AXIS_EPS = 1e-9


def identity() -> NDArray[np.float64]:
    return np.eye(3)


def translation(tx: float, ty: float = 0.0) -> NDArray[np.float64]:
    return np.array([[1.0, 0.0, tx], [0.0, 1.0, ty], [0.0, 0.0, 1.0]])


def scaling(sx: float, sy: float | None = None) -> NDArray[np.float64]:
    if sy is None:
        sy = sx
    return np.array([[sx, 0.0, 0.0], [0.0, sy, 0.0], [0.0, 0.0, 1.0]])


def rotation(degrees: float, cx: float = 0.0, cy: float = 0.0) -> NDArray[np.float64]:
    """Rotation about (cx, cy). Positive angles turn clockwise on screen (Y down)."""
    rad = math.radians(degrees)
    cos, sin = math.cos(rad), math.sin(rad)
    rot = np.array([[cos, -sin, 0.0], [sin, cos, 0.0], [0.0, 0.0, 1.0]])
    if cx or cy:
        return translation(cx, cy) @ rot @ translation(-cx, -cy)
    return rot


def _matrix_for(name: str, args: list[float]) -> NDArray[np.float64] | None:
    if name == "matrix" and len(args) == 6:
        a, b, c, d, e, f = args
        return np.array([[a, c, e], [b, d, f], [0.0, 0.0, 1.0]])
    if name == "translate" and 1 <= len(args) <= 2:
        return translation(*args)
    if name == "scale" and 1 <= len(args) <= 2:
        return scaling(*args)
    if name == "rotate" and len(args) in (1, 3):
        return rotation(*args)
    if name == "skewX" and len(args) == 1:
        return np.array([[1.0, math.tan(math.radians(args[0])), 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]])
    if name == "skewY" and len(args) == 1:
        return np.array([[1.0, 0.0, 0.0], [math.tan(math.radians(args[0])), 1.0, 0.0], [0.0, 0.0, 1.0]])
    return None


def parse_transform(text: str | None) -> NDArray[np.float64]:
    """Compose an SVG ``transform`` attribute into one 3x3 affine matrix.

    Functions apply right-to-left to points, so the list is multiplied left to
    right. Unknown or malformed functions are skipped.
    """
    result = identity()
    if not text:
        return result
    for match in _TRANSFORM_FN_RE.finditer(text):
        name = match.group(1)
        args = [float(n) for n in _NUMBER_RE.findall(match.group(2))]
        matrix = _matrix_for(name, args)
        if matrix is None:
            logger.debug("Ignoring transform function %s(%s)", name, match.group(2))
            continue
        result = result @ matrix
    return result


def apply_transform(matrix: NDArray[np.float64], x: float, y: float) -> tuple[float, float]:
    px, py, _ = matrix @ np.array([x, y, 1.0])
    return (float(px), float(py))


def transform_points(matrix: NDArray[np.float64], points: NDArray[np.float64]) -> NDArray[np.float64]:
    """Apply an affine matrix to an Nx2 array of points."""
    if len(points) == 0:
        return points
    homogeneous = np.hstack([points, np.ones((len(points), 1))])
    return (homogeneous @ matrix.T)[:, :2]


def is_axis_aligned(matrix: NDArray[np.float64]) -> bool:
    """True when the matrix only scales and translates (no rotation or skew)."""
    return abs(matrix[0, 1]) < _AXIS_EPS and abs(matrix[1, 0]) < _AXIS_EPS


def circle_points(cx: float, cy: float, r: float, segments: int) -> NDArray[np.float64]:
    """Closed ring of ``segments + 1`` points; the last repeats the first."""
    angles = np.linspace(0.0, 2.0 * np.pi, segments + 1)
    return np.column_stack([cx + r * np.cos(angles), cy + r * np.sin(angles)])
