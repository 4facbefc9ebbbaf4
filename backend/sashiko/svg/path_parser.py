"""SVG path ``d`` parser — typed commands, relative→absolute normalization, serializer.

    >>> parse_path("M1 2L3 4H5V6Z")
    [MoveTo(x=1.0, y=2.0, relative=False), LineTo(x=3.0, y=4.0, relative=False),
     HorizontalLineTo(x=5.0, relative=False), VerticalLineTo(y=6.0, relative=False),
     ClosePath(relative=False)]

Each command letter consumes a fixed number of arguments. Extra argument groups
repeat the command (after a moveto they become linetos, as SVG specifies); an
incomplete group ends the command without emitting anything.
"""

from __future__ import annotations

import dataclasses
import logging
import re
from dataclasses import dataclass
from typing import ClassVar, Union

from sashiko.utils.math_helpers import format_number

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"[MLHVZCSQTAmlhvzcsqta]|[-+]?[0-9]*\.?[0-9]+(?:[eE][-+]?[0-9]+)?")


@dataclass(frozen=True)
class _Command:
    COMMAND: ClassVar[str] = ""
    # Field names holding x / y coordinates, shifted by the cursor when relative.
    X_FIELDS: ClassVar[tuple[str, ...]] = ()
    Y_FIELDS: ClassVar[tuple[str, ...]] = ()

    @property
    def letter(self) -> str:
        return self.COMMAND.lower() if self.relative else self.COMMAND

    def arguments(self) -> list[float | bool]:
        return [getattr(self, f.name) for f in dataclasses.fields(self) if f.name != "relative"]


@dataclass(frozen=True)
class MoveTo(_Command):
    COMMAND: ClassVar[str] = "M"
    X_FIELDS: ClassVar[tuple[str, ...]] = ("x",)
    Y_FIELDS: ClassVar[tuple[str, ...]] = ("y",)
    x: float
    y: float
    relative: bool = False


@dataclass(frozen=True)
class LineTo(_Command):
    COMMAND: ClassVar[str] = "L"
    X_FIELDS: ClassVar[tuple[str, ...]] = ("x",)
    Y_FIELDS: ClassVar[tuple[str, ...]] = ("y",)
    x: float
    y: float
    relative: bool = False


@dataclass(frozen=True)
class HorizontalLineTo(_Command):
    COMMAND: ClassVar[str] = "H"
    X_FIELDS: ClassVar[tuple[str, ...]] = ("x",)
    x: float
    relative: bool = False


@dataclass(frozen=True)
class VerticalLineTo(_Command):
    COMMAND: ClassVar[str] = "V"
    Y_FIELDS: ClassVar[tuple[str, ...]] = ("y",)
    y: float
    relative: bool = False


@dataclass(frozen=True)
class CubicCurveTo(_Command):
    COMMAND: ClassVar[str] = "C"
    X_FIELDS: ClassVar[tuple[str, ...]] = ("x1", "x2", "x")
    Y_FIELDS: ClassVar[tuple[str, ...]] = ("y1", "y2", "y")
    x1: float
    y1: float
    x2: float
    y2: float
    x: float
    y: float
    relative: bool = False


@dataclass(frozen=True)
class SmoothCubicTo(_Command):
    """``S``: the first control point is the reflection of the previous second one."""

    COMMAND: ClassVar[str] = "S"
    X_FIELDS: ClassVar[tuple[str, ...]] = ("x2", "x")
    Y_FIELDS: ClassVar[tuple[str, ...]] = ("y2", "y")
    x2: float
    y2: float
    x: float
    y: float
    relative: bool = False


@dataclass(frozen=True)
class QuadraticCurveTo(_Command):
    COMMAND: ClassVar[str] = "Q"
    X_FIELDS: ClassVar[tuple[str, ...]] = ("x1", "x")
    Y_FIELDS: ClassVar[tuple[str, ...]] = ("y1", "y")
    x1: float
    y1: float
    x: float
    y: float
    relative: bool = False


@dataclass(frozen=True)
class SmoothQuadraticTo(_Command):
    COMMAND: ClassVar[str] = "T"
    X_FIELDS: ClassVar[tuple[str, ...]] = ("x",)
    Y_FIELDS: ClassVar[tuple[str, ...]] = ("y",)
    x: float
    y: float
    relative: bool = False


@dataclass(frozen=True)
class ArcTo(_Command):
    COMMAND: ClassVar[str] = "A"
    X_FIELDS: ClassVar[tuple[str, ...]] = ("x",)
    Y_FIELDS: ClassVar[tuple[str, ...]] = ("y",)
    rx: float
    ry: float
    rotation: float
    large_arc: bool
    sweep: bool
    x: float
    y: float
    relative: bool = False


@dataclass(frozen=True)
class ClosePath(_Command):
    COMMAND: ClassVar[str] = "Z"
    relative: bool = False


PathCommand = Union[
    MoveTo,
    LineTo,
    HorizontalLineTo,
    VerticalLineTo,
    CubicCurveTo,
    SmoothCubicTo,
    QuadraticCurveTo,
    SmoothQuadraticTo,
    ArcTo,
    ClosePath,
]

_COMMAND_TYPES: dict[str, type] = {
    cls.COMMAND: cls
    for cls in (
        MoveTo, LineTo, HorizontalLineTo, VerticalLineTo, CubicCurveTo,
        SmoothCubicTo, QuadraticCurveTo, SmoothQuadraticTo, ArcTo, ClosePath,
    )
}

_ARITY = {"Z": 0, "H": 1, "V": 1, "M": 2, "L": 2, "T": 2, "Q": 4, "S": 4, "C": 6, "A": 7}


def _is_command(token: str) -> bool:
    return token.isalpha()


def _build(letter: str, args: list[str]) -> PathCommand:
    upper = letter.upper()
    relative = letter != upper
    cls = _COMMAND_TYPES[upper]
    if upper == "A":
        rx, ry, rot, large, sweep, x, y = args
        # Flags are the literal tokens 1 and 0; anything else, "1.0" included, reads as false.
        return ArcTo(
            float(rx), float(ry), float(rot), large == "1", sweep == "1", float(x), float(y),
            relative=relative,
        )
    return cls(*(float(a) for a in args), relative=relative)


def parse_path(d: str) -> list[PathCommand]:
    """Parse path data into commands in document order.

    Numbers not preceded by a command letter are skipped; a truncated argument
    group stops the current command without emitting it.
    """
    tokens = _TOKEN_RE.findall(d or "")
    commands: list[PathCommand] = []
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if not _is_command(token):
            i += 1
            continue

        letter = token
        arity = _ARITY[letter.upper()]
        i += 1
        if arity == 0:
            commands.append(_build(letter, []))
            continue

        while True:
            args = tokens[i:i + arity]
            if len(args) < arity or any(_is_command(a) for a in args):
                logger.debug("Dropping incomplete %s arguments in path data", letter)
                break
            commands.append(_build(letter, args))
            i += arity
            if i >= len(tokens) or _is_command(tokens[i]):
                break
            # Extra coordinate pairs after a moveto are implicit linetos.
            if letter in "Mm":
                letter = "l" if letter == "m" else "L"

    return commands


def to_absolute(commands: list[PathCommand]) -> list[PathCommand]:
    """Resolve relative commands against a running cursor that starts at (0, 0).

    H moves only x, V only y, Z returns the cursor to the start of the subpath.
    """
    result: list[PathCommand] = []
    current_x = current_y = 0.0
    start_x = start_y = 0.0

    for cmd in commands:
        if isinstance(cmd, ClosePath):
            result.append(ClosePath())
            current_x, current_y = start_x, start_y
            continue

        if cmd.relative:
            changes = {name: getattr(cmd, name) + current_x for name in cmd.X_FIELDS}
            changes.update({name: getattr(cmd, name) + current_y for name in cmd.Y_FIELDS})
            cmd = dataclasses.replace(cmd, relative=False, **changes)
        result.append(cmd)

        if "x" in cmd.X_FIELDS:
            current_x = cmd.x
        if "y" in cmd.Y_FIELDS:
            current_y = cmd.y
        if isinstance(cmd, MoveTo):
            start_x, start_y = current_x, current_y

    return result


def _format_argument(value: float | bool) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return format_number(value)


def serialize_path(commands: list[PathCommand]) -> str:
    """Write commands back to path data, one space-separated group per command."""
    return " ".join(
        cmd.letter + " ".join(_format_argument(a) for a in cmd.arguments()) for cmd in commands
    )
