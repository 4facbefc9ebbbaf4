"""SVG document errors raised by the parser and propagated by the transform engine."""

from __future__ import annotations


class SvgError(Exception):
    """Base class for SVG documents that cannot be processed."""

    kind = "svg_error"


class SvgSyntaxError(SvgError):
    """The text is not well-formed XML."""

    kind = "syntax"


class NoRootElementError(SvgError):
    """Well-formed XML without any <svg> element."""

    kind = "no_svg"
