"""SVG allow-list enforcement — fail-fast validation and a permissive sanitizer.

The allow-list is the security boundary for user-submitted tiles: only the handful of
elements a sashiko tile needs, with geometry and styling attributes, and never an
inline event handler.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from xml.sax.saxutils import escape

from sashiko.svg.document import SvgElement, parse_document, serialize_element
from sashiko.svg.errors import NoRootElementError, SvgError, SvgSyntaxError
from sashiko.svg.viewbox import ViewBox

logger = logging.getLogger(__name__)

ALLOWED_TAGS = frozenset({"svg", "g", "path", "line", "polyline", "polygon", "circle", "rect"})

ALLOWED_ATTRIBUTES = frozenset({
    "d", "x", "y", "x1", "y1", "x2", "y2", "points",
    "cx", "cy", "r", "rx", "ry", "width", "height", "viewBox",
    "fill", "stroke", "stroke-width", "transform", "opacity",
    "stroke-linecap", "stroke-linejoin", "stroke-dasharray",
    "xmlns", "id", "class",
})

_ALLOWED_ATTRIBUTES_LOWER = frozenset(a.lower() for a in ALLOWED_ATTRIBUTES)

# Removed along with everything inside them, text included.
_FORBID_CONTENTS = frozenset({"script", "style", "foreignobject", "iframe", "noscript"})


class IssueKind(str, enum.Enum):
    SYNTAX = "syntax"
    NO_SVG = "no_svg"
    DISALLOWED_TAG = "disallowed_tag"
    DISALLOWED_ATTRIBUTE = "disallowed_attribute"
    EVENT_HANDLER = "event_handler"


@dataclass(frozen=True)
class ValidationIssue:
    kind: IssueKind
    message: str
    element: str | None = None
    attribute: str | None = None


@dataclass
class ValidationReport:
    issues: list[ValidationIssue] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.issues

    @property
    def error_message(self) -> str:
        return "; ".join(issue.message for issue in self.issues)


@dataclass(frozen=True)
class CheckedSvg:
    """Outcome of a combined check: the accepted SVG, or why it was refused."""

    svg: str | None = None
    viewbox: ViewBox | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _is_event_handler(name: str) -> bool:
    return name.lower().startswith("on")


def _is_allowed_attribute(name: str) -> bool:
    return name.lower() in _ALLOWED_ATTRIBUTES_LOWER


def _element_issues(element: SvgElement) -> list[ValidationIssue]:
    """Issues for one element: tag first, then attributes in order."""
    issues: list[ValidationIssue] = []
    tag = element.tag.lower()
    if tag not in ALLOWED_TAGS:
        issues.append(ValidationIssue(IssueKind.DISALLOWED_TAG, f"Disallowed tag: {tag}", element=tag))
    for name in element.attributes:
        attr = name.lower()
        if _is_event_handler(attr):
            issues.append(ValidationIssue(
                IssueKind.EVENT_HANDLER,
                f"Event handlers not allowed: {attr}",
                element=tag,
                attribute=attr,
            ))
        elif not _is_allowed_attribute(attr):
            issues.append(ValidationIssue(
                IssueKind.DISALLOWED_ATTRIBUTE,
                f"Disallowed attribute: {attr} on {tag}",
                element=tag,
                attribute=attr,
            ))
    return issues


def _parse_or_issue(svg_text: str):
    try:
        return parse_document(svg_text), None
    except SvgSyntaxError:
        return None, ValidationIssue(IssueKind.SYNTAX, "Invalid SVG syntax")
    except NoRootElementError:
        return None, ValidationIssue(IssueKind.NO_SVG, "No SVG element found")


def validate(svg_text: str) -> ValidationIssue | None:
    """Return the first violation in document order, or None when the SVG is acceptable.

    A disallowed tag is reported before any attribute of the same element.
    """
    doc, issue = _parse_or_issue(svg_text)
    if issue is not None:
        return issue
    for element in doc.root.iter():
        issues = _element_issues(element)
        if issues:
            return issues[0]
    return None


def validate_full(svg_text: str) -> ValidationReport:
    """Collect every violation instead of stopping at the first one."""
    report = ValidationReport()
    doc, issue = _parse_or_issue(svg_text)
    if issue is not None:
        report.issues.append(issue)
        return report
    if doc.svg.get("viewBox") is None:
        report.warnings.append("SVG has no viewBox attribute")
    for element in doc.root.iter():
        report.issues.extend(_element_issues(element))
    return report


def is_valid(svg_text: str) -> bool:
    return validate(svg_text) is None


def _clean_children(children: list[SvgElement | str]) -> list[SvgElement | str]:
    cleaned: list[SvgElement | str] = []
    for child in children:
        if isinstance(child, str):
            cleaned.append(child)
        else:
            cleaned.extend(_clean(child))
    return cleaned


def _clean(element: SvgElement) -> list[SvgElement | str]:
    """Sanitized replacement nodes for one element (zero, one, or its hoisted children)."""
    tag = element.tag.lower()
    if tag in _FORBID_CONTENTS:
        logger.debug("Sanitize: dropped <%s> and its content", element.tag)
        return []
    if tag not in ALLOWED_TAGS:
        logger.debug("Sanitize: unwrapped <%s>", element.tag)
        return _clean_children(element.children)

    kept = {
        name: value
        for name, value in element.attributes.items()
        if not _is_event_handler(name) and _is_allowed_attribute(name)
    }
    dropped = len(element.attributes) - len(kept)
    if dropped:
        logger.debug("Sanitize: stripped %d attribute(s) from <%s>", dropped, element.tag)
    return [SvgElement(tag=element.tag, attributes=kept, children=_clean_children(element.children))]


def sanitize(svg_text: str) -> str:
    """Strip disallowed elements and attributes instead of rejecting them.

    Removed elements are unwrapped so their children and text survive, except for
    script-like elements whose content goes with them. Malformed XML raises
    SvgSyntaxError; a document without <svg> raises NoRootElementError.
    """
    doc = parse_document(svg_text)
    nodes = _clean(doc.root)
    return "".join(escape(n) if isinstance(n, str) else serialize_element(n) for n in nodes)


def validate_and_sanitize(svg_text: str) -> CheckedSvg:
    """Accept clean SVG as is; otherwise sanitize it and re-validate the result.

    Input that still fails after sanitizing is refused with every remaining
    message joined by ``"; "``.
    """
    report = validate_full(svg_text)
    if report.valid:
        return CheckedSvg(svg=svg_text)

    try:
        cleaned = sanitize(svg_text)
    except SvgError:
        logger.debug("Sanitize: input cannot be repaired (%s)", report.error_message)
        return CheckedSvg(error=report.error_message)

    recheck = validate_full(cleaned)
    if not recheck.valid:
        return CheckedSvg(error=recheck.error_message)
    logger.info("Sanitized SVG: removed %d violation(s)", len(report.issues))
    return CheckedSvg(svg=cleaned)


def parse_and_validate(svg_text: str) -> CheckedSvg:
    """Validate and extract the viewBox; an SVG without a usable viewBox is refused."""
    issue = validate(svg_text)
    if issue is not None:
        return CheckedSvg(error=issue.message)
    viewbox = parse_document(svg_text).viewbox
    if viewbox is None:
        return CheckedSvg(error="SVG has no valid viewBox")
    return CheckedSvg(svg=svg_text, viewbox=viewbox)
