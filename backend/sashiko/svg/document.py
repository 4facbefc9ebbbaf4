"""SVG document model — an explicit element tree parsed from, and written back to, SVG text.

Every operation parses the tile string into a fresh tree, rewrites it and serializes
it again; the tree never outlives the call. Comments and processing instructions are
not part of the model and are dropped on round-trip.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Union
from xml.sax.saxutils import escape

from sashiko.svg.errors import NoRootElementError, SvgSyntaxError
from sashiko.svg.viewbox import ViewBox, parse_viewbox

logger = logging.getLogger(__name__)

_XML_NS = "http://www.w3.org/XML/1998/namespace"

# Leaf shapes the renderer and the styling operations touch.
SHAPE_TAGS = ("path", "line", "polyline", "polygon", "circle", "rect")
# Elements that carry a transform in the geometric operations.
DRAWABLE_TAGS = SHAPE_TAGS + ("g",)

_ATTR_ESCAPES = {'"': "&quot;", "\n": "&#10;", "\t": "&#9;"}


@dataclass
class SvgElement:
    """One element node: tag, ordered attributes, ordered children (elements or text)."""

    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[Union["SvgElement", str]] = field(default_factory=list)

    def get(self, name: str, default: str | None = None) -> str | None:
        return self.attributes.get(name, default)

    def set(self, name: str, value: str) -> None:
        self.attributes[name] = value

    def remove(self, name: str) -> None:
        self.attributes.pop(name, None)

    @property
    def element_children(self) -> list["SvgElement"]:
        return [c for c in self.children if isinstance(c, SvgElement)]

    @property
    def text_content(self) -> str:
        parts: list[str] = []
        for child in self.children:
            parts.append(child if isinstance(child, str) else child.text_content)
        return "".join(parts)

    def iter(self) -> Iterator["SvgElement"]:
        """Depth-first walk in document order, starting with this element."""
        yield self
        for child in self.children:
            if isinstance(child, SvgElement):
                yield from child.iter()

    def descendants(self) -> Iterator["SvgElement"]:
        it = self.iter()
        next(it)
        yield from it

    def find_first(self, tag: str) -> "SvgElement | None":
        for el in self.iter():
            if el.tag == tag:
                return el
        return None


@dataclass
class ParsedDocument:
    """Result of one parse: the document element, its first <svg>, and that svg's viewBox."""

    root: SvgElement
    svg: SvgElement
    viewbox: ViewBox | None = None


def _qualify(name: str, prefixes: dict[str, str]) -> str:
    """Turn ElementTree's ``{uri}local`` back into ``prefix:local``."""
    if not name.startswith("{"):
        return name
    uri, local = name[1:].split("}", 1)
    if uri == _XML_NS:
        return f"xml:{local}"
    prefix = prefixes.get(uri, "")
    return f"{prefix}:{local}" if prefix else local


def _build_tree(svg_text: str) -> SvgElement:
    parser = ET.XMLPullParser(events=("start-ns", "start", "end"))
    try:
        parser.feed(svg_text)
        parser.close()
        events = list(parser.read_events())
    except ET.ParseError as e:
        logger.debug("SVG parse failed: %s", e)
        raise SvgSyntaxError(f"Invalid SVG syntax: {e}") from e

    prefixes: dict[str, str] = {}
    pending_ns: list[tuple[str, str]] = []
    stack: list[tuple[ET.Element, SvgElement]] = []
    root: SvgElement | None = None

    for event, payload in events:
        if event == "start-ns":
            prefix, uri = payload
            prefixes.setdefault(uri, prefix)
            pending_ns.append((prefix, uri))
        elif event == "start":
            attrs = {("xmlns:" + p) if p else "xmlns": uri for p, uri in pending_ns}
            pending_ns = []
            for name, value in payload.attrib.items():
                attrs[_qualify(name, prefixes)] = value
            node = SvgElement(tag=_qualify(payload.tag, prefixes), attributes=attrs)
            if stack:
                stack[-1][1].children.append(node)
            else:
                root = node
            stack.append((payload, node))
        else:
            source, node = stack.pop()
            # Text and tails are complete only at the end event; interleave them now.
            element_nodes = node.children
            children: list[SvgElement | str] = [source.text] if source.text else []
            for child_source, child_node in zip(source, element_nodes):
                children.append(child_node)
                if child_source.tail:
                    children.append(child_source.tail)
            node.children = children

    if root is None:
        raise SvgSyntaxError("Invalid SVG syntax: empty document")
    return root


def parse_document(svg_text: str) -> ParsedDocument:
    """Parse SVG text into a ParsedDocument.

    Raises SvgSyntaxError for malformed XML and NoRootElementError when the
    document contains no <svg> element. A missing viewBox is not an error.
    """
    root = _build_tree(svg_text)
    svg = root.find_first("svg")
    if svg is None:
        raise NoRootElementError("No SVG element found")
    return ParsedDocument(root=root, svg=svg, viewbox=parse_viewbox(svg.get("viewBox")))


def serialize_element(element: SvgElement) -> str:
    attrs = "".join(f' {k}="{escape(v, _ATTR_ESCAPES)}"' for k, v in element.attributes.items())
    if not element.children:
        return f"<{element.tag}{attrs}/>"
    inner = "".join(
        escape(child) if isinstance(child, str) else serialize_element(child)
        for child in element.children
    )
    return f"<{element.tag}{attrs}>{inner}</{element.tag}>"


def serialize_document(doc: ParsedDocument) -> str:
    """Write the current tree state back to SVG text."""
    return serialize_element(doc.root)
