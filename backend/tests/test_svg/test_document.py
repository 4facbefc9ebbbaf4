"""Tests for the SVG element tree."""

from __future__ import annotations

import pytest

from sashiko.svg.document import SvgElement, parse_document, serialize_document, serialize_element
from sashiko.svg.errors import NoRootElementError, SvgError, SvgSyntaxError
from sashiko.svg.viewbox import ViewBox
from tests.conftest import ASANOHA_TILE_SVG, MALFORMED_SVG, NOT_SVG


def test_parse_reads_viewbox():
    doc = parse_document('<svg viewBox="0 0 10 10"><line x1="1"/></svg>')
    assert doc.svg.tag == "svg"
    assert doc.viewbox == ViewBox(0, 0, 10, 10)


def test_missing_viewbox_is_not_an_error():
    doc = parse_document("<svg><line/></svg>")
    assert doc.viewbox is None


def test_malformed_raises_syntax_error():
    with pytest.raises(SvgSyntaxError) as exc_info:
        parse_document(MALFORMED_SVG)
    assert exc_info.value.kind == "syntax"


def test_no_svg_element():
    with pytest.raises(NoRootElementError):
        parse_document(NOT_SVG)


def test_errors_share_base_class():
    assert issubclass(SvgSyntaxError, SvgError)
    assert issubclass(NoRootElementError, SvgError)


def test_svg_nested_below_document_element():
    doc = parse_document('<doc><svg viewBox="0 0 4 4"/></doc>')
    assert doc.root.tag == "doc"
    assert doc.svg.tag == "svg"
    assert doc.viewbox == ViewBox(0, 0, 4, 4)


@pytest.mark.parametrize(
    "text",
    [
        '<svg viewBox="0 0 10 10"><line x1="1" y1="2"/></svg>',
        '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 10 10"><g><path d="M0 0 L1 1"/></g></svg>',
        "<svg><g>a<line/>b</g>tail</svg>",
        '<svg id="a&amp;b"><rect width="1"/></svg>',
    ],
)
def test_serialize_round_trip(text):
    assert serialize_document(parse_document(text)) == text


def test_iter_is_document_order():
    doc = parse_document(ASANOHA_TILE_SVG)
    assert [el.tag for el in doc.svg.iter()] == ["svg", "g", "path", "polygon", "circle"]
    assert [el.tag for el in doc.svg.descendants()] == ["g", "path", "polygon", "circle"]


def test_find_first():
    doc = parse_document(ASANOHA_TILE_SVG)
    assert doc.svg.find_first("polygon").get("fill") == "none"
    assert doc.svg.find_first("rect") is None


def test_element_editing():
    el = SvgElement("line", {"x1": "0"})
    el.set("x2", "5")
    el.remove("x1")
    el.remove("missing")
    assert serialize_element(el) == '<line x2="5"/>'


def test_text_content_and_escaping():
    el = SvgElement("g", children=["a < b", SvgElement("line"), "!"])
    assert el.text_content == "a < b!"
    assert serialize_element(el) == "<g>a &lt; b<line/>!</g>"
