"""Tests for unit conversion."""

from __future__ import annotations

import pytest

from sashiko.utils.units import (
    convert,
    format_with_unit,
    inches_to_mm,
    mm_to_inches,
    mm_to_points,
    parse_value_with_unit,
    points_to_mm,
    round_to_decimals,
)


def test_inch_is_72_points():
    assert mm_to_points(25.4) == pytest.approx(72.0)
    assert points_to_mm(72.0) == pytest.approx(25.4)


def test_mm_inches():
    assert mm_to_inches(50.8) == pytest.approx(2.0)
    assert inches_to_mm(1.5) == pytest.approx(38.1)


def test_convert():
    assert convert(25.4, "mm", "in") == pytest.approx(1.0)
    assert convert(2, "in", "mm") == pytest.approx(50.8)
    assert convert(7, "mm", "mm") == 7


@pytest.mark.parametrize(
    "text,expected",
    [
        ("2in", 50.8),
        ('1.5"', 38.1),
        ("3 inches", 76.2),
        ("5 mm", 5.0),
        ("12millimeters", 12.0),
        ("7", 7.0),
    ],
)
def test_parse_value_with_unit(text, expected):
    assert parse_value_with_unit(text) == pytest.approx(expected)


def test_parse_bare_number_in_default_inches():
    assert parse_value_with_unit("3", default_unit="in") == pytest.approx(76.2)


def test_parse_rejects_garbage():
    assert parse_value_with_unit("abc") is None
    assert parse_value_with_unit("1.2.3in") is None


def test_format_with_unit():
    assert format_with_unit(2.54, "mm") == "2.5 mm"
    assert format_with_unit(1, "in", decimals=2) == "1.00 in"


def test_round_to_decimals():
    assert round_to_decimals(1.23456, 2) == pytest.approx(1.23)
    assert round_to_decimals(2.5, 0) == 3
