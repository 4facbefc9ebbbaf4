"""Tests for the pattern bundle and export option models."""

from __future__ import annotations

from sashiko.models.export import PatternExportOptions
from sashiko.models.pattern import Pattern, create_empty_pattern, validate_pattern
from tests.conftest import LINE_TILE_SVG


def _pattern_data(**overrides) -> dict:
    data = {
        "id": "asanoha-basic",
        "name": "Asanoha",
        "author": "Anonymous",
        "tile": {"svg": LINE_TILE_SVG, "view_box": "0 0 10 10"},
    }
    data.update(overrides)
    return data


def test_valid_pattern():
    assert validate_pattern(_pattern_data()) == []
    pattern = Pattern.model_validate(_pattern_data())
    assert pattern.license == "CC BY 4.0"
    assert pattern.defaults.stitch_length_mm == 3.0


def test_id_must_be_kebab_case():
    errors = validate_pattern(_pattern_data(id="Asanoha Basic"))
    assert len(errors) == 1
    assert errors[0].startswith("id: ")


def test_bad_viewbox_reported_with_path():
    errors = validate_pattern(_pattern_data(tile={"svg": LINE_TILE_SVG, "view_box": "0 0 10"}))
    assert errors[0].startswith("tile.view_box: ")


def test_missing_fields():
    errors = validate_pattern({"id": "x"})
    fields = {e.split(":")[0] for e in errors}
    assert {"name", "author", "tile"} <= fields


def test_create_empty_pattern():
    pattern = create_empty_pattern("new-tile", "New tile")
    assert pattern.id == "new-tile"
    assert pattern.tile.view_box == "0 0 10 10"
    assert pattern.defaults.stitch_length_mm == 3.0
    assert pattern.defaults.gap_length_mm == 1.5
    assert pattern.defaults.stroke_width_mm == 0.6
    assert pattern.defaults.snap_grid_mm == 1.0
    assert pattern.created_at == pattern.updated_at != ""


def test_export_options_from_pattern():
    pattern = Pattern.model_validate(
        _pattern_data(defaults={"stitch_length_mm": 4, "gap_length_mm": 2, "stroke_width_mm": 1, "snap_grid_mm": 1})
    )
    options = PatternExportOptions.from_pattern(pattern, rows=3)
    assert options.svg_content == LINE_TILE_SVG
    assert options.stitch_length_mm == 4
    assert options.pattern_name == "Asanoha"
    assert options.rows == 3
    assert options.margin_mm == 10
