"""Tests for panel size snapshots and canvas helpers."""

from __future__ import annotations

import logging
from typing import Any

import pytest

from collage_layout.geometry.dimensions import (
    border_percent_to_pixels,
    compute_panel_dimensions_from_template,
    estimate_canvas_dimensions,
    panel_dimensions_from_rects,
    resolve_aspect_ratio,
)
from collage_layout.geometry.rects import parse_grid_to_rects
from collage_layout.type_defs import PanelRect, PanelSize


def _template(layout: Any) -> dict[str, Any]:
    return {"get_layout_config": lambda: layout}


class _CatalogueTemplate:
    def __init__(self, layout: dict[str, Any]) -> None:
        self._layout = layout

    def get_layout_config(self) -> dict[str, Any]:
        return self._layout


class TestBorderPercentToPixels:
    """Percentage borders are relative to the canvas width."""

    @pytest.mark.parametrize(("percent", "width", "expected"), [
        (5, 1200, 60),
        (0, 800, 0),
        (1.4, 100, 1),
        (100, 300, 300),
    ])
    def test_rounds_to_whole_pixels(
        self, percent: float, width: float, expected: int,
    ) -> None:
        assert border_percent_to_pixels(percent, width) == expected


class TestComputePanelDimensions:
    """Summarizing named-area and sequential templates."""

    def test_sequential_grid(self, two_by_two_layout: dict[str, Any]) -> None:
        dims = compute_panel_dimensions_from_template(
            _template(two_by_two_layout), 200, 100, 0, 4)
        assert dims == {
            f"panel-{i}": PanelSize(100, 50) for i in range(1, 5)
        }

    def test_percentage_border(
        self, two_by_two_layout: dict[str, Any],
    ) -> None:
        dims = compute_panel_dimensions_from_template(
            _template(two_by_two_layout), 200, 100, 5, 4)
        assert dims["panel-1"].width == pytest.approx(85)
        assert dims["panel-1"].height == pytest.approx(35)

    def test_named_areas(
        self, main_with_sidebar_layout: dict[str, Any],
    ) -> None:
        dims = compute_panel_dimensions_from_template(
            _template(main_with_sidebar_layout), 300, 200, 0, 3)
        assert dims == {
            "panel-1": PanelSize(200, 200),
            "panel-2": PanelSize(100, 100),
            "panel-3": PanelSize(100, 100),
        }

    @pytest.mark.parametrize("fixture_name", [
        "two_by_two_layout", "main_with_sidebar_layout",
    ])
    def test_agrees_with_rect_synthesis(
        self, fixture_name: str, request: pytest.FixtureRequest,
    ) -> None:
        layout = request.getfixturevalue(fixture_name)
        dims = compute_panel_dimensions_from_template(
            _template(layout), 640, 480, 2, 3)
        rects = parse_grid_to_rects(layout, 640, 480, 3,
                                    border_percent_to_pixels(2, 640))
        assert dims == {r.panel_id: r.size() for r in rects}

    def test_object_and_camel_case_accessors(
        self, two_by_two_layout: dict[str, Any],
    ) -> None:
        by_attr = compute_panel_dimensions_from_template(
            _CatalogueTemplate(two_by_two_layout), 200, 100, 0, 2)
        by_key = compute_panel_dimensions_from_template(
            {"getLayoutConfig": lambda: two_by_two_layout}, 200, 100, 0, 2)
        assert by_attr == by_key
        assert list(by_attr) == ["panel-1", "panel-2"]

    def test_unknown_area_is_left_out(
        self, main_with_sidebar_layout: dict[str, Any],
    ) -> None:
        layout = {**main_with_sidebar_layout, "areas": ["main", "nowhere"]}
        dims = compute_panel_dimensions_from_template(
            _template(layout), 300, 200, 0, 2)
        assert list(dims) == ["panel-1"]

    def test_camel_case_method_on_objects(
        self, two_by_two_layout: dict[str, Any],
    ) -> None:
        class LegacyTemplate:
            def getLayoutConfig(self) -> dict[str, Any]:  # noqa: N802
                return two_by_two_layout

        dims = compute_panel_dimensions_from_template(
            LegacyTemplate(), 200, 100, 0, 4)
        assert dims["panel-4"] == PanelSize(100, 50)

    def test_ragged_areas_are_clipped_like_rects(self) -> None:
        layout = {
            "gridTemplateColumns": "1fr 1fr",
            "gridTemplateRows": "1fr",
            "gridTemplateAreas": '"a b c" "d d d"',
            "areas": ["a", "b", "c", "d"],
        }
        dims = compute_panel_dimensions_from_template(
            _template(layout), 200, 100, 0, 4)
        rects = parse_grid_to_rects(layout, 200, 100, 4, 0)
        assert dims == {r.panel_id: r.size() for r in rects}
        assert list(dims) == ["panel-1", "panel-2"]

    def test_failing_accessor_gives_empty_snapshot(
        self, caplog: pytest.LogCaptureFixture,
    ) -> None:
        def broken() -> dict[str, Any]:
            msg = "catalogue offline"
            raise RuntimeError(msg)

        with caplog.at_level(logging.WARNING, logger="collage_layout"):
            dims = compute_panel_dimensions_from_template(
                {"get_layout_config": broken}, 200, 100, 0, 2)
        assert dims == {}
        assert "catalogue offline" in caplog.text

    @pytest.mark.parametrize(("template", "width", "height", "count"), [
        (None, 200, 100, 2),
        ({}, 200, 100, 2),
        ({"get_layout_config": "not callable"}, 200, 100, 2),
        ({"get_layout_config": lambda: None}, 200, 100, 2),
        ({"get_layout_config": lambda: {"gridTemplateColumns": "1fr"}},
         float("nan"), 100, 2),
        ({"get_layout_config": lambda: {"gridTemplateColumns": "1fr"}},
         200, 100, 0),
        ({"get_layout_config": lambda: {"gridTemplateColumns": "1fr"}},
         0, 100, 1),
    ])
    def test_unusable_input_gives_empty_snapshot(
        self, template: object, width: float, height: float, count: int,
    ) -> None:
        assert compute_panel_dimensions_from_template(
            template, width, height, 0, count) == {}


class TestAspectRatio:
    """Preset names and numeric ratios."""

    def test_presets_and_numbers(self) -> None:
        assert resolve_aspect_ratio("landscape") == pytest.approx(1.78)
        assert resolve_aspect_ratio("square") == 1.0
        assert resolve_aspect_ratio(1.5) == 1.5

    @pytest.mark.parametrize("value", ["wide", 0, -1.2, float("inf"), True])
    def test_rejects_unknown_or_non_positive(self, value: object) -> None:
        with pytest.raises(ValueError, match="[Aa]spect ratio"):
            resolve_aspect_ratio(value)  # type: ignore[arg-type]

    def test_story_preset_estimate(self) -> None:
        width, height = estimate_canvas_dimensions(0.5625)
        assert width == 1200  # noqa: PLR2004
        assert height == pytest.approx(2133.333, rel=1e-6)

    def test_estimate_is_capped(self) -> None:
        assert estimate_canvas_dimensions("square") == (1200, 1200)
        assert estimate_canvas_dimensions("square", 2400) == (1200, 1200)
        width, height = estimate_canvas_dimensions("landscape", 890)
        assert width == 890
        assert height == pytest.approx(500)


def test_panel_dimensions_from_rects() -> None:
    rects = [
        PanelRect(0, 0, 50, 100, "panel-1", 0),
        PanelRect(50, 0, 50, 100, "panel-2", 1),
    ]
    assert panel_dimensions_from_rects(rects) == {
        "panel-1": PanelSize(50, 100),
        "panel-2": PanelSize(50, 100),
    }
