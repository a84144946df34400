"""
Panel size snapshots used as a "did the geometry change" reference.

Sizes only, no offsets. Templates come from an external catalogue, so
the template accessor is treated as untrusted: any failure yields an
empty snapshot instead of an exception.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from collage_layout.constants import (
    ASPECT_RATIO_PRESETS,
    MAX_ESTIMATED_CANVAS_WIDTH,
)
from collage_layout.geometry.ordering import panel_id_for
from collage_layout.geometry.parsing import parse_grid_template_areas
from collage_layout.geometry.rects import (
    AreaLayout,
    resolve_grid_strategy,
)
from collage_layout.geometry.tracks import TrackGrid
from collage_layout.logging_utils import logger
from collage_layout.type_defs import (
    LayoutConfig,
    PanelSize,
    field_value,
    finite_number,
)

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterable

    from collage_layout.type_defs import PanelRect


_ACCESSOR_NAMES = ("get_layout_config", "getLayoutConfig")


def border_percent_to_pixels(percent: float, canvas_width: float) -> int:
    """Convert a 0-100 border thickness percentage into whole pixels."""
    return round((percent / 100) * canvas_width)


def resolve_aspect_ratio(value: str | float) -> float:
    """
    Return a numeric width / height ratio.

    ``value`` is either a preset id such as ``"landscape"`` or a positive
    number.
    """
    if isinstance(value, str):
        try:
            return ASPECT_RATIO_PRESETS[value]
        except KeyError:
            choices = ", ".join(ASPECT_RATIO_PRESETS)
            msg = f"Unknown aspect ratio {value!r}, expected one of: {choices}"
            raise ValueError(msg) from None
    ratio = finite_number(value)
    if ratio is None or ratio <= 0:
        msg = f"Aspect ratio must be a positive number, got {value!r}"
        raise ValueError(msg)
    return ratio


def estimate_canvas_dimensions(
    aspect_ratio: str | float,
    max_width: float = MAX_ESTIMATED_CANVAS_WIDTH,
) -> tuple[float, float]:
    """Estimate a canvas size before any surface has been measured."""
    ratio = resolve_aspect_ratio(aspect_ratio)
    width = min(max_width, MAX_ESTIMATED_CANVAS_WIDTH)
    return width, width / ratio


def _layout_config_of(template: object) -> LayoutConfig | None:
    for name in _ACCESSOR_NAMES:
        accessor = field_value(template, name)
        if callable(accessor):
            break
    else:
        return None
    raw = accessor()
    if not raw:
        return None
    return LayoutConfig.from_mapping(raw)


def compute_panel_dimensions_from_template(
    template: object,
    canvas_width: float,
    canvas_height: float,
    border_thickness: float,
    panel_count: int,
) -> dict[str, PanelSize]:
    """
    Compute the size every panel of a template gets on a canvas.

    Args:
        template: Object or mapping exposing a ``get_layout_config`` or
            ``getLayoutConfig`` callable.
        canvas_width: Canvas width in pixels.
        canvas_height: Canvas height in pixels.
        border_thickness: Border thickness as a percentage (0-100) of the
            canvas width.
        panel_count: Number of panels to size.

    Returns:
        Mapping of panel id to size. Covers named areas and the
        sequential grid; explicit ratio layouts go through the full rect
        synthesizer instead. Empty when the inputs are unusable or the
        accessor fails.

    """
    width = finite_number(canvas_width)
    height = finite_number(canvas_height)
    if template is None or width is None or height is None:
        return {}

    try:
        config = _layout_config_of(template)
    except Exception as exc:  # noqa: BLE001
        logger.warning("Could not read layout config from template: %s", exc)
        return {}
    if config is None:
        return {}

    border = border_percent_to_pixels(
        finite_number(border_thickness) or 0.0, width)
    count = max(0, int(finite_number(panel_count) or 0))
    strategy = resolve_grid_strategy(config)
    grid = TrackGrid.from_templates(
        strategy.grid_template_columns,
        strategy.grid_template_rows,
        width,
        height,
        border,
    )

    dimensions: dict[str, PanelSize] = {}
    if isinstance(strategy, AreaLayout):
        bounds_by_name = parse_grid_template_areas(
            strategy.grid_template_areas)
        for index, name in enumerate(strategy.areas[:count]):
            bounds = bounds_by_name.get(name)
            if bounds is None:
                continue
            _, _, width_px, height_px = grid.clipped_box(
                bounds.col_start, bounds.col_end,
                bounds.row_start, bounds.row_end,
            )
            dimensions[panel_id_for(index)] = PanelSize(width_px, height_px)
    else:
        for i in range(count):
            col = i % grid.columns
            row = i // grid.columns
            dimensions[panel_id_for(i)] = PanelSize(
                grid.column_px(col), grid.row_px(row))

    return {
        panel_id: size
        for panel_id, size in dimensions.items()
        if size.width > 0 and size.height > 0
    }


def panel_dimensions_from_rects(
    rects: Iterable[PanelRect],
) -> dict[str, PanelSize]:
    """Snapshot synthesized rects as sizes keyed by panel id."""
    return {rect.panel_id: rect.size() for rect in rects}
