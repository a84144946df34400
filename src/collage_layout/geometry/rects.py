"""
Resolve layout configs into ordered pixel rectangles.

Three layout representations share one output contract:

- explicit ratio rectangles (user-dragged custom layouts),
- named grid areas,
- a sequential row-major fill of the grid tracks.

:func:`resolve_layout_strategy` decides which representation applies and
:func:`parse_grid_to_rects` turns it into :class:`PanelRect` values.
Nothing here raises for degenerate geometry; callers treat fewer rects
than requested panels as "not renderable yet".
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from operator import attrgetter
from typing import TYPE_CHECKING

from collage_layout.config_defaults import DEFAULT_MIN_RECT_SIZE_PX
from collage_layout.geometry.ordering import get_panel_order_index, panel_id_for
from collage_layout.geometry.parsing import parse_grid_template_areas
from collage_layout.geometry.tracks import TrackGrid
from collage_layout.logging_utils import logger
from collage_layout.type_defs import (
    LayoutConfig,
    PanelRect,
    RatioRect,
    clamp_rect_ratio,
)

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterable


@dataclass(frozen=True, slots=True)
class ExplicitRectsLayout:
    """Panels placed by ratio rectangles over the container interior."""

    panel_rects: tuple[RatioRect, ...]


@dataclass(frozen=True, slots=True)
class AreaLayout:
    """Panels placed on named grid areas, in ``areas`` order."""

    grid_template_columns: str | None
    grid_template_rows: str | None
    grid_template_areas: str
    areas: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class SequentialLayout:
    """Panels filling grid cells row by row."""

    grid_template_columns: str | None
    grid_template_rows: str | None


LayoutStrategy = ExplicitRectsLayout | AreaLayout | SequentialLayout


def resolve_grid_strategy(config: LayoutConfig) -> AreaLayout | SequentialLayout:
    """Pick between named areas and the sequential grid."""
    if config.areas and config.grid_template_areas:
        return AreaLayout(
            grid_template_columns=config.grid_template_columns,
            grid_template_rows=config.grid_template_rows,
            grid_template_areas=config.grid_template_areas,
            areas=config.areas,
        )
    return SequentialLayout(
        grid_template_columns=config.grid_template_columns,
        grid_template_rows=config.grid_template_rows,
    )


def resolve_layout_strategy(config: LayoutConfig) -> LayoutStrategy:
    """Return the highest-priority representation present in ``config``."""
    if config.panel_rects:
        return ExplicitRectsLayout(panel_rects=config.panel_rects)
    return resolve_grid_strategy(config)


def _as_float(value: object, default: float = 0.0) -> float:
    if isinstance(value, bool):
        return default
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def _as_panel_count(value: object) -> int:
    count = _as_float(value, 1.0)
    return max(1, int(count))


@dataclass(frozen=True, slots=True)
class _Interior:
    left: float
    top: float
    right: float
    bottom: float

    @classmethod
    def of(cls, width: float, height: float, inset: float) -> _Interior:
        right = max(inset + 1, width - inset)
        bottom = max(inset + 1, height - inset)
        return cls(left=inset, top=inset, right=right, bottom=bottom)

    @property
    def width(self) -> float:
        return max(1.0, self.right - self.left)

    @property
    def height(self) -> float:
        return max(1.0, self.bottom - self.top)


def _explicit_rects(  # noqa: PLR0913
    layout: ExplicitRectsLayout,
    width: float,
    height: float,
    panel_count: int,
    border: float,
    min_size: float,
) -> list[PanelRect]:
    interior = _Interior.of(width, height, border)
    rects: list[PanelRect] = []
    for fallback_index, ratio in enumerate(layout.panel_rects[:panel_count]):
        panel_id = ratio.panel_id or panel_id_for(fallback_index)
        left = interior.left + ratio.x * interior.width
        top = interior.top + ratio.y * interior.height
        right = min(
            interior.right,
            max(interior.left,
                interior.left + (ratio.x + ratio.width) * interior.width),
        )
        bottom = min(
            interior.bottom,
            max(interior.top,
                interior.top + (ratio.y + ratio.height) * interior.height),
        )
        rect_w = right - left
        rect_h = bottom - top
        if rect_w <= min_size or rect_h <= min_size:
            logger.debug(
                "Dropping %s: %.3fx%.3f px is below the %.3f px minimum",
                panel_id, rect_w, rect_h, min_size,
            )
            continue
        rects.append(PanelRect(
            x=left,
            y=top,
            width=rect_w,
            height=rect_h,
            panel_id=panel_id,
            index=get_panel_order_index(ratio, fallback_index),
        ))
    return sorted(rects, key=attrgetter("index"))


def _keep_visible(rects: Iterable[PanelRect], min_size: float) -> list[PanelRect]:
    visible = []
    for rect in rects:
        if rect.width <= min_size or rect.height <= min_size:
            logger.debug(
                "Dropping %s: container too small (%.3fx%.3f px)",
                rect.panel_id, rect.width, rect.height,
            )
            continue
        visible.append(rect)
    return visible


def _area_rects(
    layout: AreaLayout,
    grid: TrackGrid,
    panel_count: int,
) -> list[PanelRect]:
    bounds_by_name = parse_grid_template_areas(layout.grid_template_areas)
    rects: list[PanelRect] = []
    for index, name in enumerate(layout.areas[:panel_count]):
        bounds = bounds_by_name.get(name)
        if bounds is None:
            logger.debug(
                "Area %r for %s is not declared in the template, skipping",
                name, panel_id_for(index),
            )
            continue
        span = (bounds.col_start, bounds.col_end,
                bounds.row_start, bounds.row_end)
        x, y, w, h = grid.clipped_box(*span)
        _, _, full_w, full_h = grid.cell_box(*span)
        if not (math.isclose(w, full_w) and math.isclose(h, full_h)):
            logger.debug(
                "Area %r for %s spans undeclared tracks, clipped to "
                "%.3fx%.3f px",
                name, panel_id_for(index), w, h,
            )
        rects.append(PanelRect(x, y, w, h, panel_id_for(index), index))
    return rects


def _sequential_rects(
    grid: TrackGrid,
    panel_count: int,
    *,
    limit_to_grid_cells: bool,
) -> list[PanelRect]:
    count = panel_count
    if limit_to_grid_cells:
        count = min(panel_count, grid.columns * grid.rows)
    rects: list[PanelRect] = []
    for i in range(count):
        col = i % grid.columns
        row = i // grid.columns
        x, y, w, h = grid.cell_box(col, col, row, row)
        rects.append(PanelRect(x, y, w, h, panel_id_for(i), i))
    return rects


def parse_grid_to_rects(  # noqa: PLR0913
    layout_config: LayoutConfig | object | None,
    container_width: float,
    container_height: float,
    panel_count: int,
    border_pixels: float,
    *,
    min_rect_size_px: float = DEFAULT_MIN_RECT_SIZE_PX,
    limit_sequential_to_grid_cells: bool = False,
) -> list[PanelRect]:
    """
    Build ordered pixel rectangles for a layout inside a container.

    ``layout_config`` may be a :class:`LayoutConfig`, a persisted mapping
    or None. Explicit ratio rectangles take precedence over named areas,
    which take precedence over the sequential grid. When every explicit
    rectangle collapses below ``min_rect_size_px`` the grid tiers are used
    instead.

    Returns at most ``panel_count`` rects in ascending ``index``. Each has
    a width and height above ``min_rect_size_px``; degenerate containers
    yield fewer rects, never an exception.
    """
    config = LayoutConfig.from_mapping(layout_config)
    width = _as_float(container_width)
    height = _as_float(container_height)
    count = _as_panel_count(panel_count)
    border = max(0.0, _as_float(border_pixels))
    min_size = max(0.0, _as_float(min_rect_size_px, DEFAULT_MIN_RECT_SIZE_PX))

    strategy = resolve_layout_strategy(config)
    if isinstance(strategy, ExplicitRectsLayout):
        rects = _explicit_rects(strategy, width, height, count, border,
                                min_size)
        if rects:
            return rects
        logger.debug("No explicit panel rect survived, using the grid")
        strategy = resolve_grid_strategy(config)

    grid = TrackGrid.from_templates(
        strategy.grid_template_columns,
        strategy.grid_template_rows,
        width,
        height,
        border,
    )
    if isinstance(strategy, AreaLayout):
        rects = _area_rects(strategy, grid, count)
    else:
        rects = _sequential_rects(
            grid, count,
            limit_to_grid_cells=limit_sequential_to_grid_cells,
        )
    return _keep_visible(rects, min_size)


def rects_to_ratio_layout(
    rects: Iterable[PanelRect],
    container_width: float,
    container_height: float,
    border_pixels: float,
) -> LayoutConfig:
    """
    Capture pixel rects as a resolution-independent custom layout.

    Ratios are relative to the container interior (inset by the border),
    the same frame :func:`parse_grid_to_rects` interpolates into, so the
    returned layout reproduces ``rects`` at the same container size and
    scales proportionally at any other.
    """
    interior = _Interior.of(
        _as_float(container_width),
        _as_float(container_height),
        max(0.0, _as_float(border_pixels)),
    )
    ratios = tuple(
        RatioRect(
            x=clamp_rect_ratio((rect.x - interior.left) / interior.width),
            y=clamp_rect_ratio((rect.y - interior.top) / interior.height),
            width=clamp_rect_ratio(rect.width / interior.width),
            height=clamp_rect_ratio(rect.height / interior.height),
            panel_id=rect.panel_id,
            index=rect.index,
        )
        for rect in sorted(rects, key=attrgetter("index"))
    )
    return LayoutConfig(panel_rects=ratios)
