"""Public package exports for the collage layout engine."""

from __future__ import annotations

from .geometry import (
    compute_panel_dimensions_from_template,
    get_panel_order_index,
    is_custom_layout_compatible,
    parse_grid_template_areas,
    parse_grid_to_rects,
    parse_track_sizes,
)
from .scaling import needs_scaling, scale_transforms
from .type_defs import (
    GridAreaBounds,
    LayoutConfig,
    PanelRect,
    PanelSize,
    PanelTransform,
    RatioRect,
    ScalingContext,
)

__all__ = [
    "GridAreaBounds",
    "LayoutConfig",
    "PanelRect",
    "PanelSize",
    "PanelTransform",
    "RatioRect",
    "ScalingContext",
    "compute_panel_dimensions_from_template",
    "get_panel_order_index",
    "is_custom_layout_compatible",
    "needs_scaling",
    "parse_grid_template_areas",
    "parse_grid_to_rects",
    "parse_track_sizes",
    "scale_transforms",
]
