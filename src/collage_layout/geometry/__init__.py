"""
Layout geometry split into parsers, track math, rect synthesis and checks.

The package exposes the most commonly used entry points directly so the
editor can import everything from one place.
"""

from __future__ import annotations

from . import dimensions, ordering, parsing, rects, tracks, validation
from .dimensions import (
    border_percent_to_pixels,
    compute_panel_dimensions_from_template,
    estimate_canvas_dimensions,
    panel_dimensions_from_rects,
    resolve_aspect_ratio,
)
from .ordering import get_panel_order_index, panel_id_for
from .parsing import parse_grid_template_areas, parse_track_sizes
from .rects import (
    AreaLayout,
    ExplicitRectsLayout,
    LayoutStrategy,
    SequentialLayout,
    parse_grid_to_rects,
    rects_to_ratio_layout,
    resolve_layout_strategy,
)
from .tracks import TrackGrid
from .validation import is_custom_layout_compatible

__all__ = [
    "AreaLayout",
    "ExplicitRectsLayout",
    "LayoutStrategy",
    "SequentialLayout",
    "TrackGrid",
    "border_percent_to_pixels",
    "compute_panel_dimensions_from_template",
    "dimensions",
    "estimate_canvas_dimensions",
    "get_panel_order_index",
    "is_custom_layout_compatible",
    "ordering",
    "panel_dimensions_from_rects",
    "panel_id_for",
    "parse_grid_template_areas",
    "parse_grid_to_rects",
    "parse_track_sizes",
    "parsing",
    "rects",
    "rects_to_ratio_layout",
    "resolve_aspect_ratio",
    "resolve_layout_strategy",
    "tracks",
    "validation",
]
