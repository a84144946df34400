"""
Project load orchestration: rebuild the size snapshot, then rescale once.

Only the subset of a persisted project that affects geometry is modelled
here. Storage, images and captions belong to the editor.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from collage_layout.config_defaults import (
    DEFAULT_MIN_RECT_SIZE_PX,
    DEFAULT_SCALE_EPSILON,
)
from collage_layout.geometry.dimensions import (
    border_percent_to_pixels,
    compute_panel_dimensions_from_template,
    panel_dimensions_from_rects,
)
from collage_layout.geometry.rects import parse_grid_to_rects
from collage_layout.geometry.validation import is_custom_layout_compatible
from collage_layout.logging_utils import logger
from collage_layout.scaling import scale_transforms
from collage_layout.type_defs import (
    PanelSize,
    ScalingContext,
    field_value,
    finite_number,
)


def _panel_sizes(raw: object) -> dict[str, PanelSize] | None:
    if not isinstance(raw, Mapping):
        return None
    sizes = {}
    for panel_id, value in raw.items():
        size = PanelSize.from_mapping(value)
        if size is not None:
            sizes[str(panel_id)] = size
    return sizes


@dataclass(slots=True)
class ProjectSnapshot:
    """Geometry-relevant state of a saved collage project."""

    panel_transforms: Mapping[str, Any] = field(default_factory=dict)
    panel_count: int = 1
    custom_layout: Any = None
    border_thickness_percent: float = 0.0
    canvas_width: float | None = None
    canvas_height: float | None = None
    panel_dimensions: dict[str, PanelSize] | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ProjectSnapshot:
        """Read the persisted camelCase project record."""
        transforms = field_value(data, "panelTransforms", "panel_transforms")
        count = finite_number(field_value(data, "panelCount", "panel_count"))
        border = finite_number(
            field_value(data, "borderThickness", "border_thickness_percent"))
        return cls(
            panel_transforms=(
                dict(transforms) if isinstance(transforms, Mapping) else {}
            ),
            panel_count=max(1, int(count or 1)),
            custom_layout=field_value(data, "customLayout", "custom_layout"),
            border_thickness_percent=border or 0.0,
            canvas_width=finite_number(
                field_value(data, "canvasWidth", "canvas_width")),
            canvas_height=finite_number(
                field_value(data, "canvasHeight", "canvas_height")),
            panel_dimensions=_panel_sizes(
                field_value(data, "panelDimensions", "panel_dimensions")),
        )


def current_panel_dimensions(
    snapshot: ProjectSnapshot,
    template: object,
    canvas_width: float,
    canvas_height: float,
    *,
    min_rect_size_px: float = DEFAULT_MIN_RECT_SIZE_PX,
) -> dict[str, PanelSize]:
    """
    Size every panel on the current surface.

    A compatible custom layout goes through the full rect synthesizer,
    since the summarizer does not understand ratio rectangles. Everything
    else is summarized from the template.
    """
    if is_custom_layout_compatible(snapshot.custom_layout,
                                   snapshot.panel_count):
        border = border_percent_to_pixels(
            snapshot.border_thickness_percent, canvas_width)
        rects = parse_grid_to_rects(
            snapshot.custom_layout,
            canvas_width,
            canvas_height,
            snapshot.panel_count,
            border,
            min_rect_size_px=min_rect_size_px,
        )
        return panel_dimensions_from_rects(rects)
    return compute_panel_dimensions_from_template(
        template,
        canvas_width,
        canvas_height,
        snapshot.border_thickness_percent,
        snapshot.panel_count,
    )


def build_scaling_context(
    snapshot: ProjectSnapshot,
    canvas_width: float,
    canvas_height: float,
    current_dimensions: Mapping[str, PanelSize],
) -> ScalingContext:
    """Pair the saved sizes with the freshly measured ones."""
    return ScalingContext(
        current_canvas_width=canvas_width,
        current_canvas_height=canvas_height,
        current_panel_dimensions=current_dimensions,
        saved_canvas_width=snapshot.canvas_width,
        saved_canvas_height=snapshot.canvas_height,
        saved_panel_dimensions=snapshot.panel_dimensions,
    )


def rehydrate_transforms(  # noqa: PLR0913
    snapshot: ProjectSnapshot,
    template: object,
    canvas_width: float,
    canvas_height: float,
    *,
    min_rect_size_px: float = DEFAULT_MIN_RECT_SIZE_PX,
    epsilon: float = DEFAULT_SCALE_EPSILON,
) -> dict[str, Any]:
    """
    Return the transforms to use for a project reopened on a surface.

    Stored transforms are returned unchanged (as a new dict) when the
    geometry matches or when the project carries no size snapshot.
    """
    dimensions = current_panel_dimensions(
        snapshot, template, canvas_width, canvas_height,
        min_rect_size_px=min_rect_size_px,
    )
    context = build_scaling_context(
        snapshot, canvas_width, canvas_height, dimensions)
    scaled = scale_transforms(snapshot.panel_transforms, context,
                              epsilon=epsilon)
    if scaled is None:
        return dict(snapshot.panel_transforms)
    logger.info("Rescaled panel transforms for a %sx%s surface",
                canvas_width, canvas_height)
    return scaled
