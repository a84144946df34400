"""
Rescale stored pan offsets when the rendering surface changes size.

Strategy, most accurate first:

1. Panel level: saved and current per-panel sizes are both known, so
   every panel gets its own ratio. Needed for non-uniform grids where
   panels reflow at different rates.
2. Canvas level: only whole-canvas sizes were captured, so one ratio
   pair applies to every panel.
3. Nothing usable: return None and let the caller keep the stored
   transforms.

Zoom (``scale``) is never altered, only the pan offset.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from collage_layout.config_defaults import DEFAULT_SCALE_EPSILON
from collage_layout.logging_utils import logger
from collage_layout.type_defs import PanelSize, PanelTransform, finite_number

if TYPE_CHECKING:  # pragma: no cover
    from collage_layout.type_defs import ScalingContext


def _is_unchanged(scale_x: float, scale_y: float, epsilon: float) -> bool:
    return abs(scale_x - 1) < epsilon and abs(scale_y - 1) < epsilon


def _usable_size(value: object) -> PanelSize | None:
    size = PanelSize.from_mapping(value)
    if size is None or size.width <= 0 or size.height <= 0:
        return None
    return size


def _panel_ratio(
    panel_id: str,
    saved: Mapping[str, Any],
    current: Mapping[str, Any],
) -> tuple[float, float] | None:
    saved_size = _usable_size(saved.get(panel_id))
    current_size = _usable_size(current.get(panel_id))
    if saved_size is None or current_size is None:
        return None
    return (current_size.width / saved_size.width,
            current_size.height / saved_size.height)


def _canvas_ratio(context: ScalingContext) -> tuple[float, float] | None:
    sizes = [
        finite_number(context.saved_canvas_width),
        finite_number(context.saved_canvas_height),
        finite_number(context.current_canvas_width),
        finite_number(context.current_canvas_height),
    ]
    if any(not size for size in sizes):
        return None
    saved_w, saved_h, current_w, current_h = sizes
    return current_w / saved_w, current_h / saved_h  # type: ignore[operator]


def _is_transform(value: object) -> bool:
    return isinstance(value, (PanelTransform, Mapping))


def _shift(value: object, scale_x: float, scale_y: float) -> PanelTransform:
    transform = PanelTransform.from_mapping(value)
    return PanelTransform(
        scale=transform.scale,
        position_x=transform.position_x * scale_x,
        position_y=transform.position_y * scale_y,
    )


def _has_panel_dimensions(context: ScalingContext) -> bool:
    return bool(context.saved_panel_dimensions) and bool(
        context.current_panel_dimensions)


def scale_transforms(
    transforms: Mapping[str, Any] | None,
    context: ScalingContext,
    *,
    epsilon: float = DEFAULT_SCALE_EPSILON,
) -> dict[str, Any] | None:
    """
    Map stored transforms onto the current geometry.

    Args:
        transforms: Panel id to :class:`PanelTransform` (or its persisted
            mapping). Not mutated.
        context: Saved and current canvas/panel sizes.
        epsilon: Ratios closer than this to 1.0 count as unchanged.

    Returns:
        A new panel id to transform map when at least one offset moved,
        otherwise None. Every transform-shaped entry comes back as a
        :class:`PanelTransform`, moved or not; other values are passed
        through as given.

    """
    if not isinstance(transforms, Mapping):
        return None

    if _has_panel_dimensions(context):
        saved = context.saved_panel_dimensions or {}
        current = context.current_panel_dimensions
        scaled: dict[str, Any] = {}
        any_scaled = False
        for panel_id, transform in transforms.items():
            if not _is_transform(transform):
                scaled[panel_id] = transform
                continue
            ratio = _panel_ratio(panel_id, saved, current)
            if ratio is None or _is_unchanged(*ratio, epsilon):
                scaled[panel_id] = PanelTransform.from_mapping(transform)
                continue
            any_scaled = True
            scaled[panel_id] = _shift(transform, *ratio)
            logger.debug("Rescaled %s offsets by %.4f x %.4f",
                         panel_id, *ratio)
        return scaled if any_scaled else None

    ratio = _canvas_ratio(context)
    if ratio is None or _is_unchanged(*ratio, epsilon):
        return None
    logger.debug("Rescaling all offsets by canvas ratio %.4f x %.4f", *ratio)
    return {
        panel_id: _shift(transform, *ratio) if _is_transform(transform)
        else transform
        for panel_id, transform in transforms.items()
    }


def needs_scaling(
    context: ScalingContext,
    *,
    epsilon: float = DEFAULT_SCALE_EPSILON,
) -> bool:
    """Report whether any saved size differs from the current one."""
    if _has_panel_dimensions(context):
        saved = context.saved_panel_dimensions or {}
        current = context.current_panel_dimensions
        for panel_id in saved:
            ratio = _panel_ratio(panel_id, saved, current)
            if ratio is not None and not _is_unchanged(*ratio, epsilon):
                return True
        return False

    ratio = _canvas_ratio(context)
    return ratio is not None and not _is_unchanged(*ratio, epsilon)
