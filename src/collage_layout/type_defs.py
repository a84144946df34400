"""
Defines the shared value types for the collage layout engine.

Persisted layouts and transforms arrive as loosely shaped mappings with
camelCase keys. Each type offers a ``from_mapping`` adapter that never
raises, so legacy or malformed data degrades to safe defaults instead of
crashing the editor.
"""
from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

_MISSING = object()


def field_value(source: object, *names: str, default: Any = None) -> Any:
    """
    Read the first present field from a mapping or an object.

    Mappings are looked up by key, anything else by attribute. Names are
    tried in order so callers can pass both the persisted camelCase key
    and the Python attribute name.
    """
    if source is None:
        return default
    for name in names:
        if isinstance(source, Mapping):
            value = source.get(name, _MISSING)
        else:
            value = getattr(source, name, _MISSING)
        if value is not _MISSING:
            return value
    return default


def finite_number(value: object) -> float | None:
    """Return ``value`` as a float when it is a finite real number."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    number = float(value)
    return number if math.isfinite(number) else None


def clamp_rect_ratio(value: object) -> float:
    """Coerce a stored ratio into ``[0, 1]``; unusable values become 0."""
    try:
        numeric = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(numeric):
        return 0.0
    return min(1.0, max(0.0, numeric))


def _optional_str(value: object) -> str | None:
    return value if isinstance(value, str) else None


@dataclass(frozen=True, slots=True)
class GridAreaBounds:
    """Inclusive zero-based cell bounds of one named grid area."""

    row_start: int
    row_end: int
    col_start: int
    col_end: int

    def include(self, row: int, col: int) -> GridAreaBounds:
        """Return bounds grown to contain the cell at (row, col)."""
        return GridAreaBounds(
            row_start=min(self.row_start, row),
            row_end=max(self.row_end, row),
            col_start=min(self.col_start, col),
            col_end=max(self.col_end, col),
        )


@dataclass(frozen=True, slots=True)
class RatioRect:
    """Panel rectangle stored as fractions of the container interior."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    panel_id: str | None = None
    index: float | None = None

    @classmethod
    def from_mapping(cls, data: object) -> RatioRect:
        """Adapt a persisted ``panelRects`` entry, clamping every ratio."""
        return cls(
            x=clamp_rect_ratio(field_value(data, "x")),
            y=clamp_rect_ratio(field_value(data, "y")),
            width=clamp_rect_ratio(field_value(data, "width")),
            height=clamp_rect_ratio(field_value(data, "height")),
            panel_id=_optional_str(field_value(data, "panelId", "panel_id")),
            index=finite_number(field_value(data, "index")),
        )

    def to_mapping(self) -> dict[str, Any]:
        """Return the persisted camelCase shape."""
        data: dict[str, Any] = {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }
        if self.panel_id is not None:
            data["panelId"] = self.panel_id
        if self.index is not None:
            data["index"] = self.index
        return data


@dataclass(frozen=True, slots=True)
class LayoutConfig:
    """
    Declarative layout description.

    Precedence when several representations are present: explicit
    ``panel_rects``, then named ``areas``, then the sequential grid built
    from the track templates.
    """

    grid_template_columns: str | None = None
    grid_template_rows: str | None = None
    grid_template_areas: str | None = None
    areas: tuple[str, ...] | None = None
    panel_rects: tuple[RatioRect, ...] | None = None
    items: tuple[Any, ...] | None = None

    @classmethod
    def from_mapping(cls, data: object) -> LayoutConfig:
        """
        Adapt a template or persisted custom layout.

        Accepts camelCase or snake_case keys. Fields of the wrong type are
        ignored rather than rejected.
        """
        if isinstance(data, LayoutConfig):
            return data
        if data is None:
            return cls()

        areas = _sequence_field(data, "areas")
        panel_rects = _sequence_field(data, "panelRects", "panel_rects")
        items = _sequence_field(data, "items")
        return cls(
            grid_template_columns=_optional_str(
                field_value(data, "gridTemplateColumns",
                            "grid_template_columns"),
            ),
            grid_template_rows=_optional_str(
                field_value(data, "gridTemplateRows", "grid_template_rows"),
            ),
            grid_template_areas=_optional_str(
                field_value(data, "gridTemplateAreas", "grid_template_areas"),
            ),
            areas=(
                None if areas is None
                else tuple(a if isinstance(a, str) else "" for a in areas)
            ),
            panel_rects=(
                None if panel_rects is None
                else tuple(RatioRect.from_mapping(r) for r in panel_rects)
            ),
            items=None if items is None else tuple(items),
        )

    def to_mapping(self) -> dict[str, Any]:
        """Return the persisted camelCase shape, omitting unset fields."""
        data: dict[str, Any] = {}
        if self.grid_template_columns is not None:
            data["gridTemplateColumns"] = self.grid_template_columns
        if self.grid_template_rows is not None:
            data["gridTemplateRows"] = self.grid_template_rows
        if self.grid_template_areas is not None:
            data["gridTemplateAreas"] = self.grid_template_areas
        if self.areas is not None:
            data["areas"] = list(self.areas)
        if self.panel_rects is not None:
            data["panelRects"] = [r.to_mapping() for r in self.panel_rects]
        if self.items is not None:
            data["items"] = list(self.items)
        return data


def _sequence_field(data: object, *names: str) -> Sequence[Any] | None:
    value = field_value(data, *names)
    if isinstance(value, (list, tuple)):
        return value
    return None


@dataclass(frozen=True, slots=True)
class PanelRect:
    """Concrete pixel rectangle of one panel, origin at top left."""

    x: float
    y: float
    width: float
    height: float
    panel_id: str
    index: int

    @property
    def right(self) -> float:
        """Right edge."""
        return self.x + self.width

    @property
    def bottom(self) -> float:
        """Bottom edge."""
        return self.y + self.height

    def size(self) -> PanelSize:
        """Return the size without the offset."""
        return PanelSize(self.width, self.height)

    def to_mapping(self) -> dict[str, Any]:
        """Return the camelCase shape consumed by the editor."""
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "panelId": self.panel_id,
            "index": self.index,
        }


@dataclass(frozen=True, slots=True)
class PanelSize:
    """Width and height of a panel in pixels."""

    width: float
    height: float

    @classmethod
    def from_mapping(cls, data: object) -> PanelSize | None:
        """Return a size when both dimensions are finite numbers."""
        if isinstance(data, PanelSize):
            return data
        width = finite_number(field_value(data, "width"))
        height = finite_number(field_value(data, "height"))
        if width is None or height is None:
            return None
        return cls(width, height)

    def to_mapping(self) -> dict[str, float]:
        """Return ``{"width": ..., "height": ...}``."""
        return {"width": self.width, "height": self.height}


@dataclass(frozen=True, slots=True)
class PanelTransform:
    """Per-panel zoom and pan offset."""

    scale: float = 1.0
    position_x: float = 0.0
    position_y: float = 0.0

    @classmethod
    def from_mapping(cls, data: object) -> PanelTransform:
        """
        Adapt a persisted transform.

        Missing or zero values fall back to scale 1 and offset 0.
        """
        if isinstance(data, PanelTransform):
            return data
        scale = finite_number(field_value(data, "scale"))
        pos_x = finite_number(field_value(data, "positionX", "position_x"))
        pos_y = finite_number(field_value(data, "positionY", "position_y"))
        return cls(
            scale=scale or 1.0,
            position_x=pos_x or 0.0,
            position_y=pos_y or 0.0,
        )

    def to_mapping(self) -> dict[str, float]:
        """Return the persisted camelCase shape."""
        return {
            "scale": self.scale,
            "positionX": self.position_x,
            "positionY": self.position_y,
        }


@dataclass(frozen=True, slots=True)
class ScalingContext:
    """
    Saved versus current geometry used to rescale stored transforms.

    Saved values are optional because older projects did not capture
    them. Panel dimension maps may hold :class:`PanelSize` values or
    ``{"width", "height"}`` mappings.
    """

    current_canvas_width: float
    current_canvas_height: float
    current_panel_dimensions: Mapping[str, Any]
    saved_canvas_width: float | None = None
    saved_canvas_height: float | None = None
    saved_panel_dimensions: Mapping[str, Any] | None = None
