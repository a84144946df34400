"""Boundary check for untrusted, possibly legacy, stored layouts."""

from __future__ import annotations

from collage_layout.geometry.parsing import match_track_weights
from collage_layout.logging_utils import logger
from collage_layout.type_defs import LayoutConfig, field_value, finite_number

_SEQUENCE_RULES = (
    ("panelRects", "panel_rects"),
    ("areas",),
    ("items",),
)


def _required_panels(panel_count: object) -> int:
    count = finite_number(panel_count)
    return max(1, int(count or 1))


def _check(layout: object, panel_count: object) -> bool:
    if isinstance(layout, LayoutConfig):
        layout = layout.to_mapping()
    if layout is None or isinstance(layout, (str, bytes, int, float)):
        return False
    minimum = _required_panels(panel_count)

    for names in _SEQUENCE_RULES:
        value = field_value(layout, *names)
        if isinstance(value, (list, tuple)):
            return len(value) >= minimum

    columns = field_value(layout, "gridTemplateColumns",
                          "grid_template_columns")
    rows = field_value(layout, "gridTemplateRows", "grid_template_rows")
    if isinstance(columns, str) and isinstance(rows, str):
        column_count = len(match_track_weights(columns) or ())
        row_count = len(match_track_weights(rows) or ())
        return column_count * row_count >= minimum
    return False


def is_custom_layout_compatible(layout: object, panel_count: int) -> bool:
    """
    Decide whether a stored layout can host ``panel_count`` panels.

    The first matching rule wins: explicit ``panelRects``, then ``areas``,
    then ``items``, then the product of the column and row track counts.
    Unparseable track templates count as zero tracks. A malformed layout
    is reported as incompatible, never raised.
    """
    try:
        return _check(layout, panel_count)
    except Exception as exc:  # noqa: BLE001
        logger.debug("Treating malformed custom layout as incompatible: %s",
                     exc)
        return False
