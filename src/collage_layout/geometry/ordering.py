"""Canonical panel ordering shared by every layout tier."""

from __future__ import annotations

import re

from collage_layout.constants import PANEL_ID_PATTERN, PANEL_ID_PREFIX
from collage_layout.type_defs import field_value, finite_number

_PANEL_ID_RE = re.compile(PANEL_ID_PATTERN)


def panel_id_for(index: int) -> str:
    """Return the editor panel id for a zero-based position."""
    return f"{PANEL_ID_PREFIX}{index + 1}"


def get_panel_order_index(panel: object, fallback_index: int = 0) -> int:
    """
    Resolve the zero-based visual order of a panel.

    An explicit finite ``index`` wins. Otherwise a ``panel-<N>`` id with
    N >= 1 yields N - 1. Anything else, including ids like ``"bad"`` or
    ``"panel-0"``, returns ``fallback_index``. ``panel`` may be a mapping
    with persisted keys or an object with ``index``/``panel_id``.
    """
    explicit = finite_number(field_value(panel, "index"))
    if explicit is not None:
        return int(explicit)

    panel_id = field_value(panel, "panelId", "panel_id")
    if isinstance(panel_id, str):
        match = _PANEL_ID_RE.match(panel_id)
        if match is not None:
            number = int(match.group(1))
            if number >= 1:
                return number - 1
    return fallback_index
