"""
Parsers for grid track templates and named-area templates.

Both parsers are total: malformed input never raises, it falls back to a
single weight-1 track or to no areas at all.
"""

from __future__ import annotations

import math
import re

from collage_layout.constants import EMPTY_AREA_TOKEN, MAX_REPEAT_TRACKS
from collage_layout.type_defs import GridAreaBounds

_REPEAT_RE = re.compile(r"repeat\(\s*(\d+)\s*,\s*([^)]*)\)", re.IGNORECASE)
_FR_TOKEN_RE = re.compile(r"(\d*\.?\d*)fr\b", re.IGNORECASE)
_QUOTED_ROW_RE = re.compile(r"\"[^\"]+\"|'[^']+'")


def _fr_weight(number_text: str) -> float:
    """Weight of one ``Xfr`` token; bare or unusable numbers count as 1."""
    try:
        value = float(number_text)
    except ValueError:
        return 1.0
    if not math.isfinite(value) or value <= 0:
        return 1.0
    return value


def _repeat_weight(track_text: str) -> float:
    match = _FR_TOKEN_RE.fullmatch(track_text.strip())
    if match is None:
        return 1.0
    return _fr_weight(match.group(1))


def _repeat_count(digits: str) -> int:
    """Repeat count clamped to ``[1, MAX_REPEAT_TRACKS]``."""
    if len(digits.lstrip("0")) > len(str(MAX_REPEAT_TRACKS)):
        return MAX_REPEAT_TRACKS
    return min(MAX_REPEAT_TRACKS, max(1, int(digits)))


def match_track_weights(template: object) -> list[float] | None:
    """
    Return the weights declared by ``template`` or None if unparseable.

    ``repeat(N, Xfr)`` wins over bare ``fr`` tokens when both appear. N is
    capped at ``MAX_REPEAT_TRACKS``.
    """
    if not isinstance(template, str):
        return None
    normalized = template.strip()
    if not normalized:
        return None

    repeat = _REPEAT_RE.search(normalized)
    if repeat is not None:
        count = _repeat_count(repeat.group(1))
        return [_repeat_weight(repeat.group(2))] * count

    tokens = _FR_TOKEN_RE.findall(normalized)
    if not tokens:
        return None
    return [_fr_weight(token) for token in tokens]


def parse_track_sizes(template: object, fallback_count: int = 1) -> list[float]:
    """
    Parse a grid column or row template into relative weights.

    Examples:
        ``"repeat(3, 1fr)"`` -> ``[1.0, 1.0, 1.0]``
        ``"2fr 1fr"`` -> ``[2.0, 1.0]``
        ``""`` with ``fallback_count=4`` -> ``[1.0, 1.0, 1.0, 1.0]``

    The result always holds at least one strictly positive weight.
    """
    weights = match_track_weights(template)
    if weights is None:
        return [1.0] * max(1, fallback_count)
    return weights


def _area_rows(template: str) -> list[list[str]]:
    raw = template.strip()
    quoted = _QUOTED_ROW_RE.findall(raw)
    if quoted:
        rows = [row[1:-1] for row in quoted]
    else:
        rows = [raw.replace('"', "").replace("'", "")]
    return [row.split() for row in rows if row.strip()]


def parse_grid_template_areas(template: object) -> dict[str, GridAreaBounds]:
    """
    Parse a named-area template into per-name cell bounds.

    Accepts quoted rows (``"a b" "a c"``) or a single unquoted row. Every
    token other than ``.`` grows the bounding box of its name, so
    non-rectangular or ragged declarations still produce a box.
    """
    if not isinstance(template, str) or not template.strip():
        return {}

    areas: dict[str, GridAreaBounds] = {}
    for row_index, row in enumerate(_area_rows(template)):
        for col_index, name in enumerate(row):
            if name == EMPTY_AREA_TOKEN:
                continue
            current = areas.get(name)
            if current is None:
                areas[name] = GridAreaBounds(
                    row_start=row_index,
                    row_end=row_index,
                    col_start=col_index,
                    col_end=col_index,
                )
            else:
                areas[name] = current.include(row_index, col_index)
    return areas
