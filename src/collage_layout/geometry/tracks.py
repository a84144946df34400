"""Track pixel math shared by the rect synthesizer and the summarizer."""

from __future__ import annotations

from dataclasses import dataclass

from collage_layout.geometry.parsing import parse_track_sizes


@dataclass(frozen=True, slots=True)
class TrackGrid:
    """
    Column and row tracks resolved against a container.

    Each track's pixel size is its weight times the per-unit size of its
    axis. The per-unit size is what remains of the container after the
    two outer borders and one border per internal gap, divided by the sum
    of weights. Tracks past the declared ones size as weight 1 so that
    ragged area templates and unbounded sequential layouts stay defined.
    """

    column_weights: tuple[float, ...]
    row_weights: tuple[float, ...]
    column_unit: float
    row_unit: float
    border: float
    width: float = 0.0
    height: float = 0.0

    @classmethod
    def from_templates(  # noqa: PLR0913
        cls,
        columns_template: object,
        rows_template: object,
        width: float,
        height: float,
        border: float,
    ) -> TrackGrid:
        """Parse both templates and size their tracks for the container."""
        column_weights = tuple(parse_track_sizes(columns_template, 1))
        row_weights = tuple(parse_track_sizes(rows_template, 1))
        return cls(
            column_weights=column_weights,
            row_weights=row_weights,
            column_unit=_unit_size(width, column_weights, border),
            row_unit=_unit_size(height, row_weights, border),
            border=border,
            width=width,
            height=height,
        )

    @property
    def columns(self) -> int:
        """Number of declared column tracks."""
        return len(self.column_weights)

    @property
    def rows(self) -> int:
        """Number of declared row tracks."""
        return len(self.row_weights)

    def column_px(self, col: int) -> float:
        """Pixel width of one column track."""
        return _track_weight(self.column_weights, col) * self.column_unit

    def row_px(self, row: int) -> float:
        """Pixel height of one row track."""
        return _track_weight(self.row_weights, row) * self.row_unit

    def span_width(self, col_start: int, col_end: int) -> float:
        """Width of inclusive columns, counting the gaps inside the span."""
        tracks = sum(self.column_px(c) for c in range(col_start, col_end + 1))
        return tracks + max(0, col_end - col_start) * self.border

    def span_height(self, row_start: int, row_end: int) -> float:
        """Height of inclusive rows, counting the gaps inside the span."""
        tracks = sum(self.row_px(r) for r in range(row_start, row_end + 1))
        return tracks + max(0, row_end - row_start) * self.border

    def column_offset(self, col: int) -> float:
        """Left edge of a column: outer border plus preceding tracks."""
        return self.border + sum(
            self.column_px(c) + self.border for c in range(col)
        )

    def row_offset(self, row: int) -> float:
        """Top edge of a row: outer border plus preceding tracks."""
        return self.border + sum(
            self.row_px(r) + self.border for r in range(row)
        )

    def cell_box(
        self,
        col_start: int,
        col_end: int,
        row_start: int,
        row_end: int,
    ) -> tuple[float, float, float, float]:
        """Return ``(x, y, width, height)`` for an inclusive cell span."""
        return (
            self.column_offset(col_start),
            self.row_offset(row_start),
            self.span_width(col_start, col_end),
            self.span_height(row_start, row_end),
        )

    def clipped_box(
        self,
        col_start: int,
        col_end: int,
        row_start: int,
        row_end: int,
    ) -> tuple[float, float, float, float]:
        """
        Like :meth:`cell_box`, but cut at the inner edge of the border.

        Spans over undeclared tracks can reach past the container; the
        returned width or height is then shortened, possibly to zero or
        below when the span starts outside.
        """
        x, y, w, h = self.cell_box(col_start, col_end, row_start, row_end)
        right = min(x + w, self.width - self.border)
        bottom = min(y + h, self.height - self.border)
        return x, y, right - x, bottom - y


def _track_weight(weights: tuple[float, ...], index: int) -> float:
    if 0 <= index < len(weights):
        return weights[index]
    return 1.0


def _unit_size(extent: float, weights: tuple[float, ...], border: float) -> float:
    available = extent - 2 * border
    gaps = max(0, len(weights) - 1) * border
    return (available - gaps) / sum(weights)
