"""Divider, protected-group and grid-cell value objects.

These are the intermediate snapshots passed between pipeline stages. Every
stage receives tuples of these frozen objects and returns new tuples, so no
stage can disturb another stage's view of the layout.

The module provides the following classes:
    DividerLine: Axis-aligned boundary between two columns or two rows.
    ProtectedGroup: Strokes owned by one lasso, plus the convex hull of their ink.
    GridCell: Non-empty candidate character region.
    SegmentationGrid: Final dividers and cells with layout diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .geometry import Axis, BBox, Vertex


@dataclass(frozen=True)
class DividerLine:
    """A dividing line between columns or rows.

    Column dividers are ``x = slope * y + intercept`` and span ``start..end``
    on Y. Row dividers are ``y = slope * x + intercept`` and span
    ``start..end`` on X. Dividers are always axis-aligned, so ``slope`` is 0.

    Attributes:
        intercept: Position on the divided axis.
        start: Start of the span on the perpendicular axis.
        end: End of the span on the perpendicular axis.
        mandatory: Forced separator between two protected groups; uniformity
            merging and column balancing never remove it.
        slope: Always 0.0; kept so the line equation stays explicit.
    """
    intercept: float
    start: float
    end: float
    mandatory: bool = False
    slope: float = 0.0

    def as_mandatory(self) -> DividerLine:
        if self.mandatory:
            return self
        return DividerLine(self.intercept, self.start, self.end, True, self.slope)

    def to_dict(self) -> dict:
        return {
            'slope': self.slope,
            'intercept': self.intercept,
            'start': self.start,
            'end': self.end,
            'mandatory': self.mandatory,
        }


@dataclass(frozen=True)
class ProtectedGroup:
    """Strokes claimed by one lasso after overlap resolution.

    Attributes:
        lasso_index: Index of the owning lasso in the input.
        stroke_indices: Owned stroke indices, ascending.
        hull: Counter-clockwise convex hull of every point of the owned
            strokes. Empty until the hull builder has run.
    """
    lasso_index: int
    stroke_indices: Tuple[int, ...]
    hull: Tuple[Vertex, ...] = ()

    @property
    def is_degenerate(self) -> bool:
        """Hulls with fewer than 3 vertices never veto a divider."""
        return len(self.hull) < 3

    @property
    def hull_bbox(self) -> BBox:
        return BBox.from_points(self.hull)

    def splits(self, position: float, axis: Axis) -> bool:
        """Whether a divider at ``position`` on ``axis`` would bisect this group."""
        if self.is_degenerate:
            return False
        box = self.hull_bbox
        return box.low(axis) < position < box.high(axis)


@dataclass(frozen=True)
class GridCell:
    """One non-empty candidate character region.

    Attributes:
        column: Japanese column index (0 = rightmost).
        row: Row index within the column (0 = topmost).
        stroke_indices: Member strokes in input order.
        bbox: Tight box around the member strokes.
    """
    column: int
    row: int
    stroke_indices: Tuple[int, ...]
    bbox: BBox

    def to_dict(self) -> dict:
        return {
            'column': self.column,
            'row': self.row,
            'stroke_indices': list(self.stroke_indices),
            'bounds': self.bbox.to_dict(),
        }


@dataclass(frozen=True)
class SegmentationGrid:
    """Final layout of a segmentation run.

    Attributes:
        column_dividers: Vertical dividers, ascending by X.
        row_dividers: Horizontal dividers per Japanese column, ascending by Y.
        cells: Non-empty cells in reading order.
        columns: Number of columns (0 when there was nothing to segment).
        max_rows: Row count of the deepest column.
        estimated_char_width: Character width estimate used for column gaps.
        estimated_char_height: Character height estimate used for row gaps.
        hulls: Overlay polygon of each surviving protected group in lasso
            order: its convex hull, or the raw lasso when the hull is
            degenerate.
    """
    column_dividers: Tuple[DividerLine, ...] = ()
    row_dividers: Tuple[Tuple[DividerLine, ...], ...] = ()
    cells: Tuple[GridCell, ...] = ()
    columns: int = 0
    max_rows: int = 0
    estimated_char_width: float = 0.0
    estimated_char_height: float = 0.0
    hulls: Tuple[Tuple[Vertex, ...], ...] = ()

    @property
    def has_dividers(self) -> bool:
        return bool(self.column_dividers) or any(self.row_dividers)

    def to_dict(self) -> dict:
        return {
            'column_dividers': [d.to_dict() for d in self.column_dividers],
            'row_dividers': [[d.to_dict() for d in col] for col in self.row_dividers],
            'cells': [c.to_dict() for c in self.cells],
            'columns': self.columns,
            'max_rows': self.max_rows,
            'estimated_char_width': self.estimated_char_width,
            'estimated_char_height': self.estimated_char_height,
            'hulls': [[v.to_dict() for v in polygon] for polygon in self.hulls],
        }
