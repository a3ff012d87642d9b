"""Cell-size uniformity and the column/row balance constraint.

Both corrections are bounded loops over immutable divider snapshots: each
iteration reads the current tuple of dividers and produces a new one.
Mandatory dividers (forced between protected groups) are never removed.
"""

from __future__ import annotations

import logging
import math
from typing import List, NamedTuple, Optional, Sequence, Tuple

from ..config import (
    DIVIDER_PADDING,
    MAX_BALANCE_ITERATIONS,
    MAX_UNIFORMITY_ITERATIONS,
    SegmentationConfig,
)
from ..domain.geometry import Axis, BBox, StrokeBounds
from ..domain.grid import DividerLine, ProtectedGroup
from .bounds import content_bounds
from .dividers import (
    Columns,
    RowDividers,
    assign_columns,
    find_row_dividers,
    insert_row_group_dividers,
    row_span,
    sort_dividers,
    would_split_protected,
)

logger = logging.getLogger(__name__)


class Layout(NamedTuple):
    """Column dividers, the strokes in each column and each column's row dividers."""

    column_dividers: Tuple[DividerLine, ...]
    columns: Columns
    row_dividers: RowDividers


def calculate_ratio(sizes: Sequence[float]) -> float:
    """Largest size over smallest size.

    One size or none is perfectly uniform (1.0). A non-positive minimum gives
    ``inf`` so that a repair is always attempted.
    """
    if len(sizes) <= 1:
        return 1.0
    smallest = min(sizes)
    if smallest <= 0:
        return math.inf
    return max(sizes) / smallest


def enforce_uniformity(
    dividers: Sequence[DividerLine],
    low: float,
    high: float,
    axis: Axis,
    span: Tuple[float, float],
    groups: Sequence[ProtectedGroup],
    max_size_ratio: float,
) -> Tuple[DividerLine, ...]:
    """Split or merge cells along one axis until their sizes are comparable.

    Cells run between consecutive boundaries ``[low, *dividers, high]``. While
    the largest/smallest ratio exceeds ``max_size_ratio`` the cheaper of these
    repairs is applied:

    - split: a new divider halfway across the largest cell, unless it would
      fall inside a protected hull;
    - merge: drop the divider on the left or right of the smallest cell,
      unless that divider is mandatory.

    A repair is only taken if it strictly lowers the ratio; candidates are
    compared in the order split, merge-left, merge-right so the first one wins
    ties. The loop stops after ``MAX_UNIFORMITY_ITERATIONS`` repairs.

    Args:
        dividers: Current dividers on ``axis``.
        low: Near content edge.
        high: Far content edge.
        axis: Axis being corrected.
        span: (start, end) of split dividers on the perpendicular axis.
        groups: Protected groups whose hulls veto splits.
        max_size_ratio: Largest acceptable ratio.

    Returns:
        New sorted divider tuple.
    """
    current = sort_dividers(dividers)

    for _ in range(MAX_UNIFORMITY_ITERATIONS):
        boundaries = [low] + [d.intercept for d in current] + [high]
        sizes = [b - a for a, b in zip(boundaries, boundaries[1:])]
        if len(sizes) <= 1:
            break

        ratio = calculate_ratio(sizes)
        if ratio <= max_size_ratio:
            break

        best_ratio = ratio
        split_at: Optional[float] = None
        remove_at: Optional[int] = None

        largest = sizes.index(max(sizes))
        candidate = (boundaries[largest] + boundaries[largest + 1]) / 2
        if not would_split_protected(candidate, axis, groups):
            half = sizes[largest] / 2
            split_ratio = calculate_ratio(sizes[:largest] + [half, half] + sizes[largest + 1:])
            if split_ratio < best_ratio:
                best_ratio = split_ratio
                split_at = candidate

        if current:
            smallest = sizes.index(min(sizes))
            # divider k separates cell k from cell k + 1
            for k in (smallest - 1, smallest):
                if not 0 <= k < len(current) or current[k].mandatory:
                    continue
                merged = sizes[:k] + [sizes[k] + sizes[k + 1]] + sizes[k + 2:]
                merge_ratio = calculate_ratio(merged)
                if merge_ratio < best_ratio:
                    best_ratio = merge_ratio
                    split_at = None
                    remove_at = k

        if remove_at is not None:
            logger.debug("%s uniformity: merge at %.1f (ratio %.2f -> %.2f)",
                         axis.value, current[remove_at].intercept, ratio, best_ratio)
            current = current[:remove_at] + current[remove_at + 1:]
        elif split_at is not None:
            logger.debug("%s uniformity: split at %.1f (ratio %.2f -> %.2f)",
                         axis.value, split_at, ratio, best_ratio)
            current = sort_dividers(current + (DividerLine(split_at, span[0], span[1]),))
        else:
            break
    else:
        logger.debug("%s uniformity: stopped after %d iterations", axis.value, MAX_UNIFORMITY_ITERATIONS)

    return current


def enforce_column_uniformity(
    column_dividers: Sequence[DividerLine],
    bounds: Sequence[StrokeBounds],
    groups: Sequence[ProtectedGroup],
    config: SegmentationConfig,
) -> Tuple[DividerLine, ...]:
    """Column widths across the content box."""
    if not bounds:
        return tuple(column_dividers)
    content = content_bounds(bounds)
    span = (content.y_min - DIVIDER_PADDING, content.y_max + DIVIDER_PADDING)
    return enforce_uniformity(column_dividers, content.x_min, content.x_max, Axis.X,
                              span, groups, config.max_size_ratio)


def enforce_row_uniformity(
    row_dividers: RowDividers,
    columns: Columns,
    all_bounds: Sequence[StrokeBounds],
    column_dividers: Sequence[DividerLine],
    groups: Sequence[ProtectedGroup],
    config: SegmentationConfig,
) -> RowDividers:
    """Row heights, independently within each column."""
    result = []
    for column, (members, dividers) in enumerate(zip(columns, row_dividers)):
        if not members:
            result.append(tuple(dividers))
            continue
        column_box = BBox.enclosing(all_bounds[i].bbox for i in members)
        span = row_span(column, column_dividers, columns, all_bounds)
        result.append(enforce_uniformity(dividers, column_box.y_min, column_box.y_max, Axis.Y,
                                         span, groups, config.max_size_ratio))
    return tuple(result)


def layout_rows(
    columns: Columns,
    all_bounds: Sequence[StrokeBounds],
    column_dividers: Sequence[DividerLine],
    char_height: float,
    groups: Sequence[ProtectedGroup],
    config: SegmentationConfig,
) -> RowDividers:
    """Row pass for a fixed set of columns: gaps, group dividers, uniformity."""
    rows = find_row_dividers(columns, all_bounds, column_dividers, char_height, config, groups)
    rows = insert_row_group_dividers(rows, columns, all_bounds, column_dividers, groups)
    return enforce_row_uniformity(rows, columns, all_bounds, column_dividers, groups, config)


def max_rows(row_dividers: RowDividers) -> int:
    return max((len(dividers) + 1 for dividers in row_dividers), default=1)


def balance_columns(
    layout: Layout,
    bounds: Sequence[StrokeBounds],
    all_bounds: Sequence[StrokeBounds],
    char_height: float,
    groups: Sequence[ProtectedGroup],
    config: SegmentationConfig,
) -> Layout:
    """Merge columns until there are no more columns than rows in the deepest one.

    Each iteration removes the non-mandatory column divider whose two
    neighbouring columns have the smallest combined width, then re-assigns
    columns and re-runs the row pass. Stops when the constraint holds, when
    only mandatory dividers remain, or after ``MAX_BALANCE_ITERATIONS``.

    Args:
        layout: Layout after the first row pass.
        bounds: Non-empty stroke bounds.
        all_bounds: Bounds of every input stroke, indexed by stroke index.
        char_height: Estimated character height.
        groups: Protected groups.
        config: Resolved configuration.

    Returns:
        The balanced layout (``layout`` itself if nothing had to change).
    """
    if not bounds:
        return layout

    content = content_bounds(bounds)

    for _ in range(MAX_BALANCE_ITERATIONS):
        dividers = sort_dividers(layout.column_dividers)
        num_columns = len(dividers) + 1
        if num_columns <= max_rows(layout.row_dividers):
            break

        boundaries = [content.x_min] + [d.intercept for d in dividers] + [content.x_max]
        removable: List[Tuple[float, int]] = [
            (boundaries[k + 2] - boundaries[k], k)
            for k, divider in enumerate(dividers)
            if not divider.mandatory
        ]
        if not removable:
            logger.debug("balance: only mandatory column dividers left")
            break

        # min() keeps the first index on equal widths
        combined, k = min(removable, key=lambda item: item[0])
        logger.debug("balance: %d columns > %d rows, removing divider at %.1f (width %.1f)",
                     num_columns, max_rows(layout.row_dividers), dividers[k].intercept, combined)

        column_dividers = dividers[:k] + dividers[k + 1:]
        columns = assign_columns(bounds, column_dividers)
        rows = layout_rows(columns, all_bounds, column_dividers, char_height, groups, config)
        layout = Layout(column_dividers, columns, rows)

    return layout
