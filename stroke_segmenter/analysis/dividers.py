"""Column and row divider detection.

Segmentation runs in two passes over the same axis-generic machinery:

1. Column pass (X): sort strokes by center X, put a vertical divider in the
   middle of every gap that is wide enough, drop the ones that would bisect a
   protected hull, then force dividers between side-by-side protected groups.
2. Row pass (Y): within each column, the same search on Y, sized to the
   column's X range.

Columns are numbered in Japanese reading order: column 0 is the rightmost.

Example usage:
    Running the column pass by hand::

        from stroke_segmenter.analysis.dividers import (
            assign_columns, find_column_dividers, insert_column_group_dividers,
        )

        dividers = find_column_dividers(live_bounds, char_width, config, groups)
        dividers = insert_column_group_dividers(dividers, groups, live_bounds)
        columns = assign_columns(live_bounds, dividers)
"""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from ..config import (
    DIVIDER_PADDING,
    NEARBY_DIVIDER_TOLERANCE,
    SIDE_BY_SIDE_OVERLAP_RATIO,
    STACKED_OVERLAP_RATIO,
    SegmentationConfig,
)
from ..domain.geometry import Axis, BBox, StrokeBounds
from ..domain.grid import DividerLine, ProtectedGroup
from .bounds import content_bounds

logger = logging.getLogger(__name__)

Columns = Tuple[Tuple[int, ...], ...]
RowDividers = Tuple[Tuple[DividerLine, ...], ...]


def sort_dividers(dividers) -> Tuple[DividerLine, ...]:
    return tuple(sorted(dividers, key=lambda d: d.intercept))


def would_split_protected(position: float, axis: Axis, groups: Sequence[ProtectedGroup]) -> bool:
    """True if a divider at ``position`` falls strictly inside any protected hull."""
    return any(group.splits(position, axis) for group in groups)


def find_gap_dividers(
    bounds: Sequence[StrokeBounds],
    axis: Axis,
    min_gap: float,
    span: Tuple[float, float],
    groups: Sequence[ProtectedGroup],
) -> Tuple[DividerLine, ...]:
    """Dividers at the midpoint of every large enough gap along ``axis``.

    Strokes are ordered by their center on ``axis`` and each consecutive pair
    is compared: the gap runs from the first stroke's far edge to the second
    stroke's near edge.

    Args:
        bounds: Strokes to separate.
        axis: Axis the gaps are measured on.
        min_gap: Smallest gap that counts as a break.
        span: (start, end) of the new dividers on the perpendicular axis.
        groups: Protected groups whose hulls veto dividers.

    Returns:
        Dividers sorted by position.
    """
    if len(bounds) < 2:
        return ()

    ordered = sorted(bounds, key=lambda b: b.center(axis))
    dividers = []
    for current, following in zip(ordered, ordered[1:]):
        gap_start = current.high(axis)
        gap_end = following.low(axis)
        if gap_end - gap_start < min_gap:
            continue

        position = (gap_start + gap_end) / 2
        if would_split_protected(position, axis, groups):
            logger.debug("%s gap divider at %.1f vetoed by protected hull", axis.value, position)
            continue
        dividers.append(DividerLine(position, span[0], span[1]))

    return sort_dividers(dividers)


def find_column_dividers(
    bounds: Sequence[StrokeBounds],
    char_width: float,
    config: SegmentationConfig,
    groups: Sequence[ProtectedGroup],
) -> Tuple[DividerLine, ...]:
    """Column pass: vertical dividers spanning the full content height."""
    if len(bounds) < 2:
        return ()
    content = content_bounds(bounds)
    span = (content.y_min - DIVIDER_PADDING, content.y_max + DIVIDER_PADDING)
    dividers = find_gap_dividers(bounds, Axis.X, char_width * config.min_column_gap_ratio, span, groups)
    logger.debug("column pass: %d gap dividers", len(dividers))
    return dividers


def insert_group_dividers(
    dividers: Sequence[DividerLine],
    boxes: Sequence[BBox],
    axis: Axis,
    span: Tuple[float, float],
) -> Tuple[DividerLine, ...]:
    """Force dividers between adjacent protected groups.

    Boxes are ordered by their low edge on ``axis`` and each neighbouring pair
    is examined. A pair that overlaps on the perpendicular axis by more than
    30% of the smaller box sits side by side and always gets a divider.
    Otherwise a pair overlapping on ``axis`` by more than half of the smaller
    box is stacked and left to the orthogonal pass.

    The divider goes halfway between the first box's high edge and the second
    box's low edge. If an existing divider is already within tolerance of that
    spot, it is marked mandatory instead of adding a new one.

    Args:
        dividers: Current dividers on ``axis``.
        boxes: Extent of each protected group.
        axis: Axis being divided.
        span: (start, end) of new dividers on the perpendicular axis.

    Returns:
        Updated dividers sorted by position.
    """
    if len(boxes) < 2:
        return tuple(dividers)

    perp = axis.perpendicular
    ordered = sorted(boxes, key=lambda b: b.low(axis))
    result: List[DividerLine] = list(dividers)

    for current, following in zip(ordered, ordered[1:]):
        overlap = current.high(axis) - following.low(axis)
        smaller = min(current.extent(axis), following.extent(axis))

        perp_overlap = min(current.high(perp), following.high(perp)) - max(current.low(perp), following.low(perp))
        smaller_perp = min(current.extent(perp), following.extent(perp))
        side_by_side = smaller_perp > 0 and perp_overlap > smaller_perp * SIDE_BY_SIDE_OVERLAP_RATIO

        if smaller > 0 and overlap > smaller * STACKED_OVERLAP_RATIO and not side_by_side:
            continue

        boundary = (current.high(axis) + following.low(axis)) / 2
        nearby = [k for k, d in enumerate(result) if abs(d.intercept - boundary) < NEARBY_DIVIDER_TOLERANCE]
        if nearby:
            for k in nearby:
                result[k] = result[k].as_mandatory()
        else:
            logger.debug("forced %s group divider at %.1f", axis.value, boundary)
            result.append(DividerLine(boundary, span[0], span[1], mandatory=True))

    return sort_dividers(result)


def insert_column_group_dividers(
    dividers: Sequence[DividerLine],
    groups: Sequence[ProtectedGroup],
    bounds: Sequence[StrokeBounds],
) -> Tuple[DividerLine, ...]:
    """Column variant of ``insert_group_dividers``.

    Each group is measured by the extent of its owned strokes, so a group
    holding a single straight stroke or a dot still gets separated even
    though its hull is too thin to veto anything.
    """
    if len(groups) < 2:
        return tuple(dividers)
    by_index = {b.index: b.bbox for b in bounds}
    boxes = []
    for group in groups:
        owned = [by_index[i] for i in group.stroke_indices if i in by_index]
        if owned:
            boxes.append(BBox.enclosing(owned))
    if len(boxes) < 2:
        return tuple(dividers)
    content = content_bounds(bounds)
    span = (content.y_min - DIVIDER_PADDING, content.y_max + DIVIDER_PADDING)
    return insert_group_dividers(dividers, boxes, Axis.X, span)


def assign_columns(
    bounds: Sequence[StrokeBounds],
    column_dividers: Sequence[DividerLine],
) -> Columns:
    """Group stroke indices by column, in Japanese order.

    A stroke's physical column is the number of dividers strictly left of its
    center X; the physical order is then reversed so that the rightmost
    column is column 0.

    Returns:
        One tuple of stroke indices per column (possibly empty), strokes in
        input order.
    """
    positions = sorted(d.intercept for d in column_dividers)
    num_columns = len(positions) + 1
    columns: List[List[int]] = [[] for _ in range(num_columns)]

    for b in bounds:
        physical = sum(1 for x in positions if b.center_x > x)
        columns[num_columns - 1 - physical].append(b.index)

    return tuple(tuple(col) for col in columns)


def column_x_bounds(
    column: int,
    column_dividers: Sequence[DividerLine],
    num_columns: int,
    column_bounds: Sequence[StrokeBounds],
) -> Tuple[float, float]:
    """Physical X range of a Japanese column.

    Uses the dividers on either side where they exist and the column's own
    stroke extent on the open outer sides.
    """
    stroke_min = min(b.bbox.x_min for b in column_bounds)
    stroke_max = max(b.bbox.x_max for b in column_bounds)
    if not column_dividers:
        return stroke_min, stroke_max

    positions = sorted(d.intercept for d in column_dividers)
    physical = num_columns - 1 - column
    left = positions[physical - 1] if physical > 0 else stroke_min
    right = positions[physical] if physical < len(positions) else stroke_max
    return left, right


def row_span(
    column: int,
    column_dividers: Sequence[DividerLine],
    columns: Columns,
    all_bounds: Sequence[StrokeBounds],
) -> Tuple[float, float]:
    """Span of a row divider inside ``column``, padded past the column edges."""
    members = [all_bounds[i] for i in columns[column]]
    left, right = column_x_bounds(column, column_dividers, len(columns), members)
    return left - DIVIDER_PADDING, right + DIVIDER_PADDING


def find_row_dividers(
    columns: Columns,
    all_bounds: Sequence[StrokeBounds],
    column_dividers: Sequence[DividerLine],
    char_height: float,
    config: SegmentationConfig,
    groups: Sequence[ProtectedGroup],
) -> RowDividers:
    """Row pass: horizontal dividers for every column.

    Args:
        columns: Stroke indices per Japanese column.
        all_bounds: Bounds of every input stroke, indexed by stroke index.
        column_dividers: Final column dividers.
        char_height: Estimated character height.
        config: Resolved configuration.
        groups: Protected groups whose hulls veto dividers.

    Returns:
        One sorted tuple of dividers per column.
    """
    min_gap = char_height * config.min_row_gap_ratio
    rows = []
    for column, members in enumerate(columns):
        if len(members) < 2:
            rows.append(())
            continue
        span = row_span(column, column_dividers, columns, all_bounds)
        member_bounds = [all_bounds[i] for i in members]
        rows.append(find_gap_dividers(member_bounds, Axis.Y, min_gap, span, groups))
    return tuple(rows)


def insert_row_group_dividers(
    row_dividers: RowDividers,
    columns: Columns,
    all_bounds: Sequence[StrokeBounds],
    column_dividers: Sequence[DividerLine],
    groups: Sequence[ProtectedGroup],
) -> RowDividers:
    """Row variant of ``insert_group_dividers``, applied per column.

    Only groups with at least one stroke in the column take part, measured by
    the extent of those strokes alone.
    """
    if len(groups) < 2:
        return row_dividers

    result = []
    for column, (members, dividers) in enumerate(zip(columns, row_dividers)):
        if len(members) < 2:
            result.append(dividers)
            continue

        in_column = set(members)
        boxes = []
        for group in groups:
            owned = [all_bounds[i].bbox for i in group.stroke_indices if i in in_column]
            if owned:
                boxes.append(BBox.enclosing(owned))

        if len(boxes) < 2:
            result.append(dividers)
            continue

        span = row_span(column, column_dividers, columns, all_bounds)
        result.append(insert_group_dividers(dividers, boxes, Axis.Y, span))
    return tuple(result)
