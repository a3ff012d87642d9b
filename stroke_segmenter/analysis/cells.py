"""Turn final dividers into non-empty grid cells."""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from ..config import CELL_PADDING
from ..domain.geometry import BBox, StrokeBounds
from ..domain.grid import GridCell
from .dividers import Columns, RowDividers

logger = logging.getLogger(__name__)


def row_bands(top: float, bottom: float, row_dividers) -> List[Tuple[float, float]]:
    """(top, bottom) of every row band in a column, outer edges padded."""
    ys = sorted(d.intercept for d in row_dividers)
    edges = [top - CELL_PADDING] + ys + [bottom + CELL_PADDING]
    return list(zip(edges, edges[1:]))


def build_cell_grid(
    columns: Columns,
    all_bounds: Sequence[StrokeBounds],
    row_dividers: RowDividers,
) -> Tuple[GridCell, ...]:
    """Partition each column's strokes into row cells.

    A stroke goes to the first band (top to bottom) whose closed range holds
    its center Y, so a stroke centred exactly on a divider lands in the upper
    band only. Bands with no strokes produce no cell.

    Args:
        columns: Stroke indices per Japanese column.
        all_bounds: Bounds of every input stroke, indexed by stroke index.
        row_dividers: Row dividers per column.

    Returns:
        Cells ordered by column then row. Row numbers count every band, so a
        column may skip rows whose band was empty.
    """
    cells: List[GridCell] = []

    for column, members in enumerate(columns):
        if not members:
            continue

        column_box = BBox.enclosing(all_bounds[i].bbox for i in members)
        bands = row_bands(column_box.y_min, column_box.y_max, row_dividers[column])
        placed: List[List[int]] = [[] for _ in bands]

        for i in members:
            center_y = all_bounds[i].center_y
            for row, (top, bottom) in enumerate(bands):
                if top <= center_y <= bottom:
                    placed[row].append(i)
                    break

        for row, indices in enumerate(placed):
            if not indices:
                continue
            bbox = BBox.enclosing(all_bounds[i].bbox for i in indices)
            cells.append(GridCell(column, row, tuple(indices), bbox))

    logger.debug("cell grid: %d cells over %d columns", len(cells), len(columns))
    return tuple(cells)
