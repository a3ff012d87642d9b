"""Segmentation pipeline stages.

Each stage is a plain function that takes immutable snapshots (tuples of
frozen domain objects) and returns new ones. Strokes are referred to by their
index in the caller's stroke list throughout.

Stages, in pipeline order:
    bounds: Per-stroke boxes and the character size estimate.
    lasso: Ray-casting containment and last-lasso-wins group resolution.
    hull: Convex hulls of protected groups.
    dividers: Column/row gap search, forced group dividers, column
        assignment.
    uniformity: Split/merge size correction and column/row balancing.
    cells: Row bands per column and the resulting non-empty cells.
    assembly: Character slots and annotated strokes/lassos.

Example usage:
    Protected groups for a set of strokes::

        from stroke_segmenter.analysis import build_protected_hulls, resolve_protected_groups

        groups = resolve_protected_groups(strokes, polygons, threshold=0.5)
        groups = build_protected_hulls(groups, strokes)
"""

from .assembly import annotate_lassos, annotate_strokes, build_character_slots
from .bounds import compute_stroke_bounds, content_bounds, estimate_char_size
from .cells import build_cell_grid
from .dividers import (
    assign_columns,
    column_x_bounds,
    find_column_dividers,
    find_row_dividers,
    insert_column_group_dividers,
    insert_group_dividers,
    insert_row_group_dividers,
)
from .hull import build_protected_hulls, convex_hull
from .lasso import point_in_polygon, resolve_protected_groups, strokes_in_lasso
from .uniformity import (
    Layout,
    balance_columns,
    calculate_ratio,
    enforce_column_uniformity,
    enforce_row_uniformity,
    enforce_uniformity,
)

__all__ = [
    'compute_stroke_bounds', 'content_bounds', 'estimate_char_size',
    'point_in_polygon', 'strokes_in_lasso', 'resolve_protected_groups',
    'convex_hull', 'build_protected_hulls',
    'find_column_dividers', 'find_row_dividers', 'insert_group_dividers',
    'insert_column_group_dividers', 'insert_row_group_dividers',
    'assign_columns', 'column_x_bounds',
    'Layout', 'calculate_ratio', 'enforce_uniformity', 'enforce_column_uniformity',
    'enforce_row_uniformity', 'balance_columns',
    'build_cell_grid',
    'build_character_slots', 'annotate_strokes', 'annotate_lassos',
]
