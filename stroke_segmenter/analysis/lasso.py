"""Lasso containment and protected-group resolution.

A lasso claims every stroke that has at least ``lasso_containment_threshold``
of its points inside the polygon. Lassos are resolved in drawing order and a
later lasso steals strokes from earlier ones, so each stroke ends up owned by
at most one group. Groups that lose all their strokes disappear, and lassos
that never claim anything never become groups.

Example usage:
    Resolving two overlapping lassos::

        from stroke_segmenter.analysis.lasso import resolve_protected_groups

        groups = resolve_protected_groups(strokes, [first.points, second.points], 0.5)
        for group in groups:
            print(group.lasso_index, group.stroke_indices)
"""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence, Tuple

import numpy as np

from ..domain.geometry import Stroke, Vertex
from ..domain.grid import ProtectedGroup

logger = logging.getLogger(__name__)


def points_in_polygon(xs: np.ndarray, ys: np.ndarray, polygon: Sequence[Vertex]) -> np.ndarray:
    """Ray-casting point-in-polygon test for many points at once.

    Casts a ray along +X from every point and toggles the inside flag on each
    edge crossing. Polygons with fewer than 3 vertices contain nothing.

    Args:
        xs: X coordinates of the test points.
        ys: Y coordinates of the test points.
        polygon: Polygon ring; the closing edge is implied.

    Returns:
        Boolean array, True where the point is inside.
    """
    inside = np.zeros(xs.shape, dtype=bool)
    if len(polygon) < 3:
        return inside

    j = len(polygon) - 1
    for i in range(len(polygon)):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y
        # crossing edges always have yi != yj, so the division below is safe
        crosses = (yi > ys) != (yj > ys)
        if crosses.any():
            x_cross = (xj - xi) * (ys[crosses] - yi) / (yj - yi) + xi
            hit = np.zeros(xs.shape, dtype=bool)
            hit[crosses] = xs[crosses] < x_cross
            inside ^= hit
        j = i
    return inside


def point_in_polygon(x: float, y: float, polygon: Sequence[Vertex]) -> bool:
    """Single-point form of ``points_in_polygon``."""
    return bool(points_in_polygon(np.array([x], dtype=float), np.array([y], dtype=float), polygon)[0])


def containment_fraction(stroke: Stroke, polygon: Sequence[Vertex]) -> float:
    """Fraction of the stroke's points inside ``polygon`` (0.0 for empty strokes)."""
    if not stroke:
        return 0.0
    xs = np.fromiter((p.x for p in stroke), dtype=float, count=len(stroke))
    ys = np.fromiter((p.y for p in stroke), dtype=float, count=len(stroke))
    return int(np.count_nonzero(points_in_polygon(xs, ys, polygon))) / len(stroke)


def strokes_in_lasso(
    strokes: Sequence[Stroke],
    polygon: Sequence[Vertex],
    threshold: float,
) -> List[int]:
    """Indices of strokes meeting the containment threshold, ascending.

    A stroke with exactly ``threshold`` of its points inside is included.
    Empty strokes are never contained.
    """
    if len(polygon) < 3:
        return []
    return [
        i for i, stroke in enumerate(strokes)
        if stroke and containment_fraction(stroke, polygon) >= threshold
    ]


def resolve_protected_groups(
    strokes: Sequence[Stroke],
    polygons: Sequence[Sequence[Vertex]],
    threshold: float,
) -> Tuple[ProtectedGroup, ...]:
    """Partition lasso-claimed strokes into disjoint protected groups.

    Lassos are processed in input order. When a later lasso claims a stroke
    already owned by an earlier one, the earlier group loses it; an earlier
    group left with no strokes is deleted.

    Args:
        strokes: Input strokes.
        polygons: Lasso rings in input order.
        threshold: Containment threshold in (0, 1].

    Returns:
        Surviving groups ordered by lasso index, without hulls.
    """
    owned: Dict[int, List[int]] = {}
    owner: Dict[int, int] = {}

    for lasso_index, polygon in enumerate(polygons):
        claimed = strokes_in_lasso(strokes, polygon, threshold)
        if not claimed:
            continue

        for stroke_index in claimed:
            previous = owner.get(stroke_index)
            if previous is not None:
                owned[previous].remove(stroke_index)
                if not owned[previous]:
                    logger.debug("lasso %d fully stolen by lasso %d", previous, lasso_index)
                    del owned[previous]
            owner[stroke_index] = lasso_index
        owned[lasso_index] = claimed

    groups = tuple(
        ProtectedGroup(lasso_index, tuple(indices))
        for lasso_index, indices in sorted(owned.items())
    )
    logger.debug("resolved %d lassos into %d protected groups", len(polygons), len(groups))
    return groups
