"""Convex hulls of protected groups.

The user's lasso is a rough outline. What later stages treat as untouchable is
the convex hull of the ink the lasso actually owns, which is usually much
tighter than the drawn polygon.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, List, Sequence, Tuple

from ..domain.geometry import Stroke, Vertex
from ..domain.grid import ProtectedGroup

logger = logging.getLogger(__name__)


def _cross(o: Tuple[float, float], a: Tuple[float, float], b: Tuple[float, float]) -> float:
    return (a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0])


def convex_hull(points: Iterable[Tuple[float, float]]) -> List[Vertex]:
    """Convex hull using Andrew's monotone chain.

    Points are sorted by x then y and de-duplicated. Collinear points are
    dropped (only strict left turns are kept).

    Args:
        points: (x, y) pairs.

    Returns:
        Hull vertices in counter-clockwise order without a repeated endpoint.
        Two or fewer distinct points are returned as they are (sorted).
    """
    unique = sorted(set(points))
    if len(unique) <= 2:
        return [Vertex(x, y) for x, y in unique]

    lower: List[Tuple[float, float]] = []
    for p in unique:
        while len(lower) >= 2 and _cross(lower[-2], lower[-1], p) <= 0:
            lower.pop()
        lower.append(p)

    upper: List[Tuple[float, float]] = []
    for p in reversed(unique):
        while len(upper) >= 2 and _cross(upper[-2], upper[-1], p) <= 0:
            upper.pop()
        upper.append(p)

    # last point of each chain is the first point of the other
    return [Vertex(x, y) for x, y in lower[:-1] + upper[:-1]]


def build_protected_hulls(
    groups: Sequence[ProtectedGroup],
    strokes: Sequence[Stroke],
) -> Tuple[ProtectedGroup, ...]:
    """Attach the convex hull of each group's ink.

    Groups whose hull is degenerate (fewer than 3 vertices) are kept for
    stroke membership but will not veto dividers.
    """
    result = []
    for group in groups:
        ink = ((p.x, p.y) for i in group.stroke_indices for p in strokes[i])
        hull = tuple(convex_hull(ink))
        if len(hull) < 3:
            logger.debug("lasso %d: degenerate hull (%d points)", group.lasso_index, len(hull))
        result.append(replace(group, hull=hull))
    return tuple(result)
