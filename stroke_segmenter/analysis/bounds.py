"""Per-stroke bounding boxes and the character size estimate.

The character size estimate is the unit every later stage uses to decide
whether a gap between strokes is a column or row break.
"""

from __future__ import annotations

import logging
from typing import Sequence, Tuple

import numpy as np

from ..config import FALLBACK_CHAR_SIZE_RATIO, TINY_STROKE_EXTENT, SegmentationConfig
from ..domain.geometry import Axis, BBox, Stroke, StrokeBounds

logger = logging.getLogger(__name__)


def stroke_bounds(stroke: Stroke, index: int) -> StrokeBounds:
    """Bounding box of a single stroke.

    Empty strokes get an all-zero box and are flagged ``empty`` so that the
    pipeline can keep them out of the geometry.
    """
    if not stroke:
        return StrokeBounds(index, BBox(0, 0, 0, 0), empty=True)
    return StrokeBounds(index, BBox.from_points(stroke))


def compute_stroke_bounds(strokes: Sequence[Stroke]) -> Tuple[StrokeBounds, ...]:
    """Bounds of every input stroke, in input order (empty strokes included)."""
    return tuple(stroke_bounds(stroke, i) for i, stroke in enumerate(strokes))


def content_bounds(bounds: Sequence[StrokeBounds]) -> BBox:
    """Union box of the given (non-empty) strokes."""
    return BBox.enclosing(b.bbox for b in bounds)


def estimate_char_size(
    bounds: Sequence[StrokeBounds],
    canvas_dimension: float,
    axis: Axis,
    config: SegmentationConfig,
) -> float:
    """Estimate the size of one character along ``axis``.

    Takes the median extent of the strokes that are larger than a dot, scales
    it by ``char_size_multiplier`` and clamps the result to the configured
    fraction of the canvas. For an even count the upper median is used.

    Args:
        bounds: Non-empty stroke bounds.
        canvas_dimension: Canvas width (X) or height (Y).
        axis: Axis to measure.
        config: Resolved segmenter configuration.

    Returns:
        Estimated character size in canvas units. Falls back to 15% of the
        canvas dimension when no stroke is large enough to measure.
    """
    extents = np.array([b.extent(axis) for b in bounds], dtype=float)
    extents = np.sort(extents[extents > TINY_STROKE_EXTENT])

    if extents.size == 0:
        logger.debug("char size (%s): no measurable strokes, using fallback", axis.value)
        return canvas_dimension * FALLBACK_CHAR_SIZE_RATIO

    median = float(extents[extents.size // 2])
    estimated = median * config.char_size_multiplier

    low = canvas_dimension * config.min_char_size_ratio
    high = canvas_dimension * config.max_char_size_ratio
    size = max(low, min(high, estimated))

    logger.debug("char size (%s): median=%.1f estimate=%.1f clamped=%.1f",
                 axis.value, median, estimated, size)
    return size
