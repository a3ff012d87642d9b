"""Domain objects for stroke segmentation.

This module provides the value objects passed into, between and out of the
segmentation pipeline.

Geometry classes:
    Axis: X or Y, with its perpendicular.
    Point: Timestamped stroke sample.
    Vertex: Polygon vertex.
    BBox: Immutable axis-aligned bounding box.
    StrokeBounds: Bounding box of one input stroke.

Layout classes:
    DividerLine: Axis-aligned column or row boundary.
    ProtectedGroup: Lasso-owned strokes and their convex hull.
    GridCell: Non-empty candidate character region.
    SegmentationGrid: Final layout with diagnostics.

Input/output classes:
    LassoInput, SegmentInput: What callers pass in.
    CharacterSlot, AnnotatedStroke, AnnotatedLasso, SegmentResult: What they
        get back.

Example usage:
    Building input by hand::

        from stroke_segmenter.domain import Point, LassoInput, SegmentInput, Vertex

        stroke = [Point(10, 10, 0), Point(40, 10, 16)]
        lasso = LassoInput([Vertex(0, 0), Vertex(50, 0), Vertex(50, 50)])
        seg_input = SegmentInput([stroke], [lasso], 800, 600, max_characters=3)
"""

from .geometry import Axis, BBox, Point, Stroke, StrokeBounds, Vertex
from .grid import DividerLine, GridCell, ProtectedGroup, SegmentationGrid
from .results import (
    AnnotatedLasso,
    AnnotatedStroke,
    CharacterSlot,
    LassoInput,
    SegmentInput,
    SegmentResult,
)

__all__ = [
    'Axis', 'Point', 'Vertex', 'Stroke', 'BBox', 'StrokeBounds',
    'DividerLine', 'ProtectedGroup', 'GridCell', 'SegmentationGrid',
    'LassoInput', 'SegmentInput',
    'CharacterSlot', 'AnnotatedStroke', 'AnnotatedLasso', 'SegmentResult',
]
