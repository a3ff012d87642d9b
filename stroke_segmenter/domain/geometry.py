"""Geometric value objects for stroke segmentation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Tuple


class Axis(Enum):
    """Canvas axis a divider pass works along.

    Column dividers are found along X (they are vertical lines), row dividers
    along Y. ``perpendicular`` gives the other axis.
    """
    X = 'x'
    Y = 'y'

    @property
    def perpendicular(self) -> Axis:
        return Axis.Y if self is Axis.X else Axis.X


@dataclass(frozen=True)
class Point:
    """A sample on a stroke.

    ``t`` is the capture timestamp in milliseconds. It is carried through to
    the output untouched and never read by the segmentation algorithm.
    """
    x: float
    y: float
    t: float = 0.0

    def to_dict(self) -> dict:
        return {'x': self.x, 'y': self.y, 't': self.t}


@dataclass(frozen=True)
class Vertex:
    """A polygon vertex (lasso ring or convex hull)."""
    x: float
    y: float

    def to_dict(self) -> dict:
        return {'x': self.x, 'y': self.y}


# An ordered sequence of points; may be empty.
Stroke = List[Point]


@dataclass(frozen=True)
class BBox:
    """Immutable axis-aligned bounding box."""
    x_min: float
    y_min: float
    x_max: float
    y_max: float

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    @property
    def center_x(self) -> float:
        return (self.x_min + self.x_max) / 2

    @property
    def center_y(self) -> float:
        return (self.y_min + self.y_max) / 2

    def low(self, axis: Axis) -> float:
        """Minimum coordinate on ``axis``."""
        return self.x_min if axis is Axis.X else self.y_min

    def high(self, axis: Axis) -> float:
        """Maximum coordinate on ``axis``."""
        return self.x_max if axis is Axis.X else self.y_max

    def extent(self, axis: Axis) -> float:
        return self.high(axis) - self.low(axis)

    def center(self, axis: Axis) -> float:
        return self.center_x if axis is Axis.X else self.center_y

    def union(self, other: BBox) -> BBox:
        return BBox(
            min(self.x_min, other.x_min),
            min(self.y_min, other.y_min),
            max(self.x_max, other.x_max),
            max(self.y_max, other.y_max),
        )

    @classmethod
    def from_points(cls, points: Iterable) -> BBox:
        """Create the tight box around anything with ``x``/``y`` attributes.

        Returns an all-zero box when there are no points.
        """
        x_min = y_min = float('inf')
        x_max = y_max = float('-inf')
        for p in points:
            x_min = min(x_min, p.x)
            x_max = max(x_max, p.x)
            y_min = min(y_min, p.y)
            y_max = max(y_max, p.y)
        if x_min == float('inf'):
            return cls(0, 0, 0, 0)
        return cls(x_min, y_min, x_max, y_max)

    @classmethod
    def enclosing(cls, boxes: Iterable[BBox]) -> BBox:
        """Union of several boxes; all-zero when ``boxes`` is empty."""
        result = None
        for box in boxes:
            result = box if result is None else result.union(box)
        return result if result is not None else cls(0, 0, 0, 0)

    def to_tuple(self) -> Tuple[float, float, float, float]:
        return (self.x_min, self.y_min, self.x_max, self.y_max)

    def to_dict(self) -> dict:
        return {
            'min_x': self.x_min,
            'max_x': self.x_max,
            'min_y': self.y_min,
            'max_y': self.y_max,
            'width': self.width,
            'height': self.height,
        }


@dataclass(frozen=True)
class StrokeBounds:
    """Bounding box of one input stroke, keyed by its input index.

    The center is the box midpoint, not the centroid of the points.
    """
    index: int
    bbox: BBox
    empty: bool = False

    @property
    def center_x(self) -> float:
        return self.bbox.center_x

    @property
    def center_y(self) -> float:
        return self.bbox.center_y

    def low(self, axis: Axis) -> float:
        return self.bbox.low(axis)

    def high(self, axis: Axis) -> float:
        return self.bbox.high(axis)

    def center(self, axis: Axis) -> float:
        return self.bbox.center(axis)

    def extent(self, axis: Axis) -> float:
        return self.bbox.extent(axis)
