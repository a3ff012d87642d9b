"""Input and output objects of a segmentation call.

The input side (``LassoInput``, ``SegmentInput``) mirrors the JSON payload the
host application sends. ``SegmentInput.from_dict`` is the boundary where
malformed payloads are rejected; nothing downstream re-validates.

The output side keeps references to the caller's stroke lists rather than
copying points: ``AnnotatedStroke.points`` and ``CharacterSlot.strokes`` are the
very lists passed in.

Example usage:
    Parsing a JSON payload::

        import json
        from stroke_segmenter.domain.results import SegmentInput

        payload = json.loads(text)
        seg_input = SegmentInput.from_dict(payload)

    Serializing a result::

        result = segmenter.segment(seg_input)
        print(json.dumps(result.to_dict(), indent=2))
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Sequence

from ..errors import InvalidInputError
from .geometry import BBox, Point, Stroke, Vertex
from .grid import SegmentationGrid


def _number(value: Any, where: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInputError(f"{where} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidInputError(f"{where} must be finite, got {value!r}")
    return value


def _parse_coords(raw: Any, where: str, with_time: bool) -> tuple:
    """Accept ``{x, y[, t]}`` objects or ``[x, y[, t]]`` arrays."""
    if isinstance(raw, Mapping):
        if 'x' not in raw or 'y' not in raw:
            raise InvalidInputError(f"{where} needs 'x' and 'y'")
        coords = [raw['x'], raw['y']]
        if with_time:
            coords.append(raw.get('t', 0))
    elif isinstance(raw, Sequence) and not isinstance(raw, str) and len(raw) in (2, 3):
        coords = list(raw[:3 if with_time else 2])
        if with_time and len(coords) == 2:
            coords.append(0)
    else:
        raise InvalidInputError(f"{where} must be an object or a [x, y] array, got {raw!r}")
    return tuple(_number(c, where) for c in coords)


def _field(data: Mapping[str, Any], snake: str, camel: str) -> Any:
    if snake in data:
        return data[snake]
    if camel in data:
        return data[camel]
    raise InvalidInputError(f"missing required field {snake!r}")


@dataclass
class LassoInput:
    """A closed polygon the user drew around strokes that belong together.

    Only meaningful with at least 3 vertices; smaller rings contain nothing.
    """
    points: List[Vertex] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any, where: str = 'lasso') -> LassoInput:
        if isinstance(data, Mapping):
            raw_points = data.get('points', [])
        else:
            raw_points = data
        if not isinstance(raw_points, Sequence) or isinstance(raw_points, str):
            raise InvalidInputError(f"{where}.points must be a list")
        return cls([
            Vertex(*_parse_coords(p, f"{where}.points[{i}]", with_time=False))
            for i, p in enumerate(raw_points)
        ])


@dataclass
class SegmentInput:
    """Everything a single segmentation call needs.

    Attributes:
        strokes: Brush strokes in drawing order; each is a list of Points.
        lassos: Grouping polygons in drawing order.
        canvas_width: Canvas width in pixels (positive).
        canvas_height: Canvas height in pixels (positive).
        max_characters: Expected maximum character count. Only the value 1 has
            an effect: it short-circuits segmentation into a single character.
    """
    strokes: List[Stroke] = field(default_factory=list)
    lassos: List[LassoInput] = field(default_factory=list)
    canvas_width: float = 800
    canvas_height: float = 600
    max_characters: int = 1

    def validate(self) -> None:
        """Reject values that would make the pipeline meaningless.

        Raises:
            InvalidInputError: Naming the first offending field.
        """
        for name in ('canvas_width', 'canvas_height'):
            value = _number(getattr(self, name), name)
            if value <= 0:
                raise InvalidInputError(f"{name} must be positive, got {value!r}")

        count = self.max_characters
        if isinstance(count, bool) or not isinstance(count, int) or count < 1:
            raise InvalidInputError(f"max_characters must be a positive integer, got {count!r}")

        for i, stroke in enumerate(self.strokes):
            for j, p in enumerate(stroke):
                if not isinstance(p, Point):
                    raise InvalidInputError(f"strokes[{i}][{j}] must be a Point, got {p!r}")
                _number(p.x, f"strokes[{i}][{j}].x")
                _number(p.y, f"strokes[{i}][{j}].y")

        for i, lasso in enumerate(self.lassos):
            if not isinstance(lasso, LassoInput):
                raise InvalidInputError(f"lassos[{i}] must be a LassoInput, got {lasso!r}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SegmentInput:
        """Parse and validate the JSON input shape.

        Accepts snake_case or camelCase field names. Points may be given as
        ``{x, y, t}`` objects or ``[x, y]`` / ``[x, y, t]`` arrays.

        Raises:
            InvalidInputError: If any field is missing or malformed.
        """
        if not isinstance(data, Mapping):
            raise InvalidInputError(f"input must be an object, got {type(data).__name__}")

        raw_strokes = data.get('strokes', [])
        raw_lassos = data.get('lassos', [])
        if not isinstance(raw_strokes, list):
            raise InvalidInputError("strokes must be a list")
        if not isinstance(raw_lassos, list):
            raise InvalidInputError("lassos must be a list")

        strokes = []
        for i, raw_stroke in enumerate(raw_strokes):
            if not isinstance(raw_stroke, list):
                raise InvalidInputError(f"strokes[{i}] must be a list of points")
            strokes.append([
                Point(*_parse_coords(p, f"strokes[{i}][{j}]", with_time=True))
                for j, p in enumerate(raw_stroke)
            ])

        lassos = [LassoInput.from_dict(raw, f"lassos[{i}]") for i, raw in enumerate(raw_lassos)]

        seg_input = cls(
            strokes=strokes,
            lassos=lassos,
            canvas_width=_field(data, 'canvas_width', 'canvasWidth'),
            canvas_height=_field(data, 'canvas_height', 'canvasHeight'),
            max_characters=_field(data, 'max_characters', 'maxCharacters'),
        )
        seg_input.validate()
        return seg_input


@dataclass
class CharacterSlot:
    """One character position, ready for recognition.

    Attributes:
        index: 0-based position in Japanese reading order.
        strokes: The caller's stroke lists that make up this character.
        bbox: Union box of every point in ``strokes``.
    """
    index: int
    strokes: List[Stroke]
    bbox: BBox

    def to_dict(self) -> dict:
        return {
            'index': self.index,
            'strokes': [[p.to_dict() for p in s] for s in self.strokes],
            'bounds': self.bbox.to_dict(),
        }


@dataclass
class AnnotatedStroke:
    """An input stroke with its character assignment.

    ``character_index`` is -1 when the stroke never landed in a cell.
    """
    index: int
    points: Stroke
    character_index: int = -1

    def to_dict(self) -> dict:
        return {
            'index': self.index,
            'points': [p.to_dict() for p in self.points],
            'character_index': self.character_index,
        }


@dataclass
class AnnotatedLasso:
    """An input lasso with the strokes it ended up owning."""
    index: int
    points: List[Vertex]
    stroke_indices: List[int]

    def to_dict(self) -> dict:
        return {
            'index': self.index,
            'points': [v.to_dict() for v in self.points],
            'stroke_indices': list(self.stroke_indices),
        }


@dataclass
class SegmentResult:
    """Complete result of a segmentation call.

    Attributes:
        characters: Character slots in reading order.
        strokes: Every input stroke, same order and length as the input.
        lassos: Lassos that own at least one stroke, in input order.
        segmentation_svg: Divider overlay sized to the canvas.
        lasso_svg: Protected-hull overlay sized to the canvas.
        grid: Final dividers, cells and size estimates.
    """
    characters: List[CharacterSlot] = field(default_factory=list)
    strokes: List[AnnotatedStroke] = field(default_factory=list)
    lassos: List[AnnotatedLasso] = field(default_factory=list)
    segmentation_svg: str = ''
    lasso_svg: str = ''
    grid: SegmentationGrid = field(default_factory=SegmentationGrid)

    def to_dict(self) -> dict:
        return {
            'characters': [c.to_dict() for c in self.characters],
            'strokes': [s.to_dict() for s in self.strokes],
            'lassos': [lasso.to_dict() for lasso in self.lassos],
            'segmentation_svg': self.segmentation_svg,
            'lasso_svg': self.lasso_svg,
            'grid': self.grid.to_dict(),
        }
