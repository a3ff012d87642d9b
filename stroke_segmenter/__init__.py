"""Stroke Segmenter Package.

Splits a canvas of handwritten brush strokes into individual Japanese
character slots. Writing is assumed to run in vertical columns read right to
left, top to bottom within a column. Users may draw lassos around strokes that
must stay together; those groups are never split.

The package is organized into the following modules:
    config: SegmentationConfig, DEFAULT_CONFIG and the fixed tuning constants.
    errors: Exceptions raised when input or configuration is rejected.
    domain: Value objects for input, intermediate layout and output.
    analysis: The pipeline stages (bounds, lassos, hulls, dividers,
        uniformity, cells, assembly).
    api: Segmenter and the one-shot segment() function.
    utils: SVG overlays and a Pillow raster preview.
    cli: The stroke-segmenter command.

Example usage:
    Segmenting a payload::

        from stroke_segmenter import Segmenter, SegmentInput

        segmenter = Segmenter()
        result = segmenter.segment(SegmentInput.from_dict(payload))
        for slot in result.characters:
            print(f"character {slot.index}: {len(slot.strokes)} strokes")

    Building input by hand::

        from stroke_segmenter import Point, SegmentInput, segment

        strokes = [[Point(600, 80, 0), Point(600, 140, 16)]]
        result = segment(SegmentInput(strokes, [], 800, 600, max_characters=3))

Attributes:
    __version__ (str): Package version string.
    __all__ (list): List of public symbols exported by this package.
"""

from .api import Segmenter, segment
from .config import DEFAULT_CONFIG, SegmentationConfig
from .domain import (
    AnnotatedLasso,
    AnnotatedStroke,
    BBox,
    CharacterSlot,
    DividerLine,
    GridCell,
    LassoInput,
    Point,
    SegmentationGrid,
    SegmentInput,
    SegmentResult,
    Vertex,
)
from .errors import ConfigError, InvalidInputError, SegmentationError

__all__ = [
    # Segmentation
    'Segmenter', 'segment',
    # Configuration
    'SegmentationConfig', 'DEFAULT_CONFIG',
    # Domain objects
    'Point', 'Vertex', 'BBox', 'LassoInput', 'SegmentInput',
    'CharacterSlot', 'AnnotatedStroke', 'AnnotatedLasso', 'SegmentResult',
    'DividerLine', 'GridCell', 'SegmentationGrid',
    # Errors
    'SegmentationError', 'ConfigError', 'InvalidInputError',
]

__version__ = '1.0.0'
