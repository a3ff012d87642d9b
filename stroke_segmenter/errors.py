"""Exceptions raised at the segmenter boundary.

The segmentation pipeline itself never raises for degenerate geometry (empty
strokes, tiny lassos, non-converging iterations). These exceptions exist only
for callers that hand in malformed configuration or input, which is rejected
before any stage runs.
"""


class SegmentationError(Exception):
    """Base class for all errors raised by stroke_segmenter."""


class ConfigError(SegmentationError, ValueError):
    """Invalid or unknown configuration value."""


class InvalidInputError(SegmentationError, ValueError):
    """Malformed segmentation input (canvas size, character count, points)."""
