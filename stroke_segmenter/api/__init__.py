"""Public segmentation API.

The module exports:
    Segmenter: Reusable segmenter bound to one configuration.
    segment: One-off segmentation with the default configuration.
"""

from .segmenter import Segmenter, segment

__all__ = ['Segmenter', 'segment']
