"""Segmenter configuration and fixed tuning constants.

This module centralizes every number the segmentation pipeline depends on:

- The per-instance tuning knobs, held by the frozen ``SegmentationConfig``
  dataclass. A config is resolved once when a ``Segmenter`` is built and is
  never mutated afterwards, so one instance can be shared between callers.
- The fixed algorithm constants (padding, tolerances, iteration caps). These
  are not configurable; they are part of the segmentation contract.

Typical usage example:

    from stroke_segmenter.config import SegmentationConfig, DEFAULT_CONFIG

    loose = DEFAULT_CONFIG.with_overrides(min_column_gap_ratio=0.5)
    from_json = SegmentationConfig.from_dict({'maxSizeRatio': 3.0})
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Mapping

from .errors import ConfigError

# --- Character size estimation ---

# Strokes whose extent on an axis is at or below this are dots/ticks and do
# not contribute to the character size estimate.
TINY_STROKE_EXTENT = 5

# Character size as a fraction of the canvas when no stroke survives the
# tiny-extent filter.
FALLBACK_CHAR_SIZE_RATIO = 0.15

# --- Divider geometry ---

# Dividers extend this far past the content they separate.
DIVIDER_PADDING = 10

# Outer row bands of a column extend this far past its strokes.
CELL_PADDING = 5

# A forced group divider is not added when an existing divider is closer.
NEARBY_DIVIDER_TOLERANCE = 10

# Two protected bounds whose perpendicular extents overlap by more than this
# fraction of the smaller one sit side by side and always get a divider.
SIDE_BY_SIDE_OVERLAP_RATIO = 0.3

# Two protected bounds overlapping on the primary axis by more than this
# fraction of the smaller one are stacked; the orthogonal pass handles them.
STACKED_OVERLAP_RATIO = 0.5

# --- Iteration caps ---

# Upper bound on split/merge repairs per uniformity run. Guarantees termination
# on pathological input; stopping at the cap is a valid final state.
MAX_UNIFORMITY_ITERATIONS = 10

# Upper bound on column merges performed by the column/row balancer.
MAX_BALANCE_ITERATIONS = 10

# camelCase names used by the JSON input format
_CAMEL_ALIASES = {
    'minColumnGapRatio': 'min_column_gap_ratio',
    'minRowGapRatio': 'min_row_gap_ratio',
    'charSizeMultiplier': 'char_size_multiplier',
    'minCharSizeRatio': 'min_char_size_ratio',
    'maxCharSizeRatio': 'max_char_size_ratio',
    'maxSizeRatio': 'max_size_ratio',
    'lassoContainmentThreshold': 'lasso_containment_threshold',
}


def _field_overrides(data: Mapping[str, Any]) -> dict:
    """Map snake_case or camelCase keys to field names, rejecting unknown ones."""
    known = {f.name for f in fields(SegmentationConfig)}
    overrides = {}
    for key, value in data.items():
        name = _CAMEL_ALIASES.get(key, key)
        if name not in known:
            raise ConfigError(f"unknown config key: {key!r}")
        overrides[name] = value
    return overrides


@dataclass(frozen=True)
class SegmentationConfig:
    """Tuning knobs for a segmenter instance.

    Attributes:
        min_column_gap_ratio: Minimum X gap between columns as a fraction of
            the estimated character width.
        min_row_gap_ratio: Minimum Y gap between rows as a fraction of the
            estimated character height.
        char_size_multiplier: Multiplier applied to the median stroke extent
            to estimate a character's size.
        min_char_size_ratio: Lower clamp of the size estimate, as a fraction of
            the canvas dimension.
        max_char_size_ratio: Upper clamp of the size estimate, as a fraction of
            the canvas dimension.
        max_size_ratio: Largest allowed ratio between the biggest and smallest
            cell along one axis before uniformity repair kicks in.
        lasso_containment_threshold: Minimum fraction of a stroke's points that
            must fall inside a lasso for the lasso to claim the stroke.

    Raises:
        ConfigError: If any value is out of range.
    """
    min_column_gap_ratio: float = 0.25
    min_row_gap_ratio: float = 0.25
    char_size_multiplier: float = 2.0
    min_char_size_ratio: float = 0.08
    max_char_size_ratio: float = 0.40
    max_size_ratio: float = 2.0
    lasso_containment_threshold: float = 0.5

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"{f.name} must be a number, got {value!r}")
            if not math.isfinite(value) or value <= 0:
                raise ConfigError(f"{f.name} must be a finite positive number, got {value!r}")

        if self.lasso_containment_threshold > 1:
            raise ConfigError(
                f"lasso_containment_threshold must be in (0, 1], got {self.lasso_containment_threshold!r}"
            )
        if self.min_char_size_ratio > self.max_char_size_ratio:
            raise ConfigError(
                f"min_char_size_ratio ({self.min_char_size_ratio}) exceeds "
                f"max_char_size_ratio ({self.max_char_size_ratio})"
            )
        if self.max_size_ratio < 1:
            raise ConfigError(f"max_size_ratio must be >= 1, got {self.max_size_ratio!r}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> SegmentationConfig:
        """Build a config from a partial mapping, filling in defaults.

        Keys may be snake_case field names or their camelCase aliases.

        Args:
            data: Partial mapping of overrides, or None for all defaults.

        Returns:
            Resolved SegmentationConfig.

        Raises:
            ConfigError: On unknown keys or out-of-range values.
        """
        if not data:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigError(f"config must be a mapping, got {type(data).__name__}")

        return cls(**_field_overrides(data))

    def with_overrides(self, **overrides: Any) -> SegmentationConfig:
        """Return a copy with the given fields replaced.

        Raises:
            ConfigError: On unknown field names or out-of-range values.
        """
        return replace(self, **_field_overrides(overrides))

    def to_dict(self) -> dict:
        """Convert to a JSON-ready dict."""
        return asdict(self)


DEFAULT_CONFIG = SegmentationConfig()
