"""Segmentation entry point.

``Segmenter`` runs the full pipeline over one ``SegmentInput``:

    stroke bounds -> protected groups and hulls -> column dividers
    (gaps, group dividers, width uniformity) -> column assignment -> row
    dividers per column (gaps, group dividers, height uniformity) ->
    column/row balancing -> cell grid -> character slots

A segmenter holds nothing but its resolved configuration, so one instance
can serve any number of callers and threads.

Example usage:
    Segmenting with a tuned configuration::

        from stroke_segmenter import Segmenter, SegmentInput

        segmenter = Segmenter({'maxSizeRatio': 3.0})
        result = segmenter.segment(SegmentInput.from_dict(payload))
        for slot in result.characters:
            print(slot.index, len(slot.strokes), slot.bbox.to_tuple())

    Watching intermediate stages::

        def trace(stage, snapshot):
            print(stage, snapshot)

        Segmenter(trace_callback=trace).segment(seg_input)
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional, Sequence, Tuple, Union

from ..analysis.assembly import (
    annotate_lassos,
    annotate_strokes,
    build_character_slots,
    reading_order,
    single_character_slot,
)
from ..analysis.bounds import compute_stroke_bounds, estimate_char_size
from ..analysis.cells import build_cell_grid
from ..analysis.dividers import assign_columns, find_column_dividers, insert_column_group_dividers
from ..analysis.hull import build_protected_hulls
from ..analysis.lasso import resolve_protected_groups
from ..analysis.uniformity import (
    Layout,
    balance_columns,
    enforce_column_uniformity,
    layout_rows,
    max_rows,
)
from ..config import DEFAULT_CONFIG, SegmentationConfig
from ..domain.geometry import Axis, Vertex
from ..domain.grid import ProtectedGroup, SegmentationGrid
from ..domain.results import AnnotatedStroke, LassoInput, SegmentInput, SegmentResult
from ..errors import ConfigError
from ..utils.svg import lasso_svg, segmentation_svg

logger = logging.getLogger(__name__)

TraceCallback = Callable[[str, Any], None]


def overlay_polygons(
    groups: Sequence[ProtectedGroup],
    lassos: Sequence[LassoInput],
) -> Tuple[Tuple[Vertex, ...], ...]:
    """Polygon drawn for each protected group: its hull, or the raw lasso if degenerate."""
    return tuple(
        group.hull if not group.is_degenerate else tuple(lassos[group.lasso_index].points)
        for group in groups
    )


class Segmenter:
    """Splits handwritten strokes into Japanese-ordered character slots.

    Attributes:
        config: Resolved, immutable configuration.
        trace_callback: Optional ``callback(stage, snapshot)`` invoked after
            each pipeline stage with that stage's immutable output. Stages are
            ``stroke_bounds``, ``protected_groups``, ``column_dividers``,
            ``row_dividers``, ``balanced`` and ``cells``.
    """

    def __init__(
        self,
        config: Union[SegmentationConfig, Mapping[str, Any], None] = None,
        trace_callback: Optional[TraceCallback] = None,
    ):
        """Resolve the configuration.

        Args:
            config: A ``SegmentationConfig``, a partial mapping of overrides
                (snake_case or camelCase keys) or None for the defaults.
            trace_callback: Optional stage observer.

        Raises:
            ConfigError: If the configuration is invalid.
        """
        if config is None:
            self.config = DEFAULT_CONFIG
        elif isinstance(config, SegmentationConfig):
            self.config = config
        elif isinstance(config, Mapping):
            self.config = SegmentationConfig.from_dict(config)
        else:
            raise ConfigError(f"config must be a SegmentationConfig or a mapping, got {type(config).__name__}")
        self.trace_callback = trace_callback

    def _trace(self, stage: str, snapshot: Any) -> None:
        if self.trace_callback is None:
            return
        try:
            self.trace_callback(stage, snapshot)
        except Exception:
            logger.exception("trace callback failed at stage %r", stage)
            raise

    def segment(self, seg_input: SegmentInput) -> SegmentResult:
        """Segment the strokes of ``seg_input`` into characters.

        Degenerate input never raises: no strokes give an empty result, and
        ``max_characters == 1`` puts every stroke into a single character.

        Args:
            seg_input: Strokes, lassos, canvas size and expected character count.

        Returns:
            SegmentResult with slots in reading order (rightmost column first,
            top to bottom), every input stroke annotated with its slot index,
            the surviving lassos, both SVG overlays and the final grid.

        Raises:
            InvalidInputError: If ``seg_input`` fails validation.
        """
        seg_input.validate()
        strokes = seg_input.strokes
        width, height = seg_input.canvas_width, seg_input.canvas_height

        if not strokes:
            logger.debug("no strokes, nothing to segment")
            return SegmentResult(
                segmentation_svg=segmentation_svg((), (), width, height),
                lasso_svg=lasso_svg((), width, height),
            )

        all_bounds = compute_stroke_bounds(strokes)
        self._trace('stroke_bounds', all_bounds)

        groups = resolve_protected_groups(
            strokes, [lasso.points for lasso in seg_input.lassos], self.config.lasso_containment_threshold
        )
        groups = build_protected_hulls(groups, strokes)
        self._trace('protected_groups', groups)

        hulls = overlay_polygons(groups, seg_input.lassos)
        lassos = annotate_lassos(seg_input.lassos, groups)

        if seg_input.max_characters == 1:
            logger.debug("single character requested, %d strokes in one slot", len(strokes))
            return SegmentResult(
                characters=[single_character_slot(strokes)],
                strokes=[AnnotatedStroke(i, points, 0) for i, points in enumerate(strokes)],
                lassos=lassos,
                segmentation_svg=segmentation_svg((), (), width, height),
                lasso_svg=lasso_svg(hulls, width, height),
                grid=SegmentationGrid(columns=1, max_rows=1, hulls=hulls),
            )

        live = tuple(b for b in all_bounds if not b.empty)
        char_width = estimate_char_size(live, width, Axis.X, self.config)
        char_height = estimate_char_size(live, height, Axis.Y, self.config)

        column_dividers = find_column_dividers(live, char_width, self.config, groups)
        column_dividers = insert_column_group_dividers(column_dividers, groups, live)
        column_dividers = enforce_column_uniformity(column_dividers, live, groups, self.config)
        self._trace('column_dividers', column_dividers)

        columns = assign_columns(live, column_dividers)
        rows = layout_rows(columns, all_bounds, column_dividers, char_height, groups, self.config)
        self._trace('row_dividers', rows)

        layout = balance_columns(
            Layout(column_dividers, columns, rows), live, all_bounds, char_height, groups, self.config
        )
        self._trace('balanced', layout)

        cells = build_cell_grid(layout.columns, all_bounds, layout.row_dividers)
        self._trace('cells', cells)

        characters = build_character_slots(cells, strokes)
        grid = SegmentationGrid(
            column_dividers=layout.column_dividers,
            row_dividers=layout.row_dividers,
            cells=tuple(reading_order(cells)),
            columns=len(layout.columns),
            max_rows=max_rows(layout.row_dividers),
            estimated_char_width=char_width,
            estimated_char_height=char_height,
            hulls=hulls,
        )
        logger.debug("segmented %d strokes into %d characters (%d columns, %d max rows, %d lassos)",
                     len(strokes), len(characters), grid.columns, grid.max_rows, len(lassos))

        return SegmentResult(
            characters=characters,
            strokes=annotate_strokes(strokes, cells),
            lassos=lassos,
            segmentation_svg=segmentation_svg(layout.column_dividers, layout.row_dividers, width, height),
            lasso_svg=lasso_svg(hulls, width, height),
            grid=grid,
        )


def segment(seg_input: SegmentInput) -> SegmentResult:
    """Segment with the default configuration.

    For repeated calls, build one ``Segmenter`` and reuse it.
    """
    return Segmenter(DEFAULT_CONFIG).segment(seg_input)
