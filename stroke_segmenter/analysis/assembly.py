"""Assemble the caller-facing result from grid cells and protected groups."""

from __future__ import annotations

from typing import Dict, List, Sequence

from ..domain.geometry import BBox, Stroke
from ..domain.grid import GridCell, ProtectedGroup
from ..domain.results import AnnotatedLasso, AnnotatedStroke, CharacterSlot, LassoInput


def reading_order(cells: Sequence[GridCell]) -> List[GridCell]:
    """Japanese reading order: rightmost column first, top to bottom inside it."""
    return sorted(cells, key=lambda c: (c.column, c.row))


def build_character_slots(cells: Sequence[GridCell], strokes: Sequence[Stroke]) -> List[CharacterSlot]:
    """One slot per cell, indexed in reading order.

    Slots hold the caller's stroke lists themselves, not copies.
    """
    return [
        CharacterSlot(index, [strokes[i] for i in cell.stroke_indices], cell.bbox)
        for index, cell in enumerate(reading_order(cells))
    ]


def single_character_slot(strokes: Sequence[Stroke]) -> CharacterSlot:
    """Every stroke in one slot, boxed around all of their points."""
    return CharacterSlot(0, list(strokes), BBox.from_points(p for s in strokes for p in s))


def annotate_strokes(strokes: Sequence[Stroke], cells: Sequence[GridCell]) -> List[AnnotatedStroke]:
    """Pair every input stroke with the reading-order index of its cell (-1 if none)."""
    owner: Dict[int, int] = {}
    for index, cell in enumerate(reading_order(cells)):
        for i in cell.stroke_indices:
            owner[i] = index
    return [AnnotatedStroke(i, points, owner.get(i, -1)) for i, points in enumerate(strokes)]


def annotate_lassos(lassos: Sequence[LassoInput], groups: Sequence[ProtectedGroup]) -> List[AnnotatedLasso]:
    """Lassos that survived ownership resolution, in input order."""
    return [
        AnnotatedLasso(group.lasso_index, lassos[group.lasso_index].points, list(group.stroke_indices))
        for group in sorted(groups, key=lambda g: g.lasso_index)
    ]
