"""Raster preview of a segmentation result.

Draws the input strokes coloured by the character they were assigned to, the
divider lines and the protected hulls onto a Pillow image. Intended for
visual debugging (``stroke-segmenter --png``), not for recognition input.

Example usage:
    Saving a preview next to the SVG overlays::

        from stroke_segmenter.utils.rendering import render_preview

        img = render_preview(seg_input, result, scale=0.5)
        img.save('preview.png')
"""

from __future__ import annotations

import math
from typing import Tuple

from PIL import Image, ImageColor, ImageDraw

from ..domain.results import SegmentInput, SegmentResult
from .svg import LASSO_HUES

BACKGROUND = (255, 255, 255)
UNASSIGNED_COLOR = (160, 160, 160)
DIVIDER_COLOR = (128, 128, 128)
STROKE_WIDTH = 3
OVERLAY_WIDTH = 1


def character_color(index: int) -> Tuple[int, int, int]:
    """Stroke colour for a character index; unassigned strokes are grey."""
    if index < 0:
        return UNASSIGNED_COLOR
    hue = LASSO_HUES[index % len(LASSO_HUES)]
    return ImageColor.getrgb(f"hsl({hue}, 70%, 40%)")


def hull_color(index: int) -> Tuple[int, int, int]:
    hue = LASSO_HUES[index % len(LASSO_HUES)]
    return ImageColor.getrgb(f"hsl({hue}, 55%, 65%)")


def render_preview(seg_input: SegmentInput, result: SegmentResult, scale: float = 1.0) -> Image.Image:
    """Render strokes, dividers and protected hulls onto an RGB image.

    Args:
        seg_input: The input that produced ``result``; gives the canvas size.
        result: Segmentation result to draw.
        scale: Output pixels per canvas unit.

    Returns:
        RGB image of size ``ceil(canvas_width * scale) x ceil(canvas_height * scale)``.

    Raises:
        ValueError: If ``scale`` is not positive.
    """
    if scale <= 0:
        raise ValueError(f"scale must be positive, got {scale!r}")

    size = (max(1, math.ceil(seg_input.canvas_width * scale)),
            max(1, math.ceil(seg_input.canvas_height * scale)))
    img = Image.new('RGB', size, BACKGROUND)
    draw = ImageDraw.Draw(img)

    def xy(x: float, y: float) -> Tuple[float, float]:
        return (x * scale, y * scale)

    grid = result.grid
    for d in grid.column_dividers:
        draw.line([xy(d.intercept, d.start), xy(d.intercept, d.end)], fill=DIVIDER_COLOR, width=OVERLAY_WIDTH)
    for column in grid.row_dividers:
        for d in column:
            draw.line([xy(d.start, d.intercept), xy(d.end, d.intercept)], fill=DIVIDER_COLOR, width=OVERLAY_WIDTH)

    for i, polygon in enumerate(grid.hulls):
        if len(polygon) >= 3:
            draw.polygon([xy(v.x, v.y) for v in polygon], outline=hull_color(i))

    for stroke in result.strokes:
        if not stroke.points:
            continue
        color = character_color(stroke.character_index)
        coords = [xy(p.x, p.y) for p in stroke.points]
        if len(coords) == 1:
            draw.point(coords, fill=color)
        else:
            draw.line(coords, fill=color, width=STROKE_WIDTH, joint='curve')

    return img
