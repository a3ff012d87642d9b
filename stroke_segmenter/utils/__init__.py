"""Output helpers for segmentation results.

SVG overlays:
    segmentation_svg: Dashed divider lines.
    lasso_svg: Translucent protected-group polygons.
    format_number: Number formatting shared by both.

Raster preview:
    render_preview: Pillow image of strokes, dividers and hulls.
"""

from .rendering import render_preview
from .svg import LASSO_HUES, format_number, lasso_svg, segmentation_svg

__all__ = ['LASSO_HUES', 'format_number', 'segmentation_svg', 'lasso_svg', 'render_preview']
