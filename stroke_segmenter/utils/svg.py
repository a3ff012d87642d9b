"""SVG overlays for a segmentation result.

Two canvas-sized documents are produced: the divider overlay (dashed grey
lines) and the lasso overlay (one translucent pastel polygon per protected
group). Both use absolute canvas coordinates so they can be stacked directly
over the drawing surface.

The markup is built by plain string formatting; numbers are printed the way a
browser prints them (``300`` rather than ``300.0``).
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Iterable, List, Sequence

from ..domain.geometry import Vertex
from ..domain.grid import DividerLine

# 24 pastel hues spread so that neighbouring lassos never look alike
LASSO_HUES = (
    0, 165, 330, 135, 300, 105, 270, 75, 240, 45, 210, 15,
    180, 345, 150, 315, 120, 285, 90, 255, 60, 225, 30, 195,
)

DIVIDER_STYLE = 'stroke="rgba(128,128,128,0.8)" stroke-width="2" stroke-dasharray="4,4"'


def format_number(value: float) -> str:
    """Print a number the way a browser's ``String(number)`` does.

    Integral values drop the ``.0``. Magnitudes of 1e21 and above, or below
    1e-6, switch to exponent form with no zero padding (``1e+21``, ``1.5e-7``).
    """
    if not isinstance(value, float):
        return str(value)
    value = float(value)
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'Infinity' if value > 0 else '-Infinity'
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))

    sign = '-' if value < 0 else ''
    # shortest round-trip digits
    _, digit_tuple, exponent = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = ''.join(str(d) for d in digit_tuple)
    point = len(digits) + exponent

    if len(digits) <= point <= 21:
        return sign + digits + '0' * (point - len(digits))
    if 0 < point <= 21:
        return sign + digits[:point] + '.' + digits[point:]
    if -6 < point <= 0:
        return sign + '0.' + '0' * -point + digits

    mantissa = digits[0] + ('.' + digits[1:] if len(digits) > 1 else '')
    power = point - 1
    return f"{sign}{mantissa}e{'+' if power >= 0 else '-'}{abs(power)}"


def _svg(width: float, height: float, elements: Iterable[str]) -> str:
    w, h = format_number(width), format_number(height)
    body = '\n'.join(elements)
    return (f'<svg xmlns="http://www.w3.org/2000/svg" width="{w}" height="{h}" '
            f'viewBox="0 0 {w} {h}">\n{body}\n</svg>')


def _line(x1: float, y1: float, x2: float, y2: float) -> str:
    return (f'  <line x1="{format_number(x1)}" y1="{format_number(y1)}" '
            f'x2="{format_number(x2)}" y2="{format_number(y2)}" {DIVIDER_STYLE} />')


def segmentation_svg(
    column_dividers: Sequence[DividerLine],
    row_dividers: Sequence[Sequence[DividerLine]],
    canvas_width: float,
    canvas_height: float,
) -> str:
    """Divider overlay: every column divider, then every column's row dividers.

    Column dividers are drawn as ``x = slope * y + intercept`` from ``start``
    to ``end`` on Y; row dividers as ``y = slope * x + intercept`` from
    ``start`` to ``end`` on X.
    """
    lines: List[str] = []
    for d in column_dividers:
        lines.append(_line(d.slope * d.start + d.intercept, d.start,
                           d.slope * d.end + d.intercept, d.end))
    for column in row_dividers:
        for d in column:
            lines.append(_line(d.start, d.slope * d.start + d.intercept,
                               d.end, d.slope * d.end + d.intercept))
    return _svg(canvas_width, canvas_height, lines)


def lasso_svg(
    polygons: Sequence[Sequence[Vertex]],
    canvas_width: float,
    canvas_height: float,
) -> str:
    """Lasso overlay, one polygon per entry.

    The i-th polygon gets ``LASSO_HUES[i % 24]``. Polygons with fewer than 3
    points are not drawn but still use up their hue.
    """
    elements: List[str] = []
    for i, polygon in enumerate(polygons):
        if len(polygon) < 3:
            continue
        hue = LASSO_HUES[i % len(LASSO_HUES)]
        points = ' '.join(f"{format_number(p.x)},{format_number(p.y)}" for p in polygon)
        elements.append(
            f'  <polygon points="{points}" fill="hsla({hue},55%,78%,0.15)" '
            f'stroke="hsla({hue},55%,78%,0.7)" stroke-width="2" stroke-dasharray="6,4" />'
        )
    return _svg(canvas_width, canvas_height, elements)
