"""Builders for stroke, lasso and input test data.

Coordinates follow the canvas convention: origin top-left, Y grows downward.
"""

from stroke_segmenter.domain import LassoInput, Point, SegmentInput, Vertex


def make_point(x, y, t=0):
    return Point(x, y, t)


def make_stroke(coords):
    """Stroke through the given (x, y) pairs, 10 ms apart."""
    return [make_point(x, y, i * 10) for i, (x, y) in enumerate(coords)]


def make_horizontal_stroke(y, x1, x2, num_points=10):
    return [make_point(x1 + (x2 - x1) * (i / (num_points - 1)), y, i * 10) for i in range(num_points)]


def make_vertical_stroke(x, y1, y2, num_points=10):
    return [make_point(x, y1 + (y2 - y1) * (i / (num_points - 1)), i * 10) for i in range(num_points)]


def make_character_strokes(cx, cy, size=50):
    """Three strokes shaped like a small character centred on (cx, cy).

    Two horizontal bars at +-15% of ``size`` and one vertical bar through
    the centre. Horizontal bars are ``size / 2`` wide, the vertical bar is
    ``size / 2`` tall.
    """
    half = size / 2
    return [
        make_horizontal_stroke(cy - half * 0.3, cx - half * 0.5, cx + half * 0.5),
        make_horizontal_stroke(cy + half * 0.3, cx - half * 0.5, cx + half * 0.5),
        make_vertical_stroke(cx, cy - half * 0.5, cy + half * 0.5),
    ]


def make_lasso(min_x, min_y, max_x, max_y):
    """Rectangular lasso."""
    return LassoInput([
        Vertex(min_x, min_y),
        Vertex(max_x, min_y),
        Vertex(max_x, max_y),
        Vertex(min_x, max_y),
    ])


def make_input(strokes=None, lassos=None, canvas_width=800, canvas_height=600, max_characters=3):
    return SegmentInput(
        strokes=strokes if strokes is not None else [],
        lassos=lassos if lassos is not None else [],
        canvas_width=canvas_width,
        canvas_height=canvas_height,
        max_characters=max_characters,
    )
