"""Unit tests for the Pillow preview renderer."""

import pytest

from stroke_segmenter import Segmenter
from stroke_segmenter.utils.rendering import UNASSIGNED_COLOR, character_color, hull_color, render_preview
from tests.helpers import make_character_strokes, make_input, make_lasso


@pytest.fixture
def segmented(two_stacked_characters):
    return two_stacked_characters, Segmenter().segment(two_stacked_characters)


def test_character_colors():
    assert character_color(-1) == UNASSIGNED_COLOR
    assert character_color(0) != character_color(1)
    assert character_color(0) == character_color(24)
    assert len(hull_color(3)) == 3


def test_canvas_size(segmented):
    seg_input, result = segmented
    assert render_preview(seg_input, result).size == (800, 600)
    assert render_preview(seg_input, result, scale=0.5).size == (400, 300)
    assert render_preview(seg_input, result, scale=0.333).size == (267, 200)


def test_strokes_coloured_by_character(segmented):
    seg_input, result = segmented
    img = render_preview(seg_input, result)
    assert img.mode == 'RGB'
    # upper bar of the first character and the lower cluster's vertical bar
    assert img.getpixel((600, 91)) == character_color(0)
    assert img.getpixel((600, 350)) == character_color(1)
    assert img.getpixel((0, 0)) == (255, 255, 255)


def test_hull_outline_drawn():
    strokes = make_character_strokes(400, 300, 100)
    seg_input = make_input(strokes, [make_lasso(300, 200, 500, 400)], max_characters=2)
    result = Segmenter().segment(seg_input)
    img = render_preview(seg_input, result)
    # left edge of the hull at x = 375, away from any stroke pixel
    assert img.getpixel((375, 300)) == hull_color(0)


def test_invalid_scale(segmented):
    seg_input, result = segmented
    with pytest.raises(ValueError):
        render_preview(seg_input, result, scale=0)
