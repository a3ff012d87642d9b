"""Degenerate inputs: the pipeline returns a well-formed result, never raises."""

import pytest

from stroke_segmenter import InvalidInputError, Segmenter
from tests.helpers import make_character_strokes, make_input, make_lasso, make_stroke

pytestmark = pytest.mark.integration

EMPTY_SVG = ('<svg xmlns="http://www.w3.org/2000/svg" width="800" height="600" '
             'viewBox="0 0 800 600">\n\n</svg>')


@pytest.fixture
def segmenter():
    return Segmenter()


def test_no_strokes(segmenter):
    result = segmenter.segment(make_input([], [make_lasso(0, 0, 100, 100)]))
    assert result.characters == []
    assert result.strokes == []
    assert result.lassos == []
    assert result.segmentation_svg == EMPTY_SVG
    assert result.lasso_svg == EMPTY_SVG
    assert result.grid.columns == 0
    assert result.grid.max_rows == 0


def test_single_character_shortcut(segmenter, two_stacked_characters):
    seg_input = two_stacked_characters
    seg_input.max_characters = 1
    result = segmenter.segment(seg_input)

    assert len(result.characters) == 1
    assert result.characters[0].index == 0
    assert len(result.characters[0].strokes) == len(seg_input.strokes)
    assert [s.character_index for s in result.strokes] == [0] * 6
    assert '<line' not in result.segmentation_svg
    assert result.grid.columns == 1
    assert result.grid.max_rows == 1
    assert not result.grid.has_dividers
    assert result.characters[0].bbox.y_min == 85
    assert result.characters[0].bbox.y_max == 365


def test_single_character_keeps_lassos(segmenter):
    strokes = make_character_strokes(500, 100, 60)
    result = segmenter.segment(make_input(strokes, [make_lasso(440, 50, 560, 150)], max_characters=1))
    assert [lasso.index for lasso in result.lassos] == [0]
    assert result.lasso_svg.count('<polygon') == 1


def test_no_lassos(segmenter, two_stacked_characters):
    result = segmenter.segment(two_stacked_characters)
    assert result.lassos == []
    assert result.grid.hulls == ()
    assert '<polygon' not in result.lasso_svg
    assert result.segmentation_svg.count('<line') == 1


def test_lasso_without_strokes_omitted(segmenter):
    strokes = make_character_strokes(500, 100, 60)
    lassos = [make_lasso(0, 400, 100, 500), make_lasso(440, 50, 560, 150)]
    result = segmenter.segment(make_input(strokes, lassos))
    assert [lasso.index for lasso in result.lassos] == [1]
    assert result.lassos[0].stroke_indices == [0, 1, 2]


def test_fully_stolen_lasso_omitted(segmenter):
    strokes = make_character_strokes(500, 100, 60)
    lassos = [make_lasso(450, 60, 550, 140), make_lasso(440, 50, 560, 150)]
    result = segmenter.segment(make_input(strokes, lassos))
    assert [lasso.index for lasso in result.lassos] == [1]
    assert len(result.grid.hulls) == 1


def test_empty_stroke_unassigned(segmenter):
    strokes = make_character_strokes(600, 100, 60) + [[]] + make_character_strokes(600, 350, 60)
    result = segmenter.segment(make_input(strokes))

    assert len(result.characters) == 2
    assert len(result.strokes) == 7
    assert result.strokes[3].character_index == -1
    assert [s.character_index for s in result.strokes] == [0, 0, 0, -1, 1, 1, 1]
    assert all(len(slot.strokes) == 3 for slot in result.characters)


def test_all_strokes_empty(segmenter):
    result = segmenter.segment(make_input([[], []]))
    assert result.characters == []
    assert [s.character_index for s in result.strokes] == [-1, -1]


def test_single_stroke(segmenter):
    stroke = make_stroke([(100, 100), (140, 130)])
    result = segmenter.segment(make_input([stroke]))
    assert len(result.characters) == 1
    assert result.strokes[0].character_index == 0


def test_single_point_stroke(segmenter):
    result = segmenter.segment(make_input([make_stroke([(300, 300)])]))
    assert len(result.characters) == 1
    assert result.characters[0].bbox.width == 0


def test_tiny_lasso_contains_nothing(segmenter):
    strokes = make_character_strokes(500, 100, 60)
    lasso = make_lasso(440, 50, 560, 150)
    lasso.points = lasso.points[:2]
    result = segmenter.segment(make_input(strokes, [lasso]))
    assert result.lassos == []


def test_outputs_reference_input_strokes(segmenter, two_stacked_characters):
    strokes = two_stacked_characters.strokes
    result = segmenter.segment(two_stacked_characters)
    for i, annotated in enumerate(result.strokes):
        assert annotated.index == i
        assert annotated.points is strokes[i]
    assert result.characters[1].strokes[0] is strokes[3]


def test_input_not_mutated(segmenter, two_stacked_characters):
    before = [list(s) for s in two_stacked_characters.strokes]
    segmenter.segment(two_stacked_characters)
    assert two_stacked_characters.strokes == before


@pytest.mark.parametrize('field, value', [
    ('canvas_width', 0),
    ('canvas_height', -5),
    ('max_characters', 0),
    ('max_characters', 2.5),
])
def test_invalid_input_rejected(segmenter, two_stacked_characters, field, value):
    setattr(two_stacked_characters, field, value)
    with pytest.raises(InvalidInputError):
        segmenter.segment(two_stacked_characters)
