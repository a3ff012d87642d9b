"""Unit tests for lasso containment and protected-group resolution.

Tests cover:
    - point_in_polygon: square, triangle, concave L-shape, degenerate rings
    - strokes_in_lasso: threshold boundary, empty strokes
    - resolve_protected_groups: stealing, empty lassos, ordering
"""

import unittest

import numpy as np

from stroke_segmenter.analysis.lasso import (
    containment_fraction,
    point_in_polygon,
    points_in_polygon,
    resolve_protected_groups,
    strokes_in_lasso,
)
from stroke_segmenter.domain import Vertex
from tests.helpers import make_horizontal_stroke, make_lasso

SQUARE = [Vertex(0, 0), Vertex(100, 0), Vertex(100, 100), Vertex(0, 100)]
TRIANGLE = [Vertex(0, 0), Vertex(100, 0), Vertex(50, 100)]
L_SHAPE = [
    Vertex(0, 0), Vertex(100, 0), Vertex(100, 50),
    Vertex(50, 50), Vertex(50, 100), Vertex(0, 100),
]


class TestPointInPolygon(unittest.TestCase):
    """Tests for the ray-casting predicate."""

    def test_square_inside(self):
        self.assertTrue(point_in_polygon(50, 50, SQUARE))

    def test_square_outside(self):
        self.assertFalse(point_in_polygon(150, 50, SQUARE))
        self.assertFalse(point_in_polygon(50, -10, SQUARE))

    def test_triangle(self):
        self.assertTrue(point_in_polygon(50, 10, TRIANGLE))
        self.assertFalse(point_in_polygon(10, 90, TRIANGLE))

    def test_concave_polygon(self):
        """The notch of the L is outside."""
        self.assertTrue(point_in_polygon(25, 75, L_SHAPE))
        self.assertTrue(point_in_polygon(75, 25, L_SHAPE))
        self.assertFalse(point_in_polygon(75, 75, L_SHAPE))

    def test_degenerate_polygons_contain_nothing(self):
        self.assertFalse(point_in_polygon(0, 0, []))
        self.assertFalse(point_in_polygon(5, 5, [Vertex(0, 0), Vertex(10, 10)]))

    def test_vectorized_matches_scalar(self):
        xs = np.array([50.0, 150.0, 25.0, 75.0])
        ys = np.array([50.0, 50.0, 75.0, 75.0])
        result = points_in_polygon(xs, ys, L_SHAPE)
        expected = [point_in_polygon(x, y, L_SHAPE) for x, y in zip(xs, ys)]
        self.assertEqual(result.tolist(), expected)


class TestStrokesInLasso(unittest.TestCase):
    """Tests for threshold-based stroke containment."""

    def setUp(self):
        # x = 10, 30, ..., 190: exactly five of ten points inside SQUARE
        self.half_in = make_horizontal_stroke(50, 10, 190)
        self.inside = make_horizontal_stroke(50, 10, 90)
        self.outside = make_horizontal_stroke(50, 210, 290)

    def test_containment_fraction(self):
        self.assertAlmostEqual(containment_fraction(self.half_in, SQUARE), 0.5)
        self.assertEqual(containment_fraction(self.inside, SQUARE), 1.0)
        self.assertEqual(containment_fraction([], SQUARE), 0.0)

    def test_threshold_is_inclusive(self):
        self.assertEqual(strokes_in_lasso([self.half_in], SQUARE, 0.5), [0])

    def test_just_below_threshold_excluded(self):
        self.assertEqual(strokes_in_lasso([self.half_in], SQUARE, 0.51), [])

    def test_indices_ascending(self):
        strokes = [self.inside, self.outside, self.half_in, self.inside]
        self.assertEqual(strokes_in_lasso(strokes, SQUARE, 0.5), [0, 2, 3])

    def test_empty_stroke_never_contained(self):
        self.assertEqual(strokes_in_lasso([[]], SQUARE, 0.5), [])

    def test_degenerate_lasso(self):
        self.assertEqual(strokes_in_lasso([self.inside], SQUARE[:2], 0.5), [])


class TestResolveProtectedGroups(unittest.TestCase):
    """Tests for last-lasso-wins ownership."""

    def setUp(self):
        self.strokes = [
            make_horizontal_stroke(50, 10, 40),
            make_horizontal_stroke(50, 110, 140),
            make_horizontal_stroke(50, 210, 240),
        ]

    def test_disjoint_lassos(self):
        groups = resolve_protected_groups(
            self.strokes, [make_lasso(0, 0, 100, 100).points, make_lasso(200, 0, 300, 100).points], 0.5
        )
        self.assertEqual([(g.lasso_index, g.stroke_indices) for g in groups], [(0, (0,)), (1, (2,))])

    def test_later_lasso_steals(self):
        """The second lasso takes stroke 1 from the first."""
        groups = resolve_protected_groups(
            self.strokes, [make_lasso(0, 0, 150, 100).points, make_lasso(100, 0, 300, 100).points], 0.5
        )
        self.assertEqual([(g.lasso_index, g.stroke_indices) for g in groups], [(0, (0,)), (1, (1, 2))])

    def test_fully_stolen_lasso_disappears(self):
        lasso = make_lasso(0, 0, 300, 100).points
        groups = resolve_protected_groups(self.strokes, [lasso, lasso], 0.5)
        self.assertEqual(len(groups), 1)
        self.assertEqual(groups[0].lasso_index, 1)
        self.assertEqual(groups[0].stroke_indices, (0, 1, 2))

    def test_empty_lasso_omitted(self):
        groups = resolve_protected_groups(
            self.strokes, [make_lasso(500, 500, 600, 600).points, make_lasso(0, 0, 100, 100).points], 0.5
        )
        self.assertEqual([g.lasso_index for g in groups], [1])

    def test_no_lassos(self):
        self.assertEqual(resolve_protected_groups(self.strokes, [], 0.5), ())

    def test_groups_are_disjoint(self):
        polygons = [make_lasso(0, 0, 150, 100).points, make_lasso(100, 0, 250, 100).points,
                    make_lasso(0, 0, 50, 100).points]
        groups = resolve_protected_groups(self.strokes, polygons, 0.5)
        owned = [i for g in groups for i in g.stroke_indices]
        self.assertEqual(len(owned), len(set(owned)))

    def test_hulls_not_built_yet(self):
        groups = resolve_protected_groups(self.strokes, [make_lasso(0, 0, 100, 100).points], 0.5)
        self.assertEqual(groups[0].hull, ())


if __name__ == '__main__':
    unittest.main()
