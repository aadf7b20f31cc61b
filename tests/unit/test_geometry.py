"""Unit tests for tracing_lib.domain.geometry and tracing_lib.utils.geometry.

Tests:
    - Point, BBox and ViewTransform value objects
    - SubPath and GeometricPath structure, closing segments and length
    - Arc-length measuring, point lookup and fixed-step sampling
"""

import math
import unittest

import numpy as np
import pytest

from tracing_lib.domain.geometry import BBox, GeometricPath, Point, SubPath, ViewTransform
from tracing_lib.utils.geometry import (
    as_polylines,
    cumulative_lengths,
    point_at_distance,
    point_distance,
    sample_points,
    total_length,
)


class TestPoint(unittest.TestCase):
    """Tests for Point."""

    def test_distance(self):
        self.assertEqual(Point(0, 0).distance_to(Point(3, 4)), 5.0)

    def test_arithmetic(self):
        self.assertEqual(Point(1, 2) + Point(3, 4), Point(4, 6))
        self.assertEqual(Point(3, 4) - Point(1, 2), Point(2, 2))
        self.assertEqual(Point(1, 2) * 3, Point(3, 6))

    def test_reflect_about(self):
        self.assertEqual(Point(10, 10).reflect_about(Point(10, 0)), Point(10, -10))

    def test_lerp(self):
        self.assertEqual(Point(0, 0).lerp(Point(10, 20), 0.5), Point(5, 10))

    def test_immutable(self):
        p = Point(1, 2)
        with self.assertRaises(AttributeError):
            p.x = 5

    def test_from_tuple(self):
        self.assertEqual(Point.from_tuple((1, 2)), Point(1.0, 2.0))


class TestBBox(unittest.TestCase):
    """Tests for BBox."""

    def test_dimensions(self):
        box = BBox(10, 20, 50, 100)
        self.assertEqual(box.width, 40)
        self.assertEqual(box.height, 80)
        self.assertEqual(box.center, Point(30, 60))

    def test_from_points(self):
        box = BBox.from_points([Point(5, 1), Point(-2, 8), Point(3, 3)])
        self.assertEqual(box.to_tuple(), (-2, 1, 5, 8))

    def test_from_no_points(self):
        self.assertTrue(BBox.from_points([]).is_degenerate)

    def test_degenerate_when_flat(self):
        self.assertTrue(BBox(0, 0, 10, 0).is_degenerate)
        self.assertTrue(BBox(0, 0, 0, 10).is_degenerate)
        self.assertFalse(BBox(0, 0, 1, 1).is_degenerate)

    def test_union_and_padding(self):
        box = BBox(0, 0, 10, 10).union(BBox(5, -5, 20, 5))
        self.assertEqual(box.to_tuple(), (0, -5, 20, 10))
        self.assertEqual(box.padded(2).to_tuple(), (-2, -7, 22, 12))

    def test_contains(self):
        box = BBox(0, 0, 10, 10)
        self.assertTrue(box.contains(Point(10, 10)))
        self.assertFalse(box.contains(Point(10.5, 5)))
        self.assertTrue(box.contains(Point(10.5, 5), tolerance=1))
        self.assertTrue(box.contains_bbox(BBox(1, 1, 9, 9)))


class TestViewTransform(unittest.TestCase):
    """Tests for ViewTransform."""

    def test_apply_and_invert(self):
        view = ViewTransform(scale=2, translate_x=10, translate_y=-5)
        p = view.apply(Point(3, 4))
        self.assertEqual(p, Point(16, 3))
        self.assertEqual(view.invert(p), Point(3, 4))

    def test_apply_array_matches_apply(self):
        view = ViewTransform(scale=0.5, translate_x=1, translate_y=2)
        arr = view.apply_array([[2, 4], [6, 8]])
        expected = [view.apply(Point(2, 4)).to_list(), view.apply(Point(6, 8)).to_list()]
        np.testing.assert_allclose(arr, expected)

    def test_identity(self):
        self.assertEqual(ViewTransform.identity().apply(Point(7, 9)), Point(7, 9))


class TestSubPath(unittest.TestCase):
    """Tests for SubPath."""

    def setUp(self):
        self.square = SubPath((Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)), closed=True)

    def test_closed_polyline_includes_closing_point(self):
        poly = self.square.polyline()
        self.assertEqual(len(poly), 5)
        self.assertEqual(poly[-1], poly[0])

    def test_closed_length(self):
        self.assertEqual(self.square.length(), 40.0)

    def test_open_length(self):
        open_square = SubPath(self.square.points)
        self.assertEqual(open_square.length(), 30.0)
        self.assertEqual(open_square.end, Point(0, 10))

    def test_closed_end_is_start(self):
        self.assertEqual(self.square.end, Point(0, 0))

    def test_list_points_become_tuple(self):
        sp = SubPath([Point(0, 0), Point(1, 1)])
        self.assertIsInstance(sp.points, tuple)

    def test_to_array_shape(self):
        self.assertEqual(self.square.to_array().shape, (5, 2))

    def test_single_point(self):
        sp = SubPath((Point(3, 3),), closed=True)
        self.assertEqual(sp.length(), 0.0)
        self.assertEqual(len(sp.polyline()), 1)


class TestGeometricPath(unittest.TestCase):
    """Tests for GeometricPath."""

    def test_empty_subpaths_dropped(self):
        path = GeometricPath((SubPath(()), SubPath((Point(0, 0), Point(1, 0)))))
        self.assertEqual(len(path), 1)

    def test_empty(self):
        self.assertTrue(GeometricPath().is_empty)
        self.assertEqual(GeometricPath().length(), 0.0)

    def test_bbox_spans_subpaths(self):
        path = GeometricPath((
            SubPath((Point(0, 0), Point(10, 0))),
            SubPath((Point(5, 5), Point(5, 20))),
        ))
        self.assertEqual(path.bbox.to_tuple(), (0, 0, 10, 20))
        self.assertEqual(path.point_count, 4)

    def test_transformed(self):
        path = GeometricPath.from_points([(0, 0), (10, 0)])
        scaled = path.transformed(ViewTransform(scale=3, translate_x=1))
        self.assertEqual(scaled.length(), 30.0)
        self.assertEqual(scaled.start, Point(1, 0))

    def test_list_round_trip(self):
        path = GeometricPath((
            SubPath((Point(0, 0), Point(1, 0), Point(1, 1)), closed=True),
            SubPath((Point(5, 5),)),
        ))
        self.assertEqual(GeometricPath.from_list(path.to_list()), path)


class TestArcLength(unittest.TestCase):
    """Tests for total_length and cumulative_lengths."""

    def test_point_distance(self):
        self.assertEqual(point_distance((0, 0), (3, 4)), 5.0)

    def test_cumulative(self):
        np.testing.assert_allclose(cumulative_lengths([[0, 0], [3, 4], [3, 10]]), [0, 5, 11])

    def test_total_length_of_list(self):
        self.assertEqual(total_length([(0, 0), (100, 0), (100, 100)]), 200.0)

    def test_total_length_ignores_gaps_between_subpaths(self):
        path = GeometricPath((
            SubPath((Point(0, 0), Point(10, 0))),
            SubPath((Point(100, 100), Point(100, 110))),
        ))
        self.assertEqual(total_length(path), 20.0)

    def test_total_length_includes_closing_segment(self):
        tri = GeometricPath.from_points([(0, 0), (10, 0), (10, 10)], closed=True)
        self.assertAlmostEqual(total_length(tri), 20 + math.sqrt(200))

    def test_empty_inputs(self):
        self.assertEqual(total_length([]), 0.0)
        self.assertEqual(as_polylines(GeometricPath()), [])


class TestPointAtDistance(unittest.TestCase):
    """Tests for point_at_distance."""

    def setUp(self):
        self.path = [(0, 0), (100, 0), (100, 100)]

    def test_inside_segment(self):
        self.assertEqual(point_at_distance(self.path, 150), (Point(100, 50), True))

    def test_vertex(self):
        self.assertEqual(point_at_distance(self.path, 100), (Point(100, 0), True))

    def test_clamps_past_end(self):
        self.assertEqual(point_at_distance(self.path, 500), (Point(100, 100), False))

    def test_clamps_before_start(self):
        self.assertEqual(point_at_distance(self.path, -5), (Point(0, 0), False))

    def test_walks_into_next_subpath(self):
        path = GeometricPath((
            SubPath((Point(0, 0), Point(10, 0))),
            SubPath((Point(0, 50), Point(0, 60))),
        ))
        point, within = point_at_distance(path, 15)
        self.assertTrue(within)
        self.assertEqual(point, Point(0, 55))

    def test_empty_path_raises(self):
        with self.assertRaises(ValueError):
            point_at_distance([], 0)


class TestSamplePoints(unittest.TestCase):
    """Tests for sample_points."""

    def test_fixed_step(self):
        samples = sample_points([(0, 0), (25, 0)], step=10)
        self.assertEqual(samples.tolist(), [[0, 0], [10, 0], [20, 0]])

    def test_include_end(self):
        samples = sample_points([(0, 0), (25, 0)], step=10, include_end=True)
        self.assertEqual(samples[-1].tolist(), [25, 0])
        self.assertEqual(len(samples), 4)

    def test_restarts_per_subpath(self):
        path = GeometricPath((
            SubPath((Point(0, 0), Point(15, 0))),
            SubPath((Point(0, 100), Point(15, 100))),
        ))
        samples = sample_points(path, step=10)
        self.assertEqual(samples.tolist(), [[0, 0], [10, 0], [0, 100], [10, 100]])

    def test_zero_length_subpath_contributes_its_point(self):
        path = GeometricPath((SubPath((Point(7, 7),)),))
        self.assertEqual(sample_points(path, step=10).tolist(), [[7, 7]])

    def test_empty(self):
        self.assertEqual(sample_points([], step=10).shape, (0, 2))

    def test_samples_follow_closing_segment(self):
        square = GeometricPath.from_points([(0, 0), (10, 0), (10, 10), (0, 10)], closed=True)
        samples = sample_points(square, step=5)
        self.assertEqual(len(samples), 8)
        self.assertEqual(samples[-1].tolist(), [0, 5])


@pytest.mark.parametrize("step", [0, -1])
def test_sample_points_rejects_bad_step(step):
    with pytest.raises(ValueError):
        sample_points([(0, 0), (1, 0)], step)
