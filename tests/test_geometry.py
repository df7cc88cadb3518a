"""Tests for geometry module."""

import dataclasses

import numpy as np
import pytest

from homography.errors import DegenerateConfiguration
from homography.geometry.correspondences import LineCorrespondence, PointCorrespondence
from homography.geometry.primitives import Line, Point

from conftest import project, project_line


class TestPoint:
    """Test Point value type."""

    def test_create_point(self):
        """Test create point."""
        p = Point(1.0, 2.0)
        assert p.x == 1.0
        assert p.y == 2.0

    def test_coordinates_are_floats(self):
        """Test coordinates are floats."""
        p = Point(1, 2)
        assert isinstance(p.x, float)
        assert isinstance(p.y, float)

    def test_exact_equality(self):
        """Test exact equality."""
        assert Point(1, 2) == Point(1.0, 2.0)
        assert Point(1, 2) != Point(1, 2 + 1e-12)

    def test_point_is_immutable(self):
        """Test point is immutable."""
        p = Point(1, 2)
        with pytest.raises(dataclasses.FrozenInstanceError):
            p.x = 5.0

    def test_to_homogeneous(self):
        """Test to homogeneous."""
        assert np.array_equal(Point(1, 2).to_homogeneous(), [1.0, 2.0, 1.0])

    def test_as_array(self):
        """Test point as a plain coordinate array."""
        assert np.array_equal(Point(3, -4).as_array(), [3.0, -4.0])

    def test_from_homogeneous(self):
        """Test from homogeneous."""
        p = Point.from_homogeneous([2.0, 4.0, 2.0])
        assert p == Point(1, 2)

    def test_from_homogeneous_at_infinity(self):
        """Test from homogeneous at infinity."""
        with pytest.raises(DegenerateConfiguration):
            Point.from_homogeneous([1.0, 1.0, 0.0])


class TestLine:
    """Test Line value type."""

    def test_create_line(self):
        """Test create line."""
        line = Line(1.0, 2.0, 3.0)
        assert line.a == 1.0
        assert line.b == 2.0
        assert line.c == 3.0

    def test_zero_line_rejected(self):
        """Test zero line rejected."""
        with pytest.raises(DegenerateConfiguration):
            Line(0, 0, 0)

    def test_line_from_points(self):
        """Test line from points."""
        line = Line.from_points(Point(1, 2), Point(3, 4))
        assert (line.a, line.b, line.c) == (-2.0, 2.0, -2.0)

    def test_line_from_points_contains_both(self):
        """Test line from points contains both."""
        p, q = Point(148, 337), Point(131, 516)
        line = Line.from_points(p, q)
        assert line.contains(p)
        assert line.contains(q)
        assert not line.contains(Point(0, 0))

    def test_line_from_coincident_points(self):
        """Test line from coincident points."""
        with pytest.raises(DegenerateConfiguration):
            Line.from_points(Point(5, 5), Point(5, 5))

    def test_to_vector(self):
        """Test to vector."""
        assert np.array_equal(Line(1, 2, 3).to_vector(), [1.0, 2.0, 3.0])

    def test_intersection(self):
        """Test intersection."""
        horizontal = Line(0, 1, -2)
        vertical = Line(1, 0, -3)
        assert horizontal.intersection(vertical) == Point(3, 2)

    def test_parallel_lines_do_not_intersect(self):
        """Test parallel lines do not intersect."""
        with pytest.raises(DegenerateConfiguration):
            Line(0, 1, -2).intersection(Line(0, 2, 7))

    def test_identical_lines_do_not_intersect(self):
        """Test identical lines do not intersect."""
        with pytest.raises(DegenerateConfiguration):
            Line(1, 2, 3).intersection(Line(2, 4, 6))


class TestPointCorrespondence:
    """Test point correspondence restriction rows."""

    def test_restriction_rows(self):
        """Test restriction rows."""
        pc = PointCorrespondence(Point(1, 2), Point(3, 4))
        expected = np.array([
            [-1, -2, -1, 0, 0, 0, 3, 6, 3],
            [0, 0, 0, -1, -2, -1, 4, 8, 4],
        ], dtype=np.float64)
        assert np.array_equal(pc.restriction(), expected)

    def test_restriction_vanishes_on_true_homography(self, ground_truth_h):
        """Test restriction vanishes on true homography."""
        source = Point(37, 52)
        pc = PointCorrespondence(source, project(ground_truth_h, source))
        residual = pc.restriction() @ ground_truth_h.reshape(9)
        assert np.allclose(residual, 0, atol=1e-10)


class TestLineCorrespondence:
    """Test line correspondence restriction rows."""

    def test_restriction_rows(self):
        """Test restriction rows."""
        lc = LineCorrespondence(Line(1, 2, 3), Line(4, 5, 6))
        expected = np.array([
            [0, -12, 8, 0, -15, 10, 0, -18, 12],
            [12, 0, -4, 15, 0, -5, 18, 0, -6],
        ], dtype=np.float64)
        assert np.array_equal(lc.restriction(), expected)

    def test_restriction_vanishes_on_true_homography(self, ground_truth_h):
        """Test restriction vanishes on true homography."""
        source = Line.from_points(Point(10, 5), Point(60, 90))
        lc = LineCorrespondence(source, project_line(ground_truth_h, source))
        restriction = lc.restriction()
        residual = restriction @ ground_truth_h.reshape(9)
        assert np.allclose(residual, 0, atol=1e-9 * np.abs(restriction).max())

    @pytest.mark.parametrize("source", [Line(3, 4, 0), Line(5, 1, 0), Line(1, 7, 0), Line(0, 0, 1)])
    def test_restriction_has_rank_two(self, source):
        """Test restriction has rank two."""
        lc = LineCorrespondence(source, Line(1, -2, 5))
        assert np.linalg.matrix_rank(lc.restriction()) == 2
