"""Tests for the correspondence store."""

import pytest

from homography.calibration.restrictions import LinearSystem
from homography.core import HomographyComputation
from homography.errors import InsufficientCorrespondences
from homography.geometry.primitives import Line, Point

from conftest import assert_proportional, project


class TestHomographyComputation:
    """Test HomographyComputation accumulation."""

    def test_create_homography_computation(self):
        """Test create homography computation."""
        hc = HomographyComputation()
        assert len(hc) == 0
        assert hc.point_correspondences == ()
        assert hc.line_correspondences == ()

    def test_add_point_correspondence(self):
        """Test add point correspondence."""
        hc = HomographyComputation()
        hc.add_point_correspondence(Point(1, 2), Point(3, 4))
        assert len(hc.point_correspondences) == 1
        assert hc.point_correspondences[0].source == Point(1, 2)
        assert hc.point_correspondences[0].target == Point(3, 4)

    def test_add_line_correspondence(self):
        """Test add line correspondence."""
        hc = HomographyComputation()
        hc.add_line_correspondence(Line(1, 2, 3), Line(4, 5, 6))
        assert len(hc.line_correspondences) == 1

    def test_duplicates_are_kept(self):
        """Test duplicates are kept."""
        hc = HomographyComputation()
        for expected in range(1, 4):
            hc.add_point_correspondence(Point(1, 2), Point(3, 4))
            assert len(hc.point_correspondences) == expected
        hc.add_line_correspondence(Line(1, 2, 3), Line(4, 5, 6))
        hc.add_line_correspondence(Line(1, 2, 3), Line(4, 5, 6))
        assert len(hc) == 5

    def test_insertion_order_preserved(self):
        """Test insertion order preserved."""
        hc = HomographyComputation()
        sources = [Point(i, 2 * i) for i in range(5)]
        for p in sources:
            hc.add_point_correspondence(p, p)
        assert [pc.source for pc in hc.point_correspondences] == sources

    def test_get_restrictions(self):
        """Test get restrictions."""
        hc = HomographyComputation()
        hc.add_point_correspondence(Point(1, 2), Point(3, 4))
        hc.add_line_correspondence(Line(1, 2, 3), Line(4, 5, 6))

        restrictions = hc.get_restrictions()
        assert isinstance(restrictions, LinearSystem)
        assert restrictions.matrix.shape == (4, 9)

    def test_get_restrictions_does_not_mutate(self):
        """Test get restrictions does not mutate."""
        hc = HomographyComputation()
        hc.add_point_correspondence(Point(1, 2), Point(3, 4))
        hc.get_restrictions()
        hc.get_restrictions()
        assert len(hc) == 1

    def test_get_restrictions_reflects_new_correspondences(self, ground_truth_h, source_points):
        """Test get restrictions reflects new correspondences."""
        hc = HomographyComputation()
        for p in source_points[:3]:
            hc.add_point_correspondence(p, project(ground_truth_h, p))
        early = hc.get_restrictions()
        with pytest.raises(InsufficientCorrespondences):
            early.compute()

        hc.add_point_correspondence(source_points[3], project(ground_truth_h, source_points[3]))
        late = hc.get_restrictions()
        assert early.num_equations == 6
        assert late.num_equations == 8
        assert_proportional(late.compute().matrix, ground_truth_h)

    def test_config_reaches_system(self):
        """Test config reaches system."""
        hc = HomographyComputation({'solver': {'method': 'eigh', 'normalize': False}})
        settings = hc.get_restrictions().settings
        assert settings['method'] == 'eigh'
        assert settings['normalize'] is False

    def test_clear(self):
        """Test clear."""
        hc = HomographyComputation()
        hc.add_point_correspondence(Point(1, 2), Point(3, 4))
        hc.add_line_correspondence(Line(1, 2, 3), Line(4, 5, 6))
        hc.clear()
        assert len(hc) == 0
