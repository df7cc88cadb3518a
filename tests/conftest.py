"""Shared fixtures for the homography test suite."""

import numpy as np
import pytest

from homography.geometry.primitives import Line, Point


def project(H: np.ndarray, point: Point) -> Point:
    """Apply H to a point."""
    return Point.from_homogeneous(H @ point.to_homogeneous())


def project_line(H: np.ndarray, line: Line) -> Line:
    """Map a line with H^-T."""
    return Line(*(np.linalg.inv(H).T @ line.to_vector()))


def unit_matrix(H: np.ndarray) -> np.ndarray:
    """Scale H to unit norm with its largest-magnitude entry positive."""
    H = np.asarray(H, dtype=np.float64) / np.linalg.norm(H)
    if H.flat[np.argmax(np.abs(H))] < 0:
        H = -H
    return H


def assert_proportional(actual: np.ndarray, expected: np.ndarray, atol: float = 1e-9):
    """Assert two matrices are equal up to a nonzero scale."""
    np.testing.assert_allclose(unit_matrix(actual), unit_matrix(expected), rtol=0, atol=atol)


@pytest.fixture
def ground_truth_h():
    """Perspective homography with H[2, 2] = 1."""
    return np.array([[1.2, 0.1, 30.0],
                     [0.05, 0.9, -20.0],
                     [0.0005, 0.0002, 1.0]])


@pytest.fixture
def source_points():
    """Points in general position (no three collinear)."""
    return [Point(0, 0), Point(100, 0), Point(100, 80), Point(0, 80),
            Point(37, 52), Point(71, 18), Point(12, 33), Point(88, 61)]


@pytest.fixture
def rectangle_scene():
    """Documented scenario: photographed quadrilateral and the 80x60 rectangle it shows."""
    corners = [Point(148, 337), Point(131, 516), Point(321, 486), Point(332, 370)]
    rectified = [Point(0, 0), Point(0, 60), Point(80, 60), Point(80, 0)]
    return corners, rectified
