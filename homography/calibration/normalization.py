"""Hartley conditioning of correspondences before the DLT solve."""

import logging
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np
import scipy.linalg

from homography.errors import DegenerateConfiguration
from homography.geometry.correspondences import LineCorrespondence, PointCorrespondence
from homography.geometry.primitives import Line, Point

logger = logging.getLogger(__name__)

TARGET_MEAN_DISTANCE = np.sqrt(2)


def line_foot_points(lines: Sequence[Line]) -> np.ndarray:
    """Points of each line closest to the origin. Lines at infinity are skipped."""
    feet = []
    for line in lines:
        squared = line.a * line.a + line.b * line.b
        if squared == 0:
            continue
        feet.append((-line.a * line.c / squared, -line.b * line.c / squared))
    return np.array(feet, dtype=np.float64).reshape(-1, 2)


def similarity_transform(points: np.ndarray) -> np.ndarray:
    """
    Similarity moving points to zero mean and mean distance sqrt(2).

    Args:
        points: (N, 2) array of conditioning points

    Returns:
        3x3 matrix T; identity when there are no points

    Raises:
        DegenerateConfiguration: if all points coincide
    """
    points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    if len(points) == 0:
        return np.eye(3)

    centroid = np.mean(points, axis=0)
    mean_distance = np.mean(np.linalg.norm(points - centroid, axis=1))
    scale_reference = max(1.0, float(np.max(np.abs(centroid))))
    if mean_distance <= 1e-12 * scale_reference:
        raise DegenerateConfiguration(
            f"All {len(points)} conditioning points coincide at {tuple(centroid)}")

    s = TARGET_MEAN_DISTANCE / mean_distance
    return np.array([[s, 0.0, -s * centroid[0]],
                     [0.0, s, -s * centroid[1]],
                     [0.0, 0.0, 1.0]])


def _transform_point(T: np.ndarray, point: Point) -> Point:
    return Point.from_homogeneous(T @ point.to_homogeneous())


def _transform_line(T_inv_t: np.ndarray, line: Line) -> Line:
    vector = T_inv_t @ line.to_vector()
    return Line(*(vector / np.linalg.norm(vector)))


@dataclass(frozen=True, eq=False)
class ConditioningTransform:
    """Pair of similarities conditioning the source and target planes."""
    source: np.ndarray
    target: np.ndarray

    @classmethod
    def from_correspondences(cls, points: Sequence[PointCorrespondence],
                             lines: Sequence[LineCorrespondence]) -> 'ConditioningTransform':
        """Fit one similarity per plane from point coordinates and line foot points."""
        source_points = np.vstack([
            np.array([pc.source.as_array() for pc in points]).reshape(-1, 2),
            line_foot_points([lc.source for lc in lines]),
        ])
        target_points = np.vstack([
            np.array([pc.target.as_array() for pc in points]).reshape(-1, 2),
            line_foot_points([lc.target for lc in lines]),
        ])
        transform = cls(similarity_transform(source_points), similarity_transform(target_points))
        logger.debug("Conditioning scales: source=%.6g target=%.6g",
                     transform.source[0, 0], transform.target[0, 0])
        return transform

    def apply(self, points: Sequence[PointCorrespondence],
              lines: Sequence[LineCorrespondence]
              ) -> Tuple[Tuple[PointCorrespondence, ...], Tuple[LineCorrespondence, ...]]:
        """Map correspondences into the conditioned frames.

        Points map as T x, lines as T^-T l (rescaled to unit norm).
        """
        source_inv_t = scipy.linalg.inv(self.source).T
        target_inv_t = scipy.linalg.inv(self.target).T
        conditioned_points = tuple(
            PointCorrespondence(_transform_point(self.source, pc.source),
                                _transform_point(self.target, pc.target))
            for pc in points
        )
        conditioned_lines = tuple(
            LineCorrespondence(_transform_line(source_inv_t, lc.source),
                               _transform_line(target_inv_t, lc.target))
            for lc in lines
        )
        return conditioned_points, conditioned_lines

    def denormalize(self, conditioned: np.ndarray) -> np.ndarray:
        """Homography in original coordinates: T_target^-1 H_n T_source."""
        return scipy.linalg.solve(self.target, conditioned @ self.source)
