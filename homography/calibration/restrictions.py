"""DLT restrictions built from point and line correspondences."""

import logging
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

import numpy as np

from homography.calibration.normalization import ConditioningTransform
from homography.calibration.solver import Solution, solve_homogeneous
from homography.config import merge_config
from homography.coordinates.validator import HomographyValidator
from homography.errors import DegenerateConfiguration, InsufficientCorrespondences, NumericalInstability
from homography.geometry.correspondences import LineCorrespondence, PointCorrespondence

logger = logging.getLogger(__name__)


def build_coefficient_matrix(points: Sequence[PointCorrespondence],
                             lines: Sequence[LineCorrespondence]) -> np.ndarray:
    """
    Stack the restriction rows of every correspondence.

    Args:
        points: Point correspondences, rows first in insertion order
        lines: Line correspondences, rows after the points

    Returns:
        (2 * (len(points) + len(lines)), 9) coefficient matrix
    """
    blocks = [pc.restriction() for pc in points] + [lc.restriction() for lc in lines]
    if not blocks:
        return np.zeros((0, 9))
    return np.vstack(blocks)


class LinearSystem:
    """Immutable snapshot of the DLT system for a set of correspondences."""

    def __init__(self, point_correspondences: Sequence[PointCorrespondence],
                 line_correspondences: Sequence[LineCorrespondence],
                 config: Optional[Mapping[str, Any]] = None):
        """
        Initialize the system

        Args:
            point_correspondences: Point correspondences to snapshot
            line_correspondences: Line correspondences to snapshot
            config: Configuration overrides, see homography.config
        """
        self._points = tuple(point_correspondences)
        self._lines = tuple(line_correspondences)
        self._config = merge_config(config)
        self._settings = self._config['solver']

        matrix = build_coefficient_matrix(self._points, self._lines)
        matrix.flags.writeable = False
        self._matrix = matrix

    @property
    def matrix(self) -> np.ndarray:
        """Coefficient matrix A of the raw (unconditioned) correspondences."""
        return self._matrix

    @property
    def point_correspondences(self) -> Tuple[PointCorrespondence, ...]:
        return self._points

    @property
    def line_correspondences(self) -> Tuple[LineCorrespondence, ...]:
        return self._lines

    @property
    def settings(self) -> Dict[str, Any]:
        return dict(self._settings)

    @property
    def num_equations(self) -> int:
        return self._matrix.shape[0]

    def conditioned(self) -> Tuple[np.ndarray, Optional[ConditioningTransform]]:
        """Coefficient matrix actually solved, with the conditioning used (if any)."""
        if not self._settings['normalize']:
            return self._matrix, None
        transform = ConditioningTransform.from_correspondences(self._points, self._lines)
        points, lines = transform.apply(self._points, self._lines)
        return build_coefficient_matrix(points, lines), transform

    def compute(self) -> Solution:
        """
        Solve for the homography.

        Returns:
            Solution with a unit-norm 3x3 matrix and the residual ||A h||

        Raises:
            InsufficientCorrespondences: fewer than 8 equations
            DegenerateConfiguration: rank-deficient correspondences
            NumericalInstability: decomposition failure
        """
        settings = self._settings
        # before conditioning, which would reject a single repeated point as degenerate
        if self.num_equations < settings['min_equations']:
            raise InsufficientCorrespondences(
                f"{self.num_equations} equations available, at least "
                f"{settings['min_equations']} required (4 point or line correspondences)")
        if not np.all(np.isfinite(self._matrix)):
            raise NumericalInstability("Correspondences contain non-finite coordinates")

        matrix, transform = self.conditioned()
        try:
            h, value, rank = solve_homogeneous(matrix, settings['method'], settings['rank_tolerance'],
                                               settings['min_equations'])
        except DegenerateConfiguration:
            self._log_collinear_planes()
            raise

        homography = h.reshape(3, 3)
        if transform is not None:
            homography = transform.denormalize(homography)
        homography = homography / np.linalg.norm(homography)
        if homography.flat[np.argmax(np.abs(homography))] < 0:
            homography = -homography

        valid, reason = HomographyValidator().validate_transformation(homography)
        if not valid:
            logger.warning("Solved matrix rejected: %s", reason)
            self._log_collinear_planes()
            raise DegenerateConfiguration(
                f"Solved matrix is not an invertible homography ({reason}); "
                f"three or more correspondences are likely collinear")

        logger.debug("Solved %d points, %d lines with %s: residual %.3e",
                     len(self._points), len(self._lines), settings['method'], value)
        return Solution(matrix=homography, value=value, rank=rank, method=settings['method'],
                        normalized_input=transform is not None, num_equations=self.num_equations)

    def _log_collinear_planes(self):
        if len(self._points) < 3:
            return
        validator = HomographyValidator(
            collinearity_tolerance=self._config['geometry']['collinearity_tolerance'])
        for plane in ('source', 'target'):
            if validator.are_collinear([getattr(pc, plane) for pc in self._points]):
                logger.warning("All %d %s points are collinear", len(self._points), plane)

    def __repr__(self) -> str:
        return (f"LinearSystem(points={len(self._points)}, lines={len(self._lines)}, "
                f"shape={self._matrix.shape})")
