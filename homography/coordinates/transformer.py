"""Coordinate transformation utilities."""

import cv2
import numpy as np
from typing import Dict, Iterable, List, Tuple, Union, Optional

from homography.coordinates.validator import HomographyValidator
from homography.geometry.primitives import Line
from homography.utils.metrics import reprojection_statistics, root_mean_square


class CoordinateTransformer:
    """Transform points and lines between the source and target planes."""

    def __init__(self, homography_matrix: Optional[np.ndarray] = None):
        """
        Initialize coordinate transformer.

        Args:
            homography_matrix: Optional 3x3 homography matrix mapping source to target
        """
        self.H = None
        self.H_inv = None
        self.validator = HomographyValidator()
        if homography_matrix is not None:
            self.set_homography(homography_matrix)

    def set_homography(self, homography_matrix: np.ndarray):
        """
        Set or update the homography matrix.

        Args:
            homography_matrix: 3x3 homography matrix

        Raises:
            ValueError: if the matrix is not a finite 3x3 array
        """
        H = np.asarray(homography_matrix, dtype=np.float64)
        valid, reason = self.validator.validate_transformation(H)
        if H.shape != (3, 3) or not np.all(np.isfinite(H)):
            raise ValueError(f"Invalid homography: {reason}")

        self.H = H
        # singular matrices still map forward; only the inverse is unavailable
        self.H_inv = np.linalg.inv(H) if valid else None

    @staticmethod
    def _as_points(coords: Union[np.ndarray, Tuple[float, float]]) -> np.ndarray:
        if isinstance(coords, tuple):
            coords = np.array([coords])
        return np.asarray(coords, dtype=np.float64).reshape(-1, 2)

    @staticmethod
    def _warp(points: np.ndarray, H: np.ndarray) -> np.ndarray:
        warped = cv2.perspectiveTransform(points.reshape(-1, 1, 2), H)
        return warped.reshape(-1, 2)

    def source_to_target(self, source_coords: Union[np.ndarray, Tuple[float, float]]) -> Optional[np.ndarray]:
        """
        Transform source-plane coordinates to the target plane.

        Args:
            source_coords: (x, y) tuple or (N, 2) array

        Returns:
            (N, 2) array of target coordinates, or None if no homography set
        """
        if self.H is None:
            return None
        return self._warp(self._as_points(source_coords), self.H)

    def target_to_source(self, target_coords: Union[np.ndarray, Tuple[float, float]]) -> Optional[np.ndarray]:
        """
        Transform target-plane coordinates back to the source plane.

        Returns:
            (N, 2) array of source coordinates, or None if the inverse is unavailable
        """
        if self.H_inv is None:
            return None
        return self._warp(self._as_points(target_coords), self.H_inv)

    def transform_lines(self, lines: Iterable[Line]) -> Optional[List[Line]]:
        """Map source lines to the target plane as H^-T l."""
        if self.H_inv is None:
            return None
        return [Line(*(self.H_inv.T @ line.to_vector())) for line in lines]

    def reprojection_error(self, source_points: np.ndarray,
                           target_points: np.ndarray) -> Optional[Dict[str, float]]:
        """
        Reprojection error statistics of source points against their targets.

        Returns:
            Dictionary of mean/median/max/std/rms errors, or None if no homography set
        """
        projected = self.source_to_target(source_points)
        if projected is None:
            return None
        target_points = self._as_points(target_points)
        stats = reprojection_statistics(projected, target_points)
        stats['rms_error'] = root_mean_square(np.linalg.norm(projected - target_points, axis=1))
        return stats
