"""Homography matrix validation utilities."""

import numpy as np
from typing import Sequence, Tuple

from homography.geometry.primitives import Point


class HomographyValidator:
    """Validate homography matrices and point configurations."""

    def __init__(self, singular_tolerance: float = 1e-12, collinearity_tolerance: float = 1e-9):
        self.singular_tolerance = singular_tolerance
        self.collinearity_tolerance = collinearity_tolerance

    def validate_transformation(self, H: np.ndarray) -> Tuple[bool, str]:
        """Validate homography matrix properties."""
        if H is None:
            return False, "Matrix is None"

        H = np.asarray(H, dtype=np.float64)
        if H.shape != (3, 3):
            return False, "Invalid matrix shape"

        if not np.all(np.isfinite(H)):
            return False, "Matrix has non-finite entries"

        norm = np.linalg.norm(H)
        if norm == 0:
            return False, "Matrix is zero"

        # scale-free: H is only defined up to a factor
        singular_values = np.linalg.svd(H / norm, compute_uv=False)
        if singular_values[2] < self.singular_tolerance * singular_values[0]:
            return False, "Matrix is singular"

        return True, "Valid"

    def are_collinear(self, points: Sequence[Point]) -> bool:
        """Check whether all points lie on one line (scale-relative test)."""
        if len(points) < 3:
            return True
        coords = np.array([[p.x, p.y] for p in points], dtype=np.float64)
        centered = coords - coords.mean(axis=0)
        singular_values = np.linalg.svd(centered, compute_uv=False)
        if singular_values[0] == 0:
            return True
        return bool(singular_values[1] <= self.collinearity_tolerance * singular_values[0])
