"""Minimal-norm solution of the homogeneous DLT system."""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Tuple

import numpy as np
import scipy.linalg

from homography.errors import DegenerateConfiguration, InsufficientCorrespondences, NumericalInstability
from homography.geometry.correspondences import PointCorrespondence
from homography.geometry.primitives import Line, Point

logger = logging.getLogger(__name__)

UNKNOWNS = 9
EXPECTED_RANK = UNKNOWNS - 1


@dataclass(frozen=True, eq=False)
class Solution:
    """Solved homography.

    matrix is only meaningful up to a nonzero scale; it is stored with unit
    Frobenius norm and its largest-magnitude entry positive. value is the
    algebraic residual ||A h|| of the solve.
    """
    matrix: np.ndarray
    value: float
    rank: int = EXPECTED_RANK
    method: str = 'svd'
    normalized_input: bool = False
    num_equations: int = field(default=0)

    def __post_init__(self):
        matrix = np.array(self.matrix, dtype=np.float64).reshape(3, 3)
        matrix.flags.writeable = False
        object.__setattr__(self, 'matrix', matrix)
        object.__setattr__(self, 'value', float(self.value))

    def normalized(self) -> np.ndarray:
        """Matrix scaled so that its bottom-right entry is 1."""
        if self.matrix[2, 2] == 0:
            raise DegenerateConfiguration("H[2, 2] is zero; the matrix cannot be scaled to H[2, 2] = 1")
        return self.matrix / self.matrix[2, 2]

    def transform_point(self, point: Point) -> Point:
        return Point.from_homogeneous(self.matrix @ point.to_homogeneous())

    def transform_line(self, line: Line) -> Line:
        """Map a source line to the target plane as H^-T l."""
        try:
            vector = scipy.linalg.solve(self.matrix.T, line.to_vector())
        except scipy.linalg.LinAlgError as e:
            raise DegenerateConfiguration("Singular homography cannot map lines") from e
        return Line(*vector)

    def reprojection_errors(self, correspondences: Iterable[PointCorrespondence]) -> np.ndarray:
        """Distance between H applied to each source point and its target."""
        errors = []
        for pc in correspondences:
            projected = self.transform_point(pc.source)
            errors.append(np.hypot(projected.x - pc.target.x, projected.y - pc.target.y))
        return np.array(errors, dtype=np.float64)

    def __str__(self) -> str:
        return f"Matrix:\n{self.matrix}\nValue: {self.value}"


def numerical_rank(matrix: np.ndarray, rank_tolerance: float) -> int:
    """
    Rank of the coefficient matrix after scaling every column to unit norm.

    Column scaling does not change the exact rank but removes the spread
    between entries like x*x' and 1, which otherwise masks true rank.
    """
    norms = np.linalg.norm(matrix, axis=0)
    norms[norms == 0] = 1.0
    try:
        singular_values = scipy.linalg.svd(matrix / norms, compute_uv=False)
    except scipy.linalg.LinAlgError as e:
        raise NumericalInstability(f"Singular value decomposition failed: {e}") from e
    if singular_values.size == 0 or singular_values[0] == 0:
        return 0
    return int(np.sum(singular_values > rank_tolerance * singular_values[0]))


def _solve_svd(matrix: np.ndarray) -> Tuple[np.ndarray, float]:
    try:
        _, singular_values, vt = scipy.linalg.svd(matrix, full_matrices=True)
    except scipy.linalg.LinAlgError as e:
        raise NumericalInstability(f"Singular value decomposition failed: {e}") from e
    # an 8-row system has an exact ninth null direction
    value = singular_values[UNKNOWNS - 1] if singular_values.size == UNKNOWNS else 0.0
    return vt[-1], float(value)


def _solve_eigh(matrix: np.ndarray) -> Tuple[np.ndarray, float]:
    try:
        eigenvalues, eigenvectors = scipy.linalg.eigh(matrix.T @ matrix)
    except scipy.linalg.LinAlgError as e:
        raise NumericalInstability(f"Eigen-decomposition failed: {e}") from e
    # ascending order; A^T A is PSD so a negative smallest value is round-off
    return eigenvectors[:, 0], float(np.sqrt(max(eigenvalues[0], 0.0)))


def _solve_inhomogeneous(matrix: np.ndarray, rank_tolerance: float) -> Tuple[np.ndarray, float]:
    try:
        solution, _, rank, _ = scipy.linalg.lstsq(matrix[:, :UNKNOWNS - 1], -matrix[:, UNKNOWNS - 1])
    except scipy.linalg.LinAlgError as e:
        raise NumericalInstability(f"Least-squares solve failed: {e}") from e
    if rank < UNKNOWNS - 1 or np.max(np.abs(solution)) > 1.0 / rank_tolerance:
        raise DegenerateConfiguration("Correspondences imply H[2, 2] = 0; use a homogeneous method")
    h = np.append(solution, 1.0)
    h /= np.linalg.norm(h)
    return h, float(np.linalg.norm(matrix @ h))


def solve_homogeneous(matrix: np.ndarray, method: str = 'svd', rank_tolerance: float = 1e-8,
                      min_equations: int = EXPECTED_RANK) -> Tuple[np.ndarray, float, int]:
    """
    Find the unit vector h minimizing ||A h||.

    Args:
        matrix: (M, 9) coefficient matrix
        method: 'svd', 'eigh' or 'inhomogeneous'
        rank_tolerance: Relative singular value threshold for the rank test
        min_equations: Minimum number of rows

    Returns:
        Tuple of (h, residual, numerical rank)

    Raises:
        InsufficientCorrespondences: fewer rows than min_equations
        DegenerateConfiguration: null space larger than one dimension
        NumericalInstability: non-finite input or failed decomposition
    """
    matrix = np.asarray(matrix, dtype=np.float64)
    if matrix.ndim != 2 or matrix.shape[1] != UNKNOWNS:
        raise ValueError(f"Coefficient matrix must have shape (M, 9), got {matrix.shape}")

    rows = matrix.shape[0]
    if rows < min_equations:
        raise InsufficientCorrespondences(
            f"{rows} equations available, at least {min_equations} required "
            f"(4 point or line correspondences)")
    if not np.all(np.isfinite(matrix)):
        raise NumericalInstability("Coefficient matrix contains non-finite values")

    rank = numerical_rank(matrix, rank_tolerance)
    logger.debug("Coefficient matrix %dx%d has numerical rank %d", rows, UNKNOWNS, rank)
    if rank < EXPECTED_RANK:
        logger.warning("Degenerate correspondences: rank %d, null space dimension %d",
                       rank, UNKNOWNS - rank)
        raise DegenerateConfiguration(
            f"Coefficient matrix has rank {rank}; null space dimension {UNKNOWNS - rank} exceeds 1 "
            f"(collinear or repeated correspondences)")

    if method == 'svd':
        h, value = _solve_svd(matrix)
    elif method == 'eigh':
        h, value = _solve_eigh(matrix)
    elif method == 'inhomogeneous':
        h, value = _solve_inhomogeneous(matrix, rank_tolerance)
    else:
        raise ValueError(f"Unknown solver method: {method}")

    if not np.all(np.isfinite(h)) or not np.isfinite(value):
        raise NumericalInstability(f"Solver '{method}' produced non-finite values")
    return h, value, rank
