"""Reprojection accuracy metrics."""

import numpy as np
from typing import Dict


def reprojection_statistics(predicted: np.ndarray,
                            ground_truth: np.ndarray) -> Dict[str, float]:
    """Calculate reprojection error statistics.

    Args:
        predicted: (N, 2) array of transformed points
        ground_truth: (N, 2) array of expected points

    Returns:
        Dictionary with mean, median, max and standard deviation of the
        Euclidean distances
    """
    predicted = np.asarray(predicted, dtype=np.float64).reshape(-1, 2)
    ground_truth = np.asarray(ground_truth, dtype=np.float64).reshape(-1, 2)
    if predicted.shape != ground_truth.shape:
        raise ValueError("predicted and ground_truth must have the same number of points")
    if len(predicted) == 0:
        raise ValueError("at least one point is required")

    errors = np.linalg.norm(predicted - ground_truth, axis=1)
    return {
        'mean_error': float(np.mean(errors)),
        'median_error': float(np.median(errors)),
        'max_error': float(np.max(errors)),
        'std_error': float(np.std(errors))
    }


def root_mean_square(errors: np.ndarray) -> float:
    """Root mean square of a vector of point distances."""
    errors = np.asarray(errors, dtype=np.float64)
    if errors.size == 0:
        return 0.0
    return float(np.sqrt(np.mean(np.square(errors))))
