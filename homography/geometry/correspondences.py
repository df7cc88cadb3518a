"""Point and line correspondences between a source and a target plane."""

from dataclasses import dataclass

import numpy as np

from homography.geometry.primitives import Line, Point


@dataclass(frozen=True)
class PointCorrespondence:
    """A source point known to map onto a target point."""
    source: Point
    target: Point

    def restriction(self) -> np.ndarray:
        """
        Two DLT rows constraining h (row-major entries of H).

        The third row of x' x (H x) = 0 is a combination of these two and
        is omitted.
        """
        x, y = self.source.x, self.source.y
        u, v = self.target.x, self.target.y
        return np.array([
            [-x, -y, -1.0, 0.0, 0.0, 0.0, x * u, y * u, u],
            [0.0, 0.0, 0.0, -x, -y, -1.0, x * v, y * v, v],
        ])


@dataclass(frozen=True)
class LineCorrespondence:
    """A source line known to map onto a target line."""
    source: Line
    target: Line

    def restriction(self) -> np.ndarray:
        """
        Two DLT rows from l x (H^T l') = 0.

        Entry i*3 + j of H^T l' depends on h_{3i+j}, so each component of
        the cross product is linear in h. The skew matrix of l has rank 2;
        the two rows kept are the ones sharing the largest coefficient of l,
        which keeps them independent for every finite line.
        """
        a, b, c = self.source.to_vector()
        target = self.target.to_vector()

        # Component k of the cross product as coefficients on H^T l'
        components = (
            np.array([0.0, -c, b]),
            np.array([c, 0.0, -a]),
            np.array([-b, a, 0.0]),
        )
        pivot = int(np.argmax(np.abs([a, b, c])))
        if pivot == 0:
            selected = (components[1], components[2])
        elif pivot == 1:
            selected = (components[0], components[2])
        else:
            selected = (components[0], components[1])

        # coefficient of h_{3i+j} is target_i * weight_j
        return np.vstack([np.outer(target, weights).reshape(9) for weights in selected])
