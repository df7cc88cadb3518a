"""Points and lines of the projective plane in homogeneous coordinates."""

from dataclasses import dataclass

import numpy as np

from homography.errors import DegenerateConfiguration


@dataclass(frozen=True)
class Point:
    """Finite point (x, y), used as the homogeneous vector (x, y, 1)."""
    x: float
    y: float

    def __post_init__(self):
        object.__setattr__(self, 'x', float(self.x))
        object.__setattr__(self, 'y', float(self.y))

    @classmethod
    def from_homogeneous(cls, vector) -> 'Point':
        """
        Build a point from a homogeneous 3-vector (x, y, w).

        Raises:
            DegenerateConfiguration: if w == 0 (point at infinity)
        """
        x, y, w = np.asarray(vector, dtype=np.float64).reshape(3)
        if w == 0:
            raise DegenerateConfiguration(f"Point at infinity ({x}, {y}, 0) has no finite coordinates")
        return cls(x / w, y / w)

    def to_homogeneous(self) -> np.ndarray:
        return np.array([self.x, self.y, 1.0])

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y])


@dataclass(frozen=True)
class Line:
    """Line a*x + b*y + c = 0. Coefficients are defined up to scale."""
    a: float
    b: float
    c: float

    def __post_init__(self):
        object.__setattr__(self, 'a', float(self.a))
        object.__setattr__(self, 'b', float(self.b))
        object.__setattr__(self, 'c', float(self.c))
        if self.a == 0 and self.b == 0 and self.c == 0:
            raise DegenerateConfiguration("Line coefficients cannot all be zero")

    @classmethod
    def from_points(cls, p: Point, q: Point) -> 'Line':
        """
        Line through two distinct points, computed as p x q.

        Args:
            p: First point
            q: Second point

        Returns:
            Line containing both points

        Raises:
            DegenerateConfiguration: if the points coincide
        """
        if p == q:
            raise DegenerateConfiguration(f"Cannot build a line from coincident points {p}")
        a, b, c = np.cross(p.to_homogeneous(), q.to_homogeneous())
        return cls(a, b, c)

    def to_vector(self) -> np.ndarray:
        return np.array([self.a, self.b, self.c])

    def contains(self, point: Point, tolerance: float = 1e-9) -> bool:
        """Check point incidence, using the distance to the line when it is finite."""
        residual = self.a * point.x + self.b * point.y + self.c
        norm = np.hypot(self.a, self.b)
        if norm == 0:
            return False
        return abs(residual) / norm <= tolerance

    def intersection(self, other: 'Line') -> Point:
        """
        Intersection point of two lines.

        Raises:
            DegenerateConfiguration: if the lines are parallel or identical
        """
        vector = np.cross(self.to_vector(), other.to_vector())
        if not np.any(vector):
            raise DegenerateConfiguration(f"Lines {self} and {other} are identical")
        return Point.from_homogeneous(vector)
