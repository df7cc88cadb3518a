"""
Homography Computation
Accumulates correspondences and produces the linear system to solve
"""

import logging
from typing import Any, Dict, Mapping, Optional, Tuple

from homography.calibration.restrictions import LinearSystem
from homography.config import merge_config
from homography.geometry.correspondences import LineCorrespondence, PointCorrespondence
from homography.geometry.primitives import Line, Point

logger = logging.getLogger(__name__)


class HomographyComputation:
    """Store of point and line correspondences between two planes.

    Not safe for concurrent mutation; serialize add_* calls externally.
    """

    def __init__(self, config: Optional[Mapping[str, Any]] = None):
        """
        Initialize an empty store

        Args:
            config: Configuration overrides (optional), see homography.config
        """
        self.config: Dict[str, Any] = merge_config(config)
        self._point_correspondences = []
        self._line_correspondences = []

    def add_point_correspondence(self, source: Point, target: Point) -> None:
        """Record that source maps to target. Validation happens at solve time."""
        self._point_correspondences.append(PointCorrespondence(source, target))

    def add_line_correspondence(self, source: Line, target: Line) -> None:
        """Record that source line maps to target line."""
        self._line_correspondences.append(LineCorrespondence(source, target))

    @property
    def point_correspondences(self) -> Tuple[PointCorrespondence, ...]:
        return tuple(self._point_correspondences)

    @property
    def line_correspondences(self) -> Tuple[LineCorrespondence, ...]:
        return tuple(self._line_correspondences)

    def get_restrictions(self) -> LinearSystem:
        """
        Snapshot the current correspondences as a linear system

        Returns:
            LinearSystem unaffected by later additions to this store
        """
        logger.debug("Building restrictions from %d point and %d line correspondences",
                     len(self._point_correspondences), len(self._line_correspondences))
        return LinearSystem(self._point_correspondences, self._line_correspondences,
                            config=self.config)

    def clear(self):
        """Remove all correspondences."""
        self._point_correspondences.clear()
        self._line_correspondences.clear()

    def __len__(self) -> int:
        return len(self._point_correspondences) + len(self._line_correspondences)
