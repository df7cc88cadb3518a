"""
Planar homography estimation from point and line correspondences.

Correspondences are accumulated in a HomographyComputation, turned into a
DLT linear system and solved for the minimal-norm 3x3 matrix.
"""

from .core import HomographyComputation
from .calibration.restrictions import LinearSystem
from .calibration.solver import Solution
from .errors import (
    DegenerateConfiguration,
    HomographyError,
    InsufficientCorrespondences,
    NumericalInstability,
)
from .geometry.primitives import Line, Point

__all__ = [
    'HomographyComputation',
    'LinearSystem',
    'Solution',
    'Point',
    'Line',
    'HomographyError',
    'DegenerateConfiguration',
    'InsufficientCorrespondences',
    'NumericalInstability',
]
__version__ = '1.0.0'
