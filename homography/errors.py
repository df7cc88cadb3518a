"""Error types raised by homography estimation."""


class HomographyError(Exception):
    """Base class for homography estimation failures."""


class DegenerateConfiguration(HomographyError, ValueError):
    """Geometry does not determine a unique answer.

    Raised for coincident points used to build a line, for points at
    infinity where a finite point is required, and for correspondence sets
    whose linear system has a null space larger than one dimension.
    """


class InsufficientCorrespondences(HomographyError, ValueError):
    """Fewer equations than the 8 degrees of freedom of a homography."""


class NumericalInstability(HomographyError, ArithmeticError):
    """Decomposition failed to converge or produced non-finite values."""
