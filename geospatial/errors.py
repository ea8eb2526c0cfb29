"""
Error taxonomy for the geospatial package.

Construction-time errors derive from `ValueError` as well, so callers
that already guard argument validation with `except ValueError` keep
working.
"""

from typing import Optional


class GeospatialError(Exception):
    """Base class for all errors raised by the geospatial package."""


class InvalidEllipsoidError(GeospatialError, ValueError):
    """Ellipsoid axes are non-positive, non-finite, or b >= a."""


class InvalidProjectionDefinitionError(GeospatialError, ValueError):
    """Projection origin or scale factor is outside its valid range."""


class InvalidGridReferenceError(GeospatialError, ValueError):
    """Easting or northing is NaN or infinite."""


class UnknownGridSystemError(GeospatialError, KeyError):
    """No grid system is registered under the requested name."""


class NonConvergenceError(GeospatialError, ArithmeticError):
    """The footpoint latitude iteration hit its cap before converging.

    Attributes
    ----------
    iterations : int
        Number of iterations performed.
    residual_m : float, optional
        Last meridional arc residual in meters (largest one for batches).
    """

    def __init__(self, message: str, iterations: int, residual_m: Optional[float] = None):
        super().__init__(message)
        self.iterations = iterations
        self.residual_m = residual_m
