"""
Coordinate Models for Grid Reference Conversion.

This module defines the value objects shared by every grid system: the
reference ellipsoid, the planar grid reference (the input of an inverse
projection) and the geographic point (its output).

Scientific Context
------------------
Domain: Geodesy, national mapping grids
Model: Biaxial reference ellipsoid

Why the Ellipsoid Travels With the Point
----------------------------------------
The same numeric latitude and longitude designate different places on
different ellipsoids (OSGB36 and WGS84 positions in Great Britain differ by
up to ~120 m). A geographic point is therefore always paired with the
ellipsoid it was computed on.

References
----------
- Ordnance Survey (2020). A Guide to Coordinate Systems in Great Britain.
- Torge, W. (2001). Geodesy (3rd ed.). de Gruyter.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Tuple, Union
import numpy as np
from numpy.typing import NDArray

from common.constants import GeodeticConstants
from common.units import Scalar, magnitude_in
from geospatial.errors import InvalidEllipsoidError, InvalidGridReferenceError

if TYPE_CHECKING:
    from geospatial.projections import ProjectionDefinition


@dataclass(frozen=True)
class Ellipsoid:
    """Parameters defining a reference ellipsoid.

    Attributes
    ----------
    a : float
        Semi-major axis (equatorial radius) in meters.
    b : float
        Semi-minor axis (polar radius) in meters.
    name : str
        Identifier for the ellipsoid. Not part of equality.

    Derived Parameters
    ------------------
    e2 : float
        First eccentricity squared: e² = (a² - b²) / a²
    f : float
        Flattening: f = (a - b) / a
    n : float
        Third flattening: n = (a - b) / (a + b)
    ep2 : float
        Second eccentricity squared: e'² = (a² - b²) / b²

    Raises
    ------
    InvalidEllipsoidError
        If either axis is non-positive or non-finite, or if b >= a.
    """
    a: float
    b: float
    name: str = field(default="", compare=False)

    def __post_init__(self):
        """Validate axes."""
        a = magnitude_in(self.a, "meter")
        b = magnitude_in(self.b, "meter")
        if not (np.isfinite(a) and np.isfinite(b)):
            raise InvalidEllipsoidError(
                f"Ellipsoid axes must be finite, got a={a}, b={b}"
            )
        if a <= 0 or b <= 0:
            raise InvalidEllipsoidError(
                f"Ellipsoid axes must be positive, got a={a}, b={b}"
            )
        if b >= a:
            raise InvalidEllipsoidError(
                f"Semi-minor axis b={b} must be smaller than semi-major axis a={a}"
            )
        object.__setattr__(self, "a", a)
        object.__setattr__(self, "b", b)

    @property
    def e2(self) -> float:
        """First eccentricity squared."""
        return ((self.a * self.a) - (self.b * self.b)) / (self.a * self.a)

    @property
    def f(self) -> float:
        """Flattening."""
        return (self.a - self.b) / self.a

    @property
    def n(self) -> float:
        """Third flattening, the expansion parameter of the meridional arc."""
        return (self.a - self.b) / (self.a + self.b)

    @property
    def ep2(self) -> float:
        """Second eccentricity squared."""
        return self.e2 / (1 - self.e2)


AIRY_1830 = Ellipsoid(
    a=GeodeticConstants.AIRY_1830_SEMI_MAJOR_AXIS.value,
    b=GeodeticConstants.AIRY_1830_SEMI_MINOR_AXIS.value,
    name="Airy 1830"
)

AIRY_1830_MODIFIED = Ellipsoid(
    a=GeodeticConstants.AIRY_1830_MODIFIED_SEMI_MAJOR_AXIS.value,
    b=GeodeticConstants.AIRY_1830_MODIFIED_SEMI_MINOR_AXIS.value,
    name="Airy 1830 Modified"
)

GRS80 = Ellipsoid(
    a=GeodeticConstants.GRS80_SEMI_MAJOR_AXIS.value,
    b=GeodeticConstants.GRS80_SEMI_MINOR_AXIS.value,
    name="GRS80"
)

WGS84 = Ellipsoid(
    a=GeodeticConstants.WGS84_SEMI_MAJOR_AXIS.value,
    b=GeodeticConstants.WGS84_SEMI_MINOR_AXIS.value,
    name="WGS84"
)

INTERNATIONAL_1924 = Ellipsoid(
    a=GeodeticConstants.INTERNATIONAL_1924_SEMI_MAJOR_AXIS.value,
    b=GeodeticConstants.INTERNATIONAL_1924_SEMI_MINOR_AXIS.value,
    name="International 1924"
)


def round_half_away_from_zero(
    value: Union[float, NDArray[np.float64]]
) -> Union[float, NDArray[np.float64]]:
    """Round to the nearest whole number, halves away from zero.

    Python's built-in `round` rounds halves to even; grid references are
    conventionally rounded the other way (651409.5 -> 651410).
    """
    # abs - floor is exact, unlike abs + 0.5 (0.49999999999999994 + 0.5 == 1.0)
    magnitude = np.abs(value)
    whole = np.floor(magnitude)
    rounded = np.sign(value) * np.where(magnitude - whole >= 0.5, whole + 1, whole)
    if isinstance(value, np.ndarray):
        return np.asarray(rounded)
    return float(rounded)


@dataclass(frozen=True)
class GridReference:
    """An absolute easting/northing on a projected grid.

    By default both coordinates are rounded to whole meters at
    construction, which is the resolution of a full grid reference. Use
    `GridReference.exact` to keep sub-meter precision.

    Attributes
    ----------
    easting : float
        Easting in METERS, absolute with respect to the whole grid.
    northing : float
        Northing in METERS, absolute with respect to the whole grid.
    precise : bool
        True if sub-meter precision was kept.

    Raises
    ------
    InvalidGridReferenceError
        If either coordinate is NaN or infinite.

    Examples
    --------
    >>> ref = GridReference(651409.903, 313177.270)
    >>> str(ref)
    '(651410, 313177)'
    """
    easting: float
    northing: float
    precise: bool = False

    def __post_init__(self):
        easting = magnitude_in(self.easting, "meter")
        northing = magnitude_in(self.northing, "meter")
        if not (np.isfinite(easting) and np.isfinite(northing)):
            raise InvalidGridReferenceError(
                f"Grid reference must be finite, got easting={easting}, northing={northing}"
            )
        if not self.precise:
            easting = round_half_away_from_zero(easting)
            northing = round_half_away_from_zero(northing)
        object.__setattr__(self, "easting", easting)
        object.__setattr__(self, "northing", northing)

    @classmethod
    def exact(cls, easting: Scalar, northing: Scalar) -> "GridReference":
        """Create a reference that keeps sub-meter precision."""
        return cls(easting, northing, precise=True)

    def to_geographic(self, projection: "ProjectionDefinition") -> "GeographicPoint":
        """Convert to latitude/longitude on the projection's ellipsoid."""
        from geospatial.inverse_projection import grid_to_geographic
        return grid_to_geographic(self, projection)

    def __str__(self) -> str:
        if self.precise:
            return f"({self.easting}, {self.northing})"
        return f"({int(self.easting)}, {int(self.northing)})"


@dataclass(frozen=True)
class GeographicPoint:
    """A latitude/longitude expressed against a reference ellipsoid.

    Attributes
    ----------
    latitude : float
        Geodetic latitude in DEGREES, positive north.
    longitude : float
        Geodetic longitude in DEGREES, positive east.
    ellipsoid : Ellipsoid
        The ellipsoid the coordinates refer to.
    """
    latitude: float  # degrees
    longitude: float  # degrees
    ellipsoid: Ellipsoid

    def to_radians(self) -> Tuple[float, float]:
        """Return (latitude, longitude) in radians."""
        return float(np.radians(self.latitude)), float(np.radians(self.longitude))

    def __str__(self) -> str:
        return f"({self.latitude}, {self.longitude})"
