"""
Transverse Mercator Projection Definitions.

A Transverse Mercator grid system is fully described by six constants: the
reference ellipsoid, the scale factor on the central meridian, and the true
origin expressed both geographically (latitude, longitude) and on the grid
(easting, northing). This module provides that parameter bundle, a table of
named national grids, and a factory for UTM zones.

Scientific Context
------------------
Domain: Cartography, national mapping grids
Model: Transverse Mercator (Gauss-Krüger) on a biaxial ellipsoid

Why a Data-Driven Definition
----------------------------
Named grids differ only in their constants, never in their formulae. One
immutable parameter record per grid keeps every grid interchangeable in the
inverse projection engine and lets callers define their own grids without
subclassing.

Interoperability
----------------
`ProjectionDefinition.to_crs` builds the equivalent `pyproj.CRS` so that a
grid defined here can be handed to PROJ-based tooling. The conversion in
this package never delegates to PROJ.

References
----------
- Ordnance Survey (2020). A Guide to Coordinate Systems in Great Britain.
- Snyder, J.P. (1987). Map Projections - A Working Manual. USGS Prof. Paper 1395.
"""

from dataclasses import dataclass, field
from typing import Dict
import numpy as np

from pyproj import CRS

from common.logging_config import get_logger
from common.units import Scalar, magnitude_in
from geospatial.coordinate_models import (
    AIRY_1830,
    AIRY_1830_MODIFIED,
    GRS80,
    WGS84,
    Ellipsoid,
    GridReference,
)
from geospatial.errors import InvalidProjectionDefinitionError, UnknownGridSystemError

logger = get_logger(__name__)


@dataclass(frozen=True)
class ProjectionDefinition:
    """Constants of a Transverse Mercator grid system.

    Attributes
    ----------
    ellipsoid : Ellipsoid
        Reference ellipsoid of the grid.
    scale_factor : float
        Scale factor on the central meridian (F0), close to 1.0.
    origin_easting : float
        Grid easting of the true origin (E0) in meters.
    origin_northing : float
        Grid northing of the true origin (N0) in meters.
    origin_latitude : float
        Latitude of the true origin (φ0) in degrees, in (-90, 90).
    origin_longitude : float
        Longitude of the true origin and central meridian (λ0) in degrees,
        in (-180, 180).
    name : str
        Human-readable name of the grid. Not part of equality.

    Raises
    ------
    InvalidProjectionDefinitionError
        If the origin lies outside the geodetic ranges above, or if any
        constant is non-finite, or if the scale factor is not positive.
    """
    ellipsoid: Ellipsoid
    scale_factor: float
    origin_easting: float
    origin_northing: float
    origin_latitude: float
    origin_longitude: float
    name: str = field(default="", compare=False)

    def __post_init__(self):
        """Validate constants and normalize quantities to meters/degrees."""
        values = {
            "scale_factor": float(self.scale_factor),
            "origin_easting": magnitude_in(self.origin_easting, "meter"),
            "origin_northing": magnitude_in(self.origin_northing, "meter"),
            "origin_latitude": magnitude_in(self.origin_latitude, "degree"),
            "origin_longitude": magnitude_in(self.origin_longitude, "degree"),
        }

        for attr, value in values.items():
            if not np.isfinite(value):
                raise InvalidProjectionDefinitionError(
                    f"{attr} must be finite, got {value}"
                )

        if values["scale_factor"] <= 0:
            raise InvalidProjectionDefinitionError(
                f"Scale factor must be positive, got {values['scale_factor']}"
            )
        if not -90.0 < values["origin_latitude"] < 90.0:
            raise InvalidProjectionDefinitionError(
                f"Origin latitude {values['origin_latitude']}° out of range (-90, 90)"
            )
        if not -180.0 < values["origin_longitude"] < 180.0:
            raise InvalidProjectionDefinitionError(
                f"Origin longitude {values['origin_longitude']}° out of range (-180, 180)"
            )

        for attr, value in values.items():
            object.__setattr__(self, attr, value)

    @property
    def proj4_string(self) -> str:
        """PROJ.4 definition string of the equivalent projected CRS."""
        return (
            f"+proj=tmerc +lat_0={self.origin_latitude} +lon_0={self.origin_longitude} "
            f"+k_0={self.scale_factor} +x_0={self.origin_easting} +y_0={self.origin_northing} "
            f"+a={self.ellipsoid.a} +b={self.ellipsoid.b} +units=m +no_defs"
        )

    def to_crs(self) -> CRS:
        """Build the equivalent `pyproj.CRS`."""
        return CRS.from_proj4(self.proj4_string)

    def reference(self, easting: Scalar, northing: Scalar, exact: bool = False) -> GridReference:
        """Create a grid reference on this grid.

        Parameters
        ----------
        easting, northing : float or pint.Quantity
            Absolute grid coordinates; bare numbers are meters.
        exact : bool
            Keep sub-meter precision instead of rounding to whole meters.

        Raises
        ------
        pint.DimensionalityError
            If a quantity is not a length.
        """
        return GridReference(easting, northing, precise=exact)


OSGB36_NATIONAL_GRID = ProjectionDefinition(
    ellipsoid=AIRY_1830,
    scale_factor=0.9996012717,
    origin_easting=400000.0,
    origin_northing=-100000.0,
    origin_latitude=49.0,
    origin_longitude=-2.0,
    name="British National Grid"
)

IRISH_GRID = ProjectionDefinition(
    ellipsoid=AIRY_1830_MODIFIED,
    scale_factor=1.000035,
    origin_easting=200000.0,
    origin_northing=250000.0,
    origin_latitude=53.5,
    origin_longitude=-8.0,
    name="Irish Grid"
)

IRISH_TRANSVERSE_MERCATOR = ProjectionDefinition(
    ellipsoid=GRS80,
    scale_factor=0.999820,
    origin_easting=600000.0,
    origin_northing=750000.0,
    origin_latitude=53.5,
    origin_longitude=-8.0,
    name="Irish Transverse Mercator"
)

GRID_SYSTEMS: Dict[str, ProjectionDefinition] = {
    "OSGB36": OSGB36_NATIONAL_GRID,
    "IRISH_GRID": IRISH_GRID,
    "ITM": IRISH_TRANSVERSE_MERCATOR,
}


def get_grid_system(name: str) -> ProjectionDefinition:
    """Look up a named grid system.

    Names are matched case-insensitively; spaces and hyphens are treated
    as underscores ("irish-grid" finds "IRISH_GRID").

    Raises
    ------
    UnknownGridSystemError
        If no grid is registered under `name`.
    """
    key = name.strip().upper().replace(" ", "_").replace("-", "_")
    try:
        return GRID_SYSTEMS[key]
    except KeyError:
        raise UnknownGridSystemError(
            f"Unknown grid system {name!r}. Known: {', '.join(sorted(GRID_SYSTEMS))}"
        ) from None


def utm_zone(
    zone: int,
    southern: bool = False,
    ellipsoid: Ellipsoid = WGS84
) -> ProjectionDefinition:
    """Build the projection definition of a UTM zone.

    Parameters
    ----------
    zone : int
        UTM longitude zone, 1 to 60.
    southern : bool
        Use the southern-hemisphere false northing (10 000 km).
    ellipsoid : Ellipsoid
        Reference ellipsoid (default: WGS84; INTERNATIONAL_1924 for ED50).

    Returns
    -------
    ProjectionDefinition
        Central meridian at zone * 6 - 183 degrees, scale factor 0.9996,
        false easting 500 km.
    """
    if isinstance(zone, bool) or not isinstance(zone, (int, np.integer)) or not 1 <= zone <= 60:
        raise InvalidProjectionDefinitionError(f"UTM zone must be an integer in 1..60, got {zone!r}")

    hemisphere = "S" if southern else "N"
    logger.debug(f"Building UTM zone {zone}{hemisphere} on {ellipsoid.name or 'custom ellipsoid'}")

    return ProjectionDefinition(
        ellipsoid=ellipsoid,
        scale_factor=0.9996,
        origin_easting=500000.0,
        origin_northing=10000000.0 if southern else 0.0,
        origin_latitude=0.0,
        origin_longitude=float(zone * 6 - 183),
        name=f"UTM zone {zone}{hemisphere}"
    )
