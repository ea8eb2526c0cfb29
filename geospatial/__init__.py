"""
Geospatial Module for Grid Reference Conversion.

All conversions from projected grid coordinates to geographic coordinates
originate from this module.

This module provides:
- Reference ellipsoids and coordinate value objects
- Transverse Mercator grid definitions (national grids, UTM zones)
- The inverse Transverse Mercator projection engine
"""

from geospatial.errors import (
    GeospatialError,
    InvalidEllipsoidError,
    InvalidGridReferenceError,
    InvalidProjectionDefinitionError,
    NonConvergenceError,
    UnknownGridSystemError,
)

from geospatial.coordinate_models import (
    Ellipsoid,
    GridReference,
    GeographicPoint,
    AIRY_1830,
    AIRY_1830_MODIFIED,
    GRS80,
    WGS84,
    INTERNATIONAL_1924,
)

from geospatial.projections import (
    ProjectionDefinition,
    OSGB36_NATIONAL_GRID,
    IRISH_GRID,
    IRISH_TRANSVERSE_MERCATOR,
    GRID_SYSTEMS,
    get_grid_system,
    utm_zone,
)

from geospatial.inverse_projection import (
    meridional_arc,
    footpoint_latitude,
    inverse_transverse_mercator,
    grid_to_geographic,
    grid_to_geographic_batch,
)

__all__ = [
    # Errors
    "GeospatialError",
    "InvalidEllipsoidError",
    "InvalidGridReferenceError",
    "InvalidProjectionDefinitionError",
    "NonConvergenceError",
    "UnknownGridSystemError",
    # Coordinate models
    "Ellipsoid",
    "GridReference",
    "GeographicPoint",
    "AIRY_1830",
    "AIRY_1830_MODIFIED",
    "GRS80",
    "WGS84",
    "INTERNATIONAL_1924",
    # Projections
    "ProjectionDefinition",
    "OSGB36_NATIONAL_GRID",
    "IRISH_GRID",
    "IRISH_TRANSVERSE_MERCATOR",
    "GRID_SYSTEMS",
    "get_grid_system",
    "utm_zone",
    # Inverse projection
    "meridional_arc",
    "footpoint_latitude",
    "inverse_transverse_mercator",
    "grid_to_geographic",
    "grid_to_geographic_batch",
]
