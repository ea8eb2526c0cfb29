"""
Geodetic Constants for Grid Reference Conversion.

This module provides the published ellipsoid constants and the fixed
numerical constants of the inverse Transverse Mercator computation.
All constants are defined with SI units and traceable to authoritative
sources.

References
----------
- Ordnance Survey (2020). A Guide to Coordinate Systems in Great Britain.
- Ordnance Survey Ireland (2016). Irish Transverse Mercator.
- WGS84 parameters: NIMA TR8350.2, Third Edition, 2000
- GRS80 parameters: Moritz, H. (2000). Geodetic Reference System 1980.
"""

from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True)
class Constant:
    """A physical constant with uncertainty and provenance.

    Attributes
    ----------
    value : float
        The nominal value of the constant.
    uncertainty : float
        The standard uncertainty (1-sigma) of the constant.
    unit : str
        The SI unit of the constant.
    source : str
        Reference for the constant value.
    description : str
        Human-readable description of the constant.
    """
    value: float
    uncertainty: float
    unit: str
    source: str
    description: str


class GeodeticConstants:
    """Registry of geodetic constants used throughout the system.

    All constants are class attributes with full metadata including
    uncertainty bounds and authoritative sources.

    Reference Ellipsoids
    --------------------
    Semi-major and semi-minor axes as published by the survey agencies.
    Eccentricity is always derived from the axes, never stored.

    Footpoint Iteration
    -------------------
    The residual tolerance of the footpoint latitude iteration is part
    of the published algorithm and is fixed. The iteration cap bounds
    the loop for inputs far outside any projection's valid zone.
    """

    # =========================================================================
    # Airy 1830 (OSGB36)
    # Reference: OS, A Guide to Coordinate Systems in Great Britain
    # =========================================================================

    AIRY_1830_SEMI_MAJOR_AXIS: Final[Constant] = Constant(
        value=6_377_563.396,
        uncertainty=0.0,  # Defined exactly
        unit="m",
        source="OS Guide to Coordinate Systems in Great Britain",
        description="Semi-major axis of the Airy 1830 ellipsoid"
    )

    AIRY_1830_SEMI_MINOR_AXIS: Final[Constant] = Constant(
        value=6_356_256.909,
        uncertainty=0.0,  # Defined exactly
        unit="m",
        source="OS Guide to Coordinate Systems in Great Britain",
        description="Semi-minor axis of the Airy 1830 ellipsoid"
    )

    # =========================================================================
    # Airy 1830 Modified (Ireland 1965)
    # =========================================================================

    AIRY_1830_MODIFIED_SEMI_MAJOR_AXIS: Final[Constant] = Constant(
        value=6_377_340.189,
        uncertainty=0.0,
        unit="m",
        source="OSi/OSNI, Irish Grid",
        description="Semi-major axis of the modified Airy ellipsoid"
    )

    AIRY_1830_MODIFIED_SEMI_MINOR_AXIS: Final[Constant] = Constant(
        value=6_356_034.447,
        uncertainty=0.0,
        unit="m",
        source="OSi/OSNI, Irish Grid",
        description="Semi-minor axis of the modified Airy ellipsoid"
    )

    # =========================================================================
    # GRS80 (ETRS89, ITM)
    # =========================================================================

    GRS80_SEMI_MAJOR_AXIS: Final[Constant] = Constant(
        value=6_378_137.0,
        uncertainty=0.0,  # Defined exactly
        unit="m",
        source="Moritz (2000), Geodetic Reference System 1980",
        description="Semi-major axis of the GRS80 ellipsoid"
    )

    GRS80_SEMI_MINOR_AXIS: Final[Constant] = Constant(
        value=6_356_752.314140,
        uncertainty=0.000001,
        unit="m",
        source="Moritz (2000), Geodetic Reference System 1980 (derived)",
        description="Semi-minor axis of the GRS80 ellipsoid"
    )

    # =========================================================================
    # WGS84 Ellipsoid Parameters
    # Reference: NIMA TR8350.2, Third Edition, 2000
    # =========================================================================

    WGS84_SEMI_MAJOR_AXIS: Final[Constant] = Constant(
        value=6_378_137.0,
        uncertainty=0.0,  # Defined exactly
        unit="m",
        source="WGS84, NIMA TR8350.2",
        description="Semi-major axis (equatorial radius) of WGS84 ellipsoid"
    )

    WGS84_SEMI_MINOR_AXIS: Final[Constant] = Constant(
        value=6_356_752.314245,
        uncertainty=0.0001,
        unit="m",
        source="WGS84, NIMA TR8350.2",
        description="Semi-minor axis (polar radius) of WGS84 ellipsoid"
    )

    # =========================================================================
    # International 1924 (Hayford, ED50)
    # =========================================================================

    INTERNATIONAL_1924_SEMI_MAJOR_AXIS: Final[Constant] = Constant(
        value=6_378_388.0,
        uncertainty=0.0,
        unit="m",
        source="IUGG 1924",
        description="Semi-major axis of the International 1924 ellipsoid"
    )

    INTERNATIONAL_1924_SEMI_MINOR_AXIS: Final[Constant] = Constant(
        value=6_356_911.946,
        uncertainty=0.001,
        unit="m",
        source="IUGG 1924 (derived from f = 1/297)",
        description="Semi-minor axis of the International 1924 ellipsoid"
    )

    # =========================================================================
    # Inverse Transverse Mercator
    # =========================================================================

    FOOTPOINT_TOLERANCE: Final[Constant] = Constant(
        value=0.001,
        uncertainty=0.0,
        unit="m",
        source="OS Guide to Coordinate Systems in Great Britain",
        description="Residual meridional arc below which the footpoint iteration stops"
    )

    MAX_FOOTPOINT_ITERATIONS: Final[int] = 50
