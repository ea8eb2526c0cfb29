"""
Inverse Transverse Mercator: Grid Reference to Latitude/Longitude.

This module converts an easting/northing on a Transverse Mercator grid into
a latitude and longitude on the grid's reference ellipsoid.

Scientific Context
------------------
Domain: Geodesy, map projections
Model: Redfearn series for the inverse Transverse Mercator projection

Algorithm
---------
1. Footpoint latitude φ': the latitude on the central meridian whose
   meridional arc from the true origin equals the northing offset. Found by
   fixed-point iteration on the meridional arc series (fourth order in
   n = (a - b) / (a + b)) until the residual arc is below 1 mm.
2. Series corrections VII-XIIA in powers of the easting offset, evaluated
   from the radii of curvature at φ', give the final latitude and longitude.

The formulae are reproduced term for term as published by the Ordnance
Survey; algebraically equivalent rearrangements are avoided so that results
stay reproducible against published worked examples.

Validity
--------
Accuracy is better than 1 mm for points within about 3° of the central
meridian. No special handling exists for the poles or the antimeridian.

References
----------
- Ordnance Survey (2020). A Guide to Coordinate Systems in Great Britain,
  Annex C: Transverse Mercator map projection formulae.
- Redfearn, J.C.B. (1948). Transverse Mercator formulae. Empire Survey
  Review, 9(69), 318-322.
"""

from typing import Optional, Tuple, Union
import numpy as np
from numpy.typing import ArrayLike, NDArray

from common.constants import GeodeticConstants
from common.logging_config import get_logger
from geospatial.coordinate_models import (
    Ellipsoid,
    GeographicPoint,
    GridReference,
    round_half_away_from_zero,
)
from geospatial.errors import InvalidGridReferenceError, NonConvergenceError
from geospatial.projections import ProjectionDefinition

logger = get_logger(__name__)

FloatOrArray = Union[float, NDArray[np.float64]]

# Residual meridional arc (meters) at which the footpoint iteration stops
FOOTPOINT_TOLERANCE_M = GeodeticConstants.FOOTPOINT_TOLERANCE.value


def _iteration_cap(max_iterations: Optional[int]) -> int:
    if max_iterations is None:
        return GeodeticConstants.MAX_FOOTPOINT_ITERATIONS
    if max_iterations < 1:
        raise ValueError(f"max_iterations must be at least 1, got {max_iterations}")
    return max_iterations


def _require_finite(easting: ArrayLike, northing: ArrayLike) -> None:
    bad = ~(np.isfinite(easting) & np.isfinite(northing))
    if np.any(bad):
        raise InvalidGridReferenceError(
            f"{int(np.sum(bad))} grid reference(s) have a NaN or infinite easting/northing"
        )


def meridional_arc(
    phi: FloatOrArray,
    phi0: float,
    ellipsoid: Ellipsoid,
    scale_factor: float
) -> FloatOrArray:
    """Compute the scaled meridional arc from latitude phi0 to phi.

    Parameters
    ----------
    phi : float or ndarray
        Latitude in radians.
    phi0 : float
        Latitude of the true origin in radians.
    ellipsoid : Ellipsoid
        Reference ellipsoid.
    scale_factor : float
        Scale factor on the central meridian (F0).

    Returns
    -------
    float or ndarray
        Arc length M in meters, multiplied by F0.

    Notes
    -----
    M = b F0 [ (1 + n + 5/4 n² + 5/4 n³)(φ - φ0)
             - (3n + 3n² + 21/8 n³) sin(φ - φ0) cos(φ + φ0)
             + (15/8 n² + 15/8 n³) sin(2(φ - φ0)) cos(2(φ + φ0))
             - 35/24 n³ sin(3(φ - φ0)) cos(3(φ + φ0)) ]
    """
    a = ellipsoid.a
    b = ellipsoid.b
    F0 = scale_factor
    n = (a - b) / (a + b)

    return (
        (b * F0)
        * (((1 + n + ((5 / 4) * n * n) + ((5 / 4) * n * n * n))
                * (phi - phi0))
            - (((3 * n) + (3 * n * n) + ((21 / 8) * n * n * n))
                * np.sin(phi - phi0)
                * np.cos(phi + phi0))
            + ((((15 / 8) * n * n) + ((15 / 8) * n * n * n))
                * np.sin(2 * (phi - phi0))
                * np.cos(2 * (phi + phi0)))
            - (((35 / 24) * n * n * n)
                * np.sin(3 * (phi - phi0))
                * np.cos(3 * (phi + phi0))))
    )


def footpoint_latitude(
    northing: float,
    origin_northing: float,
    origin_latitude_rad: float,
    ellipsoid: Ellipsoid,
    scale_factor: float,
    max_iterations: Optional[int] = None
) -> Tuple[float, int]:
    """Iterate for the footpoint latitude φ' of a northing.

    The loop body always runs at least once; it stops as soon as the
    residual arc N - N0 - M drops below 1 mm in magnitude.

    Returns
    -------
    Tuple[float, int]
        (φ' in radians, number of iterations performed)

    Raises
    ------
    NonConvergenceError
        If the residual is still above tolerance after `max_iterations`.
    """
    cap = _iteration_cap(max_iterations)
    aF0 = ellipsoid.a * scale_factor
    phi_prime = ((northing - origin_northing) / aF0) + origin_latitude_rad

    iterations = 0
    while True:
        M = meridional_arc(phi_prime, origin_latitude_rad, ellipsoid, scale_factor)
        residual = northing - origin_northing - M
        phi_prime = phi_prime + residual / aF0
        iterations += 1

        if abs(residual) < FOOTPOINT_TOLERANCE_M:
            return float(phi_prime), iterations

        if iterations >= cap:
            logger.warning(
                f"Footpoint latitude did not converge after {iterations} iterations "
                f"(northing={northing}, residual={residual:.6e} m)"
            )
            raise NonConvergenceError(
                f"Footpoint latitude did not converge within {cap} iterations "
                f"for northing {northing} (residual {residual} m)",
                iterations=iterations,
                residual_m=float(residual),
            )


def _series_coefficients(
    phi_prime: FloatOrArray,
    ellipsoid: Ellipsoid,
    scale_factor: float
) -> Tuple[FloatOrArray, ...]:
    """Evaluate coefficients VII, VIII, IX, X, XI, XII, XIIA at φ'."""
    a = ellipsoid.a
    e2 = ellipsoid.e2
    F0 = scale_factor

    # Transverse and meridional radii of curvature, scaled by F0
    nu = a * F0 * (1 - e2 * np.sin(phi_prime) ** 2) ** -0.5
    rho = a * F0 * (1 - e2) * (1 - e2 * np.sin(phi_prime) ** 2) ** -1.5
    eta2 = (nu / rho) - 1

    tan_phi = np.tan(phi_prime)
    sec_phi = 1 / np.cos(phi_prime)

    VII = tan_phi / (2 * rho * nu)
    VIII = (
        (tan_phi / (24 * rho * nu ** 3))
        * (5
            + (3 * tan_phi ** 2)
            + eta2
            - (9 * tan_phi ** 2 * eta2))
    )
    IX = (
        (tan_phi / (720 * rho * nu ** 5))
        * (61
            + (90 * tan_phi ** 2)
            + (45 * tan_phi ** 2 * tan_phi ** 2))
    )
    X = sec_phi / nu
    XI = (sec_phi / (6 * nu * nu * nu)) * ((nu / rho) + (2 * tan_phi ** 2))
    XII = (
        (sec_phi / (120 * nu ** 5))
        * (5
            + (28 * tan_phi ** 2)
            + (24 * tan_phi ** 4))
    )
    XIIA = (
        (sec_phi / (5040 * nu ** 7))
        * (61
            + (662 * tan_phi ** 2)
            + (1320 * tan_phi ** 4)
            + (720 * tan_phi ** 6))
    )
    return VII, VIII, IX, X, XI, XII, XIIA


def _apply_series(
    phi_prime: FloatOrArray,
    delta_e: FloatOrArray,
    lambda0: float,
    ellipsoid: Ellipsoid,
    scale_factor: float
) -> Tuple[FloatOrArray, FloatOrArray]:
    """Return (φ, λ) in radians from φ' and the easting offset E - E0."""
    VII, VIII, IX, X, XI, XII, XIIA = _series_coefficients(phi_prime, ellipsoid, scale_factor)

    phi = (
        phi_prime
        - (VII * delta_e ** 2)
        + (VIII * delta_e ** 4)
        - (IX * delta_e ** 6)
    )
    lam = (
        lambda0
        + (X * delta_e)
        - (XI * delta_e ** 3)
        + (XII * delta_e ** 5)
        - (XIIA * delta_e ** 7)
    )
    return phi, lam


def inverse_transverse_mercator(
    northing: float,
    easting: float,
    origin_northing: float,
    origin_easting: float,
    origin_latitude: float,
    origin_longitude: float,
    ellipsoid: Ellipsoid,
    scale_factor: float,
    max_iterations: Optional[int] = None
) -> GeographicPoint:
    """Convert a northing/easting to latitude/longitude.

    Parameters
    ----------
    northing, easting : float
        Grid coordinates of the point in meters.
    origin_northing, origin_easting : float
        Grid coordinates of the true origin (N0, E0) in meters.
    origin_latitude, origin_longitude : float
        True origin (φ0, λ0) in degrees; λ0 is the central meridian.
    ellipsoid : Ellipsoid
        Reference ellipsoid of the grid.
    scale_factor : float
        Scale factor on the central meridian (F0).
    max_iterations : int, optional
        Cap on footpoint iterations (default:
        GeodeticConstants.MAX_FOOTPOINT_ITERATIONS).

    Returns
    -------
    GeographicPoint
        Latitude and longitude in degrees on `ellipsoid`.

    Raises
    ------
    InvalidGridReferenceError
        If the easting or northing is NaN or infinite.
    NonConvergenceError
        If the footpoint latitude iteration does not converge.
    """
    _require_finite(easting, northing)
    phi0 = np.radians(origin_latitude)
    lambda0 = np.radians(origin_longitude)

    phi_prime, iterations = footpoint_latitude(
        northing, origin_northing, phi0, ellipsoid, scale_factor, max_iterations
    )
    logger.debug(f"Footpoint latitude converged in {iterations} iteration(s)")

    phi, lam = _apply_series(phi_prime, easting - origin_easting, lambda0, ellipsoid, scale_factor)

    return GeographicPoint(
        latitude=float(np.degrees(phi)),
        longitude=float(np.degrees(lam)),
        ellipsoid=ellipsoid
    )


def grid_to_geographic(
    reference: GridReference,
    projection: ProjectionDefinition,
    max_iterations: Optional[int] = None
) -> GeographicPoint:
    """Convert a grid reference on `projection` to a geographic point.

    Examples
    --------
    >>> from geospatial.projections import OSGB36_NATIONAL_GRID
    >>> point = grid_to_geographic(GridReference(651409, 313177), OSGB36_NATIONAL_GRID)
    >>> round(point.latitude, 4), round(point.longitude, 4)
    (52.6576, 1.7179)
    """
    return inverse_transverse_mercator(
        reference.northing,
        reference.easting,
        projection.origin_northing,
        projection.origin_easting,
        projection.origin_latitude,
        projection.origin_longitude,
        projection.ellipsoid,
        projection.scale_factor,
        max_iterations=max_iterations,
    )


def grid_to_geographic_batch(
    eastings: ArrayLike,
    northings: ArrayLike,
    projection: ProjectionDefinition,
    round_to_metre: bool = True,
    max_iterations: Optional[int] = None
) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Vectorized grid to geographic conversion.

    Each element follows exactly the arithmetic of `grid_to_geographic`;
    elements stop being refined once their own residual is below tolerance.

    Parameters
    ----------
    eastings, northings : array_like
        Grid coordinates in meters (broadcast against each other).
    projection : ProjectionDefinition
        Grid the coordinates belong to.
    round_to_metre : bool
        Round inputs to whole meters first, as `GridReference` does.
    max_iterations : int, optional
        Cap on footpoint iterations.

    Returns
    -------
    Tuple[ndarray, ndarray]
        (latitudes, longitudes) in degrees on the projection's ellipsoid.

    Raises
    ------
    InvalidGridReferenceError
        If any easting or northing is NaN or infinite.
    NonConvergenceError
        If any element fails to converge within the cap.
    """
    cap = _iteration_cap(max_iterations)
    E, N = np.broadcast_arrays(
        np.asarray(eastings, dtype=np.float64),
        np.asarray(northings, dtype=np.float64)
    )
    _require_finite(E, N)
    if round_to_metre:
        E = round_half_away_from_zero(E)
        N = round_half_away_from_zero(N)

    ellipsoid = projection.ellipsoid
    F0 = projection.scale_factor
    N0 = projection.origin_northing
    phi0 = np.radians(projection.origin_latitude)
    lambda0 = np.radians(projection.origin_longitude)
    aF0 = ellipsoid.a * F0

    phi_prime = ((N - N0) / aF0) + phi0
    active = np.ones(N.shape, dtype=bool)

    iterations = 0
    while True:
        M = meridional_arc(phi_prime, phi0, ellipsoid, F0)
        residual = N - N0 - M
        phi_prime = np.where(active, phi_prime + residual / aF0, phi_prime)
        active &= ~(np.abs(residual) < FOOTPOINT_TOLERANCE_M)
        iterations += 1

        if not active.any():
            break

        if iterations >= cap:
            worst = float(np.max(np.abs(np.asarray(residual)[active])))
            logger.warning(
                f"{int(active.sum())} of {active.size} footpoint latitudes did not converge "
                f"after {iterations} iterations (worst residual={worst:.6e} m)"
            )
            raise NonConvergenceError(
                f"{int(active.sum())} footpoint latitude(s) did not converge within {cap} iterations",
                iterations=iterations,
                residual_m=worst,
            )

    logger.debug(f"Converted {N.size} grid reference(s) in {iterations} iteration(s)")

    phi, lam = _apply_series(phi_prime, E - projection.origin_easting, lambda0, ellipsoid, F0)
    return np.degrees(phi), np.degrees(lam)
