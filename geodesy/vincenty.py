"""
Vincenty's Geodesic Solvers on an Oblate Ellipsoid.

This module solves the two classical geodesic problems iteratively, and
chains them to discretize a geodesic into equally spaced points.

- `vdist`: inverse problem (distance and forward azimuth between two points)
- `vreckon`: direct problem (destination from start, azimuth and range)
- `track2`: N points along the geodesic joining two endpoints

Scientific Context
------------------
Domain: Geodesy, differential geometry on surfaces of revolution
Model: Geodesic on an oblate ellipsoid, solved on the auxiliary sphere

The geodesic is mapped onto an auxiliary sphere using reduced latitudes.
The longitude difference on that sphere (λ for the inverse problem) or the
arc length on it (σ for the direct problem) is found by fixed-point
iteration, then converted back to the ellipsoid with short series in the
second eccentricity.

Numerical Policy
----------------
- Latitudes within `pole_epsilon` of a pole are moved that far (about
  0.6 mm on Earth) towards the equator before solving.
- Divisions that are structurally zero at the poles, along the equator or
  for coincident points are guarded by explicit branches that substitute
  the limiting value; NaN never leaks out of a solve.
- Nearly antipodal inverse problems do not converge. After
  `max_iterations` passes, or as soon as λ overshoots π, λ is fixed at π
  and an `AntipodalWarning` is emitted. The result is still returned with
  slightly reduced accuracy.

References
----------
- Vincenty, T. (1975). Direct and inverse solutions of geodesics on the
  ellipsoid with application of nested equations. Survey Review, 23(176),
  88-93.
- Kleder, M. (2004-2007). VDIST / VRECKON: error trapping, polar and
  antipodal corrections, azimuth quadrant resolution.
"""

from dataclasses import dataclass
from typing import Optional, Tuple
import warnings

import numpy as np
from numpy.typing import NDArray

from common.logging_config import get_logger
from geodesy.ellipsoid import Ellipsoid, WGS84
from geodesy.haversine import anglesep

logger = get_logger(__name__)


@dataclass(frozen=True)
class SolverConfig:
    """Configuration for the iterative solvers.

    Attributes
    ----------
    tolerance : float
        Convergence threshold in radians on successive iterates of λ
        (inverse) or σ (direct).
    max_iterations : int
        Maximum passes of the inverse solver before the antipodal
        fallback is applied.
    pole_epsilon : float
        Latitudes closer than this (radians) to ±π/2 are nudged away
        from the pole.
    antipodal_tolerance : float
        Track endpoints whose spherical separation is within this many
        radians of π are rejected as antipodal.
    direct_max_iterations : int, optional
        Upper bound on passes of the direct solver. None (the default)
        leaves the contractive recurrence unbounded.
    """
    tolerance: float = 1e-12
    max_iterations: int = 50
    pole_epsilon: float = 1e-10
    antipodal_tolerance: float = 1e-12
    direct_max_iterations: Optional[int] = None

    def __post_init__(self):
        for name in ("tolerance", "pole_epsilon", "antipodal_tolerance"):
            if not getattr(self, name) > 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be >= 1, got {self.max_iterations}")
        if self.direct_max_iterations is not None and self.direct_max_iterations < 1:
            raise ValueError(
                f"direct_max_iterations must be >= 1 or None, got {self.direct_max_iterations}"
            )


DEFAULT_CONFIG = SolverConfig()


class AntipodalWarning(UserWarning):
    """Inverse solve fell back to λ = π for (nearly) antipodal points."""


class AntipodalTrackError(ValueError):
    """Track requested between antipodal endpoints; the geodesic is not unique."""


class ConvergenceError(RuntimeError):
    """Direct solver exceeded its configured iteration bound."""


def _check_latitude(*latitudes: float) -> None:
    for lat in latitudes:
        if not abs(lat) <= 90.0:
            raise ValueError(f"Input latitudes must be in [-90, 90] degrees, got {lat}")


def _check_finite(**values: float) -> None:
    for name, value in values.items():
        if not np.isfinite(value):
            raise ValueError(f"{name} must be finite, got {value}")


def _nudge_from_pole(lat_rad: float, epsilon: float) -> float:
    if abs(np.pi / 2 - abs(lat_rad)) < epsilon:
        return np.sign(lat_rad) * (np.pi / 2 - epsilon)
    return lat_rad


def _series_coefficients(u2: float) -> Tuple[float, float]:
    """Vincenty's A and B coefficients for u² = cos²α · e'²."""
    A = 1 + (u2 / 16384) * (4096 + u2 * (-768 + u2 * (320 - 175 * u2)))
    B = (u2 / 1024) * (256 + u2 * (-128 + u2 * (74 - 47 * u2)))
    return A, B


def _delta_sigma(B: float, sin_sigma: float, cos_sigma: float, cos2sigma_m: float) -> float:
    return B * sin_sigma * (
        cos2sigma_m + (B / 4) * (
            cos_sigma * (-1 + 2 * cos2sigma_m**2)
            - (B / 6) * cos2sigma_m * (-3 + 4 * sin_sigma**2) * (-3 + 4 * cos2sigma_m**2)
        )
    )


def _normalize_longitude(lon_deg: float) -> float:
    """Wrap a longitude in degrees into (-180, 180]."""
    return 180.0 - ((180.0 - lon_deg) % 360.0)


def _warn_antipodal(lat1: float, lon1: float, lat2: float, lon2: float, iteration: int) -> None:
    logger.debug(
        f"vdist fell back to lambda=pi after {iteration} iterations for "
        f"({lat1}, {lon1}) -> ({lat2}, {lon2})"
    )
    warnings.warn(
        "Essentially antipodal points encountered. Precision may be reduced slightly.",
        AntipodalWarning,
        stacklevel=4
    )


def _at_pole(lat_deg: float, epsilon: float) -> int:
    """+1 at the north pole, -1 at the south pole, 0 elsewhere."""
    lat_rad = np.radians(lat_deg)
    if abs(np.pi / 2 - abs(lat_rad)) < epsilon:
        return 1 if lat_rad > 0 else -1
    return 0


def vdist(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
    ell: Ellipsoid = WGS84,
    config: SolverConfig = DEFAULT_CONFIG
) -> Tuple[float, float]:
    """Solve the inverse geodesic problem.

    Parameters
    ----------
    lat1, lon1 : float
        Geodetic latitude and longitude of the first point in degrees.
    lat2, lon2 : float
        Geodetic latitude and longitude of the second point in degrees.
    ell : Ellipsoid
        Reference ellipsoid (default: WGS84).
    config : SolverConfig
        Solver tolerances and iteration limits.

    Returns
    -------
    Tuple[float, float]
        (distance_m, azimuth_deg): geodesic distance in meters and the
        forward azimuth at the first point, clockwise from north, in
        [0, 360).

    Raises
    ------
    ValueError
        If a latitude is outside [-90, 90] or an input is not finite.

    Warns
    -----
    AntipodalWarning
        If the points are essentially antipodal and λ was fixed at π.

    Notes
    -----
    - Coincident points away from the poles give distance 0 and azimuth 0.
    - Azimuths FROM the north pole are 180 degrees by convention, and
      azimuths FROM the south pole are 0 degrees.
    - Vincenty quotes the distance as precise to within 0.01 mm, subject
      to the ellipsoidal model, away from antipodal configurations.

    Examples
    --------
    >>> dist_m, az_deg = vdist(0.0, 0.0, 0.0, 1.0)
    >>> print(f"{dist_m:.2f} m at {az_deg:.1f} deg")
    111319.49 m at 90.0 deg
    """
    dist_m, az_deg = _solve_inverse(lat1, lon1, lat2, lon2, ell, config)

    pole = _at_pole(lat1, config.pole_epsilon)
    if pole > 0:
        az_deg = 180.0
    elif pole < 0:
        az_deg = 0.0

    return dist_m, az_deg


def _solve_inverse(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
    ell: Ellipsoid,
    config: SolverConfig
) -> Tuple[float, float]:
    """Inverse solve without the pole azimuth convention.

    At a pole the azimuth is measured from the meridian of `lon1`, which is
    how `vreckon` interprets an azimuth leaving a pole.
    """
    _check_latitude(lat1, lat2)
    _check_finite(lon1=lon1, lon2=lon2)

    b = ell.b
    f = ell.f

    lat1_rad = _nudge_from_pole(np.radians(lat1), config.pole_epsilon)
    lat2_rad = _nudge_from_pole(np.radians(lat2), config.pole_epsilon)

    # Reduced latitudes on the auxiliary sphere
    U1 = np.arctan((1 - f) * np.tan(lat1_rad))
    U2 = np.arctan((1 - f) * np.tan(lat2_rad))
    sin_U1, cos_U1 = np.sin(U1), np.cos(U1)
    sin_U2, cos_U2 = np.sin(U2), np.cos(U2)

    lon1_rad = np.radians(lon1) % (2 * np.pi)
    lon2_rad = np.radians(lon2) % (2 * np.pi)
    L = abs(lon2_rad - lon1_rad)
    if L > np.pi:
        L = 2 * np.pi - L

    lamb = L
    for iteration in range(1, config.max_iterations + 1):
        sin_lamb, cos_lamb = np.sin(lamb), np.cos(lamb)

        sin_sigma = np.sqrt(
            (cos_U2 * sin_lamb)**2
            + (cos_U1 * sin_U2 - sin_U1 * cos_U2 * cos_lamb)**2
        )
        cos_sigma = sin_U1 * sin_U2 + cos_U1 * cos_U2 * cos_lamb
        sigma = np.arctan2(sin_sigma, cos_sigma)

        denominator = np.sin(sigma)
        if denominator == 0:
            sin_alpha = 0.0
        else:
            sin_alpha = cos_U1 * cos_U2 * sin_lamb / denominator

        if sin_alpha > 1 or abs(sin_alpha - 1) < 1e-16:
            alpha = np.pi / 2
        else:
            alpha = np.arcsin(sin_alpha)
        cos_sq_alpha = np.cos(alpha)**2

        # Equatorial line: sin U1 sin U2 vanishes with cos²α.
        if cos_sq_alpha == 0:
            cos2sigma_m = 0.0
        else:
            cos2sigma_m = np.cos(sigma) - 2 * sin_U1 * sin_U2 / cos_sq_alpha

        C = (f / 16) * cos_sq_alpha * (4 + f * (4 - 3 * cos_sq_alpha))
        lamb_new = L + (1 - C) * f * np.sin(alpha) * (
            sigma + C * np.sin(sigma) * (
                cos2sigma_m + C * np.cos(sigma) * (-1 + 2 * cos2sigma_m**2)
            )
        )

        if lamb_new > np.pi:
            _warn_antipodal(lat1, lon1, lat2, lon2, iteration)
            lamb = np.pi
            break

        converged = abs(lamb_new - lamb) <= config.tolerance
        lamb = lamb_new
        if converged:
            logger.debug(f"vdist converged after {iteration} iterations")
            break
    else:
        _warn_antipodal(lat1, lon1, lat2, lon2, config.max_iterations)
        lamb = np.pi

    u2 = cos_sq_alpha * ell.ep2
    A, B = _series_coefficients(u2)
    delta_sigma = _delta_sigma(B, np.sin(sigma), np.cos(sigma), cos2sigma_m)
    dist_m = b * A * (sigma - delta_sigma)

    # Restore the sign of λ from the unreduced longitude difference.
    lamb = abs(lamb)
    if np.sign(np.sin(lon2_rad - lon1_rad)) * np.sign(np.sin(lamb)) < 0:
        lamb = -lamb

    numer = cos_U2 * np.sin(lamb)
    denom = cos_U1 * sin_U2 - sin_U1 * cos_U2 * np.cos(lamb)
    az_deg = np.degrees(np.arctan2(numer, denom)) % 360.0
    # A tiny negative angle wraps to exactly 360.0 in floating point.
    if az_deg >= 360.0:
        az_deg = 0.0

    return float(dist_m), float(az_deg)


def vreckon(
    lat1: float,
    lon1: float,
    rng: float,
    azim: float,
    ell: Ellipsoid = WGS84,
    config: SolverConfig = DEFAULT_CONFIG
) -> Tuple[float, float]:
    """Solve the direct geodesic problem.

    Travel a given distance along a geodesic leaving the start point at a
    given azimuth, and return the endpoint.

    Parameters
    ----------
    lat1, lon1 : float
        Start latitude and longitude in degrees.
    rng : float
        Ground distance to travel in meters, >= 0.
    azim : float
        Initial azimuth in degrees clockwise from north. Any real value
        is accepted.
    ell : Ellipsoid
        Reference ellipsoid (default: WGS84).
    config : SolverConfig
        Solver tolerances and iteration limits.

    Returns
    -------
    Tuple[float, float]
        (lat2, lon2) in degrees, with lon2 in (-180, 180].

    Raises
    ------
    ValueError
        If the latitude is outside [-90, 90], the range is negative, or an
        input is not finite.
    ConvergenceError
        If `config.direct_max_iterations` is set and exceeded.

    Notes
    -----
    - When starting at a pole, the (otherwise meaningless) start longitude
      selects the meridian along which to travel. This differs from the
      azimuth convention of `vdist` at the poles.
    - The σ recurrence is contractive for all physically valid ranges, so
      no iteration cap is applied unless one is configured.
    """
    _check_latitude(lat1)
    _check_finite(lon1=lon1, rng=rng, azim=azim)
    if not rng >= 0:
        raise ValueError(f"Ground distance must be non-negative, got {rng}")

    b = ell.b
    f = ell.f

    lat1_rad = _nudge_from_pole(np.radians(lat1), config.pole_epsilon)
    alpha1 = np.radians(azim)
    sin_alpha1, cos_alpha1 = np.sin(alpha1), np.cos(alpha1)

    tan_U1 = (1 - f) * np.tan(lat1_rad)
    cos_U1 = 1 / np.sqrt(1 + tan_U1**2)
    sin_U1 = tan_U1 * cos_U1
    sigma1 = np.arctan2(tan_U1, cos_alpha1)

    # Clairaut constant, invariant along the geodesic
    sin_alpha = cos_U1 * sin_alpha1
    cos_sq_alpha = 1 - sin_alpha * sin_alpha

    u2 = cos_sq_alpha * ell.ep2
    A, B = _series_coefficients(u2)

    sigma_0 = rng / (b * A)
    sigma = sigma_0
    sigma_prev = np.inf
    iteration = 0
    while abs(sigma - sigma_prev) > config.tolerance:
        iteration += 1
        if config.direct_max_iterations is not None and iteration > config.direct_max_iterations:
            raise ConvergenceError(
                f"vreckon did not converge within {config.direct_max_iterations} iterations "
                f"(lat1={lat1}, lon1={lon1}, rng={rng}, azim={azim})"
            )
        cos2sigma_m = np.cos(2 * sigma1 + sigma)
        sin_sigma = np.sin(sigma)
        cos_sigma = np.cos(sigma)
        delta_sigma = _delta_sigma(B, sin_sigma, cos_sigma, cos2sigma_m)
        sigma_prev = sigma
        sigma = sigma_0 + delta_sigma

    logger.debug(f"vreckon converged after {iteration} iterations")

    tmp = sin_U1 * sin_sigma - cos_U1 * cos_sigma * cos_alpha1
    lat2 = np.arctan2(
        sin_U1 * cos_sigma + cos_U1 * sin_sigma * cos_alpha1,
        (1 - f) * np.sqrt(sin_alpha * sin_alpha + tmp**2)
    )
    lamb = np.arctan2(
        sin_sigma * sin_alpha1,
        cos_U1 * cos_sigma - sin_U1 * sin_sigma * cos_alpha1
    )
    C = (f / 16) * cos_sq_alpha * (4 + f * (4 - 3 * cos_sq_alpha))
    L = lamb - f * (1 - C) * sin_alpha * (
        sigma + C * sin_sigma * (
            cos2sigma_m + C * cos_sigma * (-1 + 2 * cos2sigma_m * cos2sigma_m)
        )
    )

    lon2 = _normalize_longitude(lon1 + np.degrees(L))

    return float(np.degrees(lat2)), float(lon2)


def track2(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
    ell: Ellipsoid = WGS84,
    npts: int = 100,
    deg: bool = True,
    config: SolverConfig = DEFAULT_CONFIG
) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Compute equally spaced points along the geodesic between two points.

    Parameters
    ----------
    lat1, lon1 : float
        First point.
    lat2, lon2 : float
        Second point.
    ell : Ellipsoid
        Reference ellipsoid (default: WGS84).
    npts : int
        Number of points including both endpoints; must be > 1.
    deg : bool
        If True, inputs and outputs are in degrees; otherwise radians.
    config : SolverConfig
        Solver tolerances and iteration limits.

    Returns
    -------
    Tuple[ndarray, ndarray]
        (lats, lons), each of length `npts`. The first and last entries
        are the endpoints exactly as given.

    Raises
    ------
    ValueError
        If `npts` is not an integer greater than 1.
    AntipodalTrackError
        If `npts > 2` and the endpoints are antipodal.

    Notes
    -----
    One inverse solve gives the total distance and the first azimuth.
    Each step then advances one increment with `vreckon` and re-solves the
    inverse problem to the final point for the azimuth of the next step,
    since azimuth varies along a geodesic.
    """
    if isinstance(npts, bool) or not isinstance(npts, (int, np.integer)) or npts <= 1:
        raise ValueError(f"npts must be an integer greater than 1, got {npts!r}")

    if npts == 2:
        return np.array([lat1, lat2], dtype=np.float64), np.array([lon1, lon2], dtype=np.float64)

    if deg:
        rlat1, rlon1, rlat2, rlon2 = (np.radians(x) for x in (lat1, lon1, lat2, lon2))
        dlat1, dlon1, dlat2, dlon2 = lat1, lon1, lat2, lon2
    else:
        rlat1, rlon1, rlat2, rlon2 = lat1, lon1, lat2, lon2
        dlat1, dlon1, dlat2, dlon2 = (float(np.degrees(x)) for x in (lat1, lon1, lat2, lon2))

    gcarclen = anglesep(rlat1, rlon1, rlat2, rlon2, deg=False)
    if abs(gcarclen - np.pi) < config.antipodal_tolerance:
        raise AntipodalTrackError(
            "cannot compute intermediate points on a geodesic whose endpoints are antipodal"
        )

    distance, azimuth = _solve_inverse(dlat1, dlon1, dlat2, dlon2, ell, config)
    incdist = distance / (npts - 1)

    lats = np.empty(npts, dtype=np.float64)
    lons = np.empty(npts, dtype=np.float64)

    lat_pt, lon_pt = dlat1, dlon1
    for i in range(1, npts - 1):
        lat_pt, lon_pt = vreckon(lat_pt, lon_pt, incdist, azimuth, ell, config)
        azimuth = _solve_inverse(lat_pt, lon_pt, dlat2, dlon2, ell, config)[1]
        lats[i] = lat_pt
        lons[i] = lon_pt

    logger.debug(f"track2 generated {npts} points over {distance:.3f} m")

    if not deg:
        lats = np.radians(lats)
        lons = np.radians(lons)

    lats[0], lons[0] = lat1, lon1
    lats[-1], lons[-1] = lat2, lon2

    return lats, lons
