"""
Public Geodesic API.

Thin, unit-aware front end over the Vincenty solvers. Arguments may be bare
floats (degrees and meters) or `pint` quantities of compatible
dimensionality; results are returned as typed value objects.

Examples
--------
>>> from common.units import Q_
>>> result = inverse(40.6413, -73.7781, 51.4700, -0.4543)
>>> dest = direct(40.6413, -73.7781, Q_(500, 'nautical_mile'), result.azimuth_deg)
"""

from typing import Optional, Union

from common.types import GeodesicResult, ReckonResult, Track
from common.units import STANDARD_UNITS, to_magnitude, validate_units
from geodesy.ellipsoid import Ellipsoid, WGS84, get_ellipsoid
from geodesy.vincenty import DEFAULT_CONFIG, SolverConfig, track2, vdist, vreckon

EllipsoidLike = Optional[Union[Ellipsoid, str]]

_ENDPOINT_UNITS = {
    "lat1": STANDARD_UNITS["latitude"],
    "lon1": STANDARD_UNITS["longitude"],
    "lat2": STANDARD_UNITS["latitude"],
    "lon2": STANDARD_UNITS["longitude"],
}


def resolve_ellipsoid(ell: EllipsoidLike) -> Ellipsoid:
    """Return WGS84 for None, a catalog entry for a name, or `ell` itself."""
    if ell is None:
        return WGS84
    if isinstance(ell, str):
        return get_ellipsoid(ell)
    return ell


@validate_units(_ENDPOINT_UNITS)
def inverse(
    lat1,
    lon1,
    lat2,
    lon2,
    ell: EllipsoidLike = None,
    config: SolverConfig = DEFAULT_CONFIG
) -> GeodesicResult:
    """Distance and forward azimuth from point 1 to point 2.

    Parameters
    ----------
    lat1, lon1, lat2, lon2 : float or pint.Quantity
        Endpoints, degrees if bare numbers.
    ell : Ellipsoid or str, optional
        Reference ellipsoid or catalog name (default: WGS84).
    config : SolverConfig
        Solver tolerances and iteration limits.

    Returns
    -------
    GeodesicResult
    """
    distance_m, azimuth_deg = vdist(
        to_magnitude(lat1, STANDARD_UNITS["latitude"]),
        to_magnitude(lon1, STANDARD_UNITS["longitude"]),
        to_magnitude(lat2, STANDARD_UNITS["latitude"]),
        to_magnitude(lon2, STANDARD_UNITS["longitude"]),
        resolve_ellipsoid(ell),
        config
    )
    return GeodesicResult(distance_m=distance_m, azimuth_deg=azimuth_deg)


@validate_units({
    "lat1": STANDARD_UNITS["latitude"],
    "lon1": STANDARD_UNITS["longitude"],
    "range_m": STANDARD_UNITS["distance"],
    "azimuth_deg": STANDARD_UNITS["azimuth"],
})
def direct(
    lat1,
    lon1,
    range_m,
    azimuth_deg,
    ell: EllipsoidLike = None,
    config: SolverConfig = DEFAULT_CONFIG
) -> ReckonResult:
    """Destination reached from a start point, azimuth and range.

    Parameters
    ----------
    lat1, lon1 : float or pint.Quantity
        Start point, degrees if bare numbers.
    range_m : float or pint.Quantity
        Distance to travel, meters if a bare number.
    azimuth_deg : float or pint.Quantity
        Initial azimuth, degrees if a bare number.
    ell : Ellipsoid or str, optional
        Reference ellipsoid or catalog name (default: WGS84).
    config : SolverConfig
        Solver tolerances and iteration limits.

    Returns
    -------
    ReckonResult
    """
    lat2, lon2 = vreckon(
        to_magnitude(lat1, STANDARD_UNITS["latitude"]),
        to_magnitude(lon1, STANDARD_UNITS["longitude"]),
        to_magnitude(range_m, STANDARD_UNITS["distance"]),
        to_magnitude(azimuth_deg, STANDARD_UNITS["azimuth"]),
        resolve_ellipsoid(ell),
        config
    )
    return ReckonResult(latitude=lat2, longitude=lon2)


@validate_units(_ENDPOINT_UNITS)
def track(
    lat1,
    lon1,
    lat2,
    lon2,
    ell: EllipsoidLike = None,
    npts: int = 100,
    config: SolverConfig = DEFAULT_CONFIG
) -> Track:
    """Equally spaced points along the geodesic from point 1 to point 2.

    See `geodesy.vincenty.track2` for the failure modes.
    """
    lats, lons = track2(
        to_magnitude(lat1, STANDARD_UNITS["latitude"]),
        to_magnitude(lon1, STANDARD_UNITS["longitude"]),
        to_magnitude(lat2, STANDARD_UNITS["latitude"]),
        to_magnitude(lon2, STANDARD_UNITS["longitude"]),
        resolve_ellipsoid(ell),
        npts=npts,
        config=config
    )
    return Track(lats, lons)
