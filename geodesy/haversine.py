"""
Angular Separation on a Sphere.

Two formulations are provided:

- `anglesep_meeus`: the Meeus haversine form, stable all the way down to a
  separation of exactly zero but ill-conditioned near antipodal points
  (arcsin flattens out as its argument approaches 1).
- `anglesep`: the atan2 form also used by astropy, well conditioned over the
  whole range [0, π]. The track discretizer relies on it to detect antipodal
  endpoints before any iterative solve is attempted.

References
----------
- Meeus, J. (1998). Astronomical Algorithms (2nd ed.), ch. 17, eq. 17.5.
- astropy.coordinates.angle_utilities.angular_separation
"""

import numpy as np

from common.types import FloatOrArray


def haversine(theta: FloatOrArray) -> FloatOrArray:
    """Compute the haversine of an angle in radians: (1 - cos θ) / 2."""
    return (1.0 - np.cos(theta)) / 2.0


def _to_radians(deg: bool, *angles: FloatOrArray):
    if deg:
        return tuple(np.radians(x) for x in angles)
    return angles


def anglesep_meeus(
    lat1: FloatOrArray,
    lon1: FloatOrArray,
    lat2: FloatOrArray,
    lon2: FloatOrArray,
    deg: bool = True
) -> FloatOrArray:
    """Angular separation using the haversine formula.

    Parameters
    ----------
    lat1, lon1 : float or ndarray
        First point.
    lat2, lon2 : float or ndarray
        Second point.
    deg : bool
        If True, inputs and output are in degrees; otherwise radians.

    Returns
    -------
    float or ndarray
        Central angle between the points.
    """
    lat1, lon1, lat2, lon2 = _to_radians(deg, lat1, lon1, lat2, lon2)

    h = haversine(lat1 - lat2) + np.cos(lat1) * np.cos(lat2) * haversine(lon1 - lon2)
    # Rounding can push h a hair past 1 for antipodal points.
    sep_rad = 2.0 * np.arcsin(np.sqrt(np.clip(h, 0.0, 1.0)))

    return np.degrees(sep_rad) if deg else sep_rad


def anglesep(
    lat1: FloatOrArray,
    lon1: FloatOrArray,
    lat2: FloatOrArray,
    lon2: FloatOrArray,
    deg: bool = True
) -> FloatOrArray:
    """Angular separation between two points on a sphere.

    Parameters
    ----------
    lat1, lon1 : float or ndarray
        First point.
    lat2, lon2 : float or ndarray
        Second point.
    deg : bool
        If True, inputs and output are in degrees; otherwise radians.

    Returns
    -------
    float or ndarray
        Central angle between the points, in [0, π] (or [0, 180]).

    Notes
    -----
    Inputs broadcast against each other with the usual numpy rules.
    """
    lat1, lon1, lat2, lon2 = _to_radians(deg, lat1, lon1, lat2, lon2)

    dlon = lon2 - lon1
    sin_lat1, cos_lat1 = np.sin(lat1), np.cos(lat1)
    sin_lat2, cos_lat2 = np.sin(lat2), np.cos(lat2)

    num1 = cos_lat2 * np.sin(dlon)
    num2 = cos_lat1 * sin_lat2 - sin_lat1 * cos_lat2 * np.cos(dlon)
    denominator = sin_lat1 * sin_lat2 + cos_lat1 * cos_lat2 * np.cos(dlon)

    sep_rad = np.arctan2(np.hypot(num1, num2), denominator)

    return np.degrees(sep_rad) if deg else sep_rad
