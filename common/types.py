"""
Value Types for Geodesic Calculations.

This module defines the dataclasses exchanged between the geodesic solvers
and their callers. Angles are in DEGREES and distances in METERS, matching
the public solver API.

Design Rationale
----------------
Using typed dataclasses instead of raw tuples provides:
1. Self-documenting code - field names describe the data
2. Runtime validation of latitude ranges at the boundary
3. Clear unit expectations in docstrings
"""

from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple, Union
import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class GeodeticPoint:
    """A geodetic position on the surface of a reference ellipsoid.

    Attributes
    ----------
    latitude : float
        Geodetic latitude in DEGREES. Range: [-90, 90].
    longitude : float
        Geodetic longitude in DEGREES. Any finite value is accepted;
        solver outputs are normalized to (-180, 180].

    Examples
    --------
    >>> point = GeodeticPoint(latitude=51.4778, longitude=-0.0014)
    >>> lat_rad, lon_rad = point.to_radians()
    """
    latitude: float  # degrees
    longitude: float  # degrees

    def __post_init__(self):
        """Validate coordinate ranges."""
        if not np.isfinite(self.latitude) or not np.isfinite(self.longitude):
            raise ValueError(
                f"Coordinates must be finite, got ({self.latitude}, {self.longitude})"
            )
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(
                f"Latitude {self.latitude} deg out of range [-90, 90]. "
                f"Did you pass radians instead of degrees?"
            )

    def to_radians(self) -> Tuple[float, float]:
        """Return (latitude, longitude) in radians."""
        return float(np.radians(self.latitude)), float(np.radians(self.longitude))


@dataclass(frozen=True)
class GeodesicResult:
    """Solution of the inverse geodesic problem.

    Attributes
    ----------
    distance_m : float
        Geodesic distance in meters, always >= 0.
    azimuth_deg : float
        Forward azimuth at the first point in degrees clockwise from
        north, normalized to [0, 360).
    """
    distance_m: float
    azimuth_deg: float


@dataclass(frozen=True)
class ReckonResult:
    """Solution of the direct geodesic problem.

    Attributes
    ----------
    latitude : float
        Latitude of the destination in degrees.
    longitude : float
        Longitude of the destination in degrees, in (-180, 180].
    """
    latitude: float
    longitude: float

    def as_point(self) -> GeodeticPoint:
        return GeodeticPoint(self.latitude, self.longitude)


class Track:
    """Ordered sequence of points along a geodesic.

    A `Track` is fully materialized at construction: iterating it twice
    yields the same points, and no solver state is kept.
    """

    def __init__(
        self,
        latitudes: Union[Sequence[float], NDArray[np.float64]],
        longitudes: Union[Sequence[float], NDArray[np.float64]]
    ):
        lats = np.asarray(latitudes, dtype=np.float64)
        lons = np.asarray(longitudes, dtype=np.float64)
        if lats.shape != lons.shape or lats.ndim != 1:
            raise ValueError(
                f"Latitude and longitude arrays must be 1-D with equal length, "
                f"got shapes {lats.shape} and {lons.shape}"
            )
        self._latitudes = lats
        self._longitudes = lons
        # Read-only views so callers cannot mutate the track in place.
        self._latitudes.flags.writeable = False
        self._longitudes.flags.writeable = False

    @property
    def latitudes(self) -> NDArray[np.float64]:
        return self._latitudes

    @property
    def longitudes(self) -> NDArray[np.float64]:
        return self._longitudes

    @property
    def points(self) -> List[GeodeticPoint]:
        return list(self)

    def __len__(self) -> int:
        return len(self._latitudes)

    def __iter__(self) -> Iterator[GeodeticPoint]:
        for lat, lon in zip(self._latitudes, self._longitudes):
            yield GeodeticPoint(float(lat), float(lon))

    def __getitem__(self, idx: int) -> GeodeticPoint:
        return GeodeticPoint(float(self._latitudes[idx]), float(self._longitudes[idx]))

    def __repr__(self) -> str:
        return f"Track(npts={len(self)})"


# Type aliases for array inputs
FloatOrArray = Union[float, NDArray[np.float64]]
