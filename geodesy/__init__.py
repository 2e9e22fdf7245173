"""
Geodesy Module: geodesics on reference ellipsoids.

All ellipsoidal distance, azimuth and reckoning calculations originate from
this package. It provides:
- Reference ellipsoids for Earth and other planetary bodies
- Vincenty inverse and direct solvers and the geodesic track discretizer
- A unit-aware public API and array batch evaluation
- Spherical angular separation
"""

from geodesy.ellipsoid import (
    Ellipsoid,
    ELLIPSOIDS,
    WGS84,
    get_ellipsoid,
)

from geodesy.haversine import (
    haversine,
    anglesep,
    anglesep_meeus,
)

from geodesy.vincenty import (
    SolverConfig,
    DEFAULT_CONFIG,
    AntipodalWarning,
    AntipodalTrackError,
    ConvergenceError,
    vdist,
    vreckon,
    track2,
)

from geodesy.geodesic import (
    inverse,
    direct,
    track,
)

from geodesy.batch import (
    vdist_batch,
    vreckon_batch,
)

__all__ = [
    # Ellipsoids
    "Ellipsoid",
    "ELLIPSOIDS",
    "WGS84",
    "get_ellipsoid",
    # Angular separation
    "haversine",
    "anglesep",
    "anglesep_meeus",
    # Solvers
    "SolverConfig",
    "DEFAULT_CONFIG",
    "AntipodalWarning",
    "AntipodalTrackError",
    "ConvergenceError",
    "vdist",
    "vreckon",
    "track2",
    # Public API
    "inverse",
    "direct",
    "track",
    # Batch
    "vdist_batch",
    "vreckon_batch",
]
