"""
Batch Evaluation of the Geodesic Solvers.

Inputs are broadcast with numpy and each element is solved independently by
the scalar solver, so iteration counts, convergence tests and the antipodal
fallback behave exactly as for a single call.
"""

from typing import Tuple
import numpy as np
from numpy.typing import ArrayLike, NDArray

from common.logging_config import get_logger
from geodesy.ellipsoid import Ellipsoid, WGS84
from geodesy.vincenty import DEFAULT_CONFIG, SolverConfig, vdist, vreckon

logger = get_logger(__name__)


def vdist_batch(
    lat1: ArrayLike,
    lon1: ArrayLike,
    lat2: ArrayLike,
    lon2: ArrayLike,
    ell: Ellipsoid = WGS84,
    config: SolverConfig = DEFAULT_CONFIG
) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Inverse geodesic problem for arrays of point pairs.

    Parameters
    ----------
    lat1, lon1, lat2, lon2 : array_like
        Coordinates in degrees. Inputs can be:
        - Same shape: pairwise solves
        - Broadcastable shapes: one point to many, etc.
    ell : Ellipsoid
        Reference ellipsoid (default: WGS84).
    config : SolverConfig
        Solver tolerances and iteration limits.

    Returns
    -------
    Tuple[ndarray, ndarray]
        (distance_m, azimuth_deg) with the broadcast shape of the inputs.

    Raises
    ------
    ValueError
        If any latitude is outside [-90, 90]; no partial output is returned.
    """
    lat1, lon1, lat2, lon2 = np.broadcast_arrays(
        *(np.asarray(x, dtype=np.float64) for x in (lat1, lon1, lat2, lon2))
    )

    distance = np.empty(lat1.shape, dtype=np.float64)
    azimuth = np.empty(lat1.shape, dtype=np.float64)

    for idx in np.ndindex(lat1.shape):
        distance[idx], azimuth[idx] = vdist(
            lat1[idx], lon1[idx], lat2[idx], lon2[idx], ell, config
        )

    logger.debug(f"vdist_batch solved {distance.size} point pairs")
    return distance, azimuth


def vreckon_batch(
    lat1: ArrayLike,
    lon1: ArrayLike,
    rng: ArrayLike,
    azim: ArrayLike,
    ell: Ellipsoid = WGS84,
    config: SolverConfig = DEFAULT_CONFIG
) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Direct geodesic problem for arrays of starts, ranges and azimuths.

    Parameters
    ----------
    lat1, lon1 : array_like
        Start coordinates in degrees.
    rng : array_like
        Ground distances in meters.
    azim : array_like
        Initial azimuths in degrees.
    ell : Ellipsoid
        Reference ellipsoid (default: WGS84).
    config : SolverConfig
        Solver tolerances and iteration limits.

    Returns
    -------
    Tuple[ndarray, ndarray]
        (lat2, lon2) in degrees with the broadcast shape of the inputs.
    """
    lat1, lon1, rng, azim = np.broadcast_arrays(
        *(np.asarray(x, dtype=np.float64) for x in (lat1, lon1, rng, azim))
    )

    lat2 = np.empty(lat1.shape, dtype=np.float64)
    lon2 = np.empty(lat1.shape, dtype=np.float64)

    for idx in np.ndindex(lat1.shape):
        lat2[idx], lon2[idx] = vreckon(
            lat1[idx], lon1[idx], rng[idx], azim[idx], ell, config
        )

    logger.debug(f"vreckon_batch solved {lat2.size} destinations")
    return lat2, lon2
