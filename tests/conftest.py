import numpy as np
import pytest
from pyproj import Geod

from geodesy import WGS84, anglesep


@pytest.fixture(scope='session')
def geod():
    """GeographicLib reference solver on WGS84."""
    return Geod(ellps='WGS84')


@pytest.fixture(scope='session')
def wgs84():
    return WGS84


@pytest.fixture(scope='session')
def random_pairs():
    """Seeded point pairs, well away from poles and antipodes.

    Pairs separated by more than 170 degrees are dropped so that every
    inverse solve converges without the antipodal fallback.
    """
    rng = np.random.default_rng(20240917)
    lats = rng.uniform(-80.0, 80.0, size=(200, 2))
    lons = rng.uniform(-180.0, 180.0, size=(200, 2))
    pairs = []
    for (lat1, lat2), (lon1, lon2) in zip(lats, lons):
        if anglesep(lat1, lon1, lat2, lon2) < 170.0:
            pairs.append((float(lat1), float(lon1), float(lat2), float(lon2)))
    return pairs
