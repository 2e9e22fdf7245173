import numpy as np
import pytest

from common.types import GeodeticPoint, GeodesicResult, ReckonResult, Track
from common.units import Q_
from geodesy import ELLIPSOIDS, AntipodalTrackError, direct, inverse, track, vdist, vreckon


def test_inverse_returns_result():
    result = inverse(0.0, 0.0, 0.0, 1.0)
    assert isinstance(result, GeodesicResult)
    assert result.distance_m == pytest.approx(111319.49, abs=0.01)
    assert result.azimuth_deg == pytest.approx(90.0)


def test_inverse_accepts_quantities():
    plain = inverse(10.0, 20.0, 30.0, 40.0)
    tagged = inverse(
        Q_(np.radians(10.0), 'radian'),
        Q_(20.0, 'degree'),
        Q_(30.0, 'degree'),
        Q_(np.radians(40.0), 'radian'),
    )
    assert tagged.distance_m == pytest.approx(plain.distance_m, rel=1e-12)
    assert tagged.azimuth_deg == pytest.approx(plain.azimuth_deg, abs=1e-10)


def test_inverse_rejects_incompatible_units():
    with pytest.raises(ValueError, match='incompatible units'):
        inverse(Q_(10.0, 'meter'), 0.0, 0.0, 0.0)


def test_direct_returns_result():
    result = direct(10.0, 20.0, 5e5, 45.0)
    assert isinstance(result, ReckonResult)
    assert (result.latitude, result.longitude) == vreckon(10.0, 20.0, 5e5, 45.0)
    assert isinstance(result.as_point(), GeodeticPoint)


def test_direct_accepts_quantities():
    plain = direct(10.0, 20.0, 1852.0 * 300, 45.0)
    tagged = direct(10.0, 20.0, Q_(300, 'nautical_mile'), Q_(np.pi / 4, 'radian'))
    assert tagged.latitude == pytest.approx(plain.latitude, abs=1e-10)
    assert tagged.longitude == pytest.approx(plain.longitude, abs=1e-10)

    km = direct(10.0, 20.0, Q_(555.6, 'km'), 45.0)
    assert km.latitude == pytest.approx(plain.latitude, abs=1e-10)


def test_direct_rejects_incompatible_units():
    with pytest.raises(ValueError, match='range_m'):
        direct(0.0, 0.0, Q_(1.0, 'second'), 90.0)


def test_ellipsoid_by_name():
    by_name = inverse(0.0, 0.0, 10.0, 10.0, ell='grs80')
    expected = vdist(0.0, 0.0, 10.0, 10.0, ELLIPSOIDS['grs80'])
    assert (by_name.distance_m, by_name.azimuth_deg) == expected

    with pytest.raises(KeyError):
        inverse(0.0, 0.0, 10.0, 10.0, ell='flatland')


def test_track_returns_track():
    result = track(0.0, 0.0, 0.0, 90.0, npts=5)
    assert isinstance(result, Track)
    assert len(result) == 5
    assert result[0] == GeodeticPoint(0.0, 0.0)
    assert result[-1] == GeodeticPoint(0.0, 90.0)
    np.testing.assert_allclose(result.longitudes, [0.0, 22.5, 45.0, 67.5, 90.0], atol=1e-8)


def test_track_can_be_iterated_twice():
    result = track(10.0, 10.0, 20.0, 40.0, npts=6)
    assert list(result) == list(result)
    assert result.points == list(result)


def test_track_is_read_only():
    result = track(10.0, 10.0, 20.0, 40.0, npts=4)
    with pytest.raises(ValueError):
        result.latitudes[1] = 0.0


def test_track_antipodal():
    with pytest.raises(AntipodalTrackError):
        track(0.0, 0.0, 0.0, 180.0, npts=3)
    assert len(track(0.0, 0.0, 0.0, 180.0, npts=2)) == 2


def test_geodetic_point_validation():
    with pytest.raises(ValueError):
        GeodeticPoint(90.5, 0.0)
    with pytest.raises(ValueError):
        GeodeticPoint(0.0, np.nan)
    lat, lon = GeodeticPoint(45.0, -90.0).to_radians()
    assert lat == pytest.approx(np.pi / 4)
    assert lon == pytest.approx(-np.pi / 2)


def test_track_shape_validation():
    with pytest.raises(ValueError):
        Track([0.0, 1.0], [0.0])
