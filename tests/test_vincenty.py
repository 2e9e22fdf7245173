import warnings

import numpy as np
import pytest

from geodesy import (
    ELLIPSOIDS,
    AntipodalWarning,
    ConvergenceError,
    SolverConfig,
    anglesep,
    vdist,
    vreckon,
)


def _lon_difference(lon_a, lon_b):
    d = (lon_a - lon_b) % 360.0
    return min(d, 360.0 - d)


# Inverse problem.


def test_vdist_one_degree_of_equator():
    dist_m, az_deg = vdist(0.0, 0.0, 0.0, 1.0)
    assert dist_m == pytest.approx(111319.49, abs=0.01)
    assert az_deg == pytest.approx(90.0, abs=1e-9)


def test_vdist_westward_azimuth():
    _, az_deg = vdist(0.0, 0.0, 0.0, -1.0)
    assert az_deg == pytest.approx(270.0, abs=1e-9)


def test_vdist_coincident_points():
    assert vdist(10.0, 20.0, 10.0, 20.0) == (0.0, 0.0)
    assert vdist(-33.9, 151.2, -33.9, 151.2) == (0.0, 0.0)


@pytest.mark.parametrize(
    'lat1, lon1, lat2, lon2',
    [
        (40.6413, -73.7781, 51.4700, -0.4543),   # JFK -> LHR
        (-33.9461, 151.1772, 1.3644, 103.9915),  # SYD -> SIN
        (64.1283, -21.9406, -54.8431, -68.2958),
        (0.2, 305.0, 15.0, 125.0),
        (10.0, 170.0, -10.0, -170.0),            # across the antimeridian
        (89.0, 0.0, 89.0, 180.0),                # over the pole
    ],
)
def test_vdist_matches_geographiclib(geod, lat1, lon1, lat2, lon2):
    dist_m, az_deg = vdist(lat1, lon1, lat2, lon2)
    ref_az, _, ref_dist = geod.inv(lon1, lat1, lon2, lat2)
    assert dist_m == pytest.approx(ref_dist, abs=5e-3)
    assert _lon_difference(az_deg, ref_az % 360.0) < 1e-6


def test_vdist_azimuth_range(random_pairs):
    for lat1, lon1, lat2, lon2 in random_pairs:
        dist_m, az_deg = vdist(lat1, lon1, lat2, lon2)
        assert dist_m >= 0
        assert 0.0 <= az_deg < 360.0


def test_vdist_symmetry(random_pairs):
    for lat1, lon1, lat2, lon2 in random_pairs:
        d12, az12 = vdist(lat1, lon1, lat2, lon2)
        d21, az21 = vdist(lat2, lon2, lat1, lon1)
        assert d12 == pytest.approx(d21, rel=1e-12, abs=1e-6)


def test_vdist_reverse_azimuth_on_meridian():
    # Along a meridian the reverse azimuth is exactly opposite.
    _, az12 = vdist(10.0, 30.0, 50.0, 30.0)
    _, az21 = vdist(50.0, 30.0, 10.0, 30.0)
    assert az12 == pytest.approx(0.0, abs=1e-9)
    assert az21 == pytest.approx(180.0, abs=1e-9)


@pytest.mark.parametrize(
    'lat1, lon1, lat2, lon2, expected',
    [
        (90.0, 0.0, 45.0, 0.0, 180.0),
        (90.0, 0.0, 0.0, 90.0, 180.0),
        (90.0, 0.0, 45.0, -120.0, 180.0),
        (90.0, 30.0, -60.0, 170.0, 180.0),
        (-90.0, 0.0, -45.0, 0.0, 0.0),
        (-90.0, 0.0, 0.0, 90.0, 0.0),
        (-90.0, 45.0, 10.0, -100.0, 0.0),
    ],
)
def test_vdist_pole_azimuth_convention(lat1, lon1, lat2, lon2, expected):
    dist_m, az_deg = vdist(lat1, lon1, lat2, lon2)
    assert az_deg == expected
    assert dist_m > 0


def test_vdist_pole_to_equator_is_quarter_meridian():
    dist_m, _ = vdist(90.0, 0.0, 0.0, 0.0)
    # The pole nudge moves the start point by well under a millimeter.
    assert dist_m == pytest.approx(10001965.729, abs=1e-2)


def test_vdist_pole_to_pole(geod):
    dist_m, _ = vdist(90.0, 0.0, -90.0, 0.0)
    _, _, ref_dist = geod.inv(0.0, 90.0, 0.0, -90.0)
    assert dist_m == pytest.approx(ref_dist, abs=1e-2)


@pytest.mark.parametrize('lat', [90.0001, -91.0, np.nan])
def test_vdist_rejects_bad_latitude(lat):
    with pytest.raises(ValueError):
        vdist(lat, 0.0, 0.0, 0.0)
    with pytest.raises(ValueError):
        vdist(0.0, 0.0, lat, 0.0)


def test_vdist_rejects_non_finite_longitude():
    with pytest.raises(ValueError):
        vdist(0.0, np.inf, 0.0, 0.0)


def test_vdist_antipodal_warning():
    with pytest.warns(AntipodalWarning):
        dist_m, az_deg = vdist(0.0, 0.0, 0.0, 180.0)
    assert np.isfinite(dist_m)
    assert dist_m > 0
    assert 0.0 <= az_deg < 360.0


def test_vdist_iteration_cap_warning():
    # One pass is never enough away from the equator, so the cap triggers
    # the antipodal fallback.
    with pytest.warns(AntipodalWarning):
        vdist(0.0, 0.0, 10.0, 10.0, config=SolverConfig(max_iterations=1))


def test_vdist_no_warning_for_ordinary_points():
    with warnings.catch_warnings():
        warnings.simplefilter('error', AntipodalWarning)
        vdist(10.0, 0.0, -10.0, 170.0)


def test_vdist_on_sphere_is_great_circle():
    venus = ELLIPSOIDS['venus']
    dist_m, _ = vdist(12.0, 34.0, -56.0, 78.0, venus)
    expected = venus.a * anglesep(12.0, 34.0, -56.0, 78.0, deg=False)
    assert dist_m == pytest.approx(expected, rel=1e-12)


# Direct problem.


def test_vreckon_one_degree_of_equator(wgs84):
    lat2, lon2 = vreckon(0.0, 0.0, wgs84.a * np.radians(1.0), 90.0)
    assert lat2 == pytest.approx(0.0, abs=1e-12)
    assert lon2 == pytest.approx(1.0, abs=1e-9)


def test_vreckon_zero_range():
    lat2, lon2 = vreckon(37.5, -122.25, 0.0, 123.0)
    assert lat2 == pytest.approx(37.5, abs=1e-12)
    assert lon2 == pytest.approx(-122.25, abs=1e-12)


@pytest.mark.parametrize(
    'lat1, lon1, rng, azim',
    [
        (40.6413, -73.7781, 5.5e6, 51.0),
        (-33.9461, 151.1772, 1.2e7, 290.0),
        (0.0, 0.0, 1.0e7, 45.0),
        (75.0, 10.0, 3.0e6, 180.0),
    ],
)
def test_vreckon_matches_geographiclib(geod, lat1, lon1, rng, azim):
    lat2, lon2 = vreckon(lat1, lon1, rng, azim)
    ref_lon, ref_lat, _ = geod.fwd(lon1, lat1, azim, rng)
    assert lat2 == pytest.approx(ref_lat, abs=1e-7)
    assert _lon_difference(lon2, ref_lon) < 1e-7


def test_vreckon_accepts_unnormalized_azimuth():
    expected = vreckon(10.0, 20.0, 5e5, 45.0)
    for azim in (405.0, -315.0, 765.0):
        lat2, lon2 = vreckon(10.0, 20.0, 5e5, azim)
        assert lat2 == pytest.approx(expected[0], abs=1e-10)
        assert lon2 == pytest.approx(expected[1], abs=1e-10)


def test_vreckon_longitude_wraps_across_antimeridian(wgs84):
    lat2, lon2 = vreckon(0.0, 179.5, wgs84.a * np.radians(1.0), 90.0)
    assert lat2 == pytest.approx(0.0, abs=1e-12)
    assert lon2 == pytest.approx(-179.5, abs=1e-9)


def test_vreckon_longitude_range(random_pairs):
    for lat1, lon1, _, _ in random_pairs:
        _, lon2 = vreckon(lat1, lon1, 1.5e7, 300.0)
        assert -180.0 < lon2 <= 180.0


def test_vreckon_rejects_negative_range():
    with pytest.raises(ValueError):
        vreckon(0.0, 0.0, -1.0, 0.0)


@pytest.mark.parametrize('rng', [np.inf, np.nan])
def test_vreckon_rejects_non_finite_range(rng):
    with pytest.raises(ValueError, match='rng'):
        vreckon(0.0, 0.0, rng, 45.0)


def test_vreckon_rejects_bad_latitude():
    with pytest.raises(ValueError):
        vreckon(90.5, 0.0, 1000.0, 0.0)


def test_vreckon_iteration_bound():
    with pytest.raises(ConvergenceError):
        vreckon(30.0, 0.0, 1.0e7, 45.0, config=SolverConfig(direct_max_iterations=1))
    # A generous bound does not change the answer.
    bounded = vreckon(30.0, 0.0, 1.0e7, 45.0, config=SolverConfig(direct_max_iterations=100))
    assert bounded == vreckon(30.0, 0.0, 1.0e7, 45.0)


# Inverse and direct together.


def test_round_trip(random_pairs):
    for lat1, lon1, lat2, lon2 in random_pairs:
        dist_m, az_deg = vdist(lat1, lon1, lat2, lon2)
        lat_end, lon_end = vreckon(lat1, lon1, dist_m, az_deg)
        assert lat_end == pytest.approx(lat2, abs=1e-8)
        assert _lon_difference(lon_end, lon2) < 1e-8


def test_round_trip_near_antipodal():
    # Separations in [170, 179) degrees.
    rng = np.random.default_rng(31337)
    checked = 0
    for _ in range(1000):
        lat1 = rng.uniform(-80.0, 80.0)
        lon1 = rng.uniform(-180.0, 180.0)
        lat2 = float(np.clip(-lat1 + rng.uniform(-10.0, 10.0), -89.0, 89.0))
        lon2 = lon1 + 180.0 + rng.uniform(-10.0, 10.0)
        if not 170.0 <= anglesep(lat1, lon1, lat2, lon2) < 179.0:
            continue

        with warnings.catch_warnings():
            warnings.simplefilter('ignore', AntipodalWarning)
            dist_m, az_deg = vdist(lat1, lon1, lat2, lon2)
        lat_end, lon_end = vreckon(lat1, lon1, dist_m, az_deg)
        assert lat_end == pytest.approx(lat2, abs=1e-8)
        assert _lon_difference(lon_end, lon2) < 1e-8
        checked += 1

    assert checked > 100


def test_round_trip_other_ellipsoid():
    mars = ELLIPSOIDS['mars']
    dist_m, az_deg = vdist(-4.5, 137.4, 18.4, 77.5, mars)
    lat_end, lon_end = vreckon(-4.5, 137.4, dist_m, az_deg, mars)
    assert lat_end == pytest.approx(18.4, abs=1e-8)
    assert lon_end == pytest.approx(77.5, abs=1e-8)


def test_solver_config_validation():
    with pytest.raises(ValueError):
        SolverConfig(tolerance=0.0)
    with pytest.raises(ValueError):
        SolverConfig(max_iterations=0)
    with pytest.raises(ValueError):
        SolverConfig(direct_max_iterations=0)
