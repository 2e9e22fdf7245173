"""
Geodesic Consistency Checks.

This module verifies that solver output obeys the geometric relationships
the inverse and direct problems must satisfy with each other.

Check Categories
----------------
1. Round trip (direct solve of an inverse solution closes on the target)
2. Symmetry (distance is the same in both directions)
3. Track spacing (discretized track points are equally spaced)
4. Output bounds (distance >= 0, azimuth in [0, 360))
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple
import warnings

import numpy as np

from common.logging_config import get_logger
from geodesy.ellipsoid import Ellipsoid, WGS84
from geodesy.vincenty import AntipodalWarning, track2, vdist, vreckon

logger = get_logger(__name__)

_COINCIDENT_TOLERANCE_M = 1e-6


@dataclass
class ValidationResult:
    """Result of a validation check.

    Attributes
    ----------
    test_name : str
        Name of the test.
    passed : bool
        Whether the test passed.
    message : str
        Description of result.
    details : dict
        Additional details.
    """
    test_name: str
    passed: bool
    message: str
    details: Dict[str, Any]


def _lon_difference(lon_a: float, lon_b: float) -> float:
    """Smallest absolute difference between two longitudes in degrees."""
    d = (lon_a - lon_b) % 360.0
    return min(d, 360.0 - d)


class GeodesicConsistencyChecker:
    """Checker for geometric consistency of solver output.

    Parameters
    ----------
    ell : Ellipsoid
        Reference ellipsoid the checks solve on.
    strict_mode : bool
        If True, raise AssertionError on a failed check.
    log_violations : bool
        Whether to log failed checks.
    """

    def __init__(
        self,
        ell: Ellipsoid = WGS84,
        strict_mode: bool = False,
        log_violations: bool = True
    ):
        self.ell = ell
        self.strict_mode = strict_mode
        self.log_violations = log_violations

    def _report(self, result: ValidationResult) -> ValidationResult:
        if not result.passed:
            if self.log_violations:
                logger.warning(f"{result.test_name} failed: {result.message}")
            if self.strict_mode:
                raise AssertionError(f"{result.test_name}: {result.message}")
        return result

    def check_all(
        self,
        pairs: Sequence[Tuple[float, float, float, float]],
        npts: int = 10
    ) -> List[ValidationResult]:
        """Run every check over a set of (lat1, lon1, lat2, lon2) pairs."""
        results = []
        for lat1, lon1, lat2, lon2 in pairs:
            results.append(self.check_output_bounds(lat1, lon1, lat2, lon2))
            results.append(self.check_round_trip(lat1, lon1, lat2, lon2))
            results.append(self.check_symmetry(lat1, lon1, lat2, lon2))
            results.append(self.check_track_spacing(lat1, lon1, lat2, lon2, npts))
        return results

    def check_output_bounds(
        self,
        lat1: float,
        lon1: float,
        lat2: float,
        lon2: float
    ) -> ValidationResult:
        """Check distance >= 0 and azimuth in [0, 360)."""
        distance, azimuth = vdist(lat1, lon1, lat2, lon2, self.ell)
        passed = distance >= 0 and 0.0 <= azimuth < 360.0

        return self._report(ValidationResult(
            test_name="output_bounds",
            passed=passed,
            message=f"distance={distance:.3f} m, azimuth={azimuth:.9f} deg",
            details={'distance_m': distance, 'azimuth_deg': azimuth}
        ))

    def check_round_trip(
        self,
        lat1: float,
        lon1: float,
        lat2: float,
        lon2: float,
        tolerance_deg: float = 1e-8
    ) -> ValidationResult:
        """Check that reckoning along the inverse solution reaches point 2."""
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", AntipodalWarning)
            distance, azimuth = vdist(lat1, lon1, lat2, lon2, self.ell)
        antipodal = any(issubclass(w.category, AntipodalWarning) for w in caught)

        lat_end, lon_end = vreckon(lat1, lon1, distance, azimuth, self.ell)

        lat_error = abs(lat_end - lat2)
        # Longitude is meaningless at the poles.
        lon_error = 0.0 if abs(lat2) == 90.0 else _lon_difference(lon_end, lon2)
        passed = max(lat_error, lon_error) <= tolerance_deg

        return self._report(ValidationResult(
            test_name="round_trip",
            passed=passed,
            message=f"Round trip error: lat {lat_error:.3e} deg, lon {lon_error:.3e} deg",
            details={
                'lat_error_deg': lat_error,
                'lon_error_deg': lon_error,
                'tolerance_deg': tolerance_deg,
                'antipodal_fallback': antipodal,
            }
        ))

    def check_symmetry(
        self,
        lat1: float,
        lon1: float,
        lat2: float,
        lon2: float,
        tolerance_m: float = 1e-5
    ) -> ValidationResult:
        """Check that the distance is independent of direction."""
        forward, _ = vdist(lat1, lon1, lat2, lon2, self.ell)
        backward, _ = vdist(lat2, lon2, lat1, lon1, self.ell)
        difference = abs(forward - backward)

        return self._report(ValidationResult(
            test_name="symmetry",
            passed=difference <= tolerance_m,
            message=f"Symmetry check: |d12 - d21| = {difference:.3e} m",
            details={
                'forward_m': forward,
                'backward_m': backward,
                'tolerance_m': tolerance_m,
            }
        ))

    def check_track_spacing(
        self,
        lat1: float,
        lon1: float,
        lat2: float,
        lon2: float,
        npts: int = 10,
        relative_tolerance: float = 1e-6
    ) -> ValidationResult:
        """Check that consecutive track points are equally spaced."""
        lats, lons = track2(lat1, lon1, lat2, lon2, self.ell, npts=npts)

        spacing = np.array([
            vdist(lats[i], lons[i], lats[i + 1], lons[i + 1], self.ell)[0]
            for i in range(npts - 1)
        ])
        expected = vdist(lat1, lon1, lat2, lon2, self.ell)[0] / (npts - 1)

        if expected == 0:
            # Coincident endpoints: spacing is compared in meters.
            max_deviation = float(np.max(spacing))
            passed = max_deviation <= _COINCIDENT_TOLERANCE_M
        else:
            max_deviation = float(np.max(np.abs(spacing - expected)) / expected)
            passed = max_deviation <= relative_tolerance

        return self._report(ValidationResult(
            test_name="track_spacing",
            passed=passed,
            message=f"Track spacing check: max relative deviation {max_deviation:.3e}",
            details={
                'expected_spacing_m': expected,
                'min_spacing_m': float(np.min(spacing)),
                'max_spacing_m': float(np.max(spacing)),
                'npts': npts,
            }
        ))
