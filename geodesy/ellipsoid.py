"""
Reference Ellipsoids for Earth and Other Planetary Bodies.

Every geodesic calculation is performed on an oblate ellipsoid of revolution
described by its semi-major axis `a` and semi-minor axis `b`. This module
defines the immutable `Ellipsoid` value object and a read-only catalog of
commonly used models, populated once at import time.

Ellipsoid Sources
-----------------
- Historical Earth ellipsoids (maupertuis ... iers2003):
  https://en.wikipedia.org/wiki/Earth_ellipsoid#Historical_Earth_ellipsoids
- WGS84: NIMA TR8350.2
- WGS84 mean sphere: https://en.wikipedia.org/wiki/Earth_radius#Mean_radii
- GRS80: Moritz (2000), Geodetic Reference System 1980
- PZ-90.11: https://structure.mil.ru/files/pz-90.pdf
- GSK-2011: GOST R 32453-2017
- Mars: https://tharsis.gsfc.nasa.gov/geodesy.html
- Io: https://doi.org/10.1006/icar.1998.5987
- Mercury, Venus, Moon, Jupiter, Saturn, Uranus, Neptune, Pluto:
  https://nssdc.gsfc.nasa.gov/planetary/factsheet/index.html
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping
import numpy as np

from common.constants import PhysicalConstants


@dataclass(frozen=True)
class Ellipsoid:
    """Parameters defining a reference ellipsoid.

    Attributes
    ----------
    a : float
        Semi-major axis (equatorial radius) in meters.
    b : float
        Semi-minor axis (polar radius) in meters.
    name : str
        Human-friendly identifier for the ellipsoid.

    Derived Parameters
    ------------------
    f : float
        Flattening: f = (a - b) / a
    third_flattening : float
        n = (a - b) / (a + b)
    eccentricity : float
        First eccentricity: e = sqrt(2f - f²)
    e2 : float
        First eccentricity squared: e² = (a² - b²) / a²
    ep2 : float
        Second eccentricity squared: e'² = (a² - b²) / b²
    """
    a: float
    b: float
    name: str = ""

    def __post_init__(self):
        if not self.a > 0:
            raise ValueError(f"Semi-major axis must be positive, got {self.a}")
        if not 0 <= self.b <= self.a:
            raise ValueError(
                f"Semi-minor axis must satisfy 0 <= b <= a (flattening >= 0), "
                f"got a={self.a}, b={self.b}"
            )

    @property
    def f(self) -> float:
        """Flattening."""
        return (self.a - self.b) / self.a

    @property
    def third_flattening(self) -> float:
        return (self.a - self.b) / (self.a + self.b)

    @property
    def eccentricity(self) -> float:
        return float(np.sqrt(2 * self.f - self.f**2))

    @property
    def e2(self) -> float:
        """First eccentricity squared."""
        return self.f * (2 - self.f)

    @property
    def ep2(self) -> float:
        """Second eccentricity squared."""
        return (self.a**2 - self.b**2) / self.b**2


# WGS84 ellipsoid - the default for every solver
WGS84 = Ellipsoid(
    a=PhysicalConstants.EARTH_SEMI_MAJOR_AXIS.value,
    b=PhysicalConstants.EARTH_SEMI_MINOR_AXIS.value,
    name="WGS-84 (1984)"
)

_CATALOG = {
    # Earth
    "maupertuis": Ellipsoid(6397300.0, 6363806.283, "Maupertuis (1738)"),
    "plessis": Ellipsoid(6376523.0, 6355862.9333, "Plessis (1817)"),
    "everest1830": Ellipsoid(6377299.365, 6356098.359, "Everest (1830)"),
    "everest1830m": Ellipsoid(6377304.063, 6356103.039, "Everest 1830 Modified (1967)"),
    "everest1967": Ellipsoid(6377298.556, 6356097.55, "Everest 1830 (1967 Definition)"),
    "airy": Ellipsoid(6377563.396, 6356256.909, "Airy (1830)"),
    "bessel": Ellipsoid(6377397.155, 6356078.963, "Bessel (1841)"),
    "clarke1866": Ellipsoid(6378206.4, 6356583.8, "Clarke (1866)"),
    "clarke1878": Ellipsoid(6378190.0, 6356456.0, "Clarke (1878)"),
    "clarke1860": Ellipsoid(6378249.145, 6356514.87, "Clarke (1880)"),
    "helmert": Ellipsoid(6378200.0, 6356818.17, "Helmert (1906)"),
    "hayford": Ellipsoid(6378388.0, 6356911.946, "Hayford (1910)"),
    "international1924": Ellipsoid(6378388.0, 6356911.946, "International (1924)"),
    "krassovsky1940": Ellipsoid(6378245.0, 6356863.019, "Krassovsky (1940)"),
    "wgs66": Ellipsoid(6378145.0, 6356759.769, "WGS66 (1966)"),
    "australian": Ellipsoid(6378160.0, 6356774.719, "Australian National (1966)"),
    "international1967": Ellipsoid(6378157.5, 6356772.2, "New International (1967)"),
    "grs67": Ellipsoid(6378160.0, 6356774.516, "GRS-67 (1967)"),
    "sa1969": Ellipsoid(6378160.0, 6356774.719, "South American (1969)"),
    "wgs72": Ellipsoid(6378135.0, 6356750.52001609, "WGS-72 (1972)"),
    "grs80": Ellipsoid(6378137.0, 6356752.31414036, "GRS-80 (1979)"),
    "wgs84": WGS84,
    "wgs84_mean": Ellipsoid(
        PhysicalConstants.EARTH_MEAN_RADIUS.value,
        PhysicalConstants.EARTH_MEAN_RADIUS.value,
        "WGS-84 (1984) Mean"
    ),
    "iers1989": Ellipsoid(6378136.0, 6356751.302, "IERS (1989)"),
    "pz90_11": Ellipsoid(6378136.0, 6356751.3618, "ПЗ-90 (2011)"),
    "iers2003": Ellipsoid(6378136.6, 6356751.9, "IERS (2003)"),
    "gsk2011": Ellipsoid(6378136.5, 6356751.758, "ГСК (2011)"),
    # Other worlds
    "mercury": Ellipsoid(2440500.0, 2438300.0, "Mercury"),
    "venus": Ellipsoid(6051800.0, 6051800.0, "Venus"),
    "moon": Ellipsoid(1738100.0, 1736000.0, "Moon"),
    "mars": Ellipsoid(3396900.0, 3376097.80585952, "Mars"),
    "jupiter": Ellipsoid(71492000.0, 66770054.3475922, "Jupiter"),
    "io": Ellipsoid(1829.7, 1815.8, "Io"),
    "saturn": Ellipsoid(60268000.0, 54364301.5271271, "Saturn"),
    "uranus": Ellipsoid(25559000.0, 24973000.0, "Uranus"),
    "neptune": Ellipsoid(24764000.0, 24341000.0, "Neptune"),
    "pluto": Ellipsoid(1188000.0, 1188000.0, "Pluto"),
}

ELLIPSOIDS: Mapping[str, Ellipsoid] = MappingProxyType(_CATALOG)
"""Read-only catalog of reference ellipsoids keyed by short name."""


def get_ellipsoid(name: str) -> Ellipsoid:
    """Look up a reference ellipsoid by name (case-insensitive).

    Raises
    ------
    KeyError
        If no ellipsoid with that name is defined.
    """
    key = name.strip().lower().replace("-", "").replace(".", "_")
    try:
        return ELLIPSOIDS[key]
    except KeyError:
        raise KeyError(
            f"Unknown ellipsoid '{name}'. Available: {', '.join(sorted(ELLIPSOIDS))}"
        ) from None
