"""
Geodetic Constants for Ellipsoidal Geodesy.

This module provides the defining parameters of the reference ellipsoids
used by the solvers, together with their uncertainty bounds and sources.
All constants are defined with SI units and traceable to authoritative sources.

References
----------
- WGS84 parameters: NIMA TR8350.2, Third Edition, 2000
- Mean radius: IUGG, Moritz (2000), Geodetic Reference System 1980
"""

from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True)
class Constant:
    """A physical constant with uncertainty and provenance.

    Attributes
    ----------
    value : float
        The nominal value of the constant.
    uncertainty : float
        The standard uncertainty (1-sigma) of the constant.
    unit : str
        The SI unit of the constant.
    source : str
        Reference for the constant value.
    description : str
        Human-readable description of the constant.
    """
    value: float
    uncertainty: float
    unit: str
    source: str
    description: str


class PhysicalConstants:
    """Registry of geodetic constants used throughout the system.

    All constants are class attributes with full metadata including
    uncertainty bounds and authoritative sources.

    Earth Geometry (WGS84)
    ----------------------
    These constants define the default reference ellipsoid for every
    geodesic calculation. Other bodies and historical ellipsoids are
    defined in the ellipsoid catalog directly from their semi-axes.
    """

    # =========================================================================
    # WGS84 Ellipsoid Parameters
    # Reference: NIMA TR8350.2, Third Edition, 2000
    # =========================================================================

    EARTH_SEMI_MAJOR_AXIS: Final[Constant] = Constant(
        value=6_378_137.0,
        uncertainty=0.0,  # Defined exactly
        unit="m",
        source="WGS84, NIMA TR8350.2",
        description="Semi-major axis (equatorial radius) of WGS84 ellipsoid"
    )

    EARTH_SEMI_MINOR_AXIS: Final[Constant] = Constant(
        value=6_356_752.31424518,
        uncertainty=0.0001,
        unit="m",
        source="WGS84, NIMA TR8350.2 (derived)",
        description="Semi-minor axis (polar radius) of WGS84 ellipsoid"
    )

    EARTH_MEAN_RADIUS: Final[Constant] = Constant(
        value=6_371_008.7714,
        uncertainty=0.1,
        unit="m",
        source="IUGG mean radius R1 = (2a + b) / 3",
        description="Mean radius of Earth, used for the WGS84 mean sphere"
    )
