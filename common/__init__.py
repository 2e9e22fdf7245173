"""
Common utilities and infrastructure for the geodesy toolkit.

This package provides foundational components used across all modules:
- Geodetic constants with uncertainty bounds
- Unit registry and unit-aware argument handling
- Value types for solver inputs and outputs
- Logging infrastructure
"""

from common.constants import Constant, PhysicalConstants
from common.units import ureg, Q_, validate_units, to_magnitude
from common.types import (
    GeodeticPoint,
    GeodesicResult,
    ReckonResult,
    Track,
)
from common.logging_config import get_logger

__all__ = [
    "Constant",
    "PhysicalConstants",
    "ureg",
    "Q_",
    "validate_units",
    "to_magnitude",
    "GeodeticPoint",
    "GeodesicResult",
    "ReckonResult",
    "Track",
    "get_logger",
]
