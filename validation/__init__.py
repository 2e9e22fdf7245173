"""
Validation Framework for the geodesy toolkit.

This module provides runtime consistency checks over solver output.
"""

from validation.consistency import (
    GeodesicConsistencyChecker,
    ValidationResult,
)

__all__ = [
    "GeodesicConsistencyChecker",
    "ValidationResult",
]
