"""
Validation Framework for the Geodetic Core.

This module provides round-trip consistency checks.
"""

from validation.consistency_checks import (
    ValidationResult,
    ConsistencyChecker,
    check_geodesic_round_trip,
    check_utm_round_trip,
    check_rhumb_round_trip,
)

__all__ = [
    "ValidationResult",
    "ConsistencyChecker",
    "check_geodesic_round_trip",
    "check_utm_round_trip",
    "check_rhumb_round_trip",
]
