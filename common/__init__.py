"""
Common utilities and infrastructure for the geodesy system.

This package provides foundational components used across all modules:
- Geodetic constants with provenance
- Error taxonomy shared by every component
- Angle arithmetic and auxiliary-latitude helpers
- Unit registry and value types
- Logging infrastructure
"""

from common.constants import GeodeticConstants, GRID_BOUNDS
from common.errors import (
    GeodeticError,
    ConstructionError,
    ConstructionErrorKind,
    CoordinateRangeError,
    CoordinateRangeErrorKind,
    ModelDomainError,
    ModelDomainErrorKind,
    ModelNotFoundError,
    ModelFormatError,
)
from common.units import ureg, Q_, as_magnitude
from common.types import GeoCoordinate, GeodesicPosition, Hemisphere
from common.logging_config import get_logger

__all__ = [
    "GeodeticConstants",
    "GRID_BOUNDS",
    "GeodeticError",
    "ConstructionError",
    "ConstructionErrorKind",
    "CoordinateRangeError",
    "CoordinateRangeErrorKind",
    "ModelDomainError",
    "ModelDomainErrorKind",
    "ModelNotFoundError",
    "ModelFormatError",
    "ureg",
    "Q_",
    "as_magnitude",
    "GeoCoordinate",
    "GeodesicPosition",
    "Hemisphere",
    "get_logger",
]
