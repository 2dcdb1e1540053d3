"""
Geomagnetic Field Models.

This module provides:
- Reading and writing of magnetic model files
- Spherical harmonic synthesis of the main field
- MagneticModel evaluation with time and height validation
- Date-based selection among the World and Enhanced Magnetic Models
"""

from magnetic.dates import fractional_year
from magnetic.model_io import (
    ModelMetadata,
    CoefficientSet,
    read_metadata,
    read_coefficients,
    write_model,
)
from magnetic.magnetic_model import (
    MagneticModel,
    MagneticField,
    FieldComponents,
    ModelWindow,
    KNOWN_MODELS,
    WORLD_MAGNETIC_MODELS,
    ENHANCED_MAGNETIC_MODELS,
    model_directory,
    load_model,
    select_model,
    world_magnetic_model,
    enhanced_magnetic_model,
    available_models,
)

__all__ = [
    "fractional_year",
    "ModelMetadata",
    "CoefficientSet",
    "read_metadata",
    "read_coefficients",
    "write_model",
    "MagneticModel",
    "MagneticField",
    "FieldComponents",
    "ModelWindow",
    "KNOWN_MODELS",
    "WORLD_MAGNETIC_MODELS",
    "ENHANCED_MAGNETIC_MODELS",
    "model_directory",
    "load_model",
    "select_model",
    "world_magnetic_model",
    "enhanced_magnetic_model",
    "available_models",
]
