"""
Unit Registry for Geodetic Inputs and Outputs.

Public operations take plain floats in the conventional units of geodesy
(metres for lengths, degrees for angles, nanotesla for magnetic field
intensity). They also accept `pint` quantities, which are converted to
those units on entry so that a distance given in kilometres or an angle
given in radians cannot be misread.

Example Usage
-------------
>>> from common.units import Q_, as_magnitude
>>> as_magnitude(Q_(2.5, 'km'), 'm')
2500.0
>>> as_magnitude(30.0, 'degree')
30.0
"""

from typing import Union

import pint
from pint import UnitRegistry as PintUnitRegistry

# Create the global unit registry
ureg = PintUnitRegistry()

# Convenience alias for creating quantities
Q_ = ureg.Quantity

Scalar = Union[float, int, pint.Quantity]


def as_magnitude(value: Scalar, unit: str) -> float:
    """Return `value` as a float in `unit`.

    Parameters
    ----------
    value : float or pint.Quantity
        A bare number, taken to be in `unit` already, or a quantity with
        dimensions compatible with `unit`.
    unit : str
        Target unit.

    Returns
    -------
    float
        The magnitude in the target unit.

    Raises
    ------
    ValueError
        If a quantity's dimensionality is incompatible with `unit`.
    """
    if isinstance(value, pint.Quantity):
        try:
            return float(value.to(unit).magnitude)
        except pint.DimensionalityError as e:
            raise ValueError(
                f"Incompatible units: expected {unit}, got {value.units}"
            ) from e
    return float(value)

