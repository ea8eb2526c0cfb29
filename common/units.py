"""
Unit Registry for Grid and Geographic Quantities.

This module provides a centralized unit system using the `pint` library so
that grid coordinates and projection origins can be supplied either as bare
numbers in the canonical unit (meters, degrees) or as explicit quantities
in any compatible unit. Operations between incompatible units raise errors
at runtime.

Example Usage
-------------
>>> from common.units import Q_, magnitude_in
>>> magnitude_in(Q_(651, 'km'), 'meter')
651000.0
>>> magnitude_in(400000, 'meter')
400000.0
"""

from typing import Union

import pint
from pint import UnitRegistry as PintUnitRegistry

# Create the global unit registry
ureg = PintUnitRegistry()

# Convenience alias for creating quantities
Q_ = ureg.Quantity

Scalar = Union[float, int, pint.Quantity]


def magnitude_in(value: Scalar, unit: str) -> float:
    """Return the magnitude of a value expressed in `unit`.

    Parameters
    ----------
    value : float or pint.Quantity
        A bare number (assumed to already be in `unit`) or a quantity.
    unit : str
        Target unit (e.g. 'meter', 'degree').

    Returns
    -------
    float
        The numeric value in the target unit.

    Raises
    ------
    pint.DimensionalityError
        If `value` is a quantity whose dimensionality differs from `unit`.
    """
    if isinstance(value, pint.Quantity):
        return float(value.to(unit).magnitude)
    return float(value)
