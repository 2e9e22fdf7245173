"""
Unit Handling for the Geodesic API.

This module provides a centralized unit registry using the `pint` library so
that callers may pass unit-tagged quantities (kilometers, nautical miles,
radians) to the public geodesic functions. Internally every solver works on
bare floats in the canonical units listed in `STANDARD_UNITS`.

Example Usage
-------------
>>> from common.units import Q_, to_magnitude
>>> to_magnitude(Q_(100, 'km'), 'meter')
100000.0
>>> to_magnitude(Q_(0.5, 'radian'), 'degree')
28.64788975654116
"""

from functools import wraps
import inspect
from typing import Callable, Union

import pint

# Create the global unit registry
ureg = pint.UnitRegistry()

# Convenience alias for creating quantities
Q_ = ureg.Quantity


def validate_units(expected_units: dict[str, str]):
    """Decorator to validate units of function arguments.

    Arguments that are `pint.Quantity` instances must be convertible to the
    expected unit; bare numbers are passed through untouched.

    Parameters
    ----------
    expected_units : dict[str, str]
        Mapping from argument names to expected unit strings.

    Examples
    --------
    >>> @validate_units({'range_m': 'm', 'azimuth_deg': 'degree'})
    ... def reckon(range_m, azimuth_deg):
    ...     ...
    """
    def decorator(func: Callable) -> Callable:
        sig = inspect.signature(func)

        @wraps(func)
        def wrapper(*args, **kwargs):
            bound = sig.bind(*args, **kwargs)
            bound.apply_defaults()

            for param_name, expected_unit in expected_units.items():
                if param_name not in bound.arguments:
                    continue
                value = bound.arguments[param_name]
                if isinstance(value, pint.Quantity):
                    try:
                        value.to(expected_unit)
                    except pint.DimensionalityError as e:
                        raise ValueError(
                            f"Parameter '{param_name}' has incompatible units. "
                            f"Expected {expected_unit}, got {value.units}"
                        ) from e

            return func(*args, **kwargs)
        return wrapper
    return decorator


def to_magnitude(value: Union[float, pint.Quantity], unit: str) -> float:
    """Strip units from a value, converting to `unit` first.

    Parameters
    ----------
    value : float or pint.Quantity
        The value to convert. Bare numbers are assumed to already be
        expressed in `unit`.
    unit : str
        The target unit string.

    Returns
    -------
    float
        The magnitude in `unit`.
    """
    if isinstance(value, pint.Quantity):
        return float(value.to(unit).magnitude)
    return float(value)


# Canonical units of the solver API
STANDARD_UNITS = {
    "latitude": "degree",
    "longitude": "degree",
    "azimuth": "degree",
    "distance": "meter",
}
