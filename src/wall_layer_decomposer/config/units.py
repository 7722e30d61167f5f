# File: src/wall_layer_decomposer/config/units.py

"""
Length unit handling for the wall layer decomposer.

All geometry inside the decomposer is expressed in millimetres. Model
documents may declare another unit; values are converted on load and the
conversion helpers here are the only place that knows the factors.
"""

from enum import Enum
from typing import Union, Dict


class LengthUnits(Enum):
    """
    Enumeration of supported document length units.
    Using an enum provides type safety and autocompletion support.
    """
    MILLIMETERS = "millimeters"
    METERS = "meters"
    FEET = "feet"
    INCHES = "inches"


# Conversion factors to millimetres
_CONVERSION_TO_MM: Dict[LengthUnits, float] = {
    LengthUnits.MILLIMETERS: 1.0,
    LengthUnits.METERS: 1000.0,
    LengthUnits.FEET: 304.8,
    LengthUnits.INCHES: 25.4,
}

_ALIASES: Dict[str, LengthUnits] = {
    "mm": LengthUnits.MILLIMETERS,
    "m": LengthUnits.METERS,
    "ft": LengthUnits.FEET,
    "in": LengthUnits.INCHES,
}


def parse_units(units: Union[LengthUnits, str]) -> LengthUnits:
    """
    Normalizes a unit given as an enum, a full name or a short alias.

    Raises:
        ValueError: If the provided units are not supported
    """
    if isinstance(units, LengthUnits):
        return units
    if isinstance(units, str):
        key = units.strip().lower()
        if key in _ALIASES:
            return _ALIASES[key]
        try:
            return LengthUnits(key)
        except ValueError:
            raise ValueError(f"Unsupported unit string: {units}")
    raise ValueError(f"Units must be LengthUnits enum or string, got {type(units)}")


def convert_to_mm(value: float, current_units: Union[LengthUnits, str]) -> float:
    """
    Converts a value from the specified units to millimetres.

    Args:
        value: The numeric value to convert
        current_units: The units to convert from (LengthUnits enum or string)

    Returns:
        The value converted to millimetres

    Raises:
        ValueError: If the provided units are not supported
    """
    return value * _CONVERSION_TO_MM[parse_units(current_units)]


def convert_from_mm(value: float, target_units: Union[LengthUnits, str]) -> float:
    """
    Converts a value from millimetres to the specified target units.

    Args:
        value: The numeric value in millimetres to convert
        target_units: The units to convert to (LengthUnits enum or string)

    Returns:
        The converted value in the target units
    """
    return value / _CONVERSION_TO_MM[parse_units(target_units)]
