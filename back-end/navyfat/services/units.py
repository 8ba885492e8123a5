"""
Unit Conversion Service
=======================
Pure conversions between the units a user may type in and the canonical
units the calculator works in:

  - Length: canonical unit is the INCH   (1 in = 2.54 cm exactly)
  - Weight: canonical unit is the KILOGRAM (1 kg = 2.20462262185 lb exactly)

Canonical conversions keep full float precision — rounding happens only when a
value is shown back to the user (the *_for_display helpers), never before a
downstream calculation.
"""

from navyfat.models import INCH_TO_CM, LB_PER_KG, LengthUnit, WeightUnit

DISPLAY_DECIMALS = 1


def length_to_canonical(value: float, unit: LengthUnit) -> float:
    """Convert a length entered in `unit` to inches."""
    if unit == LengthUnit.CENTIMETER:
        return value / INCH_TO_CM
    return value


def length_from_canonical(inches: float, unit: LengthUnit) -> float:
    """Convert a length in inches to `unit`, rounded for display."""
    if unit == LengthUnit.CENTIMETER:
        return round(inches * INCH_TO_CM, DISPLAY_DECIMALS)
    return round(inches, DISPLAY_DECIMALS)


def weight_to_canonical(value: float, unit: WeightUnit) -> float:
    """Convert a weight entered in `unit` to kilograms."""
    if unit == WeightUnit.POUND:
        return value / LB_PER_KG
    return value


def weight_from_canonical(kg: float, unit: WeightUnit) -> float:
    """Convert a weight in kilograms to `unit`, rounded for display."""
    if unit == WeightUnit.POUND:
        return round(kg * LB_PER_KG, DISPLAY_DECIMALS)
    return round(kg, DISPLAY_DECIMALS)


def length_to_centimeters(value: float, unit: LengthUnit) -> float:
    """Metric form of a length, full precision (used for BMI height)."""
    if unit == LengthUnit.CENTIMETER:
        return value
    return value * INCH_TO_CM


def convert_length_for_display(value: float, source: LengthUnit, target: LengthUnit) -> float:
    """
    Re-express an already-entered length in another unit, one decimal place.
    Used when the user flips the length-unit toggle on a filled-in form.
    """
    return length_from_canonical(length_to_canonical(value, source), target)


def convert_weight_for_display(value: float, source: WeightUnit, target: WeightUnit) -> float:
    """Weight counterpart of convert_length_for_display."""
    return weight_from_canonical(weight_to_canonical(value, source), target)
