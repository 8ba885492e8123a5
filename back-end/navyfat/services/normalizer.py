"""
Input Normalization Service
===========================
Turns raw form values (strings or numbers, in whichever units the user picked)
into a canonical MeasurementInput:

  - every length converted to INCHES
  - weight converted to KILOGRAMS (absent if not entered — weight is optional)
  - height additionally kept in CENTIMETERS for BMI
  - hip only kept for females; a hip value entered for a male is ignored

Also provides the ADVISORY range checks. These never block a calculation — they
only produce warnings for the caller to display. Whether a standard actually
covers the subject's age is decided later by the standards judge.
"""

import logging
import math

from navyfat.core.errors import ValidationError
from navyfat.models import LengthUnit, MeasurementInput, RawMeasurement, Sex, WeightUnit
from navyfat.services.units import length_to_canonical, length_to_centimeters, weight_to_canonical

logger = logging.getLogger(__name__)

# Advisory ranges, in the unit the user typed
AGE_ADVISORY_RANGE = (17, 60)
HEIGHT_ADVISORY_RANGE = {
    LengthUnit.CENTIMETER: (130.0, 220.0),
    LengthUnit.INCH: (51.0, 87.0),
}
NECK_ADVISORY_RANGE = {
    LengthUnit.CENTIMETER: (25.0, 60.0),
    LengthUnit.INCH: (10.0, 24.0),
}


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def parse_positive_number(value, field: str) -> float:
    """
    Parse a raw form value into a strictly positive, finite float.

    Raises:
        ValidationError: If the value is missing, non-numeric, or <= 0.
    """
    if _is_blank(value):
        raise ValidationError(f"{field} is required", field=field)
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number, got {value!r}", field=field)

    try:
        number = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a number, got {value!r}", field=field)

    if not math.isfinite(number) or number <= 0:
        raise ValidationError(f"{field} must be a positive number, got {value!r}", field=field)
    return number


def parse_age(value) -> int:
    """
    Parse the age field. Fractional input is truncated to whole years
    ("30.9" -> 30); the result must be at least 1.
    """
    age = int(parse_positive_number(value, "age"))
    if age < 1:
        raise ValidationError(f"age must be a positive whole number, got {value!r}", field="age")
    return age


def parse_sex(value) -> Sex:
    """Parse the sex field ("male" / "female", case-insensitive)."""
    if isinstance(value, Sex):
        return value
    if _is_blank(value):
        raise ValidationError("sex is required", field="sex")
    try:
        return Sex(str(value).strip().lower())
    except ValueError:
        raise ValidationError(f"sex must be 'male' or 'female', got {value!r}", field="sex")


# Canonical field -> raw form field, for error reporting
_SOURCE_FIELDS = {
    "height_in": "height",
    "neck_in": "neck",
    "waist_in": "waist",
    "hip_in": "hip",
    "weight_kg": "weight",
    "height_cm": "height",
}


def _check_representable(canonical: dict, sex: Sex) -> None:
    """
    Reject values that parsed as positive but do not survive unit conversion
    or the later arithmetic: underflow to 0.0, overflow to inf, a female
    circumference term that overflows, or a height whose square underflows.

    Raises:
        ValidationError: Naming the raw form field at fault.
    """
    for key, value in canonical.items():
        if value is None:
            continue
        if not math.isfinite(value) or value <= 0:
            field = _SOURCE_FIELDS[key]
            raise ValidationError(f"{field} is out of the representable range", field=field)

    if sex == Sex.FEMALE and not math.isfinite(canonical["waist_in"] + canonical["hip_in"]):
        raise ValidationError("waist + hip is out of the representable range", field="hip")

    if canonical["weight_kg"] is not None:
        height_m = canonical["height_cm"] / 100
        height_m_squared = height_m * height_m
        if not math.isfinite(height_m_squared) or height_m_squared <= 0:
            raise ValidationError("height is out of the representable range", field="height")
        bmi = canonical["weight_kg"] / height_m_squared
        if not math.isfinite(bmi) or bmi <= 0:
            raise ValidationError("weight is out of the representable range", field="weight")


def normalize_measurement(raw: RawMeasurement) -> MeasurementInput:
    """
    Convert raw form values to a canonical MeasurementInput.

    Raises:
        ValidationError: If sex, age, height, neck or waist is missing or not a
            positive number; if hip is missing/invalid for a female; or if a
            weight was entered but is not a positive number; or if a value
            underflows or overflows once converted to canonical units.
    """
    length_unit = LengthUnit(raw.length_unit)
    weight_unit = WeightUnit(raw.weight_unit)
    sex = parse_sex(raw.sex)
    age = parse_age(raw.age)
    height = parse_positive_number(raw.height, "height")
    neck = parse_positive_number(raw.neck, "neck")
    waist = parse_positive_number(raw.waist, "waist")

    hip_in = None
    if sex == Sex.FEMALE:
        hip_in = length_to_canonical(parse_positive_number(raw.hip, "hip"), length_unit)

    weight_kg = None
    if not _is_blank(raw.weight):
        weight_kg = weight_to_canonical(parse_positive_number(raw.weight, "weight"), weight_unit)

    canonical = {
        "height_in": length_to_canonical(height, length_unit),
        "neck_in": length_to_canonical(neck, length_unit),
        "waist_in": length_to_canonical(waist, length_unit),
        "hip_in": hip_in,
        "weight_kg": weight_kg,
        "height_cm": length_to_centimeters(height, length_unit),
    }
    _check_representable(canonical, sex)

    measurement = MeasurementInput(sex=sex, age=age, **canonical)

    logger.debug(
        f"Normalized input ({length_unit.value}/{weight_unit.value}): "
        f"sex={sex.value}, age={age}, height={measurement.height_in:.2f}in, "
        f"neck={measurement.neck_in:.2f}in, waist={measurement.waist_in:.2f}in, "
        f"hip={hip_in}, weight_kg={weight_kg}"
    )
    return measurement


def check_advisory_ranges(raw: RawMeasurement) -> list[str]:
    """
    Return non-blocking warnings for values outside the usual ranges.

    Only fields that parse are checked; unparseable fields are left to
    normalize_measurement to reject.
    """
    warnings: list[str] = []
    length_unit = LengthUnit(raw.length_unit)
    unit = length_unit.value

    try:
        age = parse_age(raw.age)
    except ValidationError:
        age = None
    if age is not None and not AGE_ADVISORY_RANGE[0] <= age <= AGE_ADVISORY_RANGE[1]:
        warnings.append(
            f"Age {age} is outside {AGE_ADVISORY_RANGE[0]}-{AGE_ADVISORY_RANGE[1]}; "
            "results are shown for reference only."
        )

    for field, value, ranges in (
        ("height", raw.height, HEIGHT_ADVISORY_RANGE),
        ("neck", raw.neck, NECK_ADVISORY_RANGE),
    ):
        try:
            number = parse_positive_number(value, field)
        except ValidationError:
            continue
        low, high = ranges[length_unit]
        if not low <= number <= high:
            warnings.append(
                f"{field.capitalize()} {number:g}{unit} is outside the expected range "
                f"{low:g}-{high:g}{unit}."
            )

    if warnings:
        logger.info(f"Advisory warnings: {warnings}")
    return warnings
