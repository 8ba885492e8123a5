"""
Body Fat Calculation Service
==============================
Implements the U.S. Navy circumference ("tape") method for estimating body fat
percentage, plus BMI and the qualitative body fat bands.

The Navy method needs only a tape measure: neck, waist and height (plus hip for
females). All lengths are in INCHES and logarithms are base 10.

FORMULA (males):
  Body Fat % = 86.010 × log10(waist − neck) − 70.041 × log10(height) + 36.76

FORMULA (females):
  Body Fat % = 163.205 × log10(waist + hip − neck) − 97.684 × log10(height) − 78.387

DOMAIN:
  log10 is undefined at or below zero and diverges near it, so the
  circumference term must be at least MIN_CIRCUMFERENCE_TERM_IN (0.4 in).
  validate_domain() enforces this and MUST be called before estimation.

The estimate is NOT clamped: extreme inputs may produce values below 0% or
above 100%, and these are returned unchanged.
"""

import logging
import math

from navyfat.core.errors import DomainError
from navyfat.models import BodyFatLevel, BodyFatLevelInfo, MeasurementInput, Sex

logger = logging.getLogger(__name__)

# Minimum circumference term (inches) accepted by the logarithm
MIN_CIRCUMFERENCE_TERM_IN = 0.4
# Absorbs float noise from decimal entry (34.4 - 34.0 == 0.39999999999999858)
DOMAIN_TOLERANCE_IN = 1e-9

# Band upper bounds (exclusive), in percent: essential, athlete, fitness, healthy
BODY_FAT_LEVEL_THRESHOLDS = {
    Sex.MALE: (6.0, 14.0, 18.0, 25.0),
    Sex.FEMALE: (16.0, 20.0, 25.0, 32.0),
}

BODY_FAT_LEVEL_DISPLAY = {
    BodyFatLevel.ESSENTIAL: ("🔥", "Essential fat (extremely low body fat)"),
    BodyFatLevel.ATHLETE: ("💪", "Athlete level (very low body fat)"),
    BodyFatLevel.FITNESS: ("✨", "Fitness level (low body fat)"),
    BodyFatLevel.HEALTHY: ("👍", "Healthy (average body fat)"),
    BodyFatLevel.HIGH: ("⚠️", "Attention (high body fat)"),
}


def circumference_term(measurement: MeasurementInput) -> float:
    """
    The value passed to the first logarithm of the formula, in inches.

      male:   waist − neck
      female: waist + hip − neck
    """
    if measurement.sex == Sex.MALE:
        return measurement.waist_in - measurement.neck_in
    return measurement.waist_in + measurement.hip_in - measurement.neck_in


def validate_domain(measurement: MeasurementInput) -> None:
    """
    Make sure the formula's logarithm argument is safely positive.

    Raises:
        DomainError: If the circumference term is below 0.4 in. The error
            carries the deficiency in inches and centimeters so the caller can
            tell the user how far off the measurements are.
    """
    term = circumference_term(measurement)
    if term >= MIN_CIRCUMFERENCE_TERM_IN - DOMAIN_TOLERANCE_IN:
        return

    if measurement.sex == Sex.MALE:
        message = f"male: waist-neck margin below {MIN_CIRCUMFERENCE_TERM_IN}in"
    else:
        message = f"female: waist+hip-neck margin below {MIN_CIRCUMFERENCE_TERM_IN}in"

    error = DomainError(
        message,
        sex=measurement.sex.value,
        term_in=term,
        min_margin_in=MIN_CIRCUMFERENCE_TERM_IN,
    )
    logger.warning(
        f"Domain check failed ({message}): term={term:.3f}in, "
        f"short by {error.deficiency_in:.3f}in (~{error.deficiency_cm:.1f}cm)"
    )
    raise error


def estimate_body_fat(measurement: MeasurementInput) -> float:
    """
    Estimate body fat percentage with the Navy formula for the subject's sex.

    validate_domain() must already have passed; this function does not
    re-check the logarithm argument.

    Args:
        measurement: Canonical measurement (inches)

    Returns:
        Body fat percentage at full precision (e.g. 17.08 means 17.08%)

    Reference:
        Hodgdon, J.A. & Beckett, M.B. (1984). Prediction of percent body fat for
        U.S. Navy men and women from body circumferences and height.
        Naval Health Research Center, Reports 84-11 and 84-29.
    """
    term = circumference_term(measurement)
    if measurement.sex == Sex.MALE:
        body_fat_pct = (
            86.010 * math.log10(term)
            - 70.041 * math.log10(measurement.height_in)
            + 36.76
        )
    else:
        body_fat_pct = (
            163.205 * math.log10(term)
            - 97.684 * math.log10(measurement.height_in)
            - 78.387
        )

    logger.info(
        f"Navy method ({measurement.sex.value}): "
        f"term={term:.3f}in, height={measurement.height_in:.3f}in "
        f"-> body_fat={body_fat_pct:.2f}%"
    )
    return body_fat_pct


def calculate_bmi(weight_kg: float | None, height_cm: float) -> float | None:
    """
    Body Mass Index = weight (kg) / height (m)².

    Returns None when no weight was entered — BMI is an optional extra,
    never reported as zero.
    """
    if weight_kg is None:
        return None
    height_m = height_cm / 100
    return weight_kg / (height_m * height_m)


def describe_body_fat_level(body_fat_pct: float, sex: Sex) -> BodyFatLevelInfo:
    """
    Classify a body fat percentage into one of five ordered bands.

    Thresholds are exclusive upper bounds:
      male:   <6 essential, <14 athlete, <18 fitness, <25 healthy, else high
      female: <16 essential, <20 athlete, <25 fitness, <32 healthy, else high
    """
    levels = list(BodyFatLevel)
    level = levels[-1]
    for candidate, upper_bound in zip(levels, BODY_FAT_LEVEL_THRESHOLDS[Sex(sex)]):
        if body_fat_pct < upper_bound:
            level = candidate
            break

    emoji, label = BODY_FAT_LEVEL_DISPLAY[level]
    return BodyFatLevelInfo(level=level, label=label, emoji=emoji)

