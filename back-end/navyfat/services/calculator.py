"""
Calculation Service
===================
The single entry point for "one calculation":

  raw form values
      -> normalize_measurement   (ValidationError on bad input)
      -> validate_domain         (DomainError if the log argument is too small)
      -> estimate_body_fat
      -> judge × each configured preset   (ConfigError on unknown preset)
      -> calculate_bmi           (only if a weight was entered)
      -> CalculationResult

Every step is a pure function over the input and the read-only catalog, so
calculations can run concurrently without locking. Failures are raised, never
replaced by a made-up value.
"""

import logging
from collections.abc import Sequence

from navyfat.core.config import settings
from navyfat.core.standards import StandardsCatalog
from navyfat.models import CalculationResult, MeasurementInput, RawMeasurement
from navyfat.services.body_fat import calculate_bmi, estimate_body_fat, validate_domain
from navyfat.services.normalizer import normalize_measurement
from navyfat.services.standards_judge import judge

logger = logging.getLogger(__name__)


def assemble_result(
    measurement: MeasurementInput,
    catalog: StandardsCatalog,
    preset_ids: Sequence[str] | None = None,
) -> CalculationResult:
    """
    Run the estimator once, the judge once per preset, and BMI if possible.
    `preset_ids` defaults to settings.PRESET_IDS.

    Raises:
        DomainError: If the measurement fails the domain check.
        ConfigError: If any preset ID is missing from the catalog.
    """
    if preset_ids is None:
        preset_ids = settings.PRESET_IDS

    validate_domain(measurement)
    body_fat_pct = estimate_body_fat(measurement)

    judgements = {
        preset_id: judge(catalog, measurement.sex, measurement.age, body_fat_pct, preset_id)
        for preset_id in preset_ids
    }

    bmi = calculate_bmi(measurement.weight_kg, measurement.height_cm)

    return CalculationResult(body_fat_pct=body_fat_pct, bmi=bmi, judgements=judgements)


def compute_result(
    raw: RawMeasurement,
    catalog: StandardsCatalog,
    preset_ids: Sequence[str] | None = None,
) -> CalculationResult:
    """
    Compute body fat, BMI and judgements from raw form values.

    Deterministic: the same raw input and catalog always give the same result.

    Raises:
        ValidationError: Raw input missing or not numeric (before any formula runs).
        DomainError: Circumference term below the 0.4 in safety margin.
        ConfigError: A requested preset is not in the catalog.
    """
    measurement = normalize_measurement(raw)
    result = assemble_result(measurement, catalog, preset_ids)

    verdicts = {pid: j.passed for pid, j in result.judgements.items()}
    logger.info(
        f"Calculation done: sex={measurement.sex.value}, age={measurement.age}, "
        f"body_fat={result.body_fat_pct:.2f}%, bmi={result.bmi}, "
        f"judgements={verdicts}"
    )
    return result
