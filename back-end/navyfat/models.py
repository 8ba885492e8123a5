"""
Domain Models
=============
Typed records that flow through one calculation:

  RawMeasurement  -> (normalizer)  -> MeasurementInput   (canonical units)
  MeasurementInput -> (estimator)  -> body fat %
  body fat %       -> (judge)      -> JudgementResult per preset
  everything       -> (assembler)  -> CalculationResult

Optional values are explicit `X | None` fields: `hip_in` only exists for
females, `weight_kg` / `bmi` only when a weight was entered, and a judgement's
pass/limit/margin only when an age bracket matched.

All records are frozen — a result is built once per submission and never
mutated afterwards.
"""

from enum import Enum

from pydantic import BaseModel, Field, model_validator


# Canonical unit factors
INCH_TO_CM = 2.54
LB_PER_KG = 2.20462262185


class Sex(str, Enum):
    MALE = "male"
    FEMALE = "female"


class LengthUnit(str, Enum):
    CENTIMETER = "cm"
    INCH = "in"


class WeightUnit(str, Enum):
    KILOGRAM = "kg"
    POUND = "lb"


class BodyFatLevel(str, Enum):
    """Qualitative bands, ordered from lowest to highest body fat."""
    ESSENTIAL = "essential"
    ATHLETE = "athlete"
    FITNESS = "fitness"
    HEALTHY = "healthy"
    HIGH = "high"


# ============================================================
# INPUT RECORDS
# ============================================================

class RawMeasurement(BaseModel):
    """
    Form values exactly as the user entered them.
    Numbers may still be strings ("70", "  34.5 ", "") — parsing and unit
    normalization is the normalizer's job, not this model's.
    """
    sex: str | None = None
    age: str | int | float | None = None
    height: str | int | float | None = None
    neck: str | int | float | None = None
    waist: str | int | float | None = None
    hip: str | int | float | None = None
    weight: str | int | float | None = None
    length_unit: LengthUnit = LengthUnit.CENTIMETER
    weight_unit: WeightUnit = WeightUnit.KILOGRAM

    model_config = {"frozen": True}


class MeasurementInput(BaseModel):
    """Canonical measurement: lengths in inches, weight in kilograms."""
    sex: Sex
    age: int = Field(..., gt=0)
    height_in: float = Field(..., gt=0)
    neck_in: float = Field(..., gt=0)
    waist_in: float = Field(..., gt=0)
    hip_in: float | None = Field(default=None, gt=0)
    weight_kg: float | None = Field(default=None, gt=0)
    # Height in its metric form, kept for BMI regardless of the entry unit
    height_cm: float = Field(..., gt=0)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def hip_only_for_female(self) -> "MeasurementInput":
        """hip_in must be present for females and absent for males."""
        if self.sex == Sex.FEMALE and self.hip_in is None:
            raise ValueError("hip_in is required when sex is female")
        if self.sex == Sex.MALE and self.hip_in is not None:
            raise ValueError("hip_in must be absent when sex is male")
        return self


# ============================================================
# RESULT RECORDS
# ============================================================

class JudgementResult(BaseModel):
    """
    Outcome of judging one body fat value against one preset.

    When no age bracket matches, `out_of_range` is True and `passed`,
    `limit_pct`, `margin_pct` are all None. `margin_pct` = limit − body fat:
    positive is headroom, negative is the amount over the limit.
    """
    preset_id: str
    out_of_range: bool
    passed: bool | None = Field(default=None, serialization_alias="pass")
    limit_pct: float | None = None
    margin_pct: float | None = None

    model_config = {"frozen": True}


class CalculationResult(BaseModel):
    """Everything one calculation produces, keyed by preset ID for judgements."""
    body_fat_pct: float
    bmi: float | None = None
    judgements: dict[str, JudgementResult] = Field(default_factory=dict)

    model_config = {"frozen": True}


class BodyFatLevelInfo(BaseModel):
    """A body fat band plus the label / emoji shown next to the result."""
    level: BodyFatLevel
    label: str
    emoji: str

    model_config = {"frozen": True}
