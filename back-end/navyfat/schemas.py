"""
Pydantic V2 Schemas (Request/Response Models)
================================================
These schemas define the shape of data that flows in and out of the API.

Naming Convention:
  - *Request  : Used for POST request bodies
  - *Response : Used for API responses (what the client receives back)

Domain records used inside the services live in models.py; these schemas
wrap them with display-ready values (rounded numbers, status text).
"""

from pydantic import BaseModel, Field

from navyfat.models import BodyFatLevelInfo, LengthUnit, RawMeasurement, Sex, WeightUnit


# ============================================================
# CALCULATION SCHEMAS
# ============================================================

class CalculationRequest(BaseModel):
    """
    Raw form values for one calculation.

    Numbers may be sent as strings exactly as typed; they are parsed and
    validated by the normalizer. `hip` is required for females and ignored
    for males. `weight` is optional and only used for BMI.
    """
    sex: str = Field(..., description="'male' or 'female'")
    age: str | int | float = Field(..., description="Age in years")
    height: str | int | float = Field(..., description="Height, in length_unit")
    neck: str | int | float = Field(..., description="Neck circumference, in length_unit")
    waist: str | int | float = Field(..., description="Waist circumference, in length_unit")
    hip: str | int | float | None = Field(
        default=None, description="Hip circumference, in length_unit (females only)"
    )
    weight: str | int | float | None = Field(
        default=None, description="Body weight, in weight_unit (optional)"
    )
    length_unit: LengthUnit = Field(default=LengthUnit.CENTIMETER, description="'cm' or 'in'")
    weight_unit: WeightUnit = Field(default=WeightUnit.KILOGRAM, description="'kg' or 'lb'")

    def to_raw(self) -> RawMeasurement:
        return RawMeasurement(**self.model_dump())


class JudgementResponse(BaseModel):
    """One service standard's verdict, ready for display."""
    preset_id: str
    service: str
    out_of_range: bool
    passed: bool | None = Field(default=None, serialization_alias="pass")
    limit_pct: float | None = None
    margin_pct: float | None = None
    status: str = Field(..., description="e.g. 'Pass (+4.9%pt)' or 'Out of range'")


class CalculationResponse(BaseModel):
    """
    Result of one calculation.

    `body_fat_pct` / `bmi` are full precision; the *_display fields are
    rounded to one decimal place for presentation.
    """
    body_fat_pct: float
    body_fat_display: float
    bmi: float | None = None
    bmi_display: float | None = None
    level: BodyFatLevelInfo
    judgements: list[JudgementResponse]
    warnings: list[str] = Field(default_factory=list)


# ============================================================
# STANDARDS SCHEMAS
# ============================================================

class StandardsRow(BaseModel):
    """A single bracket of a service standard."""
    preset_id: str
    service: str
    sex: Sex
    age_min: int
    age_max: int
    limit_pct: float
    highlighted: bool = False


class StandardsTableResponse(BaseModel):
    """The whole standards table plus where it came from."""
    source: str
    version: str
    rows: list[StandardsRow]


class SourceInfoResponse(BaseModel):
    source: str
    version: str
    retrieved_at: str
    summary: str


# ============================================================
# UNIT CONVERSION SCHEMAS
# ============================================================

class UnitConversionRequest(BaseModel):
    """
    Values currently typed into the form, to be re-expressed when the user
    flips a unit toggle. Missing values stay missing.
    """
    height: float | None = Field(default=None, gt=0)
    neck: float | None = Field(default=None, gt=0)
    waist: float | None = Field(default=None, gt=0)
    hip: float | None = Field(default=None, gt=0)
    weight: float | None = Field(default=None, gt=0)
    from_length_unit: LengthUnit = LengthUnit.CENTIMETER
    to_length_unit: LengthUnit = LengthUnit.CENTIMETER
    from_weight_unit: WeightUnit = WeightUnit.KILOGRAM
    to_weight_unit: WeightUnit = WeightUnit.KILOGRAM


class UnitConversionResponse(BaseModel):
    """Converted values, each rounded to one decimal place."""
    height: float | None = None
    neck: float | None = None
    waist: float | None = None
    hip: float | None = None
    weight: float | None = None
    length_unit: LengthUnit
    weight_unit: WeightUnit
