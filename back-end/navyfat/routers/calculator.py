"""
Calculator Router
=================
Endpoints for running a Navy-method body fat calculation.

Endpoints:
  POST /calculate        - Body fat %, BMI and per-service judgements from raw form values
  GET  /calculate/level  - Qualitative band for a body fat % (e.g. "Fitness level")
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from navyfat.core.config import settings
from navyfat.core.errors import ConfigError, DomainError, ValidationError
from navyfat.core.standards import StandardsCatalog, get_catalog
from navyfat.models import BodyFatLevelInfo, Sex
from navyfat.schemas import CalculationRequest, CalculationResponse, JudgementResponse
from navyfat.services.body_fat import describe_body_fat_level
from navyfat.services.calculator import compute_result
from navyfat.services.normalizer import check_advisory_ranges, parse_sex
from navyfat.services.standards_judge import judgement_status

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/calculate", tags=["Calculator"])


@router.post("", response_model=CalculationResponse)
async def calculate(
    request: CalculationRequest,
    catalog: StandardsCatalog = Depends(get_catalog),
):
    """
    Run one calculation.

    HOW IT WORKS:
      1. Parses the raw values and converts all lengths to inches
      2. Checks that the formula's log argument is at least 0.4 in
      3. Estimates body fat with the Navy formula for the given sex
      4. Judges the estimate against every configured standard
      5. Adds BMI if a weight was entered

    Errors:
      - 422: missing / non-numeric input, or hip missing for a female
      - 400: measurements out of the formula's domain (detail says by how much)
      - 500: standards configuration problem
    """
    raw = request.to_raw()
    warnings = check_advisory_ranges(raw)

    try:
        result = compute_result(raw, catalog, settings.PRESET_IDS)
    except ValidationError as e:
        logger.warning(f"Rejected calculation input: {e}")
        raise HTTPException(status_code=422, detail={"message": str(e), "field": e.field})
    except DomainError as e:
        raise HTTPException(status_code=400, detail=e.to_detail())
    except ConfigError as e:
        logger.error(f"Standards configuration error: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    sex = parse_sex(raw.sex)
    judgements = [
        JudgementResponse(
            preset_id=preset_id,
            service=catalog.get_preset(preset_id).service,
            out_of_range=judgement.out_of_range,
            passed=judgement.passed,
            limit_pct=judgement.limit_pct,
            margin_pct=judgement.margin_pct,
            status=judgement_status(judgement),
        )
        for preset_id, judgement in result.judgements.items()
    ]

    return CalculationResponse(
        body_fat_pct=result.body_fat_pct,
        body_fat_display=round(result.body_fat_pct, 1),
        bmi=result.bmi,
        bmi_display=round(result.bmi, 1) if result.bmi is not None else None,
        level=describe_body_fat_level(result.body_fat_pct, sex),
        judgements=judgements,
        warnings=warnings,
    )


@router.get("/level", response_model=BodyFatLevelInfo)
async def body_fat_level(
    pct: float = Query(..., description="Body fat percentage"),
    sex: Sex = Query(..., description="'male' or 'female'"),
):
    """
    Classify a body fat percentage into one of five bands:
    essential, athlete, fitness, healthy, high.
    """
    return describe_body_fat_level(pct, sex)
