"""
Units Router
============
Endpoint used when the user flips a unit toggle on a partly filled-in form.

Endpoints:
  POST /units/convert  - Re-express entered lengths / weight in the other unit system
"""

from fastapi import APIRouter

from navyfat.schemas import UnitConversionRequest, UnitConversionResponse
from navyfat.services.units import convert_length_for_display, convert_weight_for_display

router = APIRouter(prefix="/units", tags=["Units"])


@router.post("/convert", response_model=UnitConversionResponse)
async def convert_units(request: UnitConversionRequest):
    """
    Convert every provided value to the target units, one decimal place.

    Lengths (height, neck, waist, hip) go from `from_length_unit` to
    `to_length_unit`; weight from `from_weight_unit` to `to_weight_unit`.
    Values that were not provided are returned as null.
    """
    lengths = {}
    for field in ("height", "neck", "waist", "hip"):
        value = getattr(request, field)
        lengths[field] = (
            convert_length_for_display(value, request.from_length_unit, request.to_length_unit)
            if value is not None
            else None
        )

    weight = None
    if request.weight is not None:
        weight = convert_weight_for_display(
            request.weight, request.from_weight_unit, request.to_weight_unit
        )

    return UnitConversionResponse(
        **lengths,
        weight=weight,
        length_unit=request.to_length_unit,
        weight_unit=request.to_weight_unit,
    )
