"""
Standards Router
================
Read-only views of the loaded body-composition standards.

Endpoints:
  GET /standards/         - Every bracket of every preset (optionally highlighted for a subject)
  GET /standards/source   - Provenance of the standards document
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from navyfat.core.standards import StandardsCatalog, get_catalog
from navyfat.models import Sex
from navyfat.schemas import SourceInfoResponse, StandardsRow, StandardsTableResponse
from navyfat.services.standards_judge import source_info, standards_table

router = APIRouter(prefix="/standards", tags=["Standards"])


@router.get("/", response_model=StandardsTableResponse)
async def list_standards(
    sex: Optional[Sex] = Query(default=None, description="Highlight brackets for this sex"),
    age: Optional[int] = Query(default=None, ge=0, description="Highlight brackets for this age"),
    catalog: StandardsCatalog = Depends(get_catalog),
):
    """
    List all brackets in catalog order.

    If both `sex` and `age` are given, the brackets covering that subject are
    flagged `highlighted`.

    Examples:
      GET /standards/                      -> Full table
      GET /standards/?sex=male&age=30      -> Full table, male 30 rows highlighted
    """
    rows = [StandardsRow(**row) for row in standards_table(catalog, sex, age)]
    return StandardsTableResponse(
        source=catalog.meta.source,
        version=catalog.meta.version,
        rows=rows,
    )


@router.get("/source", response_model=SourceInfoResponse)
async def get_source(catalog: StandardsCatalog = Depends(get_catalog)):
    """Where the standards came from and when they were retrieved."""
    return SourceInfoResponse(
        source=catalog.meta.source,
        version=catalog.meta.version,
        retrieved_at=catalog.meta.retrieved_at,
        summary=source_info(catalog),
    )
