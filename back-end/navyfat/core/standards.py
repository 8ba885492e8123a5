"""
Standards Catalog
=================
Loads the body-composition standards document and exposes it as an immutable
catalog shared by every calculation.

Document shape (JSON):
  {
    "meta":    {"source": ..., "version": ..., "retrieved_at": ...},
    "presets": [
      {"id": "Navy_2025-01", "service": "Navy",
       "limits": [{"sex": "male", "ageMin": 17, "ageMax": 21, "limitPct": 22}, ...]},
      ...
    ]
  }

The catalog is loaded ONCE at startup (see main.lifespan) and never mutated.
A missing or malformed document is a ConfigError — the host must refuse to
serve calculations until it is fixed; nothing here retries.
"""

import logging
from pathlib import Path

from fastapi import Request
from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, model_validator

from navyfat.core.errors import ConfigError
from navyfat.models import Sex

logger = logging.getLogger(__name__)


class StandardsMeta(BaseModel):
    """Provenance of the standards document."""
    source: str
    version: str
    retrieved_at: str

    model_config = {"frozen": True}


class Limit(BaseModel):
    """One bracket: (sex, inclusive age range) -> maximum body fat %."""
    sex: Sex
    age_min: int = Field(..., alias="ageMin", ge=0)
    age_max: int = Field(..., alias="ageMax", ge=0)
    limit_pct: float = Field(..., alias="limitPct")

    model_config = {"frozen": True, "populate_by_name": True}

    @model_validator(mode="after")
    def check_age_range(self) -> "Limit":
        if self.age_min > self.age_max:
            raise ValueError(
                f"ageMin ({self.age_min}) is greater than ageMax ({self.age_max})"
            )
        return self

    def matches(self, sex: Sex, age: int) -> bool:
        """True if this bracket covers the given sex and age (both ends inclusive)."""
        return self.sex == sex and self.age_min <= age <= self.age_max


class Preset(BaseModel):
    """A versioned service standard (e.g. Navy_2025-01) and its brackets."""
    id: str
    service: str
    limits: tuple[Limit, ...]

    model_config = {"frozen": True}


class StandardsCatalog(BaseModel):
    """The whole standards document. Read-only after loading."""
    meta: StandardsMeta
    presets: tuple[Preset, ...]

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_unique_ids(self) -> "StandardsCatalog":
        ids = [preset.id for preset in self.presets]
        duplicates = sorted({pid for pid in ids if ids.count(pid) > 1})
        if duplicates:
            raise ValueError(f"Duplicate preset IDs: {', '.join(duplicates)}")
        return self

    def get_preset(self, preset_id: str) -> Preset:
        """
        Return the preset with `preset_id`.

        Raises:
            ConfigError: If the catalog has no such preset. Preset IDs come
                from configuration, so a miss is a deployment defect.
        """
        for preset in self.presets:
            if preset.id == preset_id:
                return preset
        raise ConfigError(f"Preset {preset_id} not found")


def parse_catalog(document: str | bytes) -> StandardsCatalog:
    """Parse a JSON standards document, raising ConfigError if it is malformed."""
    try:
        return StandardsCatalog.model_validate_json(document)
    except PydanticValidationError as e:
        raise ConfigError(f"Malformed standards document: {e}") from e


def load_catalog(path: Path) -> StandardsCatalog:
    """
    Read and validate the standards document at `path`.

    Raises:
        ConfigError: If the file cannot be read or does not match the schema.
    """
    try:
        document = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        logger.error(f"Failed to read standards document {path}: {e}")
        raise ConfigError(f"Could not read standards document {path}: {e}") from e

    catalog = parse_catalog(document)

    logger.info(
        f"Loaded standards catalog from {path}: "
        f"source='{catalog.meta.source}', version={catalog.meta.version}, "
        f"presets={[p.id for p in catalog.presets]}"
    )
    return catalog


def get_catalog(request: Request) -> StandardsCatalog:
    """
    FastAPI dependency that provides the process-wide standards catalog.

    Usage in a route:
        @router.get("/example")
        async def example(catalog: StandardsCatalog = Depends(get_catalog)):
            ...

    The catalog is attached to `app.state` by the lifespan handler.
    """
    catalog = getattr(request.app.state, "catalog", None)
    if catalog is None:
        raise ConfigError("Standards catalog is not loaded")
    return catalog
