"""
Shared fixtures: the packaged standards catalog and small hand-built catalogs
whose brackets make expected verdicts obvious.
"""

import pytest

from navyfat.core.config import DEFAULT_STANDARDS_PATH
from navyfat.core.standards import StandardsCatalog, load_catalog
from navyfat.models import RawMeasurement


def _catalog(presets: list[dict]) -> StandardsCatalog:
    return StandardsCatalog.model_validate({
        "meta": {"source": "Test standards", "version": "test", "retrieved_at": "2025-01-01"},
        "presets": presets,
    })


@pytest.fixture
def packaged_catalog() -> StandardsCatalog:
    """The standards document shipped with the package."""
    return load_catalog(DEFAULT_STANDARDS_PATH)


@pytest.fixture
def simple_catalog() -> StandardsCatalog:
    """
    Navy_2025-01:    male 17-60 -> 22%, female 17-60 -> 33%
    Marines_2025-01: male 17-60 -> 18%, female 17-60 -> 26%
    """
    return _catalog([
        {
            "id": "Navy_2025-01",
            "service": "Navy",
            "limits": [
                {"sex": "male", "ageMin": 17, "ageMax": 60, "limitPct": 22},
                {"sex": "female", "ageMin": 17, "ageMax": 60, "limitPct": 33},
            ],
        },
        {
            "id": "Marines_2025-01",
            "service": "Marine Corps",
            "limits": [
                {"sex": "male", "ageMin": 17, "ageMax": 60, "limitPct": 18},
                {"sex": "female", "ageMin": 17, "ageMax": 60, "limitPct": 26},
            ],
        },
    ])


@pytest.fixture
def overlapping_catalog() -> StandardsCatalog:
    """Two male brackets both covering age 30 — the first one must win."""
    return _catalog([
        {
            "id": "Overlap",
            "service": "Test",
            "limits": [
                {"sex": "male", "ageMin": 25, "ageMax": 35, "limitPct": 20},
                {"sex": "male", "ageMin": 30, "ageMax": 40, "limitPct": 30},
            ],
        },
    ])


@pytest.fixture
def male_raw() -> RawMeasurement:
    """Male, 30 y, 70 in tall, neck 15 in, waist 34 in, no weight."""
    return RawMeasurement(
        sex="male", age="30", height="70", neck="15", waist="34",
        length_unit="in", weight_unit="kg",
    )


@pytest.fixture
def female_raw() -> RawMeasurement:
    """Female, 25 y, 65 in tall, neck 13 in, waist 30 in, hip 38 in, 60 kg."""
    return RawMeasurement(
        sex="female", age=25, height=65, neck=13, waist=30, hip=38, weight=60,
        length_unit="in", weight_unit="kg",
    )
