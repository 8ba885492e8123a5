"""
Tests for the Calculation Service (one full calculation)
=========================================================
  1. End-to-end male: body fat, judgements against both presets, no BMI
  2. End-to-end female with weight: BMI present
  3. Female without hip → ValidationError before any formula runs
  4. Domain failure → DomainError, no result
  5. Unknown preset → ConfigError
  6. Metric and imperial entries of the same body agree
  7. Out-of-range age still calculates (advisory only)
  8. Extreme but positive values → ValidationError, never inf or a pydantic error
"""

import math
from unittest.mock import patch

import pytest

from navyfat.core.config import settings
from navyfat.core.errors import ConfigError, DomainError, ValidationError
from navyfat.models import RawMeasurement
from navyfat.services.calculator import compute_result

MALE_EXPECTED = 86.010 * math.log10(19) - 70.041 * math.log10(70) + 36.76


class TestComputeResultMale:

    def test_body_fat_and_judgements(self, male_raw, simple_catalog):
        """Navy limit 22 % → pass; margin = 22 − body fat."""
        result = compute_result(male_raw, simple_catalog)

        assert result.body_fat_pct == pytest.approx(MALE_EXPECTED)
        assert list(result.judgements) == settings.PRESET_IDS

        navy = result.judgements["Navy_2025-01"]
        assert navy.passed is True
        assert navy.limit_pct == 22.0
        assert navy.margin_pct == pytest.approx(22.0 - MALE_EXPECTED)
        assert navy.margin_pct > 0

    def test_marines_is_stricter(self, male_raw, simple_catalog):
        """Marines limit 18 % with ~17.5 % body fat → still a pass, small margin."""
        marines = compute_result(male_raw, simple_catalog).judgements["Marines_2025-01"]
        assert marines.passed is True
        assert marines.margin_pct == pytest.approx(18.0 - MALE_EXPECTED)

    def test_bmi_absent_without_weight(self, male_raw, simple_catalog):
        assert compute_result(male_raw, simple_catalog).bmi is None

    def test_bmi_with_weight(self, male_raw, simple_catalog):
        raw = male_raw.model_copy(update={"weight": "80"})
        assert compute_result(raw, simple_catalog).bmi == pytest.approx(25.306, abs=0.001)

    def test_metric_and_imperial_agree(self, male_raw, simple_catalog):
        metric = RawMeasurement(
            sex="male", age=30, height="177.8", neck="38.1", waist="86.36",
            length_unit="cm",
        )
        assert compute_result(metric, simple_catalog).body_fat_pct == pytest.approx(
            compute_result(male_raw, simple_catalog).body_fat_pct
        )

    def test_deterministic(self, male_raw, simple_catalog):
        assert compute_result(male_raw, simple_catalog) == compute_result(male_raw, simple_catalog)

    def test_age_outside_advisory_range_still_judged(self, male_raw, simple_catalog):
        """Age 65: calculation runs, judgements report out of range."""
        result = compute_result(male_raw.model_copy(update={"age": 65}), simple_catalog)

        assert result.body_fat_pct == pytest.approx(MALE_EXPECTED)
        assert all(j.out_of_range for j in result.judgements.values())
        assert all(j.passed is None for j in result.judgements.values())


class TestComputeResultFemale:

    def test_female_with_weight(self, female_raw, packaged_catalog):
        expected = 163.205 * math.log10(55) - 97.684 * math.log10(65) - 78.387

        result = compute_result(female_raw, packaged_catalog)

        assert result.body_fat_pct == pytest.approx(expected)
        assert result.bmi == pytest.approx(60 / (1.651 ** 2))
        # Navy female 22-29 → 34 %, Marines female 17-25 → 26 %
        assert result.judgements["Navy_2025-01"].passed is True
        assert result.judgements["Marines_2025-01"].passed is False
        assert result.judgements["Marines_2025-01"].margin_pct == pytest.approx(26.0 - expected)

    def test_missing_hip_fails_before_any_formula(self, female_raw, simple_catalog):
        raw = female_raw.model_copy(update={"hip": None})

        with patch("navyfat.services.calculator.estimate_body_fat") as estimator, \
                patch("navyfat.services.calculator.validate_domain") as domain:
            with pytest.raises(ValidationError, match="hip"):
                compute_result(raw, simple_catalog)

        estimator.assert_not_called()
        domain.assert_not_called()


class TestComputeResultErrors:

    def test_domain_error_stops_calculation(self, male_raw, simple_catalog):
        raw = male_raw.model_copy(update={"neck": "34", "waist": "34.2"})

        with patch("navyfat.services.calculator.estimate_body_fat") as estimator:
            with pytest.raises(DomainError) as exc_info:
                compute_result(raw, simple_catalog)

        estimator.assert_not_called()
        assert exc_info.value.deficiency_in == pytest.approx(0.2)

    def test_non_numeric_input(self, male_raw, simple_catalog):
        with pytest.raises(ValidationError, match="waist"):
            compute_result(male_raw.model_copy(update={"waist": "thirty"}), simple_catalog)

    def test_unknown_preset(self, male_raw, simple_catalog):
        with pytest.raises(ConfigError):
            compute_result(male_raw, simple_catalog, ["Navy_2025-01", "Army_2025-01"])

    def test_custom_preset_selection(self, male_raw, simple_catalog):
        result = compute_result(male_raw, simple_catalog, ["Marines_2025-01"])
        assert list(result.judgements) == ["Marines_2025-01"]

    def test_default_presets_follow_settings(self, male_raw, simple_catalog, monkeypatch):
        monkeypatch.setattr(settings, "PRESET_IDS", ["Navy_2025-01"])
        assert list(compute_result(male_raw, simple_catalog).judgements) == ["Navy_2025-01"]


class TestComputeResultExtremeValues:
    """Values that parse as positive but break float arithmetic are rejected up front."""

    def test_height_underflowing_to_zero(self, simple_catalog):
        """5e-324 cm / 2.54 underflows to 0.0 in."""
        raw = RawMeasurement(
            sex="male", age=30, height="5e-324", neck="38", waist="86", length_unit="cm",
        )
        with pytest.raises(ValidationError) as exc_info:
            compute_result(raw, simple_catalog)
        assert exc_info.value.field == "height"

    def test_female_term_overflowing_to_inf(self, female_raw, simple_catalog):
        """waist + hip = 2e308 overflows; no inf body fat is produced."""
        raw = female_raw.model_copy(update={"waist": "1e308", "hip": "1e308"})

        with patch("navyfat.services.calculator.estimate_body_fat") as estimator:
            with pytest.raises(ValidationError) as exc_info:
                compute_result(raw, simple_catalog)

        estimator.assert_not_called()
        assert exc_info.value.field == "hip"
