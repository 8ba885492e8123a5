"""
Calculator Errors
=================
The three failure kinds a calculation can end in:

  - ValidationError : raw input missing / non-numeric / required field absent.
                      The caller must re-prompt.
  - DomainError     : numbers are fine but the formula's logarithm argument is
                      too small. Carries the exact deficiency so the caller can
                      explain what to re-measure.
  - ConfigError     : unknown preset ID or a standards document that failed to
                      load. A deployment defect, not a user mistake.

ValidationError and DomainError are ValueErrors so routers can keep the
usual `except ValueError` -> HTTP 4xx translation.
"""

from navyfat.models import INCH_TO_CM


class BodyFatCalculatorError(Exception):
    """Base class for every error raised by the calculator core."""


class ValidationError(BodyFatCalculatorError, ValueError):
    """Raw input could not be turned into a MeasurementInput."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class DomainError(BodyFatCalculatorError, ValueError):
    """The Navy formula's logarithm argument is below the safety margin."""

    def __init__(
        self,
        message: str,
        sex: str,
        term_in: float,
        min_margin_in: float,
    ):
        super().__init__(message)
        self.sex = sex
        self.term_in = term_in
        self.min_margin_in = min_margin_in
        self.deficiency_in = min_margin_in - term_in
        self.deficiency_cm = self.deficiency_in * INCH_TO_CM

    def to_detail(self) -> dict:
        """Payload used by the HTTP layer to explain the rejection."""
        return {
            "message": str(self),
            "sex": self.sex,
            "term_in": round(self.term_in, 3),
            "min_margin_in": self.min_margin_in,
            "min_margin_cm": round(self.min_margin_in * INCH_TO_CM, 1),
            "deficiency_in": round(self.deficiency_in, 3),
            "deficiency_cm": round(self.deficiency_cm, 1),
        }


class ConfigError(BodyFatCalculatorError):
    """The standards catalog is missing, malformed, or lacks a preset."""
