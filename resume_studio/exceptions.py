"""
Exception hierarchy for resume generation and CV scoring.
"""

from typing import Any


class ResumeStudioError(Exception):
    """Base exception for all resume_studio errors."""

    error_code = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code or self.error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.message,
            "error_code": self.error_code,
            "details": self.details,
        }


class ConfigurationError(ResumeStudioError):
    """Required provider credentials or settings are missing."""

    error_code = "CONFIGURATION_ERROR"


class ValidationFailure(ResumeStudioError):
    """Input rejected before any external call is made."""

    error_code = "VALIDATION_ERROR"

    def __init__(
        self, message: str, field: str | None = None, details: dict | None = None
    ):
        if field:
            message = f"Validation error for field '{field}': {message}"
        super().__init__(message, self.error_code, details)


class SectionEnhancementFailure(ResumeStudioError):
    """One polish call failed; absorbed by the polisher and recorded."""

    error_code = "SECTION_ENHANCEMENT_FAILED"

    def __init__(self, section: str, message: str):
        self.section = section
        super().__init__(f"{section}: {message}", self.error_code, {"section": section})


class StructuredOutputFailure(ResumeStudioError):
    """No recovery strategy produced usable structured data."""

    error_code = "STRUCTURED_OUTPUT_FAILED"


class RasterizationFailure(ResumeStudioError):
    """A document could not be converted into any page image."""

    error_code = "RASTERIZATION_FAILED"


class RenderingFailure(ResumeStudioError):
    """Headless PDF composition failed."""

    error_code = "RENDERING_FAILED"


class ModelUnavailableError(ResumeStudioError):
    """The requested model does not exist or was decommissioned."""

    error_code = "MODEL_UNAVAILABLE"

    def __init__(self, model: str, message: str | None = None):
        self.model = model
        super().__init__(
            message or f"Model '{model}' is unavailable", self.error_code, {"model": model}
        )
