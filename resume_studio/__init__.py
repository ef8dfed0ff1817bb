"""
Resume Studio

AI-assisted resume generation (polish, style, compile to PDF) and
vision-model CV scoring against a job description.
"""

from .config import StudioConfig
from .exceptions import (
    ConfigurationError,
    ModelUnavailableError,
    RasterizationFailure,
    RenderingFailure,
    ResumeStudioError,
    SectionEnhancementFailure,
    StructuredOutputFailure,
    ValidationFailure,
)
from .models import (
    CanonicalResume,
    GenerationDebug,
    PolishedResume,
    Provider,
    RasterizedDocument,
    RenderStyle,
    ScoreReport,
)
from .pipeline import ResumeGenerator, ResumeScorer

__version__ = "1.0.0"

__all__ = [
    "ResumeGenerator",
    "ResumeScorer",
    "StudioConfig",
    "CanonicalResume",
    "GenerationDebug",
    "PolishedResume",
    "Provider",
    "RasterizedDocument",
    "RenderStyle",
    "ScoreReport",
    "ResumeStudioError",
    "ConfigurationError",
    "ModelUnavailableError",
    "RasterizationFailure",
    "RenderingFailure",
    "SectionEnhancementFailure",
    "StructuredOutputFailure",
    "ValidationFailure",
]
