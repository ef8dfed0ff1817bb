"""
Configuration management for resume generation and CV scoring.
All settings can be controlled via environment variables or a .env file.
"""

import os
from datetime import datetime
from typing import Optional

import pytz
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from .exceptions import ConfigurationError
from .models import Provider

# Provider resolution order for Provider.AUTO
AUTO_PROVIDER_ORDER = (Provider.GROQ, Provider.OPENAI, Provider.GEMINI)

DEFAULT_MODELS = {
    Provider.OPENAI: "gpt-4o-mini",
    Provider.GEMINI: "gemini-1.5-flash",
    Provider.GROQ: "llama-3.1-8b-instant",
}

DEFAULT_VISION_MODELS = {
    Provider.OPENAI: "gpt-4o-mini",
    Provider.GEMINI: "gemini-1.5-flash",
    Provider.GROQ: "meta-llama/llama-4-scout-17b-16e-instruct",
}


class StudioConfig(BaseModel):
    """Configuration for the generation and scoring pipelines."""

    # Text polishing
    provider: Provider = Field(default=Provider.AUTO)
    polish_temperature: float = Field(default=0.5)
    polish_max_tokens: int = Field(default=600)

    # Vision scoring
    vision_provider: Provider = Field(default=Provider.AUTO)
    vision_model: Optional[str] = Field(default=None)
    vision_temperature: float = Field(default=0.1)

    # API Keys
    openai_api_key: Optional[str] = Field(default=None)
    google_api_key: Optional[str] = Field(default=None)
    groq_api_key: Optional[str] = Field(default=None)

    # Per-provider default models
    openai_model: str = Field(default=DEFAULT_MODELS[Provider.OPENAI])
    gemini_model: str = Field(default=DEFAULT_MODELS[Provider.GEMINI])
    groq_model: str = Field(default=DEFAULT_MODELS[Provider.GROQ])

    # Timeouts (seconds)
    llm_timeout_s: float = Field(default=60.0, gt=0)
    render_timeout_s: float = Field(default=30.0, gt=0)
    llm_max_retries: int = Field(default=2, ge=0)

    # Rendering
    pdf_backend: str = Field(default="chromium")  # 'chromium' or 'weasyprint'
    chromium_executable_path: Optional[str] = Field(default=None)
    pdfjs_version: str = Field(default="3.11.174")
    default_template_style: str = Field(default="classic")

    # Timezone
    timezone_str: str = Field(default="UTC")

    @field_validator("timezone_str")
    @classmethod
    def known_timezone(cls, v: str) -> str:
        try:
            pytz.timezone(v)
        except pytz.UnknownTimeZoneError as e:
            raise ValueError(f"unknown timezone '{v}'") from e
        return v

    @classmethod
    def from_env(cls, **overrides) -> "StudioConfig":
        """Create configuration from environment variables."""
        load_dotenv()

        try:
            return cls(**cls._env_values(overrides))
        except ValueError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    @staticmethod
    def _env_values(overrides: dict) -> dict:
        config_dict = {
            "provider": os.getenv("AI_PROVIDER", "auto").strip().lower(),
            "polish_temperature": float(os.getenv("POLISH_TEMPERATURE", "0.5")),
            "polish_max_tokens": int(os.getenv("POLISH_MAX_TOKENS", "600")),
            "vision_provider": os.getenv("VISION_PROVIDER", "auto").strip().lower(),
            "vision_model": os.getenv("VISION_MODEL") or None,
            "vision_temperature": float(os.getenv("VISION_TEMPERATURE", "0.1")),
            # API Keys
            "openai_api_key": os.getenv("OPENAI_API_KEY") or None,
            "google_api_key": os.getenv("GOOGLE_API_KEY") or None,
            "groq_api_key": os.getenv("GROQ_API_KEY") or None,
            # Models
            "openai_model": os.getenv("OPENAI_MODEL", DEFAULT_MODELS[Provider.OPENAI]),
            "gemini_model": os.getenv("GEMINI_MODEL", DEFAULT_MODELS[Provider.GEMINI]),
            "groq_model": os.getenv("GROQ_MODEL", DEFAULT_MODELS[Provider.GROQ]),
            # Timeouts
            "llm_timeout_s": float(os.getenv("LLM_TIMEOUT_S", "60")),
            "render_timeout_s": float(os.getenv("RENDER_TIMEOUT_S", "30")),
            "llm_max_retries": int(os.getenv("LLM_MAX_RETRIES", "2")),
            # Rendering
            "pdf_backend": os.getenv("PDF_BACKEND", "chromium").strip().lower(),
            "chromium_executable_path": os.getenv("CHROMIUM_EXECUTABLE_PATH") or None,
            "pdfjs_version": os.getenv("PDFJS_VERSION", "3.11.174"),
            "default_template_style": os.getenv("DEFAULT_TEMPLATE_STYLE", "classic"),
            "timezone_str": os.getenv("TIMEZONE", "UTC"),
        }
        if overrides:
            clean_overrides = {k: v for k, v in overrides.items() if v is not None}
            config_dict.update(clean_overrides)
        return config_dict

    @property
    def timezone(self) -> pytz.BaseTzInfo:
        """Get timezone object."""
        return pytz.timezone(self.timezone_str)

    @property
    def now(self) -> datetime:
        """Get current time in configured timezone."""
        return datetime.now(self.timezone)

    @property
    def timestamp(self) -> str:
        """ISO-8601 timestamp used for provenance stamps."""
        return self.now.isoformat()

    def api_key_for(self, provider: Provider) -> Optional[str]:
        return {
            Provider.OPENAI: self.openai_api_key,
            Provider.GEMINI: self.google_api_key,
            Provider.GROQ: self.groq_api_key,
        }.get(provider)

    def require_api_key(self, provider: Provider) -> str:
        """Return the provider's key or fail fast; missing credentials never retry."""
        key = (self.api_key_for(provider) or "").strip()
        if not key:
            env_name = {
                Provider.OPENAI: "OPENAI_API_KEY",
                Provider.GEMINI: "GOOGLE_API_KEY",
                Provider.GROQ: "GROQ_API_KEY",
            }.get(provider, "API key")
            raise ConfigurationError(
                f"{env_name} not found in environment",
                details={"provider": provider.value},
            )
        return key

    def resolve_provider(self, provider: Optional[Provider] = None) -> Provider:
        """Resolve AUTO to the first provider with credentials configured."""
        provider = Provider(provider or self.provider)
        if provider is not Provider.AUTO:
            return provider
        for candidate in AUTO_PROVIDER_ORDER:
            if self.api_key_for(candidate):
                return candidate
        raise ConfigurationError(
            "No AI provider configured. Set GROQ_API_KEY, OPENAI_API_KEY or GOOGLE_API_KEY"
        )

    def model_for(self, provider: Provider) -> str:
        return {
            Provider.OPENAI: self.openai_model,
            Provider.GEMINI: self.gemini_model,
            Provider.GROQ: self.groq_model,
        }[provider]

    def vision_models_for(self, provider: Provider) -> list[str]:
        """Candidate vision models, configured first, default second, no duplicates."""
        candidates = [self.vision_model, DEFAULT_VISION_MODELS[provider]]
        out: list[str] = []
        for model in candidates:
            if model and model not in out:
                out.append(model)
        return out
