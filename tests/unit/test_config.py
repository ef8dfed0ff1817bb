"""
Unit tests for environment-driven configuration and provider resolution.
"""

import pytest

from resume_studio.config import DEFAULT_VISION_MODELS, StudioConfig
from resume_studio.exceptions import ConfigurationError
from resume_studio.models import Provider


@pytest.mark.unit
def test_defaults_from_empty_environment(clean_env):
    config = StudioConfig.from_env()

    assert config.provider is Provider.AUTO
    assert config.llm_timeout_s == 60
    assert config.render_timeout_s == 30
    assert config.pdf_backend == "chromium"
    assert config.default_template_style == "classic"


@pytest.mark.unit
def test_environment_values_are_read(clean_env):
    clean_env.setenv("AI_PROVIDER", " Groq ")
    clean_env.setenv("GROQ_API_KEY", "gsk-test")
    clean_env.setenv("LLM_TIMEOUT_S", "12.5")
    clean_env.setenv("PDF_BACKEND", "WeasyPrint")
    clean_env.setenv("TIMEZONE", "Europe/London")

    config = StudioConfig.from_env()

    assert config.provider is Provider.GROQ
    assert config.groq_api_key == "gsk-test"
    assert config.llm_timeout_s == 12.5
    assert config.pdf_backend == "weasyprint"
    assert config.now.tzinfo.zone == "Europe/London"


@pytest.mark.unit
def test_overrides_win_and_none_is_ignored(clean_env):
    clean_env.setenv("AI_PROVIDER", "openai")

    config = StudioConfig.from_env(provider="gemini", vision_model=None)

    assert config.provider is Provider.GEMINI
    assert config.vision_model is None


@pytest.mark.unit
@pytest.mark.parametrize(
    "name, value",
    [("LLM_TIMEOUT_S", "soon"), ("LLM_TIMEOUT_S", "0"), ("TIMEZONE", "Mars/Olympus")],
)
def test_invalid_environment_raises_configuration_error(clean_env, name, value):
    clean_env.setenv(name, value)

    with pytest.raises(ConfigurationError):
        StudioConfig.from_env()


@pytest.mark.unit
def test_auto_prefers_groq_then_openai_then_gemini():
    everything = StudioConfig(openai_api_key="o", google_api_key="g", groq_api_key="q")
    no_groq = StudioConfig(openai_api_key="o", google_api_key="g")
    gemini_only = StudioConfig(google_api_key="g")

    assert everything.resolve_provider() is Provider.GROQ
    assert no_groq.resolve_provider() is Provider.OPENAI
    assert gemini_only.resolve_provider() is Provider.GEMINI


@pytest.mark.unit
def test_auto_without_credentials_fails_fast():
    with pytest.raises(ConfigurationError, match="No AI provider configured"):
        StudioConfig().resolve_provider()


@pytest.mark.unit
def test_explicit_provider_is_not_resolved_from_keys():
    config = StudioConfig(groq_api_key="q")

    assert config.resolve_provider(Provider.OPENAI) is Provider.OPENAI


@pytest.mark.unit
def test_require_api_key_names_the_variable():
    config = StudioConfig(openai_api_key="  ")

    with pytest.raises(ConfigurationError, match="OPENAI_API_KEY not found"):
        config.require_api_key(Provider.OPENAI)


@pytest.mark.unit
def test_vision_models_configured_first_without_duplicates():
    custom = StudioConfig(vision_model="custom-vision")
    same = StudioConfig(vision_model=DEFAULT_VISION_MODELS[Provider.GROQ])

    assert custom.vision_models_for(Provider.GROQ) == [
        "custom-vision",
        DEFAULT_VISION_MODELS[Provider.GROQ],
    ]
    assert same.vision_models_for(Provider.GROQ) == [DEFAULT_VISION_MODELS[Provider.GROQ]]


@pytest.mark.unit
def test_model_for_uses_configured_model():
    config = StudioConfig(groq_model="llama-3.3-70b-versatile")

    assert config.model_for(Provider.GROQ) == "llama-3.3-70b-versatile"
    assert config.model_for(Provider.OPENAI) == "gpt-4o-mini"
