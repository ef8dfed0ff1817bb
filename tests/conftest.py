"""
Shared fixtures: a sample profile, a scripted model client and test configuration.
"""

import asyncio
import copy
from pathlib import Path
from typing import Any, Callable, Union

import pytest

from resume_studio.config import StudioConfig
from resume_studio.models import CanonicalResume, Provider
from resume_studio.polishers import prompts

SAMPLE_PROFILE: dict[str, Any] = {
    "personalInfo": {
        "firstName": "ada",
        "lastName": "lovelace",
        "email": "ada@example.com",
        "phone": "+44 20 7946 0000",
        "location": "London",
        "title": "Software Engineer",
        "summary": "Engineer who likes engines.",
        "linkedin": "linkedin.com/in/ada",
    },
    "education": [
        {
            "institution": "University of London",
            "degree": "BSc",
            "field": "Mathematics",
            "startDate": "2010-09",
            "endDate": "2013-06",
            "description": "Focused on analysis. Graduated with honours.",
        }
    ],
    "workExperience": [
        {
            "company": "Acme",
            "position": "Senior Engineer",
            "startDate": "2019-01",
            "current": True,
            "location": "Remote",
            "description": "Led a team. Shipped a product. Reduced costs by 20%.",
        },
        {
            "company": "Globex",
            "position": "Engineer",
            "startDate": "2015-03-01",
            "endDate": "2018-12",
            "description": "Built data pipelines.",
        },
    ],
    "skills": [
        {"name": "Python", "level": "Expert", "category": "Languages"},
        {"name": "SQL", "category": "Languages"},
        {"name": "Docker"},
    ],
    "projects": [
        {
            "name": "Analytical Engine",
            "description": "Designed a general-purpose computer. Wrote the first program.",
            "link": "https://example.com/engine/",
            "technologies": "Brass, Punch cards",
        }
    ],
    "achievements": [
        {"title": "First Programmer", "date": "1843", "description": "Published notes on the engine"}
    ],
}

SECTION_BY_PROMPT = {
    id(prompts.SUMMARY_PROMPT): "summary",
    id(prompts.EXPERIENCE_PROMPT): "experience",
    id(prompts.EDUCATION_PROMPT): "education",
    id(prompts.SKILLS_PROMPT): "skills",
    id(prompts.ACHIEVEMENTS_PROMPT): "achievements",
    id(prompts.PROJECTS_PROMPT): "projects",
}

Response = Union[str, BaseException, Callable[[dict[str, Any]], str]]


class FakeClient:
    """
    Scripted stand-in for ModelClient.

    ``responses`` maps a section name to a string, an exception to raise, or
    a callable receiving the prompt variables.
    """

    def __init__(
        self,
        responses: dict[str, Response],
        provider: Provider = Provider.GROQ,
        model: str = "fake-model",
        delay: float = 0.0,
    ):
        self.responses = responses
        self.provider = provider
        self.model = model
        self.delay = delay
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.active = 0
        self.max_active = 0

    async def complete(self, prompt, variables: dict[str, Any]) -> str:
        section = SECTION_BY_PROMPT[id(prompt)]
        self.calls.append((section, variables))
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            response = self.responses.get(section, "")
            if isinstance(response, BaseException):
                raise response
            if callable(response):
                return response(variables)
            return response
        finally:
            self.active -= 1

    def sections_called(self) -> list[str]:
        return [section for section, _ in self.calls]


GOOD_RESPONSES: dict[str, Response] = {
    "summary": "Here's your summary: Seasoned engineer building reliable systems.",
    "experience": '```json\n["Led migration to the cloud", "Cut costs by 20%"]\n```',
    "education": '["Graduated with honours in Mathematics"]',
    "skills": "Python, SQL, Docker",
    "achievements": '["Published the first algorithm intended for a machine"]',
    "projects": '["Analytical Engine: designed a general-purpose computer"]',
}


@pytest.fixture
def profile() -> dict[str, Any]:
    return copy.deepcopy(SAMPLE_PROFILE)


@pytest.fixture
def resume(profile) -> CanonicalResume:
    return CanonicalResume.model_validate(profile)


@pytest.fixture
def config() -> StudioConfig:
    return StudioConfig(
        provider=Provider.GROQ,
        vision_provider=Provider.GROQ,
        groq_api_key="test-groq-key",
        llm_timeout_s=5,
        render_timeout_s=5,
    )


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient(dict(GOOD_RESPONSES))


@pytest.fixture
def make_client():
    """FakeClient class, for tests that script their own responses."""
    return FakeClient


@pytest.fixture
def good_responses() -> dict[str, Response]:
    return dict(GOOD_RESPONSES)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Remove provider settings from the environment and hide any local .env file."""
    for name in (
        "AI_PROVIDER",
        "VISION_PROVIDER",
        "VISION_MODEL",
        "OPENAI_API_KEY",
        "GOOGLE_API_KEY",
        "GROQ_API_KEY",
        "LLM_TIMEOUT_S",
        "RENDER_TIMEOUT_S",
        "PDF_BACKEND",
        "TIMEZONE",
        "DEFAULT_TEMPLATE_STYLE",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


def _chromium_available() -> bool:
    try:
        from playwright.sync_api import sync_playwright

        with sync_playwright() as pw:
            return Path(pw.chromium.executable_path).exists()
    except Exception:
        return False


def pytest_collection_modifyitems(config, items):
    browser_items = [item for item in items if "browser" in item.keywords]
    if not browser_items or _chromium_available():
        return
    skip = pytest.mark.skip(reason="Playwright Chromium is not installed")
    for item in browser_items:
        item.add_marker(skip)
