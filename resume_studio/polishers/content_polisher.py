"""
Section-by-section resume polishing.

Every logical section gets its own model call. The calls run concurrently and
fail independently: a section whose call raises, times out, or returns
unusable output keeps its original content and is recorded in the
provenance errors.
"""

import asyncio
import json
import re
from typing import Any, Awaitable

import structlog

from ..config import StudioConfig
from ..exceptions import SectionEnhancementFailure
from ..models import CanonicalResume, PolishedResume, Provenance
from ..parsers import recover_structured, strip_code_fences
from ..providers import ModelClient
from . import prompts

logger = structlog.get_logger()

MAX_SUMMARY_WORDS = 70
MAX_EXPERIENCE_BULLETS = 5
MAX_EDUCATION_BULLETS = 3
MAX_ACHIEVEMENTS = 5

_META_PREFIXES = (
    re.compile(r"^here'?s[^:]*:\s*", re.IGNORECASE),
    re.compile(r"^here is[^:]*:\s*", re.IGNORECASE),
    re.compile(r"^the following[^:]*:\s*", re.IGNORECASE),
)
_BULLET_GLYPH = re.compile(r"^\s*(?:[-*•·▪‣◦–]+|\d+[.)](?=\s))\s*")


def strip_commentary(text: str) -> str:
    """Strip fences and leading meta-commentary, collapse whitespace."""
    if not text:
        return ""
    out = strip_code_fences(str(text))
    for prefix in _META_PREFIXES:
        out = prefix.sub("", out)
    return re.sub(r"\s+", " ", out).strip()


def sanitize_summary(text: str) -> str:
    """Cleaned summary capped at MAX_SUMMARY_WORDS words."""
    out = strip_commentary(text)
    if not out:
        return ""
    words = out.split(" ")
    if len(words) > MAX_SUMMARY_WORDS:
        out = " ".join(words[:MAX_SUMMARY_WORDS])
    return out


def _item_text(item: Any) -> str:
    if isinstance(item, dict):
        # e.g. [{"bullet": "..."}]
        for value in item.values():
            if isinstance(value, str) and value.strip():
                return value.strip()
        return ""
    return str(item).strip() if item is not None else ""


def lines_as_bullets(text: str, limit: int) -> list[str]:
    """Non-empty lines with bullet glyphs removed."""
    bullets = []
    for line in strip_code_fences(text).splitlines():
        cleaned = _BULLET_GLYPH.sub("", line).strip()
        if cleaned:
            bullets.append(cleaned)
    return bullets[:limit]


def coerce_bullets(raw: str, limit: int) -> list[str]:
    """
    Turn model output into a bullet list.

    Raises:
        ValueError: output contained no usable bullet
    """
    result = recover_structured(raw, expect="array")
    if isinstance(result.value, list):
        bullets = [text for text in (_item_text(i) for i in result.value) if text][:limit]
    else:
        bullets = lines_as_bullets(raw, limit)
    if not bullets:
        raise ValueError("model returned no usable bullets")
    return bullets


def _to_json(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False)


class ContentPolisher:
    """Polishes a canonical resume through one provider/model."""

    def __init__(self, client: ModelClient, config: StudioConfig):
        self.client = client
        self.config = config

    async def _polish_summary(self, resume: CanonicalResume) -> str:
        info = resume.personal_info
        first = resume.work_experience[0] if resume.work_experience else None
        data = {
            "title": info.title,
            "providedSummary": info.summary,
            "keyExp": (
                {
                    "position": first.position,
                    "company": first.company,
                    "description": first.description,
                }
                if first
                else None
            ),
            "skills": [s.name for s in resume.skills][:10],
        }
        raw = await self.client.complete(prompts.SUMMARY_PROMPT, {"data": _to_json(data)})
        summary = sanitize_summary(raw)
        if not summary:
            raise ValueError("model returned an empty summary")
        return summary

    async def _polish_entry(self, prompt, entry, limit: int) -> list[str]:
        payload = entry.model_dump(by_alias=True, exclude_none=True)
        raw = await self.client.complete(prompt, {"data": _to_json(payload)})
        return coerce_bullets(raw, limit)

    async def _polish_skills(self, resume: CanonicalResume) -> str:
        payload = [s.model_dump(by_alias=True, exclude_none=True) for s in resume.skills]
        raw = await self.client.complete(prompts.SKILLS_PROMPT, {"data": _to_json(payload)})
        result = recover_structured(raw, expect="array")
        if isinstance(result.value, list):
            line = ", ".join(t for t in (_item_text(i) for i in result.value) if t)
        else:
            line = strip_commentary(raw)
        if not line:
            raise ValueError("model returned an empty skills line")
        return line

    async def _polish_list(self, prompt, items: list, limit: int) -> list[str]:
        payload = [i.model_dump(by_alias=True, exclude_none=True) for i in items]
        raw = await self.client.complete(prompt, {"data": _to_json(payload)})
        return coerce_bullets(raw, limit)

    async def polish(self, resume: CanonicalResume) -> PolishedResume:
        """
        Polish every section concurrently.

        Args:
            resume: Canonical resume record

        Returns:
            PolishedResume whose provenance lists the sections that failed
        """
        log = logger.bind(provider=self.client.provider.value, model=self.client.model)

        # (field, entry index, label, call)
        jobs: list[tuple[str, int, str, Awaitable[Any]]] = [
            ("summary", -1, "summary", self._polish_summary(resume))
        ]
        for i, work in enumerate(resume.work_experience):
            jobs.append(
                (
                    "experience",
                    i,
                    f"experience({work.company})",
                    self._polish_entry(prompts.EXPERIENCE_PROMPT, work, MAX_EXPERIENCE_BULLETS),
                )
            )
        for i, edu in enumerate(resume.education):
            jobs.append(
                (
                    "education",
                    i,
                    f"education({edu.institution})",
                    self._polish_entry(prompts.EDUCATION_PROMPT, edu, MAX_EDUCATION_BULLETS),
                )
            )
        if resume.skills:
            jobs.append(("skills", -1, "skills", self._polish_skills(resume)))
        if resume.achievements:
            jobs.append(
                (
                    "achievements",
                    -1,
                    "achievements",
                    self._polish_list(
                        prompts.ACHIEVEMENTS_PROMPT, resume.achievements, MAX_ACHIEVEMENTS
                    ),
                )
            )
        if resume.projects:
            jobs.append(
                (
                    "projects",
                    -1,
                    "projects",
                    self._polish_list(
                        prompts.PROJECTS_PROMPT, resume.projects, len(resume.projects) * 3
                    ),
                )
            )

        log.info("Polishing resume sections", calls=len(jobs))
        results = await asyncio.gather(*(job[3] for job in jobs), return_exceptions=True)

        fields: dict[str, Any] = {
            "experience_bullets": {},
            "education_bullets": {},
        }
        errors: list[str] = []
        for (field, index, label, _), result in zip(jobs, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                failure = SectionEnhancementFailure(label, str(result) or type(result).__name__)
                errors.append(failure.message)
                log.warning("Section enhancement failed", section=label, error=failure.message)
                continue
            if field == "experience":
                fields["experience_bullets"][index] = result
            elif field == "education":
                fields["education_bullets"][index] = result
            elif field == "skills":
                fields["skills_line"] = result
            elif field == "achievements":
                fields["achievements_polished"] = result
            elif field == "projects":
                fields["projects_polished"] = result
            else:
                fields["summary"] = result

        if "skills_line" not in fields and resume.skills:
            fields["skills_line"] = ", ".join(s.name for s in resume.skills)

        provenance = Provenance(
            provider=self.client.provider.value,
            model=self.client.model,
            polished_at=self.config.timestamp,
            errors=errors,
        )
        log.info("Polish complete", failed_sections=len(errors))
        return PolishedResume(source=resume, provenance=provenance, **fields)
