"""
Data models for resume generation and CV scoring.

Field names are snake_case in Python and camelCase on the wire, so the
records produced by the profile store and the JSON schema given to the
vision model can be validated directly.
"""

import base64
import re
from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StringConstraints,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

_MONTH_DATE = re.compile(r"^(\d{4}-(0[1-9]|1[0-2]))(-\d{2})?$")


class CamelModel(BaseModel):
    """Base model accepting both snake_case names and camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FrozenCamelModel(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )


def _normalize_month(value: Any) -> str | None:
    """Accept YYYY-MM or YYYY-MM-DD; store YYYY-MM so dates compare lexically."""
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    match = _MONTH_DATE.match(text)
    if not match:
        raise ValueError(f"date must be in YYYY-MM format, got '{text}'")
    return match.group(1)


MonthDate = Annotated[str | None, BeforeValidator(_normalize_month)]


# --- Canonical (user-authored) resume ---


class PersonalInfo(FrozenCamelModel):
    """Header and contact information."""

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    title: str = ""
    summary: str = ""
    linkedin: str | None = None
    website: str | None = None

    @property
    def full_name(self) -> str:
        return " ".join(
            part[:1].upper() + part[1:]
            for part in (self.first_name.strip(), self.last_name.strip())
            if part
        )


class EducationEntry(FrozenCamelModel):
    institution: NonEmptyStr
    degree: str = ""
    field: str = ""
    start_date: MonthDate = None
    end_date: MonthDate = None
    gpa: str | None = None
    description: str | None = None


class WorkExperienceEntry(FrozenCamelModel):
    company: NonEmptyStr
    position: str = ""
    start_date: MonthDate = None
    end_date: MonthDate = None
    description: str = ""
    location: str | None = None
    current: bool = False


class Skill(FrozenCamelModel):
    name: NonEmptyStr
    level: str | None = None
    category: str | None = None


class Project(FrozenCamelModel):
    name: NonEmptyStr
    description: str | None = None
    link: str | None = None
    technologies: list[str] = Field(default_factory=list)
    start_date: MonthDate = None
    end_date: MonthDate = None

    @field_validator("technologies", mode="before")
    @classmethod
    def split_technologies(cls, v: Any) -> list[str]:
        """Accept a comma-separated string as well as a list."""
        if v is None:
            return []
        if isinstance(v, str):
            return [t.strip() for t in v.split(",") if t.strip()]
        return [str(t).strip() for t in v if str(t).strip()]


class Achievement(FrozenCamelModel):
    title: NonEmptyStr
    description: str | None = None
    date: str | None = None


class CanonicalResume(FrozenCamelModel):
    """
    User-authored resume record, immutable input to generation.

    Supplied per request by the profile store; never mutated.
    """

    personal_info: PersonalInfo
    education: list[EducationEntry] = Field(default_factory=list)
    work_experience: list[WorkExperienceEntry] = Field(default_factory=list)
    skills: list[Skill] = Field(default_factory=list)
    projects: list[Project] = Field(default_factory=list)
    achievements: list[Achievement] = Field(default_factory=list)
    template_style: str | None = None


# --- Polished resume ---


class Provider(str, Enum):
    """Language-model backends the polisher and scorer can talk to."""

    AUTO = "auto"
    OPENAI = "openai"
    GEMINI = "gemini"
    GROQ = "groq"


class Provenance(CamelModel):
    """Which provider/model produced a polish and which sections failed."""

    provider: str
    model: str | None = None
    polished_at: str
    errors: list[str] = Field(default_factory=list)


class PolishedResume(CamelModel):
    """
    Canonical resume plus optional per-section enhancements.

    A missing enhancement never hides the original content: the renderer
    falls back to ``source`` for every section.
    """

    source: CanonicalResume
    summary: str | None = None
    experience_bullets: dict[int, list[str]] = Field(default_factory=dict)
    education_bullets: dict[int, list[str]] = Field(default_factory=dict)
    skills_line: str | None = None
    achievements_polished: list[str] = Field(default_factory=list)
    projects_polished: list[str] = Field(default_factory=list)
    provenance: Provenance

    @model_validator(mode="after")
    def drop_unbacked_enhancements(self) -> "PolishedResume":
        # Never fabricate sections or entries absent from the input
        if not self.source.achievements:
            self.achievements_polished = []
        if not self.source.projects:
            self.projects_polished = []
        n_work = len(self.source.work_experience)
        n_edu = len(self.source.education)
        self.experience_bullets = {
            i: b for i, b in self.experience_bullets.items() if 0 <= i < n_work and b
        }
        self.education_bullets = {
            i: b for i, b in self.education_bullets.items() if 0 <= i < n_edu and b
        }
        return self

    @classmethod
    def unpolished(cls, source: CanonicalResume, provenance: Provenance) -> "PolishedResume":
        return cls(source=source, provenance=provenance)


class RenderStyle(str, Enum):
    """Layout variant used by the template renderer."""

    CLASSIC = "classic"
    MODERN = "modern"
    MINIMAL = "minimal"
    ELEGANT = "elegant"
    COMPACT = "compact"
    CREATIVE = "creative"

    @classmethod
    def from_tag(cls, tag: "str | RenderStyle | None") -> "RenderStyle":
        if isinstance(tag, RenderStyle):
            return tag
        try:
            return cls((tag or "").strip().lower())
        except ValueError:
            return cls.CLASSIC


# --- Rasterized document ---


class DocumentFormat(str, Enum):
    PDF = "pdf"
    DOCX = "docx"
    TEXT = "text"


class RasterizedDocument(BaseModel):
    """Ordered page images of one uploaded document."""

    images: list[bytes] = Field(min_length=1)
    source_format: DocumentFormat
    file_name: str | None = None
    mime_type: str = "image/png"

    @property
    def data_urls(self) -> list[str]:
        return [
            f"data:{self.mime_type};base64,{base64.b64encode(img).decode('ascii')}"
            for img in self.images
        ]

    @property
    def page_count(self) -> int:
        return len(self.images)


# --- Score report ---


class ScoreWeights(CamelModel):
    """Fixed category weights; they sum to 100."""

    keyword_match: int = 25
    structure_formatting: int = 15
    grammar_clarity: int = 15
    experience_relevance: int = 20
    design_layout: int = 25


CATEGORY_WEIGHTS: dict[str, int] = ScoreWeights().model_dump()


class SectionPresence(CamelModel):
    experience: bool = False
    education: bool = False
    skills: bool = False
    projects: bool = False
    achievements: bool = False
    certifications: bool = False
    contact: bool = False


class KeywordAnalysis(CamelModel):
    extracted_keywords: list[str] = Field(default_factory=list)
    present: list[str] = Field(default_factory=list)
    missing: list[str] = Field(default_factory=list)
    coverage_percent: float = 0.0


class ReadabilityMetrics(CamelModel):
    """Readability numbers; ``None`` when the model could not infer one."""

    flesch_kincaid_grade: float | None = None
    coleman_liau_index: float | None = None
    reading_ease: float | None = None
    avg_sentence_length: float | None = None
    complex_sentence_ratio: float | None = None


class CategoryScore(CamelModel):
    score: float = Field(default=0.0, ge=0.0, le=100.0)
    reasons: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)


class GrammarIssue(CamelModel):
    type: Literal["spelling", "grammar", "clarity", "style"] = "grammar"
    message: str
    example: str | None = None
    suggestion: str | None = None


class GrammarCategoryScore(CategoryScore):
    issues: list[GrammarIssue] = Field(default_factory=list)


class CategoryScores(CamelModel):
    keyword_match: CategoryScore = Field(default_factory=CategoryScore)
    structure_formatting: CategoryScore = Field(default_factory=CategoryScore)
    grammar_clarity: GrammarCategoryScore = Field(default_factory=GrammarCategoryScore)
    experience_relevance: CategoryScore = Field(default_factory=CategoryScore)
    design_layout: CategoryScore = Field(default_factory=CategoryScore)


class DesignSignals(CamelModel):
    font_variety: int = 0
    bullet_usage: int = 0
    has_consistent_headers: bool = False
    excessive_whitespace: bool = False
    alignment_signals: Literal["good", "mixed", "poor"] = "mixed"


class Recommendations(CamelModel):
    quick_wins: list[str] = Field(default_factory=list)
    add_keywords: list[str] = Field(default_factory=list)
    add_sections: list[str] = Field(default_factory=list)
    bullet_examples: list[str] = Field(default_factory=list)


class AIProviders(CamelModel):
    grammar: str = "none"
    vision: str = "none"


class ReportDebug(CamelModel):
    extracted_text_sample: str | None = None
    ai_response_raw: str | None = None
    image_count: int = 0
    models_tried: list[str] = Field(default_factory=list)


class ReportMeta(CamelModel):
    created_at: str
    ai_providers: AIProviders = Field(default_factory=AIProviders)
    processing_ms: int | None = None
    debug: ReportDebug = Field(default_factory=ReportDebug)


class ScoreReport(CamelModel):
    """
    Weighted composite CV score.

    ``total`` is always recomputed from the category scores and the fixed
    weights; a total reported by the model is never trusted.
    """

    total: int = Field(ge=0, le=100)
    weights: ScoreWeights = Field(default_factory=ScoreWeights)
    input_type: DocumentFormat
    file_name: str | None = None
    extracted_text: str = ""
    sections: SectionPresence = Field(default_factory=SectionPresence)
    keywords: KeywordAnalysis = Field(default_factory=KeywordAnalysis)
    readability: ReadabilityMetrics = Field(default_factory=ReadabilityMetrics)
    design: DesignSignals = Field(default_factory=DesignSignals)
    recommendations: Recommendations = Field(default_factory=Recommendations)
    categories: CategoryScores = Field(default_factory=CategoryScores)
    meta: ReportMeta


class GenerationDebug(CamelModel):
    """Debug-mode result of generation: the polish and timings, no PDF."""

    polished: PolishedResume
    style: RenderStyle
    timings_ms: dict[str, int] = Field(default_factory=dict)
    html_length: int = 0
