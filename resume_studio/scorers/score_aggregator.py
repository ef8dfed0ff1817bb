"""
Turns a vision-model analysis into a complete, weighted ScoreReport.

The model's JSON is treated as advisory: scores are clamped, the total is
recomputed from the fixed weights, and any field the model omitted is filled
with a default so consumers never see a partial report.
"""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Optional

import structlog

from ..config import StudioConfig
from ..exceptions import StructuredOutputFailure
from ..models import (
    CATEGORY_WEIGHTS,
    AIProviders,
    CategoryScore,
    CategoryScores,
    DesignSignals,
    DocumentFormat,
    GrammarCategoryScore,
    GrammarIssue,
    KeywordAnalysis,
    ReadabilityMetrics,
    Recommendations,
    ReportDebug,
    ReportMeta,
    ScoreReport,
    ScoreWeights,
    SectionPresence,
)
from ..parsers import recover_structured

logger = structlog.get_logger()

RAW_SAMPLE_CHARS = 2000
TEXT_SAMPLE_CHARS = 500
MIN_QUICK_WINS = 3
MAX_QUICK_WINS = 6
MAX_KEYWORD_SUGGESTIONS = 10

SECTION_LABELS = {
    "experience": "Experience",
    "education": "Education",
    "skills": "Skills",
    "projects": "Projects",
    "achievements": "Achievements",
    "certifications": "Certifications",
    "contact": "Contact information",
}


def round_half_up(value: Decimal | float) -> int:
    """Round .5 away from zero (``round`` would give banker's rounding)."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def _number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    # NaN compares false against the clamp bounds; inf overflows int()
    return number if math.isfinite(number) else None


def _score(value: Any) -> float:
    number = _number(value)
    return clamp(number) if number is not None else 0.0


def weighted_total(scores: dict[str, float]) -> int:
    """
    Weighted composite of the five category scores.

    Args:
        scores: Category name (snake_case) to score; missing categories count as 0
    """
    total = sum(
        Decimal(str(clamp(scores.get(name, 0.0)))) * weight
        for name, weight in CATEGORY_WEIGHTS.items()
    ) / Decimal(100)
    return int(clamp(round_half_up(total)))


def _pick(data: dict, snake: str) -> Any:
    """Read a key in either camelCase or snake_case."""
    head, *rest = snake.split("_")
    camel = head + "".join(part.title() for part in rest)
    if camel in data:
        return data[camel]
    return data.get(snake)


def _dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _str_list(value: Any) -> list[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return []
    return [str(v).strip() for v in value if v is not None and str(v).strip()]


def _bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"true", "yes", "1"}
    return bool(value)


def _unique(items: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    out = []
    for item in items:
        key = item.lower()
        if key not in seen:
            seen.add(key)
            out.append(item)
    return out


class ScoreAggregator:
    """Builds ScoreReports from raw vision-model output."""

    def __init__(self, config: StudioConfig):
        self.config = config

    def _categories(self, data: dict) -> CategoryScores:
        raw_categories = _dict(_pick(data, "categories"))
        built: dict[str, CategoryScore] = {}
        for name in CATEGORY_WEIGHTS:
            raw = _pick(raw_categories, name)
            if _number(raw) is not None:
                raw = {"score": raw}
            raw = _dict(raw)
            fields = {
                "score": _score(raw.get("score")),
                "reasons": _str_list(raw.get("reasons")),
                "suggestions": _str_list(raw.get("suggestions")),
            }
            if name == "grammar_clarity":
                fields["issues"] = self._issues(raw.get("issues"))
                built[name] = GrammarCategoryScore(**fields)
            else:
                built[name] = CategoryScore(**fields)
        return CategoryScores(**built)

    @staticmethod
    def _issues(value: Any) -> list[GrammarIssue]:
        issues = []
        for item in value if isinstance(value, list) else []:
            item = _dict(item)
            message = str(item.get("message") or "").strip()
            if not message:
                continue
            kind = item.get("type")
            issues.append(
                GrammarIssue(
                    type=kind if kind in {"spelling", "grammar", "clarity", "style"} else "grammar",
                    message=message,
                    example=item.get("example") or None,
                    suggestion=item.get("suggestion") or None,
                )
            )
        return issues

    @staticmethod
    def _sections(data: dict) -> SectionPresence:
        raw = _dict(_pick(data, "sections"))
        return SectionPresence(**{name: _bool(raw.get(name)) for name in SECTION_LABELS})

    @staticmethod
    def _keywords(data: dict) -> KeywordAnalysis:
        raw = _dict(_pick(data, "keywords"))
        present = _unique(_str_list(_pick(raw, "present")))
        missing = _unique(_str_list(_pick(raw, "missing")))
        extracted = _unique(_str_list(_pick(raw, "extracted_keywords"))) or _unique(
            present + missing
        )
        coverage = _number(_pick(raw, "coverage_percent"))
        if coverage is None:
            found = len(present) + len(missing)
            coverage = round(100 * len(present) / found, 1) if found else 0.0
        return KeywordAnalysis(
            extracted_keywords=extracted,
            present=present,
            missing=missing,
            coverage_percent=clamp(coverage),
        )

    @staticmethod
    def _readability(data: dict) -> ReadabilityMetrics:
        raw = _dict(_pick(data, "readability"))
        return ReadabilityMetrics(
            **{name: _number(_pick(raw, name)) for name in ReadabilityMetrics.model_fields}
        )

    @staticmethod
    def _design(data: dict) -> DesignSignals:
        raw = _dict(_pick(data, "design"))
        alignment = str(_pick(raw, "alignment_signals") or "").lower()
        return DesignSignals(
            font_variety=max(0, int(_number(_pick(raw, "font_variety")) or 0)),
            bullet_usage=max(0, int(_number(_pick(raw, "bullet_usage")) or 0)),
            has_consistent_headers=_bool(_pick(raw, "has_consistent_headers")),
            excessive_whitespace=_bool(_pick(raw, "excessive_whitespace")),
            alignment_signals=alignment if alignment in {"good", "mixed", "poor"} else "mixed",
        )

    @staticmethod
    def _recommendations(
        data: dict,
        categories: CategoryScores,
        keywords: KeywordAnalysis,
        sections: SectionPresence,
    ) -> Recommendations:
        raw = _dict(_pick(data, "recommendations"))
        add_keywords = _unique(_str_list(_pick(raw, "add_keywords")))
        if not add_keywords:
            add_keywords = keywords.missing[:MAX_KEYWORD_SUGGESTIONS]

        quick_wins = _unique(_str_list(_pick(raw, "quick_wins")))
        if len(quick_wins) < MIN_QUICK_WINS:
            # Weakest categories first
            ranked = sorted(
                (getattr(categories, name) for name in CATEGORY_WEIGHTS),
                key=lambda c: c.score,
            )
            synthesized = [c.suggestions[0] for c in ranked if c.suggestions]
            synthesized += [
                f"Add missing keyword {kw} to your skills or summary" for kw in keywords.missing
            ]
            quick_wins = _unique(quick_wins + synthesized)[:MAX_QUICK_WINS]

        add_sections = _unique(_str_list(_pick(raw, "add_sections")))
        if not add_sections:
            add_sections = [
                label for name, label in SECTION_LABELS.items() if not getattr(sections, name)
            ]

        return Recommendations(
            quick_wins=quick_wins,
            add_keywords=add_keywords,
            add_sections=add_sections,
            bullet_examples=_str_list(_pick(raw, "bullet_examples")),
        )

    def aggregate(
        self,
        raw_response: str,
        *,
        input_type: DocumentFormat,
        file_name: Optional[str] = None,
        image_count: int = 0,
        vision_provider: str = "none",
        models_tried: Optional[list[str]] = None,
        processing_ms: Optional[int] = None,
    ) -> ScoreReport:
        """
        Build a complete report from one model response.

        Raises:
            StructuredOutputFailure: no JSON object could be recovered
        """
        result = recover_structured(
            raw_response, expect="object", label="extractedText", allow_empty=True
        )
        if not isinstance(result.value, dict):
            raise StructuredOutputFailure(
                "Vision model response contained no parseable JSON object",
                details={"sample": (raw_response or "")[:200]},
            )
        data = result.value
        log = logger.bind(strategy=result.strategy, input_type=input_type.value)

        categories = self._categories(data)
        sections = self._sections(data)
        keywords = self._keywords(data)
        total = weighted_total(
            {name: getattr(categories, name).score for name in CATEGORY_WEIGHTS}
        )
        reported = _number(_pick(data, "total"))
        if reported is not None and round_half_up(clamp(reported)) != total:
            log.info("Replacing model-reported total", reported=reported, total=total)

        extracted_text = str(_pick(data, "extracted_text") or "")
        raw = raw_response or ""
        sample = raw if len(raw) <= RAW_SAMPLE_CHARS else raw[:RAW_SAMPLE_CHARS] + "…"

        return ScoreReport(
            total=total,
            weights=ScoreWeights(),
            input_type=input_type,
            file_name=file_name,
            extracted_text=extracted_text,
            sections=sections,
            keywords=keywords,
            readability=self._readability(data),
            design=self._design(data),
            recommendations=self._recommendations(data, categories, keywords, sections),
            categories=categories,
            meta=ReportMeta(
                created_at=self.config.timestamp,
                ai_providers=AIProviders(grammar="none", vision=vision_provider),
                processing_ms=processing_ms,
                debug=ReportDebug(
                    extracted_text_sample=extracted_text[:TEXT_SAMPLE_CHARS] or None,
                    ai_response_raw=sample,
                    image_count=image_count,
                    models_tried=list(models_tried or []),
                ),
            ),
        )
