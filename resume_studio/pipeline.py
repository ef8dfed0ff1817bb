"""
Resume generation and CV scoring orchestrators.
"""

import time
from typing import Any, Callable, Optional, Union

import structlog
from pydantic import ValidationError

from .compilers import get_compiler
from .config import StudioConfig
from .exceptions import ValidationFailure
from .models import (
    CanonicalResume,
    GenerationDebug,
    Provider,
    RenderStyle,
    ScoreReport,
)
from .polishers import ContentPolisher
from .providers import ModelClient
from .rasterizers import DocumentRasterizer
from .scorers import ScoreAggregator, VisionScorer
from .templates import render_resume

logger = structlog.get_logger()

ClientFactory = Callable[[StudioConfig, Optional[Provider], Optional[str]], ModelClient]


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


def load_resume(data: Union[CanonicalResume, dict[str, Any]]) -> CanonicalResume:
    """
    Validate a resume record.

    Raises:
        ValidationFailure: malformed record (missing identifying fields, bad dates)
    """
    if isinstance(data, CanonicalResume):
        return data
    try:
        return CanonicalResume.model_validate(data)
    except ValidationError as e:
        errors = [
            {"loc": ".".join(str(p) for p in err["loc"]), "msg": err["msg"]}
            for err in e.errors()
        ]
        raise ValidationFailure(
            f"Invalid resume record ({len(errors)} error(s))", details={"errors": errors}
        ) from e


class ResumeGenerator:
    """Polish, render and compile a resume to PDF."""

    def __init__(
        self,
        config: Optional[StudioConfig] = None,
        client_factory: Optional[ClientFactory] = None,
        compiler: Any = None,
    ):
        self.config = config or StudioConfig.from_env()
        self.client_factory = client_factory or (
            lambda cfg, provider, model: ModelClient.from_config(cfg, provider, model)
        )
        self.compiler = compiler or get_compiler(self.config)

    def resolve_style(
        self, resume: CanonicalResume, style: "RenderStyle | str | None" = None
    ) -> RenderStyle:
        """Explicit style, else the resume's own tag, else the configured default."""
        return RenderStyle.from_tag(
            style or resume.template_style or self.config.default_template_style
        )

    async def generate(
        self,
        resume: Union[CanonicalResume, dict[str, Any]],
        provider: Optional[Provider] = None,
        model: Optional[str] = None,
        style: "RenderStyle | str | None" = None,
        debug: bool = False,
    ) -> Union[bytes, GenerationDebug]:
        """
        Generate a resume PDF.

        Args:
            resume: Canonical resume (or its JSON-compatible dict)
            provider: Provider override; defaults to configuration
            model: Model override; defaults to the provider's configured model
            style: Layout override
            debug: Return the polish, timings and HTML length instead of a PDF

        Returns:
            PDF bytes, or GenerationDebug when ``debug`` is set
        """
        canonical = load_resume(resume)
        render_style = self.resolve_style(canonical, style)
        timings: dict[str, int] = {}

        client = self.client_factory(self.config, provider, model)
        log = logger.bind(provider=client.provider.value, model=client.model, style=render_style.value)

        start = time.perf_counter()
        polished = await ContentPolisher(client, self.config).polish(canonical)
        timings["polish"] = _elapsed_ms(start)

        start = time.perf_counter()
        html = render_resume(polished, render_style)
        timings["render"] = _elapsed_ms(start)

        if debug:
            log.info("Generation debug result", timings=timings, html_length=len(html))
            return GenerationDebug(
                polished=polished, style=render_style, timings_ms=timings, html_length=len(html)
            )

        start = time.perf_counter()
        pdf = await self.compiler.compile(html)
        timings["pdf"] = _elapsed_ms(start)

        log.info(
            "Resume generated",
            timings=timings,
            failed_sections=len(polished.provenance.errors),
            size=len(pdf),
        )
        return pdf


def _parse_skills(user_skills: Union[str, list[str], None]) -> list[str]:
    if not user_skills:
        return []
    if isinstance(user_skills, str):
        user_skills = user_skills.split(",")
    return [s.strip() for s in user_skills if s and s.strip()]


class ResumeScorer:
    """Rasterize a CV, analyze it with a vision model and aggregate the score."""

    def __init__(
        self,
        config: Optional[StudioConfig] = None,
        rasterizer: Optional[DocumentRasterizer] = None,
        vision_scorer: Optional[VisionScorer] = None,
        aggregator: Optional[ScoreAggregator] = None,
    ):
        self.config = config or StudioConfig.from_env()
        self.rasterizer = rasterizer or DocumentRasterizer(self.config)
        self._vision_scorer = vision_scorer
        self.aggregator = aggregator or ScoreAggregator(self.config)

    @property
    def vision_scorer(self) -> VisionScorer:
        # Built lazily so input validation runs before the credential check
        if self._vision_scorer is None:
            self._vision_scorer = VisionScorer(self.config)
        return self._vision_scorer

    async def score(
        self,
        *,
        job_description: str,
        content: Optional[bytes] = None,
        file_name: Optional[str] = None,
        content_type: Optional[str] = None,
        text: Optional[str] = None,
        user_skills: Union[str, list[str], None] = None,
    ) -> ScoreReport:
        """
        Score a CV against a job description.

        Raises:
            ValidationFailure: missing job description or no input
            ConfigurationError: no vision provider credentials
            RasterizationFailure: document could not be rendered to images
            StructuredOutputFailure: model response was unparseable
        """
        if not job_description or not job_description.strip():
            raise ValidationFailure("Missing job description", field="job_description")
        if content is None and not (text and text.strip()):
            raise ValidationFailure("Provide a file (PDF/DOCX) or text.")

        start = time.perf_counter()
        scorer = self.vision_scorer
        log = logger.bind(provider=scorer.provider.value, file_name=file_name)

        document = await self.rasterizer.rasterize(
            content=content, file_name=file_name, content_type=content_type, text=text
        )
        log.info("Document rasterized", format=document.source_format.value, pages=document.page_count)

        analysis = await scorer.analyze(
            document, job_description.strip(), _parse_skills(user_skills)
        )

        report = self.aggregator.aggregate(
            analysis.raw,
            input_type=document.source_format,
            file_name=file_name,
            image_count=document.page_count,
            vision_provider=analysis.provider,
            models_tried=analysis.models_tried,
            processing_ms=_elapsed_ms(start),
        )
        log.info("CV scored", total=report.total, processing_ms=report.meta.processing_ms)
        return report
