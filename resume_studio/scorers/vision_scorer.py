"""
Multimodal resume analysis with a vision model fallback chain.
"""

from typing import Callable, Optional

import structlog
from pydantic import BaseModel, Field

from ..config import StudioConfig
from ..exceptions import ModelUnavailableError
from ..models import Provider, RasterizedDocument
from ..providers import ModelClient, create_chat_model
from .prompts import SCORE_SYSTEM_PROMPT, build_user_text

logger = structlog.get_logger()

ClientFactory = Callable[[Provider, str], ModelClient]


class VisionAnalysis(BaseModel):
    """Raw model answer plus which models were attempted."""

    raw: str
    provider: str
    model: str
    models_tried: list[str] = Field(default_factory=list)


class VisionScorer:
    """Sends rasterized pages and the job description to a vision model."""

    def __init__(
        self,
        config: StudioConfig,
        provider: Optional[Provider] = None,
        client_factory: Optional[ClientFactory] = None,
    ):
        self.config = config
        self.provider = config.resolve_provider(provider or config.vision_provider)
        self.client_factory = client_factory or self._default_client

    def _default_client(self, provider: Provider, model: str) -> ModelClient:
        llm = create_chat_model(
            provider, model, self.config, temperature=self.config.vision_temperature
        )
        return ModelClient(llm, provider, model, self.config.llm_timeout_s)

    async def analyze(
        self,
        document: RasterizedDocument,
        job_description: str,
        user_skills: Optional[list[str]] = None,
    ) -> VisionAnalysis:
        """
        Run the analysis, advancing to the next model when one is unavailable.

        Raises:
            ModelUnavailableError: every candidate model was unavailable
            Exception: any other provider error is fatal and propagates
        """
        candidates = self.config.vision_models_for(self.provider)
        text = build_user_text(job_description, user_skills or [])
        tried: list[str] = []
        last_error: Optional[ModelUnavailableError] = None

        for model in candidates:
            tried.append(model)
            log = logger.bind(provider=self.provider.value, model=model)
            client = self.client_factory(self.provider, model)
            try:
                raw = await client.analyze_images(SCORE_SYSTEM_PROMPT, text, document.data_urls)
            except ModelUnavailableError as e:
                log.warning("Vision model unavailable, trying next model", error=e.message)
                last_error = e
                continue
            return VisionAnalysis(
                raw=raw, provider=self.provider.value, model=model, models_tried=tried
            )

        raise ModelUnavailableError(
            tried[-1] if tried else "",
            f"All vision models unavailable ({', '.join(tried)}): "
            f"{last_error.message if last_error else 'no candidates configured'}",
        )
