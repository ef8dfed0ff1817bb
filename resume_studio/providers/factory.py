"""
Chat model construction and invocation for the supported providers.
"""

import asyncio
import re
from typing import Any, Optional, Sequence

import structlog
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage
from langchain_core.prompts import ChatPromptTemplate
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_groq import ChatGroq
from langchain_openai import ChatOpenAI

from ..config import StudioConfig
from ..exceptions import ModelUnavailableError
from ..models import Provider

logger = structlog.get_logger()

_MODEL_UNAVAILABLE = re.compile(
    r"model_not_found|model_decommissioned|decommissioned|does not exist|"
    r"is not found|not supported for generatecontent|unknown model|no such model",
    re.IGNORECASE,
)


def is_model_unavailable(exc: BaseException) -> bool:
    """True for provider errors meaning the model id itself is invalid or retired."""
    if type(exc).__name__ in {"NotFoundError", "NotFound"}:
        return True
    return bool(_MODEL_UNAVAILABLE.search(str(exc)))


def create_chat_model(
    provider: Provider,
    model: str,
    config: StudioConfig,
    temperature: float,
    max_tokens: Optional[int] = None,
) -> BaseChatModel:
    """
    Build a LangChain chat model for a concrete provider.

    Raises:
        ConfigurationError: provider credentials are missing
    """
    api_key = config.require_api_key(provider)

    if provider is Provider.GEMINI:
        return ChatGoogleGenerativeAI(
            model=model,
            google_api_key=api_key,
            temperature=temperature,
            max_output_tokens=max_tokens,
            max_retries=config.llm_max_retries,
        )
    if provider is Provider.GROQ:
        return ChatGroq(
            model=model,
            api_key=api_key,
            temperature=temperature,
            max_tokens=max_tokens,
            max_retries=config.llm_max_retries,
        )
    if provider is Provider.OPENAI:
        return ChatOpenAI(
            model=model,
            api_key=api_key,
            temperature=temperature,
            max_tokens=max_tokens,
            max_retries=config.llm_max_retries,
        )
    raise ValueError(f"Unsupported provider: {provider}")


def _content_text(resp: Any) -> str:
    content = resp.content if hasattr(resp, "content") else resp
    if isinstance(content, list):
        # Multi-part responses (Gemini) come back as a list of text blocks
        parts = []
        for part in content:
            if isinstance(part, dict):
                parts.append(str(part.get("text", "")))
            else:
                parts.append(str(part))
        return "".join(parts)
    return str(content or "")


class ModelClient:
    """Async text and vision calls against one provider/model pair."""

    def __init__(self, llm: BaseChatModel, provider: Provider, model: str, timeout_s: float):
        self.llm = llm
        self.provider = provider
        self.model = model
        self.timeout_s = timeout_s

    @classmethod
    def from_config(
        cls,
        config: StudioConfig,
        provider: Optional[Provider] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> "ModelClient":
        resolved = config.resolve_provider(provider)
        model_name = model or config.model_for(resolved)
        llm = create_chat_model(
            resolved,
            model_name,
            config,
            temperature=config.polish_temperature if temperature is None else temperature,
            max_tokens=config.polish_max_tokens if max_tokens is None else max_tokens,
        )
        return cls(llm, resolved, model_name, config.llm_timeout_s)

    async def _ainvoke(self, runnable: Any, payload: Any) -> str:
        try:
            resp = await asyncio.wait_for(runnable.ainvoke(payload), timeout=self.timeout_s)
        except asyncio.TimeoutError as e:
            raise TimeoutError(
                f"{self.provider.value} call timed out after {self.timeout_s:g}s"
            ) from e
        except Exception as e:
            if is_model_unavailable(e):
                raise ModelUnavailableError(self.model, str(e)) from e
            raise
        return _content_text(resp).strip()

    async def complete(self, prompt: ChatPromptTemplate, variables: dict[str, Any]) -> str:
        """Run a prompt template through the model and return the text content."""
        chain = prompt | self.llm
        return await self._ainvoke(chain, variables)

    async def analyze_images(
        self, system: str, text: str, image_urls: Sequence[str]
    ) -> str:
        """Send one multimodal message: instruction text followed by page images."""
        content: list[dict[str, Any]] = [{"type": "text", "text": text}]
        content.extend(
            {"type": "image_url", "image_url": {"url": url}} for url in image_urls
        )
        messages = [SystemMessage(content=system), HumanMessage(content=content)]
        logger.bind(provider=self.provider.value, model=self.model).info(
            "Sending vision request", image_count=len(image_urls)
        )
        return await self._ainvoke(self.llm, messages)
