import logging
from typing import Optional

from llm.providers.anthropic_provider import AnthropicProvider
from llm.providers.base import LLMProvider
from llm.providers.mock_provider import MockProvider
from llm.providers.ollama_provider import OllamaProvider
from llm.providers.openai_provider import OpenAIProvider
from spark_ai.config import Settings
from spark_ai.errors import RemoteCallError

logger = logging.getLogger(__name__)


def provider_from_settings(settings: Settings) -> LLMProvider:
    if settings.llm_provider == "anthropic":
        return AnthropicProvider(
            api_key=settings.anthropic_api_key,
            model=settings.anthropic_model,
            base_url=settings.anthropic_base_url,
            timeout_s=settings.llm_timeout_s,
        )
    if settings.llm_provider == "openai":
        return OpenAIProvider(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            base_url=settings.openai_base_url,
            timeout_s=settings.llm_timeout_s,
        )
    if settings.llm_provider == "ollama":
        return OllamaProvider(
            model=settings.ollama_model,
            base_url=settings.ollama_base_url,
            timeout_s=settings.llm_timeout_s,
        )
    return MockProvider()


class LLMClient:
    """Provider-agnostic text completion: one prompt in, one attempt, text out.

    Every provider failure is re-raised as RemoteCallError so callers only
    deal with one error type. Exactly one attempt is made per call.
    """

    def __init__(self, provider: LLMProvider, max_tokens: int = 1024):
        self.provider = provider
        self.max_tokens = max_tokens

    @classmethod
    def from_settings(cls, settings: Settings) -> "LLMClient":
        return cls(provider_from_settings(settings), max_tokens=settings.llm_max_tokens)

    @property
    def provider_name(self) -> str:
        return getattr(self.provider, "name", type(self.provider).__name__)

    def complete(self, prompt: str, max_tokens: Optional[int] = None) -> str:
        budget = max_tokens or self.max_tokens
        try:
            text = self.provider.generate(prompt=prompt, max_tokens=budget)
        except RemoteCallError:
            raise
        except Exception as e:
            raise RemoteCallError(f"{self.provider_name} call failed: {e}") from e

        if not isinstance(text, str):
            raise RemoteCallError(f"{self.provider_name} returned no text")
        logger.debug(f"{self.provider_name} returned {len(text)} characters")
        return text
