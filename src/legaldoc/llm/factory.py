from __future__ import annotations

from typing import Optional

from legaldoc import config

from .base import LLMConfig, TextServiceClient
from .errors import LLMError
from .gemini_client import GeminiClient
from .openai_client import OpenAIClient


def build_llm(
    *, provider: Optional[str] = None, model: Optional[str] = None
) -> TextServiceClient:
    """Factory for text service clients.

    Providers:
    - gemini (default)
    - openai
    """

    p = (provider or config.LLM_PROVIDER).lower().strip()
    if p == "gemini":
        return GeminiClient(
            LLMConfig(
                provider="gemini",
                model=model or config.GEMINI_MODEL,
                api_key_env="GEMINI_API_KEY",
                timeout_s=config.LLM_TIMEOUT_S,
            )
        )
    if p == "openai":
        return OpenAIClient(
            LLMConfig(
                provider="openai",
                model=model or config.OPENAI_MODEL,
                api_key_env="OPENAI_API_KEY",
                timeout_s=config.LLM_TIMEOUT_S,
            )
        )

    raise LLMError(f"Unknown LLM provider: {provider}")
