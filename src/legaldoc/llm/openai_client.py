from __future__ import annotations

import os
from typing import Any

from legaldoc import logger as logger_mod

from .base import NO_TEXT_PLACEHOLDER, LLMConfig, TextServiceClient
from .errors import LLMError, LLMRequestError

log = logger_mod.get_logger()


class OpenAIClient(TextServiceClient):
    """OpenAI Responses API wrapper with the same contract as GeminiClient."""

    def __init__(self, cfg: LLMConfig, *, client: Any = None):
        self._cfg = cfg

        if client is None:
            key_env = cfg.api_key_env or "OPENAI_API_KEY"
            api_key = os.getenv(key_env)
            if not api_key:
                raise LLMError(f"Missing env var {key_env} for OpenAI API key")

            try:
                from openai import OpenAI  # type: ignore
            except Exception as e:  # noqa: BLE001
                raise LLMError(
                    "openai SDK not installed. Install legaldoc with the openai extra."
                ) from e

            client = OpenAI(api_key=api_key)

        self._client = client

    def _extract_output_text(self, resp: Any) -> str:
        # Newer SDKs expose output_text
        text = getattr(resp, "output_text", None)
        if isinstance(text, str) and text.strip():
            return text.strip()

        collected: list[str] = []
        for item in getattr(resp, "output", []) or []:
            for c in getattr(item, "content", []) or []:
                if getattr(c, "type", None) in ("output_text", "text"):
                    t = getattr(c, "text", None)
                    if isinstance(t, str):
                        collected.append(t)
        return "".join(collected).strip()

    def complete(self, prompt: str) -> str:
        try:
            resp = self._client.responses.create(
                model=self._cfg.model,
                input=prompt,
                timeout=self._cfg.timeout_s,
            )
        except Exception as e:  # noqa: BLE001
            status = getattr(e, "status_code", None)
            raise LLMRequestError(f"OpenAI request failed: {e}", status=status) from e

        text = self._extract_output_text(resp)
        if not text:
            log.warning("OpenAI response contained no text; returning placeholder")
            return NO_TEXT_PLACEHOLDER
        return text
