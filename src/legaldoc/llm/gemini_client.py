from __future__ import annotations

import os
from typing import Any, Optional

import requests

from legaldoc import config
from legaldoc import logger as logger_mod
from legaldoc.google._auth import (
    AuthConfig,
    build_authorized_session,
    load_credentials,
)

from .base import NO_TEXT_PLACEHOLDER, LLMConfig, TextServiceClient
from .errors import LLMRequestError

log = logger_mod.get_logger()


def extract_gemini_text(response_payload: dict[str, Any]) -> Optional[str]:
    """Join the text parts of the first candidate, or None when there are none."""

    candidates = response_payload.get("candidates") or []
    if not candidates or not isinstance(candidates[0], dict):
        return None

    parts = (candidates[0].get("content") or {}).get("parts") or []
    texts = [
        part["text"]
        for part in parts
        if isinstance(part, dict) and isinstance(part.get("text"), str)
    ]
    joined = "".join(texts).strip()
    return joined or None


def _http_error_message(resp: requests.Response) -> str:
    try:
        payload = resp.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
        message = payload["error"].get("message")
        if isinstance(message, str) and message.strip():
            return f"Gemini request failed with HTTP {resp.status_code}: {message.strip()}"

    excerpt = (resp.text or "").strip()[:200]
    if excerpt:
        return f"Gemini request failed with HTTP {resp.status_code}: {excerpt}"
    return f"Gemini request failed with HTTP {resp.status_code}."


class GeminiClient(TextServiceClient):
    """Gemini `generateContent` over REST.

    Credentials are resolved once, at construction. With an API key the
    key is sent as a header; otherwise a service account session is used
    and google-auth refreshes its token as needed.
    """

    def __init__(
        self,
        cfg: LLMConfig,
        *,
        session: Any = None,
        auth: AuthConfig | None = None,
    ):
        self._cfg = cfg
        self._url = config.GEMINI_API_URL.format(model=cfg.model)
        self._headers = {"Content-Type": "application/json"}

        if session is None:
            api_key = os.getenv(cfg.api_key_env) if cfg.api_key_env else None
            if api_key:
                session = requests.Session()
                self._headers["x-goog-api-key"] = api_key
            else:
                creds = load_credentials(
                    auth or AuthConfig(scopes=config.GEMINI_SCOPES)
                )
                session = build_authorized_session(creds)

        self._session = session

    def complete(self, prompt: str) -> str:
        payload = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}

        try:
            resp = self._session.post(
                self._url,
                json=payload,
                headers=self._headers,
                timeout=self._cfg.timeout_s,
            )
        except requests.RequestException as e:
            raise LLMRequestError(
                f"Gemini request failed before receiving a response: {e}"
            ) from e

        if not 200 <= resp.status_code < 300:
            raise LLMRequestError(_http_error_message(resp), status=resp.status_code)

        try:
            data = resp.json()
        except ValueError as e:
            raise LLMRequestError(
                "Gemini returned a response body that is not JSON",
                status=resp.status_code,
                retryable=True,
            ) from e

        if not isinstance(data, dict):
            raise LLMRequestError(
                "Gemini returned an unexpected response shape",
                status=resp.status_code,
                retryable=True,
            )

        text = extract_gemini_text(data)
        if text is None:
            log.warning("Gemini response contained no text; returning placeholder")
            return NO_TEXT_PLACEHOLDER
        return text
