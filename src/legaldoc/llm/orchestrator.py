from __future__ import annotations

from typing import Any, Callable, Optional

from legaldoc import config
from legaldoc import logger as logger_mod
from legaldoc.errors import InputError

from . import prompts
from ._json import parse_json, validate_json
from ._retry import RetryPolicy, call_with_retry
from .base import TextServiceClient
from .chunking import split_into_chunks

log = logger_mod.get_logger()


def _require_text(value: Any, name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InputError(f"{name} must be a non-empty string")
    return value


class DocumentAssistant:
    """Legal document operations on top of a size-limited, failure-prone text service.

    Long inputs to `summarize` and `translate` are split into chunks of at
    most `chunk_size` characters. Each chunk is sent as its own retried call,
    one at a time, in order. The other operations are single retried calls.
    A failure that survives its retries aborts the whole operation.
    """

    def __init__(
        self,
        client: TextServiceClient,
        *,
        chunk_size: Optional[int] = None,
        retry: RetryPolicy | None = None,
    ):
        self._client = client
        self._chunk_size = config.CHUNK_SIZE if chunk_size is None else chunk_size
        if self._chunk_size < 1:
            raise InputError(f"Chunk size must be positive, got {self._chunk_size}")
        self._retry = retry or RetryPolicy.from_config()

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    def _call(self, prompt: str, *, context: str) -> str:
        return call_with_retry(
            lambda: self._client.complete(prompt), context=context, retry=self._retry
        )

    def _call_json(self, prompt: str, schema: dict, *, context: str) -> Any:
        raw = self._call(prompt, context=context)
        data = parse_json(raw)
        validate_json(data, schema, raw_text=raw)
        return data

    def _map_chunks(
        self, text: str, build_prompt: Callable[[str], str], *, action: str
    ) -> list[str]:
        chunks = split_into_chunks(text, self._chunk_size)
        if len(chunks) > 1:
            log.info(
                f"Text of {len(text)} chars exceeds {self._chunk_size}; "
                f"{action} in {len(chunks)} chunks"
            )

        results: list[str] = []
        for chunk in chunks:
            log.debug(f"⏳ {action} chunk {chunk.index + 1}/{len(chunks)}")
            results.append(
                self._call(
                    build_prompt(chunk.text),
                    context=f"{action} chunk {chunk.index + 1}/{len(chunks)}",
                )
            )
        return results

    def summarize(self, text: str) -> str:
        text = _require_text(text, "text")
        partials = self._map_chunks(
            text, lambda t: prompts.SUMMARIZE.format(text=t), action="summarizing"
        )
        if len(partials) == 1:
            return partials[0]

        merge_prompt = prompts.MERGE_SUMMARIES.format(
            count=len(partials), summaries="\n\n".join(partials)
        )
        return self._call(
            merge_prompt, context=f"merging {len(partials)} partial summaries"
        )

    def translate(self, text: str, target_language: str) -> str:
        """Translate text chunk by chunk; translations are joined in chunk order."""

        target_language = _require_text(target_language, "target_language")
        if not isinstance(text, str):
            raise InputError("text must be a string")
        if not text.strip():
            return text

        pieces = self._map_chunks(
            text,
            lambda t: prompts.TRANSLATE.format(language=target_language, text=t),
            action=f"translating to {target_language}",
        )
        return "".join(pieces)

    def ask(self, text: str, question: str) -> str:
        prompt = prompts.ASK.format(
            text=_require_text(text, "text"),
            question=_require_text(question, "question"),
        )
        return self._call(prompt, context="answering question")

    def compare(self, text_a: str, text_b: str) -> str:
        prompt = prompts.COMPARE.format(
            text_a=_require_text(text_a, "text_a"),
            text_b=_require_text(text_b, "text_b"),
        )
        return self._call(prompt, context="comparing documents")

    def extract_key_terms(self, text: str) -> list[dict[str, str]]:
        prompt = prompts.KEY_TERMS.format(text=_require_text(text, "text"))
        return self._call_json(
            prompt, prompts.KEY_TERMS_SCHEMA, context="extracting key terms"
        )

    def identify_issues(self, text: str) -> list[dict[str, str]]:
        prompt = prompts.LEGAL_ISSUES.format(text=_require_text(text, "text"))
        return self._call_json(
            prompt, prompts.LEGAL_ISSUES_SCHEMA, context="identifying legal issues"
        )

    def analyze_clauses(self, text: str) -> list[dict[str, str]]:
        prompt = prompts.CLAUSES.format(text=_require_text(text, "text"))
        return self._call_json(
            prompt, prompts.CLAUSES_SCHEMA, context="analyzing contract clauses"
        )

    def comprehensive_analysis(self, text: str) -> dict[str, Any]:
        prompt = prompts.COMPREHENSIVE.format(text=_require_text(text, "text"))
        return self._call_json(
            prompt,
            prompts.COMPREHENSIVE_SCHEMA,
            context="performing comprehensive analysis",
        )

    def analyze_document(self, text: str) -> dict[str, Any]:
        """Structured review: summary, clauses, risks, obligations and missing elements.

        The result is the shape `legaldoc.transform.translate_analysis` walks.
        """

        prompt = prompts.ANALYZE.format(text=_require_text(text, "text"))
        return self._call_json(
            prompt, prompts.ANALYSIS_SCHEMA, context="analyzing document"
        )
