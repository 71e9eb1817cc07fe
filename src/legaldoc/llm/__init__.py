"""Text service clients and the chunked call orchestrator.

Design goals:
- Keep provider-specific transports isolated behind `TextServiceClient`.
- Retry only the immediate external call; chunking and merging sit above it.
- Validate JSON-returning operations against a schema before handing them back.
"""

from ._retry import RetryPolicy, call_with_retry
from .base import NO_TEXT_PLACEHOLDER, LLMConfig, TextServiceClient
from .chunking import TextChunk, split_into_chunks
from .errors import LLMError, LLMRequestError, LLMValidationError
from .factory import build_llm
from .orchestrator import DocumentAssistant

__all__ = [
    "DocumentAssistant",
    "LLMConfig",
    "LLMError",
    "LLMRequestError",
    "LLMValidationError",
    "NO_TEXT_PLACEHOLDER",
    "RetryPolicy",
    "TextChunk",
    "TextServiceClient",
    "build_llm",
    "call_with_retry",
    "split_into_chunks",
]
