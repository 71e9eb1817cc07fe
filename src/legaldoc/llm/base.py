from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

# Returned when the service answers successfully but with no text to extract.
NO_TEXT_PLACEHOLDER = "No text returned"


@dataclass(frozen=True)
class LLMConfig:
    provider: str
    model: str
    api_key_env: Optional[str] = None
    timeout_s: float = 60.0


class TextServiceClient(Protocol):
    """One prompt in, one completion out.

    Implementations do no retrying or chunking of their own. Failures are
    raised as `LLMRequestError`.
    """

    def complete(self, prompt: str) -> str:
        raise NotImplementedError
