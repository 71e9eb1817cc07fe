from __future__ import annotations

from typing import Optional

from legaldoc.errors import LegalDocError


def is_retryable_status(status: Optional[int]) -> bool:
    """Return True when a failed call with this HTTP status is likely transient.

    `None` means no response was received at all (connection reset, timeout).
    """

    if status is None:
        return True
    return status in (408, 429) or 500 <= status <= 599


class LLMError(LegalDocError):
    kind = "external"


class LLMRequestError(LLMError):
    """A single call to the text service failed."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        retryable: Optional[bool] = None,
    ):
        super().__init__(message)
        self.status = status
        self.retryable = (
            is_retryable_status(status) if retryable is None else retryable
        )


class LLMValidationError(LLMError):
    """Raised when the model output cannot be interpreted as the requested JSON."""

    kind = "malformed_response"

    def __init__(self, message: str, *, raw_text: Optional[str] = None):
        super().__init__(message)
        self.raw_text = raw_text
