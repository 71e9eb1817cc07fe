from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, TypeVar

from legaldoc import config
from legaldoc import logger as logger_mod

from .errors import LLMError, LLMRequestError

log = logger_mod.get_logger()

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """Retry settings for text service calls.

    The delay is fixed between attempts unless `backoff` is raised above 1.0.
    """

    max_attempts: int = 3
    delay_s: float = 1.0
    backoff: float = 1.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            object.__setattr__(self, "max_attempts", 1)

        if self.delay_s < 0:
            object.__setattr__(self, "delay_s", 0.0)

        if self.backoff < 1.0:
            object.__setattr__(self, "backoff", 1.0)

    @classmethod
    def from_config(cls) -> "RetryPolicy":
        return cls(
            max_attempts=config.LLM_MAX_ATTEMPTS, delay_s=config.LLM_RETRY_DELAY_S
        )


def call_with_retry(
    fn: Callable[[], T],
    *,
    context: str,
    retry: RetryPolicy | None = None,
) -> T:
    """Run a single text service call, retrying transient failures.

    Only `fn` itself is re-run; the caller's chunking and merging are not
    re-entered. After the last attempt the final error is re-raised.
    """

    retry = retry or RetryPolicy()
    delay = retry.delay_s

    for attempt in range(1, retry.max_attempts + 1):
        try:
            return fn()

        except LLMRequestError as e:
            if (not e.retryable) or attempt == retry.max_attempts:
                log.error(
                    f"❌ LLM call failed while {context} "
                    f"(attempt {attempt}/{retry.max_attempts}): {e}"
                )
                raise

            log.warning(
                f"⚠️ LLM call failed while {context} "
                f"(attempt {attempt}/{retry.max_attempts}): {e}; "
                f"retrying in {delay:.1f}s"
            )
            time.sleep(delay)
            delay *= retry.backoff

    # Unreachable: max_attempts is clamped to at least 1
    raise LLMError(f"No attempts were made while {context}")
