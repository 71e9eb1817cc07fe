from __future__ import annotations

import errno
import random
import socket
import time
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

import httplib2
from googleapiclient.errors import HttpError

from legaldoc import logger as logger_mod

log = logger_mod.get_logger()

T = TypeVar("T")

_TRANSIENT_ERRNOS = {
    errno.ECONNRESET,
    errno.ETIMEDOUT,
    errno.ECONNREFUSED,
    errno.EHOSTUNREACH,
}

_QUOTA_HINTS = ("quota", "rate limit", "ratelimit", "user-rate", "backenderror")


@dataclass(frozen=True)
class RetryConfig:
    """Retry/backoff settings for Google Cloud Storage API calls."""

    max_retries: int = 5
    base_delay_s: float = 1.0
    max_delay_s: float = 32.0

    def __post_init__(self) -> None:
        if self.max_retries < 1:
            object.__setattr__(self, "max_retries", 1)

        if self.base_delay_s < 0:
            object.__setattr__(self, "base_delay_s", 0.0)

        if self.max_delay_s < self.base_delay_s:
            object.__setattr__(self, "max_delay_s", float(self.base_delay_s))


def http_status(error: HttpError) -> Optional[int]:
    return getattr(getattr(error, "resp", None), "status", None)


def is_retryable_http_error(error: HttpError) -> bool:
    """Return True for server errors, throttling, and quota-flavoured 403s."""

    status = http_status(error)

    if isinstance(status, int) and 500 <= status <= 599:
        return True

    if status in (408, 429):
        return True

    if status == 403:
        msg = str(error).lower()
        return any(hint in msg for hint in _QUOTA_HINTS)

    return False


def is_retryable_error(error: Exception) -> bool:
    if isinstance(error, HttpError):
        return is_retryable_http_error(error)

    if isinstance(error, (TimeoutError, socket.timeout, httplib2.HttpLib2Error)):
        return True

    if isinstance(error, OSError):
        return getattr(error, "errno", None) in _TRANSIENT_ERRNOS

    return False


def execute_with_retry(
    fn: Callable[[], T],
    *,
    context: str,
    retry: RetryConfig | None = None,
) -> T:
    """Execute a Google API call with exponential backoff and jitter."""

    retry = retry or RetryConfig()
    delay = retry.base_delay_s

    for attempt in range(1, retry.max_retries + 1):
        try:
            return fn()
        except Exception as e:
            if (not is_retryable_error(e)) or attempt == retry.max_retries:
                log.error(
                    f"❌ Google API error while {context} "
                    f"(attempt {attempt}/{retry.max_retries}): {e}"
                )
                raise

            # jitter in 0.7x–1.3x
            wait = min(retry.max_delay_s, delay) * (0.7 + random.random() * 0.6)
            log.warning(
                f"⚠️ Retryable Google API error while {context}; retrying in {wait:.1f}s "
                f"(attempt {attempt}/{retry.max_retries})"
            )
            time.sleep(wait)
            delay *= 2

    raise RuntimeError(f"Unknown error while {context}")
