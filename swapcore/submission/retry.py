"""Exponential backoff retry for transient RPC failures.

Only failures that look transient are retried: rate limiting (429),
service unavailable (503), connection resets and timeouts. Everything else
is re-raised on the first attempt.
"""

from __future__ import annotations

import asyncio
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

import httpx
import structlog

from swapcore.constants import (
    DEFAULT_BACKOFF_MULTIPLIER,
    DEFAULT_MAX_RETRIES,
    DEFAULT_RETRY_BASE_DELAY,
    DEFAULT_RETRY_JITTER,
    DEFAULT_RETRY_MAX_DELAY,
)
from swapcore.errors import ErrorKind, SwapCoreError

logger = structlog.get_logger()

T = TypeVar("T")

RETRYABLE_STATUS_CODES = frozenset({429, 503})

RETRYABLE_ERROR_CODES = frozenset(
    {"ECONNRESET", "ECONNREFUSED", "ECONNABORTED", "ETIMEDOUT", "ENOTFOUND"}
)

_RETRYABLE_KINDS = frozenset({ErrorKind.RPC_ERROR, ErrorKind.NETWORK_ERROR})


@dataclass(frozen=True)
class RetryOptions:
    """Retry policy parameters (delays in seconds).

    Attributes:
        max_retries: Retries after the first attempt (total attempts = max_retries + 1)
        base_delay: Delay before the first retry, before jitter
        max_delay: Cap on the delay before jitter
        backoff_multiplier: Growth factor per retry
        jitter: Symmetric random spread as a fraction of the delay
    """

    max_retries: int = DEFAULT_MAX_RETRIES
    base_delay: float = DEFAULT_RETRY_BASE_DELAY
    max_delay: float = DEFAULT_RETRY_MAX_DELAY
    backoff_multiplier: float = DEFAULT_BACKOFF_MULTIPLIER
    jitter: float = DEFAULT_RETRY_JITTER

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {self.max_retries}")
        if self.base_delay < 0 or self.max_delay < 0:
            raise ValueError(
                f"Delays must be >= 0, got base={self.base_delay} max={self.max_delay}"
            )
        if self.backoff_multiplier < 1:
            raise ValueError(f"backoff_multiplier must be >= 1, got {self.backoff_multiplier}")
        if not 0 <= self.jitter < 1:
            raise ValueError(f"jitter must be in [0, 1), got {self.jitter}")

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def backoff(self, retry_index: int) -> float:
        """Delay before retry `retry_index` (0-based), before jitter."""
        return min(self.max_delay, self.base_delay * self.backoff_multiplier**retry_index)


DEFAULT_RETRY_OPTIONS = RetryOptions()


def _status_of(error: BaseException) -> int | None:
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code
    for attr in ("status_code", "status"):
        value = getattr(error, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    response = getattr(error, "response", None)
    value = getattr(response, "status_code", None)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def is_retryable(error: BaseException) -> bool:
    """Whether an error is a transient failure worth retrying."""
    if isinstance(error, SwapCoreError):
        if error.kind in _RETRYABLE_KINDS:
            return True
    elif isinstance(error, httpx.TransportError):
        return True
    elif isinstance(error, (ConnectionResetError, ConnectionRefusedError, TimeoutError)):
        return True

    if _status_of(error) in RETRYABLE_STATUS_CODES:
        return True

    code = getattr(error, "code", None)
    if isinstance(code, str) and code.upper() in RETRYABLE_ERROR_CODES:
        return True

    message = str(error)
    if any(code in message for code in RETRYABLE_ERROR_CODES):
        return True
    lowered = message.lower()
    return "timeout" in lowered or "timed out" in lowered


async def with_retry(
    fn: Callable[[], Awaitable[T]],
    options: RetryOptions = DEFAULT_RETRY_OPTIONS,
    label: str = "rpc",
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    rng: Callable[[], float] = random.random,
) -> T:
    """Run `fn`, retrying transient failures with exponential backoff.

    Args:
        fn: Zero-argument coroutine factory; called once per attempt
        options: Retry policy
        label: Name used in log events
        sleep: Awaitable delay (injectable for tests)
        rng: Uniform [0, 1) source for jitter (injectable for tests)

    Returns:
        The first successful result

    Raises:
        The first non-retryable error, or the last error once attempts are
        exhausted, unchanged.
    """
    for attempt in range(options.max_attempts):
        try:
            return await fn()
        except Exception as err:
            if not is_retryable(err) or attempt == options.max_retries:
                if attempt > 0:
                    logger.debug(
                        "retry_gave_up",
                        label=label,
                        attempts=attempt + 1,
                        retryable=is_retryable(err),
                        error=str(err),
                    )
                raise

            backoff = options.backoff(attempt)
            spread = backoff * options.jitter * (rng() * 2 - 1)
            delay = max(0.0, backoff + spread)
            logger.debug(
                "retry_scheduled",
                label=label,
                attempt=attempt + 1,
                max_retries=options.max_retries,
                delay=round(delay, 3),
                error=str(err),
            )
            await sleep(delay)

    raise AssertionError("unreachable: retry loop exited without returning or raising")


__all__ = [
    "RetryOptions",
    "DEFAULT_RETRY_OPTIONS",
    "RETRYABLE_STATUS_CODES",
    "RETRYABLE_ERROR_CODES",
    "is_retryable",
    "with_retry",
]
