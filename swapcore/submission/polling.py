"""Transaction confirmation polling.

Probes a submitted transaction's status until it settles, the attempt
budget runs out, or the caller cancels. Waits happen only between
attempts, never after the last one.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

import structlog

from swapcore.constants import (
    DEFAULT_MAX_POLLING_ATTEMPTS,
    DEFAULT_MAX_POLLING_INTERVAL,
    DEFAULT_POLLING_BACKOFF_FACTOR,
    DEFAULT_POLLING_INTERVAL,
)

logger = structlog.get_logger()


class PollingStrategy(str, Enum):
    LINEAR = "LINEAR"  # fixed interval
    EXPONENTIAL = "EXPONENTIAL"  # interval grows by backoff_factor, capped


@dataclass(frozen=True)
class PollingOptions:
    """Polling parameters (intervals in seconds)."""

    strategy: PollingStrategy = PollingStrategy.LINEAR
    interval: float = DEFAULT_POLLING_INTERVAL
    max_attempts: int = DEFAULT_MAX_POLLING_ATTEMPTS
    backoff_factor: float = DEFAULT_POLLING_BACKOFF_FACTOR
    max_interval: float = DEFAULT_MAX_POLLING_INTERVAL

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.backoff_factor < 1:
            raise ValueError(f"backoff_factor must be >= 1, got {self.backoff_factor}")
        if self.interval < 0 or self.max_interval < 0:
            raise ValueError(
                f"Intervals must be >= 0, got interval={self.interval} "
                f"max_interval={self.max_interval}"
            )

    def next_interval(self, current: float) -> float:
        if self.strategy == PollingStrategy.EXPONENTIAL:
            return min(current * self.backoff_factor, self.max_interval)
        return current


DEFAULT_POLLING_OPTIONS = PollingOptions()


class TxStatus(str, Enum):
    """Status reported by a status probe."""

    PENDING = "PENDING"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
    NOT_FOUND = "NOT_FOUND"


@dataclass(frozen=True)
class StatusResponse:
    status: TxStatus | str
    ledger: int | None = None
    raw: Any = field(default=None, compare=False)


class PollOutcome(str, Enum):
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
    TIMED_OUT = "TIMED_OUT"
    CANCELLED = "CANCELLED"


@dataclass(frozen=True)
class PollResult:
    """How polling ended.

    Attributes:
        outcome: Terminal state
        tx_hash: Transaction that was polled
        ledger: Ledger of inclusion (SUCCEEDED only)
        attempts: Number of status probes issued
        detail: Last status response, if any
    """

    outcome: PollOutcome
    tx_hash: str
    ledger: int | None = None
    attempts: int = 0
    detail: StatusResponse | None = None

    @property
    def succeeded(self) -> bool:
        return self.outcome == PollOutcome.SUCCEEDED


class StatusProbe(Protocol):
    """Anything that can report a transaction's status."""

    async def check_status(self, tx_hash: str) -> StatusResponse: ...


def _status_value(response: StatusResponse) -> str:
    status = response.status
    return status.value if isinstance(status, Enum) else str(status).upper()


class TransactionPoller:
    """Polls a status probe with LINEAR or EXPONENTIAL spacing.

    Args:
        probe: Object exposing async check_status(tx_hash)
        sleep: Awaitable delay (injectable for tests)
    """

    def __init__(
        self,
        probe: StatusProbe,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        self._probe = probe
        self._sleep = sleep

    async def _wait(self, delay: float, cancel: asyncio.Event | None) -> bool:
        """Wait between attempts. Returns True if cancelled during the wait."""
        if cancel is None:
            await self._sleep(delay)
            return False
        sleeper = asyncio.ensure_future(self._sleep(delay))
        waiter = asyncio.ensure_future(cancel.wait())
        try:
            done, _ = await asyncio.wait(
                {sleeper, waiter}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            # Also reached when poll() itself is cancelled from outside
            for task in (sleeper, waiter):
                task.cancel()
            await asyncio.gather(sleeper, waiter, return_exceptions=True)
        return waiter in done

    async def poll(
        self,
        tx_hash: str,
        options: PollingOptions = DEFAULT_POLLING_OPTIONS,
        cancel: asyncio.Event | None = None,
    ) -> PollResult:
        """Poll until SUCCESS, FAILED, exhaustion or cancellation.

        PENDING, NOT_FOUND and unrecognized statuses keep polling, as do
        probe exceptions (logged, then treated as pending).

        Args:
            tx_hash: Transaction hash to poll
            options: Polling parameters
            cancel: When set, polling stops before the next probe (or wakes
                from its wait) and returns CANCELLED

        Returns:
            PollResult describing the terminal state
        """
        interval = options.interval
        last: StatusResponse | None = None

        for attempt in range(1, options.max_attempts + 1):
            if cancel is not None and cancel.is_set():
                logger.info("poll_cancelled", tx_hash=tx_hash, attempts=attempt - 1)
                return PollResult(PollOutcome.CANCELLED, tx_hash, attempts=attempt - 1, detail=last)

            logger.debug(
                "poll_attempt",
                tx_hash=tx_hash,
                attempt=attempt,
                strategy=options.strategy.value,
                interval=interval,
            )
            try:
                last = await self._probe.check_status(tx_hash)
            except Exception as err:
                logger.debug("poll_probe_failed", tx_hash=tx_hash, attempt=attempt, error=str(err))
            else:
                status = _status_value(last)
                if status == TxStatus.SUCCESS.value:
                    logger.info("transaction_confirmed", tx_hash=tx_hash, ledger=last.ledger)
                    return PollResult(
                        PollOutcome.SUCCEEDED,
                        tx_hash,
                        ledger=last.ledger if last.ledger is not None else 0,
                        attempts=attempt,
                        detail=last,
                    )
                if status == TxStatus.FAILED.value:
                    logger.error("transaction_failed_on_chain", tx_hash=tx_hash, attempt=attempt)
                    return PollResult(PollOutcome.FAILED, tx_hash, attempts=attempt, detail=last)

            if attempt < options.max_attempts:
                if await self._wait(interval, cancel):
                    logger.info("poll_cancelled", tx_hash=tx_hash, attempts=attempt)
                    return PollResult(PollOutcome.CANCELLED, tx_hash, attempts=attempt, detail=last)
                interval = options.next_interval(interval)

        logger.error("poll_timed_out", tx_hash=tx_hash, attempts=options.max_attempts)
        return PollResult(
            PollOutcome.TIMED_OUT, tx_hash, attempts=options.max_attempts, detail=last
        )


__all__ = [
    "PollingStrategy",
    "PollingOptions",
    "DEFAULT_POLLING_OPTIONS",
    "TxStatus",
    "StatusResponse",
    "PollOutcome",
    "PollResult",
    "StatusProbe",
    "TransactionPoller",
]
