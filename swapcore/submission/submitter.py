"""Simulate, sign, broadcast and confirm a transaction intent.

Inside the flow, failures are exceptions. At this boundary every failure is
folded into exactly one SubmissionResult, so callers never see a raw
transport exception.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

import structlog

from swapcore.errors import (
    ErrorKind,
    SignerError,
    SimulationError,
    SwapCoreError,
    TransactionError,
    classify_error,
)
from swapcore.submission.channel import SimulationOutcome, SubmissionChannel
from swapcore.submission.polling import (
    DEFAULT_POLLING_OPTIONS,
    PollingOptions,
    PollOutcome,
    TransactionPoller,
)
from swapcore.submission.retry import DEFAULT_RETRY_OPTIONS, RetryOptions, with_retry

logger = structlog.get_logger()


@dataclass(frozen=True)
class SubmissionSuccess:
    tx_hash: str
    ledger: int

    @property
    def is_success(self) -> bool:
        return True


@dataclass(frozen=True)
class SubmissionFailure:
    """A submission that did not confirm.

    Attributes:
        kind: Failure kind from the error taxonomy
        message: Human-readable reason
        tx_hash: Hash, if the transaction got as far as broadcast
        error: The typed error behind the failure
    """

    kind: ErrorKind
    message: str
    tx_hash: str | None = None
    error: SwapCoreError | None = None

    @property
    def is_success(self) -> bool:
        return False

    @classmethod
    def from_error(cls, error: SwapCoreError, tx_hash: str | None = None) -> SubmissionFailure:
        return cls(
            kind=error.kind,
            message=error.message,
            tx_hash=tx_hash or getattr(error, "tx_hash", None),
            error=error,
        )


SubmissionResult = SubmissionSuccess | SubmissionFailure


def _simulation_failure(err: Exception | None, outcome: SimulationOutcome | None) -> SubmissionFailure:
    if err is not None:
        classified = classify_error(err)
        error = SimulationError(
            f"Transaction simulation failed: {classified.message}",
            {"cause_kind": classified.kind.value, **classified.details},
        )
        error.__cause__ = err
    else:
        error = SimulationError(
            f"Transaction simulation failed: {outcome.error or 'unknown reason'}",
            {"simulation": outcome.raw},
        )
    return SubmissionFailure.from_error(error)


async def submit_with_retry_and_poll(
    channel: SubmissionChannel,
    intent: Any,
    retry: RetryOptions = DEFAULT_RETRY_OPTIONS,
    polling: PollingOptions = DEFAULT_POLLING_OPTIONS,
    cancel: asyncio.Event | None = None,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
) -> SubmissionResult:
    """Drive an intent through simulate -> sign -> broadcast -> confirm.

    simulate and broadcast are retried on transient failures; sign is a
    local operation and is not.

    Args:
        channel: Submission channel
        intent: Opaque transaction intent understood by the channel
        retry: Retry policy for simulate and broadcast
        polling: Confirmation polling parameters
        cancel: Optional event that stops confirmation polling
        sleep: Awaitable delay shared by retry and polling (injectable for tests)

    Returns:
        SubmissionSuccess with hash and ledger, or SubmissionFailure
    """
    tx_hash: str | None = None
    try:
        try:
            outcome = await with_retry(
                lambda: channel.simulate(intent), retry, label="simulate", sleep=sleep
            )
        except Exception as err:
            logger.warning("simulation_raised", error=str(err))
            return _simulation_failure(err, None)
        if not outcome.success:
            logger.warning("simulation_failed", error=outcome.error)
            return _simulation_failure(None, outcome)
        logger.debug("simulation_succeeded")

        if not channel.has_signer:
            return SubmissionFailure.from_error(SignerError())
        try:
            signed = await channel.sign(outcome.prepared)
        except SignerError as err:
            return SubmissionFailure.from_error(err)

        tx_hash = await with_retry(
            lambda: channel.broadcast(signed), retry, label="broadcast", sleep=sleep
        )
        logger.info("transaction_submitted", tx_hash=tx_hash)

        poll = await TransactionPoller(channel, sleep=sleep).poll(tx_hash, polling, cancel)
    except Exception as err:
        error = classify_error(err)
        logger.error(
            "submission_failed",
            tx_hash=tx_hash,
            kind=error.kind.value,
            error=error.message,
        )
        return SubmissionFailure.from_error(error, tx_hash)

    if poll.outcome == PollOutcome.SUCCEEDED:
        return SubmissionSuccess(tx_hash=tx_hash, ledger=poll.ledger or 0)

    if poll.outcome == PollOutcome.FAILED:
        error = TransactionError(
            "Transaction failed on-chain",
            {"status": poll.detail, "attempts": poll.attempts},
            tx_hash=tx_hash,
        )
    elif poll.outcome == PollOutcome.TIMED_OUT:
        error = TransactionError(
            f"Transaction confirmation timed out after {poll.attempts} attempts",
            {"timed_out": True, "attempts": poll.attempts, "strategy": polling.strategy.value},
            tx_hash=tx_hash,
        )
    else:
        error = TransactionError(
            "Transaction confirmation polling was cancelled",
            {"cancelled": True, "attempts": poll.attempts},
            tx_hash=tx_hash,
        )
    return SubmissionFailure.from_error(error, tx_hash)


__all__ = [
    "SubmissionSuccess",
    "SubmissionFailure",
    "SubmissionResult",
    "submit_with_retry_and_poll",
]
