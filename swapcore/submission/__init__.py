"""Transaction submission: retry policy, confirmation polling and the submit flow."""

from swapcore.submission.channel import SimulationOutcome, SubmissionChannel
from swapcore.submission.polling import (
    DEFAULT_POLLING_OPTIONS,
    PollingOptions,
    PollingStrategy,
    PollOutcome,
    PollResult,
    StatusResponse,
    TransactionPoller,
    TxStatus,
)
from swapcore.submission.retry import (
    DEFAULT_RETRY_OPTIONS,
    RetryOptions,
    is_retryable,
    with_retry,
)
from swapcore.submission.submitter import (
    SubmissionFailure,
    SubmissionResult,
    SubmissionSuccess,
    submit_with_retry_and_poll,
)

__all__ = [
    "DEFAULT_POLLING_OPTIONS",
    "DEFAULT_RETRY_OPTIONS",
    "PollOutcome",
    "PollResult",
    "PollingOptions",
    "PollingStrategy",
    "RetryOptions",
    "SimulationOutcome",
    "StatusResponse",
    "SubmissionChannel",
    "SubmissionFailure",
    "SubmissionResult",
    "SubmissionSuccess",
    "TransactionPoller",
    "TxStatus",
    "is_retryable",
    "submit_with_retry_and_poll",
    "with_retry",
]
