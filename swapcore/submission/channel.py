"""Submission channel capability.

The channel is the write side of the chain: it simulates an intent,
signs the prepared transaction, broadcasts it and reports its status.
swapcore drives the channel; wallets and RPC clients implement it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from swapcore.submission.polling import StatusResponse


@dataclass(frozen=True)
class SimulationOutcome:
    """Result of simulating an intent.

    Attributes:
        success: Whether simulation succeeded
        prepared: Transaction ready for signing (success only)
        error: Failure text reported by the simulator
        raw: Full simulator response, kept for diagnostics
    """

    success: bool
    prepared: Any = None
    error: str | None = None
    raw: Any = field(default=None, compare=False)


@runtime_checkable
class SubmissionChannel(Protocol):
    """Write-side collaborator driven by submit_with_retry_and_poll."""

    # False for read-only channels; signing is then never attempted
    has_signer: bool

    async def simulate(self, intent: Any) -> SimulationOutcome: ...

    async def sign(self, prepared: Any) -> Any: ...

    async def broadcast(self, signed: Any) -> str:
        """Submit a signed transaction and return its hash."""
        ...

    async def check_status(self, tx_hash: str) -> StatusResponse: ...


__all__ = ["SimulationOutcome", "SubmissionChannel"]
