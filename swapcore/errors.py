"""Typed error taxonomy and best-effort classifier.

Every failure surfaced to callers is a SwapCoreError subclass carrying a
machine-readable ErrorKind, a human message, and structured details. Raw
collaborator failures (RPC exceptions, contract error strings) are mapped onto
the taxonomy by classify_error():

1. An already-typed error passes through unchanged.
2. A contract error code ("Error(Contract, #105)") is looked up in a fixed
   code table.
3. Otherwise ordered substring rules are applied to the message.
4. Anything left is UnknownError, keeping the original error in details.

The substring rules are fragile by nature. New contract codes belong in the
code tables below, not at call sites.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar


class ErrorKind(Enum):
    """Closed set of failure kinds."""

    NETWORK_ERROR = "NETWORK_ERROR"
    RPC_ERROR = "RPC_ERROR"
    SIMULATION_ERROR = "SIMULATION_ERROR"
    TRANSACTION_ERROR = "TRANSACTION_ERROR"
    DEADLINE_EXCEEDED = "DEADLINE_EXCEEDED"
    SLIPPAGE_EXCEEDED = "SLIPPAGE_EXCEEDED"
    INSUFFICIENT_LIQUIDITY = "INSUFFICIENT_LIQUIDITY"
    PAIR_NOT_FOUND = "PAIR_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    FLASH_LOAN_ERROR = "FLASH_LOAN_ERROR"
    CIRCUIT_BREAKER_ACTIVE = "CIRCUIT_BREAKER_ACTIVE"
    NO_SIGNER = "NO_SIGNER"
    UNKNOWN = "UNKNOWN"


# =============================================================================
# Error classes
# =============================================================================


class SwapCoreError(Exception):
    """Base error for all swapcore failures."""

    kind: ClassVar[ErrorKind] = ErrorKind.UNKNOWN

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details: dict[str, Any] = details or {}

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"


class UnknownError(SwapCoreError):
    """Failure that matched no classification rule."""

    kind = ErrorKind.UNKNOWN


class NetworkError(SwapCoreError):
    """Network or connection failure."""

    kind = ErrorKind.NETWORK_ERROR


class RpcError(SwapCoreError):
    """RPC endpoint failure (rate limit, unavailable)."""

    kind = ErrorKind.RPC_ERROR


class SimulationError(SwapCoreError):
    """Transaction simulation failed."""

    kind = ErrorKind.SIMULATION_ERROR


class TransactionError(SwapCoreError):
    """Transaction submission or execution failed."""

    kind = ErrorKind.TRANSACTION_ERROR

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        tx_hash: str | None = None,
    ) -> None:
        super().__init__(message, details)
        self.tx_hash = tx_hash


class DeadlineError(SwapCoreError):
    """Transaction deadline exceeded."""

    kind = ErrorKind.DEADLINE_EXCEEDED

    @classmethod
    def expired(cls, deadline: int) -> DeadlineError:
        return cls(f"Transaction deadline exceeded: {deadline}", {"deadline": deadline})


class SlippageError(SwapCoreError):
    """Executed amount fell outside the slippage tolerance."""

    kind = ErrorKind.SLIPPAGE_EXCEEDED

    @classmethod
    def exceeded(cls, expected: int, actual: int, tolerance_bps: int) -> SlippageError:
        return cls(
            f"Slippage exceeded: expected {expected}, got {actual} "
            f"(tolerance: {tolerance_bps}bps)",
            {"expected": expected, "actual": actual, "tolerance_bps": tolerance_bps},
        )


class ValidationError(SwapCoreError):
    """Invalid input parameters."""

    kind = ErrorKind.VALIDATION_ERROR


class InsufficientInputError(ValidationError):
    """Input amount must be positive."""

    pass


class InsufficientOutputError(ValidationError):
    """Requested output amount must be positive."""

    pass


class InsufficientLiquidityError(SwapCoreError):
    """Pool cannot satisfy the trade."""

    kind = ErrorKind.INSUFFICIENT_LIQUIDITY

    @classmethod
    def for_pool(cls, pool_id: str, **details: Any) -> InsufficientLiquidityError:
        return cls(f"Insufficient liquidity in pair {pool_id}", {"pool_id": pool_id, **details})


class InsufficientReserveError(InsufficientLiquidityError):
    """Requested output is at or above the pool's output reserve."""

    pass


class PairNotFoundError(SwapCoreError):
    """No pool exists for a token pair."""

    kind = ErrorKind.PAIR_NOT_FOUND

    @classmethod
    def for_tokens(cls, token_a: str, token_b: str) -> PairNotFoundError:
        return cls(
            f"No pair found for tokens {token_a} / {token_b}",
            {"token_a": token_a, "token_b": token_b},
        )


class FlashLoanError(SwapCoreError):
    """Flash loan callback or reentrancy failure."""

    kind = ErrorKind.FLASH_LOAN_ERROR


class CircuitBreakerError(SwapCoreError):
    """Pool is paused by its circuit breaker."""

    kind = ErrorKind.CIRCUIT_BREAKER_ACTIVE

    @classmethod
    def for_pool(cls, pool_id: str) -> CircuitBreakerError:
        return cls(f"Circuit breaker active on pair {pool_id}", {"pool_id": pool_id})


class SignerError(SwapCoreError):
    """No signing capability configured."""

    kind = ErrorKind.NO_SIGNER

    def __init__(
        self,
        message: str = "No signing key configured. Provide a signer or use external signing.",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)


ERROR_CLASSES: dict[ErrorKind, type[SwapCoreError]] = {
    ErrorKind.NETWORK_ERROR: NetworkError,
    ErrorKind.RPC_ERROR: RpcError,
    ErrorKind.SIMULATION_ERROR: SimulationError,
    ErrorKind.TRANSACTION_ERROR: TransactionError,
    ErrorKind.DEADLINE_EXCEEDED: DeadlineError,
    ErrorKind.SLIPPAGE_EXCEEDED: SlippageError,
    ErrorKind.INSUFFICIENT_LIQUIDITY: InsufficientLiquidityError,
    ErrorKind.PAIR_NOT_FOUND: PairNotFoundError,
    ErrorKind.VALIDATION_ERROR: ValidationError,
    ErrorKind.FLASH_LOAN_ERROR: FlashLoanError,
    ErrorKind.CIRCUIT_BREAKER_ACTIVE: CircuitBreakerError,
    ErrorKind.NO_SIGNER: SignerError,
    ErrorKind.UNKNOWN: UnknownError,
}


# =============================================================================
# Contract error codes
# =============================================================================


@dataclass(frozen=True)
class ContractErrorCode:
    """A known on-chain error code."""

    code: int
    message: str
    kind: ErrorKind


def _table(*entries: tuple[int, str, ErrorKind]) -> dict[int, ContractErrorCode]:
    return {code: ContractErrorCode(code, message, kind) for code, message, kind in entries}


# Pair contract (100-119)
PAIR_ERRORS = _table(
    (100, "Pair already initialized", ErrorKind.VALIDATION_ERROR),
    (101, "Zero address provided", ErrorKind.VALIDATION_ERROR),
    (102, "Identical tokens provided", ErrorKind.VALIDATION_ERROR),
    (103, "Insufficient liquidity minted", ErrorKind.INSUFFICIENT_LIQUIDITY),
    (104, "Insufficient liquidity burned", ErrorKind.INSUFFICIENT_LIQUIDITY),
    (105, "Insufficient output amount", ErrorKind.SLIPPAGE_EXCEEDED),
    (106, "Insufficient liquidity in pool", ErrorKind.INSUFFICIENT_LIQUIDITY),
    (107, "Invalid amount", ErrorKind.VALIDATION_ERROR),
    (108, "K invariant violated", ErrorKind.TRANSACTION_ERROR),
    (109, "Insufficient input amount", ErrorKind.VALIDATION_ERROR),
    (110, "Contract is locked (reentrancy guard)", ErrorKind.FLASH_LOAN_ERROR),
    (111, "Transaction expired (deadline exceeded)", ErrorKind.DEADLINE_EXCEEDED),
    (112, "Constraint not met", ErrorKind.TRANSACTION_ERROR),
    (113, "Invalid fee configuration", ErrorKind.VALIDATION_ERROR),
)

# Router contract (200-219)
ROUTER_ERRORS = _table(
    (200, "Router already initialized", ErrorKind.VALIDATION_ERROR),
    (201, "Invalid swap path", ErrorKind.VALIDATION_ERROR),
    (202, "Insufficient output amount", ErrorKind.SLIPPAGE_EXCEEDED),
    (203, "Excessive input amount", ErrorKind.SLIPPAGE_EXCEEDED),
    (204, "Expired deadline", ErrorKind.DEADLINE_EXCEEDED),
    (205, "Insufficient liquidity", ErrorKind.INSUFFICIENT_LIQUIDITY),
    (206, "Pair not found", ErrorKind.PAIR_NOT_FOUND),
    (207, "Identical tokens", ErrorKind.VALIDATION_ERROR),
)

# Factory contract (300-319)
FACTORY_ERRORS = _table(
    (300, "Factory already initialized", ErrorKind.VALIDATION_ERROR),
    (301, "Unauthorized caller", ErrorKind.TRANSACTION_ERROR),
    (302, "Pair already exists", ErrorKind.VALIDATION_ERROR),
    (303, "Zero address provided", ErrorKind.VALIDATION_ERROR),
    (304, "Invalid fee configuration", ErrorKind.VALIDATION_ERROR),
)

CONTRACT_ERRORS: dict[int, ContractErrorCode] = {**PAIR_ERRORS, **ROUTER_ERRORS, **FACTORY_ERRORS}

_CONTRACT_CODE_RE = re.compile(r"Error\(Contract,\s*#?([0-9]+)\)", re.IGNORECASE)


def error_message(raw: object) -> str:
    """Best-effort message text of a raw error (exception, string, or object)."""
    if isinstance(raw, str):
        return raw
    if isinstance(raw, SwapCoreError):
        return raw.message
    if isinstance(raw, BaseException):
        return str(raw) or type(raw).__name__
    message = getattr(raw, "message", None)
    if isinstance(message, str):
        return message
    return str(raw)


def extract_error_code(raw: object) -> int | None:
    """Extract a contract error code from a raw error.

    Recognizes "Error(Contract, #101)", "Error(Contract, 101)" and the same
    embedded in a longer host error string.
    """
    match = _CONTRACT_CODE_RE.search(error_message(raw))
    if match:
        return int(match.group(1))
    return None


def lookup_contract_error(code: int) -> ContractErrorCode | None:
    return CONTRACT_ERRORS.get(code)


def describe_error(raw: object) -> str:
    """Human-readable message, resolving contract codes when present."""
    code = extract_error_code(raw)
    if code is not None:
        entry = lookup_contract_error(code)
        if entry is not None:
            return f"Contract Error ({code}): {entry.message}"
        return f"Contract Error ({code})"
    return error_message(raw) or "Unknown error"


# =============================================================================
# Classification
# =============================================================================

# Ordered substring rules; first match wins. Matched against the lowercased message.
_MESSAGE_RULES: tuple[tuple[ErrorKind, tuple[str, ...]], ...] = (
    (ErrorKind.DEADLINE_EXCEEDED, ("deadline", "expired")),
    (ErrorKind.SLIPPAGE_EXCEEDED, ("slippage", "insufficient_output", "insufficient output")),
    (ErrorKind.INSUFFICIENT_LIQUIDITY, ("liquidity",)),
    (ErrorKind.CIRCUIT_BREAKER_ACTIVE, ("circuit", "paused")),
    (
        ErrorKind.NETWORK_ERROR,
        (
            "econnreset",
            "econnrefused",
            "econnaborted",
            "etimedout",
            "enotfound",
            "socket hang up",
            "connection",
            "network",
        ),
    ),
    (ErrorKind.RPC_ERROR, ("rate limit", "rate-limit", "ratelimit", "too many requests", "429")),
    (ErrorKind.NO_SIGNER, ("signer", "signing", "signature", "secret key")),
    (ErrorKind.FLASH_LOAN_ERROR, ("flash", "reentrancy", "reentrant", "callback")),
    (ErrorKind.VALIDATION_ERROR, ("invalid", "validation", "required")),
    (ErrorKind.PAIR_NOT_FOUND, ("pair not found", "no pair found", "pair does not exist")),
    (ErrorKind.SIMULATION_ERROR, ("simulation", "simulate")),
    (ErrorKind.TRANSACTION_ERROR, ("transaction", "tx failed", "submission")),
)


def match_message_rule(message: str) -> ErrorKind | None:
    """Apply the ordered substring rules to a message."""
    lowered = message.lower()
    for kind, needles in _MESSAGE_RULES:
        if any(needle in lowered for needle in needles):
            return kind
    return None


def classify_error(raw: object) -> SwapCoreError:
    """Map any raw failure onto the error taxonomy.

    Args:
        raw: Exception, error string, or error-like object

    Returns:
        The same instance if already typed, otherwise a new SwapCoreError
        subclass. The raw error is kept in details["original_error"] and, for
        exceptions, as __cause__.
    """
    if isinstance(raw, SwapCoreError):
        return raw

    message = error_message(raw)
    details: dict[str, Any] = {"original_error": raw}

    code = extract_error_code(message)
    entry = lookup_contract_error(code) if code is not None else None
    if entry is not None:
        details["contract_code"] = code
        error = ERROR_CLASSES[entry.kind](f"Contract Error ({code}): {entry.message}", details)
    else:
        kind = match_message_rule(message)
        error = ERROR_CLASSES[kind or ErrorKind.UNKNOWN](message, details)

    if isinstance(raw, BaseException):
        error.__cause__ = raw
    return error


__all__ = [
    "ErrorKind",
    "SwapCoreError",
    "UnknownError",
    "NetworkError",
    "RpcError",
    "SimulationError",
    "TransactionError",
    "DeadlineError",
    "SlippageError",
    "ValidationError",
    "InsufficientInputError",
    "InsufficientOutputError",
    "InsufficientLiquidityError",
    "InsufficientReserveError",
    "PairNotFoundError",
    "FlashLoanError",
    "CircuitBreakerError",
    "SignerError",
    "ERROR_CLASSES",
    "ContractErrorCode",
    "PAIR_ERRORS",
    "ROUTER_ERRORS",
    "FACTORY_ERRORS",
    "CONTRACT_ERRORS",
    "classify_error",
    "describe_error",
    "error_message",
    "extract_error_code",
    "lookup_contract_error",
    "match_message_rule",
]
