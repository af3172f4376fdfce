"""Shared type definitions for swap requests and quotes."""

from enum import Enum
from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from swapcore.constants import MAX_BPS
from swapcore.safe_int import I128_MAX


class TradeType(str, Enum):
    """Which side of the trade the caller fixes."""

    EXACT_IN = "EXACT_IN"
    EXACT_OUT = "EXACT_OUT"


def validate_amount(value: Any) -> int:
    """Validate a positive i128 token amount given as int or decimal string.

    Raises:
        ValueError: If value is not a positive integer within i128 range
    """
    if isinstance(value, bool):
        raise ValueError("Amount must be an integer, got bool")
    if isinstance(value, str):
        try:
            value = int(value)
        except ValueError as err:
            raise ValueError(f"Amount must be a decimal integer string: '{value}'") from err
    if not isinstance(value, int):
        raise ValueError(f"Amount must be int or str, got {type(value).__name__}")
    if value <= 0:
        raise ValueError(f"Amount must be positive: {value}")
    if value > I128_MAX:
        raise ValueError(f"Amount overflows i128: {value}")
    return value


# Positive token amount in the token's smallest unit
Amount = Annotated[int, BeforeValidator(validate_amount)]

# Basis points in [0, 10000]
Bps = Annotated[int, Field(ge=0, le=MAX_BPS)]

# Opaque token identifier (contract address)
TokenId = Annotated[str, Field(min_length=1)]


def normalize_token(token: str) -> str:
    """Normalize a token identifier for use as a graph or cache key.

    Contract addresses are case-sensitive base32 strings, so only
    surrounding whitespace is stripped.
    """
    return token.strip()


def sort_tokens(token_a: str, token_b: str) -> tuple[str, str]:
    """Return the pair in canonical (lexicographic) order.

    Raises:
        ValueError: If both tokens are the same
    """
    a = normalize_token(token_a)
    b = normalize_token(token_b)
    if a == b:
        raise ValueError(f"Identical tokens: {a}")
    return (a, b) if a < b else (b, a)
