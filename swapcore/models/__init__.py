"""Request models and shared types."""

from swapcore.models.request import SwapRequest
from swapcore.models.types import (
    Amount,
    Bps,
    TokenId,
    TradeType,
    normalize_token,
    sort_tokens,
    validate_amount,
)

__all__ = [
    "SwapRequest",
    "TradeType",
    "Amount",
    "Bps",
    "TokenId",
    "normalize_token",
    "sort_tokens",
    "validate_amount",
]
