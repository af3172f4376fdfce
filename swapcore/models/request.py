"""Pydantic models for swap requests."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic import ValidationError as PydanticValidationError

from swapcore.errors import ValidationError
from swapcore.models.types import Amount, Bps, TokenId, TradeType, normalize_token


class SwapRequest(BaseModel):
    """A request to price (and optionally execute) a swap.

    If `path` has three or more tokens the swap is routed through the
    intermediate pools. A direct swap omits `path` or passes
    `[token_in, token_out]`.
    """

    model_config = ConfigDict(frozen=True)

    token_in: TokenId
    token_out: TokenId
    amount: Amount
    trade_type: TradeType = TradeType.EXACT_IN
    path: list[TokenId] | None = None
    slippage_bps: Bps | None = None
    deadline: int | None = Field(default=None, gt=0)

    @model_validator(mode="after")
    def _check_tokens(self) -> SwapRequest:
        if normalize_token(self.token_in) == normalize_token(self.token_out):
            raise ValueError("token_in and token_out must differ")
        if self.path is not None:
            if len(self.path) < 2:
                raise ValueError("path must contain at least two tokens")
            if normalize_token(self.path[0]) != normalize_token(self.token_in):
                raise ValueError("path must start with token_in")
            if normalize_token(self.path[-1]) != normalize_token(self.token_out):
                raise ValueError("path must end with token_out")
            if len({normalize_token(t) for t in self.path}) != len(self.path):
                raise ValueError("path must not repeat tokens")
        return self

    @property
    def resolved_path(self) -> list[str]:
        """Token path for this request (direct pair when no path was given)."""
        if self.path is None:
            return [normalize_token(self.token_in), normalize_token(self.token_out)]
        return [normalize_token(t) for t in self.path]

    @property
    def is_multihop(self) -> bool:
        return len(self.resolved_path) > 2

    @classmethod
    def build(cls, **fields: object) -> SwapRequest:
        """Validate fields into a request, raising the SDK's ValidationError.

        Raises:
            ValidationError: If any field is invalid (wraps pydantic errors)
        """
        try:
            return cls.model_validate(fields)
        except PydanticValidationError as err:
            raise ValidationError(
                f"Invalid swap request: {err.errors()[0]['msg']}",
                {"errors": err.errors(include_url=False)},
            ) from err
