"""Pool data types."""

from __future__ import annotations

from dataclasses import dataclass

from swapcore.models.types import normalize_token


@dataclass(frozen=True)
class PoolTokens:
    """The two tokens of a pool, in the pool's own (token0, token1) order."""

    pool_id: str
    token0: str
    token1: str

    def contains(self, token: str) -> bool:
        return normalize_token(token) in (self.token0, self.token1)

    def is_token0(self, token: str) -> bool:
        """True if `token` is the pool's token0.

        Raises:
            ValueError: If token is not in the pool
        """
        token_norm = normalize_token(token)
        if token_norm == self.token0:
            return True
        if token_norm == self.token1:
            return False
        raise ValueError(f"Token {token} not in pool {self.pool_id}")


@dataclass(frozen=True)
class Reserves:
    """Pool reserves oriented to a trade direction."""

    reserve_in: int
    reserve_out: int

    @classmethod
    def oriented(cls, reserve0: int, reserve1: int, token0_in: bool) -> Reserves:
        """Orient token0-ordered reserves to the trade direction."""
        if token0_in:
            return cls(reserve_in=reserve0, reserve_out=reserve1)
        return cls(reserve_in=reserve1, reserve_out=reserve0)


@dataclass(frozen=True)
class PoolSnapshot:
    """Reserves and fee read for one hop of a quote.

    Never reused across quotes; reserves are re-read every time.
    """

    pool_id: str
    token_in: str
    token_out: str
    reserves: Reserves
    fee_bps: int


__all__ = ["PoolTokens", "Reserves", "PoolSnapshot"]
