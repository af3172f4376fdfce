"""Pool oracle capability.

The oracle is the read side of the chain: it lists pools and reads each
pool's tokens, reserves and current dynamic fee. swapcore never implements
it beyond test doubles; RPC clients provide it.
"""

from __future__ import annotations

import asyncio
from typing import Protocol, runtime_checkable

from swapcore.constants import MAX_BPS
from swapcore.errors import ValidationError
from swapcore.models.types import normalize_token
from swapcore.pools.types import PoolSnapshot, PoolTokens, Reserves


@runtime_checkable
class PoolOracle(Protocol):
    """Read-only access to pool state."""

    async def list_pools(self) -> list[str]:
        """All known pool ids."""
        ...

    async def pool_tokens(self, pool_id: str) -> tuple[str, str]:
        """The pool's (token0, token1)."""
        ...

    async def pool_reserves(self, pool_id: str) -> tuple[int, int]:
        """The pool's (reserve0, reserve1), in token0/token1 order."""
        ...

    async def pool_dynamic_fee(self, pool_id: str) -> int:
        """The pool's current fee in basis points."""
        ...

    async def get_pair(self, token_a: str, token_b: str) -> str | None:
        """Pool id for a token pair, or None if no pool exists."""
        ...


async def read_pool_tokens(oracle: PoolOracle, pool_id: str) -> PoolTokens:
    token0, token1 = await oracle.pool_tokens(pool_id)
    return PoolTokens(pool_id=pool_id, token0=normalize_token(token0), token1=normalize_token(token1))


async def read_pool_snapshot(
    oracle: PoolOracle,
    pool_id: str,
    token_in: str,
    token_out: str,
) -> PoolSnapshot:
    """Read fresh reserves and fee for one hop.

    Tokens, reserves and fee are independent reads and are issued
    concurrently.

    Raises:
        ValidationError: If the pool does not hold token_in/token_out or
            reports a fee outside [0, 10000] bps
    """
    tokens, (reserve0, reserve1), fee_bps = await asyncio.gather(
        read_pool_tokens(oracle, pool_id),
        oracle.pool_reserves(pool_id),
        oracle.pool_dynamic_fee(pool_id),
    )
    if not (tokens.contains(token_in) and tokens.contains(token_out)):
        raise ValidationError(
            f"Pool {pool_id} does not trade {token_in} / {token_out}",
            {"pool_id": pool_id, "token0": tokens.token0, "token1": tokens.token1},
        )
    if not 0 <= fee_bps <= MAX_BPS:
        raise ValidationError(
            f"Pool {pool_id} reported invalid fee {fee_bps} bps",
            {"pool_id": pool_id, "fee_bps": fee_bps},
        )
    return PoolSnapshot(
        pool_id=pool_id,
        token_in=normalize_token(token_in),
        token_out=normalize_token(token_out),
        reserves=Reserves.oriented(reserve0, reserve1, tokens.is_token0(token_in)),
        fee_bps=fee_bps,
    )


__all__ = ["PoolOracle", "read_pool_snapshot", "read_pool_tokens"]
