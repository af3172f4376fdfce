"""Read-only inspection of pool dynamic fees."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

import structlog

from swapcore.amm.constant_product import ConstantProductAMM
from swapcore.constants import MAX_BPS
from swapcore.errors import ValidationError
from swapcore.pools.oracle import PoolOracle

logger = structlog.get_logger()


@dataclass(frozen=True)
class FeeEstimate:
    """Fee a swap of `amount_in` would pay in one pool right now."""

    pool_id: str
    fee_bps: int
    # In input token units; 0 when no amount was given
    fee_amount: int = 0


class FeeInspector:
    """Reads current dynamic fees from the oracle."""

    def __init__(self, oracle: PoolOracle) -> None:
        self._oracle = oracle

    async def current_fee(self, pool_id: str) -> int:
        fee_bps = await self._oracle.pool_dynamic_fee(pool_id)
        if not 0 <= fee_bps <= MAX_BPS:
            raise ValidationError(
                f"Pool {pool_id} reported invalid fee {fee_bps} bps",
                {"pool_id": pool_id, "fee_bps": fee_bps},
            )
        return fee_bps

    async def estimate_swap_fee(self, pool_id: str, amount_in: int) -> FeeEstimate:
        """Fee in bps and absolute terms for swapping `amount_in` through a pool.

        Raises:
            ValidationError: If amount_in is not positive or the pool's fee is
                out of range
        """
        if amount_in <= 0:
            raise ValidationError(
                f"amount_in must be positive, got {amount_in}", {"amount_in": amount_in}
            )
        fee_bps = await self.current_fee(pool_id)
        return FeeEstimate(
            pool_id=pool_id,
            fee_bps=fee_bps,
            fee_amount=ConstantProductAMM.fee_amount(amount_in, fee_bps),
        )

    async def compare_fees(self, pool_ids: list[str]) -> list[FeeEstimate]:
        """Current fee of each pool, in the order given.

        Fees are read concurrently.
        """
        fees = await asyncio.gather(*(self.current_fee(pool_id) for pool_id in pool_ids))
        logger.debug("fees_compared", pools=len(pool_ids))
        return [FeeEstimate(pool_id=pool_id, fee_bps=fee) for pool_id, fee in zip(pool_ids, fees)]


__all__ = ["FeeEstimate", "FeeInspector"]
