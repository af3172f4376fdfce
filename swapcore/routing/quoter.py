"""Quote building for direct and chained swaps.

Every quote re-reads reserves and fee from the oracle; nothing is cached
between quotes except pair-address lookups.
"""

from __future__ import annotations

import time
from collections.abc import Callable

import structlog

from swapcore.amm.base import AMM
from swapcore.amm.constant_product import ConstantProductAMM, constant_product
from swapcore.constants import BPS_DENOMINATOR, DEFAULT_DEADLINE_SEC, DEFAULT_SLIPPAGE_BPS
from swapcore.errors import PairNotFoundError, ValidationError
from swapcore.models.types import TradeType, normalize_token
from swapcore.pools.cache import PairCache
from swapcore.pools.oracle import PoolOracle, read_pool_snapshot
from swapcore.routing.pathfinding import TokenGraph
from swapcore.routing.types import ChainedRoute, DirectRoute, Hop, Quote, compound_bps

logger = structlog.get_logger()


class SwapQuoter:
    """Prices swaps against live pool state.

    Args:
        oracle: Pool state reader
        amm: Pricing curve (constant product by default)
        pair_cache: Pair-address cache; pairs are looked up on the oracle
            every time when omitted
        default_slippage_bps: Slippage applied when a call does not pass one
        deadline_sec: Offset used to derive a deadline when a call does not
            pass one
        clock: Returns the current unix time in seconds
    """

    def __init__(
        self,
        oracle: PoolOracle,
        amm: AMM = constant_product,
        pair_cache: PairCache | None = None,
        default_slippage_bps: int = DEFAULT_SLIPPAGE_BPS,
        deadline_sec: int = DEFAULT_DEADLINE_SEC,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.oracle = oracle
        self.amm = amm
        self.pair_cache = pair_cache
        self.default_slippage_bps = default_slippage_bps
        self.deadline_sec = deadline_sec
        self._clock = clock

    def deadline(self, offset_sec: int | None = None) -> int:
        """Unix timestamp `offset_sec` seconds from now."""
        offset = self.deadline_sec if offset_sec is None else offset_sec
        return int(self._clock()) + offset

    async def resolve_pool(
        self,
        token_a: str,
        token_b: str,
        graph: TokenGraph | None = None,
    ) -> str:
        """Find the pool for a pair.

        A graph built by the path finder already knows its pools and is
        consulted first; otherwise the pair cache or the oracle is asked.

        Raises:
            PairNotFoundError: If no pool trades the pair
        """
        pool_id: str | None = None
        if graph is not None:
            pool_id = graph.pool_for(token_a, token_b)
        if pool_id is None:
            if self.pair_cache is not None:
                pool_id = await self.pair_cache.get_pair_address(self.oracle, token_a, token_b)
            else:
                pool_id = await self.oracle.get_pair(token_a, token_b)
        if pool_id is None:
            raise PairNotFoundError.for_tokens(token_a, token_b)
        return pool_id

    async def price_hop(
        self,
        pool_id: str,
        token_in: str,
        token_out: str,
        amount: int,
        trade_type: TradeType = TradeType.EXACT_IN,
    ) -> Hop:
        """Price one pool traversal from freshly read reserves and fee.

        `amount` is the input for EXACT_IN and the desired output for
        EXACT_OUT.
        """
        snapshot = await read_pool_snapshot(self.oracle, pool_id, token_in, token_out)
        reserve_in = snapshot.reserves.reserve_in
        reserve_out = snapshot.reserves.reserve_out

        if trade_type == TradeType.EXACT_IN:
            amount_in = amount
            amount_out = self.amm.get_amount_out(amount_in, reserve_in, reserve_out, snapshot.fee_bps)
        else:
            amount_out = amount
            amount_in = self.amm.get_amount_in(amount_out, reserve_in, reserve_out, snapshot.fee_bps)

        return Hop(
            pool_id=pool_id,
            token_in=snapshot.token_in,
            token_out=snapshot.token_out,
            amount_in=amount_in,
            amount_out=amount_out,
            fee_bps=snapshot.fee_bps,
            fee_amount=ConstantProductAMM.fee_amount(amount_in, snapshot.fee_bps),
            price_impact_bps=self.amm.price_impact_bps(
                amount_in, amount_out, reserve_in, reserve_out
            ),
        )

    async def get_quote(
        self,
        token_in: str,
        token_out: str,
        amount: int,
        trade_type: TradeType = TradeType.EXACT_IN,
        slippage_bps: int | None = None,
        deadline: int | None = None,
        graph: TokenGraph | None = None,
    ) -> Quote:
        """Quote a swap through the direct pool for a pair.

        Raises:
            PairNotFoundError: If no pool trades the pair
            ValidationError: If tokens are identical or amounts/bps invalid
            InsufficientLiquidityError: If the pool cannot fill the trade
        """
        token_in = normalize_token(token_in)
        token_out = normalize_token(token_out)
        if token_in == token_out:
            raise ValidationError(
                "token_in and token_out must differ", {"token": token_in}
            )

        pool_id = await self.resolve_pool(token_in, token_out, graph)
        hop = await self.price_hop(pool_id, token_in, token_out, amount, trade_type)
        slippage = self.default_slippage_bps if slippage_bps is None else slippage_bps

        return Quote(
            token_in=token_in,
            token_out=token_out,
            amount_in=hop.amount_in,
            amount_out=hop.amount_out,
            amount_out_min=ConstantProductAMM.amount_out_min(hop.amount_out, slippage),
            price_impact_bps=hop.price_impact_bps,
            fee_bps=hop.fee_bps,
            fee_amount=hop.fee_amount,
            path=(token_in, token_out),
            deadline=self.deadline() if deadline is None else deadline,
            route=DirectRoute(hop),
            trade_type=trade_type,
        )

    async def get_multi_hop_quote(
        self,
        path: list[str],
        amount: int,
        trade_type: TradeType = TradeType.EXACT_IN,
        slippage_bps: int | None = None,
        deadline: int | None = None,
        graph: TokenGraph | None = None,
    ) -> Quote:
        """Quote a swap along an explicit token path.

        Hops are priced strictly in order, each consuming the previous hop's
        output. Reserves are read independently per hop, so a chained quote
        may combine pool states from slightly different ledgers.

        A two-token path is a direct quote. Exact-output is only supported
        for direct quotes.

        Raises:
            ValidationError: If the path is malformed, or EXACT_OUT is
                requested for more than one hop
            PairNotFoundError: If a hop has no pool
            InsufficientLiquidityError: If any hop cannot be filled
        """
        tokens = [normalize_token(t) for t in path]
        if len(tokens) < 2:
            raise ValidationError(
                f"Path needs at least 2 tokens, got {len(tokens)}", {"path": tokens}
            )
        if len(set(tokens)) != len(tokens):
            raise ValidationError("Path must not repeat tokens", {"path": tokens})

        if len(tokens) == 2:
            return await self.get_quote(
                tokens[0], tokens[1], amount, trade_type, slippage_bps, deadline, graph
            )

        if trade_type != TradeType.EXACT_IN:
            raise ValidationError(
                "Multi-hop quotes only support EXACT_IN",
                {"trade_type": trade_type.value, "path": tokens},
            )

        hops: list[Hop] = []
        current_amount = amount
        for token_in, token_out in zip(tokens, tokens[1:]):
            pool_id = await self.resolve_pool(token_in, token_out, graph)
            hop = await self.price_hop(pool_id, token_in, token_out, current_amount)
            hops.append(hop)
            current_amount = hop.amount_out

        amount_out = hops[-1].amount_out
        fee_bps = compound_bps([h.fee_bps for h in hops])
        slippage = self.default_slippage_bps if slippage_bps is None else slippage_bps

        logger.debug(
            "multi_hop_quoted",
            path=tokens,
            amount_in=amount,
            amount_out=amount_out,
            hops=len(hops),
        )

        return Quote(
            token_in=tokens[0],
            token_out=tokens[-1],
            amount_in=amount,
            amount_out=amount_out,
            amount_out_min=ConstantProductAMM.amount_out_min(amount_out, slippage),
            price_impact_bps=compound_bps([h.price_impact_bps for h in hops]),
            fee_bps=fee_bps,
            fee_amount=(amount * fee_bps) // BPS_DENOMINATOR,
            path=tuple(tokens),
            deadline=self.deadline() if deadline is None else deadline,
            route=ChainedRoute(tuple(hops)),
            trade_type=TradeType.EXACT_IN,
        )


__all__ = ["SwapQuoter"]
