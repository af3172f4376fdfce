"""High-level client tying quoting, routing and submission together.

Usage:
    client = SwapClient(oracle, channel, SwapConfig.from_env())
    quote = await client.get_best_quote(token_in, token_out, amount)
    result = await client.submit_with_retry_and_poll(intent)
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from typing import Any

import structlog

from swapcore.config import DEFAULT_CONFIG, Network, SwapConfig
from swapcore.errors import SignerError, classify_error
from swapcore.fees import FeeInspector
from swapcore.models.request import SwapRequest
from swapcore.models.types import TradeType
from swapcore.pools.cache import PairCache
from swapcore.pools.oracle import PoolOracle
from swapcore.routing.pathfinding import PathFinder
from swapcore.routing.quoter import SwapQuoter
from swapcore.routing.router import RouteSelector
from swapcore.routing.types import OptimalPath, Quote
from swapcore.submission.channel import SubmissionChannel
from swapcore.submission.polling import PollingOptions
from swapcore.submission.retry import RetryOptions
from swapcore.submission.submitter import (
    SubmissionFailure,
    SubmissionResult,
    submit_with_retry_and_poll,
)

logger = structlog.get_logger()


class SwapClient:
    """Entry point for quoting and submitting swaps.

    Args:
        oracle: Pool state reader for the configured network
        channel: Submission channel; quoting works without one
        config: Client settings
        pair_cache: Pair-address cache; a fresh one is created when omitted
        clock: Returns the current unix time in seconds
        sleep: Awaitable delay used by retry and polling
    """

    def __init__(
        self,
        oracle: PoolOracle,
        channel: SubmissionChannel | None = None,
        config: SwapConfig = DEFAULT_CONFIG,
        pair_cache: PairCache | None = None,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        self.oracle = oracle
        self.channel = channel
        self.pair_cache = pair_cache if pair_cache is not None else PairCache()
        self._clock = clock
        self._sleep = sleep
        self._apply_config(config)

    def _apply_config(self, config: SwapConfig) -> None:
        self.config = config
        self.quoter = SwapQuoter(
            self.oracle,
            pair_cache=self.pair_cache,
            default_slippage_bps=config.default_slippage_bps,
            deadline_sec=config.default_deadline_sec,
            clock=self._clock,
        )
        self.router = RouteSelector(
            self.quoter,
            PathFinder(self.oracle, max_hops=config.max_hops),
            max_hops=config.max_hops,
        )
        self.fees = FeeInspector(self.oracle)

    @property
    def network(self) -> Network:
        return self.config.network

    def set_network(self, network: Network, oracle: PoolOracle | None = None) -> None:
        """Switch networks, dropping every cached pair address.

        Args:
            network: Target network
            oracle: Oracle for the new network; keeps the current one if omitted
        """
        if oracle is not None:
            self.oracle = oracle
        self.pair_cache.clear()
        self._apply_config(self.config.with_network(network))
        logger.info("network_changed", network=network.value)

    def deadline(self, offset_sec: int | None = None) -> int:
        """Unix timestamp `offset_sec` seconds from now (config default when omitted)."""
        return self.quoter.deadline(offset_sec)

    async def get_quote(
        self,
        token_in: str,
        token_out: str,
        amount: int,
        trade_type: TradeType = TradeType.EXACT_IN,
        slippage_bps: int | None = None,
        deadline: int | None = None,
    ) -> Quote:
        """Quote a swap through the direct pool.

        Raises:
            PairNotFoundError: If no pool trades the pair
            ValidationError: If the request is invalid
            InsufficientLiquidityError: If the pool cannot fill the trade
        """
        request = SwapRequest.build(
            token_in=token_in,
            token_out=token_out,
            amount=amount,
            trade_type=trade_type,
            slippage_bps=slippage_bps,
            deadline=deadline,
        )
        return await self.quoter.get_quote(
            request.token_in,
            request.token_out,
            request.amount,
            request.trade_type,
            request.slippage_bps,
            request.deadline,
        )

    async def quote_request(self, request: SwapRequest) -> Quote:
        """Quote a validated request, following its explicit path if it has one."""
        return await self.quoter.get_multi_hop_quote(
            request.resolved_path,
            request.amount,
            request.trade_type,
            request.slippage_bps,
            request.deadline,
        )

    async def find_optimal_path(
        self,
        token_in: str,
        token_out: str,
        amount: int,
        slippage_bps: int | None = None,
        deadline: int | None = None,
    ) -> OptimalPath | None:
        """Best exact-input route across all candidate paths, or None."""
        request = SwapRequest.build(
            token_in=token_in,
            token_out=token_out,
            amount=amount,
            slippage_bps=slippage_bps,
            deadline=deadline,
        )
        return await self.router.find_optimal_path(
            request.token_in,
            request.token_out,
            request.amount,
            TradeType.EXACT_IN,
            request.slippage_bps,
            request.deadline,
        )

    async def get_best_quote(
        self,
        token_in: str,
        token_out: str,
        amount: int,
        trade_type: TradeType = TradeType.EXACT_IN,
        slippage_bps: int | None = None,
        deadline: int | None = None,
    ) -> Quote | None:
        """Best available quote, routing when that beats the direct pool.

        Exact-output quotes use the direct pool only. For exact-input the
        direct quote and the best routed quote are compared; a routed quote
        must give strictly more output to win. A direct pool that cannot be
        read is treated like a missing one.

        Returns:
            The best quote, or None when no route exists
        """
        request = SwapRequest.build(
            token_in=token_in,
            token_out=token_out,
            amount=amount,
            trade_type=trade_type,
            slippage_bps=slippage_bps,
            deadline=deadline,
        )

        direct: Quote | None = None
        try:
            direct = await self.quoter.get_quote(
                request.token_in,
                request.token_out,
                request.amount,
                request.trade_type,
                request.slippage_bps,
                request.deadline,
            )
        except Exception as err:
            error = classify_error(err)
            logger.debug(
                "direct_quote_unavailable", kind=error.kind.value, error=error.message
            )

        if request.trade_type != TradeType.EXACT_IN:
            return direct

        routed = await self.router.find_optimal_path(
            request.token_in,
            request.token_out,
            request.amount,
            TradeType.EXACT_IN,
            request.slippage_bps,
            request.deadline,
        )
        if routed is None:
            return direct
        if direct is None or routed.quote.amount_out > direct.amount_out:
            return routed.quote
        return direct

    async def submit_with_retry_and_poll(
        self,
        intent: Any,
        retry: RetryOptions | None = None,
        polling: PollingOptions | None = None,
        cancel: asyncio.Event | None = None,
    ) -> SubmissionResult:
        """Simulate, sign, broadcast and confirm an intent.

        Retry and polling default to the client config.
        """
        if self.channel is None:
            return SubmissionFailure.from_error(
                SignerError("No submission channel configured")
            )
        return await submit_with_retry_and_poll(
            self.channel,
            intent,
            retry=retry if retry is not None else self.config.retry,
            polling=polling if polling is not None else self.config.polling,
            cancel=cancel,
            sleep=self._sleep,
        )


__all__ = ["SwapClient"]
