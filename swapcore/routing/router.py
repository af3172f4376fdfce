"""Route selection across candidate paths.

Candidate paths come from a freshly built token graph. Each is priced
independently and concurrently; hops within a path stay sequential. The
route with the strictly greatest output wins, and ties keep the path that
was enumerated first (shorter paths enumerate first).
"""

from __future__ import annotations

import asyncio

import structlog

from swapcore.constants import DEFAULT_MAX_HOPS
from swapcore.errors import ValidationError, classify_error
from swapcore.models.types import TradeType
from swapcore.routing.pathfinding import PathFinder, TokenGraph
from swapcore.routing.quoter import SwapQuoter
from swapcore.routing.types import OptimalPath, Quote

logger = structlog.get_logger()


class RouteSelector:
    """Finds the best exact-input route between two tokens.

    Args:
        quoter: Prices individual paths
        path_finder: Enumerates candidate paths; built on the quoter's
            oracle when omitted
        max_hops: Maximum pools per route
    """

    def __init__(
        self,
        quoter: SwapQuoter,
        path_finder: PathFinder | None = None,
        max_hops: int = DEFAULT_MAX_HOPS,
    ) -> None:
        self.quoter = quoter
        self.max_hops = max_hops
        self.path_finder = path_finder if path_finder is not None else PathFinder(
            quoter.oracle, max_hops=max_hops
        )

    async def _price_path(
        self,
        graph: TokenGraph,
        path: list[str],
        amount: int,
        slippage_bps: int | None,
        deadline: int | None,
    ) -> Quote:
        return await self.quoter.get_multi_hop_quote(
            path,
            amount,
            TradeType.EXACT_IN,
            slippage_bps=slippage_bps,
            deadline=deadline,
            graph=graph,
        )

    async def find_optimal_path(
        self,
        token_in: str,
        token_out: str,
        amount: int,
        trade_type: TradeType = TradeType.EXACT_IN,
        slippage_bps: int | None = None,
        deadline: int | None = None,
    ) -> OptimalPath | None:
        """Price every candidate path and return the best one.

        A path that raises (no liquidity, a missing pool, an RPC failure
        reading one of its pools) is skipped and the remaining candidates
        are still compared. Only task cancellation propagates.

        Args:
            token_in: Input token
            token_out: Output token
            amount: Exact input amount
            trade_type: Must be EXACT_IN
            slippage_bps: Override for the quoter's default slippage
            deadline: Explicit deadline timestamp

        Returns:
            The best path and its quote, or None if no path produced a quote

        Raises:
            ValidationError: If trade_type is not EXACT_IN
        """
        if trade_type != TradeType.EXACT_IN:
            raise ValidationError(
                "Route search only supports EXACT_IN",
                {"trade_type": trade_type.value},
            )

        graph, paths = await self.path_finder.find_paths(token_in, token_out, self.max_hops)
        if not paths:
            logger.debug("no_candidate_paths", token_in=token_in, token_out=token_out)
            return None

        if deadline is None:
            deadline = self.quoter.deadline()

        results = await asyncio.gather(
            *(self._price_path(graph, path, amount, slippage_bps, deadline) for path in paths),
            return_exceptions=True,
        )

        best: OptimalPath | None = None
        priced = 0
        for path, result in zip(paths, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                error = classify_error(result)
                logger.debug(
                    "candidate_path_failed",
                    path=path,
                    kind=error.kind.value,
                    error=error.message,
                )
                continue

            priced += 1
            if best is None or result.amount_out > best.quote.amount_out:
                best = OptimalPath(path=path, quote=result)

        if best is None:
            logger.debug("no_route_priced", token_in=token_in, token_out=token_out, candidates=len(paths))
            return None

        logger.debug(
            "optimal_path_selected",
            path=best.path,
            amount_in=amount,
            amount_out=best.quote.amount_out,
            candidates=len(paths),
            priced=priced,
        )
        return OptimalPath(path=best.path, quote=best.quote, candidates_priced=priced)


__all__ = ["RouteSelector"]
