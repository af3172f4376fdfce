"""Tests for RouteSelector."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from swapcore.errors import ValidationError
from swapcore.models import TradeType
from swapcore.routing import ChainedRoute, RouteSelector, SwapQuoter
from tests.helpers import AQUA, EURC, USDC, XLM, InMemoryPoolOracle


def make_selector(oracle: InMemoryPoolOracle) -> RouteSelector:
    return RouteSelector(SwapQuoter(oracle))


class TestFindOptimalPath:
    """Tests for best-route selection."""

    @pytest.mark.asyncio
    async def test_deep_two_hop_beats_shallow_direct(self):
        """A thin direct pool loses to a two-hop route through deep pools."""
        oracle = InMemoryPoolOracle()
        oracle.add_pool("direct", XLM, USDC, 10_000, 10_000)
        oracle.add_pool("xlm-eurc", XLM, EURC, 1_000_000, 1_000_000)
        oracle.add_pool("eurc-usdc", EURC, USDC, 1_000_000, 1_000_000)

        result = await make_selector(oracle).find_optimal_path(XLM, USDC, 5000)

        assert result is not None
        assert result.path == [XLM, EURC, USDC]
        assert result.quote.amount_out == 4920
        assert isinstance(result.quote.route, ChainedRoute)
        assert result.candidates_priced == 2

    @pytest.mark.asyncio
    async def test_direct_wins_when_deeper(self):
        oracle = InMemoryPoolOracle()
        oracle.add_pool("direct", XLM, USDC, 1_000_000, 1_000_000)
        oracle.add_pool("xlm-eurc", XLM, EURC, 10_000, 10_000)
        oracle.add_pool("eurc-usdc", EURC, USDC, 10_000, 10_000)

        result = await make_selector(oracle).find_optimal_path(XLM, USDC, 5000)

        assert result is not None
        assert result.path == [XLM, USDC]
        assert result.quote.amount_out == 4960

    @pytest.mark.asyncio
    async def test_tie_keeps_first_enumerated(self):
        oracle = InMemoryPoolOracle()
        for mid in (EURC, AQUA):
            oracle.add_pool(f"xlm-{mid}", XLM, mid, 1_000_000, 1_000_000)
            oracle.add_pool(f"{mid}-usdc", mid, USDC, 1_000_000, 1_000_000)

        result = await make_selector(oracle).find_optimal_path(XLM, USDC, 5000)

        assert result is not None
        assert result.path == [XLM, AQUA, USDC]

    @pytest.mark.asyncio
    async def test_exact_out_rejected(self):
        oracle = InMemoryPoolOracle()
        oracle.add_pool("direct", XLM, USDC, 10_000, 10_000)
        with pytest.raises(ValidationError):
            await make_selector(oracle).find_optimal_path(XLM, USDC, 5000, TradeType.EXACT_OUT)

    @pytest.mark.asyncio
    async def test_no_route(self):
        oracle = InMemoryPoolOracle()
        oracle.add_pool("direct", XLM, USDC, 10_000, 10_000)
        assert await make_selector(oracle).find_optimal_path(XLM, EURC, 5000) is None

    @pytest.mark.asyncio
    async def test_failing_candidate_is_skipped(self):
        oracle = InMemoryPoolOracle()
        oracle.add_pool("direct", XLM, USDC, 0, 0)
        oracle.add_pool("xlm-eurc", XLM, EURC, 1_000_000, 1_000_000)
        oracle.add_pool("eurc-usdc", EURC, USDC, 1_000_000, 1_000_000)

        result = await make_selector(oracle).find_optimal_path(XLM, USDC, 5000)

        assert result is not None
        assert result.path == [XLM, EURC, USDC]
        assert result.candidates_priced == 1

    @pytest.mark.asyncio
    async def test_all_candidates_fail(self):
        oracle = InMemoryPoolOracle()
        oracle.add_pool("direct", XLM, USDC, 100_000, 100_000, fee_bps=10_001)
        assert await make_selector(oracle).find_optimal_path(XLM, USDC, 5000) is None

    @pytest.mark.asyncio
    async def test_transport_failure_on_one_path_is_skipped(self):
        """A reserve read that fails at the socket drops only that path."""
        oracle = InMemoryPoolOracle()
        oracle.add_pool("direct", XLM, USDC, 1_000_000, 1_000_000)
        oracle.add_pool("xlm-eurc", XLM, EURC, 1_000_000, 1_000_000)
        oracle.add_pool("eurc-usdc", EURC, USDC, 1_000_000, 1_000_000)
        oracle.reserve_errors["direct"] = ConnectionResetError("socket hang up")

        result = await make_selector(oracle).find_optimal_path(XLM, USDC, 5000)

        assert result is not None
        assert result.path == [XLM, EURC, USDC]
        assert result.quote.amount_out == 4920
        assert result.candidates_priced == 1

    @pytest.mark.asyncio
    async def test_untyped_errors_are_skipped(self):
        oracle = InMemoryPoolOracle()
        oracle.add_pool("direct", XLM, USDC, 100_000, 100_000)
        quoter = SwapQuoter(oracle)
        quoter.get_multi_hop_quote = AsyncMock(side_effect=TypeError("bad operand"))

        assert await RouteSelector(quoter).find_optimal_path(XLM, USDC, 5000) is None

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self):
        oracle = InMemoryPoolOracle()
        oracle.add_pool("direct", XLM, USDC, 100_000, 100_000)
        quoter = SwapQuoter(oracle)
        quoter.get_multi_hop_quote = AsyncMock(side_effect=asyncio.CancelledError())

        with pytest.raises(asyncio.CancelledError):
            await RouteSelector(quoter).find_optimal_path(XLM, USDC, 5000)

    @pytest.mark.asyncio
    async def test_candidates_share_deadline(self):
        oracle = InMemoryPoolOracle()
        oracle.add_pool("direct", XLM, USDC, 10_000, 10_000)
        selector = RouteSelector(SwapQuoter(oracle, clock=lambda: 1000))

        result = await selector.find_optimal_path(XLM, USDC, 5000)

        assert result is not None
        assert result.quote.deadline == 1000 + 1200
