"""Pytest configuration and fixtures."""

import pytest

from swapcore.pools.cache import PairCache
from swapcore.routing.quoter import SwapQuoter
from tests.helpers import (
    FIXED_NOW,
    USDC,
    XLM,
    FakeSubmissionChannel,
    InMemoryPoolOracle,
    RecordingSleep,
)


@pytest.fixture
def oracle() -> InMemoryPoolOracle:
    """Oracle with a single XLM/USDC pool (100k / 100k, 30 bps)."""
    oracle = InMemoryPoolOracle()
    oracle.add_pool("pool-xlm-usdc", XLM, USDC, 100_000, 100_000)
    return oracle


@pytest.fixture
def empty_oracle() -> InMemoryPoolOracle:
    return InMemoryPoolOracle()


@pytest.fixture
def pair_cache() -> PairCache:
    return PairCache()


@pytest.fixture
def quoter(oracle: InMemoryPoolOracle) -> SwapQuoter:
    """Quoter over the default oracle with a frozen clock."""
    return SwapQuoter(oracle, clock=lambda: FIXED_NOW)


@pytest.fixture
def channel() -> FakeSubmissionChannel:
    return FakeSubmissionChannel()


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()
