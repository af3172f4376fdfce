"""Pool state access and pair lookup."""

from swapcore.pools.cache import PairCache
from swapcore.pools.oracle import PoolOracle, read_pool_snapshot, read_pool_tokens
from swapcore.pools.types import PoolSnapshot, PoolTokens, Reserves

__all__ = [
    "PairCache",
    "PoolOracle",
    "PoolSnapshot",
    "PoolTokens",
    "Reserves",
    "read_pool_snapshot",
    "read_pool_tokens",
]
