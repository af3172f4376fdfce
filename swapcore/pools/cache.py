"""Pair address cache.

Maps a canonical (sorted) token pair to its pool id. The cache is an
explicit object owned by whoever constructs it (normally SwapClient), never
module-level state; switching networks must call clear().
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from swapcore.models.types import sort_tokens
from swapcore.pools.oracle import PoolOracle

logger = structlog.get_logger()


class PairCache:
    """Cache of pair -> pool id lookups, including known-missing pairs."""

    def __init__(self) -> None:
        self._entries: dict[tuple[str, str], str | None] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, pair: tuple[str, str]) -> bool:
        return sort_tokens(*pair) in self._entries

    async def get_pair_address(
        self,
        oracle: PoolOracle,
        token_a: str,
        token_b: str,
        bypass_cache: bool = False,
    ) -> str | None:
        """Resolve the pool id for a pair, consulting the cache first.

        Args:
            oracle: Oracle used on a cache miss
            token_a: First token
            token_b: Second token
            bypass_cache: Query the oracle even if the pair is cached

        Returns:
            Pool id, or None if the pair has no pool
        """
        key = sort_tokens(token_a, token_b)
        if not bypass_cache and key in self._entries:
            return self._entries[key]

        pool_id = await oracle.get_pair(*key)
        self._entries[key] = pool_id
        logger.debug("pair_cache_miss", token0=key[0], token1=key[1], pool_id=pool_id)
        return pool_id

    def preload(self, pairs: Iterable[tuple[str, str, str]]) -> None:
        """Seed the cache with known (token_a, token_b, pool_id) triples."""
        for token_a, token_b, pool_id in pairs:
            self._entries[sort_tokens(token_a, token_b)] = pool_id

    def clear(self) -> None:
        """Drop all cached lookups."""
        self._entries.clear()


__all__ = ["PairCache"]
