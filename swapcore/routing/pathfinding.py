"""Token graph and pathfinding for multi-hop routing.

The graph is rebuilt from the oracle's full pool set on every path search.
Rebuilding is cheap next to the RPC round-trips needed to price each
candidate, and it avoids serving routes through pools that have since
changed.
"""

from __future__ import annotations

import asyncio
from collections import deque
from collections.abc import Iterable

import structlog

from swapcore.constants import DEFAULT_MAX_HOPS
from swapcore.models.types import normalize_token, sort_tokens
from swapcore.pools.oracle import PoolOracle, read_pool_tokens
from swapcore.pools.types import PoolTokens

logger = structlog.get_logger()


class TokenGraph:
    """Undirected graph of tokens connected by pools.

    Edges are tradeable token pairs. The graph also remembers which pool
    backs each edge so that hops can be priced without another pair lookup.
    """

    def __init__(self) -> None:
        self._adjacency: dict[str, set[str]] = {}
        self._pools: dict[tuple[str, str], str] = {}

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> TokenGraph:
        """Build a graph from bare token pairs (pool ids are synthesized)."""
        graph = cls()
        for token_a, token_b in pairs:
            key = sort_tokens(token_a, token_b)
            graph.add_pool(PoolTokens(pool_id=f"{key[0]}:{key[1]}", token0=key[0], token1=key[1]))
        return graph

    @classmethod
    async def from_oracle(cls, oracle: PoolOracle) -> TokenGraph:
        """Build a graph from every pool the oracle lists.

        Token pairs are read concurrently. A pool whose tokens cannot be read
        is left out of the graph.
        """
        pool_ids = await oracle.list_pools()
        results = await asyncio.gather(
            *(read_pool_tokens(oracle, pool_id) for pool_id in pool_ids),
            return_exceptions=True,
        )

        graph = cls()
        for pool_id, result in zip(pool_ids, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                logger.debug("pool_tokens_unreadable", pool_id=pool_id, error=str(result))
                continue
            if result.token0 == result.token1:
                logger.debug("pool_tokens_identical", pool_id=pool_id, token=result.token0)
                continue
            graph.add_pool(result)

        logger.debug(
            "token_graph_built",
            pools_listed=len(pool_ids),
            pools_added=len(graph._pools),
            tokens=graph.token_count,
        )
        return graph

    def add_pool(self, pool: PoolTokens) -> None:
        """Add a bidirectional edge for a pool. The first pool seen for a pair wins."""
        token_a, token_b = pool.token0, pool.token1
        self._adjacency.setdefault(token_a, set()).add(token_b)
        self._adjacency.setdefault(token_b, set()).add(token_a)
        self._pools.setdefault(sort_tokens(token_a, token_b), pool.pool_id)

    def get_neighbors(self, token: str) -> set[str]:
        """Tokens directly tradeable with `token`."""
        return self._adjacency.get(normalize_token(token), set())

    def has_token(self, token: str) -> bool:
        return normalize_token(token) in self._adjacency

    def pool_for(self, token_a: str, token_b: str) -> str | None:
        """Pool id backing the edge between two tokens, if any."""
        if normalize_token(token_a) == normalize_token(token_b):
            return None
        return self._pools.get(sort_tokens(token_a, token_b))

    @property
    def token_count(self) -> int:
        """Number of unique tokens in the graph."""
        return len(self._adjacency)

    @property
    def pool_count(self) -> int:
        return len(self._pools)


def find_all_paths(
    graph: TokenGraph,
    start: str,
    end: str,
    max_hops: int = DEFAULT_MAX_HOPS,
) -> list[list[str]]:
    """Enumerate every simple path from start to end within max_hops.

    Breadth-first: each queue entry carries its partial path, so shorter
    paths come out first. A path is accepted when it reaches `end`, pruned
    once it holds more than max_hops tokens without arriving, and never
    revisits a token already on it.

    Path shapes by hops (max_hops=3):
    - Direct (1 hop): [start, end]
    - 2-hop: [start, mid, end]
    - 3-hop: [start, mid1, mid2, end]

    Worst case is exponential in graph density; the hop bound keeps it small.

    Args:
        graph: Token graph
        start: Source token
        end: Destination token
        max_hops: Maximum number of pools traversed (default 3)

    Returns:
        List of token paths; empty if start == end or no path exists.
    """
    start_norm = normalize_token(start)
    end_norm = normalize_token(end)
    if start_norm == end_norm or max_hops < 1:
        return []
    if not graph.has_token(start_norm) or not graph.has_token(end_norm):
        return []

    paths: list[list[str]] = []
    queue: deque[list[str]] = deque([[start_norm]])

    while queue:
        path = queue.popleft()
        current = path[-1]

        if current == end_norm:
            if len(path) > 1:
                paths.append(path)
            continue

        if len(path) > max_hops:
            continue

        # Sorted for deterministic enumeration order
        for neighbor in sorted(graph.get_neighbors(current)):
            if neighbor not in path:
                queue.append(path + [neighbor])

    return paths


class PathFinder:
    """Facade that rebuilds the token graph per search.

    Usage:
        finder = PathFinder(oracle)
        graph, paths = await finder.find_paths(token_in, token_out)
    """

    def __init__(self, oracle: PoolOracle, max_hops: int = DEFAULT_MAX_HOPS) -> None:
        self._oracle = oracle
        self.max_hops = max_hops

    async def build_graph(self) -> TokenGraph:
        return await TokenGraph.from_oracle(self._oracle)

    async def find_paths(
        self,
        token_in: str,
        token_out: str,
        max_hops: int | None = None,
    ) -> tuple[TokenGraph, list[list[str]]]:
        """Rebuild the graph and enumerate candidate paths.

        Returns:
            The freshly built graph (for pool lookups) and the candidate paths
        """
        graph = await self.build_graph()
        hops = self.max_hops if max_hops is None else max_hops
        paths = find_all_paths(graph, token_in, token_out, hops)
        logger.debug(
            "paths_found",
            token_in=token_in,
            token_out=token_out,
            max_hops=hops,
            count=len(paths),
        )
        return graph, paths


__all__ = ["TokenGraph", "PathFinder", "find_all_paths"]
