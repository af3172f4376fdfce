"""Tests for pathfinding module."""

import pytest

from swapcore.routing.pathfinding import PathFinder, TokenGraph, find_all_paths
from tests.helpers import InMemoryPoolOracle

# Short ids keep expected paths readable; enumeration order is lexicographic
TOKEN_A = "CA"
TOKEN_B = "CB"
TOKEN_C = "CC"
TOKEN_D = "CD"
TOKEN_E = "CE"


class TestTokenGraph:
    """Tests for TokenGraph class."""

    def test_empty(self):
        graph = TokenGraph.from_pairs([])
        assert graph.token_count == 0

    def test_single_pair(self):
        graph = TokenGraph.from_pairs([(TOKEN_A, TOKEN_B)])

        assert graph.token_count == 2
        assert TOKEN_B in graph.get_neighbors(TOKEN_A)
        assert TOKEN_A in graph.get_neighbors(TOKEN_B)

    def test_tokens_are_case_sensitive(self):
        graph = TokenGraph.from_pairs([(TOKEN_A, TOKEN_B)])
        assert graph.has_token(TOKEN_A)
        assert not graph.has_token(TOKEN_A.lower())

    def test_pool_lookup_either_direction(self):
        graph = TokenGraph.from_pairs([(TOKEN_A, TOKEN_B)])
        assert graph.pool_for(TOKEN_A, TOKEN_B) == graph.pool_for(TOKEN_B, TOKEN_A)
        assert graph.pool_for(TOKEN_A, TOKEN_C) is None

    @pytest.mark.asyncio
    async def test_from_oracle(self):
        oracle = InMemoryPoolOracle()
        oracle.add_pool("p1", TOKEN_A, TOKEN_B, 1, 1)
        oracle.add_pool("p2", TOKEN_B, TOKEN_C, 1, 1)

        graph = await TokenGraph.from_oracle(oracle)

        assert graph.token_count == 3
        assert graph.pool_count == 2
        assert graph.pool_for(TOKEN_C, TOKEN_B) == "p2"

    @pytest.mark.asyncio
    async def test_from_oracle_skips_unreadable_pools(self):
        oracle = InMemoryPoolOracle()
        oracle.add_pool("p1", TOKEN_A, TOKEN_B, 1, 1)
        oracle.add_pool("p2", TOKEN_B, TOKEN_C, 1, 1)
        oracle.failing_pools.add("p2")

        graph = await TokenGraph.from_oracle(oracle)

        assert graph.pool_count == 1
        assert not graph.has_token(TOKEN_C)


class TestFindAllPaths:
    """Tests for breadth-first path enumeration."""

    def test_two_hop(self):
        graph = TokenGraph.from_pairs([(TOKEN_A, TOKEN_B), (TOKEN_B, TOKEN_C)])
        assert find_all_paths(graph, TOKEN_A, TOKEN_C) == [[TOKEN_A, TOKEN_B, TOKEN_C]]

    def test_direct(self):
        graph = TokenGraph.from_pairs([(TOKEN_A, TOKEN_B)])
        assert find_all_paths(graph, TOKEN_A, TOKEN_B) == [[TOKEN_A, TOKEN_B]]

    def test_no_path(self):
        graph = TokenGraph.from_pairs([(TOKEN_A, TOKEN_B), (TOKEN_C, TOKEN_D)])
        assert find_all_paths(graph, TOKEN_A, TOKEN_D) == []

    def test_unknown_token(self):
        graph = TokenGraph.from_pairs([(TOKEN_A, TOKEN_B)])
        assert find_all_paths(graph, TOKEN_A, TOKEN_E) == []

    def test_same_token(self):
        graph = TokenGraph.from_pairs([(TOKEN_A, TOKEN_B)])
        assert find_all_paths(graph, TOKEN_A, TOKEN_A) == []

    def test_four_hop_path_excluded(self):
        graph = TokenGraph.from_pairs(
            [(TOKEN_A, TOKEN_B), (TOKEN_B, TOKEN_C), (TOKEN_C, TOKEN_D), (TOKEN_D, TOKEN_E)]
        )
        assert find_all_paths(graph, TOKEN_A, TOKEN_E) == []
        assert find_all_paths(graph, TOKEN_A, TOKEN_E, max_hops=4) == [
            [TOKEN_A, TOKEN_B, TOKEN_C, TOKEN_D, TOKEN_E]
        ]

    def test_three_hop_included(self):
        graph = TokenGraph.from_pairs([(TOKEN_A, TOKEN_B), (TOKEN_B, TOKEN_C), (TOKEN_C, TOKEN_D)])
        assert find_all_paths(graph, TOKEN_A, TOKEN_D) == [[TOKEN_A, TOKEN_B, TOKEN_C, TOKEN_D]]

    def test_all_simple_paths_shortest_first(self):
        graph = TokenGraph.from_pairs(
            [(TOKEN_A, TOKEN_B), (TOKEN_A, TOKEN_C), (TOKEN_C, TOKEN_B), (TOKEN_C, TOKEN_D), (TOKEN_D, TOKEN_B)]
        )
        paths = find_all_paths(graph, TOKEN_A, TOKEN_B)
        assert paths == [
            [TOKEN_A, TOKEN_B],
            [TOKEN_A, TOKEN_C, TOKEN_B],
            [TOKEN_A, TOKEN_C, TOKEN_D, TOKEN_B],
        ]

    def test_never_revisits_a_token(self):
        graph = TokenGraph.from_pairs([(TOKEN_A, TOKEN_B), (TOKEN_B, TOKEN_C), (TOKEN_C, TOKEN_A)])
        for path in find_all_paths(graph, TOKEN_A, TOKEN_C):
            assert len(path) == len(set(path))


class TestPathFinder:
    """Tests for the PathFinder facade."""

    @pytest.mark.asyncio
    async def test_rebuilds_graph_every_call(self):
        oracle = InMemoryPoolOracle()
        oracle.add_pool("p1", TOKEN_A, TOKEN_B, 1, 1)
        finder = PathFinder(oracle)

        _, paths = await finder.find_paths(TOKEN_A, TOKEN_C)
        assert paths == []

        oracle.add_pool("p2", TOKEN_B, TOKEN_C, 1, 1)
        graph, paths = await finder.find_paths(TOKEN_A, TOKEN_C)

        assert paths == [[TOKEN_A, TOKEN_B, TOKEN_C]]
        assert graph.pool_for(TOKEN_B, TOKEN_C) == "p2"
        assert oracle.calls["list_pools"] == 2
