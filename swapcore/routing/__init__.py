"""Pathfinding, quoting and route selection."""

from swapcore.routing.pathfinding import PathFinder, TokenGraph, find_all_paths
from swapcore.routing.quoter import SwapQuoter
from swapcore.routing.router import RouteSelector
from swapcore.routing.types import (
    ChainedRoute,
    DirectRoute,
    Hop,
    OptimalPath,
    Quote,
    Route,
    compound_bps,
)

__all__ = [
    "ChainedRoute",
    "DirectRoute",
    "Hop",
    "OptimalPath",
    "PathFinder",
    "Quote",
    "Route",
    "RouteSelector",
    "SwapQuoter",
    "TokenGraph",
    "compound_bps",
    "find_all_paths",
]
