"""Type definitions for routing module."""

from __future__ import annotations

from dataclasses import dataclass, field

from swapcore.constants import BPS_DENOMINATOR, MAX_PRICE_IMPACT_BPS
from swapcore.math.fraction import Percent
from swapcore.models.types import TradeType


@dataclass(frozen=True)
class Hop:
    """Result of pricing one pool traversal."""

    pool_id: str
    token_in: str
    token_out: str
    amount_in: int
    amount_out: int
    fee_bps: int
    # Fee deducted on this hop, in token_in units
    fee_amount: int
    price_impact_bps: int


@dataclass(frozen=True)
class DirectRoute:
    """Route through a single pool."""

    hop: Hop

    @property
    def hops(self) -> tuple[Hop, ...]:
        return (self.hop,)


@dataclass(frozen=True)
class ChainedRoute:
    """Route through two or more pools, each hop feeding the next."""

    hops: tuple[Hop, ...]

    def __post_init__(self) -> None:
        if len(self.hops) < 2:
            raise ValueError(f"ChainedRoute needs at least 2 hops, got {len(self.hops)}")
        for prev, nxt in zip(self.hops, self.hops[1:]):
            if prev.token_out != nxt.token_in or prev.amount_out != nxt.amount_in:
                raise ValueError(
                    f"Hop {nxt.token_in} does not continue from {prev.token_out}"
                )


Route = DirectRoute | ChainedRoute


def compound_bps(values: list[int]) -> int:
    """Combine per-hop bps deductions into one effective deduction.

    1 - prod(1 - v_i), rounded up so the aggregate never understates.
    """
    kept_num = 1
    kept_den = 1
    for value in values:
        kept_num *= BPS_DENOMINATOR - value
        kept_den *= BPS_DENOMINATOR
    lost = kept_den - kept_num
    combined = -((-lost * BPS_DENOMINATOR) // kept_den)  # ceiling division
    return max(0, min(MAX_PRICE_IMPACT_BPS, combined))


@dataclass(frozen=True)
class Quote:
    """A priced, slippage-bounded swap.

    For exact-input quotes amount_in is the caller's amount and amount_out is
    derived; for exact-output quotes the reverse. Aggregate fee and price
    impact for chained routes compound the per-hop values.
    """

    token_in: str
    token_out: str
    amount_in: int
    amount_out: int
    amount_out_min: int
    price_impact_bps: int
    fee_bps: int
    # Aggregate fee, in token_in units
    fee_amount: int
    path: tuple[str, ...]
    deadline: int
    route: Route
    trade_type: TradeType = TradeType.EXACT_IN

    def __post_init__(self) -> None:
        if len(self.path) < 2:
            raise ValueError(f"Quote path needs at least 2 tokens, got {len(self.path)}")
        if self.amount_out_min > self.amount_out:
            raise ValueError(
                f"amount_out_min {self.amount_out_min} exceeds amount_out {self.amount_out}"
            )

    @property
    def hops(self) -> tuple[Hop, ...]:
        return self.route.hops

    @property
    def is_multihop(self) -> bool:
        return isinstance(self.route, ChainedRoute)

    @property
    def price_impact(self) -> Percent:
        return Percent.from_bps(self.price_impact_bps)

    @property
    def fee(self) -> Percent:
        return Percent.from_bps(self.fee_bps)


@dataclass(frozen=True)
class OptimalPath:
    """Best route found by the selector."""

    path: list[str]
    quote: Quote
    # Number of candidate paths that produced a valid quote
    candidates_priced: int = field(default=1, compare=False)


__all__ = [
    "Hop",
    "DirectRoute",
    "ChainedRoute",
    "Route",
    "Quote",
    "OptimalPath",
    "compound_bps",
]
