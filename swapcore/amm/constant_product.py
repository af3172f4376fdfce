"""Constant product AMM with a dynamic per-pool fee.

Pools price trades with x * y = k. The fee is read from the pool at quote
time (it moves with the pool's volatility state) and applied to the input:

    amount_in_with_fee = amount_in * (10000 - fee_bps)
    amount_out = amount_in_with_fee * R_out / (R_in * 10000 + amount_in_with_fee)

Output is rounded down and required input is rounded up, so the pool's
product never decreases in either direction.
"""

from __future__ import annotations

from swapcore.amm.base import AMM
from swapcore.constants import BPS_DENOMINATOR, MAX_BPS, MAX_PRICE_IMPACT_BPS
from swapcore.errors import (
    InsufficientInputError,
    InsufficientLiquidityError,
    InsufficientOutputError,
    InsufficientReserveError,
    ValidationError,
)
from swapcore.safe_int import S, check_i128


def _check_fee(fee_bps: int) -> int:
    if not 0 <= fee_bps <= MAX_BPS:
        raise ValidationError(
            f"Fee must be within [0, {MAX_BPS}] bps, got {fee_bps}", {"fee_bps": fee_bps}
        )
    return BPS_DENOMINATOR - fee_bps


class ConstantProductAMM(AMM):
    """Constant product math on i128 amounts.

    Intermediate products are exact Python integers; inputs and results are
    validated against the chain's i128 range.
    """

    def get_amount_out(
        self,
        amount_in: int,
        reserve_in: int,
        reserve_out: int,
        fee_bps: int,
    ) -> int:
        """Calculate output amount using the constant product formula.

        Formula: out = (in * f * R_out) / (R_in * 10000 + in * f), f = 10000 - fee_bps

        A fee of 10000 bps yields zero output; a fee of 0 reduces exactly to
        in * R_out / (R_in + in).

        Raises:
            InsufficientInputError: amount_in <= 0
            InsufficientLiquidityError: either reserve <= 0
            ValidationError: fee_bps outside [0, 10000]
        """
        if amount_in <= 0:
            raise InsufficientInputError("Insufficient input amount", {"amount_in": amount_in})
        if reserve_in <= 0 or reserve_out <= 0:
            raise InsufficientLiquidityError(
                "Insufficient liquidity",
                {"reserve_in": reserve_in, "reserve_out": reserve_out},
            )
        fee_factor = _check_fee(fee_bps)
        check_i128(amount_in, "amount_in")
        check_i128(reserve_in, "reserve_in")
        check_i128(reserve_out, "reserve_out")

        amount_in_with_fee = S(amount_in) * S(fee_factor)
        numerator = amount_in_with_fee * S(reserve_out)
        denominator = S(reserve_in) * S(BPS_DENOMINATOR) + amount_in_with_fee

        return (numerator // denominator).to_i128()

    def get_amount_in(
        self,
        amount_out: int,
        reserve_in: int,
        reserve_out: int,
        fee_bps: int,
    ) -> int:
        """Calculate required input for a desired output.

        Formula: in = (R_in * out * 10000) / ((R_out - out) * f) + 1

        The +1 rounds the input up so that get_amount_out(get_amount_in(y)) >= y.

        Raises:
            InsufficientOutputError: amount_out <= 0
            InsufficientLiquidityError: either reserve <= 0, or the fee is
                10000 bps so no input can produce output
            InsufficientReserveError: amount_out >= reserve_out
            ValidationError: fee_bps outside [0, 10000]
        """
        if amount_out <= 0:
            raise InsufficientOutputError(
                "Insufficient output amount", {"amount_out": amount_out}
            )
        if reserve_in <= 0 or reserve_out <= 0:
            raise InsufficientLiquidityError(
                "Insufficient liquidity",
                {"reserve_in": reserve_in, "reserve_out": reserve_out},
            )
        if amount_out >= reserve_out:
            raise InsufficientReserveError(
                "Insufficient reserve for output",
                {"amount_out": amount_out, "reserve_out": reserve_out},
            )
        fee_factor = _check_fee(fee_bps)
        if fee_factor == 0:
            raise InsufficientLiquidityError(
                "Pool fee consumes the entire input", {"fee_bps": fee_bps}
            )
        check_i128(amount_out, "amount_out")
        check_i128(reserve_in, "reserve_in")
        check_i128(reserve_out, "reserve_out")

        numerator = S(reserve_in) * S(amount_out) * S(BPS_DENOMINATOR)
        denominator = (S(reserve_out) - S(amount_out)) * S(fee_factor)

        return ((numerator // denominator) + S(1)).to_i128()

    def price_impact_bps(
        self,
        amount_in: int,
        amount_out: int,
        reserve_in: int,
        reserve_out: int,
    ) -> int:
        """Price impact against the zero-size reference output.

        ideal = floor(in * R_out / R_in); impact = floor((ideal - out) * 10000 / ideal).
        Returns 10000 when a reserve or the ideal output is zero.
        """
        if reserve_in <= 0 or reserve_out <= 0:
            return MAX_PRICE_IMPACT_BPS
        ideal_out = (amount_in * reserve_out) // reserve_in
        if ideal_out == 0:
            return MAX_PRICE_IMPACT_BPS
        return ((ideal_out - amount_out) * BPS_DENOMINATOR) // ideal_out

    @staticmethod
    def fee_amount(amount_in: int, fee_bps: int) -> int:
        """Fee charged on an input amount, in input token units (rounded down)."""
        return (amount_in * fee_bps) // BPS_DENOMINATOR

    @staticmethod
    def amount_out_min(amount_out: int, slippage_bps: int) -> int:
        """Minimum acceptable output after applying a slippage tolerance.

        Raises:
            ValidationError: slippage_bps outside [0, 10000]
        """
        if not 0 <= slippage_bps <= MAX_BPS:
            raise ValidationError(
                f"Slippage must be within [0, {MAX_BPS}] bps, got {slippage_bps}",
                {"slippage_bps": slippage_bps},
            )
        return amount_out - (amount_out * slippage_bps) // BPS_DENOMINATOR


# Singleton instance for convenience
constant_product = ConstantProductAMM()


__all__ = ["ConstantProductAMM", "constant_product"]
