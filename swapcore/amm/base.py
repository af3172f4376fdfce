"""Base class for AMM pricing implementations."""

from abc import ABC, abstractmethod


class AMM(ABC):
    """Abstract pricing curve.

    Implementations work on reserves already oriented to the trade direction
    (reserve_in for the token sold, reserve_out for the token bought) and a
    per-pool fee in basis points read at quote time.
    """

    @abstractmethod
    def get_amount_out(
        self,
        amount_in: int,
        reserve_in: int,
        reserve_out: int,
        fee_bps: int,
    ) -> int:
        """Calculate output amount for a given input.

        Args:
            amount_in: Input token amount
            reserve_in: Reserve of input token in pool
            reserve_out: Reserve of output token in pool
            fee_bps: Pool fee in basis points

        Returns:
            Output token amount (rounded down)
        """
        ...

    @abstractmethod
    def get_amount_in(
        self,
        amount_out: int,
        reserve_in: int,
        reserve_out: int,
        fee_bps: int,
    ) -> int:
        """Calculate required input for a desired output.

        Args:
            amount_out: Desired output token amount
            reserve_in: Reserve of input token in pool
            reserve_out: Reserve of output token in pool
            fee_bps: Pool fee in basis points

        Returns:
            Required input token amount (rounded up)
        """
        ...

    @abstractmethod
    def price_impact_bps(
        self,
        amount_in: int,
        amount_out: int,
        reserve_in: int,
        reserve_out: int,
    ) -> int:
        """Deviation of the execution price from the spot price, in bps."""
        ...
