"""AMM pricing implementations."""

from swapcore.amm.base import AMM
from swapcore.amm.constant_product import ConstantProductAMM, constant_product

__all__ = ["AMM", "ConstantProductAMM", "constant_product"]
