"""Exact arithmetic helpers."""

from swapcore.math.fraction import Fraction, Percent, Rounding

__all__ = ["Fraction", "Percent", "Rounding"]
