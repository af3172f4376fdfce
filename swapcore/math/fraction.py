"""Exact rational arithmetic for quotes and percentage rendering.

Fractions keep an integer numerator and denominator and never go through
floating point. Arithmetic results are left unreduced; only their value is
meaningful, so equality and ordering use cross-multiplication.

Formatting supports three rounding modes and handles carries across a power
of ten (99.9 at 2 significant digits renders as "100"). Magnitudes are found
with exact integer comparisons, not logarithms.
"""

from __future__ import annotations

from enum import Enum
from math import gcd

from swapcore.safe_int import DivisionByZero

__all__ = ["Fraction", "Percent", "Rounding"]


class Rounding(Enum):
    """Rounding mode for decimal rendering."""

    ROUND_DOWN = "round_down"  # toward zero
    ROUND_HALF_UP = "round_half_up"  # ties away from zero
    ROUND_UP = "round_up"  # away from zero


def _divide_with_rounding(numerator: int, denominator: int, rounding: Rounding) -> int:
    """Divide two integers, rounding the magnitude and reapplying the sign."""
    if denominator == 0:
        raise DivisionByZero(f"Division by zero: {numerator} / 0")
    quotient, remainder = divmod(abs(numerator), abs(denominator))
    if remainder:
        if rounding is Rounding.ROUND_UP:
            quotient += 1
        elif rounding is Rounding.ROUND_HALF_UP and remainder * 2 >= abs(denominator):
            quotient += 1
    negative = (numerator < 0) != (denominator < 0)
    return -quotient if negative else quotient


def _magnitude(numerator: int, denominator: int) -> int:
    """Return e such that 10**e <= numerator/denominator < 10**(e+1).

    Both arguments must be positive. The digit-count difference is either
    the exponent or one more than it; a single exact comparison decides.
    """
    estimate = len(str(numerator)) - len(str(denominator))
    if estimate >= 0:
        at_least = numerator >= denominator * 10**estimate
    else:
        at_least = numerator * 10**-estimate >= denominator
    return estimate if at_least else estimate - 1


class Fraction:
    """Immutable exact fraction with arbitrary-precision integer terms."""

    __slots__ = ("_numerator", "_denominator")

    def __init__(self, numerator: int, denominator: int = 1) -> None:
        if isinstance(numerator, bool) or not isinstance(numerator, int):
            raise TypeError(f"Fraction numerator must be int, got {type(numerator).__name__}")
        if isinstance(denominator, bool) or not isinstance(denominator, int):
            raise TypeError(
                f"Fraction denominator must be int, got {type(denominator).__name__}"
            )
        if denominator == 0:
            raise DivisionByZero(f"Fraction with zero denominator: {numerator}/0")
        self._numerator = numerator
        self._denominator = denominator

    @classmethod
    def from_amount(cls, amount: int, decimals: int) -> Fraction:
        """Convert a raw token amount into display units (amount / 10**decimals)."""
        if decimals < 0:
            raise ValueError(f"decimals must be non-negative, got {decimals}")
        return cls(amount, 10**decimals)

    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    @property
    def quotient(self) -> int:
        """Integer part, truncated toward zero."""
        return _divide_with_rounding(self._numerator, self._denominator, Rounding.ROUND_DOWN)

    @property
    def remainder(self) -> Fraction:
        """Fractional part with the sign of the value."""
        return Fraction(self._numerator - self.quotient * self._denominator, self._denominator)

    def __repr__(self) -> str:
        return f"Fraction({self._numerator}, {self._denominator})"

    # --- Arithmetic ---

    def invert(self) -> Fraction:
        """Swap numerator and denominator.

        Raises:
            DivisionByZero: If the fraction is zero
        """
        return Fraction(self._denominator, self._numerator)

    def add(self, other: Fraction | int) -> Fraction:
        other = _coerce(other)
        if self._denominator == other._denominator:
            return Fraction(self._numerator + other._numerator, self._denominator)
        return Fraction(
            self._numerator * other._denominator + other._numerator * self._denominator,
            self._denominator * other._denominator,
        )

    def subtract(self, other: Fraction | int) -> Fraction:
        other = _coerce(other)
        if self._denominator == other._denominator:
            return Fraction(self._numerator - other._numerator, self._denominator)
        return Fraction(
            self._numerator * other._denominator - other._numerator * self._denominator,
            self._denominator * other._denominator,
        )

    def multiply(self, other: Fraction | int) -> Fraction:
        other = _coerce(other)
        return Fraction(
            self._numerator * other._numerator, self._denominator * other._denominator
        )

    def divide(self, other: Fraction | int) -> Fraction:
        """Divide by other.

        Raises:
            DivisionByZero: If other is zero
        """
        other = _coerce(other)
        return Fraction(
            self._numerator * other._denominator, self._denominator * other._numerator
        )

    __add__ = add
    __sub__ = subtract
    __mul__ = multiply
    __truediv__ = divide

    def __radd__(self, other: int) -> Fraction:
        return _coerce(other).add(self)

    def __rsub__(self, other: int) -> Fraction:
        return _coerce(other).subtract(self)

    def __rmul__(self, other: int) -> Fraction:
        return _coerce(other).multiply(self)

    def __rtruediv__(self, other: int) -> Fraction:
        return _coerce(other).divide(self)

    def __neg__(self) -> Fraction:
        return Fraction(-self._numerator, self._denominator)

    def __abs__(self) -> Fraction:
        return Fraction(abs(self._numerator), abs(self._denominator))

    # --- Comparison (cross-multiplication, never float) ---

    def _normalized(self) -> tuple[int, int]:
        if self._denominator < 0:
            return -self._numerator, -self._denominator
        return self._numerator, self._denominator

    def _cross(self, other: object) -> tuple[int, int] | None:
        if isinstance(other, int) and not isinstance(other, bool):
            other = Fraction(other)
        if not isinstance(other, Fraction):
            return None
        n1, d1 = self._normalized()
        n2, d2 = other._normalized()
        return n1 * d2, n2 * d1

    def __eq__(self, other: object) -> bool:
        cross = self._cross(other)
        if cross is None:
            return NotImplemented
        return cross[0] == cross[1]

    def __lt__(self, other: Fraction | int) -> bool:
        cross = self._cross(other)
        if cross is None:
            return NotImplemented
        return cross[0] < cross[1]

    def __le__(self, other: Fraction | int) -> bool:
        cross = self._cross(other)
        if cross is None:
            return NotImplemented
        return cross[0] <= cross[1]

    def __gt__(self, other: Fraction | int) -> bool:
        cross = self._cross(other)
        if cross is None:
            return NotImplemented
        return cross[0] > cross[1]

    def __ge__(self, other: Fraction | int) -> bool:
        cross = self._cross(other)
        if cross is None:
            return NotImplemented
        return cross[0] >= cross[1]

    def __hash__(self) -> int:
        n, d = self._normalized()
        divisor = gcd(n, d)
        return hash((n // divisor, d // divisor))

    def __bool__(self) -> bool:
        return self._numerator != 0

    # --- Rendering ---

    def to_fixed(
        self, decimal_places: int, rounding: Rounding = Rounding.ROUND_HALF_UP
    ) -> str:
        """Render with exactly `decimal_places` digits after the point.

        Args:
            decimal_places: Number of fractional digits (>= 0)
            rounding: Rounding mode applied at the last digit

        Returns:
            Decimal string, e.g. Fraction(1, 3).to_fixed(2) == "0.33"
        """
        if decimal_places < 0:
            raise ValueError(f"{decimal_places} is not a valid number of decimal places")

        scaled = _divide_with_rounding(
            self._numerator * 10**decimal_places, self._denominator, rounding
        )
        sign = "-" if scaled < 0 else ""
        digits = str(abs(scaled)).rjust(decimal_places + 1, "0")
        if decimal_places == 0:
            return sign + digits
        return f"{sign}{digits[:-decimal_places]}.{digits[-decimal_places:]}"

    def to_significant(
        self, significant_digits: int, rounding: Rounding = Rounding.ROUND_HALF_UP
    ) -> str:
        """Render with `significant_digits` significant digits.

        Integer magnitudes wider than the requested precision are padded
        with zeros (12345 at 2 digits is "12000"). Trailing zeros inside the
        requested precision are kept ("0.10").

        Args:
            significant_digits: Number of significant digits (>= 1)
            rounding: Rounding mode applied at the last digit
        """
        if significant_digits < 1:
            raise ValueError(f"{significant_digits} is not a valid number of significant digits")
        if self._numerator == 0:
            return "0"

        negative = (self._numerator < 0) != (self._denominator < 0)
        numerator = abs(self._numerator)
        denominator = abs(self._denominator)

        exponent = _magnitude(numerator, denominator)
        # Digits to move the decimal point right so the quotient carries
        # exactly `significant_digits` digits.
        shift = significant_digits - 1 - exponent
        if shift >= 0:
            digits = _divide_with_rounding(numerator * 10**shift, denominator, rounding)
        else:
            digits = _divide_with_rounding(numerator, denominator * 10**-shift, rounding)

        if digits == 10**significant_digits:
            # Rounding carried into a new leading digit (99.9 -> 100)
            digits //= 10
            shift -= 1

        sign = "-" if negative else ""
        text = str(digits)
        if shift <= 0:
            return sign + text + "0" * -shift
        text = text.rjust(shift + 1, "0")
        return f"{sign}{text[:-shift]}.{text[-shift:]}"


class Percent(Fraction):
    """Fraction rendered as a percentage (value * 100)."""

    __slots__ = ()

    @classmethod
    def from_bps(cls, bps: int) -> Percent:
        """Build a percent from basis points (30 bps -> 0.30%)."""
        return cls(bps, 10_000)

    def to_fixed(
        self, decimal_places: int = 2, rounding: Rounding = Rounding.ROUND_HALF_UP
    ) -> str:
        return Fraction(self.numerator * 100, self.denominator).to_fixed(decimal_places, rounding)

    def to_significant(
        self, significant_digits: int = 5, rounding: Rounding = Rounding.ROUND_HALF_UP
    ) -> str:
        return Fraction(self.numerator * 100, self.denominator).to_significant(
            significant_digits, rounding
        )


def _coerce(value: Fraction | int) -> Fraction:
    if isinstance(value, Fraction):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return Fraction(value)
    raise TypeError(f"Expected Fraction or int, got {type(value).__name__}")
