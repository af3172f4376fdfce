"""Checked integer wrapper for token amount arithmetic.

Token amounts and reserves on the host chain are signed 128-bit integers.
Python integers never overflow, so intermediate products in the AMM formulas
are computed exactly; only the values that cross the chain boundary (inputs
and final results) are validated against the i128 range.

SafeInt makes the remaining hazards explicit:
- Division by zero raises DivisionByZero
- Subtraction below zero raises Underflow
- Values outside i128 raise I128Overflow on to_i128()

Usage pattern:
    from swapcore.safe_int import S

    def calculate(a: int, b: int, c: int) -> int:
        result = (S(a) * S(b)) // S(c)  # Raises if c == 0
        return result.to_i128()
"""

from __future__ import annotations

I128_MAX = 2**127 - 1
I128_MIN = -(2**127)


class SafeIntError(ArithmeticError):
    """Base class for checked arithmetic errors."""

    pass


class DivisionByZero(SafeIntError):
    """Division by zero (also raised for zero-denominator fractions)."""

    pass


class Underflow(SafeIntError):
    """Subtraction would produce a negative amount."""

    pass


class I128Overflow(SafeIntError):
    """Value does not fit in a signed 128-bit integer."""

    pass


class SafeInt:
    """Integer with checked arithmetic for token amounts.

    Attributes:
        value: The underlying integer value (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        if isinstance(value, SafeInt):
            self._value = value._value
        elif isinstance(value, int) and not isinstance(value, bool):
            self._value = value
        else:
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    # --- Arithmetic operations ---

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value + _extract_value(other))

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Subtract other from self.

        Raises:
            Underflow: If result would be negative
        """
        other_val = _extract_value(other)
        result = self._value - other_val
        if result < 0:
            raise Underflow(f"Underflow: {self._value} - {other_val} = {result}")
        return SafeInt(result)

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value * _extract_value(other))

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Floor division.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        return SafeInt(self._value // other_val)

    # --- Comparison operations ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _extract_value(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _extract_value(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _extract_value(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _extract_value(other)

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    # --- Named operations ---

    def to_i128(self) -> int:
        """Convert to int, validating i128 bounds.

        Raises:
            I128Overflow: If value is outside [-2^127, 2^127-1]
        """
        if not I128_MIN <= self._value <= I128_MAX:
            raise I128Overflow(f"Value does not fit in i128: {self._value}")
        return self._value


def _extract_value(x: SafeInt | int) -> int:
    if isinstance(x, SafeInt):
        return x._value
    return x


def check_i128(value: int, name: str = "value") -> int:
    """Validate that a plain int fits in i128 and return it."""
    if not I128_MIN <= value <= I128_MAX:
        raise I128Overflow(f"{name} does not fit in i128: {value}")
    return value


# Convenience alias for concise code
S = SafeInt
