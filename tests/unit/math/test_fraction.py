"""Tests for exact rational arithmetic and decimal rendering."""

import pytest

from swapcore.math import Fraction, Percent, Rounding
from swapcore.safe_int import DivisionByZero


class TestFractionConstruction:
    """Tests for building fractions."""

    def test_zero_denominator_raises(self):
        with pytest.raises(DivisionByZero):
            Fraction(1, 0)

    def test_division_by_zero_is_arithmetic_error(self):
        """Zero denominators are programming errors, not business errors."""
        with pytest.raises(ArithmeticError):
            Fraction(5, 0)

    def test_rejects_non_int(self):
        with pytest.raises(TypeError):
            Fraction(1.5)  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            Fraction(True)

    def test_from_amount(self):
        """Raw amounts convert into display units."""
        assert Fraction.from_amount(1_500_000, 6) == Fraction(3, 2)
        assert Fraction.from_amount(1_500_000, 6).to_fixed(2) == "1.50"

    def test_from_amount_rejects_negative_decimals(self):
        with pytest.raises(ValueError):
            Fraction.from_amount(1, -1)


class TestFractionArithmetic:
    """Tests for arithmetic operations."""

    def test_add(self):
        assert Fraction(1, 2) + Fraction(1, 3) == Fraction(5, 6)

    def test_add_same_denominator_stays_unreduced(self):
        result = Fraction(1, 4).add(Fraction(1, 4))
        assert result.numerator == 2
        assert result.denominator == 4

    def test_subtract(self):
        assert Fraction(3, 4) - Fraction(1, 2) == Fraction(1, 4)

    def test_reverse_ops_with_int(self):
        assert 1 - Fraction(1, 4) == Fraction(3, 4)
        assert 2 + Fraction(1, 2) == Fraction(5, 2)
        assert 3 * Fraction(2, 3) == 2
        assert 1 / Fraction(1, 4) == 4

    def test_multiply(self):
        assert Fraction(2, 3) * 3 == 2
        assert Fraction(2, 3).multiply(Fraction(3, 4)) == Fraction(1, 2)

    def test_divide(self):
        assert Fraction(1, 2) / Fraction(1, 4) == 2

    def test_divide_by_zero_raises(self):
        with pytest.raises(DivisionByZero):
            Fraction(1) / 0

    def test_invert(self):
        assert Fraction(2, 5).invert() == Fraction(5, 2)

    def test_invert_zero_raises(self):
        with pytest.raises(DivisionByZero):
            Fraction(0).invert()

    def test_quotient_truncates_toward_zero(self):
        assert Fraction(7, 2).quotient == 3
        assert Fraction(-7, 2).quotient == -3

    def test_remainder_keeps_sign(self):
        assert Fraction(7, 2).remainder == Fraction(1, 2)
        assert Fraction(-7, 2).remainder == Fraction(-1, 2)

    def test_large_values_stay_exact(self):
        """No precision loss far beyond float range."""
        big = Fraction(10**40 + 1, 10**40)
        assert big - 1 == Fraction(1, 10**40)


class TestFractionComparison:
    """Tests for comparisons by cross-multiplication."""

    def test_equivalent_unreduced_forms_are_equal(self):
        assert Fraction(2, 4) == Fraction(1, 2)
        assert hash(Fraction(2, 4)) == hash(Fraction(1, 2))

    def test_negative_denominator(self):
        assert Fraction(1, -2) < 0
        assert Fraction(1, -2) == Fraction(-1, 2)
        assert Fraction(-1, -2) == Fraction(1, 2)

    def test_ordering(self):
        assert Fraction(1, 3) < Fraction(1, 2)
        assert Fraction(2, 3) > Fraction(3, 5)
        assert Fraction(1, 2) <= Fraction(2, 4)
        assert Fraction(1, 2) >= Fraction(2, 4)

    def test_compare_with_int(self):
        assert Fraction(6, 3) == 2
        assert Fraction(5, 3) > 1

    def test_compare_with_other_type(self):
        assert Fraction(1, 2) != "1/2"


class TestToFixed:
    """Tests for fixed decimal rendering."""

    def test_half_up_default(self):
        assert Fraction(1, 3).to_fixed(2) == "0.33"
        assert Fraction(2, 3).to_fixed(2) == "0.67"

    def test_round_down(self):
        assert Fraction(2, 3).to_fixed(2, Rounding.ROUND_DOWN) == "0.66"

    def test_round_up(self):
        assert Fraction(1, 3).to_fixed(2, Rounding.ROUND_UP) == "0.34"

    def test_exact_value_not_rounded_up(self):
        assert Fraction(1, 4).to_fixed(2, Rounding.ROUND_UP) == "0.25"

    def test_half_up_on_tie(self):
        assert Fraction(1, 8).to_fixed(2) == "0.13"

    def test_negative(self):
        """Sign is handled separately from the magnitude."""
        assert Fraction(-2, 3).to_fixed(2) == "-0.67"
        assert Fraction(2, -3).to_fixed(2) == "-0.67"
        assert Fraction(-2, 3).to_fixed(2, Rounding.ROUND_DOWN) == "-0.66"

    def test_zero_decimal_places(self):
        assert Fraction(7, 2).to_fixed(0) == "4"
        assert Fraction(7, 2).to_fixed(0, Rounding.ROUND_DOWN) == "3"

    def test_carry_into_integer_part(self):
        assert Fraction(9999, 1000).to_fixed(2) == "10.00"

    def test_negative_decimal_places_raises(self):
        with pytest.raises(ValueError):
            Fraction(1, 3).to_fixed(-1)


class TestToSignificant:
    """Tests for significant-digit rendering."""

    def test_carry_across_power_of_ten(self):
        assert Fraction(999, 10).to_significant(2) == "100"

    def test_carry_below_one(self):
        assert Fraction(999, 10000).to_significant(2) == "0.10"

    def test_integer_padding(self):
        assert Fraction(12345).to_significant(2) == "12000"

    def test_fraction_below_one(self):
        assert Fraction(1, 3).to_significant(3) == "0.333"

    def test_exact_powers_of_ten(self):
        assert Fraction(1000).to_significant(1) == "1000"
        assert Fraction(1, 1000).to_significant(1) == "0.001"

    def test_carry_to_next_power(self):
        assert Fraction(999).to_significant(1) == "1000"

    def test_rounding_modes(self):
        assert Fraction(2, 3).to_significant(1, Rounding.ROUND_DOWN) == "0.6"
        assert Fraction(2, 3).to_significant(1, Rounding.ROUND_UP) == "0.7"
        assert Fraction(1, 3).to_significant(1, Rounding.ROUND_UP) == "0.4"

    def test_negative(self):
        assert Fraction(-1, 3).to_significant(2) == "-0.33"

    def test_zero(self):
        assert Fraction(0).to_significant(3) == "0"

    def test_non_positive_digits_raises(self):
        with pytest.raises(ValueError):
            Fraction(1, 3).to_significant(0)


class TestPercent:
    """Tests for percentage rendering."""

    def test_from_bps(self):
        assert Percent.from_bps(30) == Fraction(30, 10_000)

    def test_default_to_fixed(self):
        assert Percent.from_bps(30).to_fixed() == "0.30"

    def test_default_to_significant(self):
        assert Percent.from_bps(1234).to_significant() == "12.340"

    def test_full_range(self):
        assert Percent.from_bps(10_000).to_fixed(0) == "100"
