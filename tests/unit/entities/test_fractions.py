"""Tests for Fraction, Percent, CurrencyAmount and Price."""

import pytest

from amm_sdk.constants import MAX_UINT256
from amm_sdk.entities import CurrencyAmount, Fraction, Percent, Price, Rounding
from amm_sdk.errors import CurrencyMismatch, InvalidAmount, InvalidToken
from tests.helpers import amount


class TestFraction:
    """Tests for exact rational arithmetic."""

    def test_quotient_floors(self):
        assert Fraction(7, 2).quotient == 3
        assert Fraction(8, 2).quotient == 4

    def test_ceil(self):
        assert Fraction(7, 2).ceil() == 4
        assert Fraction(8, 2).ceil() == 4

    def test_remainder(self):
        assert Fraction(7, 2).remainder.equal_to(Fraction(1, 2))

    def test_add_subtract(self):
        assert Fraction(1, 3).add(Fraction(1, 6)).equal_to(Fraction(1, 2))
        assert Fraction(1, 2).subtract(Fraction(1, 3)).equal_to(Fraction(1, 6))
        assert Fraction(1, 2).add(1).equal_to(Fraction(3, 2))

    def test_multiply_divide(self):
        assert Fraction(2, 3).multiply(Fraction(3, 4)).equal_to(Fraction(1, 2))
        assert Fraction(2, 3).divide(Fraction(4, 3)).equal_to(Fraction(1, 2))

    def test_comparison_cross_multiplies(self):
        """Unreduced fractions compare by value."""
        assert Fraction(2, 4) == Fraction(1, 2)
        assert Fraction(1, 3) < Fraction(1, 2)
        assert Fraction(1, 2) >= Fraction(2, 4)
        assert Fraction(4, 2) == 2

    def test_zero_denominator(self):
        with pytest.raises(ZeroDivisionError):
            Fraction(1, 0)

    def test_to_significant(self):
        assert Fraction(1, 3).to_significant(4) == "0.3333"
        assert Fraction(2, 3).to_significant(2, Rounding.ROUND_DOWN) == "0.66"

    def test_to_fixed(self):
        assert Fraction(1, 3).to_fixed(2) == "0.33"
        assert Fraction(2, 3).to_fixed(3, Rounding.ROUND_UP) == "0.667"


class TestPercent:
    """Tests for Percent rendering and arithmetic."""

    def test_str(self):
        assert str(Percent(1, 100)) == "1%"
        assert str(Percent.from_bps(50)) == "0.5%"

    def test_operations_return_percent(self):
        result = Percent(1, 100).add(Percent(2, 100))
        assert isinstance(result, Percent)
        assert result.equal_to(Fraction(3, 100))


class TestCurrencyAmount:
    """Tests for amounts of a currency."""

    def test_to_exact(self, usdc):
        assert amount(usdc, 1_500_000).to_exact() == "1.5"
        assert amount(usdc, 1_000_000).to_exact() == "1"

    def test_to_fixed_and_significant(self, usdc):
        value = amount(usdc, 1_234_567)
        assert value.to_fixed(2) == "1.23"
        assert value.to_significant(6) == "1.23456"

    def test_to_fixed_too_many_places(self, usdc):
        with pytest.raises(ValueError):
            amount(usdc, 1).to_fixed(7)

    def test_add_same_currency(self, token_a):
        total = amount(token_a, 100).add(amount(token_a, 50))
        assert total.quotient == 150
        assert total.currency == token_a

    def test_add_currency_mismatch(self, token_a, token_b):
        with pytest.raises(CurrencyMismatch):
            amount(token_a, 100).add(amount(token_b, 50))

    def test_mismatch_is_invalid_token(self):
        assert issubclass(CurrencyMismatch, InvalidToken)

    def test_subtract_below_zero(self, token_a):
        with pytest.raises(InvalidAmount):
            amount(token_a, 50).subtract(amount(token_a, 100))

    def test_negative(self, token_a):
        with pytest.raises(InvalidAmount):
            amount(token_a, -1)

    def test_uint256_bound(self, token_a):
        assert amount(token_a, MAX_UINT256).quotient == MAX_UINT256
        with pytest.raises(InvalidAmount):
            amount(token_a, MAX_UINT256 + 1)

    def test_comparison_checks_currency(self, token_a, token_b):
        assert amount(token_a, 1) < amount(token_a, 2)
        with pytest.raises(CurrencyMismatch):
            amount(token_a, 1) < amount(token_b, 2)  # noqa: B015
        assert amount(token_a, 1) != amount(token_b, 1)

    def test_wrapped(self, ether, weth):
        wrapped = amount(ether, 10**18).wrapped
        assert wrapped.currency == weth
        assert wrapped.quotient == 10**18

    def test_fractional_amount_floors(self, token_a):
        value = CurrencyAmount.from_fractional_amount(token_a, 7, 2)
        assert value.quotient == 3


class TestPrice:
    """Tests for prices between two currencies."""

    def test_quote(self, token_a, token_b):
        """2 A buy 3 B."""
        price = Price(token_a, token_b, 2, 3)
        quoted = price.quote(amount(token_a, 10))
        assert quoted.currency == token_b
        assert quoted.quotient == 15

    def test_quote_floors(self, token_a, token_b):
        price = Price(token_a, token_b, 2, 3)
        assert price.quote(amount(token_a, 3)).quotient == 4

    def test_quote_wrong_currency(self, token_a, token_b):
        with pytest.raises(InvalidToken):
            Price(token_a, token_b, 2, 3).quote(amount(token_b, 10))

    def test_invert(self, token_a, token_b):
        inverted = Price(token_a, token_b, 2, 3).invert()
        assert inverted.base_currency == token_b
        assert inverted.quote_currency == token_a
        assert inverted.quote(amount(token_b, 15)).quotient == 10

    def test_multiply(self, token_a, token_b, token_c):
        a_in_b = Price(token_a, token_b, 2, 3)
        b_in_c = Price(token_b, token_c, 1, 2)
        a_in_c = a_in_b.multiply(b_in_c)
        assert a_in_c.base_currency == token_a
        assert a_in_c.quote_currency == token_c
        assert a_in_c.equal_to(Fraction(3))

    def test_multiply_mismatch(self, token_a, token_b, token_c):
        with pytest.raises(InvalidToken):
            Price(token_a, token_b, 1, 1).multiply(Price(token_c, token_a, 1, 1))

    def test_from_amounts_adjusts_for_decimals(self, usdc, dai):
        """1 USDC for 1 DAI is a raw price of 10^12 but renders as 1."""
        price = Price.from_amounts(amount(usdc, 10**6), amount(dai, 10**18))
        assert price.equal_to(Fraction(10**12))
        assert price.to_significant(4) == "1"
        assert price.to_fixed(2) == "1.00"
