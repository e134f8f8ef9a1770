"""Exact rational arithmetic for amounts and prices.

Everything here is integer based. Decimal is only used to render values for
humans, never to compute amounts that end up on-chain.
"""

from __future__ import annotations

from decimal import ROUND_DOWN, ROUND_HALF_UP, ROUND_UP, Context, Decimal
from enum import Enum
from typing import Union

from amm_sdk.constants import MAX_UINT256
from amm_sdk.entities.currency import Currency, Token
from amm_sdk.errors import CurrencyMismatch, InvalidAmount, InvalidToken


class Rounding(Enum):
    """Rounding modes for rendering fractions."""

    ROUND_DOWN = ROUND_DOWN
    ROUND_HALF_UP = ROUND_HALF_UP
    ROUND_UP = ROUND_UP


BigintIsh = Union[int, "Fraction"]


class Fraction:
    """A numerator/denominator pair of Python ints.

    Fractions are not reduced; comparisons cross-multiply, so equal values
    with different representations still compare equal.
    """

    __slots__ = ("numerator", "denominator")

    def __init__(self, numerator: int, denominator: int = 1) -> None:
        if denominator == 0:
            raise ZeroDivisionError("Fraction denominator cannot be zero")
        if denominator < 0:
            numerator, denominator = -numerator, -denominator
        self.numerator = int(numerator)
        self.denominator = int(denominator)

    @staticmethod
    def _coerce(other: BigintIsh) -> Fraction:
        if isinstance(other, Fraction):
            return other
        if isinstance(other, int):
            return Fraction(other)
        raise TypeError(f"Cannot use {type(other).__name__} as a fraction")

    @property
    def quotient(self) -> int:
        """Floor of the fraction."""
        return self.numerator // self.denominator

    @property
    def remainder(self) -> Fraction:
        return Fraction(self.numerator % self.denominator, self.denominator)

    def ceil(self) -> int:
        """Ceiling of the fraction."""
        return -(-self.numerator // self.denominator)

    def invert(self) -> Fraction:
        return Fraction(self.denominator, self.numerator)

    def add(self, other: BigintIsh) -> Fraction:
        o = self._coerce(other)
        if o.denominator == self.denominator:
            return Fraction(self.numerator + o.numerator, self.denominator)
        return Fraction(
            self.numerator * o.denominator + o.numerator * self.denominator,
            self.denominator * o.denominator,
        )

    def subtract(self, other: BigintIsh) -> Fraction:
        o = self._coerce(other)
        if o.denominator == self.denominator:
            return Fraction(self.numerator - o.numerator, self.denominator)
        return Fraction(
            self.numerator * o.denominator - o.numerator * self.denominator,
            self.denominator * o.denominator,
        )

    def multiply(self, other: BigintIsh) -> Fraction:
        o = self._coerce(other)
        return Fraction(self.numerator * o.numerator, self.denominator * o.denominator)

    def divide(self, other: BigintIsh) -> Fraction:
        o = self._coerce(other)
        return Fraction(self.numerator * o.denominator, self.denominator * o.numerator)

    def _cmp_key(self, other: BigintIsh) -> tuple[int, int]:
        o = self._coerce(other)
        return self.numerator * o.denominator, o.numerator * self.denominator

    def less_than(self, other: BigintIsh) -> bool:
        left, right = self._cmp_key(other)
        return left < right

    def greater_than(self, other: BigintIsh) -> bool:
        left, right = self._cmp_key(other)
        return left > right

    def equal_to(self, other: BigintIsh) -> bool:
        left, right = self._cmp_key(other)
        return left == right

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, (Fraction, int)):
            return NotImplemented
        return self.equal_to(other)

    def __lt__(self, other: BigintIsh) -> bool:
        return self.less_than(other)

    def __le__(self, other: BigintIsh) -> bool:
        return not self.greater_than(other)

    def __gt__(self, other: BigintIsh) -> bool:
        return self.greater_than(other)

    def __ge__(self, other: BigintIsh) -> bool:
        return not self.less_than(other)

    def __hash__(self) -> int:
        return hash(self.as_decimal(Context(prec=78)))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.numerator}, {self.denominator})"

    def as_decimal(self, context: Context | None = None) -> Decimal:
        ctx = context or Context(prec=78)
        return ctx.divide(Decimal(self.numerator), Decimal(self.denominator))

    def to_significant(self, significant_digits: int, rounding: Rounding = Rounding.ROUND_HALF_UP) -> str:
        """Render with the given number of significant digits."""
        if significant_digits <= 0:
            raise ValueError(f"{significant_digits} is not positive")
        ctx = Context(prec=significant_digits, rounding=rounding.value)
        return _format_decimal(ctx.divide(Decimal(self.numerator), Decimal(self.denominator)))

    def to_fixed(self, decimal_places: int, rounding: Rounding = Rounding.ROUND_HALF_UP) -> str:
        """Render with a fixed number of decimal places."""
        if decimal_places < 0:
            raise ValueError(f"{decimal_places} is negative")
        value = self.as_decimal()
        quantum = Decimal(1).scaleb(-decimal_places)
        return f"{value.quantize(quantum, rounding=rounding.value, context=Context(prec=78)):f}"


def _format_decimal(value: Decimal) -> str:
    text = f"{value:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


class Percent(Fraction):
    """A fraction rendered as a percentage (1/100 -> "1%")."""

    __slots__ = ()

    @classmethod
    def from_bps(cls, bps: int) -> Percent:
        return cls(bps, 10_000)

    def _as_percent(self, result: Fraction) -> Percent:
        return Percent(result.numerator, result.denominator)

    def add(self, other: BigintIsh) -> Percent:
        return self._as_percent(super().add(other))

    def subtract(self, other: BigintIsh) -> Percent:
        return self._as_percent(super().subtract(other))

    def multiply(self, other: BigintIsh) -> Percent:
        return self._as_percent(super().multiply(other))

    def divide(self, other: BigintIsh) -> Percent:
        return self._as_percent(super().divide(other))

    def to_significant(self, significant_digits: int = 5, rounding: Rounding = Rounding.ROUND_HALF_UP) -> str:
        return Fraction.multiply(self, 100).to_significant(significant_digits, rounding)

    def to_fixed(self, decimal_places: int = 2, rounding: Rounding = Rounding.ROUND_HALF_UP) -> str:
        return Fraction.multiply(self, 100).to_fixed(decimal_places, rounding)

    def __str__(self) -> str:
        return f"{self.to_significant()}%"


ZERO_PERCENT = Percent(0)
ONE_HUNDRED_PERCENT = Percent(1)


class CurrencyAmount(Fraction):
    """An amount of a currency, as a fraction of raw units.

    Amounts built from ledger data are whole raw units; fractional amounts
    only appear transiently (e.g. slippage adjustments) and ``quotient``
    floors them back to raw units.
    """

    __slots__ = ("currency", "decimal_scale")

    def __init__(self, currency: Currency, numerator: int, denominator: int = 1) -> None:
        super().__init__(numerator, denominator)
        if self.quotient > MAX_UINT256:
            raise InvalidAmount(f"Amount exceeds uint256: {self.quotient}", currency=currency)
        if self.numerator < 0:
            raise InvalidAmount(f"Amount cannot be negative: {self.numerator}", currency=currency)
        self.currency = currency
        self.decimal_scale = 10**currency.decimals

    @classmethod
    def from_raw_amount(cls, currency: Currency, raw_amount: int) -> CurrencyAmount:
        return cls(currency, raw_amount)

    @classmethod
    def from_fractional_amount(cls, currency: Currency, numerator: int, denominator: int) -> CurrencyAmount:
        return cls(currency, numerator, denominator)

    def _check_currency(self, other: CurrencyAmount) -> None:
        if not self.currency.equals(other.currency):
            raise CurrencyMismatch(
                f"Cannot combine amounts of {self.currency!r} and {other.currency!r}",
                currency=self.currency,
                other=other.currency,
            )

    def add(self, other: CurrencyAmount) -> CurrencyAmount:  # type: ignore[override]
        self._check_currency(other)
        added = Fraction.add(self, other)
        return CurrencyAmount(self.currency, added.numerator, added.denominator)

    def subtract(self, other: CurrencyAmount) -> CurrencyAmount:  # type: ignore[override]
        self._check_currency(other)
        subtracted = Fraction.subtract(self, other)
        return CurrencyAmount(self.currency, subtracted.numerator, subtracted.denominator)

    def multiply(self, other: BigintIsh) -> CurrencyAmount:
        if isinstance(other, CurrencyAmount):
            raise TypeError("Cannot multiply two currency amounts")
        multiplied = Fraction.multiply(self, other)
        return CurrencyAmount(self.currency, multiplied.numerator, multiplied.denominator)

    def divide(self, other: BigintIsh) -> CurrencyAmount:
        if isinstance(other, CurrencyAmount):
            raise TypeError("Cannot divide two currency amounts")
        divided = Fraction.divide(self, other)
        return CurrencyAmount(self.currency, divided.numerator, divided.denominator)

    def _cmp_key(self, other: BigintIsh) -> tuple[int, int]:
        if isinstance(other, CurrencyAmount):
            self._check_currency(other)
        return super()._cmp_key(other)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CurrencyAmount) and not self.currency.equals(other.currency):
            return False
        return super().__eq__(other)

    __hash__ = Fraction.__hash__

    def __repr__(self) -> str:
        return f"CurrencyAmount({self.currency!r}, {self.to_exact()})"

    @property
    def wrapped(self) -> CurrencyAmount:
        if isinstance(self.currency, Token):
            return self
        return CurrencyAmount(self.currency.wrapped, self.numerator, self.denominator)

    def to_significant(self, significant_digits: int = 6, rounding: Rounding = Rounding.ROUND_DOWN) -> str:
        return Fraction.divide(self, self.decimal_scale).to_significant(significant_digits, rounding)

    def to_fixed(self, decimal_places: int | None = None, rounding: Rounding = Rounding.ROUND_DOWN) -> str:
        places = self.currency.decimals if decimal_places is None else decimal_places
        if places > self.currency.decimals:
            raise ValueError(f"{self.currency!r} has only {self.currency.decimals} decimals")
        return Fraction.divide(self, self.decimal_scale).to_fixed(places, rounding)

    def to_exact(self) -> str:
        """Exact decimal rendering of the raw quotient (e.g. 1500000 USDC -> "1.5")."""
        value = Decimal(self.quotient).scaleb(-self.currency.decimals)
        return _format_decimal(value)


class Price(Fraction):
    """Price of ``base_currency`` in ``quote_currency``.

    The fraction is in raw units: ``numerator / denominator`` raw quote units
    per raw base unit. Construct with ``Price(base, quote, denominator,
    numerator)``, mirroring "denominator base units buy numerator quote
    units".
    """

    __slots__ = ("base_currency", "quote_currency", "scalar")

    def __init__(self, base_currency: Currency, quote_currency: Currency, denominator: int, numerator: int) -> None:
        super().__init__(numerator, denominator)
        self.base_currency = base_currency
        self.quote_currency = quote_currency
        self.scalar = Fraction(10**base_currency.decimals, 10**quote_currency.decimals)

    @classmethod
    def from_amounts(cls, base_amount: CurrencyAmount, quote_amount: CurrencyAmount) -> Price:
        """Price implied by exchanging ``base_amount`` for ``quote_amount``."""
        numerator = quote_amount.numerator * base_amount.denominator
        denominator = base_amount.numerator * quote_amount.denominator
        return cls(base_amount.currency, quote_amount.currency, denominator, numerator)

    def invert(self) -> Price:
        return Price(self.quote_currency, self.base_currency, self.numerator, self.denominator)

    def multiply(self, other: Price) -> Price:  # type: ignore[override]
        """Compose with a price whose base is this price's quote.

        Raises:
            InvalidToken: If ``other.base_currency`` is not this quote currency
        """
        if not self.quote_currency.equals(other.base_currency):
            raise InvalidToken(
                f"Cannot compose price in {self.quote_currency!r} with price of {other.base_currency!r}",
                token=other.base_currency,
            )
        fraction = Fraction.multiply(self, other)
        return Price(self.base_currency, other.quote_currency, fraction.denominator, fraction.numerator)

    def quote(self, currency_amount: CurrencyAmount) -> CurrencyAmount:
        """Convert an amount of the base currency into the quote currency, flooring."""
        if not currency_amount.currency.equals(self.base_currency):
            raise InvalidToken(
                f"Cannot quote {currency_amount.currency!r} with a price of {self.base_currency!r}",
                token=currency_amount.currency,
            )
        result = Fraction.multiply(self, currency_amount)
        return CurrencyAmount(self.quote_currency, result.numerator, result.denominator)

    @property
    def adjusted_for_decimals(self) -> Fraction:
        """Price in whole units of each currency rather than raw units."""
        return Fraction.multiply(self, self.scalar)

    def to_significant(self, significant_digits: int = 6, rounding: Rounding = Rounding.ROUND_HALF_UP) -> str:
        return self.adjusted_for_decimals.to_significant(significant_digits, rounding)

    def to_fixed(self, decimal_places: int = 4, rounding: Rounding = Rounding.ROUND_HALF_UP) -> str:
        return self.adjusted_for_decimals.to_fixed(decimal_places, rounding)

    def __repr__(self) -> str:
        return f"Price({self.base_currency!r} -> {self.quote_currency!r}, {self.numerator}/{self.denominator})"
