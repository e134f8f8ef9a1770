"""Trade: a route plus an exact amount on one side."""

from __future__ import annotations

from enum import IntEnum

import structlog

from amm_sdk.entities.currency import Currency
from amm_sdk.entities.fractions import ONE_HUNDRED_PERCENT, ZERO_PERCENT, CurrencyAmount, Fraction, Percent, Price
from amm_sdk.entities.route import Route
from amm_sdk.errors import AmmSdkError, InvalidAmount, InvalidSlippageTolerance, InvalidToken

logger = structlog.get_logger()


class TradeType(IntEnum):
    """Which side of the trade is fixed."""

    EXACT_INPUT = 0
    EXACT_OUTPUT = 1


def compute_price_impact(mid_price: Price, input_amount: CurrencyAmount, output_amount: CurrencyAmount) -> Percent:
    """Relative shortfall of the actual output against the mid-price quote.

    Args:
        mid_price: Marginal price of the input currency in the output currency
        input_amount: Amount put in
        output_amount: Amount received

    Returns:
        (quoted - actual) / quoted as a Percent
    """
    quoted_output = mid_price.quote(input_amount)
    if quoted_output.numerator == 0:
        raise InvalidAmount("Mid price quotes zero output, price impact is undefined")
    shortfall = Fraction.subtract(quoted_output, output_amount)
    impact = Fraction.divide(shortfall, quoted_output)
    return Percent(impact.numerator, impact.denominator)


def _validate_slippage(allowed_slippage: Percent) -> None:
    if allowed_slippage.less_than(ZERO_PERCENT):
        raise InvalidSlippageTolerance(
            f"Slippage tolerance cannot be negative: {allowed_slippage}",
            allowed_slippage=allowed_slippage,
        )


class Trade:
    """A route and an amount to trade along it.

    For EXACT_INPUT trades ``amount`` is what goes in and the output is quoted
    hop by hop; for EXACT_OUTPUT trades ``amount`` is what must come out and
    the input is quoted backwards from the last pair.

    Attributes:
        route: The route traded along
        trade_type: EXACT_INPUT or EXACT_OUTPUT
        input_amount: Amount of ``route.input``
        output_amount: Amount of ``route.output``
        hop_amounts: Token amounts at each point of ``route.path``
    """

    def __init__(self, route: Route, amount: CurrencyAmount, trade_type: TradeType) -> None:
        self.route = route
        self.trade_type = TradeType(trade_type)

        if self.trade_type == TradeType.EXACT_INPUT:
            self._check_currency(amount, route.input, "input")
            amounts = self._walk_forward(route, amount)
            self.input_amount = CurrencyAmount.from_raw_amount(route.input, amount.quotient)
            self.output_amount = CurrencyAmount.from_raw_amount(route.output, amounts[-1].quotient)
        else:
            self._check_currency(amount, route.output, "output")
            amounts = self._walk_backward(route, amount)
            self.input_amount = CurrencyAmount.from_raw_amount(route.input, amounts[0].quotient)
            self.output_amount = CurrencyAmount.from_raw_amount(route.output, amount.quotient)
        self.hop_amounts: tuple[CurrencyAmount, ...] = tuple(amounts)

        logger.debug(
            "trade_built",
            trade_type=self.trade_type.name,
            hops=len(route.pairs),
            amount_in=self.input_amount.quotient,
            amount_out=self.output_amount.quotient,
        )

    @classmethod
    def exact_in(cls, route: Route, amount_in: CurrencyAmount) -> Trade:
        return cls(route, amount_in, TradeType.EXACT_INPUT)

    @classmethod
    def exact_out(cls, route: Route, amount_out: CurrencyAmount) -> Trade:
        return cls(route, amount_out, TradeType.EXACT_OUTPUT)

    @staticmethod
    def _check_currency(amount: CurrencyAmount, expected: Currency, side: str) -> None:
        if not amount.currency.equals(expected):
            raise InvalidToken(
                f"Trade amount is in {amount.currency!r}, route {side} is {expected!r}",
                token=amount.currency,
            )

    @staticmethod
    def _walk_forward(route: Route, amount: CurrencyAmount) -> list[CurrencyAmount]:
        amounts = [amount.wrapped]
        for i, pair in enumerate(route.pairs):
            try:
                amounts.append(pair.quote_output_for_input(route.path[i], amounts[i]))
            except AmmSdkError as err:
                err.add_context(hop=i)
                raise
        return amounts

    @staticmethod
    def _walk_backward(route: Route, amount: CurrencyAmount) -> list[CurrencyAmount]:
        amounts = [amount.wrapped]
        for i in range(len(route.pairs) - 1, -1, -1):
            try:
                amounts.insert(0, route.pairs[i].quote_input_for_output(route.path[i + 1], amounts[0]))
            except AmmSdkError as err:
                err.add_context(hop=i)
                raise
        return amounts

    def minimum_amount_out(self, allowed_slippage: Percent) -> CurrencyAmount:
        """Least output the trade may deliver for the given slippage tolerance.

        EXACT_INPUT trades lower the quoted output by the slippage fraction,
        rounding down; EXACT_OUTPUT trades keep the requested output.
        """
        _validate_slippage(allowed_slippage)
        if self.trade_type == TradeType.EXACT_OUTPUT:
            return self.output_amount
        reduced = ONE_HUNDRED_PERCENT.subtract(allowed_slippage).multiply(self.output_amount.quotient)
        return CurrencyAmount.from_raw_amount(self.output_amount.currency, max(reduced.quotient, 0))

    def maximum_amount_in(self, allowed_slippage: Percent) -> CurrencyAmount:
        """Most input the trade may consume for the given slippage tolerance.

        EXACT_OUTPUT trades raise the quoted input by the slippage fraction,
        rounding up; EXACT_INPUT trades keep the supplied input.
        """
        _validate_slippage(allowed_slippage)
        if self.trade_type == TradeType.EXACT_INPUT:
            return self.input_amount
        increased = ONE_HUNDRED_PERCENT.add(allowed_slippage).multiply(self.input_amount.quotient)
        return CurrencyAmount.from_raw_amount(self.input_amount.currency, increased.ceil())

    @property
    def execution_price(self) -> Price:
        """Average price of the input in the output actually obtained."""
        return Price.from_amounts(self.input_amount, self.output_amount)

    @property
    def price_impact(self) -> Percent:
        return compute_price_impact(self.route.mid_price, self.input_amount, self.output_amount)

    def worst_execution_price(self, allowed_slippage: Percent) -> Price:
        """Execution price at the slippage-bounded amounts."""
        return Price.from_amounts(self.maximum_amount_in(allowed_slippage), self.minimum_amount_out(allowed_slippage))

    def __repr__(self) -> str:
        return (
            f"Trade({self.trade_type.name}, {self.input_amount.to_exact()} {self.route.input!r} -> "
            f"{self.output_amount.to_exact()} {self.route.output!r})"
        )
