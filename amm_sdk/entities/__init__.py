"""Value types: currencies, amounts, prices, pairs, routes and trades."""

from amm_sdk.entities.currency import Currency, NativeCurrency, Token
from amm_sdk.entities.fractions import (
    ONE_HUNDRED_PERCENT,
    ZERO_PERCENT,
    CurrencyAmount,
    Fraction,
    Percent,
    Price,
    Rounding,
)
from amm_sdk.entities.pair import Pair
from amm_sdk.entities.route import Route
from amm_sdk.entities.trade import Trade, TradeType, compute_price_impact

__all__ = [
    "Currency",
    "NativeCurrency",
    "Token",
    "Fraction",
    "Percent",
    "CurrencyAmount",
    "Price",
    "Rounding",
    "ZERO_PERCENT",
    "ONE_HUNDRED_PERCENT",
    "Pair",
    "Route",
    "Trade",
    "TradeType",
    "compute_price_impact",
]
