"""Pricing and call encoding for a multi-curve AMM exchange."""

from amm_sdk.config import DEFAULT_CONFIG, SdkConfig, load_config
from amm_sdk.curves import CurveId
from amm_sdk.entities import (
    CurrencyAmount,
    Fraction,
    NativeCurrency,
    Pair,
    Percent,
    Price,
    Route,
    Token,
    Trade,
    TradeType,
)
from amm_sdk.logging_config import configure_logging
from amm_sdk.models import PairSnapshot, TokenInfo
from amm_sdk.router import Router, SwapParameters, TradeOptions

__version__ = "0.1.0"
__all__ = [
    "CurrencyAmount",
    "CurveId",
    "DEFAULT_CONFIG",
    "Fraction",
    "NativeCurrency",
    "Pair",
    "PairSnapshot",
    "Percent",
    "Price",
    "Route",
    "Router",
    "SdkConfig",
    "SwapParameters",
    "Token",
    "TokenInfo",
    "Trade",
    "TradeOptions",
    "TradeType",
    "configure_logging",
    "load_config",
    "__version__",
]
