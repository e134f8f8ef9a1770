"""Router call encoding."""

from amm_sdk.router.encoding import (
    encode_multicall,
    encode_swap_exact_for_variable,
    encode_swap_variable_for_exact,
    encode_unwrap_weth9,
    function_selector,
)
from amm_sdk.router.router import Router, SwapParameters, TradeOptions

__all__ = [
    "Router",
    "SwapParameters",
    "TradeOptions",
    "encode_multicall",
    "encode_swap_exact_for_variable",
    "encode_swap_variable_for_exact",
    "encode_unwrap_weth9",
    "function_selector",
]
