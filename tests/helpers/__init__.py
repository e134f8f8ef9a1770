"""Test helpers module for shared test utilities.

- constants: Token addresses and chain ids
- factories: Token, pair and amount factory functions
"""

from tests.helpers.constants import (
    DAI,
    FUJI,
    MAINNET,
    RECIPIENT,
    TOKEN_A,
    TOKEN_B,
    TOKEN_C,
    TOKEN_D,
    TOKEN_DECIMALS,
    USDC,
    USDT,
    WETH,
)
from tests.helpers.factories import amount, make_pair, make_stable_pair, make_token

__all__ = [
    # Constants
    "WETH",
    "USDC",
    "DAI",
    "USDT",
    "TOKEN_A",
    "TOKEN_B",
    "TOKEN_C",
    "TOKEN_D",
    "RECIPIENT",
    "MAINNET",
    "FUJI",
    "TOKEN_DECIMALS",
    # Factories
    "amount",
    "make_token",
    "make_pair",
    "make_stable_pair",
]
