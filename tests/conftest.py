"""Pytest configuration and fixtures."""

from collections.abc import Iterator

import pytest
import structlog

from amm_sdk.entities import NativeCurrency, Pair, Token
from tests.helpers import (
    DAI,
    MAINNET,
    TOKEN_A,
    TOKEN_B,
    TOKEN_C,
    USDC,
    make_pair,
    make_stable_pair,
    make_token,
)


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Undo any configure_logging() call made by a test."""
    yield
    structlog.reset_defaults()


# =============================================================================
# Tokens
# =============================================================================


@pytest.fixture
def token_a() -> Token:
    return make_token(TOKEN_A, "A")


@pytest.fixture
def token_b() -> Token:
    return make_token(TOKEN_B, "B")


@pytest.fixture
def token_c() -> Token:
    return make_token(TOKEN_C, "C")


@pytest.fixture
def dai() -> Token:
    return make_token(DAI, "DAI")


@pytest.fixture
def usdc() -> Token:
    return make_token(USDC, "USDC")


@pytest.fixture
def ether() -> NativeCurrency:
    """Native ETH on mainnet, wrapping to WETH."""
    return NativeCurrency.on_chain(MAINNET)


@pytest.fixture
def weth(ether: NativeCurrency) -> Token:
    return ether.wrapped


# =============================================================================
# Pairs
# =============================================================================


@pytest.fixture
def pair_ab(token_a: Token, token_b: Token) -> Pair:
    """Constant product A/B pair priced at 0.95 B per A."""
    return make_pair(token_a, 1_000_000, token_b, 950_000)


@pytest.fixture
def pair_bc(token_b: Token, token_c: Token) -> Pair:
    """Constant product B/C pair priced at 1.05 C per B."""
    return make_pair(token_b, 2_000_000, token_c, 2_100_000)


@pytest.fixture
def pair_weth_a(weth: Token, token_a: Token) -> Pair:
    """Constant product WETH/A pair with deep reserves."""
    return make_pair(weth, 1_000 * 10**18, token_a, 2_000_000 * 10**18)


@pytest.fixture
def stable_pair_dai_usdc(dai: Token, usdc: Token) -> Pair:
    """Balanced stable pair with 1M of each (18 and 6 decimals)."""
    return make_stable_pair(dai, 1_000_000 * 10**18, usdc, 1_000_000 * 10**6)
