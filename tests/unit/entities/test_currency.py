"""Tests for Token and NativeCurrency."""

import pytest

from amm_sdk.entities import NativeCurrency, Token
from amm_sdk.errors import ChainIdMismatch, InvalidAddress, InvalidToken, SameToken, ValidationError
from tests.helpers import DAI, FUJI, MAINNET, USDC, WETH


class TestToken:
    """Tests for token identity and ordering."""

    def test_address_checksummed(self):
        token = Token(MAINNET, DAI, 18, "DAI")
        assert token.address == "0x6B175474E89094C44Da98b954EedeAC495271d0F"

    def test_equality_ignores_case_and_metadata(self):
        """Identity is (chain_id, address); symbol and name do not matter."""
        lower = Token(MAINNET, DAI, 18, "DAI")
        upper = Token(MAINNET, "0x" + DAI[2:].upper(), 18, "Dai Stablecoin")
        assert lower == upper
        assert hash(lower) == hash(upper)
        assert lower.equals(upper)

    def test_different_chain_not_equal(self):
        assert Token(MAINNET, DAI, 18) != Token(FUJI, DAI, 18)

    def test_invalid_address(self):
        with pytest.raises(InvalidAddress):
            Token(MAINNET, "0x1234", 18)

    def test_invalid_decimals(self):
        with pytest.raises(ValidationError):
            Token(MAINNET, DAI, 255)

    def test_sorts_before(self):
        dai = Token(MAINNET, DAI, 18)
        usdc = Token(MAINNET, USDC, 6)
        assert dai.sorts_before(usdc)
        assert not usdc.sorts_before(dai)

    def test_sorts_before_same_token(self):
        dai = Token(MAINNET, DAI, 18)
        with pytest.raises(SameToken):
            dai.sorts_before(Token(MAINNET, DAI, 18))

    def test_sorts_before_chain_mismatch(self):
        with pytest.raises(ChainIdMismatch):
            Token(MAINNET, DAI, 18).sorts_before(Token(FUJI, USDC, 6))

    def test_token_flags(self):
        token = Token(MAINNET, DAI, 18)
        assert token.is_token
        assert not token.is_native
        assert token.wrapped is token


class TestNativeCurrency:
    """Tests for the chain's native currency."""

    def test_on_chain_mainnet(self):
        ether = NativeCurrency.on_chain(MAINNET)
        assert ether.symbol == "ETH"
        assert ether.decimals == 18
        assert ether.is_native
        assert ether.wrapped == Token(MAINNET, WETH, 18)
        assert ether.wrapped.symbol == "WETH"

    def test_equality_by_chain(self):
        assert NativeCurrency.on_chain(MAINNET) == NativeCurrency.on_chain(MAINNET)
        assert NativeCurrency.on_chain(MAINNET) != NativeCurrency.on_chain(FUJI)

    def test_native_is_not_its_wrapped_token(self):
        ether = NativeCurrency.on_chain(MAINNET)
        assert not ether.equals(ether.wrapped)
        assert not ether.wrapped.equals(ether)
        assert ether != ether.wrapped

    def test_unknown_chain(self):
        with pytest.raises(InvalidToken):
            NativeCurrency.on_chain(999)

    def test_wrapped_token_chain_mismatch(self):
        with pytest.raises(ChainIdMismatch):
            NativeCurrency(chain_id=FUJI, wrapped_token=Token(MAINNET, WETH, 18))
