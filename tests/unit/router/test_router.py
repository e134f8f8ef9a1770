"""Tests for Router.swap_call_parameters."""

import pytest
import structlog
from pydantic import ValidationError as PydanticValidationError
from structlog.testing import capture_logs

from amm_sdk.config import SdkConfig
from amm_sdk.constants import MAINNET_ROUTER_ADDRESS
from amm_sdk.entities import Percent, Route, Trade
from amm_sdk.errors import EncodingError, FeeOnTransferExactOutput, NativeInNativeOut
from amm_sdk.router import Router, TradeOptions
from amm_sdk.router.encoding import (
    SWAP_EXACT_FOR_VARIABLE_SIGNATURE,
    SWAP_VARIABLE_FOR_EXACT_SIGNATURE,
    function_selector,
)
from tests.helpers import RECIPIENT, amount, make_stable_pair

ONE_PERCENT = Percent(1, 100)


def _options(**overrides) -> TradeOptions:
    values = {"allowed_slippage": ONE_PERCENT, "recipient": RECIPIENT}
    values.update(overrides)
    return TradeOptions(**values)


def _selector(signature: str) -> str:
    return "0x" + function_selector(signature).hex()


class TestTokenToToken:
    """Tests for trades between two tokens."""

    def test_exact_input(self, pair_ab, pair_bc, token_a, token_b, token_c):
        trade = Trade.exact_in(Route([pair_ab, pair_bc], token_a, token_c), amount(token_a, 10_000))
        params = Router.swap_call_parameters(trade, _options())

        assert params.method_name == "swapExactForVariable"
        assert params.args == [
            hex(10_000),
            hex(trade.minimum_amount_out(ONE_PERCENT).quotient),
            [token_a.address, token_b.address, token_c.address],
            [0, 0],
            RECIPIENT,
        ]
        assert params.value == "0x0"
        assert params.calldata.startswith(_selector(SWAP_EXACT_FOR_VARIABLE_SIGNATURE))

    def test_exact_output(self, pair_ab, token_a, token_b):
        trade = Trade.exact_out(Route([pair_ab], token_a, token_b), amount(token_b, 9_000))
        params = Router.swap_call_parameters(trade, _options())

        assert params.method_name == "swapVariableForExact"
        assert params.args[0] == hex(9_000)
        assert params.args[1] == hex(trade.maximum_amount_in(ONE_PERCENT).quotient)
        assert params.value == "0x0"
        assert params.calldata.startswith(_selector(SWAP_VARIABLE_FOR_EXACT_SIGNATURE))

    def test_curve_ids_follow_pairs(self, pair_ab, token_a, token_b, token_c):
        stable_bc = make_stable_pair(token_b, 10**24, token_c, 10**24)
        trade = Trade.exact_in(Route([pair_ab, stable_bc], token_a, token_c), amount(token_a, 10_000))
        params = Router.swap_call_parameters(trade, _options())
        assert params.args[3] == [0, 1]

    def test_serialized_output(self, pair_ab, token_a, token_b):
        trade = Trade.exact_in(Route([pair_ab], token_a, token_b), amount(token_a, 10_000))
        data = Router.swap_call_parameters(trade, _options()).model_dump(by_alias=True)
        assert set(data) == {"methodName", "args", "value"}


class TestNativeCurrency:
    """Tests for native currency value and unwrapping."""

    def test_native_input_exact_in(self, pair_weth_a, ether, token_a):
        trade = Trade.exact_in(Route([pair_weth_a], ether, token_a), amount(ether, 10**18))
        params = Router.swap_call_parameters(trade, _options())
        assert params.method_name == "swapExactForVariable"
        assert params.value == hex(10**18)

    def test_native_input_exact_out(self, pair_weth_a, ether, token_a):
        """The attached value covers the slippage-adjusted maximum input."""
        trade = Trade.exact_out(Route([pair_weth_a], ether, token_a), amount(token_a, 1000 * 10**18))
        params = Router.swap_call_parameters(trade, _options())
        assert params.method_name == "swapVariableForExact"
        assert params.value == hex(trade.maximum_amount_in(ONE_PERCENT).quotient)
        assert params.args[1] == params.value

    def test_native_output_batches_unwrap(self, pair_weth_a, ether, token_a):
        trade = Trade.exact_in(Route([pair_weth_a], token_a, ether), amount(token_a, 1000 * 10**18))
        config = SdkConfig(router_address=MAINNET_ROUTER_ADDRESS)
        params = Router.swap_call_parameters(trade, _options(), config)

        assert params.method_name == "multicall"
        assert params.value == "0x0"
        (calls,) = params.args
        assert len(calls) == 2
        swap, unwrap = calls
        assert swap.startswith(_selector(SWAP_EXACT_FOR_VARIABLE_SIGNATURE))
        assert unwrap.startswith("0x49404b7c")
        # The swap pays the router, which unwraps to the recipient
        assert MAINNET_ROUTER_ADDRESS.lower()[2:] in swap
        assert RECIPIENT[2:] not in swap
        assert RECIPIENT[2:] in unwrap
        min_out = trade.minimum_amount_out(ONE_PERCENT).quotient
        assert f"{min_out:064x}" in unwrap
        assert params.calldata.startswith("0xac9650d8")

    def test_native_in_and_out(self, pair_weth_a, ether, weth, token_a):
        """WETH -> A -> WETH through two pools, with ETH at both ends."""
        stable_a_weth = make_stable_pair(weth, 10**24, token_a, 10**24)
        route = Route([pair_weth_a, stable_a_weth], ether, ether)
        trade = Trade.exact_in(route, amount(ether, 10**18))
        with pytest.raises(NativeInNativeOut):
            Router.swap_call_parameters(trade, _options())


class TestOptions:
    """Tests for TradeOptions handling."""

    def test_fee_on_transfer_exact_input(self, pair_ab, token_a, token_b):
        trade = Trade.exact_in(Route([pair_ab], token_a, token_b), amount(token_a, 10_000))
        params = Router.swap_call_parameters(trade, _options(fee_on_transfer=True))
        assert params.method_name == "swapExactForVariable"

    def test_fee_on_transfer_exact_output(self, pair_ab, token_a, token_b):
        trade = Trade.exact_out(Route([pair_ab], token_a, token_b), amount(token_b, 9_000))
        with pytest.raises(FeeOnTransferExactOutput) as exc_info:
            Router.swap_call_parameters(trade, _options(fee_on_transfer=True))
        assert isinstance(exc_info.value, EncodingError)

    def test_recipient_checksummed(self):
        lower = "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"
        assert _options(recipient=lower).recipient == "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"

    def test_invalid_recipient(self):
        with pytest.raises(PydanticValidationError):
            _options(recipient="0x1234")

    def test_camel_case_aliases(self):
        options = TradeOptions.model_validate(
            {"allowedSlippage": ONE_PERCENT, "recipient": RECIPIENT, "feeOnTransfer": True}
        )
        assert options.fee_on_transfer is True

    def test_router_not_instantiable(self):
        with pytest.raises(TypeError):
            Router()


class TestLogging:
    """Tests for the router's debug event."""

    def test_default_structlog(self, pair_ab, token_a, token_b):
        """Works with structlog left unconfigured."""
        structlog.reset_defaults()
        trade = Trade.exact_in(Route([pair_ab], token_a, token_b), amount(token_a, 10_000))
        params = Router.swap_call_parameters(trade, _options(allowed_slippage=Percent(0)))
        assert params.args[1] == hex(trade.output_amount.quotient)

    def test_logs_call_parameters(self, pair_weth_a, ether, token_a):
        trade = Trade.exact_in(Route([pair_weth_a], token_a, ether), amount(token_a, 1000 * 10**18))
        with capture_logs() as logs:
            Router.swap_call_parameters(trade, _options())
        events = [log for log in logs if log["event"] == "router_swap_call_parameters"]
        assert len(events) == 1
        assert events[0]["method"] == "multicall"
        assert events[0]["calls"] == 2
