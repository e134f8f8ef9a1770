"""Router call parameters for executing a trade.

Turns a Trade into the method name, arguments and native value for a call
to the router contract. Nothing here talks to the chain; submitting the call
is up to the caller.
"""

from __future__ import annotations

import structlog
from pydantic import BaseModel, ConfigDict, Field

from amm_sdk.config import DEFAULT_CONFIG, SdkConfig
from amm_sdk.constants import ZERO_HEX
from amm_sdk.entities.fractions import Percent
from amm_sdk.entities.trade import Trade, TradeType
from amm_sdk.errors import FeeOnTransferExactOutput, NativeInNativeOut
from amm_sdk.models.types import Address, Bytes, HexQuantity, to_hex_quantity
from amm_sdk.router.encoding import (
    MULTICALL,
    SWAP_EXACT_FOR_VARIABLE,
    SWAP_VARIABLE_FOR_EXACT,
    encode_multicall,
    encode_swap_exact_for_variable,
    encode_swap_variable_for_exact,
    encode_unwrap_weth9,
)

logger = structlog.get_logger()


class TradeOptions(BaseModel):
    """Options for producing the router call of a trade."""

    model_config = ConfigDict(arbitrary_types_allowed=True, populate_by_name=True, frozen=True)

    # How much the execution price may move unfavorably from the quoted price
    allowed_slippage: Percent = Field(alias="allowedSlippage")
    # Account receiving the output of the swap
    recipient: Address
    # Whether any token on the path takes a fee on transfer
    fee_on_transfer: bool = Field(default=False, alias="feeOnTransfer")


class SwapParameters(BaseModel):
    """Method and arguments for the router call.

    ``args`` holds amounts as hex strings, the path as checksummed
    addresses and the curve ids as ints; for a batched call it holds a single
    list with the encoded inner calls. ``calldata`` is the fully encoded call,
    kept out of serialized output.
    """

    model_config = ConfigDict(populate_by_name=True)

    method_name: str = Field(alias="methodName")
    args: list[str | list[str] | list[int]]
    value: HexQuantity
    calldata: Bytes = Field(exclude=True)


class Router:
    """Encodes trades as router calls. Not instantiable; use the static methods."""

    def __init__(self) -> None:
        raise TypeError("Router only has static methods")

    @staticmethod
    def swap_call_parameters(
        trade: Trade,
        options: TradeOptions,
        config: SdkConfig = DEFAULT_CONFIG,
    ) -> SwapParameters:
        """Produce the router method name, arguments and value for a trade.

        When the output is the native currency the swap delivers the wrapped
        token to the router, and an unwrap call forwarding at least the minimum
        output to the recipient is batched after it with multicall.

        Args:
            trade: Trade to execute
            options: Slippage tolerance, recipient and fee-on-transfer flag
            config: Provides the router address used as swap recipient before unwrapping

        Returns:
            SwapParameters ready to hand to a submitter

        Raises:
            NativeInNativeOut: If both sides of the trade are the native currency
            FeeOnTransferExactOutput: If fee_on_transfer is set on an exact-output trade
        """
        native_in = trade.input_amount.currency.is_native
        native_out = trade.output_amount.currency.is_native
        if native_in and native_out:
            raise NativeInNativeOut("Router does not support native currency in and out", trade=trade)
        if options.fee_on_transfer and trade.trade_type == TradeType.EXACT_OUTPUT:
            raise FeeOnTransferExactOutput(
                "Exact-output trades cannot involve fee-on-transfer tokens",
                trade=trade,
            )

        recipient = options.recipient
        amount_in = trade.maximum_amount_in(options.allowed_slippage).quotient
        amount_out = trade.minimum_amount_out(options.allowed_slippage).quotient
        path = [token.address for token in trade.route.path]
        curve_ids = trade.route.curve_ids
        # unwrapWETH9 pays out of the router's own wrapped-native balance, so the
        # swap has to deliver there first
        swap_to = config.router_address if native_out else recipient

        value = to_hex_quantity(amount_in) if native_in else ZERO_HEX

        args: list[str | list[str] | list[int]]
        if trade.trade_type == TradeType.EXACT_INPUT:
            method_name = SWAP_EXACT_FOR_VARIABLE
            args = [to_hex_quantity(amount_in), to_hex_quantity(amount_out), path, curve_ids, swap_to]
            calldatas = [encode_swap_exact_for_variable(amount_in, amount_out, path, curve_ids, swap_to)]
        else:
            method_name = SWAP_VARIABLE_FOR_EXACT
            args = [to_hex_quantity(amount_out), to_hex_quantity(amount_in), path, curve_ids, swap_to]
            calldatas = [encode_swap_variable_for_exact(amount_out, amount_in, path, curve_ids, swap_to)]

        if native_out:
            calldatas.append(encode_unwrap_weth9(amount_out, recipient))

        # only use multicall if there is more than one call to make
        if len(calldatas) > 1:
            method_name = MULTICALL
            args = [calldatas]

        logger.debug(
            "router_swap_call_parameters",
            method=method_name,
            trade_type=trade.trade_type.name,
            amount_in=amount_in,
            amount_out=amount_out,
            calls=len(calldatas),
            fee_on_transfer=options.fee_on_transfer,
        )
        return SwapParameters(
            method_name=method_name,
            args=args,
            value=value,
            calldata=encode_multicall(calldatas),
        )
