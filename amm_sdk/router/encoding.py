"""Router calldata encoding.

Selectors are derived from the canonical signatures with keccak, arguments
are ABI-encoded with eth_abi.
"""

from __future__ import annotations

from collections.abc import Sequence

from eth_abi import encode  # type: ignore[attr-defined]
from eth_utils import keccak

from amm_sdk.models.types import is_valid_address
from amm_sdk.safe_int import S

# swapExactForVariable(uint amountIn, uint amountOutMin, address[] path, uint256[] curveIds, address to)
SWAP_EXACT_FOR_VARIABLE = "swapExactForVariable"
SWAP_EXACT_FOR_VARIABLE_SIGNATURE = "swapExactForVariable(uint256,uint256,address[],uint256[],address)"

# swapVariableForExact(uint amountOut, uint amountInMax, address[] path, uint256[] curveIds, address to)
SWAP_VARIABLE_FOR_EXACT = "swapVariableForExact"
SWAP_VARIABLE_FOR_EXACT_SIGNATURE = "swapVariableForExact(uint256,uint256,address[],uint256[],address)"

# unwrapWETH9(uint256 amountMinimum, address recipient), from the router's payments module
UNWRAP_WETH9 = "unwrapWETH9"
UNWRAP_WETH9_SIGNATURE = "unwrapWETH9(uint256,address)"

MULTICALL = "multicall"
MULTICALL_SIGNATURE = "multicall(bytes[])"

_SWAP_ARG_TYPES = ["uint256", "uint256", "address[]", "uint256[]", "address"]


def function_selector(signature: str) -> bytes:
    """First four bytes of the keccak hash of a function signature."""
    return keccak(text=signature)[:4]


def _address_bytes(address: str, name: str) -> bytes:
    if not is_valid_address(address):
        raise ValueError(f"Invalid {name} address: {address}")
    return bytes.fromhex(address[2:])


def _encode_call(signature: str, arg_types: list[str], args: list[object]) -> str:
    return "0x" + (function_selector(signature) + encode(arg_types, args)).hex()


def _encode_swap(
    signature: str,
    amount_a: int,
    amount_b: int,
    path: Sequence[str],
    curve_ids: Sequence[int],
    to: str,
) -> str:
    path_bytes = [_address_bytes(addr, f"path[{i}]") for i, addr in enumerate(path)]
    return _encode_call(
        signature,
        _SWAP_ARG_TYPES,
        [
            S(amount_a).to_uint256(),
            S(amount_b).to_uint256(),
            path_bytes,
            list(curve_ids),
            _address_bytes(to, "recipient"),
        ],
    )


def encode_swap_exact_for_variable(
    amount_in: int,
    amount_out_min: int,
    path: Sequence[str],
    curve_ids: Sequence[int],
    to: str,
) -> str:
    """Encode an exact-input swap.

    Args:
        amount_in: Exact amount of the first path token to sell
        amount_out_min: Minimum amount of the last path token to receive
        path: Token addresses visited
        curve_ids: Curve id of the pair used at each hop
        to: Address receiving the output

    Returns:
        0x-prefixed calldata

    Raises:
        Uint256Overflow: If an amount does not fit in a uint256
    """
    return _encode_swap(SWAP_EXACT_FOR_VARIABLE_SIGNATURE, amount_in, amount_out_min, path, curve_ids, to)


def encode_swap_variable_for_exact(
    amount_out: int,
    amount_in_max: int,
    path: Sequence[str],
    curve_ids: Sequence[int],
    to: str,
) -> str:
    """Encode an exact-output swap.

    Args:
        amount_out: Exact amount of the last path token to receive
        amount_in_max: Maximum amount of the first path token to sell
        path: Token addresses visited
        curve_ids: Curve id of the pair used at each hop
        to: Address receiving the output

    Returns:
        0x-prefixed calldata
    """
    return _encode_swap(SWAP_VARIABLE_FOR_EXACT_SIGNATURE, amount_out, amount_in_max, path, curve_ids, to)


def encode_unwrap_weth9(amount_minimum: int, recipient: str) -> str:
    """Encode unwrapping the router's wrapped-native balance to ``recipient``."""
    return _encode_call(
        UNWRAP_WETH9_SIGNATURE,
        ["uint256", "address"],
        [S(amount_minimum).to_uint256(), _address_bytes(recipient, "recipient")],
    )


def encode_multicall(calldatas: Sequence[str]) -> str:
    """Batch several router calls; a single call is returned unchanged."""
    if len(calldatas) == 1:
        return calldatas[0]
    data = [bytes.fromhex(calldata[2:]) for calldata in calldatas]
    return _encode_call(MULTICALL_SIGNATURE, ["bytes[]"], [data])
