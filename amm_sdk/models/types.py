"""Shared type definitions and address helpers.

These types are used by the snapshot input records and by the router's
SwapParameters output.
"""

from typing import Annotated, Any

from eth_utils import to_checksum_address
from pydantic import AfterValidator, BeforeValidator, Field

from amm_sdk.constants import MAX_UINT256


def validate_uint256(value: Any) -> int:
    """Validate that a value is a uint256, given as int or decimal string.

    Args:
        value: Value to validate (string or int)

    Returns:
        The value as a Python int

    Raises:
        ValueError: If value is not a non-negative integer within uint256 range
    """
    if isinstance(value, bool):
        raise ValueError("Uint256 cannot be a boolean")
    if isinstance(value, str):
        try:
            value = int(value, 0) if value.startswith("0x") else int(value)
        except ValueError as err:
            raise ValueError(f"Uint256 must be an integer string: '{value}'") from err
    if not isinstance(value, int):
        raise ValueError(f"Uint256 must be string or int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"Uint256 cannot be negative: {value}")
    if value > MAX_UINT256:
        raise ValueError(f"Uint256 overflow: {value} > 2^256-1")
    return value


def is_valid_address(address: str) -> bool:
    """Check if a string is a well-formed address (0x + 40 hex chars).

    The checksum is not verified; mixed-case input is accepted as long as it
    is hex.
    """
    if not isinstance(address, str):
        return False
    if not address.startswith("0x") or len(address) != 42:
        return False
    try:
        int(address, 16)
        return True
    except ValueError:
        return False


def normalize_address(address: str) -> str:
    """Lowercase an address, adding the 0x prefix if missing."""
    addr = address.lower()
    if not addr.startswith("0x"):
        addr = "0x" + addr
    return addr


def checksum_address(address: str) -> str:
    """Validate an address and return its EIP-55 checksummed form.

    Raises:
        ValueError: If the address is not 0x + 40 hex chars
    """
    if not is_valid_address(address):
        raise ValueError(f"Invalid address: {address}")
    return to_checksum_address(address)


# Address, checksummed on validation
Address = Annotated[str, Field(pattern=r"^0x[a-fA-F0-9]{40}$"), AfterValidator(checksum_address)]

# 256-bit unsigned integer, accepted as int or decimal/hex string
Uint256 = Annotated[
    int,
    BeforeValidator(validate_uint256),
    Field(description="256-bit unsigned integer"),
]

# 0x-prefixed hex quantity (no leading zeros beyond "0x0")
HexQuantity = Annotated[str, Field(pattern=r"^0x(0|[1-9a-f][0-9a-f]*)$")]

# Arbitrary hex bytes
Bytes = Annotated[str, Field(pattern=r"^0x[a-fA-F0-9]*$")]


def to_hex_quantity(value: int) -> str:
    """Encode a non-negative integer as a JSON-RPC style hex quantity."""
    if value < 0:
        raise ValueError(f"Hex quantity cannot be negative: {value}")
    return hex(value)
