"""Input/output record types."""

from amm_sdk.models.snapshot import PairSnapshot, TokenInfo
from amm_sdk.models.types import (
    Address,
    Bytes,
    HexQuantity,
    Uint256,
    checksum_address,
    is_valid_address,
    normalize_address,
    to_hex_quantity,
)

__all__ = [
    "PairSnapshot",
    "TokenInfo",
    "Address",
    "Bytes",
    "HexQuantity",
    "Uint256",
    "checksum_address",
    "is_valid_address",
    "normalize_address",
    "to_hex_quantity",
]
