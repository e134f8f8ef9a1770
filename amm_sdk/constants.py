"""Protocol constants for the multi-curve AMM.

These values are defined by the deployed pair and router contracts and must
not drift from them.
"""

from eth_utils import is_hex_address

MAX_UINT256 = 2**256 - 1

# Swap fees are expressed in parts per FEE_ACCURACY (1_000_000 = 100%)
FEE_ACCURACY = 1_000_000

# Amplification coefficients are stored with two decimals of precision
A_PRECISION = 100

# 1000 with 100 of precision
DEFAULT_AMPLIFICATION_COEFFICIENT_PRECISE = 1000 * A_PRECISION

# Bounds on the (unscaled) amplification coefficient accepted by stable pairs
MIN_A = 1
MAX_A = 10_000

# Liquidity locked forever at pool creation; a reserve below it means the
# pool was never (or is no longer) usable
MINIMUM_LIQUIDITY = 1000

# Iteration cap for the stable curve Newton solvers
MAX_LOOP_LIMIT = 256

# Stable curve balances are normalized to 18 decimals before solving
STABLE_PRECISION_DECIMALS = 18

ZERO_HEX = "0x0"


def _validate_address(name: str, address: str) -> str:
    """Validate a well-known address at import time."""
    if not is_hex_address(address):
        raise ValueError(f"Invalid {name} address: {address} (must be 0x + 40 hex chars)")
    return address


# Router deployments (same CREATE2 salt, different wrapped-native constructor argument)
TESTNET_ROUTER_ADDRESS = _validate_address(
    "testnet router", "0xd627FdC984a249E9b5F2df263A37368f4e459726"
)
MAINNET_ROUTER_ADDRESS = _validate_address(
    "mainnet router", "0x7f05c63dc7ca3f99f2d3409f0017c28058c42b27"
)
ROUTER_ADDRESS = TESTNET_ROUTER_ADDRESS


class ChainId:
    """Chain ids with a known wrapped-native token."""

    MAINNET = 1
    AVALANCHE = 43114
    FUJI = 43113


# chain id -> (address, symbol, name) of the wrapped native token;
# the native currency itself uses the unwrapped symbol/name
WRAPPED_NATIVE_TOKENS: dict[int, tuple[str, str, str]] = {
    ChainId.MAINNET: (
        _validate_address("WETH", "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"),
        "WETH",
        "Wrapped Ether",
    ),
    ChainId.AVALANCHE: (
        _validate_address("WAVAX", "0xB31f66AA3C1e785363F0875A1B74E27b85FD66c7"),
        "WAVAX",
        "Wrapped AVAX",
    ),
    ChainId.FUJI: (
        _validate_address("WAVAX (Fuji)", "0xd00ae08403B9bbb9124bB305C09058E32C39A48c"),
        "WAVAX",
        "Wrapped AVAX",
    ),
}

NATIVE_CURRENCY_INFO: dict[int, tuple[str, str]] = {
    ChainId.MAINNET: ("ETH", "Ether"),
    ChainId.AVALANCHE: ("AVAX", "Avalanche"),
    ChainId.FUJI: ("AVAX", "Avalanche"),
}
