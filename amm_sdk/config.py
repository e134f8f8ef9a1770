"""SDK configuration.

The pricing math has no knobs: its parameters are protocol constants. What
can be configured is where calls go and how the library logs.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from amm_sdk.constants import MAINNET_ROUTER_ADDRESS, TESTNET_ROUTER_ADDRESS
from amm_sdk.models.types import checksum_address

_ROUTER_BY_NETWORK = {
    "mainnet": MAINNET_ROUTER_ADDRESS,
    "testnet": TESTNET_ROUTER_ADDRESS,
}

_TRUTHY = ("true", "1", "yes")


@dataclass(frozen=True)
class SdkConfig:
    """Configuration for encoding and logging.

    Attributes:
        router_address: Router the encoded calls target; receives the
            wrapped-native output of a swap before unwrapping it
        log_level: Minimum level for ``configure_logging`` (e.g. "INFO")
        json_logs: Render logs as JSON instead of the console format
    """

    router_address: str = TESTNET_ROUTER_ADDRESS
    log_level: str = "INFO"
    json_logs: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "router_address", checksum_address(self.router_address))
        object.__setattr__(self, "log_level", self.log_level.upper())


def load_config(environ: Mapping[str, str] | None = None) -> SdkConfig:
    """Build a config from environment variables.

    - AMM_SDK_NETWORK: "mainnet" or "testnet" (default: testnet)
    - AMM_SDK_ROUTER_ADDRESS: explicit router address, overrides the network
    - AMM_SDK_LOG_LEVEL: log level name (default: INFO)
    - AMM_SDK_LOG_JSON: render logs as JSON (default: false)

    Raises:
        ValueError: If the network is unknown or the router address is invalid
    """
    env = os.environ if environ is None else environ

    network = env.get("AMM_SDK_NETWORK", "testnet").lower()
    if network not in _ROUTER_BY_NETWORK:
        raise ValueError(f"Unknown AMM_SDK_NETWORK: {network} (expected one of {sorted(_ROUTER_BY_NETWORK)})")

    return SdkConfig(
        router_address=env.get("AMM_SDK_ROUTER_ADDRESS", _ROUTER_BY_NETWORK[network]),
        log_level=env.get("AMM_SDK_LOG_LEVEL", "INFO"),
        json_logs=env.get("AMM_SDK_LOG_JSON", "false").lower() in _TRUTHY,
    )


# Default configuration instance
DEFAULT_CONFIG = SdkConfig()
