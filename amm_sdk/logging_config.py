"""structlog setup for applications embedding the SDK.

The library only calls ``structlog.get_logger()``; it never configures
logging on import. Applications that want the SDK's debug events call
``configure_logging`` once at startup.
"""

from __future__ import annotations

import logging

import structlog

from amm_sdk.config import DEFAULT_CONFIG, SdkConfig


def configure_logging(config: SdkConfig = DEFAULT_CONFIG) -> None:
    """Configure structlog with level filtering and console or JSON output."""
    level = logging.getLevelName(config.log_level)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {config.log_level}")

    renderer = structlog.processors.JSONRenderer() if config.json_logs else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=False,
    )
