"""Configuration loading and validation."""

from stellar_tools.config.loader import load_config
from stellar_tools.config.schema import (
    GatewayConfig,
    LoggingConfig,
    StellarToolsConfig,
)

__all__ = [
    "GatewayConfig",
    "LoggingConfig",
    "StellarToolsConfig",
    "load_config",
]
