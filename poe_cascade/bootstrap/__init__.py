"""
bootstrap/ - Bootstrap Layer

Provides configuration loading, logging setup and the CLI / API entry points.
"""

from .config import (
    POECascadeConfig,
    ChainDefaultsConfig,
    APIConfig,
    LoggingConfig,
    load_config,
    get_config,
    reset_config,
)

from .entrypoints import (
    setup_logging,
    cli_main,
    api_main,
)

__all__ = [
    # Config
    "POECascadeConfig",
    "ChainDefaultsConfig",
    "APIConfig",
    "LoggingConfig",
    "load_config",
    "get_config",
    "reset_config",
    # Entry points
    "setup_logging",
    "cli_main",
    "api_main",
]
