"""
bootstrap/config.py - Application configuration

Provides configuration loading from files, environment variables, and defaults.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from pathlib import Path
import os
import json
import logging

from poe_cascade.core.constants import (
    DEFAULT_SWITCH_OUTPUT_W,
    DEFAULT_TWO_PAIR,
    DEFAULT_CABLE_SITUATION,
    POE_CASCADE_VERSION,
)
from poe_cascade.chain.schema import ChainConfig

logger = logging.getLogger("bootstrap.config")


def _env_bool(name: str, default: bool) -> bool:
    return os.getenv(name, "true" if default else "false").lower() == "true"


@dataclass
class ChainDefaultsConfig:
    """Defaults for chain calculations when a request leaves them out."""

    switch_output_watts: float = DEFAULT_SWITCH_OUTPUT_W
    two_pair: bool = DEFAULT_TWO_PAIR
    cable_situation: str = DEFAULT_CABLE_SITUATION

    @classmethod
    def from_env(cls) -> "ChainDefaultsConfig":
        return cls(
            switch_output_watts=float(os.getenv("POE_CASCADE_SWITCH_WATTS", str(DEFAULT_SWITCH_OUTPUT_W))),
            two_pair=_env_bool("POE_CASCADE_TWO_PAIR", DEFAULT_TWO_PAIR),
            cable_situation=os.getenv("POE_CASCADE_SITUATION", DEFAULT_CABLE_SITUATION),
        )

    def to_chain_config(self) -> ChainConfig:
        return ChainConfig(
            switch_output_watts=self.switch_output_watts,
            two_pair=self.two_pair,
            cable_situation=self.cable_situation,
        )


@dataclass
class APIConfig:
    """API server configuration."""

    host: str = "0.0.0.0"
    port: int = 8000
    enable_docs: bool = True
    docs_url: str = "/docs"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> "APIConfig":
        cors = os.getenv("POE_CASCADE_API_CORS_ORIGINS", "*")
        return cls(
            host=os.getenv("POE_CASCADE_API_HOST", "0.0.0.0"),
            port=int(os.getenv("POE_CASCADE_API_PORT", "8000")),
            enable_docs=_env_bool("POE_CASCADE_API_ENABLE_DOCS", True),
            docs_url=os.getenv("POE_CASCADE_API_DOCS_URL", "/docs"),
            cors_origins=cors.split(",") if cors else ["*"],
        )


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_file: Optional[str] = None
    json_logs: bool = False

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        return cls(
            level=os.getenv("POE_CASCADE_LOG_LEVEL", "INFO"),
            format=os.getenv("POE_CASCADE_LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
            log_file=os.getenv("POE_CASCADE_LOG_FILE"),
            json_logs=_env_bool("POE_CASCADE_JSON_LOGS", False),
        )


@dataclass
class POECascadeConfig:
    """Root configuration for the POE cascade calculator."""

    environment: str = "development"
    debug: bool = False
    version: str = POE_CASCADE_VERSION

    chain: ChainDefaultsConfig = field(default_factory=ChainDefaultsConfig)
    api: APIConfig = field(default_factory=APIConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls) -> "POECascadeConfig":
        """Create configuration from environment variables."""
        return cls(
            environment=os.getenv("POE_CASCADE_ENVIRONMENT", "development"),
            debug=_env_bool("POE_CASCADE_DEBUG", False),
            chain=ChainDefaultsConfig.from_env(),
            api=APIConfig.from_env(),
            logging=LoggingConfig.from_env(),
        )

    @classmethod
    def from_file(cls, filepath: str) -> "POECascadeConfig":
        """Load configuration from JSON file."""
        path = Path(filepath)
        if not path.exists():
            logger.warning(f"Config file not found: {filepath}, using defaults")
            return cls.from_env()

        with open(path) as f:
            data = json.load(f)

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "POECascadeConfig":
        """Create config from dictionary, overriding environment values."""
        config = cls.from_env()

        if "environment" in data:
            config.environment = data["environment"]
        if "debug" in data:
            config.debug = data["debug"]

        for section in ("chain", "api", "logging"):
            target = getattr(config, section)
            values = data.get(section) or {}
            if not isinstance(values, dict):
                logger.warning(f"Ignoring config section {section}: expected an object, got {type(values).__name__}")
                continue
            for key, value in values.items():
                if hasattr(target, key):
                    setattr(target, key, value)
                else:
                    logger.warning(f"Ignoring unknown config key: {section}.{key}")

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Serialize config to dictionary."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "version": self.version,
            "chain": {
                "switch_output_watts": self.chain.switch_output_watts,
                "two_pair": self.chain.two_pair,
                "cable_situation": self.chain.cable_situation,
            },
            "api": {
                "host": self.api.host,
                "port": self.api.port,
                "enable_docs": self.api.enable_docs,
            },
            "logging": {
                "level": self.logging.level,
                "json_logs": self.logging.json_logs,
            },
        }


# Global config instance
_config: Optional[POECascadeConfig] = None


def load_config(filepath: str = None) -> POECascadeConfig:
    """
    Load configuration from file or environment.

    Args:
        filepath: Optional path to JSON config file

    Returns:
        POECascadeConfig instance
    """
    global _config

    if filepath:
        _config = POECascadeConfig.from_file(filepath)
    else:
        default_paths = [
            "./poe_cascade.json",
            "./config/poe_cascade.json",
            os.path.expanduser("~/.poe_cascade/config.json"),
        ]

        for path in default_paths:
            if Path(path).exists():
                logger.info(f"Loading config from: {path}")
                _config = POECascadeConfig.from_file(path)
                return _config

        _config = POECascadeConfig.from_env()

    logger.info(f"Configuration loaded: environment={_config.environment}")
    return _config


def get_config() -> POECascadeConfig:
    """Get current configuration, loading if needed."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Drop the cached configuration."""
    global _config
    _config = None
