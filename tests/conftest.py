"""
POE Cascade Test Configuration and Fixtures
"""

import logging

import pytest

from poe_cascade.chain.schema import ChainConfig, LinkInput


CONFIG_ENV_VARS = [
    "POE_CASCADE_ENVIRONMENT",
    "POE_CASCADE_DEBUG",
    "POE_CASCADE_SWITCH_WATTS",
    "POE_CASCADE_TWO_PAIR",
    "POE_CASCADE_SITUATION",
    "POE_CASCADE_API_HOST",
    "POE_CASCADE_API_PORT",
    "POE_CASCADE_API_ENABLE_DOCS",
    "POE_CASCADE_API_DOCS_URL",
    "POE_CASCADE_API_CORS_ORIGINS",
    "POE_CASCADE_LOG_LEVEL",
    "POE_CASCADE_LOG_FORMAT",
    "POE_CASCADE_LOG_FILE",
    "POE_CASCADE_JSON_LOGS",
]


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """
    Run every test without ambient configuration.

    Clears POE_CASCADE_* variables, moves into an empty directory so no
    ./poe_cascade.json is picked up, and drops the cached config.
    """
    from poe_cascade.bootstrap.config import reset_config

    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)

    reset_config()
    yield
    reset_config()

    # cli_main installs stderr handlers bound to the captured stream
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if getattr(handler, "_poe_cascade", False):
            root_logger.removeHandler(handler)
            handler.close()


@pytest.fixture
def two_device_chain():
    """Two Cat6 links, 10 m each, 2 W draw at 90% efficiency."""
    return [
        LinkInput(cable_length_meters=10, cable_type="Cat6", device_draw_watts=2, efficiency_percent=90),
        LinkInput(cable_length_meters=10, cable_type="Cat6", device_draw_watts=2, efficiency_percent=90),
    ]


@pytest.fixture
def typical_config():
    """30 W two-pair PSE in the typical situation."""
    return ChainConfig(switch_output_watts=30.0, two_pair=True, cable_situation="typical")
