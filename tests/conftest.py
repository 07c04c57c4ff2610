"""Configuration for pytest."""

import pytest
import structlog


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep DEVCHAIN_* settings from the developer's shell out of the tests."""
    for name in ("DEVCHAIN_CONFIG_PATH", "DEVCHAIN_LOG_LEVEL", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def quiet_structlog():
    structlog.configure(logger_factory=structlog.ReturnLoggerFactory())
    yield
    structlog.reset_defaults()


@pytest.fixture
def sample_config():
    return {
        "networks": {
            "local": {"host": "localhost", "port": 8545, "network_id": "*"},
            "sepolia": {"host": "rpc.example.org", "port": 443, "network_id": 11155111, "gas": 5500000},
        },
        "compilers": {
            "solc": {"version": "^0.8", "settings": {"optimizer": {"enabled": True, "runs": 200}}},
        },
    }
