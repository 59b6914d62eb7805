"""
Runtime configuration tests.
"""

from franklin_tx.runtime.config import DEFAULT_PORT, ClientConfig, ServerConfig


def test_server_defaults():
    config = ServerConfig.from_env({})
    assert config == ServerConfig()
    assert config.url == f"http://127.0.0.1:{DEFAULT_PORT}"


def test_server_from_env():
    config = ServerConfig.from_env({
        "FRANKLIN_SPEC_HOST": "0.0.0.0",
        "FRANKLIN_SPEC_PORT": "9000",
        "FRANKLIN_LOG_LEVEL": "debug",
    })
    assert config.host == "0.0.0.0"
    assert config.port == 9000
    assert config.log_level == "DEBUG"


def test_client_defaults_point_at_server_defaults():
    assert ClientConfig().endpoint == ServerConfig().url
