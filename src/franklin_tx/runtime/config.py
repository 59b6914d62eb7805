"""
Runtime configuration for the conformance server and client.
"""

from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Mapping, Optional


DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8734


@dataclass(frozen=True)
class ServerConfig:
    """Configuration for the debug HTTP server."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> ServerConfig:
        """
        Build a config from environment variables.

        Reads FRANKLIN_SPEC_HOST, FRANKLIN_SPEC_PORT and FRANKLIN_LOG_LEVEL;
        unset variables keep their defaults.
        """
        env = os.environ if environ is None else environ
        port = env.get("FRANKLIN_SPEC_PORT")
        return cls(
            host=env.get("FRANKLIN_SPEC_HOST", DEFAULT_HOST),
            port=int(port) if port else DEFAULT_PORT,
            log_level=env.get("FRANKLIN_LOG_LEVEL", "INFO").upper(),
        )

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}"


@dataclass
class ClientConfig:
    """Configuration for the conformance HTTP client."""

    endpoint: str = f"http://{DEFAULT_HOST}:{DEFAULT_PORT}"
    timeout: float = 10.0
    debug: bool = False
    user_agent: str = "franklin-tx-python/0.1.0"


__all__ = ["ServerConfig", "ClientConfig", "DEFAULT_HOST", "DEFAULT_PORT"]
