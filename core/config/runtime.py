"""
Runtime Configuration

Central configuration for the vault service, the vault client and logging.
"""

from __future__ import annotations

import copy
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()


logger = logging.getLogger(__name__)


# 10 MiB multipart limit
DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024


@dataclass
class ServerConfig:
    """Configuration for the HTTP service."""
    host: str = "localhost"
    port: int = 8080
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"


@dataclass
class ClientConfig:
    """Configuration for the vault client."""
    server_url: str = "http://localhost:8080"
    root_file: str = "root_hash.txt"
    timeout: float = 30.0


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables (a .env file is loaded on import)
    - YAML file
    - Programmatic construction
    """
    server: ServerConfig = field(default_factory=ServerConfig)
    client: ClientConfig = field(default_factory=ClientConfig)
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        This is the SINGLE source of truth for all env var reading.

        Supported variables:
        - SERVER_HOST: Host the service binds to
        - SERVER_PORT: Port the service binds to
        - LOG_LEVEL: Logging level
        - VAULT_MAX_UPLOAD_BYTES: Largest accepted upload
        - VAULT_SERVER_URL: Base URL the client talks to
        - VAULT_ROOT_FILE: Where the client pins the root digest
        - VAULT_HTTP_TIMEOUT: Client request timeout in seconds
        - VAULT_LOG_FILE: Optional log file
        """
        overrides: dict[str, Any] = {}

        # Server settings
        if os.getenv("SERVER_HOST"):
            overrides.setdefault("server", {})["host"] = os.getenv("SERVER_HOST")
        if os.getenv("SERVER_PORT"):
            overrides.setdefault("server", {})["port"] = int(os.getenv("SERVER_PORT", "8080"))
        if os.getenv("VAULT_MAX_UPLOAD_BYTES"):
            overrides.setdefault("server", {})["max_upload_bytes"] = int(
                os.getenv("VAULT_MAX_UPLOAD_BYTES", str(DEFAULT_MAX_UPLOAD_BYTES))
            )

        # Client settings
        if os.getenv("VAULT_SERVER_URL"):
            overrides.setdefault("client", {})["server_url"] = os.getenv("VAULT_SERVER_URL")
        if os.getenv("VAULT_ROOT_FILE"):
            overrides.setdefault("client", {})["root_file"] = os.getenv("VAULT_ROOT_FILE")
        if os.getenv("VAULT_HTTP_TIMEOUT"):
            overrides.setdefault("client", {})["timeout"] = float(
                os.getenv("VAULT_HTTP_TIMEOUT", "30")
            )

        # Logging
        if os.getenv("LOG_LEVEL"):
            overrides["log_level"] = os.getenv("LOG_LEVEL")
        if os.getenv("VAULT_LOG_FILE"):
            overrides["log_file"] = os.getenv("VAULT_LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Create configuration from a dictionary."""
        server_data = data.get("server", {}) or {}
        client_data = data.get("client", {}) or {}

        server = ServerConfig(**server_data) if server_data else ServerConfig()
        client = ClientConfig(**client_data) if client_data else ClientConfig()

        return cls(
            server=server,
            client=client,
            log_level=data.get("log_level", "INFO"),
            log_file=data.get("log_file"),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        for key, value in overrides.get("server", {}).items():
            setattr(new_config.server, key, value)

        for key, value in overrides.get("client", {}).items():
            setattr(new_config.client, key, value)

        if "log_level" in overrides:
            new_config.log_level = overrides["log_level"]
        if "log_file" in overrides:
            new_config.log_file = overrides["log_file"]

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "server": {
                "host": self.server.host,
                "port": self.server.port,
                "max_upload_bytes": self.server.max_upload_bytes,
                "cors_origins": list(self.server.cors_origins),
            },
            "client": {
                "server_url": self.client.server_url,
                "root_file": self.client.root_file,
                "timeout": self.client.timeout,
            },
            "log_level": self.log_level,
            "log_file": self.log_file,
        }


def default_config_paths() -> list[Path]:
    """Config files searched, in order, when no explicit path is given."""
    return [
        Path.cwd() / "vault.yaml",
        Path.cwd() / ".vault.yaml",
        Path.home() / ".config" / "merkle-vault" / "config.yaml",
    ]


def load_runtime_config(path: str | Path | None = None) -> RuntimeConfig:
    """
    Load RuntimeConfig from a config file, then overlay environment variables.

    Environment variables ALWAYS override config file values.

    Args:
        path: Explicit YAML file. When None the default locations are searched.

    Raises:
        FileNotFoundError: If an explicit path does not exist
    """
    config: RuntimeConfig | None = None

    if path is not None:
        config = RuntimeConfig.from_yaml(path)
        logger.debug(f"Loaded config from {path}")
    else:
        for candidate in default_config_paths():
            if candidate.exists():
                config = RuntimeConfig.from_yaml(candidate)
                logger.debug(f"Loaded config from {candidate}")
                break

    if config is None:
        config = RuntimeConfig()

    return config.with_env_overrides()


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """server:
  host: localhost
  port: 8080
  max_upload_bytes: 10485760
  cors_origins: ["*"]
client:
  server_url: http://localhost:8080
  root_file: root_hash.txt
  timeout: 30.0
log_level: INFO
log_file: null
"""
