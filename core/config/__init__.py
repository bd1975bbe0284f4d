"""
Runtime Configuration Module

Provides configuration loading and management for the vault service and client.
"""

from .runtime import (
    RuntimeConfig,
    ServerConfig,
    ClientConfig,
    load_runtime_config,
    get_default_config_template,
)

__all__ = [
    "RuntimeConfig",
    "ServerConfig",
    "ClientConfig",
    "load_runtime_config",
    "get_default_config_template",
]
