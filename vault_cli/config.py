"""
CLI Configuration

Loads the shared RuntimeConfig, applies command-line overrides and builds
the objects commands need from it.
"""

from __future__ import annotations

from argparse import Namespace
from pathlib import Path

from core.client import VaultClient
from core.config.runtime import RuntimeConfig, load_runtime_config


def load_config(
    path: Path | None = None,
    *,
    server_url: str | None = None,
    root_file: str | None = None,
) -> RuntimeConfig:
    """
    Load configuration for a CLI invocation.

    Precedence: command-line flags > environment > config file > defaults.
    """
    config = load_runtime_config(path)
    if server_url:
        config.client.server_url = server_url
    if root_file:
        config.client.root_file = root_file
    return config


def root_file_path(args: Namespace) -> Path:
    """Where this invocation reads and writes the pinned root."""
    return Path(args.cli_config.client.root_file)


def make_client(args: Namespace) -> VaultClient:
    """Build a VaultClient from the invocation's configuration."""
    client_config = args.cli_config.client
    return VaultClient(client_config.server_url, timeout=client_config.timeout)
