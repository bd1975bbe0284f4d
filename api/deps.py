"""
API Dependencies

Dependency injection for the API.
Provides the shared blob store and the runtime configuration.
"""

from __future__ import annotations

from fastapi import Request

from core.config.runtime import RuntimeConfig
from core.store import BlobStore


def get_store(request: Request) -> BlobStore:
    """The BlobStore owned by the running application."""
    return request.app.state.store


def get_config(request: Request) -> RuntimeConfig:
    """The RuntimeConfig the application was created with."""
    return request.app.state.config
