"""
Pytest configuration and shared fixtures for Merkle Vault tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

from core.config.runtime import RuntimeConfig
from core.http.client import HttpResponse
from core.store import BlobStore


# Environment variables RuntimeConfig reads; cleared so a developer's shell
# or .env cannot leak into tests
CONFIG_ENV_VARS = [
    "SERVER_HOST",
    "SERVER_PORT",
    "LOG_LEVEL",
    "VAULT_SERVER_URL",
    "VAULT_ROOT_FILE",
    "VAULT_HTTP_TIMEOUT",
    "VAULT_MAX_UPLOAD_BYTES",
    "VAULT_LOG_FILE",
]


# =============================================================================
# Test Helpers
# =============================================================================

class TestClientTransport:
    """
    Stand-in for core.http.client.HttpClient that routes requests into a
    FastAPI TestClient, so VaultClient can be exercised end to end
    without a network.
    """

    __test__ = False

    def __init__(self, test_client):
        self.test_client = test_client
        self.requests: list[tuple[str, str]] = []

    def _wrap(self, response) -> HttpResponse:
        return HttpResponse(
            status_code=response.status_code,
            content=response.content,
            headers=dict(response.headers),
            url=str(response.url),
        )

    def get(self, url, *, headers=None, params=None, timeout=None) -> HttpResponse:
        self.requests.append(("GET", url))
        return self._wrap(self.test_client.get(url, headers=headers, params=params))

    def post(
        self,
        url,
        *,
        headers=None,
        params=None,
        data=None,
        json=None,
        files=None,
        timeout=None,
    ) -> HttpResponse:
        self.requests.append(("POST", url))
        return self._wrap(self.test_client.post(
            url, headers=headers, params=params, data=data, json=json, files=files,
        ))

    def close(self) -> None:
        pass


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def clean_config_env(monkeypatch):
    """Strip vault configuration variables from the environment."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def store():
    """Provide an empty BlobStore."""
    return BlobStore()


@pytest.fixture
def runtime_config():
    """Provide a default RuntimeConfig."""
    return RuntimeConfig()


@pytest.fixture
def app(store, runtime_config):
    """FastAPI application serving the `store` fixture."""
    from api.app import create_app
    return create_app(config=runtime_config, store=store)


@pytest.fixture
def api_client(app):
    """TestClient bound to the `app` fixture."""
    from fastapi.testclient import TestClient
    return TestClient(app)


@pytest.fixture
def transport(api_client):
    """HttpClient stand-in routed into the `app` fixture."""
    return TestClientTransport(api_client)


@pytest.fixture
def vault_client(transport):
    """VaultClient talking to the `app` fixture through a TestClient."""
    from core.client import VaultClient
    return VaultClient("http://testserver", http=transport)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
