"""
FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn api.app:app --reload

    # Or run directly
    python -m api.app
"""

import logging
import os
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import health, files, proofs
from api.errors import (
    APIError,
    api_error_handler,
    generic_error_handler,
    index_error_handler,
    malformed_proof_handler,
)
from core.config.runtime import RuntimeConfig, load_runtime_config
from core.errors import IndexOutOfRangeError, MalformedProofError
from core.store import BlobStore


# Configure logging; LOG_LEVEL env var wins over the config file
def _resolve_log_level() -> int:
    """Resolve log level from env var or vault.yaml, defaulting to INFO."""
    raw = os.getenv("LOG_LEVEL")
    if raw is None:
        try:
            raw = load_runtime_config().log_level
        except Exception:
            raw = None
    return getattr(logging, (raw or "INFO").upper(), logging.INFO)


logging.basicConfig(
    level=_resolve_log_level(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_app(
    config: Optional[RuntimeConfig] = None,
    store: Optional[BlobStore] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Runtime configuration (loaded from file/env if omitted)
        store: Blob store to serve (a fresh empty one if omitted)
    """
    config = config or load_runtime_config()

    app = FastAPI(
        title="Merkle Vault API",
        description="""
HTTP API for a Merkle-tree backed file vault.

## Endpoints

- **POST /upload** - Store a file, returns its index and the new root
- **GET /download/{index}** - Raw bytes of a stored file
- **GET /proof/{index}** - Inclusion proof for a stored file
- **GET /root** - Current root digest and file count
- **GET /health** - Health check

## Trust Model

The server is untrusted. Clients keep their own copy of a root they
trust and verify every download against it with the returned proof.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.config = config
    app.state.store = store if store is not None else BlobStore()

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(IndexOutOfRangeError, index_error_handler)
    app.add_exception_handler(MalformedProofError, malformed_proof_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(files.router)
    app.include_router(proofs.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    _config = app.state.config
    uvicorn.run(app, host=_config.server.host, port=_config.server.port)
