"""API route handlers."""

from api.routes import health, files, proofs

__all__ = ["health", "files", "proofs"]
