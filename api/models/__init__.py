"""API response models."""

from api.models.responses import (
    HealthResponse,
    UploadResponse,
    ProofResponse,
    RootResponse,
    ErrorDetail,
    ErrorResponse,
)

__all__ = [
    "HealthResponse",
    "UploadResponse",
    "ProofResponse",
    "RootResponse",
    "ErrorDetail",
    "ErrorResponse",
]
