"""
API Response Models

Pydantic models for API response serialization.
Digests are 0x-prefixed lowercase hex strings.
"""

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "merkle-vault-api"
    version: str = "v1"
    file_count: int = Field(default=0, description="Number of stored files")


class UploadResponse(BaseModel):
    """Response for POST /upload endpoint."""

    ok: bool = True
    message: str = "File uploaded successfully"
    file_index: int = Field(..., description="Leaf position assigned to the file")
    filename: str | None = Field(default=None, description="Opaque upload name")
    size: int = Field(..., description="Stored size in bytes")
    root: str = Field(..., description="Root digest after the upload")


class ProofResponse(BaseModel):
    """Response for GET /proof/{index} endpoint."""

    ok: bool = True
    index: int = Field(..., description="Leaf index the proof is for")
    proof: list[str] = Field(
        default_factory=list,
        description="Sibling digests, leaf level first",
    )
    directions: list[bool] = Field(
        default_factory=list,
        description="True where the authenticated node was the left child",
    )
    root: str = Field(..., description="Root digest the proof was generated against")


class RootResponse(BaseModel):
    """Response for GET /root endpoint."""

    ok: bool = True
    root: str = Field(..., description="Current root digest (all zeros when empty)")
    file_count: int = Field(..., description="Number of stored files")


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail = Field(..., description="Error details")
