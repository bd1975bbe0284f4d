"""
Health Check Route

Simple health check endpoint for liveness probes.
"""

from fastapi import APIRouter, Depends

from api.deps import get_store
from api.models.responses import HealthResponse
from core.store import BlobStore


router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(store: BlobStore = Depends(get_store)) -> HealthResponse:
    """
    Health check endpoint.

    Returns service status for liveness probes.
    """
    return HealthResponse(ok=True, file_count=store.count)


@router.get("/", response_model=HealthResponse)
async def root(store: BlobStore = Depends(get_store)) -> HealthResponse:
    """
    Root endpoint - same as health check.
    """
    return HealthResponse(ok=True, file_count=store.count)
