"""
API Error Handling

Standardized error handling for the API.
"""

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from api.models.responses import ErrorResponse, ErrorDetail
from core.errors import IndexOutOfRangeError, MalformedProofError


class APIError(Exception):
    """Base API error with structured response."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code=self.code,
                message=self.message,
                details=self.details,
            ),
        )


class MissingFileError(APIError):
    """Required file not provided."""

    def __init__(self, message: str = "Required file not provided"):
        super().__init__(
            code="MISSING_FILE",
            message=message,
            status_code=400,
        )


class UploadTooLargeError(APIError):
    """Uploaded file exceeds the configured limit."""

    def __init__(self, size: int, limit: int):
        super().__init__(
            code="UPLOAD_TOO_LARGE",
            message=f"Upload of {size} bytes exceeds limit of {limit} bytes",
            status_code=413,
            details={"size": size, "limit": limit},
        )


class FileIndexNotFoundError(APIError):
    """No stored file at the requested index."""

    def __init__(self, index: int, count: int):
        super().__init__(
            code="NOT_FOUND",
            message=f"No file at index {index} ({count} files stored)",
            status_code=404,
            details={"index": index, "file_count": count},
        )


class InternalError(APIError):
    """Internal server error."""

    def __init__(self, message: str = "Internal server error", details: dict[str, Any] | None = None):
        super().__init__(
            code="INTERNAL_ERROR",
            message=message,
            status_code=500,
            details=details,
        )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(),
    )


async def index_error_handler(request: Request, exc: IndexOutOfRangeError) -> JSONResponse:
    """Out-of-range indexes from the store are a 404 to HTTP callers."""
    return await api_error_handler(request, FileIndexNotFoundError(exc.index, exc.length))


async def malformed_proof_handler(request: Request, exc: MalformedProofError) -> JSONResponse:
    """A proof the service itself produced failed validation."""
    return await api_error_handler(
        request,
        InternalError(f"Generated proof is malformed: {exc.message}", details=exc.details),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code="INTERNAL_ERROR",
                message="An unexpected error occurred",
                details={"type": type(exc).__name__},
            ),
        ).model_dump(),
    )
