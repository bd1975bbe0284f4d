"""
Error Taxonomy

Standard exceptions shared by the tree, proof codec, store and client.

Every exception carries a stable machine-readable code so the HTTP layer
and the CLI can report failures without string matching. Integrity
failures (VerificationFailedError) and availability failures
(NotFoundError, HttpError in core.http) are kept in separate families so
callers never confuse "file unreachable" with "file does not match".
"""

from __future__ import annotations

from typing import Any


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    INDEX_OUT_OF_RANGE = "INDEX_OUT_OF_RANGE"
    NOT_FOUND = "NOT_FOUND"
    MALFORMED_PROOF = "MALFORMED_PROOF"
    VERIFICATION_FAILED = "VERIFICATION_FAILED"


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class VaultError(Exception):
    """
    Base exception for all vault errors.

    Carries a code, a human-readable message and structured details.
    """

    def __init__(
        self,
        message: str,
        code: str = "VAULT_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": self.details}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class IndexOutOfRangeError(VaultError, IndexError):
    """Raised when a leaf/blob index is negative or past the end."""

    def __init__(self, index: int, length: int) -> None:
        super().__init__(
            message=f"Index {index} out of range for {length} leaves",
            code=ErrorCodes.INDEX_OUT_OF_RANGE,
            details={"index": index, "length": length},
        )
        self.index = index
        self.length = length


class NotFoundError(VaultError):
    """Raised by the client when the server reports an unknown file index."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message=message, code=ErrorCodes.NOT_FOUND, details=details)


class MalformedProofError(VaultError, ValueError):
    """Raised when a proof is structurally invalid (rejected before replay)."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message=message, code=ErrorCodes.MALFORMED_PROOF, details=details)


class VerificationFailedError(VaultError):
    """
    Raised when a replayed proof does not reproduce the pinned root.

    Signals tampering or a stale pin. Never retried.
    """

    def __init__(
        self,
        computed_root: bytes,
        expected_root: bytes,
        index: int | None = None,
    ) -> None:
        details: dict[str, Any] = {
            "computed_root": "0x" + computed_root.hex(),
            "expected_root": "0x" + expected_root.hex(),
        }
        if index is not None:
            details["index"] = index
        super().__init__(
            message=(
                f"Verification failed: computed root {details['computed_root']} "
                f"does not match pinned root {details['expected_root']}"
            ),
            code=ErrorCodes.VERIFICATION_FAILED,
            details=details,
        )
        self.computed_root = computed_root
        self.expected_root = expected_root
        self.index = index


__all__ = [
    "ErrorCodes",
    "VaultError",
    "IndexOutOfRangeError",
    "NotFoundError",
    "MalformedProofError",
    "VerificationFailedError",
]
