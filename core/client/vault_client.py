"""
Vault Client

Talks to a vault service over HTTP and verifies what it gets back.

The service is untrusted: every downloaded blob is checked against a
root digest the caller pinned earlier, using only the proof the service
returned. Failures come in two disjoint families:
- availability: HttpError (transport), NotFoundError (unknown index)
- integrity: VerificationFailedError, MalformedProofError
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

from core.crypto.hashing import EMPTY_ROOT, digest_from_hex, to_hex
from core.errors import MalformedProofError, NotFoundError
from core.http.client import HttpClient, HttpError, HttpResponse
from core.merkle.merkle_proofs import MerkleProof, require_valid_proof
from core.merkle.merkle_tree import MerkleTree


logger = logging.getLogger(__name__)


@dataclass
class UploadResult:
    """Outcome of uploading a batch of files."""
    indices: list[int] = field(default_factory=list)
    local_root: bytes = EMPTY_ROOT
    server_root: bytes = EMPTY_ROOT

    @property
    def roots_match(self) -> bool:
        return self.local_root == self.server_root


def directions_for_index(index: int, height: int) -> tuple[bool, ...]:
    """
    Direction flags a proof for the given leaf position must carry.

    At every level a node at an even position is a left child, and the
    position halves on the way up.
    """
    return tuple(((index >> level) & 1) == 0 for level in range(height))


class VaultClient:
    """
    Client for the vault HTTP API.

    Usage:
        client = VaultClient("http://localhost:8080")
        index = client.upload_file("notes.txt", b"...")
        pinned = client.fetch_root()
        ...
        data = client.download_and_verify(index, pinned)
    """

    def __init__(
        self,
        base_url: str,
        *,
        http: Optional[HttpClient] = None,
        timeout: float = 30.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.http = http or HttpClient(timeout=timeout)

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    @staticmethod
    def _check(response: HttpResponse) -> HttpResponse:
        """Map 404 to NotFoundError and any other non-2xx to HttpError."""
        if response.status_code == 404:
            message = "Not found"
            try:
                message = response.json()["error"]["message"]
            except (ValueError, KeyError, TypeError):
                pass
            raise NotFoundError(message, details={"url": response.url})
        response.raise_for_status()
        return response

    # -------------------------------------------------------------------------
    # Upload
    # -------------------------------------------------------------------------

    def upload_file(self, name: str, data: bytes) -> int:
        """
        Upload one file.

        Returns:
            The index the service assigned to the file

        Raises:
            HttpError: On transport failure or a non-2xx response
        """
        response = self._check(self.http.post(
            self._url("/upload"),
            params={"filename": name},
            files={"file": (name, data)},
        ))
        index = int(response.json()["file_index"])
        logger.info(f"Uploaded {name} as index {index}")
        return index

    def upload_files(self, paths: Sequence[str | Path]) -> UploadResult:
        """
        Upload files in order and compute the root over their contents.

        The local root is what a careful client pins: it is derived only
        from data the client held. It equals the server root when the
        service held nothing before this batch.
        """
        contents: list[bytes] = []
        result = UploadResult()

        for path in paths:
            path = Path(path)
            data = path.read_bytes()
            contents.append(data)
            result.indices.append(self.upload_file(path.name, data))

        local_root = MerkleTree.build(contents).root
        result.local_root = EMPTY_ROOT if local_root is None else local_root
        result.server_root = self.fetch_root()

        if not result.roots_match:
            logger.warning(
                f"Server root {to_hex(result.server_root)} differs from the root "
                f"of the uploaded files {to_hex(result.local_root)}; the service "
                f"holds other files too"
            )
        return result

    # -------------------------------------------------------------------------
    # Download
    # -------------------------------------------------------------------------

    def download(self, index: int) -> bytes:
        """
        Raises:
            NotFoundError: If the service has no file at index
            HttpError: On transport failure
        """
        response = self._check(self.http.get(self._url(f"/download/{index}")))
        logger.info(f"Downloaded file index {index} ({len(response.content)} bytes)")
        return response.content

    def fetch_proof(self, index: int) -> MerkleProof:
        """
        Raises:
            NotFoundError: If the service has no file at index
            MalformedProofError: If the payload is not a well-formed proof
            HttpError: On transport failure
        """
        response = self._check(self.http.get(self._url(f"/proof/{index}")))
        try:
            payload = response.json()
        except ValueError as e:
            raise MalformedProofError(f"Proof response is not JSON: {e}") from e
        return MerkleProof.from_dict(payload)

    def fetch_root(self) -> bytes:
        """Current root as reported by the (untrusted) service."""
        response = self._check(self.http.get(self._url("/root")))
        try:
            return digest_from_hex(response.json()["root"])
        except (ValueError, KeyError, TypeError) as e:
            raise HttpError(f"Invalid root response: {e}", response=response) from e

    def download_and_verify(self, index: int, pinned_root: bytes) -> bytes:
        """
        Download a file and prove it is committed to by pinned_root.

        Returns:
            The verified file contents

        Raises:
            NotFoundError / HttpError: The file could not be fetched
            MalformedProofError: The proof is malformed or addresses
                                 another leaf position
            VerificationFailedError: The file does not match pinned_root
        """
        data = self.download(index)
        proof = self.fetch_proof(index)

        if proof.index != index or proof.directions != directions_for_index(index, len(proof)):
            raise MalformedProofError(
                f"Proof does not address leaf {index}",
                details={"index": index, "proof_index": proof.index},
            )

        require_valid_proof(data, proof, pinned_root)
        logger.info(f"Verified file index {index} against pinned root {to_hex(pinned_root)}")
        return data

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> "VaultClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()


__all__ = [
    "UploadResult",
    "VaultClient",
    "directions_for_index",
]
