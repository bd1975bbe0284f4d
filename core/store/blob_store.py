"""
Blob Store

Ordered, in-memory list of uploaded blobs plus the Merkle tree over them.

Write Policy:
- append() rebuilds the whole tree over every blob (O(n) per append);
  writes are expected to be infrequent
- replace() swaps one blob and rehashes only its leaf path in O(log n);
  padding copies keep their build-time digest, so the root can differ
  from a rebuild when the last leaf of an odd level is replaced

Concurrency:
- A single re-entrant lock guards the blob list and the tree together.
  Writers build the replacement tree and swap it in under the lock and
  readers take the same lock, so no caller ever sees a half-built tree.

Root Pinning:
- The store keeps no history of roots. Callers that want to verify later
  must read get_root() at a moment they trust and persist it themselves.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional

from core.crypto.hashing import EMPTY_ROOT, to_hex
from core.errors import IndexOutOfRangeError
from core.merkle.merkle_proofs import MerkleProof, generate_proof
from core.merkle.merkle_tree import MerkleTree


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreSnapshot:
    """Consistent (count, root) pair read under the store lock."""
    count: int
    root: bytes


class BlobStore:
    """
    Ordered blob storage backed by a Merkle tree.

    Example:
        >>> store = BlobStore()
        >>> store.append(b"hello", name="hello.txt")
        0
        >>> proof = store.get_proof(0)
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._blobs: list[bytes] = []
        self._names: list[Optional[str]] = []
        self._tree = MerkleTree()

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def append(self, blob: bytes, name: Optional[str] = None) -> int:
        """
        Append a blob and rebuild the tree over all blobs.

        Args:
            blob: Raw file contents
            name: Opaque upload name (not part of the commitment)

        Returns:
            Index of the new blob (its leaf position)
        """
        return self.append_and_root(blob, name=name)[0]

    def append_and_root(self, blob: bytes, name: Optional[str] = None) -> tuple[int, bytes]:
        """Append a blob; return its index and the root that includes it, read atomically."""
        data = bytes(blob)
        with self._lock:
            blobs = self._blobs + [data]
            tree = MerkleTree.build(blobs)
            self._blobs = blobs
            self._names = self._names + [name]
            self._tree = tree
            index = len(blobs) - 1
            root = tree.root

        logger.info(f"Stored blob {index} ({len(data)} bytes, name={name!r}); root {to_hex(root)}")
        return index, root

    def replace(self, index: int, blob: bytes) -> bytes:
        """
        Replace the blob at index and update its leaf path.

        Returns:
            The new root digest

        Raises:
            IndexOutOfRangeError: If index is outside [0, count)
        """
        data = bytes(blob)
        with self._lock:
            self._check_index(index)
            self._tree.update(index, data)
            self._blobs[index] = data
            root = self._tree.root

        logger.info(f"Replaced blob {index} ({len(data)} bytes); root {to_hex(root)}")
        return root

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_blob(self, index: int) -> bytes:
        """
        Raises:
            IndexOutOfRangeError: If index is outside [0, count)
        """
        with self._lock:
            self._check_index(index)
            return self._blobs[index]

    def get_name(self, index: int) -> Optional[str]:
        with self._lock:
            self._check_index(index)
            return self._names[index]

    def get_root(self) -> bytes:
        """
        Current root digest.

        Returns the all-zero EMPTY_ROOT when the store is empty. That
        sentinel is only distinguishable from a real digest
        probabilistically, which is accepted.
        """
        with self._lock:
            root = self._tree.root
        return EMPTY_ROOT if root is None else root

    def get_proof(self, index: int) -> MerkleProof:
        """
        Inclusion proof for the blob at index.

        Raises:
            IndexOutOfRangeError: If index is outside [0, count)
        """
        with self._lock:
            return generate_proof(self._tree, index)

    def get_proof_and_root(self, index: int) -> tuple[MerkleProof, bytes]:
        """Proof for index plus the root it was generated against, read atomically."""
        with self._lock:
            return generate_proof(self._tree, index), self._tree.root

    def snapshot(self) -> StoreSnapshot:
        with self._lock:
            root = self._tree.root
            return StoreSnapshot(
                count=len(self._blobs),
                root=EMPTY_ROOT if root is None else root,
            )

    @property
    def count(self) -> int:
        with self._lock:
            return len(self._blobs)

    def __len__(self) -> int:
        return self.count

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= len(self._blobs):
            raise IndexOutOfRangeError(index, len(self._blobs))


__all__ = [
    "BlobStore",
    "StoreSnapshot",
]
