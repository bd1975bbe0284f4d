"""
Blob Store

Ordered in-memory blob list that owns the Merkle tree committing to it.
"""

from .blob_store import BlobStore, StoreSnapshot

__all__ = [
    "BlobStore",
    "StoreSnapshot",
]
