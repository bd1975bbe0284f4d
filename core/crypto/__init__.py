"""
Core cryptographic utilities.

SHA-256 digests, the ordered pair combinator and hex codecs.
"""
from .hashing import (
    DIGEST_SIZE,
    EMPTY_ROOT,
    sha256,
    hash_pair,
    to_hex,
    from_hex,
    digest_from_hex,
)

__all__ = [
    "DIGEST_SIZE",
    "EMPTY_ROOT",
    "sha256",
    "hash_pair",
    "to_hex",
    "from_hex",
    "digest_from_hex",
]
