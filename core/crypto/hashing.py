"""
Hashing Utilities
SHA-256 digest and the ordered pair combinator used by the Merkle tree.

This module provides:
- SHA-256 hashing for raw bytes
- Ordered pair hashing: hash_pair(left, right) = sha256(left + right)
- Hex encoding/decoding with 0x prefix (the wire form of every digest)

Security/Determinism Notes:
- Always hash raw bytes exactly as given, no prefixing or normalization
- hash_pair is NOT commutative; argument order is part of the tree shape
"""
from __future__ import annotations

import hashlib


# Fixed digest width in bytes
DIGEST_SIZE: int = 32

# All-zero digest reported as the root of an empty store
EMPTY_ROOT: bytes = bytes(DIGEST_SIZE)


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def hash_pair(left: bytes, right: bytes) -> bytes:
    """
    Hash an ordered pair of digests: sha256(left + right).

    hash_pair(a, b) != hash_pair(b, a) for a != b, so callers must keep
    the left/right order the tree was built with.

    Args:
        left: Left child digest
        right: Right child digest

    Returns:
        32-byte parent digest
    """
    return sha256(left + right)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert a hexadecimal string to bytes.

    The 0x prefix is optional so digests pasted from other tools
    (sha256sum output, hand-written root files) are accepted too.

    Raises:
        ValueError: If the string has odd length or invalid hex characters
    """
    hex_content = hex_string.strip()
    if hex_content.startswith(("0x", "0X")):
        hex_content = hex_content[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length, got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


def digest_from_hex(hex_string: str) -> bytes:
    """Decode a hex string and require exactly DIGEST_SIZE bytes."""
    digest = from_hex(hex_string)
    if len(digest) != DIGEST_SIZE:
        raise ValueError(
            f"Digest must be {DIGEST_SIZE} bytes, got {len(digest)}"
        )
    return digest


__all__ = [
    "DIGEST_SIZE",
    "EMPTY_ROOT",
    "sha256",
    "hash_pair",
    "to_hex",
    "from_hex",
    "digest_from_hex",
]
