"""
Root Pinning

Persist and reload the root digest a client has decided to trust.

The pin is a single 0x-prefixed hex line. The vault service never sees
this file; it is the verifier's own trust anchor.
"""

from __future__ import annotations

import logging
from pathlib import Path

from core.crypto.hashing import DIGEST_SIZE, digest_from_hex, to_hex


logger = logging.getLogger(__name__)


def save_pinned_root(path: str | Path, root: bytes) -> Path:
    """
    Write a root digest to path.

    Raises:
        ValueError: If root is not a 32-byte digest
    """
    if len(root) != DIGEST_SIZE:
        raise ValueError(f"Root must be {DIGEST_SIZE} bytes, got {len(root)}")

    path = Path(path)
    if path.parent != Path("."):
        path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(to_hex(root) + "\n", encoding="utf-8")
    logger.info(f"Pinned root {to_hex(root)} to {path}")
    return path


def load_pinned_root(path: str | Path) -> bytes:
    """
    Read a pinned root digest from path.

    Raises:
        FileNotFoundError: If nothing has been pinned at path
        ValueError: If the file does not hold a 32-byte hex digest
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"No pinned root at {path}")

    text = path.read_text(encoding="utf-8").strip()
    try:
        return digest_from_hex(text)
    except ValueError as e:
        raise ValueError(f"Pinned root file {path} is invalid: {e}") from e


__all__ = [
    "save_pinned_root",
    "load_pinned_root",
]
