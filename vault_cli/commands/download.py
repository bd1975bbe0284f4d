"""
CLI Download Command

Fetch a file and its proof, and verify it against the pinned root.

Usage:
    vault download INDEX [--out PATH] [--root HEX]

Nothing is written unless verification succeeds.
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace
from pathlib import Path

from core.client.pinning import load_pinned_root
from core.crypto.hashing import digest_from_hex
from core.errors import MalformedProofError, NotFoundError, VerificationFailedError
from core.http.client import HttpError
from vault_cli import config as vault_config


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def resolve_pinned_root(args: Namespace) -> bytes:
    """
    The root to verify against: --root if given, else the pinned root file.

    Raises:
        FileNotFoundError: If no root was given and none is pinned
        ValueError: If the root is not a 32-byte hex digest
    """
    if getattr(args, "root", None):
        return digest_from_hex(args.root)
    return load_pinned_root(vault_config.root_file_path(args))


def download_cmd(args: Namespace) -> int:
    """
    Execute the download command.

    Returns:
        0 on verified download, 1 if the file could not be fetched,
        2 if it does not match the pinned root
    """
    try:
        pinned_root = resolve_pinned_root(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    with vault_config.make_client(args) as client:
        try:
            data = client.download_and_verify(args.index, pinned_root)
        except (VerificationFailedError, MalformedProofError) as e:
            print(f"VERIFICATION FAILED: {e.message}", file=sys.stderr)
            return EXIT_VERIFICATION_FAILED
        except NotFoundError as e:
            print(f"Error: {e.message}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR
        except HttpError as e:
            print(f"Error downloading: {e}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

    if args.out:
        out_path = Path(args.out)
        out_path.write_bytes(data)
        print(f"verified: index {args.index} ({len(data)} bytes) -> {out_path}")
    else:
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()
    return EXIT_SUCCESS
