"""
CLI Root Command

Show the service's current root, optionally pinning it.

Usage:
    vault root [--pin]
"""

from __future__ import annotations

import sys
from argparse import Namespace

from core.client.pinning import save_pinned_root
from core.crypto.hashing import to_hex
from core.http.client import HttpError
from vault_cli import config as vault_config


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def root_cmd(args: Namespace) -> int:
    """
    Execute the root command.

    Pinning a server-reported root means trusting the service at this
    moment; prefer the root `vault upload` computes locally.
    """
    with vault_config.make_client(args) as client:
        try:
            root = client.fetch_root()
        except HttpError as e:
            print(f"Error fetching root: {e}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

    print(to_hex(root))

    if args.pin:
        path = save_pinned_root(vault_config.root_file_path(args), root)
        print(f"pinned to: {path}")
    return EXIT_SUCCESS
