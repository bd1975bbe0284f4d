"""
CLI Prove Command

Fetch the inclusion proof for a file and print or save it as JSON.

Usage:
    vault prove INDEX [--out PROOF.json]
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace
from pathlib import Path

from core.errors import MalformedProofError, NotFoundError
from core.http.client import HttpError
from vault_cli import config as vault_config


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def prove_cmd(args: Namespace) -> int:
    """Execute the prove command."""
    with vault_config.make_client(args) as client:
        try:
            proof = client.fetch_proof(args.index)
        except MalformedProofError as e:
            print(f"Error: service returned a malformed proof: {e.message}", file=sys.stderr)
            return EXIT_VERIFICATION_FAILED
        except NotFoundError as e:
            print(f"Error: {e.message}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR
        except HttpError as e:
            print(f"Error fetching proof: {e}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

    text = json.dumps(proof.to_dict(), indent=2)
    if args.out:
        out_path = Path(args.out)
        out_path.write_text(text + "\n", encoding="utf-8")
        print(f"proof for index {proof.index} ({len(proof)} levels) -> {out_path}")
    else:
        print(text)
    return EXIT_SUCCESS
