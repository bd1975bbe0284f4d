"""
CLI Verify Command

Verify a local file against a saved proof and a pinned root, offline.
The service is never contacted.

Usage:
    vault verify FILE --proof PROOF.json [--root HEX] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any

from core.crypto.hashing import to_hex
from core.errors import MalformedProofError
from core.merkle.merkle_proofs import MerkleProof, compute_root
from vault_cli.commands.download import resolve_pinned_root


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class VerifySummary:
    """Summary of an offline verification for CLI output."""
    file: str = ""
    index: int = 0
    computed_root: str = ""
    pinned_root: str = ""
    ok: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def print_summary_human(summary: VerifySummary) -> None:
    """Print summary in human-readable format."""
    print(f"file: {summary.file}")
    print(f"index: {summary.index}")
    print(f"computed_root: {summary.computed_root}")
    print(f"pinned_root: {summary.pinned_root}")
    print(f"ok: {str(summary.ok).lower()}")


def load_proof(path: Path) -> MerkleProof:
    """
    Read a proof saved by `vault prove`.

    Any root the file carries is ignored; only the pinned root counts.

    Raises:
        MalformedProofError: If the file is not a well-formed proof
    """
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except ValueError as e:
        raise MalformedProofError(f"Proof file {path} is not JSON: {e}") from e
    return MerkleProof.from_dict(payload)


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Returns:
        0 if the file is committed to by the pinned root, 2 if not,
        1 if inputs are missing
    """
    file_path = Path(args.file)
    proof_path = Path(args.proof)

    for path in (file_path, proof_path):
        if not path.is_file():
            print(f"Error: File not found: {path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

    try:
        pinned_root = resolve_pinned_root(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        proof = load_proof(proof_path)
    except MalformedProofError as e:
        print(f"VERIFICATION FAILED: {e.message}", file=sys.stderr)
        return EXIT_VERIFICATION_FAILED

    computed = compute_root(file_path.read_bytes(), proof)
    summary = VerifySummary(
        file=str(file_path),
        index=proof.index,
        computed_root=to_hex(computed),
        pinned_root=to_hex(pinned_root),
        ok=computed == pinned_root,
    )

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    if summary.ok:
        logger.info("Verification passed")
        return EXIT_SUCCESS
    logger.warning("Verification failed")
    return EXIT_VERIFICATION_FAILED
