"""
CLI Upload Command

Upload files and pin the root computed over them locally.

Usage:
    vault upload FILE [FILE ...] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any

from core.client.pinning import save_pinned_root
from core.crypto.hashing import to_hex
from core.http.client import HttpError
from vault_cli import config as vault_config


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


@dataclass
class UploadSummary:
    """Summary of an upload batch for CLI output."""
    files: list[str] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)
    local_root: str = ""
    server_root: str = ""
    roots_match: bool = True
    root_file: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def print_summary_human(summary: UploadSummary) -> None:
    for name, index in zip(summary.files, summary.indices):
        print(f"uploaded: {name} -> index {index}")
    print(f"root: {summary.local_root}")
    print(f"pinned to: {summary.root_file}")
    if not summary.roots_match:
        print(
            f"warning: server root {summary.server_root} differs; "
            f"the service holds files not in this batch",
            file=sys.stderr,
        )


def upload_cmd(args: Namespace) -> int:
    """
    Execute the upload command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    paths = [Path(p) for p in args.files]
    missing = [p for p in paths if not p.is_file()]
    if missing:
        print(f"Error: File not found: {missing[0]}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    root_file = vault_config.root_file_path(args)

    with vault_config.make_client(args) as client:
        try:
            result = client.upload_files(paths)
        except HttpError as e:
            print(f"Error uploading: {e}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

    save_pinned_root(root_file, result.local_root)

    summary = UploadSummary(
        files=[str(p) for p in paths],
        indices=result.indices,
        local_root=to_hex(result.local_root),
        server_root=to_hex(result.server_root),
        roots_match=result.roots_match,
        root_file=str(root_file),
    )

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)
    return EXIT_SUCCESS
