"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    vault serve [--host HOST] [--port PORT]
    vault upload FILE [FILE ...] [--json]
    vault download INDEX [--out PATH] [--root HEX]
    vault root [--pin]
    vault prove INDEX [--out PROOF.json]
    vault verify FILE --proof PROOF.json [--root HEX] [--json]
    vault config --init

Environment Variables:
    VAULT_SERVER_URL        Service the client talks to (default: http://localhost:8080)
    VAULT_ROOT_FILE         Pinned root file (default: root_hash.txt)
    VAULT_HTTP_TIMEOUT      Client request timeout in seconds
    SERVER_HOST             Host `vault serve` binds to
    SERVER_PORT             Port `vault serve` binds to
    LOG_LEVEL               Log level (default: INFO)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from core.config.runtime import get_default_config_template
from vault_cli.commands import serve, upload, download, root, prove, verify
from vault_cli.config import load_config


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="vault",
        description="Merkle Vault CLI - Store files remotely and verify every download against a pinned root.",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s 0.1.0"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./vault.yaml or ~/.config/merkle-vault/config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--server",
        type=str,
        default=None,
        help="Vault service URL (overrides config)",
    )
    parser.add_argument(
        "--root-file",
        type=str,
        default=None,
        help="Pinned root file (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- serve command ---
    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the vault HTTP service",
        description="Serve uploads, downloads and proofs over HTTP.",
    )
    serve_parser.add_argument("--host", type=str, default=None, help="Bind host (default: from config)")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port (default: from config)")
    serve_parser.set_defaults(func=serve.serve_cmd)

    # --- upload command ---
    upload_parser = subparsers.add_parser(
        "upload",
        help="Upload files and pin the resulting root",
        description="Upload files in order, compute their root locally and pin it.",
    )
    upload_parser.add_argument(
        "files",
        nargs="+",
        help="Files to upload",
    )
    upload_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    upload_parser.set_defaults(func=upload.upload_cmd)

    # --- download command ---
    download_parser = subparsers.add_parser(
        "download",
        help="Download a file and verify it against the pinned root",
        description="Fetch a file and its proof; refuse it unless it matches the pinned root.",
    )
    download_parser.add_argument("index", type=int, help="File index")
    download_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the verified file here (default: stdout)",
    )
    download_parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Root digest to verify against (default: the pinned root file)",
    )
    download_parser.set_defaults(func=download.download_cmd)

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Show the service's current root",
    )
    root_parser.add_argument(
        "--pin",
        action="store_true",
        default=False,
        help="Also save it as the pinned root",
    )
    root_parser.set_defaults(func=root.root_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Fetch the inclusion proof for a file",
    )
    prove_parser.add_argument("index", type=int, help="File index")
    prove_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Save the proof JSON here (default: stdout)",
    )
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a local file against a saved proof (offline)",
        description="Replay a saved proof over a local file and compare with the pinned root.",
    )
    verify_parser.add_argument("file", type=str, help="File to verify")
    verify_parser.add_argument(
        "--proof", "-p",
        type=str,
        required=True,
        help="Proof JSON saved by `vault prove`",
    )
    verify_parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Root digest to verify against (default: the pinned root file)",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON report",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="vault.yaml",
        help="Path for config file (default: vault.yaml)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your settings.")
        print("Environment variables (VAULT_*, SERVER_*, LOG_LEVEL) override it.")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    # Default: show help
    print("Usage: vault config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_config(
            args.config,
            server_url=args.server,
            root_file=args.root_file,
        )
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Setup logging
    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if log_level.upper() == "DEBUG":
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
