"""
CLI command modules.
"""

from vault_cli.commands import serve, upload, download, root, prove, verify

__all__ = ["serve", "upload", "download", "root", "prove", "verify"]
