"""
Merkle Vault CLI

Command-line interface for the vault service and its verifying client.

Usage:
    python -m vault_cli serve --port 8080
    python -m vault_cli upload notes.txt photo.jpg
    python -m vault_cli download 1 --out photo.jpg
    python -m vault_cli prove 1 --out proof.json
    python -m vault_cli verify photo.jpg --proof proof.json
"""

__version__ = "0.1.0"
