"""
Vault Client Module

HTTP client for the vault service plus root pinning helpers.
"""

from .pinning import save_pinned_root, load_pinned_root
from .vault_client import UploadResult, VaultClient, directions_for_index

__all__ = [
    "VaultClient",
    "UploadResult",
    "directions_for_index",
    "save_pinned_root",
    "load_pinned_root",
]
