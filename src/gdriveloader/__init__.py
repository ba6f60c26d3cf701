"""Read-only snapshot loader for Google Drive folder trees.

Public API:
- load_drive_tree() / load_drive_tree_sync() → list[FileEntry]
- LoaderConfig (settings)
- ServiceAccountToken (credential model)
- DriveLoaderError, ConfigurationError, AuthorizationError, RemoteCallError
"""

from .auth.config import ServiceAccountToken
from .config import LoaderConfig
from .drive.models import FileEntry
from .errors import (
    AuthorizationError,
    ConfigurationError,
    DriveLoaderError,
    RemoteCallError,
)
from .loader import load_drive_tree, load_drive_tree_sync

__all__ = [
    "load_drive_tree",
    "load_drive_tree_sync",
    "LoaderConfig",
    "ServiceAccountToken",
    "FileEntry",
    "DriveLoaderError",
    "ConfigurationError",
    "AuthorizationError",
    "RemoteCallError",
]
