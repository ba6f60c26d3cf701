"""Authentication helpers for Google API clients.

Public API:
- ServiceAccountToken (service-account key model)
- get_credentials(), authorize() → service_account.Credentials
- DRIVE_READONLY_SCOPE, SPREADSHEETS_READONLY_SCOPE, DEFAULT_SCOPES
- scope_url() (scope helper)
"""

from .config import ServiceAccountToken
from .factory import authorize, get_credentials
from .scopes import (
    DEFAULT_SCOPES,
    DRIVE_READONLY_SCOPE,
    SPREADSHEETS_READONLY_SCOPE,
    scope_url,
)

__all__ = [
    "ServiceAccountToken",
    "authorize",
    "get_credentials",
    "DEFAULT_SCOPES",
    "DRIVE_READONLY_SCOPE",
    "SPREADSHEETS_READONLY_SCOPE",
    "scope_url",
]
