from __future__ import annotations


class DriveLoaderError(Exception):
    """Base class for errors raised while loading a Drive tree."""


class ConfigurationError(DriveLoaderError, ValueError):
    """A required loader option is missing or invalid."""


class AuthorizationError(DriveLoaderError):
    """The remote service rejected the service-account credentials."""


class RemoteCallError(DriveLoaderError):
    """A listing, metadata, export or row fetch failed."""

    def __init__(
        self,
        operation: str,
        item_id: str | None,
        status: int | None = None,
        detail: str | None = None,
    ) -> None:
        self.operation = operation
        self.item_id = item_id
        self.status = status
        message = f"{operation} failed for {item_id!r}"
        if status is not None:
            message += f" (HTTP {status})"
        if detail:
            message += f": {detail}"
        super().__init__(message)
