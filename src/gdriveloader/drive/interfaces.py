from __future__ import annotations

from typing import AbstractSet, Any, Protocol

from .models import ListingPage, WorksheetMeta


class SpreadsheetSession(Protocol):
    """Read access to one spreadsheet, opened by :meth:`DriveGateway.open_spreadsheet`.

    Each method is one remote request and must be routed through the rate
    limiter by the caller.
    """

    #: Keys the row source adds next to the columns; dropped on normalization
    bookkeeping_keys: AbstractSet[str]

    def get_worksheets(self) -> list[WorksheetMeta]:
        """Return the worksheets in authored order."""
        raise NotImplementedError

    def get_rows(self, worksheet: WorksheetMeta) -> list[dict[str, Any]]:
        """Return the rows of a worksheet keyed by raw column header."""
        raise NotImplementedError


class DriveGateway(Protocol):
    """Protocol for the remote calls the walker and processors make.

    Every method performs at most one blocking request and does no pacing
    of its own; callers submit them to a
    :class:`~gdriveloader.drive.limiter.RateLimiter`.
    """

    def list_children(
        self,
        folder_id: str,
        *,
        page_size: int,
        page_token: str | None = None,
        query: str | None = None,
    ) -> ListingPage:
        """List one page of a folder's children."""
        raise NotImplementedError

    def get_file_meta(self, item_id: str) -> dict[str, Any]:
        """Fetch description, timestamps, last modifying user and version."""
        raise NotImplementedError

    def export_file(self, item_id: str, mime_type: str) -> str:
        """Export a Google Workspace file as text in ``mime_type``."""
        raise NotImplementedError

    def open_spreadsheet(self, item_id: str) -> SpreadsheetSession:
        """Open a spreadsheet session scoped to ``item_id``; makes no request."""
        raise NotImplementedError
