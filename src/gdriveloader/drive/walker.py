from __future__ import annotations

import logging

from .interfaces import DriveGateway
from .limiter import RateLimiter, gather_ordered
from .models import FileEntry, ItemKind
from .processors import ItemProcessors

logger = logging.getLogger(__name__)

PAGE_SIZE = 1000


class TreeWalker:
    """Turns a folder into the nested list of its processed children.

    Children of one folder are processed concurrently; pacing comes only
    from the shared limiter, so the fan-out width does not change the
    request rate.
    """

    def __init__(
        self,
        gateway: DriveGateway,
        limiter: RateLimiter,
        *,
        page_size: int = PAGE_SIZE,
        query: str | None = None,
        log_progress: bool = False,
    ):
        """Initialize the walker.

        Args:
            gateway: Remote calls for listing and content.
            limiter: The limiter every remote call is submitted to.
            page_size: Entries requested per listing page.
            query: Extra Drive query clause applied to every listing.
            log_progress: Emit progress lines at INFO instead of DEBUG.
        """
        self._gateway = gateway
        self._limiter = limiter
        self._processors = ItemProcessors(gateway, limiter)
        self.page_size = page_size
        self.query = query
        self._progress_level = logging.INFO if log_progress else logging.DEBUG

    def _progress(self, msg: str, *args) -> None:
        logger.log(self._progress_level, msg, *args)

    async def list_folder(self, folder_id: str) -> list[FileEntry]:
        """List all children of a folder, following continuation tokens."""
        entries: list[FileEntry] = []
        page_token: str | None = None
        page_number = 0

        while True:
            page = await self._limiter.submit(
                self._gateway.list_children,
                folder_id,
                page_size=self.page_size,
                page_token=page_token,
                query=self.query,
            )
            page_number += 1
            entries.extend(page.files)

            page_token = page.next_page_token
            if not page_token:
                break
            logger.debug("Folder %s continues on page %d", folder_id, page_number + 1)

        return entries

    async def _process(self, entry: FileEntry) -> FileEntry | None:
        kind = entry.kind
        if kind is ItemKind.UNKNOWN:
            self._progress("unknown mime type %s - %s", entry.mime_type, entry.name)
            return None

        self._progress("found %s %s", entry.mime_type, entry.name)

        match kind:
            case ItemKind.FOLDER:
                entry.contents = await self.walk(entry.id)
            case ItemKind.DOCUMENT:
                entry.contents = await self._processors.get_document(entry.id)
            case ItemKind.SPREADSHEET:
                entry.contents = await self._processors.get_spreadsheet(entry.id)
        return entry

    async def walk(self, folder_id: str) -> list[FileEntry]:
        """Process every child of ``folder_id``, recursing into folders.

        Returns:
            The processed entries in listing order; entries of unknown
            types are left out.

        Raises:
            Exception: The first error raised anywhere below this folder.
                No partial result is returned.
        """
        self._progress("loading folder %s", folder_id)
        entries = await self.list_folder(folder_id)
        results = await gather_ordered(self._process(entry) for entry in entries)
        return [entry for entry in results if entry is not None]
