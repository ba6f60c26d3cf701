from __future__ import annotations

import logging

from .interfaces import DriveGateway, SpreadsheetSession
from .limiter import RateLimiter, gather_ordered
from .models import (
    DocumentHtml,
    DocumentResult,
    ItemMeta,
    SpreadsheetResult,
    Worksheet,
    WorksheetMeta,
)
from .normalize import extract_html_body, normalize_rows

logger = logging.getLogger(__name__)

HTML_MIME_TYPE = "text/html"


class ItemProcessors:
    """Content pipelines for the leaf item types.

    Every remote call is submitted to the shared limiter; the pipelines
    themselves only decide what runs concurrently and how results are
    assembled.
    """

    def __init__(self, gateway: DriveGateway, limiter: RateLimiter):
        self._gateway = gateway
        self._limiter = limiter

    async def fetch_meta(self, item_id: str) -> ItemMeta:
        raw = await self._limiter.submit(self._gateway.get_file_meta, item_id)
        return ItemMeta.model_validate(raw)

    async def fetch_html(self, item_id: str) -> DocumentHtml:
        raw = await self._limiter.submit(
            self._gateway.export_file, item_id, HTML_MIME_TYPE
        )
        return DocumentHtml(raw=raw, parsed=extract_html_body(raw))

    async def get_document(self, item_id: str) -> DocumentResult:
        """Fetch a document's metadata and HTML export concurrently."""
        meta, html = await gather_ordered(
            [self.fetch_meta(item_id), self.fetch_html(item_id)]
        )
        return DocumentResult(meta=meta, html=html)

    async def _load_worksheet(
        self, session: SpreadsheetSession, worksheet: WorksheetMeta
    ) -> Worksheet:
        rows = await self._limiter.submit(session.get_rows, worksheet)
        data = normalize_rows(rows, session.bookkeeping_keys)
        return Worksheet(meta=worksheet, data=data)

    async def fetch_worksheets(self, item_id: str) -> list[Worksheet]:
        """Load every worksheet of a spreadsheet with normalized rows.

        Row fetches for the worksheets run concurrently; the result keeps
        the spreadsheet's worksheet order.
        """
        session = self._gateway.open_spreadsheet(item_id)
        worksheets = await self._limiter.submit(session.get_worksheets)
        logger.debug("Spreadsheet %s has %d worksheets", item_id, len(worksheets))
        return await gather_ordered(
            self._load_worksheet(session, worksheet) for worksheet in worksheets
        )

    async def get_spreadsheet(self, item_id: str) -> SpreadsheetResult:
        """Fetch a spreadsheet's metadata concurrently with its worksheets."""
        meta, worksheets = await gather_ordered(
            [self.fetch_meta(item_id), self.fetch_worksheets(item_id)]
        )
        return SpreadsheetResult(meta=meta, worksheets=worksheets)
