"""Drive traversal: gateway, rate limiter, content pipelines and walker."""

from .client import GoogleDriveGateway, GoogleSpreadsheetSession
from .interfaces import DriveGateway, SpreadsheetSession
from .limiter import RateLimiter, gather_ordered
from .models import (
    DocumentHtml,
    DocumentResult,
    FileEntry,
    ItemKind,
    ItemMeta,
    ListingPage,
    SpreadsheetResult,
    Worksheet,
    WorksheetMeta,
)
from .processors import ItemProcessors
from .walker import TreeWalker

__all__ = [
    "GoogleDriveGateway",
    "GoogleSpreadsheetSession",
    "DriveGateway",
    "SpreadsheetSession",
    "RateLimiter",
    "gather_ordered",
    "DocumentHtml",
    "DocumentResult",
    "FileEntry",
    "ItemKind",
    "ItemMeta",
    "ListingPage",
    "SpreadsheetResult",
    "Worksheet",
    "WorksheetMeta",
    "ItemProcessors",
    "TreeWalker",
]
