from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"
DOCUMENT_MIME_TYPE = "application/vnd.google-apps.document"
SPREADSHEET_MIME_TYPE = "application/vnd.google-apps.spreadsheet"

CellValue = Union[str, int, float, bool, None]
RowObject = Dict[str, CellValue]


class ItemKind(str, Enum):
    """The item types the walker knows how to process."""

    FOLDER = "folder"
    DOCUMENT = "document"
    SPREADSHEET = "spreadsheet"
    UNKNOWN = "unknown"

    @classmethod
    def from_mime_type(cls, mime_type: str | None) -> "ItemKind":
        return _KINDS_BY_MIME_TYPE.get(mime_type, cls.UNKNOWN)


_KINDS_BY_MIME_TYPE = {
    FOLDER_MIME_TYPE: ItemKind.FOLDER,
    DOCUMENT_MIME_TYPE: ItemKind.DOCUMENT,
    SPREADSHEET_MIME_TYPE: ItemKind.SPREADSHEET,
}


class _RemoteModel(BaseModel):
    """Snake-case attributes, camel-case on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ItemMeta(_RemoteModel):
    """Metadata shared by folders, documents and spreadsheets."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )

    description: Optional[str] = None
    created_time: Optional[datetime] = None
    modified_time: Optional[datetime] = None
    last_modifying_user: Optional[Dict[str, Any]] = None
    version: Optional[str] = None


class DocumentHtml(_RemoteModel):
    raw: str
    parsed: str


class DocumentResult(_RemoteModel):
    meta: ItemMeta
    html: DocumentHtml


class WorksheetMeta(_RemoteModel):
    """One tab of a spreadsheet; position in the list is the authored order."""

    url: Optional[str] = None
    id: int
    title: str
    row_count: Optional[int] = None
    col_count: Optional[int] = None


class Worksheet(_RemoteModel):
    meta: WorksheetMeta
    data: List[RowObject] = Field(default_factory=list)


class SpreadsheetResult(_RemoteModel):
    meta: ItemMeta
    worksheets: List[Worksheet] = Field(default_factory=list)


class FileEntry(_RemoteModel):
    """A child found while listing a folder.

    ``contents`` stays ``None`` until the walker has processed the item.
    """

    id: str
    name: Optional[str] = None
    mime_type: Optional[str] = None
    contents: Union[List["FileEntry"], DocumentResult, SpreadsheetResult, None] = None

    @property
    def kind(self) -> ItemKind:
        return ItemKind.from_mime_type(self.mime_type)


class ListingPage(_RemoteModel):
    files: List[FileEntry] = Field(default_factory=list)
    next_page_token: Optional[str] = None


FileEntry.model_rebuild()
