from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Sequence

import httplib2
from google.auth.exceptions import GoogleAuthError
from googleapiclient.errors import HttpError

from gdriveloader.errors import RemoteCallError

from .context import build_drive_service, build_sheets_service
from .models import FileEntry, ListingPage, WorksheetMeta

if TYPE_CHECKING:
    from google.auth.credentials import Credentials
    from googleapiclient.discovery import Resource

logger = logging.getLogger(__name__)

LISTING_FIELDS = "nextPageToken, files(id, name, mimeType)"
FILE_META_FIELDS = "description,createdTime,modifiedTime,lastModifyingUser,version"
WORKSHEET_FIELDS = (
    "spreadsheetUrl,"
    "sheets.properties(sheetId,title,index,gridProperties(rowCount,columnCount))"
)


def _execute(request, operation: str, item_id: str | None) -> Any:
    """Run one Google API request, translating HTTP and transport failures."""
    try:
        return request.execute()
    except HttpError as e:
        raise RemoteCallError(
            operation, item_id, status=e.resp.status, detail=getattr(e, "reason", None)
        ) from e
    except (OSError, httplib2.HttpLib2Error, GoogleAuthError) as e:
        # Transport failures and token refreshes during the request
        raise RemoteCallError(operation, item_id, detail=str(e) or type(e).__name__) from e


def _quote_query_value(value: str) -> str:
    return value.replace("\\", "\\\\").replace("'", "\\'")


def _quote_sheet_title(title: str) -> str:
    # A1 notation: single quotes inside a sheet name are doubled
    return "'" + title.replace("'", "''") + "'"


def unique_headers(header: Sequence[Any]) -> list[str | None]:
    """Return one key per header cell.

    Blank headers give ``None`` (the column is skipped); repeated headers
    are suffixed ``_2``, ``_3``... in the order they appear.
    """
    seen: dict[str, int] = {}
    keys: list[str | None] = []
    for cell in header:
        name = str(cell).strip() if cell is not None else ""
        if not name:
            keys.append(None)
            continue
        seen[name] = seen.get(name, 0) + 1
        keys.append(name if seen[name] == 1 else f"{name}_{seen[name]}")
    return keys


def rows_from_values(values: Sequence[Sequence[Any]]) -> list[dict[str, Any]]:
    """Turn a Sheets value range into rows keyed by the first row.

    The API trims trailing empty cells, so short rows are padded with
    ``""``. Rows without any non-empty cell are skipped.
    """
    if not values:
        return []

    keys = unique_headers(values[0])
    rows: list[dict[str, Any]] = []
    for raw in values[1:]:
        if not any(cell != "" for cell in raw):
            continue
        row = {}
        for index, key in enumerate(keys):
            if key is None:
                continue
            row[key] = raw[index] if index < len(raw) else ""
        rows.append(row)
    return rows


class GoogleSpreadsheetSession:
    """Sheets v4 implementation of SpreadsheetSession."""

    # The values API returns only cells, so every header is a real column
    bookkeeping_keys: frozenset[str] = frozenset()

    def __init__(self, sheets_service: "Resource", spreadsheet_id: str):
        self._sheets = sheets_service
        self.spreadsheet_id = spreadsheet_id

    @staticmethod
    def _map_worksheet(sheet: dict, spreadsheet_url: str | None) -> WorksheetMeta:
        properties = sheet.get("properties", {})
        grid = properties.get("gridProperties", {})
        sheet_id = properties.get("sheetId", 0)
        return WorksheetMeta(
            url=f"{spreadsheet_url}#gid={sheet_id}" if spreadsheet_url else None,
            id=sheet_id,
            title=properties.get("title", ""),
            row_count=grid.get("rowCount"),
            col_count=grid.get("columnCount"),
        )

    def get_worksheets(self) -> list[WorksheetMeta]:
        request = self._sheets.spreadsheets().get(
            spreadsheetId=self.spreadsheet_id, fields=WORKSHEET_FIELDS
        )
        info = _execute(request, "get_worksheets", self.spreadsheet_id)

        sheets = sorted(
            info.get("sheets", []),
            key=lambda s: s.get("properties", {}).get("index", 0),
        )
        spreadsheet_url = info.get("spreadsheetUrl")
        return [self._map_worksheet(sheet, spreadsheet_url) for sheet in sheets]

    def get_rows(self, worksheet: WorksheetMeta) -> list[dict[str, Any]]:
        request = (
            self._sheets.spreadsheets()
            .values()
            .get(
                spreadsheetId=self.spreadsheet_id,
                range=_quote_sheet_title(worksheet.title),
                majorDimension="ROWS",
                valueRenderOption="FORMATTED_VALUE",
            )
        )
        response = _execute(request, "get_rows", self.spreadsheet_id)
        return rows_from_values(response.get("values", []))


class GoogleDriveGateway:
    """Drive v3 / Sheets v4 implementation of DriveGateway."""

    def __init__(
        self,
        credentials: "Credentials | None" = None,
        *,
        drive_service: "Resource | None" = None,
        sheets_service: "Resource | None" = None,
    ):
        """Initialize the gateway.

        Args:
            credentials: Authorized credentials. Only needed for the
                services that are not passed in.
            drive_service: Prebuilt Drive v3 service.
            sheets_service: Prebuilt Sheets v4 service.
        """
        if credentials is None and (drive_service is None or sheets_service is None):
            raise ValueError("credentials are required to build missing services")

        self._drive = drive_service or build_drive_service(credentials)
        self._sheets = sheets_service or build_sheets_service(credentials)

    @staticmethod
    def _map_file_entry(drive_file: dict) -> FileEntry:
        return FileEntry(
            id=drive_file["id"],
            name=drive_file.get("name"),
            mime_type=drive_file.get("mimeType"),
        )

    def list_children(
        self,
        folder_id: str,
        *,
        page_size: int,
        page_token: str | None = None,
        query: str | None = None,
    ) -> ListingPage:
        """List one page of a folder's children.

        Args:
            folder_id: The parent folder.
            page_size: Maximum entries on the page (Drive caps it at 1000).
            page_token: Continuation token from the previous page.
            query: Extra Drive query clause, and-ed with the parent filter.

        Returns:
            The page's entries and the token of the next page, if any.
        """
        q = f"'{_quote_query_value(folder_id)}' in parents"
        if query:
            q += f" and ({query})"

        params = {
            "q": q,
            "pageSize": min(page_size, 1000),
            "fields": LISTING_FIELDS,
            "supportsAllDrives": True,
            "includeItemsFromAllDrives": True,
        }
        if page_token:
            params["pageToken"] = page_token

        response = _execute(self._drive.files().list(**params), "list", folder_id)
        page = ListingPage(
            files=[self._map_file_entry(f) for f in response.get("files", [])],
            next_page_token=response.get("nextPageToken"),
        )
        logger.debug("Fetched %d entries of folder %s", len(page.files), folder_id)
        return page

    def get_file_meta(self, item_id: str) -> dict[str, Any]:
        request = self._drive.files().get(
            fileId=item_id, fields=FILE_META_FIELDS, supportsAllDrives=True
        )
        return _execute(request, "get_file_meta", item_id)

    def export_file(self, item_id: str, mime_type: str) -> str:
        request = self._drive.files().export(fileId=item_id, mimeType=mime_type)
        content = _execute(request, "export", item_id)
        if isinstance(content, bytes):
            content = content.decode("utf-8")
        return content

    def open_spreadsheet(self, item_id: str) -> GoogleSpreadsheetSession:
        return GoogleSpreadsheetSession(self._sheets, item_id)
