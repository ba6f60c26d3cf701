from __future__ import annotations

from typing import Any

import httplib2
import pytest
from google.auth.exceptions import TransportError
from googleapiclient.errors import HttpError

from gdriveloader.drive.client import (
    FILE_META_FIELDS,
    GoogleDriveGateway,
    rows_from_values,
    unique_headers,
)
from gdriveloader.drive.models import ItemKind, WorksheetMeta
from gdriveloader.drive.normalize import normalize_rows
from gdriveloader.errors import RemoteCallError


class FakeRequest:
    def __init__(self, result: Any):
        self._result = result

    def execute(self) -> Any:
        if isinstance(result := self._result, Exception):
            raise result
        return result


class FakeResource:
    """Chained googleapiclient-style resource: ``svc.files().list(**p).execute()``.

    ``responses`` maps a method path such as ``"files.list"`` to a list of
    results handed out in call order; every call's parameters are kept.
    """

    def __init__(self, responses: dict[str, list[Any]], path: str = "", calls=None):
        self._responses = responses
        self._path = path
        self.calls: list[tuple[str, dict[str, Any]]] = [] if calls is None else calls

    def __getattr__(self, name: str):
        path = f"{self._path}.{name}" if self._path else name

        def method(**params):
            if path in self._responses:
                self.calls.append((path, params))
                return FakeRequest(self._responses[path].pop(0))
            return FakeResource(self._responses, path, self.calls)

        return method


def _http_error(status: int, message: str) -> HttpError:
    content = ('{"error": {"code": %d, "message": "%s"}}' % (status, message)).encode()
    return HttpError(httplib2.Response({"status": status}), content)


def _gateway(drive: dict[str, list[Any]] | None = None, sheets: dict[str, list[Any]] | None = None):
    drive_service = FakeResource(drive or {})
    sheets_service = FakeResource(sheets or {})
    gateway = GoogleDriveGateway(drive_service=drive_service, sheets_service=sheets_service)
    return gateway, drive_service, sheets_service


# ---- Drive -------------------------------------------------------------------


def test_gateway__needs_credentials_or_services() -> None:
    with pytest.raises(ValueError, match="credentials are required"):
        GoogleDriveGateway()


def test_list_children__query_and_mapping() -> None:
    gateway, drive, _ = _gateway(
        {
            "files.list": [
                {
                    "files": [
                        {"id": "f1", "name": "Reports", "mimeType": "application/vnd.google-apps.folder"},
                        {"id": "p1", "name": "scan.pdf", "mimeType": "application/pdf"},
                    ],
                    "nextPageToken": "tok-2",
                }
            ]
        }
    )

    page = gateway.list_children("root", page_size=50)

    assert [(f.id, f.kind) for f in page.files] == [
        ("f1", ItemKind.FOLDER),
        ("p1", ItemKind.UNKNOWN),
    ]
    assert page.next_page_token == "tok-2"
    path, params = drive.calls[0]
    assert path == "files.list"
    assert params["q"] == "'root' in parents"
    assert params["pageSize"] == 50
    assert params["supportsAllDrives"] is True
    assert "pageToken" not in params


def test_list_children__continuation_and_extra_query() -> None:
    gateway, drive, _ = _gateway({"files.list": [{"files": []}]})

    page = gateway.list_children(
        "it's", page_size=5000, page_token="tok-2", query="trashed = false"
    )

    assert page.files == []
    assert page.next_page_token is None
    params = drive.calls[0][1]
    assert params["q"] == "'it\\'s' in parents and (trashed = false)"
    assert params["pageSize"] == 1000
    assert params["pageToken"] == "tok-2"


def test_list_children__http_error_becomes_remote_call_error() -> None:
    gateway, _, _ = _gateway({"files.list": [_http_error(404, "File not found: nope")]})

    with pytest.raises(RemoteCallError) as exc_info:
        gateway.list_children("nope", page_size=10)

    err = exc_info.value
    assert err.operation == "list"
    assert err.item_id == "nope"
    assert err.status == 404
    assert isinstance(err.__cause__, HttpError)


def test_get_file_meta__requests_meta_fields() -> None:
    meta = {"description": "d", "version": "3"}
    gateway, drive, _ = _gateway({"files.get": [meta]})

    assert gateway.get_file_meta("doc1") == meta
    assert drive.calls[0][1]["fileId"] == "doc1"
    assert drive.calls[0][1]["fields"] == FILE_META_FIELDS


def test_export_file__decodes_bytes() -> None:
    gateway, drive, _ = _gateway({"files.export": ["<p>é</p>".encode("utf-8")]})

    assert gateway.export_file("doc1", "text/html") == "<p>é</p>"
    assert drive.calls[0][1] == {"fileId": "doc1", "mimeType": "text/html"}


def test_export_file__http_error() -> None:
    gateway, _, _ = _gateway({"files.export": [_http_error(403, "Export too large")]})

    with pytest.raises(RemoteCallError, match=r"export failed for 'doc1' \(HTTP 403\)"):
        gateway.export_file("doc1", "text/html")


# ---- Sheets ------------------------------------------------------------------


def test_get_worksheets__sorted_by_index() -> None:
    info = {
        "spreadsheetUrl": "https://docs.google.com/spreadsheets/d/s1/edit",
        "sheets": [
            {"properties": {"sheetId": 7, "title": "Second", "index": 1,
                            "gridProperties": {"rowCount": 10, "columnCount": 2}}},
            {"properties": {"sheetId": 0, "title": "First", "index": 0,
                            "gridProperties": {"rowCount": 1000, "columnCount": 26}}},
        ],
    }
    gateway, _, sheets = _gateway(sheets={"spreadsheets.get": [info]})

    worksheets = gateway.open_spreadsheet("s1").get_worksheets()

    assert worksheets == [
        WorksheetMeta(
            url="https://docs.google.com/spreadsheets/d/s1/edit#gid=0",
            id=0, title="First", row_count=1000, col_count=26,
        ),
        WorksheetMeta(
            url="https://docs.google.com/spreadsheets/d/s1/edit#gid=7",
            id=7, title="Second", row_count=10, col_count=2,
        ),
    ]
    assert sheets.calls[0][1]["spreadsheetId"] == "s1"


def test_get_rows__reads_formatted_values_of_one_sheet() -> None:
    values = {"values": [["Name", "Amount"], ["Rent", "1,250.50"], ["Food"]]}
    gateway, _, sheets = _gateway(sheets={"spreadsheets.values.get": [values]})
    worksheet = WorksheetMeta(id=3, title="Bob's sheet")

    rows = gateway.open_spreadsheet("s1").get_rows(worksheet)

    assert rows == [{"Name": "Rent", "Amount": "1,250.50"}, {"Name": "Food", "Amount": ""}]
    params = sheets.calls[0][1]
    assert params["range"] == "'Bob''s sheet'"
    assert params["valueRenderOption"] == "FORMATTED_VALUE"


def test_get_rows__empty_sheet() -> None:
    gateway, _, _ = _gateway(sheets={"spreadsheets.values.get": [{}]})
    assert gateway.open_spreadsheet("s1").get_rows(WorksheetMeta(id=0, title="S")) == []


def test_get_rows__http_error() -> None:
    gateway, _, _ = _gateway(sheets={"spreadsheets.values.get": [_http_error(500, "Backend")]})

    with pytest.raises(RemoteCallError) as exc_info:
        gateway.open_spreadsheet("s1").get_rows(WorksheetMeta(id=0, title="S"))
    assert exc_info.value.operation == "get_rows"
    assert exc_info.value.status == 500


# ---- value ranges ------------------------------------------------------------


def test_unique_headers__blank_and_repeated() -> None:
    assert unique_headers(["a", "", "b", "a", None, "a "]) == ["a", None, "b", "a_2", None, "a_3"]


def test_rows_from_values__skips_empty_rows_and_blank_columns() -> None:
    values = [
        ["Name", "", "Note"],
        ["x", "ignored", "n1"],
        [],
        ["", "", ""],
        ["y"],
    ]
    assert rows_from_values(values) == [
        {"Name": "x", "Note": "n1"},
        {"Name": "y", "Note": ""},
    ]


def test_rows_from_values__header_only() -> None:
    assert rows_from_values([["a", "b"]]) == []
    assert rows_from_values([]) == []


@pytest.mark.parametrize(
    "failure",
    [
        ConnectionResetError("reset"),
        TimeoutError("timed out"),
        httplib2.ServerNotFoundError("Unable to find the server at www.googleapis.com"),
        TransportError("token refresh failed"),
    ],
)
def test_list_children__transport_error_becomes_remote_call_error(failure: Exception) -> None:
    gateway, _, _ = _gateway({"files.list": [failure]})

    with pytest.raises(RemoteCallError, match="list failed for 'root'") as exc_info:
        gateway.list_children("root", page_size=10)

    assert exc_info.value.status is None
    assert exc_info.value.__cause__ is failure


def test_get_rows__columns_named_like_bookkeeping_keys_are_kept() -> None:
    values = {"values": [["Item", "save", "del"], ["Rent", "yes", "x"]]}
    gateway, _, _ = _gateway(sheets={"spreadsheets.values.get": [values]})
    session = gateway.open_spreadsheet("s1")

    rows = session.get_rows(WorksheetMeta(id=0, title="S"))

    assert normalize_rows(rows, session.bookkeeping_keys) == [
        {"item": "Rent", "save": "yes", "del": "x"}
    ]
