from typing import TYPE_CHECKING

from googleapiclient.discovery import build

if TYPE_CHECKING:
    from googleapiclient.discovery import Resource
    from google.auth.credentials import Credentials


def build_drive_service(credentials: "Credentials") -> "Resource":
    """Build a Drive v3 service bound to authorized credentials."""
    return build("drive", "v3", credentials=credentials, cache_discovery=False)


def build_sheets_service(credentials: "Credentials") -> "Resource":
    """Build a Sheets v4 service bound to authorized credentials."""
    return build("sheets", "v4", credentials=credentials, cache_discovery=False)
