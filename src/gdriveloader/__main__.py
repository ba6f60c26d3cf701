"""Print the tree of a Drive folder as JSON.

Usage:
    SERVICE_ACCOUNT_TOKEN_FILE=key.json GOOGLE_DRIVE_FOLDER_ID=<id> \
        python -m gdriveloader
"""

from __future__ import annotations

import logging
import sys

from pydantic import TypeAdapter, ValidationError

from gdriveloader.config import LoaderConfig
from gdriveloader.drive.models import FileEntry
from gdriveloader.errors import DriveLoaderError
from gdriveloader.loader import load_drive_tree_sync

_tree_adapter = TypeAdapter(list[FileEntry])


def main() -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = LoaderConfig(logging=True)
    except ValidationError as e:
        print(f"error loading configuration: {e}", file=sys.stderr)
        return 1

    if config.service_account_token_file is None:
        print("SERVICE_ACCOUNT_TOKEN_FILE variable needed", file=sys.stderr)
        return 1
    if not config.item_id:
        print("GOOGLE_DRIVE_FOLDER_ID variable needed", file=sys.stderr)
        return 1

    try:
        results = load_drive_tree_sync(config)
    except DriveLoaderError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(_tree_adapter.dump_json(results, by_alias=True, indent=4).decode("utf-8"))
    return 0


if __name__ == "__main__":
    sys.exit(main())
