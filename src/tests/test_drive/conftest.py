from __future__ import annotations

from typing import Any

import pytest

from gdriveloader.drive.limiter import RateLimiter
from gdriveloader.drive.models import WorksheetMeta


@pytest.fixture()
def limiter() -> RateLimiter:
    """A limiter that serializes calls without waiting between them."""
    return RateLimiter(min_interval=0)


@pytest.fixture()
def budget_sheet() -> list[tuple[WorksheetMeta, list[dict[str, Any]]]]:
    return [
        (
            WorksheetMeta(url="https://sheets/x#gid=0", id=0, title="Budget", row_count=3, col_count=3),
            [
                {"Line Item": "Rent", "Amount": "1,250.50", "Paid": "TRUE", "_links": "x"},
                {"Line Item": "Food", "Amount": "300", "Paid": "FALSE", "_links": "y"},
                {"Line Item": "Misc", "Amount": "", "Paid": "", "_links": "z"},
            ],
        ),
        (
            WorksheetMeta(url="https://sheets/x#gid=9", id=9, title="Notes", row_count=1, col_count=1),
            [{"Note": "n/a"}],
        ),
    ]
