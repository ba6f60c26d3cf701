"""Pure transformations from raw remote payloads to result values.

Nothing here makes a remote call or touches shared state.
"""

from __future__ import annotations

import re
import unicodedata
from typing import AbstractSet, Any, Iterable, Mapping

from bs4 import BeautifulSoup

from .models import CellValue, RowObject

# Bookkeeping keys the legacy list-feed row source attaches next to the
# column values. Sources that add none pass an empty set.
BOOKKEEPING_KEYS = frozenset({"_xml", "app:edited", "save", "del", "_links"})

_SEPARATOR_RE = re.compile(r"[\W_]+")
_WORD_RE = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|[0-9]+")
_NUMERIC_RE = re.compile(r"(?=.*[0-9])[0-9,]*\.?[0-9,]*")

# Latin letters with no canonical decomposition
_DEBURR_LETTERS = str.maketrans(
    {
        "ß": "ss", "æ": "ae", "Æ": "Ae", "œ": "oe", "Œ": "Oe",
        "ø": "o", "Ø": "O", "đ": "d", "Đ": "D", "ð": "d", "Ð": "D",
        "þ": "th", "Þ": "Th", "ł": "l", "Ł": "L", "ı": "i",
    }
)


def extract_html_body(html: str) -> str:
    """Reduce an exported HTML document to its inline style and body markup.

    The first ``<style>`` in ``<head>`` is kept, re-wrapped as
    ``<style type="text/css">``, followed by the inner markup of ``<body>``.
    The rest of the head and the html/body tags themselves are dropped.

    Examples:
        >>> extract_html_body(
        ...     "<html><head><style>p{color:red}</style></head>"
        ...     "<body><p>hi</p></body></html>"
        ... )
        '<style type="text/css">p{color:red}</style><p>hi</p>'
    """
    soup = BeautifulSoup(html, "lxml")

    style = soup.head.find("style") if soup.head else None
    css = style.decode_contents() if style else ""
    body = soup.body.decode_contents() if soup.body else ""

    wrapped_style = f'<style type="text/css">{css}</style>' if css else ""
    return wrapped_style + body


def deburr(text: str) -> str:
    """Strip accents from Latin letters: ``"Größe"`` becomes ``"Grosse"``."""
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    return stripped.translate(_DEBURR_LETTERS)


def camel_case(key: str) -> str:
    """Convert a column header to lower camel case.

    Accents are removed first. Words break on anything that is not a letter
    or digit, on lower-to-upper case changes and between letters and digits:
    ``"First Name"`` becomes ``firstName`` and ``"HTTP status"`` becomes
    ``httpStatus``.
    """
    words = []
    for chunk in _SEPARATOR_RE.split(deburr(key)):
        # Case boundaries are only split for ASCII; other scripts stay whole
        if chunk.isascii():
            words.extend(_WORD_RE.findall(chunk))
        elif chunk:
            words.append(chunk)
    if not words:
        return ""
    head, *tail = words
    return head.lower() + "".join(w[:1].upper() + w[1:].lower() for w in tail)


def is_numeric(value: str) -> bool:
    """True for ASCII digits and commas with at most one decimal point."""
    return bool(_NUMERIC_RE.fullmatch(value))


def coerce_cell(value: Any) -> CellValue:
    """Turn a formatted cell string into a typed value.

    Precedence:
        1. ``""`` → ``None``
        2. ``"TRUE"`` / ``"FALSE"`` → ``True`` / ``False``
        3. numeric-looking (``"1,234.5"``) → ``int`` or ``float``, commas
           stripped
        4. anything else is returned unchanged

    Spreadsheet exports return every cell as a string, with numbers
    formatted for the sheet's locale.
    """
    if not isinstance(value, str):
        return value
    if value == "":
        return None
    if value == "TRUE":
        return True
    if value == "FALSE":
        return False
    if is_numeric(value):
        digits = value.replace(",", "")
        if "." in digits:
            return float(digits)
        return int(digits)
    return value


def normalize_row(
    row: Mapping[str, Any], bookkeeping_keys: AbstractSet[str] = frozenset()
) -> RowObject:
    """Camel-case the keys and coerce the values of one row.

    Keys in ``bookkeeping_keys`` are dropped; every other key is a column.
    """
    return {
        camel_case(key): coerce_cell(value)
        for key, value in row.items()
        if key not in bookkeeping_keys
    }


def normalize_rows(
    rows: Iterable[Mapping[str, Any]], bookkeeping_keys: AbstractSet[str] = frozenset()
) -> list[RowObject]:
    return [normalize_row(row, bookkeeping_keys) for row in rows]
