from typing import Final

SCOPE_PREFIX: Final[str] = "https://www.googleapis.com/auth/"

DRIVE_READONLY_SCOPE: Final[str] = SCOPE_PREFIX + "drive.readonly"
SPREADSHEETS_READONLY_SCOPE: Final[str] = SCOPE_PREFIX + "spreadsheets.readonly"

DEFAULT_SCOPES: Final[tuple[str, ...]] = (
    DRIVE_READONLY_SCOPE,
    SPREADSHEETS_READONLY_SCOPE,
)


def scope_url(name: str) -> str:
    """Return the full OAuth scope URL for a Google API scope.

    Args:
        name: Short scope name (e.g., "drive.readonly") or an absolute
            scope URL, which is returned unchanged.

    Returns:
        The scope as an absolute URL.

    Raises:
        ValueError: If ``name`` is empty or contains whitespace.
    """
    if name.startswith(("https://", "http://")):
        return name
    short = name.strip("/")
    if not short or any(c.isspace() for c in short):
        raise ValueError("scope name must be a non-empty token")
    return f"{SCOPE_PREFIX}{short}"
