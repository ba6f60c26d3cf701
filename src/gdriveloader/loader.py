from __future__ import annotations

import asyncio
import logging

from gdriveloader.auth.factory import authorize
from gdriveloader.config import LoaderConfig
from gdriveloader.drive.client import GoogleDriveGateway
from gdriveloader.drive.interfaces import DriveGateway
from gdriveloader.drive.limiter import RateLimiter
from gdriveloader.drive.models import FileEntry
from gdriveloader.drive.walker import TreeWalker
from gdriveloader.errors import ConfigurationError

logger = logging.getLogger(__name__)


def validate_config(config: LoaderConfig) -> None:
    """Fail before any remote call if a required option is missing."""
    if config.service_account_token is None:
        raise ConfigurationError("no serviceAccountToken option given")
    if not config.item_id:
        raise ConfigurationError("no itemId option given")


async def load_drive_tree(
    config: LoaderConfig,
    *,
    gateway: DriveGateway | None = None,
    limiter: RateLimiter | None = None,
) -> list[FileEntry]:
    """Load the tree below ``config.item_id``.

    The root item is walked as a folder. All remote calls of the run share
    one limiter: ``limiter`` if given, else a new one built from the config.

    Args:
        config: Loader options.
        gateway: Remote calls to use instead of the Google API gateway.
            Credentials are still authorized when it is given.
        limiter: Rate limiter to share with other runs.

    Returns:
        The processed children of the root folder.

    Raises:
        ConfigurationError: If the token or the item id is missing.
        AuthorizationError: If the service rejects the credentials.
        RemoteCallError: If any remote call anywhere in the tree fails.
    """
    validate_config(config)

    credentials = await asyncio.to_thread(
        authorize, config.service_account_token, config.scopes
    )
    if gateway is None:
        gateway = GoogleDriveGateway(credentials)
    if limiter is None:
        limiter = RateLimiter(min_interval=config.min_interval)

    walker = TreeWalker(
        gateway,
        limiter,
        page_size=config.page_size,
        log_progress=config.logging,
    )
    results = await walker.walk(config.item_id)
    logger.info(
        "Loaded %d entries below %s using %d requests",
        len(results),
        config.item_id,
        limiter.submitted,
    )
    return results


def load_drive_tree_sync(config: LoaderConfig) -> list[FileEntry]:
    """Blocking wrapper around :func:`load_drive_tree` for scripts."""
    return asyncio.run(load_drive_tree(config))
