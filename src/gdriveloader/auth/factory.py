from __future__ import annotations

import logging
from typing import Sequence

from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2 import service_account

from gdriveloader.errors import AuthorizationError

from .config import ServiceAccountToken
from .scopes import DEFAULT_SCOPES, scope_url

logger = logging.getLogger(__name__)


def get_credentials(
    token: ServiceAccountToken,
    scopes: Sequence[str] = DEFAULT_SCOPES,
) -> service_account.Credentials:
    """Construct service-account credentials for the given scopes.

    Args:
        token: The service-account key.
        scopes: Scope names or URLs the credentials are requested for.

    Returns:
        Unrefreshed :class:`google.oauth2.service_account.Credentials`.
    """
    scope_urls = [scope_url(s) for s in scopes]
    try:
        return service_account.Credentials.from_service_account_info(
            token.to_info(), scopes=scope_urls
        )
    except (GoogleAuthError, ValueError) as e:
        raise AuthorizationError(
            f"invalid service account {token.client_email}: {e!s}"
        ) from e


def authorize(
    token: ServiceAccountToken,
    scopes: Sequence[str] = DEFAULT_SCOPES,
) -> service_account.Credentials:
    """Exchange the service-account key for an access token.

    This performs one blocking HTTP request to the token endpoint.

    Raises:
        AuthorizationError: If the key is rejected or the exchange fails.
    """
    credentials = get_credentials(token, scopes)
    try:
        credentials.refresh(Request())
    except GoogleAuthError as e:
        raise AuthorizationError(
            f"authorization failed for {token.client_email}: {e!s}"
        ) from e

    logger.debug("Authorized %s for %s", token.client_email, ", ".join(scopes))
    return credentials
