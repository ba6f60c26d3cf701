from __future__ import annotations

import os
from typing import Any, Iterator

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from gdriveloader.auth.config import ServiceAccountToken


@pytest.fixture(autouse=True)
def clear_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Remove environment variables to prevent cross-test leakage.

    Yields:
        Iterator[None]: Context manager semantics for pytest.
    """
    to_clear = [k for k in os.environ.keys()]
    for k in to_clear:
        monkeypatch.delenv(k, raising=False)
    yield


@pytest.fixture(scope="session")
def private_key_pem() -> str:
    """A freshly generated RSA key in PKCS8 PEM form."""
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("utf-8")


@pytest.fixture()
def service_account_info(private_key_pem: str) -> dict[str, Any]:
    """A service-account key as found in a downloaded JSON key file."""
    return {
        "type": "service_account",
        "project_id": "snapshot-tests",
        "private_key_id": "abc123",
        "private_key": private_key_pem,
        "client_email": "loader@snapshot-tests.iam.gserviceaccount.com",
        "client_id": "1234567890",
        "token_uri": "https://oauth2.googleapis.com/token",
    }


@pytest.fixture()
def service_account_token(service_account_info: dict[str, Any]) -> ServiceAccountToken:
    return ServiceAccountToken.model_validate(service_account_info)
