from __future__ import annotations

import json
from pathlib import Path

from cryptography.hazmat.primitives import serialization
from pydantic import BaseModel, ConfigDict, SecretStr, field_validator


class ServiceAccountToken(BaseModel):
    """A Google service-account key, as downloaded from the Cloud console.

    Only ``client_email`` and ``private_key`` are needed to authorize; the
    remaining fields are carried through to ``google-auth`` untouched.
    """

    model_config = ConfigDict(extra="allow")

    type: str = "service_account"
    project_id: str | None = None
    private_key_id: str | None = None
    private_key: SecretStr
    client_email: str
    client_id: str | None = None
    token_uri: str = "https://oauth2.googleapis.com/token"

    @field_validator("client_email")
    @classmethod
    def _ensure_principal(cls, v: str) -> str:
        """The principal is what the service checks the key against."""
        if not v or "@" not in v:
            raise ValueError(f"client_email is not a service-account principal: {v!r}")
        return v

    @field_validator("private_key")
    @classmethod
    def _ensure_pem_private_key(cls, v: SecretStr) -> SecretStr:
        """Reject keys that cannot be loaded before any request is made."""
        try:
            serialization.load_pem_private_key(
                v.get_secret_value().encode("utf-8"), password=None
            )
        except (ValueError, TypeError) as e:
            raise ValueError("private_key is not a valid PEM private key") from e
        return v

    @classmethod
    def from_file(cls, path: str | Path) -> "ServiceAccountToken":
        """Load a service-account JSON key file."""
        with open(path, encoding="utf-8") as key_file:
            return cls.model_validate(json.load(key_file))

    def to_info(self) -> dict:
        """Return the key as the mapping ``google-auth`` expects."""
        info = self.model_dump(exclude_none=True)
        info["private_key"] = self.private_key.get_secret_value()
        return info
