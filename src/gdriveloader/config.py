from __future__ import annotations

from pathlib import Path

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gdriveloader.auth.config import ServiceAccountToken
from gdriveloader.auth.scopes import DEFAULT_SCOPES


class LoaderConfig(BaseSettings):
    """Options for one Drive tree load.

    Values can be passed directly or read from the environment:
        - SERVICE_ACCOUNT_TOKEN_FILE
        - GOOGLE_DRIVE_FOLDER_ID (alias: ITEM_ID)
        - LOGGING
        - REQUEST_INTERVAL
        - PAGE_SIZE

    A missing token or item id is not a validation error here; the loader
    reports it as a :class:`~gdriveloader.errors.ConfigurationError`.
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
    )

    service_account_token: ServiceAccountToken | None = None
    service_account_token_file: Path | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "service_account_token_file", "SERVICE_ACCOUNT_TOKEN_FILE"
        ),
    )
    item_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("item_id", "GOOGLE_DRIVE_FOLDER_ID", "ITEM_ID"),
    )
    logging: bool = Field(
        default=False, validation_alias=AliasChoices("logging", "LOGGING")
    )
    min_interval: float = Field(
        default=0.15,
        ge=0,
        validation_alias=AliasChoices("min_interval", "REQUEST_INTERVAL"),
    )
    page_size: int = Field(
        default=1000,
        ge=1,
        le=1000,
        validation_alias=AliasChoices("page_size", "PAGE_SIZE"),
    )
    scopes: tuple[str, ...] = DEFAULT_SCOPES

    @field_validator("service_account_token_file")
    @classmethod
    def _ensure_existing_path(cls, v: Path | None) -> Path | None:
        """Ensure the token file exists if provided."""
        if v is not None and not v.exists():
            raise ValueError(f"Path does not exist: {v}")
        return v

    @model_validator(mode="after")
    def _load_token_file(self) -> "LoaderConfig":
        """Read the token file when no token object was given."""
        if self.service_account_token is None and self.service_account_token_file:
            self.service_account_token = ServiceAccountToken.from_file(
                self.service_account_token_file
            )
        return self
