"""Runtime configuration based on environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CDS_HOST = "https://cds.svc.transifex.net"


class TxSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TX_",
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
    )

    token: SecretStr | None = None
    cds_host: str = Field(default=DEFAULT_CDS_HOST, min_length=1)
    fetch_timeout: int = Field(
        default=0,
        ge=0,
        description="Polling deadline in milliseconds; 0 disables it.",
    )
    fetch_interval: int = Field(
        default=250,
        ge=0,
        description="Delay in milliseconds between polls of a 202 response.",
    )
    filter_tags: str | None = None

    @field_validator("token", "filter_tags", mode="before")
    @classmethod
    def _empty_str_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("cds_host")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def token_value(self) -> str | None:
        if self.token is None:
            return None
        return self.token.get_secret_value() or None

    def with_overrides(self, **overrides) -> "TxSettings":
        """Return a validated copy with ``overrides`` applied on top."""

        values = self.model_dump()
        values["token"] = self.token_value
        values.update(overrides)
        return TxSettings.model_validate(values)


@lru_cache
def get_settings() -> TxSettings:
    """Return cached settings instance."""

    return TxSettings()


__all__ = ["DEFAULT_CDS_HOST", "TxSettings", "get_settings"]
