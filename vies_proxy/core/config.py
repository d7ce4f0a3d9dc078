"""Application configuration using pydantic-settings."""
from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from vies_proxy.connectors.vies.client import (
    DEFAULT_USER_AGENT,
    VIES_ENDPOINT_URL,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    env: str = "local"
    app_name: str = "vies-proxy"
    log_level: str = "INFO"
    port: int = Field(3000, validation_alias=AliasChoices("PORT", "port"))
    # Comma-separated; empty means no origin is echoed back
    allowed_origins: str = ""

    # VIES (EU VAT Information Exchange System)
    vies_endpoint_url: str = Field(
        VIES_ENDPOINT_URL,
        validation_alias=AliasChoices("VIES_ENDPOINT_URL", "vies_endpoint_url"),
    )
    fetch_timeout_ms: int = Field(
        12000,
        gt=0,
        validation_alias=AliasChoices("FETCH_TIMEOUT_MS", "fetch_timeout_ms"),
    )
    vies_requester_vat: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("VIES_REQUESTER_VAT", "vies_requester_vat"),
    )
    vies_user_agent: str = Field(
        DEFAULT_USER_AGENT,
        validation_alias=AliasChoices("VIES_USER_AGENT", "vies_user_agent"),
    )

    @field_validator("vies_requester_vat")
    @classmethod
    def blank_requester_is_none(cls, v: Optional[str]) -> Optional[str]:
        """An empty VIES_REQUESTER_VAT= line in .env disables the approx step."""
        if v is None or not v.strip():
            return None
        return v.strip()

    @property
    def allowed_origins_list(self) -> list[str]:
        """Get allowed origins as a list."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    @property
    def fetch_timeout_seconds(self) -> float:
        return self.fetch_timeout_ms / 1000


settings = Settings()
