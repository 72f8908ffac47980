"""Client configuration powered by Pydantic settings."""

from __future__ import annotations

from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    search_nodes_raw: str = Field(
        "",
        alias="SEARCH_NODES",
        description="Comma-separated base URIs of the nodes running the search service.",
    )
    search_timeout: float = Field(
        75.0,
        alias="SEARCH_TIMEOUT",
        ge=0.1,
        le=600.0,
        description="Default timeout in seconds applied to search HTTP calls.",
    )
    search_username: str | None = Field(None, alias="SEARCH_USERNAME")
    search_password: str | None = Field(None, alias="SEARCH_PASSWORD")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        validate_by_name=True,
    )

    @field_validator("search_username", "search_password", mode="before")
    @classmethod
    def blank_credentials_are_unset(cls, value: str | None) -> str | None:
        """Treat empty credential variables as absent.

        Container runtimes forward ``-e NAME=$NAME`` as an empty string when the
        variable is undefined on the host; without this the client would attempt
        basic auth with an empty user name.
        """
        if value is None or value.strip() == "":
            return None
        return value

    @property
    def search_nodes(self) -> List[str]:
        """Return the configured node URIs without blanks or trailing slashes."""
        return [node.strip().rstrip("/") for node in self.search_nodes_raw.split(",") if node.strip()]

    @property
    def credentials(self) -> tuple[str, str] | None:
        """Return the basic auth pair when a user name is configured."""
        if self.search_username is None:
            return None
        return (self.search_username, self.search_password or "")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached settings instance."""
    return Settings()  # type: ignore[call-arg]


__all__ = ["Settings", "get_settings"]
