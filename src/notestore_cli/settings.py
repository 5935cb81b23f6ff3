"""Application settings (env/.env)."""

from __future__ import annotations

from pathlib import Path

from pydantic import AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for the note service client."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    notestore_token: str = Field(alias="NOTESTORE_TOKEN", min_length=1)
    notestore_base_url: AnyHttpUrl = Field(
        default="http://127.0.0.1:8080",
        alias="NOTESTORE_BASE_URL",
    )

    http_timeout_seconds: float = Field(
        default=15.0,
        alias="HTTP_TIMEOUT_SECONDS",
        gt=0,
    )

    # Url to view the note via the web client.
    web_client_url: str = Field(
        default="https://www.evernote.com/client/web#/note/{note_guid}",
        alias="NOTESTORE_WEB_CLIENT_URL",
    )
    # Direct note link, needs the user's shard and id.
    note_link_url: str = Field(
        default="https://www.evernote.com/shard/{shard_id}/nl/{user_id}/{note_guid}",
        alias="NOTESTORE_NOTE_LINK_URL",
    )

    log_level: str = Field(default="WARNING", alias="LOG_LEVEL")
    log_file: Path | None = Field(default=None, alias="LOG_FILE")
