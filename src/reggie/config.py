from __future__ import annotations

from typing import Annotated, List, Literal, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from reggie.utils.logger_util import get_logger, resolve_level, set_level

logger = get_logger(__name__)


class Settings(BaseSettings):
    """Runtime configuration, read from the environment and ``.env``."""

    project_id: str = Field("local-project", validation_alias=AliasChoices("GCP_PROJECT_ID", "project_id"))
    storage_bucket: str = Field("reggie", validation_alias=AliasChoices("REGGIE_STORAGE_BUCKET", "storage_bucket"))
    publisher_backend: Literal["pubsub", "memory"] = Field(
        "pubsub", validation_alias=AliasChoices("REGGIE_PUBLISHER", "publisher_backend")
    )
    storage_backend: Literal["gcs", "memory"] = Field(
        "gcs", validation_alias=AliasChoices("REGGIE_STORAGE", "storage_backend")
    )
    # "Name=module:Class" entries registered on top of the built-in types
    message_types: Annotated[List[str], NoDecode] = Field(
        default_factory=list, validation_alias=AliasChoices("REGGIE_MESSAGE_TYPES", "message_types")
    )
    static_dir: Optional[str] = Field(None, validation_alias=AliasChoices("REGGIE_STATIC_DIR", "static_dir"))
    log_level: str = Field("INFO", validation_alias=AliasChoices("REGGIE_LOG_LEVEL", "log_level"))
    publish_timeout_sec: float = Field(
        30.0, gt=0, validation_alias=AliasChoices("REGGIE_PUBLISH_TIMEOUT_SEC", "publish_timeout_sec")
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    @field_validator("message_types", mode="before")
    def _split_message_types(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return [part.strip() for part in v.split(",") if part.strip()]
        return v

    @field_validator("publisher_backend", "storage_backend", mode="before")
    def _lower(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("log_level", mode="before")
    def _known_level(cls, v):
        v = str(v).strip().upper()
        resolve_level(v)
        return v


def load_settings(env_file: str | None = ".env") -> Settings:
    """Read Settings and apply the configured log level to reggie's loggers."""
    settings = Settings(_env_file=env_file)
    set_level(settings.log_level)
    logger.info(
        "settings loaded: project=%s bucket=%s publisher=%s storage=%s extra_types=%s log_level=%s",
        settings.project_id,
        settings.storage_bucket,
        settings.publisher_backend,
        settings.storage_backend,
        len(settings.message_types),
        settings.log_level,
    )
    return settings
