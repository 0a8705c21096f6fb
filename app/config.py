# app/config.py
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseSettings):
    """Backend settings, read from CATALOG_SERVER_* variables or .env."""

    model_config = SettingsConfigDict(env_prefix="CATALOG_SERVER_", env_file=".env", extra="ignore")

    host: str = "0.0.0.0"
    port: int = Field(default=8085, ge=1, le=65535)
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    # advisory only; clients and browsers decide what to do with it
    cache_max_age_seconds: int = Field(default=300, ge=0)
    gzip_minimum_size: int = Field(default=500, ge=0)
