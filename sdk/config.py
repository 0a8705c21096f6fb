# sdk/config.py
"""
Client configuration.

`ClientConfig` is what `CatalogClient` is built with; the client never looks
at the environment itself. `ClientSettings` reads CATALOG_* variables (or a
.env file) for the CLI and demo scripts and turns them into a ClientConfig.
"""

from dataclasses import dataclass

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "http://127.0.0.1:8085"
DEFAULT_RESOURCE_PATH = "/api/products"
DEFAULT_CACHE_DURATION = 300.0
DEFAULT_FETCH_TIMEOUT = 10.0


@dataclass(frozen=True)
class ClientConfig:
    base_url: str = DEFAULT_BASE_URL
    resource_path: str = DEFAULT_RESOURCE_PATH
    cache_duration: float = DEFAULT_CACHE_DURATION
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT

    def __post_init__(self):
        if self.cache_duration <= 0:
            raise ValueError("cache_duration must be > 0")
        if self.fetch_timeout <= 0:
            raise ValueError("fetch_timeout must be > 0")
        if self.fetch_timeout >= self.cache_duration:
            raise ValueError("fetch_timeout must be shorter than cache_duration")
        if not self.resource_path.startswith("/"):
            raise ValueError("resource_path must start with '/'")


class ClientSettings(BaseSettings):
    """CATALOG_* environment variables for the CLI and demos."""

    model_config = SettingsConfigDict(env_prefix="CATALOG_", env_file=".env", extra="ignore")

    base_url: str = DEFAULT_BASE_URL
    resource_path: str = DEFAULT_RESOURCE_PATH
    cache_duration_seconds: float = Field(default=DEFAULT_CACHE_DURATION, gt=0)
    fetch_timeout_seconds: float = Field(default=DEFAULT_FETCH_TIMEOUT, gt=0)
    log_level: str = "WARNING"

    def to_config(self) -> ClientConfig:
        return ClientConfig(
            base_url=self.base_url.rstrip("/"),
            resource_path=self.resource_path,
            cache_duration=self.cache_duration_seconds,
            fetch_timeout=self.fetch_timeout_seconds,
        )
