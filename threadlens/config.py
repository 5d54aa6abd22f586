"""Application configuration."""

from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseModel):
    """Database configuration."""

    url: str = "sqlite+aiosqlite:///threadlens.db"
    pool_size: int = 5
    max_overflow: int = 10


class PaginationSettings(BaseModel):
    """Comment paging configuration."""

    # Top-level comments per page; replies ride along with their parent
    page_size: int = Field(default=10, gt=0)

    # Quiet period before a query change is executed
    debounce_ms: int = Field(default=300, ge=0)


class SearchSettings(BaseModel):
    """Keyword search configuration."""

    # Minimum rapidfuzz ratio (0-100) for a token window to count as a match
    fuzzy_threshold: float = Field(default=80.0, ge=0, le=100)

    # Shorter queries only match as exact substrings
    fuzzy_min_query_length: int = Field(default=4, ge=1)


class ObservabilitySettings(BaseModel):
    """Observability configuration for Logfire."""

    # Logfire API token (optional - if not set, logs only go to console)
    # Can be set via OBSERVABILITY__LOGFIRE_TOKEN env var
    logfire_token: str | None = None

    # Whether to send telemetry to Logfire cloud
    # If None, will auto-determine: sends if token is present, otherwise console-only
    send_to_logfire: bool | None = None


class Settings(BaseSettings):
    """Application settings.

    Override any value through the environment, using ``__`` between
    section and field:

        ENVIRONMENT=production
        DATABASE__URL=sqlite+aiosqlite:////var/lib/threadlens/comments.db
        PAGINATION__PAGE_SIZE=20
        SEARCH__FUZZY_THRESHOLD=85
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",  # Allows DATABASE__URL syntax
    )

    environment: Literal["test", "development", "staging", "production"] = "development"
    debug: bool = False

    # Nested settings
    database: DatabaseSettings = DatabaseSettings()
    pagination: PaginationSettings = PaginationSettings()
    search: SearchSettings = SearchSettings()
    observability: ObservabilitySettings = ObservabilitySettings()

    @property
    def debounce_seconds(self) -> float:
        return self.pagination.debounce_ms / 1000
