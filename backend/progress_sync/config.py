"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets (database/redis URLs) come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache): single instance per process
    - sync_backend_configured is evaluated once at boot and injected into SyncService

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - Defaults provided for all non-secret settings: sqlite works out-of-the-box for local dev
      (tables auto-created for sqlite URLs unless DATABASE_AUTO_CREATE=false)
"""

from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from progress_sync.core.domain_types import (
    MAX_SNAPSHOT_BYTES, PROGRESS_SYNC_TTL_SECONDS,
)


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Sync backend
    sync_backend: Literal["database", "redis", "none"] = "database"

    # Database
    database_url: str = "sqlite+aiosqlite:///./progress_sync.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10
    # ADR: production schema is owned by alembic; None = create_all only for sqlite URLs
    database_auto_create: bool | None = None

    # Redis
    redis_url: str | None = None

    # Progress sync
    progress_sync_ttl_seconds: int = PROGRESS_SYNC_TTL_SECONDS
    progress_sync_max_snapshot_bytes: int = MAX_SNAPSHOT_BYTES

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def auto_create_schema(self) -> bool:
        if self.database_auto_create is not None:
            return self.database_auto_create
        return self.database_url.startswith("sqlite")

    @property
    def sync_backend_configured(self) -> bool:
        if self.sync_backend == "redis":
            return bool(self.redis_url)
        if self.sync_backend == "database":
            return bool(self.database_url)
        return False


@lru_cache
def get_settings() -> Settings:
    return Settings()
