"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All connection strings come from environment variables (never hardcoded in code paths)
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all settings: the memory store works out-of-the-box,
      the sql store works with docker-compose
    - default_uu_identity/default_profiles stand in for the upstream auth boundary
      when a request carries no identity headers
"""

from enum import Enum
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreBackend(str, Enum):
    SQL = "sql"
    MEMORY = "memory"


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Store
    store_backend: StoreBackend = StoreBackend.SQL
    memory_seed_examples: bool = False
    database_create_schema: bool = False

    # Database
    database_url: str = (
        "postgresql+asyncpg://shoplist:shoplist@db:5432/shoplist"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Application workspace
    awid: str = "shoppingListApp"

    # Mock authentication — used when identity headers are absent
    default_uu_identity: str = "uu5:1234-5678"
    default_profiles: list[str] = ["User", "ShoppingListOwner"]

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
