"""Application configuration using pydantic-settings."""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Prepository"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 4000
    workers: int = 1
    cors_origins: list[str] = [
        "http://localhost:3000",  # Next.js dev server
        "http://127.0.0.1:3000",
    ]

    # Database
    database_url: str = "sqlite+aiosqlite:///./prepository.db"
    database_pool_size: int = 5
    database_max_overflow: int = 10
    auto_create_tables: bool = True

    # JWT Authentication
    secret_key: str = "change-me-in-production"
    jwt_secret_key: str = ""  # Falls back to secret_key if not set
    jwt_algorithm: str = "HS256"
    access_token_expire_days: int = 7

    # Password hashing
    bcrypt_rounds: int = 12

    @property
    def async_database_url(self) -> str:
        """Ensure a PostgreSQL URL uses asyncpg."""
        url = self.database_url
        if url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url

    @property
    def is_sqlite(self) -> bool:
        """Check if the configured database is SQLite."""
        return self.async_database_url.startswith("sqlite")

    @property
    def effective_jwt_secret(self) -> str:
        """Get the effective JWT secret key (prefers jwt_secret_key, falls back to secret_key)."""
        return self.jwt_secret_key or self.secret_key


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
