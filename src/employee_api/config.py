"""Application configuration."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, PostgresDsn, RedisDsn, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from employee_api.constants.validation import DEFAULT_ALLOWED_ROLES


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Employee Management API"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"

    # Database (required - no default)
    database_url: PostgresDsn = Field(
        description="PostgreSQL connection URL. Must be set via environment variable."
    )
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # Redis (empty disables caching)
    redis_url: RedisDsn | None = Field(default="redis://localhost:6379")

    # Cache settings
    cache_ttl_employee: int = 60  # seconds
    cache_key_prefix: str = "employee-api"

    # Comma-separated list of role codes accepted on employee records
    allowed_roles: str = ",".join(DEFAULT_ALLOWED_ROLES)

    # CORS settings
    cors_origins: str = "http://localhost:3000"  # Comma-separated list

    @model_validator(mode="before")
    @classmethod
    def empty_redis_url(cls, data: dict) -> dict:
        """Treat an empty REDIS_URL as "caching disabled"."""
        if isinstance(data, dict):
            for key in ("redis_url", "REDIS_URL"):
                if key in data and not data[key]:
                    data[key] = None
        return data

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Validate settings for deployment requirements."""
        if self.environment == "production" and self.debug:
            raise ValueError(
                "DEBUG mode cannot be enabled in production environment. "
                "This would expose API documentation and detailed error messages."
            )

        url = str(self.database_url)
        if not url.startswith(("postgresql://", "postgres://")):
            raise ValueError(
                "DATABASE_URL must be a PostgreSQL URL starting with 'postgresql://' or 'postgres://'"
            )

        if self.cache_ttl_employee <= 0:
            raise ValueError("CACHE_TTL_EMPLOYEE must be a positive number of seconds")

        if not self.allowed_roles_set:
            raise ValueError("ALLOWED_ROLES must contain at least one role")

        return self

    @property
    def async_database_url(self) -> str:
        """Get async database URL for SQLAlchemy with asyncpg.

        Converts sslmode parameter to ssl for asyncpg compatibility.
        """
        url = str(self.database_url)
        url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        url = url.replace("postgres://", "postgresql+asyncpg://", 1)
        url = url.replace("sslmode=", "ssl=")
        return url

    @property
    def allowed_roles_set(self) -> frozenset[str]:
        """Get allowed roles as a set."""
        return frozenset(role.strip() for role in self.allowed_roles.split(",") if role.strip())

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
