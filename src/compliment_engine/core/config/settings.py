"""Application configuration using Pydantic Settings with YAML support.

This module provides centralized configuration management with:
- YAML configuration files (config/base/ plus config/environments/{APP_ENV}/)
- Environment variable overrides using the "__" nested delimiter
- Secrets loaded from the environment or .env only
- Cached access through get_settings()
"""

from __future__ import annotations

from enum import StrEnum
from functools import lru_cache
from typing import TYPE_CHECKING, Annotated

from pydantic import BaseModel, BeforeValidator, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_source import MultiYamlConfigSettingsSource


if TYPE_CHECKING:
    from pydantic_settings import PydanticBaseSettingsSource


class StoreBackend(StrEnum):
    """Key-value store used to persist compliment data.

    - REDIS: Shared Redis instance (falls back to MEMORY if unreachable)
    - MEMORY: Process-local dictionary, lost on restart
    """

    REDIS = "redis"
    MEMORY = "memory"


def parse_list(v: str | list[str]) -> list[str]:
    """Parse comma-separated string or list into list of strings."""
    if isinstance(v, str):
        return [x.strip() for x in v.split(",") if x.strip()]
    return v


# =============================================================================
# Nested Configuration Models (from YAML)
# =============================================================================


class AppSettings(BaseModel):
    """Application identity settings."""

    name: str = "Compliment Engine"
    version: str = "0.1.0"
    debug: bool = False


class ServerSettings(BaseModel):
    """Server configuration settings."""

    host: str = "127.0.0.1"
    port: int = 8000


class ApiSettings(BaseModel):
    """API configuration settings."""

    v1_prefix: str = "/api/v1/compliments"
    cors_origins: Annotated[list[str], BeforeValidator(parse_list)] = []


class RedisSettings(BaseModel):
    """Redis configuration settings."""

    host: str = "localhost"
    port: int = 6379
    user: str | None = None  # Redis ACL username (Redis 6.0+)
    cache_db: int = 0
    max_connections: int = 20


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: str = "INFO"
    format: str = "json"
    file: str | None = None


class MetricsSettings(BaseModel):
    """Metrics configuration settings."""

    enabled: bool = True


class ObservabilitySettings(BaseModel):
    """Observability configuration settings."""

    metrics: MetricsSettings = MetricsSettings()
    slow_request_threshold_seconds: float = Field(default=0.5, gt=0)


class ComplimentStoreSettings(BaseModel):
    """Where the compliment cache blob lives."""

    backend: StoreBackend = StoreBackend.REDIS
    cache_key: str = "complimentCache"


class ComplimentCacheSettings(BaseModel):
    """Per-key compliment cache limits."""

    ttl_hours: float = Field(default=24, gt=0)
    max_per_key: int = Field(default=20, ge=1)


class ComplimentHistorySettings(BaseModel):
    """Recently shown compliments kept in memory for anti-repeat."""

    capacity: int = Field(default=5, ge=0)


class ComplimentGenerationSettings(BaseModel):
    """Fallback synthesis and candidate selection tuning.

    The variety override replaces the history-filtered pool with the full
    cached list when fewer than ``variety_min_available`` candidates survive
    filtering and more than ``variety_min_cached`` are cached.
    """

    max_attempts: int = Field(default=5, ge=0)
    specificity_probability: float = Field(default=0.5, ge=0, le=1)
    variety_min_available: int = 3
    variety_min_cached: int = 5


class ComplimentSettings(BaseModel):
    """Compliment engine configuration."""

    store: ComplimentStoreSettings = ComplimentStoreSettings()
    cache: ComplimentCacheSettings = ComplimentCacheSettings()
    history: ComplimentHistorySettings = ComplimentHistorySettings()
    generation: ComplimentGenerationSettings = ComplimentGenerationSettings()


class FavoritesSettings(BaseModel):
    """Saved compliments, shown history and categories."""

    history_limit: int = Field(default=50, ge=1)
    default_categories: list[str] = ["Funny", "Inspirational", "Clever", "Sweet"]


# =============================================================================
# Main Settings Class
# =============================================================================


class Settings(BaseSettings):
    """Application settings with YAML + environment variable support.

    Configuration is loaded from multiple sources with the following priority
    (highest to lowest):
    1. Values passed to Settings()
    2. Environment variables
    3. .env file
    4. Environment-specific YAML files (config/environments/{APP_ENV}/)
    5. Base YAML files (config/base/)
    6. Default values in code

    For example: COMPLIMENTS__HISTORY__CAPACITY=10 overrides
    compliments.history.capacity.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        case_sensitive=False,
        env_nested_delimiter="__",
    )

    APP_ENV: str = "development"

    app: AppSettings = AppSettings()
    server: ServerSettings = ServerSettings()
    api: ApiSettings = ApiSettings()
    redis: RedisSettings = RedisSettings()
    logging: LoggingSettings = LoggingSettings()
    observability: ObservabilitySettings = ObservabilitySettings()
    compliments: ComplimentSettings = ComplimentSettings()
    favorites: FavoritesSettings = FavoritesSettings()

    # Secrets (from environment / .env only - never in YAML)
    REDIS_PASSWORD: str = ""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the YAML source below env/.env and above secrets files."""
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            MultiYamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    @property
    def redis_cache_url(self) -> str:
        """Build the Redis cache URL.

        URL format: redis://[user:password@]host:port/db
        """
        auth_part = ""
        if self.redis.user and self.REDIS_PASSWORD:
            auth_part = f"{self.redis.user}:{self.REDIS_PASSWORD}@"
        elif self.REDIS_PASSWORD:
            auth_part = f":{self.REDIS_PASSWORD}@"
        elif self.redis.user:
            auth_part = f"{self.redis.user}@"

        return (
            f"redis://{auth_part}{self.redis.host}:{self.redis.port}"
            f"/{self.redis.cache_db}"
        )

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.APP_ENV == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.APP_ENV == "production"

    @property
    def is_testing(self) -> bool:
        """Check if running in test environment."""
        return self.APP_ENV == "test"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
