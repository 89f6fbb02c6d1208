# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Application configuration settings using Pydantic Settings.

Settings are loaded from environment variables (and an optional ``.env``
file) with sensible defaults. The Settings class aggregates all
subsettings; get_settings() returns a cached singleton for dependency
injection.

Example:
    >>> from edconnect.core.config.settings import get_settings
    >>> settings = get_settings()
    >>> print(settings.environment)
    'development'
"""

from functools import lru_cache
from typing import Literal, Self

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "edconnect-secret-key"


class DatabaseSettings(BaseSettings):
    """Relational database configuration.

    Either a full SQLAlchemy URL is given through ``DB_URL`` (for example
    ``sqlite+aiosqlite:///./edconnect.db`` for local development), or the
    PostgreSQL URL is assembled from the individual components.

    Attributes:
        url: Full async connection URL, overrides the components when set.
        user: PostgreSQL username.
        password: PostgreSQL password.
        host: Database host address.
        port: Database port number.
        database: Database name.
        pool_size: Connection pool size.
        max_overflow: Maximum overflow connections.
        echo: Log every SQL statement.
    """

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        extra="ignore",
    )

    url: str | None = None
    user: str = "edconnect"
    password: SecretStr = SecretStr("edconnect_password")
    host: str = "localhost"
    port: int = 5432
    database: str = "edconnect"
    pool_size: int = 10
    max_overflow: int = 20
    echo: bool = False

    @property
    def async_url(self) -> str:
        """Build the async database URL."""
        if self.url:
            return self.url
        pwd = self.password.get_secret_value()
        return f"postgresql+asyncpg://{self.user}:{pwd}@{self.host}:{self.port}/{self.database}"

    @property
    def is_sqlite(self) -> bool:
        """Check if the configured backend is SQLite."""
        return self.async_url.startswith("sqlite")


class LLMSettings(BaseSettings):
    """LLM configuration for the AI tutor.

    Calls go through LiteLLM, so ``tutor_model`` uses the LiteLLM
    ``provider/model`` format.

    Attributes:
        anthropic_api_key: Anthropic API key.
        tutor_model: Model used for tutor replies and session summaries.
        tutor_max_tokens: Token limit for tutor replies.
        summary_max_tokens: Token limit for session summaries.
        temperature: Sampling temperature.
        request_timeout: Request timeout in seconds.
        max_retries: Retries handed to LiteLLM.
    """

    model_config = SettingsConfigDict(
        env_prefix="LLM_",
        extra="ignore",
    )

    anthropic_api_key: SecretStr | None = Field(
        default=None,
        validation_alias="ANTHROPIC_API_KEY",
    )
    tutor_model: str = "anthropic/claude-sonnet-4-20250514"
    tutor_max_tokens: int = 8192
    summary_max_tokens: int = 2048
    temperature: float = 0.7
    request_timeout: float = 60.0
    max_retries: int = 2


class JWTSettings(BaseSettings):
    """JWT authentication configuration.

    Attributes:
        secret_key: Secret key for signing tokens.
        algorithm: JWT signing algorithm.
        access_token_expire_minutes: Access token lifetime.
        refresh_token_expire_days: Refresh token lifetime.
    """

    model_config = SettingsConfigDict(
        env_prefix="JWT_",
        extra="ignore",
    )

    secret_key: SecretStr = SecretStr(DEFAULT_JWT_SECRET)
    algorithm: str = "HS256"
    access_token_expire_minutes: int = Field(default=30, ge=1)
    refresh_token_expire_days: int = Field(default=7, ge=1)


class RateLimitSettings(BaseSettings):
    """Rate limiting configuration.

    Attributes:
        enabled: Toggle slowapi limits.
        requests_per_minute: Default per-client limit.
        storage_uri: slowapi storage backend.
    """

    model_config = SettingsConfigDict(
        env_prefix="RATE_LIMIT_",
        extra="ignore",
    )

    enabled: bool = True
    requests_per_minute: int = 120
    storage_uri: str = "memory://"


class CORSSettings(BaseSettings):
    """CORS configuration.

    Attributes:
        origins: Comma separated allowed origins.
        allow_credentials: Allow cookies and auth headers.
        allow_methods: Allowed HTTP methods.
        allow_headers: Allowed request headers.
    """

    model_config = SettingsConfigDict(
        env_prefix="CORS_",
        extra="ignore",
    )

    origins: str = "http://localhost:3000,http://localhost:5173"
    allow_credentials: bool = True
    allow_methods: list[str] = ["*"]
    allow_headers: list[str] = ["*"]

    @property
    def origins_list(self) -> list[str]:
        """Parse origins string into list."""
        return [origin.strip() for origin in self.origins.split(",") if origin.strip()]


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(
        env_prefix="API_",
        extra="ignore",
    )

    host: str = "0.0.0.0"
    port: int = 5000
    workers: int = 1
    reload: bool = False


class SeedSettings(BaseSettings):
    """Demo data seeding.

    Attributes:
        enabled: Seed the demo accounts and classes when no users exist.
    """

    model_config = SettingsConfigDict(
        env_prefix="SEED_",
        extra="ignore",
    )

    enabled: bool = True


class Settings(BaseSettings):
    """Main application settings aggregating all subsettings.

    Use get_settings() to obtain a cached singleton instance.

    Attributes:
        environment: Current environment (development, staging, production).
        debug: Enable debug mode.
        log_level: Logging level.
        database: Database settings.
        llm: LLM provider settings.
        jwt: JWT authentication settings.
        rate_limit: Rate limiting settings.
        cors: CORS settings.
        api: API server settings.
        seed: Demo data settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    jwt: JWTSettings = Field(default_factory=JWTSettings)
    rate_limit: RateLimitSettings = Field(default_factory=RateLimitSettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)
    api: APISettings = Field(default_factory=APISettings)
    seed: SeedSettings = Field(default_factory=SeedSettings)

    @model_validator(mode="after")
    def validate_production_settings(self) -> Self:
        """Validate that production settings are properly configured.

        Raises:
            ValueError: If running in production with insecure defaults.
        """
        if self.environment == "production":
            if self.jwt.secret_key.get_secret_value() == DEFAULT_JWT_SECRET:
                raise ValueError(
                    "JWT secret key must be changed from default in production. "
                    "Set JWT_SECRET_KEY environment variable."
                )
        return self

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance.

    Call clear_settings_cache() if you need to reload settings.

    Returns:
        Cached Settings instance.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Useful for testing or when the environment changed.
    """
    get_settings.cache_clear()
