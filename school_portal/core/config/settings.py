# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Application configuration settings using Pydantic Settings.

This module provides centralized configuration management for the school portal.
Settings are loaded from environment variables with sensible defaults.

The Settings class is the main entry point and aggregates all subsettings.
A singleton instance is provided via get_settings() for dependency injection.

Example:
    >>> from school_portal.core.config.settings import get_settings
    >>> settings = get_settings()
    >>> print(settings.site.timezone)
    'Asia/Ho_Chi_Minh'
"""

from functools import lru_cache
from typing import Literal, Self

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "change-this-in-production"
DEFAULT_ADMIN_PASSWORD = "admin123"


class DatabaseSettings(BaseSettings):
    """Portal database configuration.

    The database stores every piece of site content: configuration,
    posts, documents, menus, media albums, user profiles and visitor counters.

    Attributes:
        user: PostgreSQL username.
        password: PostgreSQL password.
        host: Database host address.
        port: Database port number.
        database: Database name.
        pool_size: Connection pool size.
        max_overflow: Maximum overflow connections.
    """

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        extra="ignore",
    )

    user: str = "school_portal"
    password: SecretStr = SecretStr("school_portal_password")
    host: str = "localhost"
    port: int = 5432
    database: str = "school_portal"
    pool_size: int = 10
    max_overflow: int = 20

    @property
    def url(self) -> str:
        """Build the async database URL from components."""
        pwd = self.password.get_secret_value()
        return f"postgresql+asyncpg://{self.user}:{pwd}@{self.host}:{self.port}/{self.database}"

    @property
    def sync_url(self) -> str:
        """Build the sync database URL for migrations."""
        pwd = self.password.get_secret_value()
        return f"postgresql://{self.user}:{pwd}@{self.host}:{self.port}/{self.database}"


class JWTSettings(BaseSettings):
    """JWT authentication configuration.

    Attributes:
        secret_key: Secret key for signing tokens.
        algorithm: JWT signing algorithm.
        access_token_expire_minutes: Access token expiration time.
        refresh_token_expire_days: Refresh token expiration time.
    """

    model_config = SettingsConfigDict(
        env_prefix="JWT_",
        extra="ignore",
    )

    secret_key: SecretStr = SecretStr(DEFAULT_JWT_SECRET)
    algorithm: str = "HS256"
    access_token_expire_minutes: int = Field(
        default=60,
        validation_alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )
    refresh_token_expire_days: int = Field(
        default=7,
        validation_alias="REFRESH_TOKEN_EXPIRE_DAYS",
    )


class RateLimitSettings(BaseSettings):
    """Rate limiting configuration.

    Attributes:
        enabled: Whether rate limiting is applied at all.
        requests_per_minute: Default maximum requests per minute per client.
        auth: Limit string for login and registration endpoints.
        track_visit: Limit string for the visit heartbeat endpoint.
    """

    model_config = SettingsConfigDict(
        env_prefix="RATE_LIMIT_",
        extra="ignore",
    )

    enabled: bool = True
    requests_per_minute: int = 120
    auth: str = "10/minute"
    track_visit: str = "30/minute"


class CORSSettings(BaseSettings):
    """CORS configuration for API.

    Attributes:
        origins: Comma-separated list of allowed origins.
        allow_credentials: Whether to allow credentials.
        allow_methods: Allowed HTTP methods.
        allow_headers: Allowed HTTP headers.
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
        """Parse origins string into a list."""
        return [origin.strip() for origin in self.origins.split(",") if origin.strip()]


class APISettings(BaseSettings):
    """API server configuration.

    Attributes:
        host: Host to bind to.
        port: Port to listen on.
        workers: Number of worker processes.
        reload: Whether to enable auto-reload.
    """

    model_config = SettingsConfigDict(
        env_prefix="API_",
        extra="ignore",
    )

    host: str = "0.0.0.0"
    port: int = 8000
    workers: int = 1
    reload: bool = False


class SiteSettings(BaseSettings):
    """Public site behaviour.

    Attributes:
        timezone: IANA timezone used to bucket visitor counters by day/month.
        online_window_minutes: A visitor heartbeat newer than this counts as online.
        public_base_url: Front-end origin used to build share links.
    """

    model_config = SettingsConfigDict(
        env_prefix="SITE_",
        extra="ignore",
    )

    timezone: str = "Asia/Ho_Chi_Minh"
    online_window_minutes: int = 10
    public_base_url: str = "http://localhost:5173"


class StorageSettings(BaseSettings):
    """Media storage configuration.

    Attributes:
        backend: "local" writes under local_root, "s3" uses an S3 bucket.
        local_root: Directory that receives uploads for the local backend.
        public_base_url: Base URL prepended to stored object paths.
        bucket: S3 bucket name.
        region: S3 region.
        endpoint_url: Optional S3-compatible endpoint (MinIO, R2, ...).
        max_upload_bytes: Largest accepted upload.
    """

    model_config = SettingsConfigDict(
        env_prefix="STORAGE_",
        extra="ignore",
    )

    backend: Literal["local", "s3"] = "local"
    local_root: str = "./media"
    public_base_url: str = "/media"
    bucket: str = "school-assets"
    region: str | None = None
    endpoint_url: str | None = None
    max_upload_bytes: int = 10 * 1024 * 1024


class AISettings(BaseSettings):
    """Content-draft assistant configuration using LiteLLM.

    Attributes:
        enabled: Whether the draft assistant is available.
        model: Model identifier in LiteLLM format.
        api_key: Provider API key, passed straight to LiteLLM.
        api_base: Optional provider base URL.
        request_timeout: Request timeout in seconds.
        max_tokens: Upper bound on generated tokens.
    """

    model_config = SettingsConfigDict(
        env_prefix="AI_",
        extra="ignore",
    )

    enabled: bool = False
    model: str = "gemini/gemini-2.0-flash"
    api_key: SecretStr | None = None
    api_base: str | None = None
    request_timeout: float = 60.0
    max_tokens: int = 1200


class AdminSeedSettings(BaseSettings):
    """Default administrator created when the portal has none.

    Attributes:
        email: Login email for the seeded administrator.
        password: Initial password for the seeded administrator.
        full_name: Display name for the seeded administrator.
    """

    model_config = SettingsConfigDict(
        env_prefix="ADMIN_",
        extra="ignore",
    )

    email: str = "admin@truonghoc.edu.vn"
    password: SecretStr = SecretStr(DEFAULT_ADMIN_PASSWORD)
    full_name: str = "Quản trị viên"


class Settings(BaseSettings):
    """Main application settings aggregating all subsettings.

    Use get_settings() to obtain a cached singleton instance.

    Attributes:
        environment: Current environment (development, staging, production).
        debug: Enable debug mode.
        log_level: Logging level.
        db: Database settings.
        jwt: JWT authentication settings.
        rate_limit: Rate limiting settings.
        cors: CORS settings.
        api: API server settings.
        site: Public site settings.
        storage: Media storage settings.
        ai: Content-draft assistant settings.
        admin: Seeded administrator settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Environment
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # Subsettings - loaded with their own env prefixes
    db: DatabaseSettings = Field(default_factory=DatabaseSettings)
    jwt: JWTSettings = Field(default_factory=JWTSettings)
    rate_limit: RateLimitSettings = Field(default_factory=RateLimitSettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)
    api: APISettings = Field(default_factory=APISettings)
    site: SiteSettings = Field(default_factory=SiteSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    ai: AISettings = Field(default_factory=AISettings)
    admin: AdminSeedSettings = Field(default_factory=AdminSeedSettings)

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
            if self.admin.password.get_secret_value() == DEFAULT_ADMIN_PASSWORD:
                raise ValueError(
                    "Seeded admin password must be changed from default in production. "
                    "Set ADMIN_PASSWORD environment variable."
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

    Uses lru_cache to ensure settings are only loaded once.
    Call clear_settings_cache() if you need to reload settings.

    Returns:
        Cached Settings instance.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Call this if you need to reload settings from environment.
    Useful for testing or dynamic configuration updates.
    """
    get_settings.cache_clear()
