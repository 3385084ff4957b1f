"""
Application Configuration Module

Pydantic Settings loads configuration from, highest priority first:
1. Keyword arguments passed to Settings(...)
2. Environment variables (nested with "__", e.g. AUTH__JWT__SECRET)
3. A .env file in the working directory
4. A YAML file (BOOKSTORE_CONFIG, default configs/app.yaml)

The YAML layout groups settings by concern:

    app:
      name: Bookstore API
      port: 8080
    db:
      host: localhost
      port: 5432
      user: bookstore
      password: secret
      dbname: bookstore
      options: sslmode=disable
    auth:
      jwt:
        secret: <openssl rand -hex 32>

Usage:
    from bookstore.config import get_settings

    settings = get_settings()
    print(settings.app.name)

The application factory receives a Settings instance explicitly, so tests
can build their own without touching the cached one.
"""

import os
from functools import lru_cache
from urllib.parse import parse_qsl

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)
from sqlalchemy.engine import URL, make_url

CONFIG_FILE_ENV = "BOOKSTORE_CONFIG"
DEFAULT_CONFIG_FILE = "configs/app.yaml"


class AppConfig(BaseModel):
    """HTTP server and process-level settings."""

    name: str = Field(
        default="Bookstore API",
        description="Application name displayed in docs and logs",
    )
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind the server to",
    )
    port: int = Field(
        default=8080,
        description="Port to bind the server to",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode (detailed errors, SQL echo, auto-reload)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    allowed_origins: str = Field(
        default="http://localhost:3000",
        description="Comma-separated list of allowed CORS origins",
    )

    @property
    def allowed_origins_list(self) -> list[str]:
        """Parse comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate that log_level is a valid Python logging level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v.upper()


class DatabaseConfig(BaseModel):
    """
    PostgreSQL connection settings.

    Either give the individual parts (host, port, user, ...) or a full
    SQLAlchemy URL in `url`, which wins when set.
    """

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    user: str = Field(default="bookstore", description="Database user")
    password: str = Field(default="", description="Database password")
    dbname: str = Field(default="bookstore", description="Database name")
    options: str = Field(
        default="",
        description="Extra connection options as a query string (e.g. sslmode=disable)",
    )
    url: str | None = Field(
        default=None,
        description="Full SQLAlchemy URL; overrides the individual parts",
    )
    pool_size: int = Field(
        default=5,
        description="Number of permanent database connections",
    )
    max_overflow: int = Field(
        default=5,
        description="Maximum additional connections during high load",
    )
    request_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Upper bound for a single statement and for pool checkout",
    )

    @property
    def sqlalchemy_url(self) -> URL:
        """Build the SQLAlchemy URL from `url` or from the individual parts."""
        if self.url:
            return make_url(self.url)
        return URL.create(
            "postgresql+psycopg2",
            username=self.user,
            password=self.password or None,
            host=self.host,
            port=self.port,
            database=self.dbname,
            query=dict(parse_qsl(self.options)),
        )


class JWTConfig(BaseModel):
    """Signing settings for bearer tokens."""

    secret: str = Field(
        ...,
        description="Symmetric secret used to sign tokens",
    )
    expire_minutes: int = Field(
        default=15,
        gt=0,
        description="Token lifetime in minutes",
    )
    algorithm: str = Field(
        default="HS256",
        description="JWT signing algorithm",
    )

    @field_validator("secret")
    @classmethod
    def validate_secret(cls, v: str) -> str:
        """
        Reject placeholder and short secrets.

        The application refuses to start with an insecure signing key.
        """
        placeholder_indicators = [
            "REPLACE_WITH",
            "change-me",
            "your-secret",
            "generate-with",
        ]

        for indicator in placeholder_indicators:
            if indicator.lower() in v.lower():
                raise ValueError(
                    "JWT secret contains a placeholder value. "
                    "Generate a secure key with: openssl rand -hex 32"
                )

        if len(v) < 32:
            raise ValueError(
                "JWT secret must be at least 32 characters long. "
                "Generate a secure key with: openssl rand -hex 32"
            )

        return v


class AuthConfig(BaseModel):
    """Authentication settings."""

    jwt: JWTConfig
    bcrypt_rounds: int = Field(
        default=12,
        ge=4,
        le=31,
        description="bcrypt cost factor for password hashing",
    )


class Settings(BaseSettings):
    """
    Application settings.

    The auth section has no usable default: a signing secret must come from
    the YAML file, the environment or the caller.
    """

    app: AppConfig = Field(default_factory=AppConfig)
    db: DatabaseConfig = Field(default_factory=DatabaseConfig)
    auth: AuthConfig

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Add the YAML file as the lowest-priority source."""
        yaml_file = os.environ.get(CONFIG_FILE_ENV, DEFAULT_CONFIG_FILE)
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls, yaml_file=yaml_file),
            file_secret_settings,
        )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    The first call reads the YAML file, .env and environment and validates
    the result; later calls return the same instance.
    """
    return Settings()
