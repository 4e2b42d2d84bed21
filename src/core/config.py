"""Configuration management for the FlightBook API.

Configuration is layered, in increasing precedence:

1. ``appsettings.json`` (base file)
2. ``appsettings.<ENVIRONMENT>.json`` (environment-specific file)
3. ``.env`` developer secrets (only when ENVIRONMENT is Development)
4. Process environment variables

Keys are the same in every layer (e.g. ``DATABASE_URL``). Missing files are
skipped; malformed files are an error.
"""
from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Tuple, Type

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    DotEnvSettingsSource,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from .exceptions import ConfigurationError

# Project root detection
PROJECT_ROOT = Path(__file__).resolve().parents[2]

# Absolute path to the default SQLite database (never changes regardless of CWD)
DATABASE_FILE = PROJECT_ROOT / "flightbook.db"
ABSOLUTE_DATABASE_URL = f"sqlite:///{DATABASE_FILE.as_posix()}"

BASE_SETTINGS_FILE = "appsettings.json"
SECRETS_FILE = ".env"
DEFAULT_ENVIRONMENT = "Production"
DEVELOPMENT_ENVIRONMENT = "Development"


def current_environment() -> str:
    """Environment name taken from the process environment."""
    return os.environ.get("ENVIRONMENT") or DEFAULT_ENVIRONMENT


def config_directory() -> Path:
    """Directory holding the appsettings files and developer secrets."""
    configured = os.environ.get("FLIGHTBOOK_CONFIG_DIR")
    return Path(configured) if configured else PROJECT_ROOT


def is_development(environment: str) -> bool:
    return environment.lower() == DEVELOPMENT_ENVIRONMENT.lower()


def settings_files(environment: str, directory: Optional[Path] = None) -> List[Path]:
    """Settings files for an environment, lowest precedence first."""
    directory = directory or config_directory()
    return [
        directory / BASE_SETTINGS_FILE,
        directory / f"appsettings.{environment}.json",
    ]


def _resolve_database_url(url: str) -> str:
    """
    Convert relative SQLite paths to absolute paths based on PROJECT_ROOT.

    This prevents issues when the app is started from different working directories.
    """
    if not url.startswith("sqlite:///"):
        return url  # Not SQLite, return as-is

    path_part = url.replace("sqlite:///", "")
    if path_part == ":memory:" or path_part == "":
        return url

    if path_part.startswith("./") or (not path_part.startswith("/") and ":" not in path_part):
        if path_part.startswith("./"):
            path_part = path_part[2:]

        absolute_path = PROJECT_ROOT / path_part
        return f"sqlite:///{absolute_path.as_posix()}"

    return url  # Already absolute


class Settings(BaseSettings):
    """
    Runtime configuration for the FlightBook API.

    See the module docstring for the order in which sources are applied.
    """

    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=False,
    )

    # -------------------------------------------------------------------------
    # Environment
    # -------------------------------------------------------------------------
    environment: str = Field(default=DEFAULT_ENVIRONMENT, alias="ENVIRONMENT")

    # -------------------------------------------------------------------------
    # Database
    # -------------------------------------------------------------------------
    database_url: str = Field(
        default=ABSOLUTE_DATABASE_URL,
        alias="DATABASE_URL",
        description="SQLAlchemy connection string.",
    )
    db_pool_size: int = Field(default=5, alias="DB_POOL_SIZE", ge=1)
    db_max_overflow: int = Field(default=10, alias="DB_MAX_OVERFLOW", ge=0)
    db_pool_timeout: int = Field(default=30, alias="DB_POOL_TIMEOUT", ge=1)
    auto_migrate: bool = Field(
        default=True,
        alias="AUTO_MIGRATE",
        description="Apply pending migrations and seed reference data at startup.",
    )

    # -------------------------------------------------------------------------
    # Token authentication
    # -------------------------------------------------------------------------
    jwt_secret_key: Optional[str] = Field(default=None, alias="JWT_SECRET_KEY")
    jwt_issuer: Optional[str] = Field(default="flightbook", alias="JWT_ISSUER")
    jwt_audience: Optional[str] = Field(default="flightbook-api", alias="JWT_AUDIENCE")
    jwt_access_token_expire_minutes: int = Field(
        default=60, alias="JWT_ACCESS_TOKEN_EXPIRE_MINUTES", ge=1
    )

    # -------------------------------------------------------------------------
    # HTTP
    # -------------------------------------------------------------------------
    require_https: bool = Field(default=True, alias="REQUIRE_HTTPS")
    trust_forwarded_proto: bool = Field(
        default=False,
        alias="TRUST_FORWARDED_PROTO",
        description="Treat X-Forwarded-Proto: https as a secure request (behind a proxy).",
    )
    allowed_origins: str = Field(default="*", alias="ALLOWED_ORIGINS")

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="text", alias="LOG_FORMAT")  # "text" or "json"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        # Sources listed first win.
        environment = current_environment()
        directory = config_directory()

        sources: List[PydanticBaseSettingsSource] = [init_settings, env_settings]
        if is_development(environment):
            sources.append(
                DotEnvSettingsSource(
                    settings_cls,
                    env_file=directory / SECRETS_FILE,
                    env_file_encoding="utf-8",
                )
            )
        sources.append(
            JsonConfigSettingsSource(
                settings_cls,
                json_file=settings_files(environment, directory),
                json_file_encoding="utf-8",
            )
        )
        return tuple(sources)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return upper

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Ensure log format is valid."""
        lower = v.lower()
        if lower not in {"text", "json"}:
            raise ValueError("log_format must be 'text' or 'json'")
        return lower

    @model_validator(mode="after")
    def resolve_database_url(self) -> "Settings":
        """Convert relative SQLite paths to absolute paths."""
        self.database_url = _resolve_database_url(self.database_url)
        return self

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def is_development(self) -> bool:
        return is_development(self.environment)

    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    def get_allowed_origins(self) -> List[str]:
        """Parse the comma-separated CORS origin list."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


def load_settings() -> Settings:
    """
    Build a fresh Settings object from all configuration layers.

    Raises:
        ConfigurationError: If a settings file is malformed or a value is invalid.
    """
    try:
        return Settings()
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc
    except ValueError as exc:
        # json.JSONDecodeError from a malformed appsettings file
        raise ConfigurationError(f"Malformed configuration file: {exc}") from exc


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are loaded once and cached. To reload settings,
    call `get_settings.cache_clear()` first.
    """
    return load_settings()


def reload_settings() -> Settings:
    """
    Clear settings cache and reload from all configuration layers.

    Useful for testing or after modifying a settings file.
    """
    get_settings.cache_clear()
    return get_settings()
