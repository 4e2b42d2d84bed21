"""Application bootstrap and environment validation.

This module ensures all required configuration is present and the database is
fully migrated and seeded before the application serves requests, failing fast
with clear error messages if anything is missing.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from .config import Settings, get_settings
from .db import check_database_connection, engine
from .exceptions import ConfigurationError, DatabaseConnectionError, MigrationError
from .logging_config import get_logger
from .migrations import all_migrations_applied, run_migrations
from .seed import ensure_seed_data

LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    """Result of environment validation."""

    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, message: str) -> None:
        """Add an error and mark validation as failed."""
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str) -> None:
        """Add a warning (does not fail validation)."""
        self.warnings.append(message)


@dataclass
class BootstrapResult:
    """What the bootstrap did."""

    migrations_applied: bool = False
    seeded: Dict[str, int] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)


def validate_environment(settings: Optional[Settings] = None) -> ValidationResult:
    """
    Validate the configuration needed to serve requests.

    Returns:
        ValidationResult with errors and warnings.
    """
    settings = settings or get_settings()
    result = ValidationResult()

    # -------------------------------------------------------------------------
    # Required: Database Configuration
    # -------------------------------------------------------------------------
    if not settings.database_url:
        result.add_error("DATABASE_URL is not set.")

    # -------------------------------------------------------------------------
    # Required: Token signing key
    # -------------------------------------------------------------------------
    if not settings.jwt_secret_key:
        result.add_error("JWT_SECRET_KEY is not set.")
    elif len(settings.jwt_secret_key) < 32:
        result.add_warning("JWT_SECRET_KEY is shorter than 32 characters.")

    # -------------------------------------------------------------------------
    # Optional: transport and CORS
    # -------------------------------------------------------------------------
    if not settings.require_https and not settings.is_development():
        result.add_warning("REQUIRE_HTTPS is disabled outside Development.")
    if "*" in settings.get_allowed_origins() and not settings.is_development():
        result.add_warning("CORS allows any origin (ALLOWED_ORIGINS=*).")

    return result


def ensure_reference_data(db_engine: Engine) -> Dict[str, int]:
    """Insert missing lookup rows in their own transaction."""
    with Session(db_engine) as session:
        with session.begin():
            return ensure_seed_data(session)


def bootstrap_application(
    db_engine: Optional[Engine] = None,
    settings: Optional[Settings] = None,
) -> BootstrapResult:
    """
    Perform full application bootstrap.

    1. Validate environment
    2. Check DB connection
    3. Run migrations
    4. Verify every known migration is applied
    5. Seed reference data

    Raises:
        ConfigurationError: Required configuration is missing.
        DatabaseConnectionError: The database cannot be reached.
        MigrationError: Migrations failed or left the schema incomplete.
        SeedDataError: Reference data could not be written.
    """
    settings = settings or get_settings()
    db_engine = db_engine or engine
    result = BootstrapResult()

    # 1. Validate Environment
    validation = validate_environment(settings)
    for warning in validation.warnings:
        LOGGER.warning("Config Warning: %s", warning)
    result.warnings.extend(validation.warnings)

    if not validation.is_valid:
        for error in validation.errors:
            LOGGER.error("Config Error: %s", error)
        raise ConfigurationError("Environment validation failed: " + "; ".join(validation.errors))

    # 2. Check DB Connection
    if not check_database_connection(db_engine):
        raise DatabaseConnectionError("Could not connect to the database.")

    # 3. Run Migrations
    run_migrations(db_engine)

    # 4. Confirm the schema is complete
    with db_engine.connect() as connection:
        if not all_migrations_applied(connection):
            raise MigrationError("Database migrations are incomplete after upgrade.")
    result.migrations_applied = True

    # 5. Seed reference data
    result.seeded = ensure_reference_data(db_engine)

    LOGGER.info("Application bootstrap completed successfully.")
    return result


def migration_status(db_engine: Optional[Engine] = None) -> bool:
    """Read-only check used when startup migration is disabled."""
    db_engine = db_engine or engine
    with db_engine.connect() as connection:
        return all_migrations_applied(connection)

