"""Core module exports."""
from __future__ import annotations

from core.config import Settings, get_settings, load_settings, reload_settings
from core.db import Base, SessionLocal, engine, engine_for_url
from core.exceptions import (
    # Base
    FlightBookError,
    # Configuration
    ConfigurationError,
    # Database
    DatabaseError,
    DatabaseConnectionError,
    MigrationError,
    SeedDataError,
    # Records
    RecordNotFoundError,
    DuplicateRecordError,
    CurrencyError,
)
from core.logging_config import JSONFormatter, configure_logging, get_logger, setup_logging

__all__ = [
    # Config
    "Settings",
    "get_settings",
    "load_settings",
    "reload_settings",
    # Database
    "Base",
    "SessionLocal",
    "engine",
    "engine_for_url",
    # Exceptions
    "FlightBookError",
    "ConfigurationError",
    "DatabaseError",
    "DatabaseConnectionError",
    "MigrationError",
    "SeedDataError",
    "RecordNotFoundError",
    "DuplicateRecordError",
    "CurrencyError",
    # Logging
    "setup_logging",
    "configure_logging",
    "get_logger",
    "JSONFormatter",
]
