"""Custom exceptions for the FlightBook API."""
from __future__ import annotations


class FlightBookError(Exception):
    """Base exception for all application errors."""

    pass


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(FlightBookError):
    """Raised when required configuration is missing, malformed or invalid."""

    pass


# =============================================================================
# Database Errors
# =============================================================================


class DatabaseError(FlightBookError):
    """Base exception for database-related errors."""

    pass


class DatabaseConnectionError(DatabaseError):
    """Raised when the database cannot be reached."""

    pass


class MigrationError(DatabaseError):
    """Raised when database migration fails or leaves the schema incomplete."""

    pass


class SeedDataError(DatabaseError):
    """Raised when required reference data cannot be inserted."""

    pass


# =============================================================================
# Record Errors
# =============================================================================


class RecordNotFoundError(FlightBookError):
    """Raised when a record does not exist or is not owned by the caller."""

    def __init__(self, entity: str, record_id: object) -> None:
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"{entity} {record_id} not found")


class DuplicateRecordError(FlightBookError):
    """Raised when a record violates a uniqueness rule (e.g. a second pilot)."""

    pass


# =============================================================================
# Currency Errors
# =============================================================================


class CurrencyError(FlightBookError):
    """Raised when a currency cannot be computed."""

    pass


__all__ = [
    "FlightBookError",
    "ConfigurationError",
    "DatabaseError",
    "DatabaseConnectionError",
    "MigrationError",
    "SeedDataError",
    "RecordNotFoundError",
    "DuplicateRecordError",
    "CurrencyError",
]
