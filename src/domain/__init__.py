"""Domain layer for FlightBook business logic.

This module provides a clean separation between business logic and
infrastructure (CLI, API, etc.). All record access should go through
the domain services.
"""
from __future__ import annotations

from .logbook import LogbookService
from .currency import CurrencyResult, CurrencyService, evaluate_currency

__all__ = [
    "LogbookService",
    "CurrencyService",
    "CurrencyResult",
    "evaluate_currency",
]
