"""API route modules."""
from __future__ import annotations

from . import (
    aircraft,
    certificates,
    currencies,
    endorsements,
    flights,
    health,
    logbooks,
    lookups,
)

__all__ = [
    "aircraft",
    "certificates",
    "currencies",
    "endorsements",
    "flights",
    "health",
    "logbooks",
    "lookups",
]
