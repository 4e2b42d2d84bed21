"""Health check routes."""
from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from api.deps import get_readonly_db
from core.config import get_settings
from core.logging_config import get_logger
from core.migrations import all_migrations_applied
from core.utils import utcnow

router = APIRouter()
LOGGER = get_logger(__name__)


@router.get("")
async def health_check() -> Dict[str, Any]:
    """Basic health check - always returns OK."""
    return {
        "status": "healthy",
        "timestamp": utcnow().isoformat(),
        "environment": get_settings().environment,
    }


@router.get("/detailed")
async def detailed_health_check(
    db: Session = Depends(get_readonly_db),
) -> Dict[str, Any]:
    """Detailed health check including database connectivity and migration state."""
    status = "healthy"
    checks: Dict[str, Any] = {}

    # Database check
    try:
        db.execute(text("SELECT 1"))
        checks["database"] = {"status": "healthy", "connected": True}
    except SQLAlchemyError as e:
        LOGGER.error(f"Database health check failed: {e}")
        status = "unhealthy"
        checks["database"] = {"status": "unhealthy", "connected": False, "error": str(e)}

    # Migration check
    if checks["database"]["connected"]:
        try:
            complete = all_migrations_applied(db.connection())
            checks["migrations"] = {"status": "healthy" if complete else "pending", "complete": complete}
            if not complete:
                status = "degraded"
        except SQLAlchemyError as e:
            LOGGER.error(f"Migration health check failed: {e}")
            status = "unhealthy"
            checks["migrations"] = {"status": "unhealthy", "error": str(e)}

    return {
        "status": status,
        "timestamp": utcnow().isoformat(),
        "checks": checks,
    }
