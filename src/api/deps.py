"""Database session and domain service dependencies for FastAPI routes."""
from __future__ import annotations

from typing import Generator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from api.auth_deps import CurrentUser, get_current_user
from domain.currency import CurrencyService
from domain.logbook import LogbookService


def _open_session(request: Request) -> Session:
    return request.app.state.session_factory()


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides a database session.

    Commits when the request succeeds, rolls back otherwise. The session is
    bound to the engine built from the application's settings.

    Yields:
        SQLAlchemy Session instance.
    """
    db = _open_session(request)
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def get_readonly_db(request: Request) -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides a read-only database session.

    Yields:
        SQLAlchemy Session instance (never committed).
    """
    db = _open_session(request)
    try:
        yield db
    finally:
        db.rollback()
        db.close()


def get_logbook_service(
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> LogbookService:
    return LogbookService(session=db, user_id=user.user_id)


def get_readonly_logbook_service(
    db: Session = Depends(get_readonly_db),
    user: CurrentUser = Depends(get_current_user),
) -> LogbookService:
    return LogbookService(session=db, user_id=user.user_id)


def get_currency_service(
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> CurrencyService:
    return CurrencyService(session=db, user_id=user.user_id)


__all__ = [
    "get_db",
    "get_readonly_db",
    "get_logbook_service",
    "get_readonly_logbook_service",
    "get_currency_service",
]
