"""FastAPI application entry point with global error handling."""
from __future__ import annotations

import os
import sys

# Add src/ to Python path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import sessionmaker

from api.auth_deps import get_current_user
from api.middleware import RequireHttpsMiddleware
from api.routes import (
    aircraft,
    certificates,
    currencies,
    endorsements,
    flights,
    health,
    logbooks,
    lookups,
)
from core.bootstrap import bootstrap_application, migration_status
from core.config import Settings, get_settings
from core.db import engine_for_url
from core.exceptions import (
    ConfigurationError,
    CurrencyError,
    DuplicateRecordError,
    FlightBookError,
    RecordNotFoundError,
)
from core.logging_config import configure_logging, get_logger

LOGGER = get_logger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan handler.

    Sets up logging, then migrates and seeds the database before the first
    request. Any bootstrap failure propagates and aborts startup.
    """
    settings: Settings = app.state.settings
    db_engine = app.state.engine

    configure_logging(settings)

    LOGGER.info(
        "API application starting",
        extra={"extra_data": {
            "environment": settings.environment,
            "require_https": settings.require_https,
            "auto_migrate": settings.auto_migrate,
        }}
    )

    if settings.auto_migrate:
        bootstrap_application(db_engine=db_engine, settings=settings)
    elif not migration_status(db_engine):
        LOGGER.warning("Database has pending migrations and AUTO_MIGRATE is disabled")

    yield
    LOGGER.info("API application shutting down")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance with:
        - HTTPS enforcement and CORS middleware
        - Global exception handlers
        - Public health routes and bearer-protected API routes
    """
    settings = settings or get_settings()

    application = FastAPI(
        title="FlightBook API",
        description="Personal pilot logbook API",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    application.state.settings = settings
    application.state.engine = engine_for_url(settings.database_url)
    application.state.session_factory = sessionmaker(
        autocommit=False, autoflush=False, bind=application.state.engine
    )

    # -------------------------------------------------------------------------
    # Middleware (the last one added runs first)
    # -------------------------------------------------------------------------
    origins = settings.get_allowed_origins()
    application.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Credentials cannot be combined with a wildcard origin
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    if settings.require_https:
        application.add_middleware(
            RequireHttpsMiddleware,
            trust_forwarded_proto=settings.trust_forwarded_proto,
        )

    # -------------------------------------------------------------------------
    # Global Exception Handlers
    # -------------------------------------------------------------------------

    @application.exception_handler(RecordNotFoundError)
    async def not_found_handler(request: Request, exc: RecordNotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content={"error": "not_found", "message": str(exc)},
        )

    @application.exception_handler(DuplicateRecordError)
    async def duplicate_handler(request: Request, exc: DuplicateRecordError) -> JSONResponse:
        LOGGER.info(f"Duplicate record: {exc}", extra={"extra_data": {"path": request.url.path}})
        return JSONResponse(
            status_code=409,
            content={"error": "duplicate_record", "message": str(exc)},
        )

    @application.exception_handler(CurrencyError)
    async def currency_handler(request: Request, exc: CurrencyError) -> JSONResponse:
        LOGGER.warning(f"Currency error: {exc}", extra={"extra_data": {"path": request.url.path}})
        return JSONResponse(
            status_code=422,
            content={"error": "currency_error", "message": str(exc)},
        )

    @application.exception_handler(ConfigurationError)
    async def configuration_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
        """Handle configuration errors."""
        LOGGER.error(f"Configuration error: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "error": "configuration_error",
                "message": "Service misconfiguration",
            },
        )

    @application.exception_handler(FlightBookError)
    async def app_error_handler(request: Request, exc: FlightBookError) -> JSONResponse:
        """Handle all other application errors."""
        LOGGER.error(f"Application error: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "application_error", "message": str(exc)},
        )

    # -------------------------------------------------------------------------
    # Include Routers
    # -------------------------------------------------------------------------
    application.include_router(health.router, prefix="/health", tags=["Health"])

    protected = [Depends(get_current_user)]
    logbook_prefix = f"{API_PREFIX}/logbooks"
    application.include_router(
        logbooks.router, prefix=logbook_prefix, tags=["Logbooks"], dependencies=protected
    )
    application.include_router(
        aircraft.router,
        prefix=f"{logbook_prefix}/{{logbook_id}}/aircraft",
        tags=["Aircraft"],
        dependencies=protected,
    )
    application.include_router(
        flights.router,
        prefix=f"{logbook_prefix}/{{logbook_id}}/flights",
        tags=["Flights"],
        dependencies=protected,
    )
    application.include_router(
        certificates.router,
        prefix=f"{logbook_prefix}/{{logbook_id}}/certificates",
        tags=["Certificates"],
        dependencies=protected,
    )
    application.include_router(
        endorsements.router,
        prefix=f"{logbook_prefix}/{{logbook_id}}/endorsements",
        tags=["Endorsements"],
        dependencies=protected,
    )
    application.include_router(
        currencies.router,
        prefix=f"{logbook_prefix}/{{logbook_id}}/currencies",
        tags=["Currencies"],
        dependencies=protected,
    )
    application.include_router(
        lookups.router, prefix=f"{API_PREFIX}/lookups", tags=["Lookups"], dependencies=protected
    )

    return application


# Create the application instance
app = create_app()

LOGGER.info("API application initialized")
