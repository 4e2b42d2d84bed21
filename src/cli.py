#!/usr/bin/env python3
"""Command Line Interface for the FlightBook API.

Usage:
    flightbook serve                      # Start API server
    flightbook migrate                    # Apply pending migrations
    flightbook check-migrations           # Exit 1 if migrations are pending
    flightbook seed                       # Insert missing reference data
    flightbook issue-token --user-id ID   # Print a bearer token
    flightbook info                       # Show configuration
"""
from __future__ import annotations

from typing import Optional

import typer
import uvicorn

from core.config import get_settings
from core.db import engine
from core.exceptions import FlightBookError
from core.logging_config import configure_logging, get_logger

LOGGER = get_logger(__name__)

app = typer.Typer(help="FlightBook API CLI")


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
) -> None:
    """FlightBook - personal pilot logbook service."""
    configure_logging(get_settings(), level="DEBUG" if verbose else None)


# =============================================================================
# Server Commands
# =============================================================================


@app.command("serve")
def run_server(
    host: str = typer.Option("0.0.0.0", help="Host to bind to"),
    port: int = typer.Option(8000, help="Port to bind to"),
    reload: bool = typer.Option(False, help="Enable auto-reload for development"),
) -> None:
    """Start the API server (migrates and seeds on startup)."""
    typer.echo(f"Starting API server on {host}:{port}...")
    uvicorn.run("api.app:app", host=host, port=port, reload=reload)


# =============================================================================
# Database Commands
# =============================================================================


@app.command("bootstrap")
def bootstrap() -> None:
    """Run application bootstrap (validate, migrate, seed)."""
    from core.bootstrap import bootstrap_application

    typer.echo("Running application bootstrap...")
    try:
        result = bootstrap_application()
    except FlightBookError as e:
        typer.secho(f"✗ Bootstrap failed: {e}", fg="red")
        raise typer.Exit(1)
    typer.secho("✓ Bootstrap completed successfully", fg="green")
    for warning in result.warnings:
        typer.secho(f"  ! {warning}", fg="yellow")


@app.command("migrate")
def migrate(
    revision: str = typer.Option("head", help="Target revision"),
) -> None:
    """Apply database migrations."""
    from core.migrations import run_migrations

    try:
        run_migrations(engine, revision)
    except FlightBookError as e:
        typer.secho(f"✗ {e}", fg="red")
        raise typer.Exit(1)
    typer.secho(f"✓ Database upgraded to {revision}", fg="green")


@app.command("check-migrations")
def check_migrations() -> None:
    """Report whether every known migration has been applied."""
    from core.migrations import applied_revisions, get_script_directory, known_revisions

    script = get_script_directory()
    with engine.connect() as connection:
        missing = known_revisions(script) - applied_revisions(connection, script)

    if missing:
        typer.secho("✗ Pending migrations:", fg="red")
        for revision in sorted(missing):
            typer.echo(f"  {revision}")
        raise typer.Exit(1)
    typer.secho("✓ All migrations applied", fg="green")


@app.command("seed")
def seed() -> None:
    """Insert missing reference data into the lookup tables."""
    from core.bootstrap import ensure_reference_data

    try:
        inserted = ensure_reference_data(engine)
    except FlightBookError as e:
        typer.secho(f"✗ {e}", fg="red")
        raise typer.Exit(1)

    typer.secho(f"✓ Inserted {sum(inserted.values())} reference rows", fg="green")
    for table, count in inserted.items():
        if count:
            typer.echo(f"  {table}: {count}")


# =============================================================================
# Utility Commands
# =============================================================================


@app.command("issue-token")
def issue_token(
    user_id: str = typer.Option(..., "--user-id", help="Subject of the token"),
    expires_minutes: Optional[int] = typer.Option(None, help="Token lifetime in minutes"),
) -> None:
    """Print a signed bearer token for a user (development and scripting)."""
    from core.auth import create_access_token

    try:
        token = create_access_token(user_id, expires_minutes=expires_minutes)
    except FlightBookError as e:
        typer.secho(f"✗ {e}", fg="red")
        raise typer.Exit(1)
    typer.echo(token)


@app.command("info")
def show_info() -> None:
    """Show application configuration info."""
    settings = get_settings()
    typer.echo("FlightBook API Configuration:")
    typer.echo(f"  Environment: {settings.environment}")
    typer.echo(f"  Database: {'sqlite' if settings.is_sqlite() else settings.database_url.split(':', 1)[0]}")
    typer.echo(f"  Log Level: {settings.log_level}")
    typer.echo(f"  Require HTTPS: {settings.require_https}")
    typer.echo(f"  Auto Migrate: {settings.auto_migrate}")
    typer.echo(f"  Allowed Origins: {', '.join(settings.get_allowed_origins())}")
    typer.echo(f"  Token Issuer: {settings.jwt_issuer}")
    typer.echo(f"  Token Audience: {settings.jwt_audience}")
    typer.echo(f"  Signing Key Configured: {bool(settings.jwt_secret_key)}")


if __name__ == "__main__":
    app()
