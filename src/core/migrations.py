"""Alembic integration: running migrations and checking they are all applied.

Alembic records only the current head revision(s) in ``alembic_version``; the
applied history is that head plus every ancestor it was upgraded through.
"""
from __future__ import annotations

from typing import Iterable, Optional, Set

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy.engine import Connection, Engine

from .config import PROJECT_ROOT
from .exceptions import MigrationError
from .logging_config import get_logger

LOGGER = get_logger(__name__)

ALEMBIC_INI = PROJECT_ROOT / "alembic.ini"
SCRIPT_LOCATION = PROJECT_ROOT / "alembic"


def get_alembic_config(connection: Optional[Connection] = None) -> Config:
    """
    Build an Alembic config pointing at the project's migration scripts.

    When a connection is supplied, ``alembic/env.py`` runs the migrations on it
    instead of opening its own.
    """
    config = Config(str(ALEMBIC_INI)) if ALEMBIC_INI.exists() else Config()
    config.set_main_option("script_location", str(SCRIPT_LOCATION))
    if connection is not None:
        config.attributes["connection"] = connection
    return config


def get_script_directory() -> ScriptDirectory:
    return ScriptDirectory.from_config(get_alembic_config())


def migrations_complete(known: Iterable[str], applied: Iterable[str]) -> bool:
    """True iff every known migration identifier has been applied."""
    return not set(known) - set(applied)


def known_revisions(script: ScriptDirectory) -> Set[str]:
    """Every revision shipped with the application."""
    return {revision.revision for revision in script.walk_revisions()}


def applied_revisions(connection: Connection, script: ScriptDirectory) -> Set[str]:
    """
    Revisions recorded as applied in the database.

    Heads that this build does not know about are included as-is; their
    ancestry cannot be walked.
    """
    heads = MigrationContext.configure(connection).get_current_heads()
    known = known_revisions(script)

    applied: Set[str] = set()
    pending = list(heads)
    while pending:
        revision_id = pending.pop()
        if revision_id in applied:
            continue
        applied.add(revision_id)
        if revision_id not in known:
            LOGGER.warning("Database revision %s is unknown to this build", revision_id)
            continue
        down = script.get_revision(revision_id).down_revision
        if down is None:
            continue
        pending.extend((down,) if isinstance(down, str) else down)
    return applied


def all_migrations_applied(connection: Connection, script: Optional[ScriptDirectory] = None) -> bool:
    """Read-only check that the database has every known migration applied."""
    script = script or get_script_directory()
    known = known_revisions(script)
    applied = applied_revisions(connection, script)
    missing = known - applied
    if missing:
        LOGGER.info("Pending migrations: %s", ", ".join(sorted(missing)))
    return migrations_complete(known, applied)


def run_migrations(engine: Engine, revision: str = "head") -> None:
    """
    Upgrade the database to ``revision``.

    Raises:
        MigrationError: If Alembic fails to apply a migration.
    """
    LOGGER.info("Running database migrations (target=%s)...", revision)
    try:
        with engine.begin() as connection:
            command.upgrade(get_alembic_config(connection), revision)
    except Exception as exc:
        LOGGER.error("Database migration failed: %s", exc)
        raise MigrationError(f"Database migration failed: {exc}") from exc
    LOGGER.info("Database migrations complete.")
