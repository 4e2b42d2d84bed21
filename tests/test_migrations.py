"""Tests for the Alembic revisions and the migration-completeness check."""
from __future__ import annotations

import itertools

import pytest
from sqlalchemy import inspect

from core.db import Base
from core.exceptions import MigrationError
from core.migrations import (
    all_migrations_applied,
    applied_revisions,
    get_script_directory,
    known_revisions,
    migrations_complete,
    run_migrations,
)

INITIAL = "20160702014946"
FLIGHT_DATE_INDEX = "20160815093000"


# ---------------------------------------------------------------------------
# Pure completeness rule
# ---------------------------------------------------------------------------


class TestMigrationsComplete:
    def test_all_applied(self):
        assert migrations_complete({"a", "b"}, {"a", "b"}) is True

    def test_missing_one(self):
        assert migrations_complete({"a", "b"}, {"a"}) is False

    def test_extra_applied_is_fine(self):
        assert migrations_complete({"a"}, {"a", "z"}) is True

    def test_nothing_known(self):
        assert migrations_complete(set(), set()) is True

    def test_nothing_applied(self):
        assert migrations_complete({"a"}, set()) is False

    def test_matches_subset_relation(self):
        universe = ["a", "b", "c"]
        subsets = [
            set(combo)
            for size in range(len(universe) + 1)
            for combo in itertools.combinations(universe, size)
        ]
        for known, applied in itertools.product(subsets, subsets):
            assert migrations_complete(known, applied) == known.issubset(applied)


# ---------------------------------------------------------------------------
# Revisions against a real database
# ---------------------------------------------------------------------------


def test_known_revisions():
    assert known_revisions(get_script_directory()) == {INITIAL, FLIGHT_DATE_INDEX}


def test_fresh_database_is_incomplete(file_engine):
    with file_engine.connect() as connection:
        assert applied_revisions(connection, get_script_directory()) == set()
        assert all_migrations_applied(connection) is False


def test_upgrade_to_head_is_complete(file_engine):
    run_migrations(file_engine)

    with file_engine.connect() as connection:
        assert applied_revisions(connection, get_script_directory()) == {INITIAL, FLIGHT_DATE_INDEX}
        assert all_migrations_applied(connection) is True


def test_partial_upgrade_is_incomplete(file_engine):
    run_migrations(file_engine, INITIAL)

    with file_engine.connect() as connection:
        assert applied_revisions(connection, get_script_directory()) == {INITIAL}
        assert all_migrations_applied(connection) is False

    run_migrations(file_engine)
    with file_engine.connect() as connection:
        assert all_migrations_applied(connection) is True


def test_upgrade_is_idempotent(file_engine):
    run_migrations(file_engine)
    run_migrations(file_engine)

    with file_engine.connect() as connection:
        assert all_migrations_applied(connection) is True


def test_unknown_revision_raises(file_engine):
    with pytest.raises(MigrationError):
        run_migrations(file_engine, "does-not-exist")


def test_migrated_schema_matches_models(file_engine):
    run_migrations(file_engine)
    inspector = inspect(file_engine)

    tables = set(inspector.get_table_names()) - {"alembic_version"}
    assert tables == set(Base.metadata.tables)

    for name, table in Base.metadata.tables.items():
        columns = {column["name"] for column in inspector.get_columns(name)}
        assert columns == set(table.columns.keys()), name

        indexes = {index["name"]: bool(index["unique"]) for index in inspector.get_indexes(name)}
        expected = {index.name: bool(index.unique) for index in table.indexes}
        assert indexes == expected, name


def test_migrated_foreign_keys_cascade(file_engine):
    run_migrations(file_engine)
    inspector = inspect(file_engine)

    for name in ("pilots", "aircraft", "flights", "approaches", "certificates",
                 "ratings", "endorsements", "currencies"):
        foreign_keys = inspector.get_foreign_keys(name)
        assert foreign_keys, name
        for foreign_key in foreign_keys:
            assert foreign_key["options"].get("ondelete") == "CASCADE", name
