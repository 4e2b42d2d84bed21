"""Tests for reference-data seeding."""
from __future__ import annotations

from sqlalchemy import func, select

from core.models import CalculationType, CurrencyType, GearType
from core.seed import SEED_DATA, ensure_seed_data


def test_seed_inserts_every_row(db_session):
    inserted = ensure_seed_data(db_session)

    for model, rows in SEED_DATA.items():
        assert inserted[model.__tablename__] == len(rows)
        assert db_session.scalar(select(func.count()).select_from(model)) == len(rows)


def test_seed_is_idempotent(db_session):
    ensure_seed_data(db_session)
    second = ensure_seed_data(db_session)

    assert sum(second.values()) == 0


def test_seed_only_adds_missing_rows(db_session):
    db_session.add(GearType(label="Fixed Tricycle", abbreviation="FT", sort_order=1))
    db_session.flush()

    inserted = ensure_seed_data(db_session)

    assert inserted["gear_types"] == len(SEED_DATA[GearType]) - 1
    labels = db_session.scalars(select(GearType.label).where(GearType.label == "Fixed Tricycle"))
    assert len(list(labels)) == 1


def test_currency_types_cover_every_calculation(db_session):
    ensure_seed_data(db_session)

    calculations = set(db_session.scalars(select(CurrencyType.calculation_type)))
    assert calculations == {member.value for member in CalculationType}

    tailwheel = db_session.scalars(
        select(CurrencyType).where(CurrencyType.requires_tailwheel.is_(True))
    ).all()
    assert [row.label for row in tailwheel] == ["ASEL Passenger Carrying (Tailwheel)"]
