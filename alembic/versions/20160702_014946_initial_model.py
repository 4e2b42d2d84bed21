"""Initial logbook schema.

Revision ID: 20160702014946
Revises:
Create Date: 2016-07-02 01:49:46
"""
from alembic import op
import sqlalchemy as sa

revision = "20160702014946"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def _lookup(name: str, pk: str, *columns: sa.Column) -> None:
    op.create_table(
        name,
        sa.Column(pk, sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("label", sa.String(), nullable=False),
        *columns,
        sa.Column("sort_order", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint(pk),
    )


def upgrade() -> None:
    # =========================================================================
    # Lookup tables
    # =========================================================================
    _lookup("approach_types", "approach_type_id")
    _lookup("certificate_types", "certificate_type_id")
    _lookup("engine_types", "engine_type_id")
    _lookup("rating_types", "rating_type_id")
    _lookup("gear_types", "gear_type_id", sa.Column("abbreviation", sa.String(), nullable=True))
    _lookup(
        "endorsement_types",
        "endorsement_type_id",
        sa.Column("category", sa.String(), nullable=False),
        sa.Column("template", sa.Text(), nullable=False),
    )
    _lookup(
        "currency_types",
        "currency_type_id",
        sa.Column("category", sa.String(), nullable=False),
        sa.Column("abbreviation", sa.String(), nullable=True),
        sa.Column("aircraft_category", sa.String(), nullable=True),
        sa.Column("aircraft_class", sa.String(), nullable=True),
        sa.Column("calculation_type", sa.Integer(), nullable=False),
        sa.Column("requires_tailwheel", sa.Boolean(), nullable=False),
    )
    op.create_table(
        "categories_and_classes",
        sa.Column("category_and_class_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("category", sa.String(), nullable=False),
        sa.Column("class_name", sa.String(), nullable=False),
        sa.Column("label", sa.String(), nullable=False),
        sa.Column("abbreviation", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("category_and_class_id"),
    )

    # =========================================================================
    # Table: logbooks
    # =========================================================================
    op.create_table(
        "logbooks",
        sa.Column("logbook_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(36), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("remarks", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("logbook_id"),
    )
    op.create_index("ix_logbooks_user_id", "logbooks", ["user_id"])

    # =========================================================================
    # Table: pilots (one per logbook)
    # =========================================================================
    op.create_table(
        "pilots",
        sa.Column("pilot_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("logbook_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(36), nullable=True),
        sa.Column("first_name", sa.String(), nullable=True),
        sa.Column("last_name", sa.String(), nullable=True),
        sa.Column("address_line1", sa.String(), nullable=True),
        sa.Column("address_line2", sa.String(), nullable=True),
        sa.Column("city", sa.String(), nullable=True),
        sa.Column("state_or_province", sa.String(), nullable=True),
        sa.Column("postal_code", sa.String(), nullable=True),
        sa.Column("country", sa.String(), nullable=True),
        sa.Column("email_address", sa.String(), nullable=True),
        sa.Column("home_phone_number", sa.String(), nullable=True),
        sa.Column("cell_phone_number", sa.String(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["logbook_id"], ["logbooks.logbook_id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("pilot_id"),
    )
    op.create_index("ix_pilots_logbook_id", "pilots", ["logbook_id"], unique=True)

    # =========================================================================
    # Table: aircraft
    # =========================================================================
    op.create_table(
        "aircraft",
        sa.Column("aircraft_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("logbook_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(36), nullable=True),
        sa.Column("aircraft_identifier", sa.String(10), nullable=False),
        sa.Column("aircraft_type", sa.String(10), nullable=False),
        sa.Column("aircraft_category", sa.String(), nullable=True),
        sa.Column("aircraft_class", sa.String(), nullable=True),
        sa.Column("aircraft_make", sa.String(), nullable=True),
        sa.Column("aircraft_model", sa.String(), nullable=True),
        sa.Column("aircraft_year", sa.Integer(), nullable=False),
        sa.Column("engine_type", sa.String(), nullable=True),
        sa.Column("gear_type", sa.String(), nullable=True),
        sa.Column("is_complex", sa.Boolean(), nullable=False),
        sa.Column("is_high_performance", sa.Boolean(), nullable=False),
        sa.Column("is_pressurized", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["logbook_id"], ["logbooks.logbook_id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("aircraft_id"),
    )
    op.create_index("ix_aircraft_logbook_id", "aircraft", ["logbook_id"])

    # =========================================================================
    # Table: flights
    # =========================================================================
    flight_times = [
        sa.Column(name, sa.Numeric(18, 2), nullable=False)
        for name in (
            "flight_time_actual_instrument",
            "flight_time_cross_country",
            "flight_time_day",
            "flight_time_dual",
            "flight_time_night",
            "flight_time_pic",
            "flight_time_simulated_instrument",
            "flight_time_solo",
            "flight_time_total",
        )
    ]
    op.create_table(
        "flights",
        sa.Column("flight_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("aircraft_id", sa.Integer(), nullable=False),
        sa.Column("logbook_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(36), nullable=True),
        sa.Column("flight_date", sa.Date(), nullable=False),
        sa.Column("departure_code", sa.String(5), nullable=False),
        sa.Column("destination_code", sa.String(5), nullable=False),
        sa.Column("route", sa.String(), nullable=True),
        sa.Column("remarks", sa.Text(), nullable=True),
        *flight_times,
        sa.Column("number_of_holds", sa.Integer(), nullable=False),
        sa.Column("number_of_landings_day", sa.Integer(), nullable=False),
        sa.Column("number_of_landings_night", sa.Integer(), nullable=False),
        sa.Column("is_check_ride", sa.Boolean(), nullable=False),
        sa.Column("is_flight_review", sa.Boolean(), nullable=False),
        sa.Column("is_instrument_proficiency_check", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["aircraft_id"], ["aircraft.aircraft_id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["logbook_id"], ["logbooks.logbook_id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("flight_id"),
    )
    op.create_index("ix_flights_aircraft_id", "flights", ["aircraft_id"])
    op.create_index("ix_flights_logbook_id", "flights", ["logbook_id"])

    # =========================================================================
    # Table: approaches
    # =========================================================================
    op.create_table(
        "approaches",
        sa.Column("approach_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("flight_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(36), nullable=True),
        sa.Column("airport_code", sa.String(), nullable=False),
        sa.Column("approach_type", sa.String(), nullable=False),
        sa.Column("runway", sa.String(), nullable=False),
        sa.Column("is_circle_to_land", sa.Boolean(), nullable=False),
        sa.Column("remarks", sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["flight_id"], ["flights.flight_id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("approach_id"),
    )
    op.create_index("ix_approaches_flight_id", "approaches", ["flight_id"])

    # =========================================================================
    # Table: certificates / ratings
    # =========================================================================
    op.create_table(
        "certificates",
        sa.Column("certificate_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("logbook_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(36), nullable=True),
        sa.Column("certificate_number", sa.String(20), nullable=False),
        sa.Column("certificate_type", sa.String(50), nullable=False),
        sa.Column("certificate_date", sa.Date(), nullable=False),
        sa.Column("expiration_date", sa.Date(), nullable=True),
        sa.Column("remarks", sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["logbook_id"], ["logbooks.logbook_id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("certificate_id"),
    )
    op.create_index("ix_certificates_logbook_id", "certificates", ["logbook_id"])

    op.create_table(
        "ratings",
        sa.Column("rating_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("certificate_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(36), nullable=True),
        sa.Column("rating_type", sa.String(50), nullable=False),
        sa.Column("rating_date", sa.Date(), nullable=False),
        sa.Column("remarks", sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["certificate_id"], ["certificates.certificate_id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("rating_id"),
    )
    op.create_index("ix_ratings_certificate_id", "ratings", ["certificate_id"])

    # =========================================================================
    # Table: endorsements
    # =========================================================================
    op.create_table(
        "endorsements",
        sa.Column("endorsement_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("logbook_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(36), nullable=True),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("endorsement_date", sa.Date(), nullable=False),
        sa.Column("cfi_name", sa.String(), nullable=True),
        sa.Column("cfi_number", sa.String(), nullable=True),
        sa.Column("cfi_expiration", sa.String(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["logbook_id"], ["logbooks.logbook_id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("endorsement_id"),
    )
    op.create_index("ix_endorsements_logbook_id", "endorsements", ["logbook_id"])

    # =========================================================================
    # Table: currencies
    # =========================================================================
    op.create_table(
        "currencies",
        sa.Column("currency_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("logbook_id", sa.Integer(), nullable=False),
        sa.Column("currency_type_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(36), nullable=True),
        sa.Column("is_night_currency", sa.Boolean(), nullable=False),
        sa.Column("is_current", sa.Boolean(), nullable=False),
        sa.Column("days_remaining", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["currency_type_id"], ["currency_types.currency_type_id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["logbook_id"], ["logbooks.logbook_id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("currency_id"),
    )
    op.create_index("ix_currencies_currency_type_id", "currencies", ["currency_type_id"])
    op.create_index("ix_currencies_logbook_id", "currencies", ["logbook_id"])


def downgrade() -> None:
    for table in (
        "currencies",
        "endorsements",
        "ratings",
        "certificates",
        "approaches",
        "flights",
        "aircraft",
        "pilots",
        "logbooks",
        "categories_and_classes",
        "currency_types",
        "endorsement_types",
        "gear_types",
        "rating_types",
        "engine_types",
        "certificate_types",
        "approach_types",
    ):
        op.drop_table(table)
