"""Index flights by logbook and date for currency look-back queries.

Revision ID: 20160815093000
Revises: 20160702014946
Create Date: 2016-08-15 09:30:00
"""
from alembic import op

revision = "20160815093000"
down_revision = "20160702014946"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_index(
        "ix_flights_logbook_id_flight_date", "flights", ["logbook_id", "flight_date"]
    )


def downgrade() -> None:
    op.drop_index("ix_flights_logbook_id_flight_date", table_name="flights")
