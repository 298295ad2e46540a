"""Exclusion constraint against overlapping field reservations

Revision ID: b002_reservation_overlap
Revises: b001_initial_schema
Create Date: 2026-10-19

Two ACTIVE reservations of the same field may not intersect. The
application re-checks overlap under a row lock before inserting; this
constraint holds even when that path is bypassed.

tstzrange('[)') matches the application's half-open intervals: a booking
ending at 10:00 and one starting at 10:00 do not collide.
"""

from alembic import op

# revision identifiers, used by Alembic.
revision = 'b002_reservation_overlap'
down_revision = 'b001_initial_schema'
branch_labels = None
depends_on = None


def upgrade() -> None:
    # btree_gist provides the "=" operator class for field_id inside GiST.
    op.execute("CREATE EXTENSION IF NOT EXISTS btree_gist")
    op.execute(
        """
        ALTER TABLE field_reservations
        ADD CONSTRAINT no_field_reservation_overlap
        EXCLUDE USING gist (
            field_id WITH =,
            tstzrange(start_date, end_date, '[)') WITH &&
        )
        WHERE (status = 'ACTIVE')
        """
    )


def downgrade() -> None:
    op.execute(
        "ALTER TABLE field_reservations DROP CONSTRAINT IF EXISTS no_field_reservation_overlap"
    )
