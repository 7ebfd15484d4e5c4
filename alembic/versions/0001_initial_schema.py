"""initial schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-18 12:00:00.000000

This migration creates:
1. users with the user_role enum
2. schools with the adoption flag / adopter consistency check
3. adoptions, unique per (user_id, school_id)
4. adoption_journal_entries owned by adoptions
5. journal_entries for standalone journal notes
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001_initial_schema"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _base_columns() -> list[sa.Column]:
    """Primary key and timestamps (from BaseModel)."""
    return [
        sa.Column("id", sa.Uuid(as_uuid=False), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Create all tables."""
    user_role_enum = sa.Enum("admin", "adopter", name="user_role")

    op.create_table(
        "users",
        *_base_columns(),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("role", user_role_enum, nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "schools",
        *_base_columns(),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("lat", sa.Float(), nullable=False),
        sa.Column("lng", sa.Float(), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("description", sa.String(length=2000), nullable=True),
        sa.Column("adopted", sa.Boolean(), nullable=False),
        sa.Column("adopter_id", sa.Uuid(as_uuid=False), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
        sa.ForeignKeyConstraint(["adopter_id"], ["users.id"], ondelete="RESTRICT"),
        sa.CheckConstraint(
            "(adopted AND adopter_id IS NOT NULL) OR (NOT adopted AND adopter_id IS NULL)",
            name="ck_schools_adopted_has_adopter",
        ),
        sa.CheckConstraint("lat >= -90 AND lat <= 90", name="ck_schools_lat_range"),
        sa.CheckConstraint("lng >= -180 AND lng <= 180", name="ck_schools_lng_range"),
    )
    op.create_index("ix_schools_adopted", "schools", ["adopted"])
    op.create_index("ix_schools_lat_lng", "schools", ["lat", "lng"])

    op.create_table(
        "adoptions",
        *_base_columns(),
        sa.Column("user_id", sa.Uuid(as_uuid=False), nullable=False),
        sa.Column("school_id", sa.Uuid(as_uuid=False), nullable=False),
        sa.Column("date_adopted", sa.DateTime(timezone=True), nullable=False),
        sa.Column("prayer_count", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["school_id"], ["schools.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("user_id", "school_id", name="uq_adoptions_user_school"),
        sa.CheckConstraint("prayer_count >= 0", name="ck_adoptions_prayer_count_non_negative"),
    )
    op.create_index("ix_adoptions_user_id", "adoptions", ["user_id"])
    op.create_index("ix_adoptions_school_id", "adoptions", ["school_id"])

    op.create_table(
        "adoption_journal_entries",
        *_base_columns(),
        sa.Column("adoption_id", sa.Uuid(as_uuid=False), nullable=False),
        sa.Column("text", sa.String(length=5000), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["adoption_id"], ["adoptions.id"], ondelete="CASCADE"),
    )
    op.create_index(
        "ix_adoption_journal_entries_adoption_id",
        "adoption_journal_entries",
        ["adoption_id"],
    )

    op.create_table(
        "journal_entries",
        *_base_columns(),
        sa.Column("user_id", sa.Uuid(as_uuid=False), nullable=False),
        sa.Column("entry_text", sa.Text(), nullable=False),
        sa.Column("school_id", sa.Uuid(as_uuid=False), nullable=True),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["school_id"], ["schools.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_journal_entries_user_date", "journal_entries", ["user_id", "date"])
    op.create_index("ix_journal_entries_school_id", "journal_entries", ["school_id"])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_index("ix_journal_entries_school_id", table_name="journal_entries")
    op.drop_index("ix_journal_entries_user_date", table_name="journal_entries")
    op.drop_table("journal_entries")

    op.drop_index(
        "ix_adoption_journal_entries_adoption_id",
        table_name="adoption_journal_entries",
    )
    op.drop_table("adoption_journal_entries")

    op.drop_index("ix_adoptions_school_id", table_name="adoptions")
    op.drop_index("ix_adoptions_user_id", table_name="adoptions")
    op.drop_table("adoptions")

    op.drop_index("ix_schools_lat_lng", table_name="schools")
    op.drop_index("ix_schools_adopted", table_name="schools")
    op.drop_table("schools")

    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")

    sa.Enum(name="user_role").drop(op.get_bind(), checkfirst=True)
