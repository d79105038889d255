"""create_couple_profiles_and_guests

Revision ID: 3f9c2a7d1b04
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9c2a7d1b04'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "couple_profiles",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("groom_name", sa.String(255), nullable=False),
        sa.Column("bride_name", sa.String(255), nullable=False),
        sa.Column("wedding_date", sa.Date(), nullable=False),
        sa.Column("wedding_time", sa.String(5), nullable=False),
        sa.Column("wedding_location", sa.String(255), nullable=False),
        sa.Column("wedding_theme", sa.String(255), nullable=False),
        sa.Column("background_story", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "guests",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("couple_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("relationship", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("preferences", sa.Text(), nullable=True),
        sa.Column("how_met", sa.Text(), nullable=True),
        sa.Column("memories", sa.Text(), nullable=True),
        sa.Column("invitation_content", sa.Text(), nullable=True),
        sa.Column("status", sa.String(20), server_default="pending", nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["couple_id"], ["couple_profiles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_guests_couple_id", "guests", ["couple_id"])
    op.create_index("ix_guests_email", "guests", ["email"])


def downgrade() -> None:
    op.drop_index("ix_guests_email", table_name="guests")
    op.drop_index("ix_guests_couple_id", table_name="guests")
    op.drop_table("guests")
    op.drop_table("couple_profiles")
