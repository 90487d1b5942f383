"""guest_groups

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-19

Adds guest groups and their membership table.
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0002"
down_revision: Union[str, None] = "0001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- guest_groups ---
    op.create_table(
        "guest_groups",
        sa.Column("group_id", sa.String(36), primary_key=True),
        sa.Column("event_id", sa.String(36), sa.ForeignKey("events.event_id"), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_guest_groups_event_id", "guest_groups", ["event_id"])
    op.create_index("ix_guest_groups_name", "guest_groups", ["name"])

    # --- guest_group_members ---
    op.create_table(
        "guest_group_members",
        sa.Column("group_id", sa.String(36), sa.ForeignKey("guest_groups.group_id"), primary_key=True),
        sa.Column("guest_id", sa.String(36), sa.ForeignKey("guests.guest_id"), primary_key=True),
        sa.Column("added_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("guest_group_members")
    op.drop_index("ix_guest_groups_name", table_name="guest_groups")
    op.drop_index("ix_guest_groups_event_id", table_name="guest_groups")
    op.drop_table("guest_groups")
