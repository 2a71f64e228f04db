"""Create shopping_lists — one row per list, members and items as JSON.

Revision ID: 001_shopping_lists
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_shopping_lists"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "shopping_lists",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("awid", sa.String(100), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("state", sa.String(20), nullable=False, server_default="active"),
        sa.Column("owner_uu_identity", sa.Text, nullable=False),
        sa.Column("members", sa.JSON, nullable=False),
        sa.Column("items", sa.JSON, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("state IN ('active', 'archived')", name="ck_shopping_lists_state"),
    )
    op.create_index(
        "ix_shopping_lists_owner_uu_identity", "shopping_lists", ["owner_uu_identity"],
    )


def downgrade() -> None:
    op.drop_index("ix_shopping_lists_owner_uu_identity", table_name="shopping_lists")
    op.drop_table("shopping_lists")
