"""ShoppingList ORM — persists one list with its members and items as JSON documents.

Invariants:
    - id is UUID primary key (client-side default uuid4)
    - name is non-nullable and at most 255 characters (capped by validation),
      state is "active" | "archived"
    - owner_uu_identity is Text: identities come from request headers unbounded
    - members/items are JSON arrays replaced whole on every change
    - created_at/updated_at maintained by the ORM

Design Decisions:
    - JSON columns over child tables: members and items have no identity outside
      their list and are never queried on their own (document-style record)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, String, Text, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from shoplist.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ShoppingList(Base):
    """Shopping list aggregate root."""
    __tablename__ = "shopping_lists"
    __table_args__ = (
        CheckConstraint(
            "state IN ('active', 'archived')", name="ck_shopping_lists_state",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    awid: Mapped[str] = mapped_column(String(100), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    state: Mapped[str] = mapped_column(
        String(20), nullable=False, default="active",
    )
    owner_uu_identity: Mapped[str] = mapped_column(
        Text, nullable=False, index=True,
    )
    members: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    items: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )
