"""In-Memory Shopping List Store — ShoppingListRepository over a process-local dict.

Invariants:
    - Records are frozen; update() stores a replaced copy, never mutates in place
    - Insertion order is listing order
    - State is lost on restart

Design Decisions:
    - Module-level memory_repository initialized in lifespan (mirrors db_manager):
      single-process uvicorn, no multi-worker
    - Optional seeding with the example lists served by the mock API
"""

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping
from uuid import UUID, uuid4

from shoplist.core.domain_types import (
    Item,
    ListState,
    Member,
    MemberRole,
    ShoppingListDraft,
    ShoppingListId,
    ShoppingListRecord,
)
from shoplist.core.shopping_list_ops import check_changes

logger = logging.getLogger(__name__)


class InMemoryShoppingListRepository:
    """Shopping lists kept in a dict keyed by id."""

    def __init__(self, records: Iterable[ShoppingListRecord] = ()):
        self._records: dict[ShoppingListId, ShoppingListRecord] = {
            r.id: r for r in records
        }

    def __len__(self) -> int:
        return len(self._records)

    async def create(self, draft: ShoppingListDraft) -> ShoppingListRecord:
        now = datetime.now(timezone.utc)
        record = ShoppingListRecord(
            id=ShoppingListId(uuid4()),
            awid=draft.awid,
            name=draft.name,
            state=draft.state,
            owner_uu_identity=draft.owner_uu_identity,
            members=tuple(draft.members),
            items=tuple(draft.items),
            created_at=now,
            updated_at=now,
        )
        self._records[record.id] = record
        return record

    async def get(self, list_id: ShoppingListId) -> ShoppingListRecord | None:
        return self._records.get(list_id)

    async def list_page(
        self, offset: int, limit: int,
    ) -> tuple[list[ShoppingListRecord], int]:
        records = list(self._records.values())
        return records[offset:offset + limit], len(records)

    async def update(
        self, list_id: ShoppingListId, changes: Mapping[str, Any],
    ) -> ShoppingListRecord | None:
        check_changes(dict(changes))
        record = self._records.get(list_id)
        if record is None:
            return None
        fields = dict(changes)
        if "state" in fields:
            fields["state"] = ListState(fields["state"])
        for key in ("members", "items"):
            if key in fields:
                fields[key] = tuple(fields[key])
        updated = replace(
            record, **fields, updated_at=datetime.now(timezone.utc),
        )
        self._records[list_id] = updated
        return updated

    async def delete(self, list_id: ShoppingListId) -> ShoppingListRecord | None:
        return self._records.pop(list_id, None)


def example_records(awid: str) -> list[ShoppingListRecord]:
    """The two lists served by the mock API."""
    return [
        ShoppingListRecord(
            id=ShoppingListId(UUID("6a1f0c1e-3b59-4d1e-9a57-0f6f3c2b9a01")),
            awid=awid,
            name="Saturday Groceries",
            state=ListState.ACTIVE,
            owner_uu_identity="uu5:1234-5678",
            members=(
                Member("uu5:1234-5678", MemberRole.OWNER),
                Member("uu5:8765-4321", MemberRole.MEMBER),
            ),
            items=(
                Item("i1", "Milk", 2, "pcs", False),
                Item("i2", "Bread", 1, "pcs", True),
                Item("i3", "Eggs", 10, "pcs", False),
                Item("i4", "Apples", 1, "kg", False),
                Item("i5", "Coffee", 1, "pcs", False),
            ),
        ),
        ShoppingListRecord(
            id=ShoppingListId(UUID("6a1f0c1e-3b59-4d1e-9a57-0f6f3c2b9a02")),
            awid=awid,
            name="Hiking Trip",
            state=ListState.ACTIVE,
            owner_uu_identity="uu5:4444-1111",
            members=(Member("uu5:4444-1111", MemberRole.OWNER),),
            items=(
                Item("i1", "Water", 3, "l", False),
                Item("i2", "Trail mix", 2, "pcs", False),
                Item("i3", "Sunscreen", 1, "pcs", False),
            ),
        ),
    ]


# Singleton (initialized on startup when store_backend == "memory")
memory_repository: InMemoryShoppingListRepository | None = None


def init_memory_store(
    awid: str, seed_examples: bool = False,
) -> InMemoryShoppingListRepository:
    global memory_repository
    records = example_records(awid) if seed_examples else []
    memory_repository = InMemoryShoppingListRepository(records)
    logger.info(f"In-memory store initialized with {len(records)} lists")
    return memory_repository


def close_memory_store() -> None:
    global memory_repository
    memory_repository = None
