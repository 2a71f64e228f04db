"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - The record store is accessed only through ShoppingListRepository
    - Lookups by id return None on a miss (never raise for "not found")

Design Decisions:
    - Protocol over ABC: structural subtyping, the in-memory and SQL stores share no base
    - Async in Protocol: implementations do IO, the pure executors in core never await
"""

from typing import Any, Mapping, Protocol

from shoplist.core.domain_types import (
    ShoppingListDraft,
    ShoppingListId,
    ShoppingListRecord,
)


class ShoppingListRepository(Protocol):
    """Contract for shopping list persistence — implemented by shell."""
    async def create(self, draft: ShoppingListDraft) -> ShoppingListRecord: ...
    async def get(self, list_id: ShoppingListId) -> ShoppingListRecord | None: ...
    async def list_page(
        self, offset: int, limit: int,
    ) -> tuple[list[ShoppingListRecord], int]: ...
    async def update(
        self, list_id: ShoppingListId, changes: Mapping[str, Any],
    ) -> ShoppingListRecord | None: ...
    async def delete(self, list_id: ShoppingListId) -> ShoppingListRecord | None: ...
