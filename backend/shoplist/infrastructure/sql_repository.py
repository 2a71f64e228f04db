"""SQL Shopping List Store — ShoppingListRepository over the async SQLAlchemy session.

Invariants:
    - Every mutating call commits before returning the converted record
    - Lookups by id return None on a miss
    - members/items JSON columns are reassigned whole (change tracking sees new lists)

Design Decisions:
    - One repository per request session (built by the get_repository dependency),
      rollback and error mapping stay in DatabaseSessionManager
"""

from typing import Any, Mapping

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from shoplist.core.domain_types import (
    Item,
    ListState,
    Member,
    ShoppingListDraft,
    ShoppingListId,
    ShoppingListRecord,
)
from shoplist.core.shopping_list_ops import check_changes
from shoplist.models.shopping_list import ShoppingList as ShoppingListModel


def to_record(row: ShoppingListModel) -> ShoppingListRecord:
    return ShoppingListRecord(
        id=ShoppingListId(row.id),
        awid=row.awid,
        name=row.name,
        state=ListState(row.state),
        owner_uu_identity=row.owner_uu_identity,
        members=tuple(Member.from_dict(m) for m in row.members or []),
        items=tuple(Item.from_dict(i) for i in row.items or []),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _to_column(field: str, value: Any) -> Any:
    if field == "state":
        return ListState(value).value
    if field == "members":
        return [m.to_dict() for m in value]
    if field == "items":
        return [i.to_dict() for i in value]
    return value


class SqlShoppingListRepository:
    """Shopping lists persisted in the shopping_lists table."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def _find(self, list_id: ShoppingListId) -> ShoppingListModel | None:
        result = await self._db.execute(
            select(ShoppingListModel).where(ShoppingListModel.id == list_id),
        )
        return result.scalar_one_or_none()

    async def create(self, draft: ShoppingListDraft) -> ShoppingListRecord:
        row = ShoppingListModel(
            awid=draft.awid,
            name=draft.name,
            state=draft.state.value,
            owner_uu_identity=draft.owner_uu_identity,
            members=_to_column("members", draft.members),
            items=_to_column("items", draft.items),
        )
        self._db.add(row)
        await self._db.commit()
        await self._db.refresh(row)
        return to_record(row)

    async def get(self, list_id: ShoppingListId) -> ShoppingListRecord | None:
        row = await self._find(list_id)
        return to_record(row) if row else None

    async def list_page(
        self, offset: int, limit: int,
    ) -> tuple[list[ShoppingListRecord], int]:
        query = (
            select(ShoppingListModel)
            .order_by(ShoppingListModel.created_at, ShoppingListModel.id)
            .limit(limit)
            .offset(offset)
        )
        rows = (await self._db.execute(query)).scalars().all()
        total = (await self._db.execute(
            select(func.count()).select_from(ShoppingListModel),
        )).scalar_one()
        return [to_record(r) for r in rows], total

    async def update(
        self, list_id: ShoppingListId, changes: Mapping[str, Any],
    ) -> ShoppingListRecord | None:
        check_changes(dict(changes))
        row = await self._find(list_id)
        if not row:
            return None
        for field, value in changes.items():
            setattr(row, field, _to_column(field, value))
        await self._db.commit()
        await self._db.refresh(row)
        return to_record(row)

    async def delete(self, list_id: ShoppingListId) -> ShoppingListRecord | None:
        row = await self._find(list_id)
        if not row:
            return None
        record = to_record(row)
        await self._db.delete(row)
        await self._db.commit()
        return record
