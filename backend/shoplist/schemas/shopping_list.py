"""Shopping List Schemas — per-command dtoIn structs and dtoOut shapes.

Invariants:
    - Every dtoIn field uses its camelCase wire name as alias (listId, uuIdentity, pageIndex)
    - CreateDtoIn.name and UpdateDtoIn.name are stripped
    - ShoppingListSummary.item_count always equals len(record.items)

Design Decisions:
    - alias_generator=to_camel over per-field aliases: one rule for the whole wire format
    - from_record classmethods keep the ORM and the in-memory store out of the API layer
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from shoplist.core.domain_types import (
    Item,
    ListState,
    Member,
    MemberRole,
    ShoppingListRecord,
)
from shoplist.core.validate_dto_in import (
    MAX_NAME_LENGTH,
    MAX_PAGE_INDEX,
    MAX_PAGE_SIZE,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dto_out(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


def _strip(v: str | None) -> str | None:
    return v.strip() if isinstance(v, str) else v


# --- dtoIn --------------------------------------------------------------------

class CreateDtoIn(CamelModel):
    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        return _strip(v)


class GetDtoIn(CamelModel):
    id: UUID


class ListDtoIn(CamelModel):
    page_index: int = Field(0, ge=0, le=MAX_PAGE_INDEX)
    page_size: int = Field(50, ge=1, le=MAX_PAGE_SIZE)


class UpdateDtoIn(CamelModel):
    id: UUID
    name: str | None = Field(None, min_length=1, max_length=MAX_NAME_LENGTH)
    state: ListState | None = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        return _strip(v)


class DeleteDtoIn(CamelModel):
    id: UUID


class AddMemberDtoIn(CamelModel):
    list_id: UUID
    uu_identity: str
    role: MemberRole = MemberRole.MEMBER


class RemoveMemberDtoIn(CamelModel):
    list_id: UUID
    uu_identity: str


class LeaveDtoIn(CamelModel):
    list_id: UUID


# --- dtoOut -------------------------------------------------------------------

class MemberOut(CamelModel):
    uu_identity: str
    role: MemberRole

    @classmethod
    def from_member(cls, member: Member) -> "MemberOut":
        return cls(uu_identity=member.uu_identity, role=member.role)


class ItemOut(CamelModel):
    id: str
    name: str
    quantity: int = 1
    unit: str = "pcs"
    resolved: bool = False

    @classmethod
    def from_item(cls, item: Item) -> "ItemOut":
        return cls(
            id=item.id, name=item.name, quantity=item.quantity,
            unit=item.unit, resolved=item.resolved,
        )


class ShoppingListOut(CamelModel):
    """Full shopping list — returned by create, get and update."""
    awid: str
    id: UUID
    name: str
    state: ListState
    owner_uu_identity: str
    members: list[MemberOut]
    items: list[ItemOut]

    @classmethod
    def from_record(cls, record: ShoppingListRecord) -> "ShoppingListOut":
        return cls(
            awid=record.awid,
            id=record.id,
            name=record.name,
            state=record.state,
            owner_uu_identity=record.owner_uu_identity,
            members=[MemberOut.from_member(m) for m in record.members],
            items=[ItemOut.from_item(i) for i in record.items],
        )


class ShoppingListSummary(CamelModel):
    """One entry of shoppingList/list."""
    id: UUID
    name: str
    state: ListState
    owner_uu_identity: str
    item_count: int

    @classmethod
    def from_record(cls, record: ShoppingListRecord) -> "ShoppingListSummary":
        return cls(
            id=record.id,
            name=record.name,
            state=record.state,
            owner_uu_identity=record.owner_uu_identity,
            item_count=len(record.items),
        )


class PageInfo(CamelModel):
    page_index: int
    page_size: int
    total: int


class ShoppingListPageOut(CamelModel):
    item_list: list[ShoppingListSummary]
    page_info: PageInfo


class DeleteDtoOut(CamelModel):
    awid: str
    id: UUID
    deleted: bool = True


class AddMemberDtoOut(CamelModel):
    awid: str
    list_id: UUID
    member: MemberOut
    members: list[MemberOut]


class RemoveMemberDtoOut(CamelModel):
    awid: str
    list_id: UUID
    removed_uu_identity: str
    members: list[MemberOut]


class LeaveDtoOut(CamelModel):
    awid: str
    list_id: UUID
    left_uu_identity: str
    members: list[MemberOut]
