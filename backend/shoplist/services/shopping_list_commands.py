"""Shopping List Commands — executors for every shoppingList/* uuCmd.

Invariants:
    - Each method receives an already validated, typed dtoIn
    - A missing list raises ListNotFoundError keyed to the calling command
    - Member changes are computed by core/shopping_list_ops and written back whole

Design Decisions:
    - One handler class per request holding (repository, caller, awid): routes stay
      thin and the handler never reads process-wide identity state
"""

import logging

from shoplist.core import commands
from shoplist.core import shopping_list_ops as ops
from shoplist.core.domain_types import (
    CallerContext,
    MemberRole,
    ShoppingListId,
    ShoppingListRecord,
)
from shoplist.core.errors import ErrorContext, ListNotFoundError
from shoplist.core.repository_protocols import ShoppingListRepository
from shoplist.schemas.shopping_list import (
    AddMemberDtoIn,
    AddMemberDtoOut,
    CreateDtoIn,
    DeleteDtoIn,
    DeleteDtoOut,
    GetDtoIn,
    LeaveDtoIn,
    LeaveDtoOut,
    ListDtoIn,
    MemberOut,
    PageInfo,
    RemoveMemberDtoIn,
    RemoveMemberDtoOut,
    ShoppingListOut,
    ShoppingListPageOut,
    ShoppingListSummary,
    UpdateDtoIn,
)

logger = logging.getLogger(__name__)


class ShoppingListCommands:
    """Executes shoppingList/* commands against one repository for one caller."""

    def __init__(
        self, repository: ShoppingListRepository, caller: CallerContext, awid: str,
    ):
        self._repository = repository
        self._caller = caller
        self._awid = awid

    async def _require(
        self, command: commands.Command, list_id: ShoppingListId, param_name: str,
    ) -> ShoppingListRecord:
        record = await self._repository.get(list_id)
        if record is None:
            raise self._not_found(command, list_id, param_name)
        return record

    def _not_found(
        self, command: commands.Command, list_id: ShoppingListId, param_name: str,
    ) -> ListNotFoundError:
        return ListNotFoundError(
            command.name, str(list_id), param_name,
            ErrorContext(
                command=command.name,
                uu_identity=self._caller.uu_identity,
                list_id=str(list_id),
            ),
        )

    async def create(self, dto_in: CreateDtoIn) -> dict:
        draft = ops.build_new_list(dto_in.name, self._caller, self._awid)
        record = await self._repository.create(draft)
        logger.info(
            f"Shopping list {record.id} created",
            extra={"list_id": str(record.id), "uu_identity": self._caller.uu_identity},
        )
        return ShoppingListOut.from_record(record).to_dto_out()

    async def get(self, dto_in: GetDtoIn) -> dict:
        record = await self._require(commands.GET, ShoppingListId(dto_in.id), "id")
        return ShoppingListOut.from_record(record).to_dto_out()

    async def list_page(self, dto_in: ListDtoIn) -> dict:
        records, total = await self._repository.list_page(
            ops.page_offset(dto_in.page_index, dto_in.page_size), dto_in.page_size,
        )
        return ShoppingListPageOut(
            item_list=[ShoppingListSummary.from_record(r) for r in records],
            page_info=PageInfo(
                page_index=dto_in.page_index,
                page_size=dto_in.page_size,
                total=total,
            ),
        ).to_dto_out()

    async def update(self, dto_in: UpdateDtoIn) -> dict:
        list_id = ShoppingListId(dto_in.id)
        record = await self._require(commands.UPDATE, list_id, "id")
        changes = ops.plan_update(dto_in.name, dto_in.state)
        if changes:
            record = await self._repository.update(list_id, changes)
            if record is None:
                raise self._not_found(commands.UPDATE, list_id, "id")
        return ShoppingListOut.from_record(record).to_dto_out()

    async def delete(self, dto_in: DeleteDtoIn) -> dict:
        list_id = ShoppingListId(dto_in.id)
        record = await self._repository.delete(list_id)
        if record is None:
            raise self._not_found(commands.DELETE, list_id, "id")
        logger.info(
            f"Shopping list {list_id} deleted",
            extra={"list_id": str(list_id), "uu_identity": self._caller.uu_identity},
        )
        return DeleteDtoOut(awid=self._awid, id=record.id).to_dto_out()

    async def add_member(self, dto_in: AddMemberDtoIn) -> dict:
        list_id = ShoppingListId(dto_in.list_id)
        record = await self._require(commands.ADD_MEMBER, list_id, "listId")
        members = ops.add_member(record, dto_in.uu_identity, MemberRole(dto_in.role))
        updated = await self._repository.update(list_id, {"members": members})
        if updated is None:
            raise self._not_found(commands.ADD_MEMBER, list_id, "listId")
        return AddMemberDtoOut(
            awid=self._awid,
            list_id=list_id,
            member=MemberOut.from_member(members[-1]),
            members=[MemberOut.from_member(m) for m in updated.members],
        ).to_dto_out()

    async def remove_member(self, dto_in: RemoveMemberDtoIn) -> dict:
        list_id = ShoppingListId(dto_in.list_id)
        record = await self._require(commands.REMOVE_MEMBER, list_id, "listId")
        members = ops.remove_member(record, dto_in.uu_identity)
        updated = await self._repository.update(list_id, {"members": members})
        if updated is None:
            raise self._not_found(commands.REMOVE_MEMBER, list_id, "listId")
        return RemoveMemberDtoOut(
            awid=self._awid,
            list_id=list_id,
            removed_uu_identity=dto_in.uu_identity,
            members=[MemberOut.from_member(m) for m in updated.members],
        ).to_dto_out()

    async def leave(self, dto_in: LeaveDtoIn) -> dict:
        list_id = ShoppingListId(dto_in.list_id)
        record = await self._require(commands.LEAVE, list_id, "listId")
        members = ops.leave(record, self._caller)
        updated = await self._repository.update(list_id, {"members": members})
        if updated is None:
            raise self._not_found(commands.LEAVE, list_id, "listId")
        return LeaveDtoOut(
            awid=self._awid,
            list_id=list_id,
            left_uu_identity=self._caller.uu_identity,
            members=[MemberOut.from_member(m) for m in updated.members],
        ).to_dto_out()
