"""Shopping List Routes — HTTP mapping of the shoppingList/* uuCmds.

Invariants:
    - Path ids (get/update/delete) are merged into dtoIn; path wins over body
    - Bodies and query params reach the pipeline raw (any JSON value), so
      authorization runs before a non-object body is rejected and every
      violation is reported
    - Responses always carry uuAppErrorMap (see services/command_runner.py)

Design Decisions:
    - Canonical mapping: REST verbs with path ids for get/update/delete, POST bodies
      for create and the member commands, GET query for list
"""

from typing import Any, Mapping

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse

from shoplist.api.dependencies import get_caller, get_commands
from shoplist.core import commands
from shoplist.core.domain_types import CallerContext
from shoplist.schemas.shopping_list import (
    AddMemberDtoIn,
    CreateDtoIn,
    DeleteDtoIn,
    GetDtoIn,
    LeaveDtoIn,
    ListDtoIn,
    RemoveMemberDtoIn,
    UpdateDtoIn,
)
from shoplist.services.command_runner import CommandResult, run_command
from shoplist.services.shopping_list_commands import ShoppingListCommands

router = APIRouter(prefix="/shoppingList", tags=["shoppingList"])


def _respond(result: CommandResult) -> JSONResponse:
    return JSONResponse(status_code=result.status_code, content=result.body)


def _dto_in(body: Any) -> Any:
    return {} if body is None else body


def _with_path_id(body: Any, id: str) -> Any:
    dto_in = _dto_in(body)
    if isinstance(dto_in, Mapping):
        return {**dto_in, "id": id}
    return dto_in


@router.post("/create")
async def create_shopping_list(
    body: Any = Body(None),
    caller: CallerContext = Depends(get_caller),
    handler: ShoppingListCommands = Depends(get_commands),
):
    """Create a list owned by the caller."""
    return _respond(await run_command(
        commands.CREATE, caller, _dto_in(body), CreateDtoIn, handler.create,
    ))


@router.get("/get/{id}")
async def get_shopping_list(
    id: str,
    caller: CallerContext = Depends(get_caller),
    handler: ShoppingListCommands = Depends(get_commands),
):
    return _respond(await run_command(
        commands.GET, caller, {"id": id}, GetDtoIn, handler.get,
    ))


@router.get("/list")
async def list_shopping_lists(
    page_index: str | None = Query(None, alias="pageIndex"),
    page_size: str | None = Query(None, alias="pageSize"),
    caller: CallerContext = Depends(get_caller),
    handler: ShoppingListCommands = Depends(get_commands),
):
    """List summaries with item counts, one page at a time."""
    dto_in = {
        key: value
        for key, value in (("pageIndex", page_index), ("pageSize", page_size))
        if value is not None
    }
    return _respond(await run_command(
        commands.LIST, caller, dto_in, ListDtoIn, handler.list_page,
    ))


@router.put("/update/{id}")
async def update_shopping_list(
    id: str,
    body: Any = Body(None),
    caller: CallerContext = Depends(get_caller),
    handler: ShoppingListCommands = Depends(get_commands),
):
    """Replace name and/or state of a list."""
    return _respond(await run_command(
        commands.UPDATE, caller, _with_path_id(body, id),
        UpdateDtoIn, handler.update,
    ))


@router.delete("/delete/{id}")
async def delete_shopping_list(
    id: str,
    caller: CallerContext = Depends(get_caller),
    handler: ShoppingListCommands = Depends(get_commands),
):
    return _respond(await run_command(
        commands.DELETE, caller, {"id": id}, DeleteDtoIn, handler.delete,
    ))


@router.post("/addMember")
async def add_member(
    body: Any = Body(None),
    caller: CallerContext = Depends(get_caller),
    handler: ShoppingListCommands = Depends(get_commands),
):
    return _respond(await run_command(
        commands.ADD_MEMBER, caller, _dto_in(body), AddMemberDtoIn, handler.add_member,
    ))


@router.post("/removeMember")
async def remove_member(
    body: Any = Body(None),
    caller: CallerContext = Depends(get_caller),
    handler: ShoppingListCommands = Depends(get_commands),
):
    return _respond(await run_command(
        commands.REMOVE_MEMBER, caller, _dto_in(body),
        RemoveMemberDtoIn, handler.remove_member,
    ))


@router.post("/leave")
async def leave_shopping_list(
    body: Any = Body(None),
    caller: CallerContext = Depends(get_caller),
    handler: ShoppingListCommands = Depends(get_commands),
):
    """Remove the caller from the list's members."""
    return _respond(await run_command(
        commands.LEAVE, caller, _dto_in(body), LeaveDtoIn, handler.leave,
    ))
