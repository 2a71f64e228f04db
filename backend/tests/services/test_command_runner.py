"""Command Runner — pipeline ordering, aggregation and failure reduction.

Invariants:
    - Unauthorized callers never reach validation or the executor
    - All violated rules are returned together
    - Unexpected executor exceptions become a single "<command>/failed" entry (500)
      with a generic message
"""

import pytest
from sqlalchemy.exc import OperationalError

from shoplist.core import commands
from shoplist.core.domain_types import CallerContext, CommandOutcome, Profile
from shoplist.core.errors import ListNotFoundError
from shoplist.schemas.shopping_list import CreateDtoIn, UpdateDtoIn
from shoplist.services.command_runner import run_command

OWNER = CallerContext("uu5:1234-5678", frozenset({Profile.USER, Profile.OWNER}))
STRANGER = CallerContext("uu5:0000", frozenset({Profile.MEMBER}))


class _RecordingExecutor:
    def __init__(self, result=None, error=None):
        self.calls = []
        self._result = result or {}
        self._error = error

    async def __call__(self, dto_in):
        self.calls.append(dto_in)
        if self._error:
            raise self._error
        return self._result


async def test_success_wraps_dto_out_with_empty_error_map():
    execute = _RecordingExecutor(result={"id": "x", "name": "Milk run"})
    result = await run_command(
        commands.CREATE, OWNER, {"name": " Milk run "}, CreateDtoIn, execute,
    )
    assert result.status_code == 201
    assert result.outcome == CommandOutcome.SUCCEEDED
    assert result.body == {"id": "x", "name": "Milk run", "uuAppErrorMap": {}}


async def test_executor_receives_typed_trimmed_dto_in():
    execute = _RecordingExecutor()
    await run_command(
        commands.CREATE, OWNER, {"name": "  Milk run "}, CreateDtoIn, execute,
    )
    assert execute.calls == [CreateDtoIn(name="Milk run")]


async def test_unauthorized_short_circuits_before_validation():
    execute = _RecordingExecutor()
    result = await run_command(commands.CREATE, STRANGER, {}, CreateDtoIn, execute)
    assert result.status_code == 403
    assert result.outcome == CommandOutcome.REJECTED
    assert list(result.body["uuAppErrorMap"]) == ["shoppingList/create/unauthorized"]
    assert execute.calls == []


async def test_non_object_dto_in_from_stranger_is_unauthorized():
    execute = _RecordingExecutor()
    result = await run_command(
        commands.CREATE, STRANGER, ["Milk run"], CreateDtoIn, execute,
    )
    assert result.status_code == 403
    assert list(result.body["uuAppErrorMap"]) == ["shoppingList/create/unauthorized"]
    assert execute.calls == []


async def test_non_object_dto_in_is_invalid_after_authorization():
    execute = _RecordingExecutor()
    result = await run_command(
        commands.CREATE, OWNER, ["Milk run"], CreateDtoIn, execute,
    )
    assert result.status_code == 400
    assert result.outcome == CommandOutcome.REJECTED
    assert result.body["uuAppErrorMap"] == {
        "shoppingList/create/invalidDtoIn": {
            "type": "error",
            "message": "dtoIn is not a valid JSON object.",
            "paramMap": {"type": "list"},
        },
    }
    assert execute.calls == []


async def test_validation_aggregates_all_violations():
    execute = _RecordingExecutor()
    result = await run_command(
        commands.UPDATE, OWNER, {"id": "nope", "name": "", "state": "gone"},
        UpdateDtoIn, execute,
    )
    assert result.status_code == 400
    assert result.outcome == CommandOutcome.REJECTED
    assert len(result.body["uuAppErrorMap"]) == 3
    assert execute.calls == []


async def test_not_found_is_reported_with_404():
    execute = _RecordingExecutor(
        error=ListNotFoundError("shoppingList/create", "abc"),
    )
    result = await run_command(
        commands.CREATE, OWNER, {"name": "x"}, CreateDtoIn, execute,
    )
    assert result.status_code == 404
    assert result.outcome == CommandOutcome.FAILED
    assert "shoppingList/create/notFound" in result.body["uuAppErrorMap"]


@pytest.mark.parametrize("error", [
    RuntimeError("connection pool exhausted at 10.0.0.5"),
    OperationalError("SELECT 1", {}, Exception("db down")),
])
async def test_unexpected_failure_is_reduced_to_generic_entry(error):
    execute = _RecordingExecutor(error=error)
    result = await run_command(
        commands.CREATE, OWNER, {"name": "x"}, CreateDtoIn, execute,
    )
    assert result.status_code == 500
    assert result.outcome == CommandOutcome.FAILED
    error_map = result.body["uuAppErrorMap"]
    assert list(error_map) == ["shoppingList/create/failed"]
    assert "10.0.0.5" not in error_map["shoppingList/create/failed"]["message"]
    assert "db down" not in error_map["shoppingList/create/failed"]["message"]


async def test_store_failure_through_route_returns_500(memory_client, memory_repository, monkeypatch):
    async def broken_create(draft):
        raise RuntimeError("disk full")

    monkeypatch.setattr(memory_repository, "create", broken_create)

    res = await memory_client.post("/shoppingList/create", json={"name": "Doomed"})
    assert res.status_code == 500
    body = res.json()
    assert list(body["uuAppErrorMap"]) == ["shoppingList/create/failed"]
    assert body["uuAppErrorMap"]["shoppingList/create/failed"]["type"] == "error"
