"""Command Runner — the authorize → validate → execute → respond pipeline.

Invariants:
    - Received → Authorizing → (Rejected | Validating) → (Rejected | Executing)
      → (Failed | Succeeded); every call ends in exactly one terminal outcome
    - Authorization failure short-circuits: no validation, no store access
    - Validation reports every violated rule at once; a dtoIn that is not a
      JSON object is reported as "<command>/invalidDtoIn" after authorization
    - The executor only ever sees a typed dtoIn
    - Unexpected exceptions become one "<command>/failed" entry (status 500);
      internal details only go to the log

Design Decisions:
    - Domain errors raised as exceptions inside the pipeline and converted here,
      never past the route boundary (routes always return an envelope)
"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Mapping, TypeVar

from pydantic import BaseModel

from shoplist.core.commands import Command
from shoplist.core.domain_types import CallerContext, CommandOutcome
from shoplist.core.enforce_profiles import is_authorized
from shoplist.core.envelope import build_response
from shoplist.core.errors import (
    CommandFailedError,
    ErrorContext,
    InvalidDtoInError,
    ShoppingListError,
    UnauthorizedError,
)
from shoplist.core.validate_dto_in import check_dto_in_object, collect_violations

logger = logging.getLogger(__name__)

DtoIn = TypeVar("DtoIn", bound=BaseModel)
Executor = Callable[[DtoIn], Awaitable[Mapping[str, Any]]]


@dataclass(frozen=True)
class CommandResult:
    status_code: int
    body: dict
    outcome: CommandOutcome


def authorize(command: Command, caller: CallerContext) -> None:
    if not is_authorized(command, caller):
        raise UnauthorizedError(
            command.name,
            ErrorContext(command=command.name, uu_identity=caller.uu_identity),
        )


def validate(
    command: Command, dto_in: Any, dto_in_type: type[DtoIn],
) -> DtoIn:
    """Run every rule, raise with the full error map, else build the typed dtoIn."""
    not_an_object = check_dto_in_object(command.name, dto_in)
    if not_an_object is not None:
        raise InvalidDtoInError(command.name, {not_an_object.key: not_an_object})
    violations = collect_violations(command.name, command.rules, dto_in)
    if violations:
        raise InvalidDtoInError(command.name, violations)
    return dto_in_type.model_validate(dict(dto_in))


async def run_command(
    command: Command,
    caller: CallerContext,
    dto_in: Any,
    dto_in_type: type[DtoIn],
    execute: Executor,
) -> CommandResult:
    """Run one command request to a terminal outcome."""
    log_extra = {"command": command.name, "uu_identity": caller.uu_identity}
    try:
        authorize(command, caller)
        typed = validate(command, dto_in, dto_in_type)
        dto_out = await execute(typed)
    except (UnauthorizedError, InvalidDtoInError) as exc:
        logger.warning(
            f"{command.name} rejected: {', '.join(exc.error_map)}",
            extra={**log_extra, "error_code": exc.code,
                   "outcome": CommandOutcome.REJECTED.value},
        )
        return CommandResult(
            exc.http_status, build_response({}, exc.error_map),
            CommandOutcome.REJECTED,
        )
    except ShoppingListError as exc:
        if not exc.user_correctable:
            return _failed(command, log_extra, exc)
        logger.info(
            f"{command.name} failed: {exc.message}",
            extra={**log_extra, "error_code": exc.code,
                   "outcome": CommandOutcome.FAILED.value},
        )
        return CommandResult(
            exc.http_status, build_response({}, exc.error_map),
            CommandOutcome.FAILED,
        )
    except Exception as exc:
        return _failed(command, log_extra, exc)

    logger.info(
        f"{command.name} succeeded",
        extra={**log_extra, "outcome": CommandOutcome.SUCCEEDED.value},
    )
    return CommandResult(
        command.success_status, build_response(dto_out),
        CommandOutcome.SUCCEEDED,
    )


def _failed(
    command: Command, log_extra: dict, exc: Exception,
) -> CommandResult:
    failure = CommandFailedError(command.name)
    logger.error(
        f"{command.name} failed unexpectedly: {exc}",
        exc_info=exc,
        extra={**log_extra, "error_code": failure.code,
               "outcome": CommandOutcome.FAILED.value},
    )
    return CommandResult(
        failure.http_status, build_response({}, failure.error_map),
        CommandOutcome.FAILED,
    )
