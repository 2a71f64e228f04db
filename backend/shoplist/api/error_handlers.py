"""Error Handlers — global exception handlers that keep the uuApp envelope.

Invariants:
    - ShoppingListError → its own status and error map
    - RequestValidationError (malformed body) → 400 "<command>/invalidDtoIn"
    - Exception (catch-all) → 500 "<command>/failed", never leaks internal details

Design Decisions:
    - Three-layer handler: domain, validation (Pydantic), catch-all
    - The command name is recovered from the path (/shoppingList/<operation>/...)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from shoplist.core.envelope import build_response
from shoplist.core.errors import CommandFailedError, ErrorEntry, ShoppingListError

logger = logging.getLogger(__name__)


def command_from_path(path: str) -> str:
    """'/shoppingList/get/abc' -> 'shoppingList/get'."""
    parts = [p for p in path.split("/") if p]
    return "/".join(parts[:2]) if parts else "unknown"


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(ShoppingListError)
    async def shopping_list_error_handler(request: Request, exc: ShoppingListError):
        """Handle domain/infrastructure errors that escaped a command."""
        logger.error(
            f"ShoppingListError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        if exc.user_correctable:
            error_map = exc.error_map
        else:
            error_map = CommandFailedError(command_from_path(request.url.path)).error_map
        return JSONResponse(
            status_code=exc.http_status,
            content=build_response({}, error_map),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle malformed request bodies."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=build_response({}, _build_invalid_dto_in(request, exc)),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path},
        )
        failure = CommandFailedError(command_from_path(request.url.path))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=build_response({}, failure.error_map),
        )


def _build_invalid_dto_in(
    request: Request, exc: RequestValidationError,
) -> dict[str, ErrorEntry]:
    key = f"{command_from_path(request.url.path)}/invalidDtoIn"
    return {
        key: ErrorEntry(
            key=key,
            message="dtoIn is not a valid JSON object.",
            param_map={
                "details": [
                    {
                        "field": ".".join(str(loc) for loc in e["loc"]),
                        "message": e["msg"],
                        "type": e["type"],
                    }
                    for e in exc.errors()
                ],
            },
        ),
    }
