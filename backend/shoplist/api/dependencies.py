"""Request Dependencies — caller context and record store per request.

Invariants:
    - CallerContext is built from the request only (headers, else configured mock identity)
    - get_repository yields the in-memory store when it is initialized, else a
      SQL repository bound to one auto-rollback session

Design Decisions:
    - Identity headers stand in for the upstream auth boundary; unknown profile
      names are dropped rather than rejected
"""

from typing import AsyncGenerator

from fastapi import Depends, Header

from shoplist.config import get_settings
from shoplist.core.domain_types import CallerContext, Profile, UuIdentity
from shoplist.core.repository_protocols import ShoppingListRepository
from shoplist.infrastructure import database, memory_store
from shoplist.infrastructure.sql_repository import SqlShoppingListRepository
from shoplist.services.shopping_list_commands import ShoppingListCommands

_KNOWN_PROFILES = {p.value: p for p in Profile}


def parse_profiles(raw: str | list[str]) -> frozenset[Profile]:
    names = raw.split(",") if isinstance(raw, str) else raw
    return frozenset(
        _KNOWN_PROFILES[name.strip()]
        for name in names
        if name.strip() in _KNOWN_PROFILES
    )


def get_caller(
    x_uu_identity: str | None = Header(None),
    x_uu_profiles: str | None = Header(None),
) -> CallerContext:
    """Resolve the caller from X-UU-Identity / X-UU-Profiles headers."""
    settings = get_settings()
    identity = (
        x_uu_identity if x_uu_identity is not None
        else settings.default_uu_identity
    )
    profiles = parse_profiles(
        x_uu_profiles if x_uu_profiles is not None
        else settings.default_profiles
    )
    return CallerContext(uu_identity=UuIdentity(identity.strip()), profiles=profiles)


async def get_repository() -> AsyncGenerator[ShoppingListRepository, None]:
    """FastAPI dependency for the configured record store."""
    if memory_store.memory_repository is not None:
        yield memory_store.memory_repository
        return
    if not database.db_manager:
        raise RuntimeError("Database not initialized")
    async with database.db_manager.session() as db:
        yield SqlShoppingListRepository(db)


def get_commands(
    repository: ShoppingListRepository = Depends(get_repository),
    caller: CallerContext = Depends(get_caller),
) -> ShoppingListCommands:
    return ShoppingListCommands(repository, caller, get_settings().awid)
