"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Engine and session fixtures come from the root conftest
    - get_repository dependency overridden to a SQL repository on the test DB
    - memory_client runs the same routes against a fresh in-memory store

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features not exercised here)
"""

import pytest
from httpx import ASGITransport, AsyncClient

from shoplist.api.dependencies import get_repository
from shoplist.infrastructure.memory_store import InMemoryShoppingListRepository
from shoplist.infrastructure.sql_repository import SqlShoppingListRepository
from shoplist.models.shopping_list import ShoppingList as ShoppingListModel
from shoplist.main import app

OWNER = "uu5:1234-5678"


@pytest.fixture
async def client(test_session_factory):
    """FastAPI test client with the SQL store on the test DB."""
    async def override_get_repository():
        async with test_session_factory() as session:
            yield SqlShoppingListRepository(session)

    app.dependency_overrides[get_repository] = override_get_repository

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def memory_repository():
    return InMemoryShoppingListRepository()


@pytest.fixture
async def memory_client(memory_repository):
    """FastAPI test client with a fresh in-memory store."""
    async def override_get_repository():
        yield memory_repository

    app.dependency_overrides[get_repository] = override_get_repository

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
async def seed_list(test_db):
    """Insert one list with two items directly into the test DB."""
    row = ShoppingListModel(
        awid="shoppingListApp",
        name="List A",
        state="active",
        owner_uu_identity=OWNER,
        members=[{"uuIdentity": OWNER, "role": "owner"}],
        items=[
            {"id": "i1", "name": "Milk", "quantity": 2, "unit": "pcs", "resolved": False},
            {"id": "i2", "name": "Bread", "quantity": 1, "unit": "pcs", "resolved": True},
        ],
    )
    test_db.add(row)
    await test_db.commit()
    await test_db.refresh(row)
    return row
