"""ORM Models — SQLAlchemy declarative models for all persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - ShoppingList is the only aggregate; members and items live inside it

Design Decisions:
    - All models imported here so metadata is complete before create_all or autogenerate
"""

from shoplist.models.shopping_list import ShoppingList  # noqa: F401
