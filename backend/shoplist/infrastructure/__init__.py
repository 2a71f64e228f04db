"""Infrastructure Layer — record stores and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All database calls go through DatabaseSessionManager (rollback + error mapping)

Design Decisions:
    - Two interchangeable ShoppingListRepository implementations (sql, memory)
      selected by settings.store_backend
"""
