"""Shopping List Application Package — uuCmd-style CRUD API for shopping lists.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
