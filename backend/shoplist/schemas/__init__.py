"""Pydantic Schemas — typed dtoIn/dtoOut contracts for API endpoints.

Invariants:
    - dtoIn models are built only after the command's field rules passed
    - dtoOut models serialize with camelCase aliases (uuApp wire format)

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
