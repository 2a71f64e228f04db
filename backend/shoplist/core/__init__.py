"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Authorization, validation and executors are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell: the command runner in
      services/ does the IO around these functions
"""
