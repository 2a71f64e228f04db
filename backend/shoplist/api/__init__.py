"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every endpoint answers with the uuApp envelope {...dtoOut, uuAppErrorMap}

Design Decisions:
    - Thin routes delegate to services/command_runner
"""
