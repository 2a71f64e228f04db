"""Services Layer — imperative shell around the pure core.

Invariants:
    - Services orchestrate IO (repository calls) around pure core functions
    - Every command goes through services/command_runner.run_command
"""
