"""Core Layer — pure contract model, no IO, no async, no HTTP.

Invariants:
    - No module in core/ imports from services/, api/, schemas/ or infrastructure/
    - Records are frozen; the registry is the only mutable object and seals after build

Design Decisions:
    - Functional core separated from imperative shell (loader, checker, API)
"""
