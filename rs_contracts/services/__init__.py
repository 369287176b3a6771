"""Services Layer — document loading, documentation rendering, live contract checking.

Invariants:
    - Services read the registry; none of them mutates a sealed registry

Design Decisions:
    - One module per concern; the API layer calls services, never core internals directly
"""
