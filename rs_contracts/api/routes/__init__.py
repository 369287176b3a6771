"""Route Modules — one file per concern.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes never contain contract rules (delegate to core/services)

Design Decisions:
    - Explicit registration in main.py over auto-discovery
"""
