"""API Layer — FastAPI routes and error handlers for the read-only contract service.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses (except the Markdown docs)

Design Decisions:
    - Thin routes delegate to core lookups and services
"""
