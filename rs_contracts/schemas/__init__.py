"""Pydantic Schemas — the contract document format and the API request/response models.

Invariants:
    - Schemas validate at system boundary (documents, API requests)
    - Domain types from core/ used for enum fields

Design Decisions:
    - Separate from core records: schemas are wire formats, core records are the model
"""
