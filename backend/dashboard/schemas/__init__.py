"""Pydantic Schemas — form validation and read-model records at the API boundary.

Invariants:
    - Schemas validate at system boundary (form input, query results)
    - Domain types from core/ used for enum fields

Design Decisions:
    - Separate from models: schemas are contracts, models are persistence
"""
