"""API Layer — FastAPI routes, HTTP presenter and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses or 303 redirects

Design Decisions:
    - Thin routes delegate to services
"""
