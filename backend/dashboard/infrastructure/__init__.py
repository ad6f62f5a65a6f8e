"""Infrastructure Layer — database session management and logging setup.

Invariants:
    - Infrastructure never imports from services/
    - SQLAlchemy exceptions escaping a session are mapped to DatabaseError

Design Decisions:
    - Session manager is constructed explicitly and injected (no import-time engine)
"""
