"""Database Infrastructure — declarative Base and placeholder seed data.

Invariants:
    - All sessions are async (AsyncSession)

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite for tests (native async, no thread pool overhead)
"""
