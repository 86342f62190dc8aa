"""Database Infrastructure — SQLAlchemy Base.

Invariants:
    - All sessions are async (AsyncSession)

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite for local/dev (ADR: native async, no thread pool overhead)
"""
