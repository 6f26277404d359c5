"""
Dialect-aware INSERT for upserts.

PostgreSQL (production) and SQLite (tests) both support
INSERT ... ON CONFLICT, but SQLAlchemy exposes it through each dialect's
own insert() construct. Pick the one matching the session's engine.
"""

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession


def upsert_insert(session: AsyncSession, model):
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        return postgresql.insert(model)
    if dialect == "sqlite":
        return sqlite.insert(model)
    raise ValueError(f"No upsert support for dialect '{dialect}'")
