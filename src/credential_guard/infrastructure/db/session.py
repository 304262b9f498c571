"""SQLAlchemy engine factory helpers."""

from __future__ import annotations

import sqlalchemy as sa

from credential_guard.infrastructure.db.metadata import metadata


def create_engine(database_url: str, *, create_schema: bool = False) -> sa.Engine:
    """Create a reusable engine, optionally creating the credential tables."""

    engine = sa.create_engine(database_url)
    if create_schema:
        metadata.create_all(engine)
    return engine
