"""SQLAlchemy adapter for credentialed record persistence."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Final, cast
from uuid import UUID, uuid4

import sqlalchemy as sa

from credential_guard.application.ports.credential_repository_port import (
    CredentialRecord,
    CredentialRecordCreateInput,
    CredentialRecordNotFoundError,
    CredentialRepositoryPort,
)
from credential_guard.infrastructure.db.metadata import credential_records

_WRITABLE_COLUMNS: Final[frozenset[str]] = frozenset(
    {"email", "display_name", "encrypted_password"}
)


class SqlAlchemyCredentialRepository(CredentialRepositoryPort):
    """Credential record repository backed by a SQLAlchemy engine."""

    def __init__(self, engine: sa.Engine) -> None:
        self._engine = engine

    def get_by_id(self, *, record_id: UUID) -> CredentialRecord | None:
        """Return record by id or None."""

        return self._fetch_one(credential_records.c.id == record_id)

    def get_by_email(self, *, email: str) -> CredentialRecord | None:
        """Return record by normalized email or None."""

        return self._fetch_one(credential_records.c.email == email)

    def create_record(self, payload: CredentialRecordCreateInput) -> CredentialRecord:
        """Insert one record and return the persisted row."""

        record_id = uuid4()
        now = datetime.now(tz=UTC)
        statement = sa.insert(credential_records).values(
            id=record_id,
            email=payload.email,
            display_name=payload.display_name,
            encrypted_password=payload.encrypted_password,
            created_at=now,
            updated_at=now,
        )
        with self._engine.begin() as connection:
            connection.execute(statement)
            row = self._select_one(connection, credential_records.c.id == record_id)

        if row is None:  # pragma: no cover - row inserted in the same transaction.
            raise CredentialRecordNotFoundError(record_id=record_id)
        return _to_credential_record(row)

    def apply_update(self, *, record_id: UUID, changes: Mapping[str, str]) -> CredentialRecord:
        """Apply attribute changes in one transaction and return the persisted row."""

        unexpected = sorted(set(changes) - _WRITABLE_COLUMNS)
        if unexpected:
            raise ValueError(f"non-writable credential columns: {', '.join(unexpected)}")

        statement = (
            sa.update(credential_records)
            .where(credential_records.c.id == record_id)
            .values(**dict(changes), updated_at=datetime.now(tz=UTC))
        )
        with self._engine.begin() as connection:
            result = connection.execute(statement)
            if result.rowcount == 0:
                raise CredentialRecordNotFoundError(record_id=record_id)
            row = self._select_one(connection, credential_records.c.id == record_id)

        if row is None:  # pragma: no cover - row updated in the same transaction.
            raise CredentialRecordNotFoundError(record_id=record_id)
        return _to_credential_record(row)

    def delete(self, *, record_id: UUID) -> bool:
        """Delete one record, returning whether a row was removed."""

        statement = sa.delete(credential_records).where(credential_records.c.id == record_id)
        with self._engine.begin() as connection:
            result = connection.execute(statement)
        return result.rowcount > 0

    def _fetch_one(self, condition: sa.ColumnElement[bool]) -> CredentialRecord | None:
        with self._engine.connect() as connection:
            row = self._select_one(connection, condition)
        if row is None:
            return None
        return _to_credential_record(row)

    def _select_one(
        self,
        connection: sa.Connection,
        condition: sa.ColumnElement[bool],
    ) -> sa.RowMapping | None:
        statement = sa.select(
            credential_records.c.id,
            credential_records.c.email,
            credential_records.c.display_name,
            credential_records.c.encrypted_password,
            credential_records.c.created_at,
            credential_records.c.updated_at,
        ).where(condition).limit(1)
        return connection.execute(statement).mappings().first()


def _to_credential_record(row: sa.RowMapping) -> CredentialRecord:
    raw_record_id = row["id"]
    record_id = raw_record_id if isinstance(raw_record_id, UUID) else UUID(str(raw_record_id))
    return CredentialRecord(
        record_id=record_id,
        email=cast(str, row["email"]),
        display_name=cast(str, row["display_name"]),
        encrypted_password=cast(str, row["encrypted_password"]),
        created_at=cast(datetime, row["created_at"]),
        updated_at=cast(datetime, row["updated_at"]),
    )
