"""Port for credentialed record persistence."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID


@dataclass(frozen=True)
class CredentialRecord:
    """Credentialed record persistence model."""

    record_id: UUID
    email: str
    display_name: str
    encrypted_password: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class CredentialRecordCreateInput:
    """Payload for creating one credentialed record."""

    email: str
    display_name: str
    encrypted_password: str


class CredentialRecordNotFoundError(LookupError):
    """Raised when a write targets a record that no longer exists."""

    def __init__(self, *, record_id: UUID) -> None:
        super().__init__(f"credential record not found: {record_id}")
        self.record_id = record_id


class CredentialRepositoryPort(Protocol):
    """Credentialed record repository contract."""

    def get_by_id(self, *, record_id: UUID) -> CredentialRecord | None:
        """Return record by id or None."""

    def get_by_email(self, *, email: str) -> CredentialRecord | None:
        """Return record by normalized email or None."""

    def create_record(self, payload: CredentialRecordCreateInput) -> CredentialRecord:
        """Insert one record and return the persisted row."""

    def apply_update(self, *, record_id: UUID, changes: Mapping[str, str]) -> CredentialRecord:
        """Apply attribute changes in one transaction and return the persisted row."""

    def delete(self, *, record_id: UUID) -> bool:
        """Delete one record, returning whether a row was removed."""
