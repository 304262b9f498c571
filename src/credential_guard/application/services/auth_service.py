"""Application authentication service for database-backed credentials."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

from credential_guard.application.ports.credential_repository_port import (
    CredentialRecord,
    CredentialRepositoryPort,
)
from credential_guard.application.ports.password_hasher_port import PasswordHasherPort
from credential_guard.domain.auth.credentials import normalize_user_email

logger = logging.getLogger(__name__)


class AuthOutcome(StrEnum):
    """Supported authentication outcomes."""

    SUCCESS = "success"
    INVALID_CREDENTIALS = "invalid_credentials"


@dataclass(frozen=True)
class AuthResult:
    """Authentication result model."""

    outcome: AuthOutcome
    record: CredentialRecord | None = None


class PostAuthenticationHook(Protocol):
    """Extension point run once after a successful database authentication."""

    def after_database_authentication(self, record: CredentialRecord) -> None:
        """Run custom post-login side effects for record."""


class NoopPostAuthenticationHook:
    """Default hook with no behavior."""

    def after_database_authentication(self, record: CredentialRecord) -> None:
        _ = record


class AuthService:
    """Authenticate credentials by record lookup and run the post-login hook."""

    def __init__(
        self,
        *,
        records: CredentialRepositoryPort,
        password_hasher: PasswordHasherPort,
        post_authentication_hook: PostAuthenticationHook | None = None,
    ) -> None:
        self._records = records
        self._password_hasher = password_hasher
        self._hook = post_authentication_hook or NoopPostAuthenticationHook()

    def find_for_database_authentication(self, *, email: str) -> CredentialRecord | None:
        """Return the record matching the normalized email, if any."""

        normalized = normalize_user_email(email=email)
        if not normalized:
            return None
        return self._records.get_by_email(email=normalized)

    def authenticate(self, *, email: str, password: str) -> AuthResult:
        """Verify credentials, then run the hook exactly once before returning."""

        record = self.find_for_database_authentication(email=email)
        if record is None:
            logger.info("login_failed reason=unknown_record")
            return AuthResult(outcome=AuthOutcome.INVALID_CREDENTIALS)

        is_valid = self._password_hasher.verify_password(
            password=password,
            password_hash=record.encrypted_password,
        )
        if not is_valid:
            logger.info("login_failed record_id=%s reason=invalid_credentials", record.record_id)
            return AuthResult(outcome=AuthOutcome.INVALID_CREDENTIALS)

        self._hook.after_database_authentication(record)
        logger.info("login_success record_id=%s", record.record_id)
        return AuthResult(outcome=AuthOutcome.SUCCESS, record=record)
