"""Bcrypt password hasher adapter."""

from __future__ import annotations

import hmac
import logging
import re
from typing import Final

import bcrypt

from credential_guard.application.ports.password_hasher_port import PasswordHasherPort
from credential_guard.config.settings import CredentialConfig

logger = logging.getLogger(__name__)

# bcrypt ignores input past 72 bytes; newer releases refuse it outright.
_BCRYPT_MAX_SECRET_BYTES: Final[int] = 72
_BCRYPT_SALT_PREFIX_LENGTH: Final[int] = 29
_BCRYPT_HASH_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^\$2[abxy]\$(0[4-9]|[12]\d|3[01])\$[./A-Za-z0-9]{53}$"
)


class BcryptPasswordHasher(PasswordHasherPort):
    """Password digest adapter using bcrypt with a deployment-wide pepper."""

    def __init__(self, config: CredentialConfig | None = None) -> None:
        self._config = config or CredentialConfig()

    def hash_password(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._config.stretches)
        return bcrypt.hashpw(self._peppered(password), salt).decode("utf-8")

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        if not password_hash:
            return False

        if _BCRYPT_HASH_PATTERN.match(password_hash) is None:
            logger.warning("password_hash_malformed length=%s", len(password_hash))
            return False

        stored = password_hash.encode("utf-8")
        try:
            candidate = bcrypt.hashpw(self._peppered(password), stored)
        except ValueError:
            logger.warning("password_hash_malformed prefix=%s", password_hash[:7])
            return False
        return hmac.compare_digest(candidate, stored)

    def authenticatable_salt(self, password_hash: str | None) -> str | None:
        if not password_hash:
            return None
        return password_hash[:_BCRYPT_SALT_PREFIX_LENGTH]

    def _peppered(self, password: str) -> bytes:
        secret = f"{password}{self._config.pepper}".encode("utf-8")
        return secret[:_BCRYPT_MAX_SECRET_BYTES]
