"""Port for password digesting and verification."""

from __future__ import annotations

from typing import Protocol


class PasswordHasherPort(Protocol):
    """Password digest/verification contract."""

    def hash_password(self, password: str) -> str:
        """Digest plaintext password for storage with a fresh salt."""

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        """Verify plaintext password against stored hash, failing closed."""

    def authenticatable_salt(self, password_hash: str | None) -> str | None:
        """Return the algorithm, cost and salt prefix of a stored hash."""
