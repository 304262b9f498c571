"""Normalization and validation helpers for credentialed record attributes."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Final

from credential_guard.domain.auth.field_errors import ErrorCode, FieldErrors

UPDATABLE_FIELDS: Final[frozenset[str]] = frozenset({"email", "display_name"})
TRANSIENT_PASSWORD_FIELDS: Final[frozenset[str]] = frozenset(
    {"current_password", "password", "password_confirmation"}
)
DISPLAY_NAME_MAX_LENGTH: Final[int] = 120

_EMAIL_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class UnknownAttributeError(ValueError):
    """Raised when an attribute mapping names fields outside the allow-list."""

    def __init__(self, *, names: list[str]) -> None:
        super().__init__(f"unknown or non-updatable attributes: {', '.join(names)}")
        self.names = names


def normalize_user_email(*, email: str) -> str:
    """Normalize one user email for storage and lookup."""

    return email.strip().lower()


@dataclass(frozen=True)
class ProfileChanges:
    """Explicit set of record attributes a caller may update."""

    email: str | None = None
    display_name: str | None = None

    @classmethod
    def from_mapping(cls, attributes: Mapping[str, object]) -> ProfileChanges:
        """Build changes from a raw mapping, rejecting keys outside the allow-list."""

        unknown = sorted(name for name in attributes if name not in UPDATABLE_FIELDS)
        if unknown:
            raise UnknownAttributeError(names=unknown)

        email = attributes.get("email")
        display_name = attributes.get("display_name")
        return cls(
            email=None if email is None else str(email),
            display_name=None if display_name is None else str(display_name),
        )

    def as_dict(self) -> dict[str, str]:
        """Return only the fields that were provided, normalized."""

        values: dict[str, str] = {}
        if self.email is not None:
            values["email"] = normalize_user_email(email=self.email)
        if self.display_name is not None:
            values["display_name"] = self.display_name.strip()
        return values


def validate_profile(*, email: str, display_name: str) -> FieldErrors:
    """Run record-level validation over the persisted profile attributes."""

    errors = FieldErrors()
    if not email:
        errors.add("email", ErrorCode.BLANK)
    elif _EMAIL_PATTERN.match(email) is None:
        errors.add("email", ErrorCode.INVALID)
    if len(display_name) > DISPLAY_NAME_MAX_LENGTH:
        errors.add(
            "display_name",
            ErrorCode.TOO_LONG,
            f"Display name must be at most {DISPLAY_NAME_MAX_LENGTH} characters long",
        )
    return errors
