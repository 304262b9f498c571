"""Pure password policy predicates used by credential updates."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final, Protocol

DEFAULT_MIN_LENGTH: Final[int] = 10

_COMPLEXITY_PATTERN: Final[re.Pattern[str]] = re.compile(r"(?=.*\d)(?=.*[a-z])(?=.*[A-Z])")


class PasswordVerifier(Protocol):
    """Digest verification needed by the password freshness check."""

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        """Verify plaintext password against stored hash."""


@dataclass(frozen=True)
class PasswordPolicy:
    """Strength rules applied to a new password.

    ``report_all_failures`` decides whether the complexity and length rules
    are both reported when both fail, or only the first failing one.
    """

    min_length: int = DEFAULT_MIN_LENGTH
    report_all_failures: bool = True


def is_long_enough(password: str | None, *, min_length: int = DEFAULT_MIN_LENGTH) -> bool:
    """Return whether password meets the minimum length; absent values pass."""

    if password and len(password) < min_length:
        return False
    return True


def is_complex_enough(password: str | None) -> bool:
    """Return whether password mixes lower case, upper case and digits; absent values pass."""

    if password and _COMPLEXITY_PATTERN.search(password) is None:
        return False
    return True


def is_new_password(
    password: str,
    *,
    password_hash: str,
    hasher: PasswordVerifier,
) -> bool:
    """Return whether password differs from the credential behind password_hash.

    Runs a full digest verification, so callers should evaluate it once per attempt.
    """

    return not hasher.verify_password(password=password, password_hash=password_hash)
