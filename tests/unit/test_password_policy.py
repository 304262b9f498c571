from __future__ import annotations

import pytest

from credential_guard.config.settings import CredentialConfig
from credential_guard.domain.auth.password_policy import (
    is_complex_enough,
    is_long_enough,
    is_new_password,
)
from credential_guard.infrastructure.security.password_hasher import BcryptPasswordHasher


@pytest.mark.parametrize(
    ("password", "expected"),
    [
        ("Abcdefghi1", True),
        ("Abcdefgh1", False),
        ("short1A", False),
        ("", True),
        (None, True),
    ],
)
def test_is_long_enough_uses_ten_character_minimum(password: str | None, expected: bool) -> None:
    assert is_long_enough(password) is expected


def test_is_long_enough_honors_configured_minimum() -> None:
    assert is_long_enough("NewPass2", min_length=8) is True
    assert is_long_enough("NewPass", min_length=8) is False


@pytest.mark.parametrize(
    ("password", "expected"),
    [
        ("NewPassword2", True),
        ("2NEWpassword", True),
        ("alllowercase1", False),
        ("ALLUPPERCASE1", False),
        ("NoDigitsHere", False),
        ("", True),
        (None, True),
    ],
)
def test_is_complex_enough_requires_lower_upper_and_digit(
    password: str | None,
    expected: bool,
) -> None:
    assert is_complex_enough(password) is expected


def test_is_new_password_compares_against_current_digest() -> None:
    hasher = BcryptPasswordHasher(CredentialConfig(pepper="pepper", stretches=4))
    password_hash = hasher.hash_password("OldPassword1")

    assert is_new_password("OldPassword1", password_hash=password_hash, hasher=hasher) is False
    assert is_new_password("NewPassword2", password_hash=password_hash, hasher=hasher) is True
    assert is_new_password("OldPassword1", password_hash="", hasher=hasher) is True
