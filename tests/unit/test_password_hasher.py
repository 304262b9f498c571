from __future__ import annotations

import hmac

import pytest

from credential_guard.config.settings import CredentialConfig
from credential_guard.infrastructure.security.password_hasher import BcryptPasswordHasher


def _hasher(*, pepper: str = "pepper") -> BcryptPasswordHasher:
    return BcryptPasswordHasher(CredentialConfig(pepper=pepper, stretches=4))


def test_hash_password_never_stores_plaintext_and_verifies() -> None:
    hasher = _hasher()
    password = "super-secret-password"

    password_hash = hasher.hash_password(password)

    assert password_hash != password
    assert password not in password_hash
    assert password_hash.startswith("$2b$04$")
    assert hasher.verify_password(password=password, password_hash=password_hash) is True


def test_wrong_password_fails_verification() -> None:
    hasher = _hasher()
    password_hash = hasher.hash_password("correct")

    assert hasher.verify_password(password="wrong", password_hash=password_hash) is False


def test_two_digests_of_same_password_differ_and_both_verify() -> None:
    hasher = _hasher()

    first = hasher.hash_password("OldPass1")
    second = hasher.hash_password("OldPass1")

    assert first != second
    assert hasher.verify_password(password="OldPass1", password_hash=first) is True
    assert hasher.verify_password(password="OldPass1", password_hash=second) is True


@pytest.mark.parametrize("password", ["", "anything", "OldPass1"])
def test_empty_hash_never_verifies(password: str) -> None:
    hasher = _hasher()

    assert hasher.verify_password(password=password, password_hash="") is False


@pytest.mark.parametrize("password_hash", ["not-a-hash", "$2b$04$short", "$9z$04$" + "a" * 53])
def test_malformed_hash_fails_closed(password_hash: str) -> None:
    hasher = _hasher()

    assert hasher.verify_password(password="anything", password_hash=password_hash) is False


def test_pepper_is_part_of_the_digest() -> None:
    password_hash = _hasher(pepper="first").hash_password("OldPass1")

    assert _hasher(pepper="first").verify_password(
        password="OldPass1", password_hash=password_hash
    ) is True
    assert _hasher(pepper="second").verify_password(
        password="OldPass1", password_hash=password_hash
    ) is False


def test_verification_compares_with_constant_time_digest(monkeypatch: pytest.MonkeyPatch) -> None:
    hasher = _hasher()
    password_hash = hasher.hash_password("OldPass1")
    calls: list[tuple[bytes, bytes]] = []
    real_compare = hmac.compare_digest

    def recording_compare(a: bytes, b: bytes) -> bool:
        calls.append((a, b))
        return real_compare(a, b)

    monkeypatch.setattr(hmac, "compare_digest", recording_compare)

    assert hasher.verify_password(password="OldPass1", password_hash=password_hash) is True
    assert hasher.verify_password(password="Wrong1", password_hash=password_hash) is False
    assert len(calls) == 2
    assert all(stored == password_hash.encode("utf-8") for _, stored in calls)


def test_secrets_longer_than_bcrypt_limit_still_verify() -> None:
    hasher = _hasher()
    password = "A1b" * 40

    password_hash = hasher.hash_password(password)

    assert hasher.verify_password(password=password, password_hash=password_hash) is True


def test_authenticatable_salt_returns_prefix_or_none() -> None:
    hasher = _hasher()
    password_hash = hasher.hash_password("OldPass1")

    assert hasher.authenticatable_salt(password_hash) == password_hash[:29]
    assert hasher.authenticatable_salt("") is None
    assert hasher.authenticatable_salt(None) is None
