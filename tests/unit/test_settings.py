from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from credential_guard.config.settings import CredentialConfig, Settings
from credential_guard.domain.auth.password_policy import PasswordPolicy


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    for name in (
        "CREDENTIAL_PEPPER",
        "CREDENTIAL_STRETCHES",
        "PASSWORD_MIN_LENGTH",
        "PASSWORD_REPORT_ALL_FAILURES",
        "DATABASE_URL",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults_build_default_config_and_policy() -> None:
    settings = Settings()

    assert settings.credential_config() == CredentialConfig(pepper="", stretches=12)
    assert settings.password_policy() == PasswordPolicy(min_length=10, report_all_failures=True)
    assert settings.database_url is None
    assert settings.log_level == "INFO"


def test_environment_overrides_are_applied(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CREDENTIAL_PEPPER", "s3cret")
    monkeypatch.setenv("CREDENTIAL_STRETCHES", "4")
    monkeypatch.setenv("PASSWORD_MIN_LENGTH", "12")
    monkeypatch.setenv("PASSWORD_REPORT_ALL_FAILURES", "false")

    settings = Settings()

    assert settings.credential_config() == CredentialConfig(pepper="s3cret", stretches=4)
    assert settings.password_policy() == PasswordPolicy(min_length=12, report_all_failures=False)


@pytest.mark.parametrize("stretches", ["3", "32"])
def test_stretches_outside_bcrypt_range_are_rejected(
    monkeypatch: pytest.MonkeyPatch,
    stretches: str,
) -> None:
    monkeypatch.setenv("CREDENTIAL_STRETCHES", stretches)

    with pytest.raises(ValidationError):
        Settings()
