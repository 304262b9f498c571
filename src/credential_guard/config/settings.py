"""Runtime settings loaded from environment variables."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from credential_guard.domain.auth.password_policy import DEFAULT_MIN_LENGTH, PasswordPolicy

NonEmptyStr = Annotated[str, Field(min_length=1)]
PositiveInt = Annotated[int, Field(gt=0)]
BcryptCost = Annotated[int, Field(ge=4, le=31)]


@dataclass(frozen=True)
class CredentialConfig:
    """Per-record-type digest configuration.

    Both values must stay stable for the lifetime of stored digests: rotating
    either one makes every previously stored hash fail verification.
    """

    pepper: str = ""
    stretches: int = 12


class Settings(BaseSettings):
    """Environment-driven application settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    credential_pepper: str = Field(default="", validation_alias="CREDENTIAL_PEPPER")
    credential_stretches: BcryptCost = Field(
        default=12,
        validation_alias="CREDENTIAL_STRETCHES",
    )
    password_min_length: PositiveInt = Field(
        default=DEFAULT_MIN_LENGTH,
        validation_alias="PASSWORD_MIN_LENGTH",
    )
    password_report_all_failures: bool = Field(
        default=True,
        validation_alias="PASSWORD_REPORT_ALL_FAILURES",
    )
    database_url: NonEmptyStr | None = Field(default=None, validation_alias="DATABASE_URL")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    def credential_config(self) -> CredentialConfig:
        """Build the digest configuration injected into the password hasher."""

        return CredentialConfig(
            pepper=self.credential_pepper,
            stretches=self.credential_stretches,
        )

    def password_policy(self) -> PasswordPolicy:
        """Build the password policy injected into the credential service."""

        return PasswordPolicy(
            min_length=self.password_min_length,
            report_all_failures=self.password_report_all_failures,
        )


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Load and cache application settings."""

    return Settings()
