"""Builders wiring the credential services to SQLAlchemy and bcrypt adapters."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import sqlalchemy as sa

from credential_guard.application.services.auth_service import (
    AuthService,
    PostAuthenticationHook,
)
from credential_guard.application.services.credential_service import CredentialService
from credential_guard.config.settings import Settings, load_settings
from credential_guard.infrastructure.db.credential_repository import (
    SqlAlchemyCredentialRepository,
)
from credential_guard.infrastructure.db.session import create_engine
from credential_guard.infrastructure.logging import configure_logging
from credential_guard.infrastructure.security.password_hasher import BcryptPasswordHasher

logger = logging.getLogger(__name__)


class MissingDatabaseUrlError(ValueError):
    """Raised when services are built without an engine or DATABASE_URL."""

    def __init__(self) -> None:
        super().__init__("DATABASE_URL is required when no engine is provided")


@dataclass(frozen=True)
class CredentialServices:
    """Credential and authentication services sharing one repository and hasher."""

    credentials: CredentialService
    auth: AuthService
    records: SqlAlchemyCredentialRepository


def build_credential_services(
    *,
    settings: Settings | None = None,
    engine: sa.Engine | None = None,
    post_authentication_hook: PostAuthenticationHook | None = None,
) -> CredentialServices:
    """Build credential services with SQLAlchemy-backed dependencies."""

    if settings is None:
        settings = load_settings()
        configure_logging(level=settings.log_level)

    if engine is None:
        if settings.database_url is None:
            raise MissingDatabaseUrlError()
        engine = create_engine(settings.database_url)

    records = SqlAlchemyCredentialRepository(engine)
    password_hasher = BcryptPasswordHasher(settings.credential_config())
    logger.info(
        "credential_services_built stretches=%s min_length=%s report_all_failures=%s",
        settings.credential_stretches,
        settings.password_min_length,
        settings.password_report_all_failures,
    )
    return CredentialServices(
        credentials=CredentialService(
            records=records,
            password_hasher=password_hasher,
            policy=settings.password_policy(),
        ),
        auth=AuthService(
            records=records,
            password_hasher=password_hasher,
            post_authentication_hook=post_authentication_hook,
        ),
        records=records,
    )
