"""Shared logging configuration helpers for processes embedding the credential core."""

from __future__ import annotations

import logging

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(*, level: str, echo_sql: bool = False) -> None:
    """Configure process logging with consistent format and runtime level.

    SQLAlchemy statement logging stays at WARNING unless echo_sql is set, so
    bound parameters such as digests never reach INFO output by accident.
    """

    normalized_level = level.strip().upper() if level.strip() else "INFO"
    resolved_level = getattr(logging, normalized_level, logging.INFO)

    logging.basicConfig(
        level=resolved_level,
        format=_LOG_FORMAT,
    )
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if echo_sql else logging.WARNING
    )
