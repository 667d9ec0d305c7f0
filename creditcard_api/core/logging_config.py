"""Logging setup shared by the HTTP app and the operator scripts."""

from __future__ import annotations

import logging

from .config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str | None = None) -> None:
    settings = get_settings()
    name = (level or settings.log_level).upper()
    logging.basicConfig(level=logging.getLevelName(name), format=LOG_FORMAT)
    # SQL echo goes through the sqlalchemy.engine logger
    if settings.sql_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)


def mask_number(number: str | None) -> str:
    """Keep only the last four digits of a card number for log output."""
    value = number or ""
    if len(value) <= 4:
        return value
    return "*" * (len(value) - 4) + value[-4:]
