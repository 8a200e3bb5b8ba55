"""Logging configuration helpers."""

from __future__ import annotations

import logging

from hookmock.errors import ConfigurationError

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def resolve_level(level: str) -> int:
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ConfigurationError(f"Unknown log level: {level!r}")
    return numeric


def configure_logging(level: str = "INFO", logger_name: str | None = None) -> None:
    """Configure the root handler, or only the level of ``logger_name``.

    Library code inside a test run passes ``logger_name`` so it never installs
    handlers of its own; the CLI configures the root logger.
    """
    numeric = resolve_level(level)
    if logger_name is not None:
        logging.getLogger(logger_name).setLevel(numeric)
        return
    logging.basicConfig(level=numeric, format=LOG_FORMAT)
