"""Logging setup shared by the client and the CLI."""

from __future__ import annotations

import logging

LOGGER_NAME = "mcc_serviceability"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging for CLI runs.

    urllib3 connection messages are only shown in verbose mode.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("urllib3").setLevel(logging.DEBUG if verbose else logging.WARNING)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package logger, or a named child of it."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}" if name else LOGGER_NAME)
