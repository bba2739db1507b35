"""Logging utilities and report sinks for genmeta."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Protocol

_LOGGER_NAME = "genmeta"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the genmeta hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *,
    verbose: bool = False,
    log_file: Path | None = None,
    reference: str | None = None,
) -> logging.Logger:
    """Route genmeta records to stderr and, optionally, a log file.

    ``reference`` names the reference directory being processed; it prefixes
    every console line so output from several runs in one CI log stays apart.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    prefix = f"{_LOGGER_NAME}:{reference}" if reference else _LOGGER_NAME
    prefix = prefix.replace("%", "%%")
    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(f"[{prefix}] %(levelname)s %(message)s"))
    logger.addHandler(console)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter(f"%(asctime)s %(levelname)s [{prefix}] %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


class ReportSink(Protocol):
    """Receives recoverable and fatal problems found during generation."""

    def error(self, message: str) -> None:
        """Report a problem; processing continues."""

    def fatal(self, message: str) -> None:
        """Report a problem that ends the run."""


class LoggingSink:
    """Sink that forwards reports to a standard logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or get_logger("report")

    def error(self, message: str) -> None:
        self.logger.error(message)

    def fatal(self, message: str) -> None:
        self.logger.critical(message)


class RecordingSink:
    """Sink that keeps every report in memory."""

    def __init__(self) -> None:
        self.errors: List[str] = []
        self.fatals: List[str] = []

    def error(self, message: str) -> None:
        self.errors.append(message)

    def fatal(self, message: str) -> None:
        self.fatals.append(message)


__all__ = [
    "LoggingSink",
    "RecordingSink",
    "ReportSink",
    "configure_logging",
    "get_logger",
]
