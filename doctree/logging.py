"""Logging for doctree runs.

The console follows ``--verbose``. A run can also keep a diagnostic log
(``log_file`` in .doctree.yml or ``--log-file``) that always records debug
detail, so failed imports and skipped types stay inspectable after a quiet run.
"""

from __future__ import annotations

import logging
from pathlib import Path

ROOT_LOGGER = "doctree"
CONSOLE_FORMAT = "[doctree] %(levelname)s %(message)s"
DIAGNOSTIC_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Logger for one doctree component, e.g. ``get_logger("loader")``."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER)


def _detach_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Route doctree records to stderr and, when given, a diagnostic file.

    The diagnostic file is truncated per run and receives DEBUG records even
    when the console only shows INFO.
    """
    console_level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(logging.DEBUG if log_file is not None else console_level)
    logger.propagate = False
    _detach_handlers(logger)

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        diagnostics = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        diagnostics.setLevel(logging.DEBUG)
        diagnostics.setFormatter(logging.Formatter(DIAGNOSTIC_FORMAT))
        logger.addHandler(diagnostics)

    return logger


def reset_logging() -> None:
    """Drop doctree handlers and let records propagate to the root logger again."""
    logger = logging.getLogger(ROOT_LOGGER)
    _detach_handlers(logger)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


__all__ = ["configure_logging", "get_logger", "reset_logging"]
