"""Logging configuration for issuedesk.

Logging is off unless asked for. `-v` logs INFO and `-vv` DEBUG to
stderr, which the TUI hides while it runs; `--log-file` keeps a copy that
can be tailed during a session.
"""

import logging
import sys
from datetime import UTC, datetime
from pathlib import Path

LOGGER_NAME = "issuedesk"

_FORMATTER = logging.Formatter(
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def _install(logger: logging.Logger, handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    handler.setFormatter(_FORMATTER)
    handler._issuedesk = True  # type: ignore[attr-defined]
    logger.addHandler(handler)


def setup_logging(verbose: int = 0, log_file: Path | None = None) -> None:
    """Configure the `issuedesk` logger.

    Args:
        verbose: 0 = off, 1 = INFO, 2 or more = DEBUG
        log_file: Also write to this file (INFO unless more verbose)
    """
    if verbose == 0 and log_file is None:
        return

    level = logging.DEBUG if verbose >= 2 else logging.INFO
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Calling again replaces the handlers from the previous call
    for handler in [h for h in logger.handlers if getattr(h, "_issuedesk", False)]:
        logger.removeHandler(handler)
        handler.close()

    if verbose > 0:
        _install(logger, logging.StreamHandler(sys.stderr), level)
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        _install(logger, logging.FileHandler(log_file), level)

    started = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S UTC")
    level_name = logging.getLevelName(level)
    logger.info("---- issuedesk starting | %s | level=%s ----", started, level_name)
