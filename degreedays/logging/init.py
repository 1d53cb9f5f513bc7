from __future__ import annotations

import logging
import sys

"""Console logging for the degree-day viewer.

The viewer has no other output channel: record lines, errors and the closing
SUMMARY line are all log records on stdout, each prefixed with its level
label (DEBUG|INFO|WARN|ERROR|CRITICAL|SUMMARY). Scripts that wrap the CLI
grep for ``SUMMARY year=`` and for ``ERROR Error:``.

Fetcher, reader and resolver modules log through ``logging.getLogger(__name__)``
under the ``degreedays`` hierarchy; their records reach the single stdout
handler installed here, and only show up at DEBUG when ``--debug`` is given.
"""

__all__ = [
    "LOGGER_NAME",
    "SUMMARY_LEVEL",
    "LabeledFormatter",
    "setup_logging",
    "get_logger",
    "log_summary",
    "set_debug",
    "reset_logging",
]

LOGGER_NAME = "degreedays"

# one line per lookup, above INFO so it survives a quieter handler
SUMMARY_LEVEL = 25

_logger: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    """Render a record as ``LABEL message``; WARNING is shortened to WARN."""

    LEVEL_LABELS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
        SUMMARY_LEVEL: "SUMMARY",
    }

    def format(self, record: logging.LogRecord) -> str:
        level_label = self.LEVEL_LABELS.get(record.levelno, record.levelname)
        return f"{level_label} {record.getMessage()}"


def setup_logging() -> logging.Logger:
    """Attach the stdout handler to the ``degreedays`` logger.

    Calling it again returns the same logger without adding a second
    handler, so the CLI and library callers can both invoke it.
    """
    global _logger

    if _logger is not None:
        return _logger

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.INFO)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.INFO)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)

    # host application's root handlers must not print viewer lines twice
    logger.propagate = False

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    """Return the ``degreedays`` logger, configuring it on first use."""
    if _logger is None:
        return setup_logging()
    return _logger


def log_summary(message: str) -> None:
    get_logger().log(SUMMARY_LEVEL, message)


def set_debug(logger: logging.Logger) -> None:
    """Switch the logger and its handlers to DEBUG for ``--debug`` runs."""
    for h in logger.handlers:
        h.setLevel(logging.DEBUG)
    logger.setLevel(logging.DEBUG)


def reset_logging() -> None:
    """Detach the viewer's handlers and forget the configured logger.

    The next ``setup_logging()`` starts from a clean ``degreedays`` logger;
    tests call this before each CLI run.
    """
    global _logger
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    _logger = None
