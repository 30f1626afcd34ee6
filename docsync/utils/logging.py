"""Logging setup for the documentation synchronizer.

Attaches console and optional file handlers to the ``docsync``
package logger, so every module logger created with
``logging.getLogger(__name__)`` inherits them. Level and format come
from the ``logging`` section of config.yaml.
"""

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "docsync"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _with_format(
    handler: logging.Handler, level: int, formatter: logging.Formatter
) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    level: str = "INFO",
    log_format: str = DEFAULT_FORMAT,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """Route the synchronizer's log records to stdout and an optional file.

    Handlers from a previous call are removed and closed first, so a
    process that invokes the CLI several times (the test suite does)
    never prints a pipeline message twice.

    Args:
        level: Level name such as ``"DEBUG"`` or ``"warning"``. Unknown
            names fall back to INFO.
        log_format: ``logging.Formatter`` format string.
        log_file: Optional path that also receives every record.

    Returns:
        The ``docsync`` package logger.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    package_logger.setLevel(numeric_level)

    formatter = logging.Formatter(log_format)
    package_logger.addHandler(
        _with_format(logging.StreamHandler(sys.stdout), numeric_level, formatter)
    )
    if log_file:
        package_logger.addHandler(
            _with_format(
                logging.FileHandler(log_file, encoding="utf-8"),
                numeric_level,
                formatter,
            )
        )

    package_logger.debug("Logging initialized at level %s", level)
    return package_logger
