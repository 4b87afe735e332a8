"""Logging setup for the receiptdesk service.

Usage:
    from receiptdesk.core.logging import get_logger
    logger = get_logger(__name__)

The level comes from the ``LOG_LEVEL`` setting (DEBUG, INFO, WARNING, ERROR).
"""

import logging
import sys

from receiptdesk.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_FORMAT_DEBUG = "%(asctime)s %(levelname)s [%(name)s:%(lineno)d] %(message)s"

ROOT_LOGGER_NAME = "receiptdesk"

_logging_configured = False


def configure_logging(level: int | None = None) -> None:
    """Attach a stderr handler to the ``receiptdesk`` logger namespace.

    Args:
        level: Log level to use. If None, reads ``settings.LOG_LEVEL``.
    """
    global _logging_configured

    if _logging_configured:
        return

    if level is None:
        level = logging.getLevelName(settings.LOG_LEVEL.upper())
        if not isinstance(level, int):
            level = logging.INFO

    log_format = LOG_FORMAT_DEBUG if level == logging.DEBUG else LOG_FORMAT

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(log_format))

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    root_logger.addHandler(handler)
    root_logger.propagate = False

    _logging_configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the service namespace.

    Module names inside the package (``receiptdesk.x.y``) already live in the
    namespace; anything else gets prefixed.
    """
    configure_logging()

    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
