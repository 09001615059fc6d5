"""Logging configuration for the client."""

import logging
import sys
from typing import Any, Optional

from ontraport_api.core.config import settings

LOGGER_NAMESPACE = "ontraport_api"


def setup_logging(debug: Optional[bool] = None) -> None:
    """Configure package logging.

    Attaches a stdout handler to the package logger. Applications that already
    configure logging can skip this and use the ``ontraport_api`` logger directly.

    Args:
        debug: Log at DEBUG level. Defaults to ``settings.debug``.
    """
    if debug is None:
        debug = settings.debug
    log_level = logging.DEBUG if debug else logging.INFO

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    package_logger = logging.getLogger(LOGGER_NAMESPACE)
    package_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a specific module.

    Args:
        name: The name of the module (typically __name__)

    Returns:
        A logger under the ``ontraport_api`` namespace

    Usage:
        logger = get_logger(__name__)
        logger.info("Fetching rules")
    """
    if name == LOGGER_NAMESPACE or name.startswith(f"{LOGGER_NAMESPACE}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")


class LoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that adds context to log messages.

    Usage:
        logger = LoggerAdapter(get_logger(__name__), {"object_type_id": 6})
        logger.info("Selecting")  # Logs: "Selecting - object_type_id=6"
    """

    def process(self, msg: str, kwargs: Any) -> tuple[str, Any]:
        """Process the log message to include extra context."""
        extra = " - ".join(f"{k}={v}" for k, v in self.extra.items())
        return f"{msg} - {extra}" if extra else msg, kwargs
