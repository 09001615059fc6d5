"""Core client modules."""

from ontraport_api.core.config import Settings, settings
from ontraport_api.core.errors import (
    ConfigurationError,
    ConversionError,
    ErrorCode,
    OntraportAuthenticationError,
    OntraportConnectionError,
    OntraportError,
    OntraportForbiddenError,
    OntraportNotFoundError,
    OntraportRateLimitError,
    OntraportServerError,
    OntraportValidationError,
)
from ontraport_api.core.logging import LoggerAdapter, get_logger, setup_logging

__all__ = [
    "Settings",
    "settings",
    "ErrorCode",
    "OntraportError",
    "OntraportConnectionError",
    "OntraportAuthenticationError",
    "OntraportForbiddenError",
    "OntraportNotFoundError",
    "OntraportValidationError",
    "OntraportRateLimitError",
    "OntraportServerError",
    "ConfigurationError",
    "ConversionError",
    "LoggerAdapter",
    "get_logger",
    "setup_logging",
]
