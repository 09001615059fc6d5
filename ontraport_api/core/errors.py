"""Error taxonomy for the Ontraport client with suggested actions.

Every exception raised by this package derives from OntraportError and carries
a machine-readable ErrorCode, a suggested action and whether the operation can
be retried.
"""

from enum import Enum
from typing import Any, Optional


class ErrorCode(str, Enum):
    """Standardized error codes for the client."""

    # Transport errors
    CONNECTION_ERROR = "CONNECTION_ERROR"
    AUTH_ERROR = "AUTH_ERROR"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    RATE_LIMITED = "RATE_LIMITED"
    SERVER_ERROR = "SERVER_ERROR"
    API_ERROR = "API_ERROR"

    # Local errors
    CONVERSION_ERROR = "CONVERSION_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


SUGGESTED_ACTIONS = {
    ErrorCode.CONNECTION_ERROR: "Cannot reach Ontraport. Check network access and the configured base URL.",
    ErrorCode.AUTH_ERROR: "Ontraport rejected the credentials. Verify ONTRAPORT_APP_ID and ONTRAPORT_API_KEY.",
    ErrorCode.FORBIDDEN: "The API key lacks permission for this object type.",
    ErrorCode.NOT_FOUND: "The requested record or endpoint does not exist.",
    ErrorCode.VALIDATION_ERROR: "Ontraport refused the request parameters. Review the submitted fields.",
    ErrorCode.RATE_LIMITED: "Too many requests to Ontraport. Wait before trying again.",
    ErrorCode.SERVER_ERROR: "Ontraport server error. Try again later.",
    ErrorCode.API_ERROR: "Ontraport returned an unexpected response.",
    ErrorCode.CONVERSION_ERROR: "A field holds a value that cannot be converted to its declared type.",
    ErrorCode.CONFIGURATION_ERROR: "Set the missing ONTRAPORT_* settings in the environment or .env file.",
}

RETRYABLE_ERRORS = {
    ErrorCode.CONNECTION_ERROR,
    ErrorCode.RATE_LIMITED,
    ErrorCode.SERVER_ERROR,
}


class OntraportError(Exception):
    """Base exception for every error raised by the client."""

    error_code: ErrorCode = ErrorCode.API_ERROR

    def __init__(
        self,
        message: Optional[str] = None,
        error_code: Optional[ErrorCode] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        if error_code is not None:
            self.error_code = error_code
        self.details = details
        self.suggested_action = SUGGESTED_ACTIONS.get(self.error_code)
        super().__init__(message or self.suggested_action or "An error occurred")

    @property
    def is_retryable(self) -> bool:
        return self.error_code in RETRYABLE_ERRORS


class OntraportConnectionError(OntraportError):
    """Raised when the connection to Ontraport fails or times out."""

    error_code = ErrorCode.CONNECTION_ERROR


class OntraportAuthenticationError(OntraportError):
    """Raised when authentication fails (401)."""

    error_code = ErrorCode.AUTH_ERROR


class OntraportForbiddenError(OntraportError):
    """Raised when access is forbidden (403)."""

    error_code = ErrorCode.FORBIDDEN


class OntraportNotFoundError(OntraportError):
    """Raised when a resource is not found (404)."""

    error_code = ErrorCode.NOT_FOUND


class OntraportValidationError(OntraportError):
    """Raised when request validation fails (400, 422)."""

    error_code = ErrorCode.VALIDATION_ERROR


class OntraportRateLimitError(OntraportError):
    """Raised when rate limited (429)."""

    error_code = ErrorCode.RATE_LIMITED

    def __init__(self, message: str, retry_after: Optional[int] = None):
        super().__init__(message)
        self.retry_after = retry_after


class OntraportServerError(OntraportError):
    """Raised when the server returns a 5xx error."""

    error_code = ErrorCode.SERVER_ERROR


class ConfigurationError(OntraportError):
    """Raised when required settings are missing."""

    error_code = ErrorCode.CONFIGURATION_ERROR


class ConversionError(OntraportError, ValueError):
    """Raised when a raw value cannot be parsed into, or rendered from, a typed value.

    Attributes:
        value: The raw string or typed value that failed to convert
        target: Name of the type the conversion was aiming for
    """

    error_code = ErrorCode.CONVERSION_ERROR

    def __init__(self, value: Any, target: str, reason: Optional[str] = None):
        self.value = value
        self.target = target
        message = f"Cannot convert {value!r} to {target}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, details={"value": repr(value), "target": target})
