"""Exception hierarchy for Kalshi client errors.

Three families reach the caller: ``KalshiAPIError`` for anything that went
wrong on the wire, ``KalshiDecodeError`` when a response does not match the
expected JSON shape, and ``KalshiQueryEncodingError`` when a query parameter
cannot be serialised.  None of them are retried by the client.
"""

from typing import Any


class KalshiError(Exception):
    """Base exception for all Kalshi client errors."""


class KalshiAPIError(KalshiError):
    """Error returned by (or on the way to) the Kalshi API.

    Args:
        message: Human-readable description of the error.
        status_code: HTTP status code, or ``None`` when no response arrived.

    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initialize API error.

        Args:
            message: Human-readable description of the error.
            status_code: HTTP status code if available.

        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class KalshiTransportError(KalshiAPIError):
    """Network-level failure before an HTTP response was received."""


class KalshiValidationError(KalshiAPIError):
    """Validation error (400)."""


class KalshiAuthenticationError(KalshiAPIError):
    """Authentication error (401/403) or missing signing credentials."""


class KalshiNotFoundError(KalshiAPIError):
    """Resource not found error (404)."""


class KalshiRateLimitError(KalshiAPIError):
    """Rate limit exceeded error (429)."""


class KalshiDecodeError(KalshiError):
    """Response payload does not match the expected wire shape.

    Carry the JSON path of the offending field (``$.markets[1].result``)
    and the value found there so upstream schema drift can be diagnosed
    from the error alone.

    Args:
        message: Description of what was expected.
        path: JSON path of the offending field.
        value: Offending raw value, if one was present.

    """

    def __init__(self, message: str, path: str = "$", value: Any = None) -> None:
        """Initialize decode error.

        Args:
            message: Description of what was expected.
            path: JSON path of the offending field.
            value: Offending raw value, if one was present.

        """
        detail = f"{path}: {message}"
        if value is not None:
            detail = f"{detail} (got {value!r})"
        super().__init__(detail)
        self.path = path
        self.value = value


class KalshiQueryEncodingError(KalshiError):
    """A query parameter value cannot be written into a URL.

    Args:
        message: Description of the failure.
        name: Name of the offending query parameter.

    """

    def __init__(self, message: str, name: str) -> None:
        """Initialize query encoding error.

        Args:
            message: Description of the failure.
            name: Name of the offending query parameter.

        """
        super().__init__(f"{name}: {message}")
        self.name = name
