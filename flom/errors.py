"""Exception types raised by flom."""

from typing import Optional


class FlomError(Exception):
    """Base class for all flom errors."""

    prefix = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.prefix}: {self.message}"


class InvalidInput(FlomError):
    """Malformed URL or unrecognized target string."""

    prefix = "invalid input"


class UnsupportedInput(FlomError):
    """Well-formed request the service cannot satisfy."""

    prefix = "unsupported input"


class ConfigError(FlomError):
    """Configuration file could not be read, parsed or written."""

    prefix = "configuration error"


class NetworkError(FlomError):
    """Transport-level failure (DNS, TLS, timeout, connection reset)."""

    prefix = "network error"


class ApiError(FlomError):
    """Non-success HTTP status from a remote API.

    The raw response body is kept verbatim for diagnostics.
    """

    prefix = "api error"

    def __init__(
        self, message: str, status: Optional[int] = None, body: Optional[str] = None
    ):
        super().__init__(message)
        self.status = status
        self.body = body


class ParseError(FlomError):
    """Response body did not match the expected schema."""

    prefix = "parse error"
