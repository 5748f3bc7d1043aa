"""
Module 01 - Schemas
File: errors.py

Purpose: Error taxonomy for jsoncurl.
Every failure in the request/visit/render flow is raised as a
JsonCurlException subclass carrying a stable machine-readable code.
The CLI turns them into a message and a non-zero exit status.
"""

from typing import Any


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Configuration Errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    INVALID_URL = "INVALID_URL"
    INVALID_HEADER = "INVALID_HEADER"
    MISSING_BODY = "MISSING_BODY"

    # I/O Errors
    BODY_FILE_UNREADABLE = "BODY_FILE_UNREADABLE"
    TRANSPORT_FAILURE = "TRANSPORT_FAILURE"
    BODY_READ_FAILURE = "BODY_READ_FAILURE"
    TOO_MANY_REDIRECTS = "TOO_MANY_REDIRECTS"

    # Decode Errors
    RESPONSE_DECODE_ERROR = "RESPONSE_DECODE_ERROR"


CONFIGURATION_CODES = frozenset({
    ErrorCodes.CONFIGURATION_ERROR,
    ErrorCodes.INVALID_URL,
    ErrorCodes.INVALID_HEADER,
    ErrorCodes.MISSING_BODY,
})


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class JsonCurlException(Exception):
    """
    Base exception for all jsoncurl errors.

    Carries a stable code plus structured details so the CLI boundary
    can report and log failures uniformly.
    """

    def __init__(
        self,
        message: str,
        code: str = "JSONCURL_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    @property
    def is_configuration_error(self) -> bool:
        """True when the failure was caused by user input rather than I/O."""
        return self.code in CONFIGURATION_CODES

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class ConfigurationException(JsonCurlException):
    """Exception raised when the request configuration is unusable."""

    def __init__(
        self,
        message: str,
        code: str = ErrorCodes.CONFIGURATION_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, code=code, details=details)


class UrlError(ConfigurationException):
    """Exception raised when the target URL cannot be parsed."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(
            message=f"could not parse url {url!r}: {reason}",
            code=ErrorCodes.INVALID_URL,
            details={"url": url},
        )
        self.url = url


class HeaderFormatError(ConfigurationException):
    """Exception raised for a header that is not of the form 'Key: Value'."""

    def __init__(self, header: str) -> None:
        super().__init__(
            message=f"Header '{header}' has invalid format, missing ':'",
            code=ErrorCodes.INVALID_HEADER,
            details={"header": header},
        )
        self.header = header


class MissingBodyError(ConfigurationException):
    """Exception raised when POST or PUT is used without a body."""

    def __init__(self, method: str) -> None:
        super().__init__(
            message=f"must supply post body using -d when {method} is used",
            code=ErrorCodes.MISSING_BODY,
            details={"method": method},
        )
        self.method = method


class BodyFileError(JsonCurlException):
    """Exception raised when an @file request body cannot be opened."""

    def __init__(self, filename: str, reason: str) -> None:
        super().__init__(
            message=f"failed to open data file {filename}: {reason}",
            code=ErrorCodes.BODY_FILE_UNREADABLE,
            details={"filename": filename},
        )
        self.filename = filename


class TransportError(JsonCurlException):
    """Exception raised for DNS, connect, TLS and timeout failures."""

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(
            message=f"failed to read response: {message}",
            code=ErrorCodes.TRANSPORT_FAILURE,
            details={"url": url} if url else None,
        )
        self.url = url


class BodyReadError(JsonCurlException):
    """Exception raised when the response body cannot be read in full."""

    def __init__(self, message: str) -> None:
        super().__init__(
            message=f"failed to read response body: {message}",
            code=ErrorCodes.BODY_READ_FAILURE,
        )


class TooManyRedirectsError(JsonCurlException):
    """Exception raised when manual redirect following exceeds its limit."""

    def __init__(self, limit: int, visited: list[str]) -> None:
        super().__init__(
            message=f"stopped after {limit} redirects",
            code=ErrorCodes.TOO_MANY_REDIRECTS,
            details={"visited": list(visited)},
        )
        self.limit = limit


class DecodeError(JsonCurlException):
    """Exception raised when a response body is not the expected JSON shape."""

    def __init__(self, message: str) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.RESPONSE_DECODE_ERROR,
        )
