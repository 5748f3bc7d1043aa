"""
Module 01 - Schemas
File: __init__.py

Purpose: Export the public API for the schemas module.
"""

# Error codes and exceptions
from .errors import (
    BodyFileError,
    BodyReadError,
    ConfigurationException,
    DecodeError,
    ErrorCodes,
    HeaderFormatError,
    JsonCurlException,
    MissingBodyError,
    TooManyRedirectsError,
    TransportError,
    UrlError,
)

# Request configuration
from .request import (
    BODY_REQUIRED_METHODS,
    HEAD,
    HttpMethod,
    RequestSpec,
)

__all__ = [
    # Errors
    "BodyFileError",
    "BodyReadError",
    "ConfigurationException",
    "DecodeError",
    "ErrorCodes",
    "HeaderFormatError",
    "JsonCurlException",
    "MissingBodyError",
    "TooManyRedirectsError",
    "TransportError",
    "UrlError",
    # Request
    "BODY_REQUIRED_METHODS",
    "HEAD",
    "HttpMethod",
    "RequestSpec",
]
