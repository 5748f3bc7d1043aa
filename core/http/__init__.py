"""
HTTP Module

URL normalization, request building and the single-visit transport.
"""

from .client import HttpClient, HttpResponse, TransportSettings, DEFAULT_TRANSPORT
from .request import OutboundRequest, build_request, create_body, parse_header
from .url import normalize_url
from .visit import MAX_REDIRECTS, VisitResult, is_redirect, visit

__all__ = [
    "HttpClient",
    "HttpResponse",
    "TransportSettings",
    "DEFAULT_TRANSPORT",
    "OutboundRequest",
    "build_request",
    "create_body",
    "parse_header",
    "normalize_url",
    "MAX_REDIRECTS",
    "VisitResult",
    "is_redirect",
    "visit",
]
