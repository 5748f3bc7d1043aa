"""
Test fixtures package for jsoncurl tests.

Factories for request specs, canned responses and a fake requests
Session, so no test touches the network.

Usage:
    from fixtures import make_request_spec, make_session, make_requests_response

    def test_something():
        session = make_session(make_requests_response(200, b'{"a": 1}'))
"""

from .common import (
    make_args,
    make_http_response,
    make_request_spec,
    make_requests_response,
    make_session,
    strip_ansi,
)

__all__ = [
    "make_args",
    "make_http_response",
    "make_request_spec",
    "make_requests_response",
    "make_session",
    "strip_ansi",
]
