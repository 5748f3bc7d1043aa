"""
Common test fixtures shared by all modules.

Provides factory functions for:
- RequestSpec
- requests.Response / HttpResponse canned responses
- a fake requests Session that records what was sent
- argparse Namespaces as produced by the CLI parser
"""

import re
from argparse import Namespace
from datetime import timedelta
from functools import partial
from typing import Any, Optional
from unittest.mock import Mock

import requests
from requests.structures import CaseInsensitiveDict

from core.config import RuntimeConfig
from core.http.client import HttpResponse
from core.schemas.request import RequestSpec


_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(text: str) -> str:
    """Remove terminal color escape sequences."""
    return _ANSI_RE.sub("", text)


# =============================================================================
# RequestSpec Factory
# =============================================================================

def make_request_spec(
    url: str = "http://example.com/api",
    method: str = "GET",
    body: Optional[str] = None,
    headers: Optional[list[str]] = None,
    follow_redirects: bool = False,
    head_only: bool = False,
) -> RequestSpec:
    """Create a RequestSpec for testing."""
    return RequestSpec(
        method=method,
        url=url,
        body=body,
        headers=headers or [],
        follow_redirects=follow_redirects,
        head_only=head_only,
    )


# =============================================================================
# Response Factories
# =============================================================================

def make_requests_response(
    status_code: int = 200,
    content: bytes = b"{}",
    headers: Optional[dict[str, str]] = None,
    url: str = "http://example.com/api",
) -> requests.Response:
    """Create a fully-read requests.Response without a network connection."""
    response = requests.Response()
    response.status_code = status_code
    response._content = content
    response._content_consumed = True
    response.headers = CaseInsensitiveDict(headers or {})
    response.url = url
    response.elapsed = timedelta(milliseconds=5)
    return response


def make_http_response(
    status_code: int = 200,
    content: bytes = b"{}",
    headers: Optional[dict[str, str]] = None,
    url: str = "http://example.com/api",
) -> HttpResponse:
    """Create an HttpResponse as returned by HttpClient.send."""
    return HttpResponse(
        status_code=status_code,
        content=content,
        headers=headers or {},
        url=url,
    )


# =============================================================================
# Fake Session
# =============================================================================

def make_session(*results: Any) -> Mock:
    """
    Create a fake requests Session.

    Each call to session.request returns (or raises) the next item of
    results. Every call is recorded in session.sent with the body read
    out of file objects, so tests can inspect exactly what went out.
    should_strip_auth keeps the real requests behavior.
    """
    queue = list(results)
    session = Mock()
    session.sent = []

    def _request(**kwargs: Any) -> Any:
        data = kwargs.get("data")
        if hasattr(data, "read"):
            data = data.read()
        session.sent.append({**kwargs, "body": data})
        item = queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    session.request.side_effect = _request
    session.should_strip_auth.side_effect = partial(requests.Session.should_strip_auth, session)
    return session


# =============================================================================
# CLI Namespace Factory
# =============================================================================

def make_args(
    url: str = "example.com/api",
    request: str = "GET",
    data: Optional[str] = None,
    header: Optional[list[str]] = None,
    location: bool = False,
    head: bool = False,
    runtime_config: Optional[RuntimeConfig] = None,
) -> Namespace:
    """Create a Namespace shaped like the parsed jcurl arguments."""
    return Namespace(
        url=[url],
        request=request,
        data=data,
        header=header or [],
        location=location,
        head=head,
        log_level=None,
        runtime_config=runtime_config or RuntimeConfig(),
    )
