"""
Visit Executor

Issues the request described by a RequestSpec. The transport never
follows redirects itself; when the RequestSpec asks for it, visit re-issues
the request at the Location of each 3xx, up to MAX_REDIRECTS hops.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from core.http.client import HttpClient, HttpResponse
from core.http.request import AUTH_HEADERS, build_request, remove_headers
from core.http.url import host_of, resolve_location
from core.schemas.errors import TooManyRedirectsError
from core.schemas.request import HEAD, RequestSpec


logger = logging.getLogger(__name__)


MAX_REDIRECTS = 10

# Statuses that are followed at all
FOLLOWED_STATUSES = frozenset({301, 302, 303, 307, 308})
# Statuses that replay method and body unchanged
PRESERVE_METHOD_STATUSES = frozenset({307, 308})


@dataclass
class VisitResult:
    """Final response of a visit plus the method that produced it."""
    response: HttpResponse
    method: str
    visited: list[str] = field(default_factory=list)

    @property
    def redirects(self) -> int:
        return max(len(self.visited) - 1, 0)


def is_redirect(response: HttpResponse) -> bool:
    """True for any status in the redirect class (300-399)."""
    return response.is_redirect


def visit(spec: RequestSpec, client: HttpClient) -> VisitResult:
    """
    Perform one visit.

    Without follow_redirects exactly one request is sent and its
    response returned verbatim, 3xx included.

    Raises:
        BodyFileError: the @file body cannot be opened (before sending)
        TransportError, BodyReadError: network failures
        TooManyRedirectsError: more than MAX_REDIRECTS hops
    """
    url = spec.url
    method = spec.effective_method
    include_body = True
    keep_host = True
    strip_auth = False
    visited: list[str] = []

    while True:
        outbound = build_request(spec, url=url, method=method, include_body=include_body)
        if not keep_host:
            outbound.host = None
        if strip_auth:
            remove_headers(outbound, AUTH_HEADERS)
        with outbound:
            response = client.send(outbound)
        visited.append(url)

        if not spec.follow_redirects or not _should_follow(response):
            return VisitResult(response=response, method=method, visited=visited)

        if len(visited) > MAX_REDIRECTS:
            raise TooManyRedirectsError(MAX_REDIRECTS, visited)

        next_url = resolve_location(url, response.location or "")
        if response.status_code not in PRESERVE_METHOD_STATUSES:
            if method != HEAD:
                method = "GET"
            include_body = False
        keep_host = keep_host and host_of(next_url) == host_of(spec.url)
        # Once dropped, credentials stay dropped for the rest of the chain
        strip_auth = strip_auth or client.should_strip_auth(url, next_url)

        logger.info("Following %d redirect to %s", response.status_code, next_url)
        url = next_url


def _should_follow(response: HttpResponse) -> bool:
    return (
        is_redirect(response)
        and response.status_code in FOLLOWED_STATUSES
        and bool(response.location)
    )
