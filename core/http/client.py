"""
HTTP Client

Single-shot transport for jsoncurl. Wraps a requests Session with fixed
timeouts and connection settings and never follows redirects on its own.
"""

from __future__ import annotations

import logging
import socket
from dataclasses import dataclass, field
from typing import Any, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.connection import HTTPConnection

from core.http.request import OutboundRequest
from core.schemas.errors import BodyReadError, TransportError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportSettings:
    """
    Fixed transport constants. Not user-configurable.

    requests has no separate TLS handshake or idle-connection timers:
    the handshake runs under connect_timeout and idle connections die
    with the session at process exit. Expect: 100-continue is never sent.
    """
    max_idle_connections: int = 100
    idle_connection_timeout: float = 90.0
    connect_timeout: float = 30.0
    keep_alive_interval: int = 30
    tls_handshake_timeout: float = 10.0
    expect_continue_timeout: float = 1.0

    @property
    def timeout(self) -> tuple[float, None]:
        """(connect, read) for requests; reading the body is unbounded."""
        return (self.connect_timeout, None)


DEFAULT_TRANSPORT = TransportSettings()


def keep_alive_socket_options(interval: int) -> list[tuple[int, int, int]]:
    """Socket options enabling TCP keep-alive probes every interval seconds."""
    options = list(HTTPConnection.default_socket_options)
    options.append((socket.SOL_SOCKET, socket.SO_KEEPALIVE, 1))
    if hasattr(socket, "TCP_KEEPIDLE"):
        options.append((socket.IPPROTO_TCP, socket.TCP_KEEPIDLE, interval))
    elif hasattr(socket, "TCP_KEEPALIVE"):
        # macOS spells the idle option differently
        options.append((socket.IPPROTO_TCP, socket.TCP_KEEPALIVE, interval))
    if hasattr(socket, "TCP_KEEPINTVL"):
        options.append((socket.IPPROTO_TCP, socket.TCP_KEEPINTVL, interval))
    return options


class KeepAliveAdapter(HTTPAdapter):
    """HTTPAdapter whose pooled connections use TCP keep-alive."""

    def __init__(self, keep_alive_interval: int, **kwargs: Any) -> None:
        self.socket_options = keep_alive_socket_options(keep_alive_interval)
        super().__init__(**kwargs)

    def init_poolmanager(self, *args: Any, **kwargs: Any) -> None:
        kwargs["socket_options"] = self.socket_options
        super().init_poolmanager(*args, **kwargs)


@dataclass
class HttpResponse:
    """
    Response from an HTTP request.
    """
    status_code: int
    content: bytes
    headers: dict[str, str] = field(default_factory=dict)
    url: str = ""
    elapsed_ms: float = 0.0

    @property
    def ok(self) -> bool:
        """Check if request was successful (2xx status)."""
        return 200 <= self.status_code < 300

    @property
    def is_redirect(self) -> bool:
        """Check if the status is in the redirect class (3xx)."""
        return 300 <= self.status_code <= 399

    @property
    def location(self) -> Optional[str]:
        """The Location header, looked up case-insensitively."""
        for name, value in self.headers.items():
            if name.lower() == "location":
                return value
        return None

    @property
    def text(self) -> str:
        """Get response content as text."""
        return self.content.decode("utf-8", errors="replace")


class HttpClient:
    """
    HTTP client used for a visit.

    Usage:
        with HttpClient() as client:
            with build_request(spec) as outbound:
                response = client.send(outbound)
    """

    def __init__(
        self,
        *,
        settings: TransportSettings = DEFAULT_TRANSPORT,
        default_headers: Optional[dict[str, str]] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """
        Initialize HTTP client.

        Args:
            settings: Transport constants
            default_headers: Headers sent unless the request overrides them
            session: Pre-built session (tests inject a fake here)
        """
        self.settings = settings
        self.default_headers = default_headers or {}
        self._session = session

    def _get_session(self) -> requests.Session:
        """Lazy-load the requests session."""
        if self._session is None:
            session = requests.Session()
            session.headers.update(self.default_headers)
            adapter = KeepAliveAdapter(
                self.settings.keep_alive_interval,
                pool_maxsize=self.settings.max_idle_connections,
                max_retries=0,
            )
            session.mount("http://", adapter)
            session.mount("https://", adapter)
            logger.debug("Transport settings: %s", self.settings)
            self._session = session
        return self._session

    def send(self, request: OutboundRequest) -> HttpResponse:
        """
        Send request exactly once and read the whole response body.

        Redirects are never followed here.

        Raises:
            TransportError: DNS, connect, TLS or timeout failure
            BodyReadError: the connection broke while reading the body
        """
        session = self._get_session()
        logger.info("%s %s", request.method, request.url)

        try:
            response = session.request(
                method=request.method,
                url=request.url,
                headers=request.wire_headers,
                data=request.body,
                timeout=self.settings.timeout,
                allow_redirects=False,
                stream=True,
            )
        except requests.RequestException as e:
            raise TransportError(str(e), url=request.url) from e

        try:
            content = response.content
        except requests.RequestException as e:
            raise BodyReadError(str(e)) from e
        finally:
            response.close()

        result = HttpResponse(
            status_code=response.status_code,
            content=content,
            headers=dict(response.headers),
            url=str(response.url),
            elapsed_ms=response.elapsed.total_seconds() * 1000,
        )
        logger.info(
            "HTTP %d from %s (%d bytes, %.1f ms)",
            result.status_code, result.url, len(content), result.elapsed_ms,
        )
        return result

    def should_strip_auth(self, old_url: str, new_url: str) -> bool:
        """Whether credentials must not follow a redirect from old_url to new_url."""
        return self._get_session().should_strip_auth(old_url, new_url)

    def close(self) -> None:
        """Close the HTTP session."""
        if self._session:
            self._session.close()
            self._session = None

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()
