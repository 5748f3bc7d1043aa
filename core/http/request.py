"""
Request Builder

Assembles an OutboundRequest from a RequestSpec: resolves the body
(literal text or an @file stream), parses raw headers and applies the
Host override.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import BinaryIO, Optional, Union

from core.schemas.errors import BodyFileError, HeaderFormatError
from core.schemas.request import RequestSpec


logger = logging.getLogger(__name__)


Body = Union[bytes, BinaryIO]

# Describe the body; meaningless once a redirect drops it
BODY_HEADERS = frozenset({"content-type", "content-length", "transfer-encoding"})

# Credentials never forwarded to a different host
AUTH_HEADERS = frozenset({"authorization", "proxy-authorization", "cookie"})


@dataclass
class OutboundRequest:
    """
    A fully assembled request, ready for the transport.

    Owns the body: when the body is an opened file it is closed by
    close() or on leaving the context manager.
    """
    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    host: Optional[str] = None
    body: Optional[Body] = None

    @property
    def wire_headers(self) -> dict[str, str]:
        """Headers as sent, with the Host override applied."""
        headers = dict(self.headers)
        if self.host:
            headers["Host"] = self.host
        return headers

    def close(self) -> None:
        if self.body is not None and hasattr(self.body, "close"):
            self.body.close()

    def __enter__(self) -> "OutboundRequest":
        return self

    def __exit__(self, *args) -> None:
        self.close()


def create_body(body: Optional[str]) -> Optional[Body]:
    """
    Resolve the -d argument into a request body.

    "@path" opens path for streaming; anything else is sent literally.

    Raises:
        BodyFileError: the @file cannot be opened
    """
    if body is None:
        return None
    if body.startswith("@"):
        filename = body[1:]
        try:
            return open(filename, "rb")
        except OSError as e:
            raise BodyFileError(filename, e.strerror or str(e)) from e
    return body.encode("utf-8")


def parse_header(raw: str) -> tuple[str, str]:
    """
    Split a raw "Key: Value" header on its first colon.

    Raises:
        HeaderFormatError: no colon, or nothing before it
    """
    index = raw.find(":")
    if index == -1:
        raise HeaderFormatError(raw)
    key = raw[:index].strip()
    value = raw[index:].lstrip(" \t:").rstrip()
    if not key:
        raise HeaderFormatError(raw)
    return key, value


def apply_headers(request: OutboundRequest, raw_headers: tuple[str, ...] | list[str]) -> None:
    """Parse raw headers into request, routing Host to the host override."""
    for raw in raw_headers:
        key, value = parse_header(raw)
        if key.lower() == "host":
            request.host = value
            continue
        existing = _find_key(request.headers, key)
        if existing is None:
            request.headers[key] = value
        else:
            request.headers[existing] = f"{request.headers[existing]}, {value}"


def remove_headers(request: OutboundRequest, names: frozenset[str]) -> None:
    """Drop headers whose lower-cased name is in names."""
    for key in [k for k in request.headers if k.lower() in names]:
        del request.headers[key]


def _find_key(headers: dict[str, str], key: str) -> Optional[str]:
    lowered = key.lower()
    for name in headers:
        if name.lower() == lowered:
            return name
    return None


def build_request(
    spec: RequestSpec,
    *,
    url: Optional[str] = None,
    method: Optional[str] = None,
    include_body: bool = True,
) -> OutboundRequest:
    """
    Build the outbound request for spec.

    Headers are parsed before the body is opened, so a malformed header
    never leaves a file handle behind.

    Args:
        spec: The immutable request configuration
        url: Target override (used when following a redirect)
        method: Method override (used when a redirect downgrades to GET)
        include_body: False to drop the body and its Content-* headers
            (303-style redirects)

    Returns:
        OutboundRequest; use it as a context manager to release the body
    """
    request = OutboundRequest(
        method=method or spec.effective_method,
        url=url or spec.url,
    )
    apply_headers(request, spec.headers)

    if include_body:
        request.body = create_body(spec.body)
    else:
        remove_headers(request, BODY_HEADERS)

    logger.debug(
        "Built %s %s (headers=%d, host_override=%s, file_body=%s)",
        request.method, request.url, len(request.headers),
        request.host, spec.is_file_body and include_body,
    )
    return request
