"""
URL Normalization

Turns whatever the user typed ("example.com/api", "//host:8080/x",
"https://host") into an absolute URL with a scheme.
"""

from __future__ import annotations

from urllib.parse import urljoin, urlsplit, urlunsplit

from core.schemas.errors import UrlError


DEFAULT_SCHEME = "http"


def normalize_url(raw: str) -> str:
    """
    Normalize a user-supplied URL.

    A string without "://" that does not already start with "//" is
    treated as scheme-relative, so "example.com/a" parses with
    "example.com" as the host. A missing scheme defaults to http.

    Raises:
        UrlError: the string cannot be parsed as a URL with a host
    """
    uri = raw.strip()
    if not uri:
        raise UrlError(raw, "empty url")

    if "://" not in uri and not uri.startswith("//"):
        uri = "//" + uri

    try:
        parts = urlsplit(uri)
        # Accessing .port validates it
        parts.port
    except ValueError as e:
        raise UrlError(uri, str(e)) from e

    if not parts.hostname:
        raise UrlError(uri, "missing host")

    if not parts.scheme:
        parts = parts._replace(scheme=DEFAULT_SCHEME)

    return urlunsplit(parts)


def resolve_location(base_url: str, location: str) -> str:
    """Resolve a (possibly relative) Location header against the request URL."""
    return urljoin(base_url, location.strip())


def host_of(url: str) -> str:
    """Return the host[:port] part of an absolute URL."""
    return urlsplit(url).netloc.rpartition("@")[2]
