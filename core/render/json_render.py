"""
Response Rendering

Decodes a JSON response body and re-encodes it indented and colorized
for the terminal. Colorizing uses Pygments' JsonLexer with a fixed
terminal palette: values in cyan, field names in blue.
"""

from __future__ import annotations

import json
import logging
import math
import os
import sys
from typing import Any, Optional, TextIO

import pygments
from pygments.formatters.terminal import TerminalFormatter
from pygments.lexers.data import JsonLexer
from pygments.token import Keyword, Name, Number, String, Token

from core.http.client import HttpResponse
from core.schemas.errors import DecodeError
from core.schemas.request import HEAD


logger = logging.getLogger(__name__)


INDENT = 2

VALUE_COLOR = "cyan"
FIELD_COLOR = "blue"

# (light background, dark background); the base Token entry is required
# by TerminalFormatter and leaves punctuation uncolored.
COLOR_SCHEME = {
    Token: ("", ""),
    Name.Tag: (FIELD_COLOR, FIELD_COLOR),
    String: (VALUE_COLOR, VALUE_COLOR),
    Number: (VALUE_COLOR, VALUE_COLOR),
    Keyword.Constant: (VALUE_COLOR, VALUE_COLOR),
}

_WHITESPACE = b" \t\r\n"


def decode_body(body: bytes) -> Any:
    """
    Decode a response body as a JSON object or an array of objects.

    A body whose first non-whitespace byte is '[' must be an array of
    objects; anything else must be a single object. null is accepted in
    either position.

    Raises:
        DecodeError: empty body, invalid JSON, or the wrong shape
    """
    stripped = body.lstrip(_WHITESPACE)
    if not stripped:
        raise DecodeError("unexpected end of JSON input")

    try:
        data = json.loads(body, parse_constant=_reject_constant, parse_float=_finite_float)
    except (ValueError, UnicodeDecodeError) as e:
        raise DecodeError(f"invalid JSON response: {e}") from e

    if stripped[:1] == b"[":
        if not isinstance(data, list):
            raise DecodeError("expected a JSON array of objects")
        for index, item in enumerate(data):
            if item is not None and not isinstance(item, dict):
                raise DecodeError(
                    f"cannot decode array element {index} ({type(item).__name__}) as an object"
                )
        return data

    if data is not None and not isinstance(data, dict):
        raise DecodeError(f"cannot decode {type(data).__name__} as a JSON object")
    return data


def _reject_constant(name: str) -> Any:
    # NaN, Infinity and -Infinity are not JSON
    raise DecodeError(f"invalid JSON response: unexpected literal {name}")


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise DecodeError(f"invalid JSON response: number {text} out of range")
    return value


def colorize(text: str) -> str:
    """Apply the fixed terminal palette to indented JSON text."""
    formatter = TerminalFormatter(colorscheme=COLOR_SCHEME)
    return pygments.highlight(text, JsonLexer(), formatter).rstrip("\n")


def format_json(data: Any, color: bool = True) -> str:
    """Indent data by two spaces, keys sorted, optionally colorized."""
    text = json.dumps(data, indent=INDENT, sort_keys=True, ensure_ascii=False)
    return colorize(text) if color else text


def should_render(response: HttpResponse, method: str) -> bool:
    """Redirects and HEAD requests produce no body output."""
    return not (response.is_redirect or method.upper() == HEAD)


def render_response(response: HttpResponse, method: str, color: bool = True) -> Optional[str]:
    """
    Render a response for printing.

    Returns:
        The formatted body, or None when nothing should be printed

    Raises:
        DecodeError: the body is not a JSON object or array of objects
    """
    if not should_render(response, method):
        logger.debug("Suppressing body output (status=%d, method=%s)", response.status_code, method)
        return None
    return format_json(decode_body(response.content), color=color)


def use_color(stream: TextIO = sys.stdout) -> bool:
    """Colors are on for terminals unless NO_COLOR is set."""
    if os.getenv("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())
