"""
Rendering Module

JSON decoding and colorized output for responses.
"""

from .json_render import (
    COLOR_SCHEME,
    colorize,
    decode_body,
    format_json,
    render_response,
    should_render,
    use_color,
)

__all__ = [
    "COLOR_SCHEME",
    "colorize",
    "decode_body",
    "format_json",
    "render_response",
    "should_render",
    "use_color",
]
