"""
CLI Visit Command

Build the request from parsed options, perform the visit and print the
rendered response body.

Usage:
    jcurl [-X METHOD] [-d BODY|@FILE] [-H 'K: V']... [-L] [-I] URL
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace
from typing import TextIO

from core.config import RuntimeConfig
from core.http import HttpClient, normalize_url, visit
from core.render import render_response, use_color
from core.schemas import RequestSpec


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0


def spec_from_args(args: Namespace) -> RequestSpec:
    """
    Build the immutable RequestSpec from parsed arguments.

    Raises:
        UrlError: the URL cannot be parsed
        MissingBodyError: POST or PUT without -d
        ConfigurationException: any other invalid option
    """
    return RequestSpec.from_options(
        method=args.request,
        url=normalize_url(args.url[0]),
        body=args.data,
        headers=args.header or [],
        follow_redirects=args.location,
        head_only=args.head,
    )


def visit_cmd(args: Namespace, out: TextIO | None = None) -> int:
    """
    Execute the visit command.

    Errors propagate to the CLI boundary in jsoncurl_cli.main.

    Returns:
        Exit code
    """
    out = out or sys.stdout
    config: RuntimeConfig = args.runtime_config

    spec = spec_from_args(args)
    logger.debug("Request spec: %s", spec.model_dump())

    with HttpClient(default_headers=config.http.default_headers) as client:
        result = visit(spec, client)

    if result.redirects:
        logger.info("Followed %d redirect(s): %s", result.redirects, " -> ".join(result.visited))

    rendered = render_response(result.response, result.method, color=use_color(out))
    if rendered is not None:
        print(rendered, file=out)
    return EXIT_SUCCESS
