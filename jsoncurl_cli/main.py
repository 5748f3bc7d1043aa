"""
CLI Main Entry Point

Parses command-line arguments and runs the visit. This is the single
place where failures become an exit status.

Usage:
    jcurl [-X METHOD] [-d BODY|@FILE] [-H 'K: V']... [-L] [-I] URL

Environment Variables:
    JSONCURL_LOG_LEVEL          Log level (default: WARNING)
    JSONCURL_LOG_FILE           Also write log records to this file
    JSONCURL_USER_AGENT         Default User-Agent header
    NO_COLOR                    Disable colored output
"""

from __future__ import annotations

import argparse
import logging
import sys
import traceback
from typing import Sequence

from core.config import RuntimeConfig
from core.schemas.errors import JsonCurlException
from jsoncurl_cli import __version__
from jsoncurl_cli.commands import visit


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def setup_logging(level: str = "WARNING", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.WARNING)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def strip_curl(argv: Sequence[str]) -> list[str]:
    """Drop literal 'curl' words so pasted curl command lines work."""
    return [arg for arg in argv if arg != "curl"]


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="jcurl",
        description="Issue one HTTP request and pretty-print the JSON response.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "-X", "--request",
        type=str,
        default="GET",
        metavar="METHOD",
        help="HTTP method to use (default: GET)",
    )
    parser.add_argument(
        "-d", "--data",
        type=str,
        default=None,
        metavar="BODY",
        help="HTTP request body; @path reads the body from a file",
    )
    parser.add_argument(
        "-L", "--location",
        action="store_true",
        default=False,
        help="Follow redirects",
    )
    parser.add_argument(
        "-I", "--head",
        action="store_true",
        default=False,
        help="Show document info only",
    )
    parser.add_argument(
        "-H", "--header",
        action="append",
        default=[],
        metavar="HEADER",
        help="Set HTTP header; repeatable: -H 'Accept: ...' -H 'Range: ...'",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides JSONCURL_LOG_LEVEL)",
    )
    parser.add_argument(
        "url",
        nargs="*",
        help="Target URL; the scheme defaults to http",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, including a wrong URL count; 1=error)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = create_parser()
    args = parser.parse_intermixed_args(strip_curl(argv))

    if len(args.url) != 1:
        print(f"expected exactly one URL argument, got {len(args.url)}")
        return EXIT_SUCCESS

    try:
        config = RuntimeConfig.from_env()
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    setup_logging(level=args.log_level or config.logging.level, log_file=config.logging.file)
    args.runtime_config = config

    try:
        return visit.visit_cmd(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except JsonCurlException as e:
        logger.debug("%s: %s", e.code, e.details)
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if logger.isEnabledFor(logging.DEBUG):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
