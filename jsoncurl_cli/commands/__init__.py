"""
CLI command modules.
"""

from jsoncurl_cli.commands import visit

__all__ = ["visit"]
