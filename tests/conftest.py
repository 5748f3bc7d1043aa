"""
Pytest configuration and shared fixtures for jsoncurl tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

make_request_spec = _common.make_request_spec
make_http_response = _common.make_http_response


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def request_spec():
    """Provide a default GET RequestSpec for tests."""
    return make_request_spec()


@pytest.fixture
def json_response():
    """Provide a 200 response with a small JSON object body."""
    return make_http_response(200, b'{"a":1,"b":[1,2,3]}')


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep the developer's environment out of the tests."""
    for name in ("NO_COLOR", "JSONCURL_LOG_LEVEL", "JSONCURL_LOG_FILE", "JSONCURL_USER_AGENT"):
        monkeypatch.delenv(name, raising=False)
