"""
Module execution entry point.

Allows running with: python -m jsoncurl_cli
"""

import sys
from jsoncurl_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
