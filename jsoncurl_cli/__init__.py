"""
jsoncurl CLI

Command-line HTTP client that pretty-prints JSON responses.

Usage:
    jcurl https://api.example.com/items
    jcurl -X POST -d '{"name": "x"}' -H 'Content-Type: application/json' example.com/items
    jcurl -X PUT -d @payload.json example.com/items/1
    jcurl -I example.com
    python -m jsoncurl_cli -L example.com/moved
"""

__version__ = "0.1.0"
