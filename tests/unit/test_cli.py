"""
Tests for the jcurl command line: argument handling, the single error
boundary and end-to-end visits against a fake session.
"""

import io
import json
from unittest.mock import Mock

import pytest
import requests

from core.http.client import HttpClient
from jsoncurl_cli import main as cli_main
from jsoncurl_cli.commands import visit as visit_command
from jsoncurl_cli.main import EXIT_RUNTIME_ERROR, EXIT_SUCCESS, create_parser, main, strip_curl

from fixtures import make_args, make_requests_response, make_session


@pytest.fixture
def fake_transport(monkeypatch):
    """Route the CLI's HttpClient to a fake session; returns a setter."""
    holder = {}

    def install(*results):
        session = make_session(*results)
        holder["session"] = session

        def factory(**kwargs):
            holder["kwargs"] = kwargs
            return HttpClient(session=session, **kwargs)

        monkeypatch.setattr(visit_command, "HttpClient", factory)
        return session

    install.holder = holder
    return install


class TestParser:

    def test_defaults(self):
        args = create_parser().parse_intermixed_args(["example.com"])
        assert args.request == "GET"
        assert args.data is None
        assert args.header == []
        assert args.location is False
        assert args.head is False
        assert args.url == ["example.com"]

    def test_short_flags(self):
        args = create_parser().parse_intermixed_args(
            ["-X", "PUT", "-d", "@body.json", "-H", "A: 1", "-H", "B: 2", "-L", "-I", "example.com"]
        )
        assert args.request == "PUT"
        assert args.data == "@body.json"
        assert args.header == ["A: 1", "B: 2"]
        assert args.location is True
        assert args.head is True

    def test_long_flags(self):
        args = create_parser().parse_intermixed_args(
            ["--request", "POST", "--data", "x", "--header", "A: 1", "--location", "--head", "example.com"]
        )
        assert (args.request, args.data, args.header, args.location, args.head) == (
            "POST", "x", ["A: 1"], True, True,
        )

    def test_strip_curl(self):
        assert strip_curl(["curl", "-X", "GET", "example.com"]) == ["-X", "GET", "example.com"]
        assert strip_curl(["example.com/curl"]) == ["example.com/curl"]


class TestArgumentCount:

    @pytest.mark.parametrize("argv", [[], ["a.com", "b.com"]])
    def test_wrong_url_count_exits_zero(self, argv, capsys, fake_transport):
        session = fake_transport()
        assert main(argv) == EXIT_SUCCESS
        assert "expected exactly one URL argument" in capsys.readouterr().out
        session.request.assert_not_called()

    def test_help_exits_zero(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["-h"])
        assert exc_info.value.code == 0
        assert "--location" in capsys.readouterr().out


class TestErrorBoundary:

    def test_post_without_body_fails_before_request(self, capsys, fake_transport):
        session = fake_transport(make_requests_response(200))
        assert main(["-X", "POST", "example.com"]) == EXIT_RUNTIME_ERROR
        assert "Error: must supply post body" in capsys.readouterr().err
        session.request.assert_not_called()

    def test_malformed_header(self, capsys, fake_transport):
        session = fake_transport(make_requests_response(200))
        assert main(["-H", "NoColon", "example.com"]) == EXIT_RUNTIME_ERROR
        assert "has invalid format" in capsys.readouterr().err
        session.request.assert_not_called()

    def test_bad_url(self, capsys):
        assert main(["http://[::1"]) == EXIT_RUNTIME_ERROR
        assert "could not parse url" in capsys.readouterr().err

    def test_missing_data_file(self, tmp_path, capsys, fake_transport):
        session = fake_transport(make_requests_response(200))
        missing = tmp_path / "missing.json"
        assert main(["-X", "PUT", "-d", f"@{missing}", "example.com"]) == EXIT_RUNTIME_ERROR
        assert "failed to open data file" in capsys.readouterr().err
        session.request.assert_not_called()

    def test_transport_failure(self, capsys, fake_transport):
        fake_transport(requests.ConnectionError("connection refused"))
        assert main(["example.com"]) == EXIT_RUNTIME_ERROR
        assert "Error: failed to read response: connection refused" in capsys.readouterr().err

    def test_decode_failure(self, capsys, fake_transport):
        fake_transport(make_requests_response(200, b"<html></html>"))
        assert main(["example.com"]) == EXIT_RUNTIME_ERROR
        assert "Error: invalid JSON response" in capsys.readouterr().err

    def test_unexpected_exception(self, capsys, monkeypatch):
        monkeypatch.setattr(visit_command, "visit", Mock(side_effect=RuntimeError("boom")))
        assert main(["example.com"]) == EXIT_RUNTIME_ERROR
        assert "Error: boom" in capsys.readouterr().err

    def test_keyboard_interrupt(self, capsys, monkeypatch):
        monkeypatch.setattr(cli_main.visit, "visit_cmd", Mock(side_effect=KeyboardInterrupt))
        assert main(["example.com"]) == EXIT_RUNTIME_ERROR
        assert "Interrupted." in capsys.readouterr().err


class TestVisitEndToEnd:

    def test_json_printed(self, capsys, fake_transport):
        session = fake_transport(make_requests_response(200, b'{"b":[1,2,3],"a":1}'))

        assert main(["curl", "example.com/api", "-H", "Accept: application/json"]) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert json.loads(out) == {"a": 1, "b": [1, 2, 3]}
        assert out.endswith("}\n")
        sent = session.sent[0]
        assert sent["url"] == "http://example.com/api"
        assert sent["headers"] == {"Accept": "application/json"}

    def test_redirect_prints_nothing(self, capsys, fake_transport):
        fake_transport(make_requests_response(301, b"{}", {"Location": "/x"}))
        assert main(["example.com"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == ""

    def test_head_prints_nothing(self, capsys, fake_transport):
        session = fake_transport(make_requests_response(200, b""))
        assert main(["-X", "POST", "-d", "x", "-I", "example.com"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == ""
        assert session.sent[0]["method"] == "HEAD"

    def test_follow_location(self, capsys, fake_transport):
        session = fake_transport(
            make_requests_response(302, b"", {"Location": "https://example.com/final"}),
            make_requests_response(200, b'[{"x":1},{"x":2}]'),
        )
        assert main(["-L", "example.com/start"]) == EXIT_SUCCESS
        assert json.loads(capsys.readouterr().out) == [{"x": 1}, {"x": 2}]
        assert [s["url"] for s in session.sent] == ["http://example.com/start", "https://example.com/final"]

    def test_user_agent_from_environment(self, monkeypatch, fake_transport):
        monkeypatch.setenv("JSONCURL_USER_AGENT", "probe/1.0")
        fake_transport(make_requests_response(200, b"{}"))
        assert main(["example.com"]) == EXIT_SUCCESS
        assert fake_transport.holder["kwargs"]["default_headers"] == {"User-Agent": "probe/1.0"}

    def test_visit_cmd_writes_to_given_stream(self, fake_transport):
        fake_transport(make_requests_response(200, b'{"k": "v"}'))
        out = io.StringIO()
        assert visit_command.visit_cmd(make_args(), out=out) == EXIT_SUCCESS
        assert out.getvalue() == '{\n  "k": "v"\n}\n'
