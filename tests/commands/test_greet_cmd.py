"""Tests for the greet command."""

import json
from collections.abc import Callable

import pytest
from click.testing import CliRunner

from typedrpc.cli import cli


@pytest.fixture
def patch_transport(monkeypatch: pytest.MonkeyPatch, make_transport: Callable) -> Callable:
    def install(*args: object, **kwargs: object) -> object:
        transport = make_transport(*args, **kwargs)
        monkeypatch.setattr("typedrpc.commands.greet.HttpxTransport", lambda: transport)
        return transport

    return install


class TestGreetCommand:
    def test_success(self, cli_runner: CliRunner, patch_transport: Callable) -> None:
        transport = patch_transport(200, '{"ok":true,"val":{"message":"Hello, Ada!"}}')
        result = cli_runner.invoke(cli, ["greet", "Ada"])
        assert result.exit_code == 0
        assert "OK: /api/greet" in result.output
        assert "message: Hello, Ada!" in result.output
        url, request = transport.calls[0]
        assert url == "http://127.0.0.1:8787/api/greet"
        assert request.body == '{"name":"Ada"}'

    def test_base_url_flag(self, cli_runner: CliRunner, patch_transport: Callable) -> None:
        transport = patch_transport(200, '{"ok":true,"val":{"message":"hi"}}')
        result = cli_runner.invoke(cli, ["--base-url", "https://rpc.test", "greet", "Ada"])
        assert result.exit_code == 0
        assert transport.calls[0][0] == "https://rpc.test/api/greet"

    def test_base_url_from_env(
        self,
        cli_runner: CliRunner,
        patch_transport: Callable,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("TYPEDRPC_BASE_URL", "https://env.test")
        transport = patch_transport(200, '{"ok":true,"val":{"message":"hi"}}')
        cli_runner.invoke(cli, ["greet", "Ada"])
        assert transport.calls[0][0] == "https://env.test/api/greet"

    def test_quiet_drops_header(self, cli_runner: CliRunner, patch_transport: Callable) -> None:
        patch_transport(200, '{"ok":true,"val":{"message":"Hello, Ada!"}}')
        result = cli_runner.invoke(cli, ["-q", "greet", "Ada"])
        assert result.exit_code == 0
        assert "OK:" not in result.output
        assert result.output.strip() == "message: Hello, Ada!"

    def test_json_output(self, cli_runner: CliRunner, patch_transport: Callable) -> None:
        patch_transport(200, '{"ok":true,"val":{"message":"Hello, Ada!"}}')
        result = cli_runner.invoke(cli, ["--json", "greet", "Ada"])
        assert result.exit_code == 0
        assert json.loads(result.output) == {"ok": True, "val": {"message": "Hello, Ada!"}}

    def test_http_error_exits_nonzero(
        self, cli_runner: CliRunner, patch_transport: Callable
    ) -> None:
        patch_transport(502, status_text="Bad Gateway")
        result = cli_runner.invoke(cli, ["greet", "Ada"])
        assert result.exit_code == 1
        assert "httpError - HTTP error 502: Bad Gateway" in result.output

    def test_unreachable_server(self, cli_runner: CliRunner, patch_transport: Callable) -> None:
        patch_transport(error=ConnectionRefusedError("connection refused"))
        result = cli_runner.invoke(cli, ["greet", "Ada"])
        assert result.exit_code == 1
        assert "fetchError" in result.output
