"""Shared pytest fixtures for typedrpc tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from typedrpc.infrastructure.transport import TransportRequest, TransportResponse


class FakeTransport:
    """Records every request and answers with a canned response (or raises)."""

    def __init__(
        self,
        response: TransportResponse | None = None,
        *,
        error: Exception | None = None,
    ) -> None:
        self.response = response or TransportResponse(status=200)
        self.error = error
        self.calls: list[tuple[str, TransportRequest]] = []

    async def __call__(self, url: str, request: TransportRequest) -> TransportResponse:
        self.calls.append((url, request))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def make_transport() -> Callable[..., FakeTransport]:
    """Factory for a FakeTransport answering *status* / *body*, or raising *error*."""

    def factory(
        status: int = 200,
        body: str = "",
        *,
        status_text: str = "OK",
        error: Exception | None = None,
    ) -> FakeTransport:
        response = TransportResponse(status=status, status_text=status_text, body=body)
        return FakeTransport(response, error=error)

    return factory


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test from an empty directory with no TYPEDRPC_* overrides."""
    for name in (
        "TYPEDRPC_CONFIG",
        "TYPEDRPC_BASE_URL",
        "TYPEDRPC_ENVIRONMENT",
        "TYPEDRPC_ALLOWED_ORIGIN",
        "TYPEDRPC_QUIET",
        "TYPEDRPC_VERBOSE",
        "TYPEDRPC_LOG_JSON",
        "TYPEDRPC_JSON_OUTPUT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test (the CLI reconfigures it)."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    rpc = logging.getLogger("typedrpc")
    rpc_level = rpc.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    rpc.setLevel(rpc_level)
