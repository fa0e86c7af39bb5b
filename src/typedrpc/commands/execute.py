"""Command: run one request through a local router, no network involved."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import click
import structlog

from typedrpc.services.greet import GREET_RPC, make_greet_handler
from typedrpc.services.router import RpcRouter

if TYPE_CHECKING:
    from typedrpc.commands._context import AppContext

log = structlog.get_logger(__name__)


@click.command()
@click.argument("path")
@click.option("--body", default=None, help="Request body (JSON). Read from stdin if omitted.")
@click.option("--method", default="POST", show_default=True, help="HTTP method to dispatch.")
@click.pass_obj
def execute(app: AppContext, path: str, body: str | None, method: str) -> None:
    """Dispatch a request for PATH and print the response body."""
    if body is None:
        body = click.get_text_stream("stdin").read()

    router = RpcRouter(app.settings)
    router.add(GREET_RPC, make_greet_handler(app.settings.environment))

    response = asyncio.run(router.dispatch(method, path, body))
    log.debug("execute.dispatched", path=path, status=response.status)
    if response.status >= 400:
        click.echo(f"HTTP {response.status}: {response.body}", err=True)
        raise SystemExit(1)
    click.echo(response.body)
