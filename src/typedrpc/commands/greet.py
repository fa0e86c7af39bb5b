"""Command: call the greet RPC on a running server."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import click
import structlog

from typedrpc.infrastructure.transport import HttpxTransport
from typedrpc.services.greet import GREET_RPC, GreetInput

if TYPE_CHECKING:
    from typedrpc.commands._context import AppContext

log = structlog.get_logger(__name__)


@click.command()
@click.argument("name")
@click.pass_obj
def greet(app: AppContext, name: str) -> None:
    """Send NAME to the server's greet endpoint and print the reply."""
    base_url = app.settings.base_url
    log.debug("greet.call", base_url=base_url, path=GREET_RPC.path)
    result = asyncio.run(
        GREET_RPC.call(base_url, GreetInput(name=name), transport=HttpxTransport())
    )
    app.emit(result, label=GREET_RPC.path)
