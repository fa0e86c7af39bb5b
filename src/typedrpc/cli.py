"""Root CLI group for typedrpc with global flags and command registration."""

from __future__ import annotations

import click

from typedrpc import __version__
from typedrpc.commands import register_commands
from typedrpc.commands._context import AppContext
from typedrpc.config.settings import RpcSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="typedrpc")
@click.option("--json", "json_output", is_flag=True, help="Print the raw envelope.")
@click.option("-q", "--quiet", is_flag=True, help="Omit the OK header line.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("--base-url", default=None, help="Server origin for client calls.")
@click.option(
    "--environment",
    type=click.Choice(["development", "staging", "production"]),
    default=None,
    help="Deployment tier (selects the CORS policy).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    base_url: str | None,
    environment: str | None,
) -> None:
    """typedrpc: typed, non-raising JSON RPC contracts."""
    settings = RpcSettings.from_cli(
        config_path=config_path,
        json_output=json_output or None,
        quiet=quiet or None,
        verbose=verbose or None,
        log_json=log_json or None,
        base_url=base_url,
        environment=environment,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
