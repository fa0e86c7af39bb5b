"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Configures logging and centralizes result emission
(stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from typedrpc.config.logging import configure_logging
from typedrpc.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from typedrpc.config.settings import RpcSettings
    from typedrpc.domain.result import Result


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: RpcSettings) -> None:
        self.settings = settings
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    def emit(self, result: Result[Any, Any], *, label: str = "") -> None:
        """Format and output a Result with correct exit semantics.

        * Success: writes to stdout, returns normally.
        * Failure: writes to stderr, exits with code 1.
        """
        output = format_result(
            result,
            label=label,
            settings=OutputSettings(
                json_output=self.settings.json_output,
                quiet=self.settings.quiet,
            ),
        )
        if result.ok:
            click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
