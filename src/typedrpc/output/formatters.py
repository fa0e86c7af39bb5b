"""Human and JSON rendering of a Result.

The CLI prints a Result either for people (Rich-styled ``OK`` / ``ERROR``
lines) or for machines (``--json``, the indented wire envelope).
"""

from __future__ import annotations

import json as _json
from dataclasses import dataclass
from io import StringIO
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel
from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

if TYPE_CHECKING:
    from typedrpc.domain.result import Result

RPC_THEME = Theme(
    {
        "rpc.ok": "bold green",
        "rpc.error": "bold red",
        "rpc.label": "bold cyan",
        "rpc.key": "dim",
        "rpc.code": "bold magenta",
    }
)


@dataclass(frozen=True)
class OutputSettings:
    """Rendering switches taken from the global CLI flags."""

    json_output: bool = False
    quiet: bool = False


def _console(buffer: StringIO) -> Console:
    return Console(
        file=buffer,
        theme=RPC_THEME,
        highlight=False,
        width=120,
        soft_wrap=True,
    )


def _as_fields(value: Any) -> dict[str, Any]:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, dict):
        return value
    return {"value": value}


def _render_value(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return _json.dumps(value, separators=(",", ":"))
    return str(value)


def format_result(
    result: Result[Any, Any],
    *,
    label: str = "",
    settings: OutputSettings | None = None,
) -> str:
    """Format a Result for display.

    Args:
        result: The outcome to render.
        label: Operation name shown in the header line (e.g. the RPC path).
        settings: Output mode; defaults to human-readable.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)

    buffer = StringIO()
    console = _console(buffer)
    suffix = f": [rpc.label]{escape(label)}[/rpc.label]" if label else ""
    if result.ok:
        if not settings.quiet:
            console.print(f"[rpc.ok]OK[/rpc.ok]{suffix}")
        for key, value in _as_fields(result.val).items():
            rendered = escape(_render_value(value))
            console.print(f"  [rpc.key]{escape(str(key))}:[/rpc.key] {rendered}")
    else:
        err = result.err
        code = getattr(err, "code", None)
        message = getattr(err, "message", None)
        if code is not None and message is not None:
            detail = f"[rpc.code]{escape(str(code))}[/rpc.code] - {escape(str(message))}"
        else:
            detail = escape(repr(err))
        console.print(f"[rpc.error]ERROR[/rpc.error]{suffix} {detail}")

    return buffer.getvalue().rstrip("\n")
