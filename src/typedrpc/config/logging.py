"""Log rendering for the typedrpc CLI.

Library modules stay on stdlib ``logging`` and describe contract events as
a short event name plus ``extra`` fields::

    logger.debug("rpc.call", extra={"url": url, "ok": False, "code": "httpError"})

:func:`configure_logging` installs one stderr handler whose structlog
formatter lifts those ``extra`` fields into key/value pairs, so the same
record renders as ``rpc.call url=... ok=False code=httpError`` on a console
or as a JSON object with ``--log-json``.  Commands log through
``structlog.get_logger`` and share the renderer.
"""

from __future__ import annotations

import logging
import sys

import structlog

LIBRARY_LOGGER = "typedrpc"

# HTTP client chatter stays out of -v output.
QUIET_LOGGERS = ("httpx", "httpcore")


def _renderer(log_json: bool) -> list[structlog.types.Processor]:
    if log_json:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route typedrpc and command logs to stderr.

    Args:
        verbose: Show DEBUG contract events; otherwise WARNING and above.
        log_json: One JSON object per line instead of console text.
    """
    common: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    structlog.configure(
        processors=[*common, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            # Records from stdlib loggers carry their fields as ``extra``.
            foreign_pre_chain=[*common, structlog.stdlib.ExtraAdder()],
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.WARNING)

    logging.getLogger(LIBRARY_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
