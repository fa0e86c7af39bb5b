"""TypedRpc: a typed, non-raising contract for one remote procedure.

A contract binds a path to an input schema and an output schema.  The
server side calls :meth:`TypedRpc.execute` with the raw request body and a
handler; the client side calls :meth:`TypedRpc.call` with a base URL and
an input value.

INVARIANT: Neither ``execute`` nor ``call`` raises.  Every failure ends up
as a taxonomy error (or the handler's own error) inside a Result.

Contracts hold no mutable state and are safe to share between any number
of concurrent invocations.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any, Generic, TypeVar

from typedrpc.domain.codec import (
    parse_and_validate,
    safe_serialize_text,
    serialize_text,
    validate,
)
from typedrpc.domain.errors import RpcError, RpcErrorSchema, new_unexpected_thrown_error
from typedrpc.domain.result import Err, Ok, Result, flatten
from typedrpc.domain.validation import Validator, as_validator, one_of, result_schema
from typedrpc.infrastructure.transport import HttpxTransport, Transport, fetch_text

logger = logging.getLogger(__name__)

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")
AppErrorT = TypeVar("AppErrorT")

type Handler[I, O, E] = Callable[[I], Awaitable[Result[O, E]] | Result[O, E]]


def _error_code(outcome: Result[Any, Any]) -> str | None:
    if outcome.ok:
        return None
    return getattr(outcome.err, "code", None)


class TypedRpc(Generic[InputT, OutputT, AppErrorT]):
    """Create type-safe, non-raising methods for calling and executing an RPC.

    Args:
        path: Path segment appended to the caller's base URL.
        input_schema: Schema handle for the request value.
        output_schema: Schema handle for the success value.
        error_schema: Optional schema for application errors.  When given,
            clients accept matching error values verbatim instead of
            reporting them as ``schemaValidationError``.

    Usage::

        GREET = TypedRpc("/api/greet", GreetInput, GreetOutput)

        # server
        body = await GREET.execute(request_text, handler)

        # client
        result = await GREET.call("https://api.example.com", GreetInput(name="Ada"))
    """

    def __init__(
        self,
        path: str,
        input_schema: Any,
        output_schema: Any,
        *,
        error_schema: Any | None = None,
    ) -> None:
        self._path = path
        self._input = as_validator(input_schema)
        self._output = as_validator(output_schema)
        err_branch = (
            as_validator(RpcErrorSchema)
            if error_schema is None
            else one_of(RpcErrorSchema, error_schema)
        )
        self._envelope = result_schema(self._output, err_branch)

    @property
    def path(self) -> str:
        return self._path

    @property
    def input_validator(self) -> Validator[InputT]:
        return self._input

    @property
    def output_validator(self) -> Validator[OutputT]:
        return self._output

    def __repr__(self) -> str:
        return f"TypedRpc({self._path!r})"

    # --- server side ---

    async def execute(
        self,
        request_body: str | bytes,
        handler: Handler[InputT, OutputT, AppErrorT],
    ) -> str:
        """Execute the RPC and return the serialized envelope.

        - Parses and validates the request body
        - Calls *handler* with the validated input
        - Serializes whichever Result came out

        Never raises.  If the outcome itself cannot be serialized, the
        envelope carries a ``jsonStringifyError`` instead.
        """
        outcome = await self._execute_typed(request_body, handler)
        logger.debug(
            "rpc.execute",
            extra={"path": self._path, "ok": outcome.ok, "code": _error_code(outcome)},
        )
        encoded = serialize_text(outcome)
        if encoded.ok:
            return encoded.val
        logger.warning(
            "rpc.execute.unserializable",
            extra={"path": self._path, "detail": encoded.err.message},
        )
        return safe_serialize_text(Err(encoded.err))

    async def _execute_typed(
        self,
        request_body: str | bytes,
        handler: Handler[InputT, OutputT, AppErrorT],
    ) -> Result[OutputT, AppErrorT | RpcError]:
        checked = parse_and_validate(request_body, self._input)
        if not checked.ok:
            return checked

        try:
            outcome = handler(checked.val)
            if inspect.isawaitable(outcome):
                outcome = await outcome
        except Exception as exc:
            logger.debug("rpc.execute.raised", extra={"path": self._path}, exc_info=True)
            return Err(new_unexpected_thrown_error(exc))

        if not isinstance(outcome, (Ok, Err)):
            fault = TypeError(f"handler returned {type(outcome).__name__}, not a Result")
            return Err(new_unexpected_thrown_error(fault))
        return outcome

    # --- client side ---

    async def call(
        self,
        url_base: str,
        payload: InputT,
        *,
        transport: Transport | None = None,
    ) -> Result[OutputT, RpcError]:
        """Call the remote endpoint and return its decoded outcome.

        - Serializes *payload*
        - POSTs it to ``url_base + path``
        - Parses the envelope and validates both branches
        - Flattens envelope errors and server-reported errors into one Result
        """
        body = serialize_text(payload)
        if not body.ok:
            return body

        url = f"{url_base}{self._path}"
        fetched = await fetch_text(transport or HttpxTransport(), url, body.val)
        if fetched.ok:
            outcome = flatten(parse_and_validate(fetched.val, self._envelope))
        else:
            outcome = fetched
        logger.debug(
            "rpc.call",
            extra={"url": url, "ok": outcome.ok, "code": _error_code(outcome)},
        )
        return outcome

    async def call_data(
        self,
        payload: InputT,
        send: Callable[[str], Awaitable[Any] | Any],
    ) -> Result[OutputT, RpcError]:
        """Call through a caller-supplied *send* callback.

        *send* receives the serialized payload and returns already-decoded
        data, which is validated against the output schema (no envelope).
        A raising *send* yields ``unexpectedThrownError``.
        """
        body = serialize_text(payload)
        if not body.ok:
            return body

        try:
            response = send(body.val)
            if inspect.isawaitable(response):
                response = await response
        except Exception as exc:
            logger.debug("rpc.call_data.raised", extra={"path": self._path}, exc_info=True)
            return Err(new_unexpected_thrown_error(exc))

        return validate(response, self._output)
