"""Error taxonomy: the closed set of transport, codec and validation failures.

Every variant has the wire shape ``{"code": <literal>, "message": str}``.
``RpcErrorSchema`` is the discriminated union of all variants and is what a
client validates the error branch of a response envelope against.
Application-defined errors are a separate, opaque type and are never part
of this union.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class TaxonomyError(BaseModel):
    """Common base: a machine-readable ``code`` plus a human ``message``."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str


class JsonParseError(TaxonomyError):
    """Text could not be decoded as JSON."""

    code: Literal["jsonParseError"] = "jsonParseError"


class JsonStringifyError(TaxonomyError):
    """A value could not be encoded as JSON."""

    code: Literal["jsonStringifyError"] = "jsonStringifyError"


class SchemaValidationError(TaxonomyError):
    """A decoded value does not conform to the expected schema."""

    code: Literal["schemaValidationError"] = "schemaValidationError"


class HttpError(TaxonomyError):
    """The transport answered with a non-success status."""

    code: Literal["httpError"] = "httpError"


class FetchError(TaxonomyError):
    """The transport call itself failed."""

    code: Literal["fetchError"] = "fetchError"


class UnexpectedThrownError(TaxonomyError):
    """A handler or callback raised instead of returning a Result."""

    code: Literal["unexpectedThrownError"] = "unexpectedThrownError"


type RpcError = (
    JsonStringifyError
    | SchemaValidationError
    | FetchError
    | HttpError
    | JsonParseError
    | UnexpectedThrownError
)

RpcErrorSchema = Annotated[
    JsonStringifyError
    | SchemaValidationError
    | FetchError
    | HttpError
    | JsonParseError
    | UnexpectedThrownError,
    Field(discriminator="code"),
]

ERROR_CODES: frozenset[str] = frozenset(
    {
        "jsonParseError",
        "jsonStringifyError",
        "schemaValidationError",
        "httpError",
        "fetchError",
        "unexpectedThrownError",
    }
)


def describe_fault(fault: object) -> str:
    """Best message for *fault*: its text, else its repr."""
    text = str(fault)
    if isinstance(fault, BaseException) and not text:
        return repr(fault)
    return text


def new_unexpected_thrown_error(fault: object) -> UnexpectedThrownError:
    """Wrap an arbitrary caught fault as an ``unexpectedThrownError``."""
    return UnexpectedThrownError(
        message=f"An unexpected error was thrown: {describe_fault(fault)}",
    )
