"""typedrpc: typed, non-raising JSON RPC contracts over HTTP."""

from __future__ import annotations

from typedrpc.domain.codec import (
    parse_and_validate,
    parse_text,
    safe_serialize_text,
    serialize_text,
    validate,
)
from typedrpc.domain.errors import (
    FetchError,
    HttpError,
    JsonParseError,
    JsonStringifyError,
    RpcError,
    RpcErrorSchema,
    SchemaValidationError,
    UnexpectedThrownError,
    new_unexpected_thrown_error,
)
from typedrpc.domain.result import Err, Ok, Result, flatten, propagate
from typedrpc.domain.validation import Validator, as_validator, one_of, result_schema
from typedrpc.services.rpc import TypedRpc

__version__ = "0.1.0"

__all__ = [
    "Err",
    "FetchError",
    "HttpError",
    "JsonParseError",
    "JsonStringifyError",
    "Ok",
    "Result",
    "RpcError",
    "RpcErrorSchema",
    "SchemaValidationError",
    "TypedRpc",
    "UnexpectedThrownError",
    "Validator",
    "__version__",
    "as_validator",
    "flatten",
    "new_unexpected_thrown_error",
    "one_of",
    "parse_and_validate",
    "parse_text",
    "propagate",
    "result_schema",
    "safe_serialize_text",
    "serialize_text",
    "validate",
]
