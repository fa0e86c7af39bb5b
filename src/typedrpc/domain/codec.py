"""JSON codec wrapped in Results.

Both directions go through ``pydantic_core``.  Decoding is strict JSON
(no ``NaN`` or ``Infinity`` literals) with a bounded nesting depth, so
hostile input fails as a value error rather than exhausting the stack.
Encoding serializes pydantic models, Results and plain data to compact
JSON.  None of these functions raise for bad input: decoder and encoder
failures come back as taxonomy errors.
"""

from __future__ import annotations

import logging
from typing import Any

import pydantic_core

from typedrpc.domain.errors import (
    JsonParseError,
    JsonStringifyError,
    SchemaValidationError,
    describe_fault,
)
from typedrpc.domain.result import Err, Ok, Result
from typedrpc.domain.validation import as_validator

logger = logging.getLogger(__name__)


def parse_text(text: str | bytes) -> Result[Any, JsonParseError]:
    """Decode *text* as JSON."""
    try:
        return Ok(pydantic_core.from_json(text, allow_inf_nan=False))
    except ValueError as exc:
        return Err(JsonParseError(message=f"Failed to parse JSON: {describe_fault(exc)}"))


def validate(value: Any, schema: Any) -> Result[Any, SchemaValidationError]:
    """Run *value* through the validator behind *schema*."""
    checked = as_validator(schema).validate(value)
    if checked.ok:
        return checked
    logger.debug("codec.invalid", extra={"problems": len(checked.err)})
    return Err(
        SchemaValidationError(
            message="Schema validation failed: " + "; ".join(checked.err),
        )
    )


def parse_and_validate(
    text: str | bytes, schema: Any
) -> Result[Any, JsonParseError | SchemaValidationError]:
    """Decode *text*, then validate it; decoding failures short-circuit."""
    return parse_text(text).and_then(lambda value: validate(value, schema))


def serialize_text(value: Any) -> Result[str, JsonStringifyError]:
    """Encode *value* as compact JSON text.

    Cycles and values nested past the serializer's depth guard both fail
    with pydantic_core's "Circular reference detected" wording; the
    parenthesized suffix (``id repeated`` or ``depth exceeded``) tells
    them apart.
    """
    try:
        return Ok(pydantic_core.to_json(value).decode("utf-8"))
    except (ValueError, TypeError) as exc:
        return Err(
            JsonStringifyError(message=f"Failed to stringify JSON: {describe_fault(exc)}")
        )


def safe_serialize_text(value: Any) -> str:
    """Encode *value*, or the stringify error itself if that fails.

    Always returns syntactically valid JSON.
    """
    encoded = serialize_text(value)
    if encoded.ok:
        return encoded.val
    return encoded.err.model_dump_json()
