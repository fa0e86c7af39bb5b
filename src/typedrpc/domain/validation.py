"""Validator capability: the opaque schema engine behind every contract.

A *schema handle* is either a :class:`Validator` instance or anything
pydantic's ``TypeAdapter`` understands (models, builtins, unions,
``Annotated`` types).  :func:`as_validator` normalizes both into a
``Validator`` so the rest of the package never touches the engine
directly.

Diagnostics are plain strings of the form ``"<path>: <problem> (input: <repr>)"``.
"""

from __future__ import annotations

import functools
import reprlib
from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from pydantic import TypeAdapter, ValidationError

from typedrpc.domain.result import Err, Ok, Result

T = TypeVar("T")

ROOT = "<root>"


class Validator(ABC, Generic[T]):
    """Validate a decoded value, returning it coerced or a list of diagnostics."""

    @abstractmethod
    def validate(self, value: Any) -> Result[T, list[str]]: ...


def _short(value: Any) -> str:
    return reprlib.repr(value)


def _nest(prefix: str, diagnostics: list[str]) -> list[str]:
    """Re-root *diagnostics* under the field *prefix*."""
    nested: list[str] = []
    for diag in diagnostics:
        if diag.startswith(ROOT):
            nested.append(prefix + diag[len(ROOT) :])
        else:
            nested.append(f"{prefix}.{diag}")
    return nested


def format_validation_error(exc: ValidationError) -> list[str]:
    """Flatten a pydantic ``ValidationError`` into path-prefixed diagnostics."""
    diagnostics: list[str] = []
    for error in exc.errors():
        path = ".".join(str(part) for part in error["loc"]) or ROOT
        diagnostics.append(f"{path}: {error['msg']} (input: {_short(error.get('input'))})")
    return diagnostics


class PydanticValidator(Validator[T]):
    """Default engine: a pydantic ``TypeAdapter`` built once per schema."""

    def __init__(self, schema: Any) -> None:
        self.schema = schema
        self._adapter: TypeAdapter[T] = TypeAdapter(schema)

    def validate(self, value: Any) -> Result[T, list[str]]:
        try:
            return Ok(self._adapter.validate_python(value))
        except ValidationError as exc:
            return Err(format_validation_error(exc))

    def __repr__(self) -> str:
        return f"PydanticValidator({self.schema!r})"


class ResultValidator(Validator[Any]):
    """Validate a response envelope into ``Ok(...)`` / ``Err(...)``.

    Each branch's payload is checked with its own validator; diagnostics
    are re-rooted under ``val`` or ``err``.
    """

    def __init__(self, val_validator: Validator[Any], err_validator: Validator[Any]) -> None:
        self.val_validator = val_validator
        self.err_validator = err_validator

    def validate(self, value: Any) -> Result[Any, list[str]]:
        if not isinstance(value, dict):
            return Err([f"{ROOT}: Input should be an envelope object (input: {_short(value)})"])

        flag = value.get("ok")
        if flag is True:
            return self._branch(value, "val", self.val_validator, Ok)
        if flag is False:
            return self._branch(value, "err", self.err_validator, Err)
        return Err([f"ok: Input should be true or false (input: {_short(flag)})"])

    @staticmethod
    def _branch(
        envelope: dict[str, Any],
        key: str,
        validator: Validator[Any],
        wrap: type[Ok[Any]] | type[Err[Any]],
    ) -> Result[Any, list[str]]:
        if key not in envelope:
            return Err([f"{key}: Field required (input: {_short(envelope)})"])
        checked = validator.validate(envelope[key])
        if not checked.ok:
            return Err(_nest(key, checked.err))
        return Ok(wrap(checked.val))


class OneOfValidator(Validator[Any]):
    """Accept the first alternative that validates; otherwise report them all."""

    def __init__(self, *validators: Validator[Any]) -> None:
        if not validators:
            raise ValueError("OneOfValidator needs at least one alternative")
        self.validators = validators

    def validate(self, value: Any) -> Result[Any, list[str]]:
        diagnostics: list[str] = []
        for validator in self.validators:
            checked = validator.validate(value)
            if checked.ok:
                return checked
            diagnostics.extend(checked.err)
        return Err(diagnostics)


@functools.lru_cache(maxsize=256)
def _cached_validator(schema: Any) -> PydanticValidator[Any]:
    return PydanticValidator(schema)


def as_validator(schema: Any) -> Validator[Any]:
    """Normalize a schema handle into a :class:`Validator`.

    Hashable schemas share one ``TypeAdapter`` per process.
    """
    if isinstance(schema, Validator):
        return schema
    try:
        hash(schema)
    except TypeError:
        return PydanticValidator(schema)
    return _cached_validator(schema)


def result_schema(val_schema: Any, err_schema: Any) -> ResultValidator:
    """Schema for a serialized Result whose branches follow the given schemas."""
    return ResultValidator(as_validator(val_schema), as_validator(err_schema))


def one_of(*schemas: Any) -> OneOfValidator:
    """Schema accepting a value that matches any of *schemas*."""
    return OneOfValidator(*(as_validator(schema) for schema in schemas))
