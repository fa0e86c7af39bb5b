"""Result: the two-variant outcome type and its combinators.

Wire shape is the envelope itself: ``{"ok": true, "val": ...}`` or
``{"ok": false, "err": ...}``.  Both variants are frozen pydantic models
so they serialize straight to that shape.

INVARIANT: Exactly one of ``val`` / ``err`` exists, selected by ``ok``.
Construction never inspects the wrapped value.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")
E = TypeVar("E")


class Ok(BaseModel, Generic[T]):
    """Success branch of a Result."""

    model_config = ConfigDict(frozen=True)

    ok: Literal[True] = True
    val: T

    def __init__(self, val: T, /, **data: Any) -> None:
        super().__init__(val=val, **data)

    def map[U](self, fn: Callable[[T], U]) -> Ok[U]:
        return Ok(fn(self.val))

    def and_then[U, F](self, fn: Callable[[T], Result[U, F]]) -> Result[U, F]:
        return fn(self.val)

    def match[U](self, on_ok: Callable[[T], U], on_err: Callable[[Any], U]) -> U:
        return on_ok(self.val)


class Err(BaseModel, Generic[E]):
    """Error branch of a Result."""

    model_config = ConfigDict(frozen=True)

    ok: Literal[False] = False
    err: E

    def __init__(self, err: E, /, **data: Any) -> None:
        super().__init__(err=err, **data)

    def map(self, fn: Callable[[Any], Any]) -> Err[E]:
        return self

    def and_then(self, fn: Callable[[Any], Any]) -> Err[E]:
        return self

    def match[U](self, on_ok: Callable[[Any], U], on_err: Callable[[E], U]) -> U:
        return on_err(self.err)


type Result[T, E] = Ok[T] | Err[E]


def flatten[T, E1, E2](nested: Result[Result[T, E1], E2]) -> Result[T, E1 | E2]:
    """Collapse a Result-of-Result, propagating the outer error first."""
    if not nested.ok:
        return nested
    return nested.val


def propagate[E](error: Err[E]) -> Err[E]:
    """Re-type an error branch for return under a different ok type."""
    return error
