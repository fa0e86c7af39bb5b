"""The greet contract shared by the client and server sides."""

from __future__ import annotations

from typing import Never

from pydantic import BaseModel, ConfigDict

from typedrpc.domain.result import Ok, Result
from typedrpc.services.rpc import Handler, TypedRpc


class GreetInput(BaseModel):
    """Request payload."""

    model_config = ConfigDict(frozen=True)

    name: str


class GreetOutput(BaseModel):
    """Success payload."""

    model_config = ConfigDict(frozen=True)

    message: str


GREET_RPC: TypedRpc[GreetInput, GreetOutput, Never] = TypedRpc(
    "/api/greet", GreetInput, GreetOutput
)


def make_greet_handler(environment: str) -> Handler[GreetInput, GreetOutput, Never]:
    """Build the reference handler, tagging replies with *environment*."""

    async def greet(payload: GreetInput) -> Result[GreetOutput, Never]:
        return Ok(GreetOutput(message=f"Hello, {payload.name}! (from {environment})"))

    return greet
