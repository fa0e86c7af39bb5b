"""RpcRouter: maps request paths onto contracts and adds CORS headers.

Framework-agnostic.  A host server hands over ``(method, path, body)``
and writes back the returned :class:`HttpResponse`.  Status selection
lives here; :meth:`TypedRpc.execute` only produces the body text.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from typedrpc.config.settings import RpcSettings
    from typedrpc.services.rpc import Handler, TypedRpc

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpResponse:
    """Status, headers and body handed back to the host server."""

    status: int
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""


@dataclass(frozen=True)
class _Route:
    rpc: TypedRpc[Any, Any, Any]
    handler: Handler[Any, Any, Any]


class RpcRouter:
    """Dispatch POST requests to registered contracts.

    * ``OPTIONS`` on any path: 204 preflight.
    * ``POST`` on a registered path: 200 with the execute envelope.
    * Anything else: 404.
    """

    def __init__(self, settings: RpcSettings) -> None:
        self._settings = settings
        self._routes: dict[str, _Route] = {}

    def add(self, rpc: TypedRpc[Any, Any, Any], handler: Handler[Any, Any, Any]) -> RpcRouter:
        """Register *handler* for *rpc*'s path. Returns self for chaining."""
        if rpc.path in self._routes:
            msg = f"A contract is already registered for {rpc.path!r}"
            raise ValueError(msg)
        self._routes[rpc.path] = _Route(rpc=rpc, handler=handler)
        return self

    @property
    def paths(self) -> list[str]:
        return sorted(self._routes)

    def cors_headers(self) -> dict[str, str]:
        """CORS headers for the configured environment."""
        if self._settings.environment == "development":
            origin = "*"
        else:
            origin = self._settings.allowed_origin
        return {
            "Access-Control-Allow-Origin": origin,
            "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
            "Access-Control-Allow-Headers": "Content-Type",
        }

    def _respond(self, status: int, body: str = "", **headers: str) -> HttpResponse:
        merged = {key.replace("_", "-"): value for key, value in headers.items()}
        merged.update(self.cors_headers())
        return HttpResponse(status=status, headers=merged, body=body)

    async def dispatch(self, method: str, path: str, body: str | bytes = "") -> HttpResponse:
        """Route one request and build its response."""
        method = method.upper()
        if method == "OPTIONS":
            return self._respond(204)

        route = self._routes.get(path)
        if route is None or method != "POST":
            logger.debug("router.miss", extra={"method": method, "path": path})
            return self._respond(404, "Not Found")

        text = await route.rpc.execute(body, route.handler)
        return self._respond(200, text, Content_Type="application/json")
