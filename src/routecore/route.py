"""Base class for route definitions discovered in the routes directory."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from starlette.requests import Request

    from routecore.server import Reply, Server

__all__ = ["RouteDefinition", "DOCUMENTATION_KEYS"]

DOCUMENTATION_KEYS = ("description", "tags", "summary", "schema")


class RouteDefinition:
    """A route handler definition.

    Subclasses pass their configuration to ``__init__`` and override
    ``handler``. Lifecycle hooks are looked up by name at registration time,
    so a subclass only defines the ones it needs:

    - ``before_handler(request, reply)``: runs before ``handler``; sending a
      reply from it short-circuits the handler.
    - ``on_send(request, reply, payload)``: receives the serialized payload and
      may return a replacement.
    - ``on_response(request, reply)``: runs after the response has been sent.

    Example::

        class Echo(RouteDefinition):
            def __init__(self, server):
                super().__init__(server, {"method": ["GET", "POST"], "url": "/echo", "alias": "/talkback"})

            def handler(self, request, reply):
                reply.send({"result": {"url": str(request.url)}})
    """

    def __init__(self, server: Server, config: dict[str, Any] | None = None) -> None:
        self.config: dict[str, Any] = dict(config or {})
        self.config.setdefault("log_level", "info")
        self.server = server

    async def handler(self, request: Request, reply: Reply) -> None:
        """Default handler: answers 501 until a subclass overrides it."""
        reply.status(501).send({"error": {"message": "Not implemented"}})

    def get_documentation(self) -> dict[str, Any] | None:
        """Return the documented subset of ``config``, or None when nothing is documented."""
        docs = {key: self.config[key] for key in DOCUMENTATION_KEYS if self.config.get(key) is not None}
        return docs or None
