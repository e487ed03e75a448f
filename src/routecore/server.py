"""Host server adapter: route and schema registration on top of Starlette."""

from __future__ import annotations

import inspect
import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator

from starlette.applications import Starlette
from starlette.background import BackgroundTask
from starlette.exceptions import HTTPException
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from routecore.errors import (
    DuplicateSchemaError,
    RouteConflictError,
    SchemaNotFoundError,
    SchemaParseError,
)
from routecore.middleware import AccessLogMiddleware

__all__ = ["Reply", "RouteOptions", "Server", "normalize_methods", "to_starlette_path"]

logger = logging.getLogger(__name__)

_PARAM_SEGMENT = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")


def normalize_methods(method: str | list[str] | tuple[str, ...]) -> tuple[str, ...]:
    """Return method tokens upper-cased, in declaration order, without duplicates."""
    tokens = [method] if isinstance(method, str) else list(method)
    seen: dict[str, None] = {}
    for token in tokens:
        seen.setdefault(token.upper(), None)
    return tuple(seen)


def to_starlette_path(url: str) -> str:
    """Translate ``/users/:id`` style parameters to Starlette's ``/users/{id}``."""
    return _PARAM_SEGMENT.sub(r"{\1}", url)


async def _invoke(fn: Callable[..., Any], *args: Any) -> Any:
    result = fn(*args)
    if inspect.isawaitable(result):
        result = await result
    return result


class Reply:
    """Mutable response builder handed to route handlers and hooks."""

    def __init__(self) -> None:
        self.status_code = 200
        self.headers: dict[str, str] = {}
        self.media_type: str | None = None
        self.payload: Any = None
        self.sent = False

    def status(self, code: int) -> Reply:
        self.status_code = code
        return self

    def header(self, name: str, value: str) -> Reply:
        self.headers[name] = value
        return self

    def type(self, media_type: str) -> Reply:
        self.media_type = media_type
        return self

    def send(self, payload: Any = None) -> Reply:
        self.payload = payload
        self.sent = True
        return self

    def serialize(self, payload: Any = None) -> str | bytes:
        """Render a payload (default: the sent one) to a response body.

        Sets ``media_type`` from the payload kind unless already chosen.
        """
        if payload is None:
            payload = self.payload
        if payload is None:
            return b""
        if isinstance(payload, (bytes, str)):
            if self.media_type is None:
                self.media_type = "text/plain; charset=utf-8" if isinstance(payload, str) else "application/octet-stream"
            return payload
        if self.media_type is None:
            self.media_type = "application/json"
        return json.dumps(payload, default=str)


@dataclass
class RouteOptions:
    """Everything the server needs to register one URL."""

    url: str
    method: str | list[str] | tuple[str, ...]
    handler: Callable[..., Any]
    before_handler: Callable[..., Any] | None = None
    on_send: Callable[..., Any] | None = None
    on_response: Callable[..., Any] | None = None
    config: dict[str, Any] = field(default_factory=dict)

    @property
    def methods(self) -> tuple[str, ...]:
        return normalize_methods(self.method)


def _iter_refs(node: Any) -> Iterator[str]:
    if isinstance(node, dict):
        for key, value in node.items():
            if key == "$ref" and isinstance(value, str):
                yield value
            else:
                yield from _iter_refs(value)
    elif isinstance(node, list):
        for item in node:
            yield from _iter_refs(item)


async def _http_error(request: Request, exc: HTTPException) -> Response:
    if exc.status_code == 404:
        return JSONResponse({"error": {"message": "Resource not found", "url": str(request.url.path)}}, status_code=404)
    return JSONResponse({"error": {"message": exc.detail}}, status_code=exc.status_code, headers=exc.headers)


async def _server_error(request: Request, exc: Exception) -> Response:
    logger.error("Unhandled error on %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
    return JSONResponse({"error": {"message": "Internal server error"}}, status_code=500)


class Server:
    """Starlette application wrapper with a route/schema registration API.

    Registration is expected to finish before the application starts
    serving; nothing here is synchronized.
    """

    def __init__(self, name: str = "routecore", access_log: bool = True) -> None:
        self.name = name
        middleware = [Middleware(AccessLogMiddleware)] if access_log else []
        self._app = Starlette(
            middleware=middleware,
            exception_handlers={HTTPException: _http_error, Exception: _server_error},
        )
        self._registered: set[tuple[str, str]] = set()
        self._schemas: dict[str, dict[str, Any]] = {}

    @property
    def app(self) -> Starlette:
        """The ASGI application to hand to uvicorn or a test client."""
        return self._app

    # ----- Routes -----

    def route(self, options: RouteOptions) -> None:
        """Register a route.

        Raises:
            RouteConflictError: If any method is already registered for the URL.
            SchemaNotFoundError: If the route schema references an unknown schema id.
        """
        methods = options.methods
        for method in methods:
            if (method, options.url) in self._registered:
                raise RouteConflictError(method=method, url=options.url)

        schema = options.config.get("schema")
        if schema is not None:
            for ref in _iter_refs(schema):
                schema_id = ref.split("#", 1)[0]
                if schema_id and schema_id not in self._schemas:
                    raise SchemaNotFoundError(schema_id=schema_id)

        self._app.router.routes.append(
            Route(to_starlette_path(options.url), self._make_endpoint(options), methods=list(methods))
        )
        self._registered.update((method, options.url) for method in methods)

    def get(self, url: str, handler: Callable[..., Any]) -> None:
        """Shorthand for a GET route with no hooks."""
        self.route(RouteOptions(url=url, method="GET", handler=handler))

    def has_route(self, method: str, url: str) -> bool:
        return (method.upper(), url) in self._registered

    def _make_endpoint(self, options: RouteOptions) -> Callable[[Request], Any]:
        async def endpoint(request: Request) -> Response:
            reply = Reply()
            if options.before_handler is not None:
                await _invoke(options.before_handler, request, reply)
            if not reply.sent:
                result = await _invoke(options.handler, request, reply)
                if not reply.sent and result is not None:
                    reply.send(result)

            payload = reply.serialize()
            if options.on_send is not None:
                replaced = await _invoke(options.on_send, request, reply, payload)
                if replaced is not None:
                    payload = reply.serialize(replaced)

            background = None
            if options.on_response is not None:
                background = BackgroundTask(_invoke, options.on_response, request, reply)
            return Response(
                content=payload,
                status_code=reply.status_code,
                headers=reply.headers,
                media_type=reply.media_type,
                background=background,
            )

        endpoint.__name__ = f"route_{options.url}"
        return endpoint

    # ----- Schemas -----

    def add_schema(self, document: dict[str, Any]) -> None:
        """Register a schema document under its ``$id``.

        Raises:
            SchemaParseError: If the document has no string ``$id``.
            DuplicateSchemaError: If the id is already registered.
        """
        schema_id = document.get("$id")
        if not isinstance(schema_id, str) or not schema_id:
            raise SchemaParseError(message="Schema document must carry a non-empty string '$id'")
        if schema_id in self._schemas:
            raise DuplicateSchemaError(schema_id=schema_id, path="<server>")
        self._schemas[schema_id] = document

    def get_schema(self, schema_id: str) -> dict[str, Any] | None:
        return self._schemas.get(schema_id)

    @property
    def schemas(self) -> dict[str, dict[str, Any]]:
        """Snapshot of registered schemas keyed by id."""
        return dict(self._schemas)
