"""Connectivity probe. Lives under api/ without a version directory, so it stays at /network/test."""

from routecore import RouteDefinition


def route(server):
    definition = RouteDefinition(server, {"method": "GET", "url": "/network/test", "summary": "Connectivity probe"})

    async def handler(request, reply):
        client = request.client.host if request.client else None
        return {"result": {"ok": True, "client": client}}

    definition.handler = handler
    return definition
