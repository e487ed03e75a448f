"""API v2: list orders; /v2/purchases is kept as an alias."""

from routecore import RouteDefinition


class OrdersRoute(RouteDefinition):
    def __init__(self, server):
        super().__init__(
            server,
            {
                "method": "GET",
                "url": "/orders",
                "alias": ["/purchases"],
                "description": "List orders",
                "schema": {"response": {"200": {"$ref": "v2-order#"}}},
            },
        )

    def handler(self, request, reply):
        return {"result": {"orders": [], "total": 0}}
