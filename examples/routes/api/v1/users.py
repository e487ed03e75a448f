"""API v1: list users."""

from routecore import RouteDefinition

USERS = [
    {"id": 1, "name": "John Doe"},
    {"id": 2, "name": "Jane Smith"},
]


class UsersRoute(RouteDefinition):
    def __init__(self, server):
        super().__init__(
            server,
            {
                "method": "GET",
                "url": "/users",
                "description": "Get a list of users",
                "tags": ["users"],
                "schema": {"response": {"200": {"$ref": "v1-user#"}}},
            },
        )

    async def handler(self, request, reply):
        reply.send({"result": {"users": USERS, "total": len(USERS)}})
