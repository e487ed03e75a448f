"""API v2: paginated, sortable user listing with response metadata."""

import json
import logging
from datetime import datetime, timezone

from routecore import RouteDefinition

logger = logging.getLogger(__name__)

USERS = [
    {"id": 1, "name": "John Doe", "email": "john@example.com", "role": "admin", "createdAt": "2023-01-15T12:00:00Z"},
    {"id": 2, "name": "Jane Smith", "email": "jane@example.com", "role": "user", "createdAt": "2023-02-20T14:30:00Z"},
    {"id": 3, "name": "Alice Brown", "email": "alice@example.com", "role": "user", "createdAt": "2023-03-10T09:15:00Z"},
]

SORT_KEYS = ("id", "name", "email")


class UsersRoute(RouteDefinition):
    def __init__(self, server):
        super().__init__(
            server,
            {
                "method": "GET",
                "url": "/users",
                "description": "Get a list of users with extended data",
                "tags": ["users", "api"],
                "summary": "Returns a list of system users with enhanced information",
                "schema": {
                    "querystring": {
                        "type": "object",
                        "properties": {
                            "limit": {"type": "integer", "default": 10},
                            "offset": {"type": "integer", "default": 0},
                            "sort": {"type": "string", "enum": list(SORT_KEYS), "default": "id"},
                        },
                    },
                },
            },
        )

    async def before_handler(self, request, reply):
        logger.info("API v2 - users request with params: %s", dict(request.query_params))

    async def handler(self, request, reply):
        try:
            limit = int(request.query_params.get("limit", 10))
            offset = int(request.query_params.get("offset", 0))
        except ValueError:
            reply.status(400).send({"error": {"message": "limit and offset must be integers"}})
            return
        sort = request.query_params.get("sort", "id")
        if sort not in SORT_KEYS:
            sort = "id"

        users = sorted(USERS, key=lambda u: u[sort])
        page = users[offset : offset + limit]
        total = len(users)
        reply.send(
            {
                "result": {
                    "users": page,
                    "total": total,
                    "pagination": {
                        "limit": limit,
                        "offset": offset,
                        "total": total,
                        "totalPages": -(-total // limit) if limit > 0 else 0,
                        "currentPage": offset // limit + 1 if limit > 0 else 1,
                    },
                }
            }
        )

    async def on_send(self, request, reply, payload):
        body = json.loads(payload)
        body["meta"] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": "v2",
            "params": dict(request.query_params),
        }
        return json.dumps(body)
