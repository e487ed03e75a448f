"""Echo the requested URL back; also reachable as /talkback."""

from routecore import RouteDefinition


class Echo(RouteDefinition):
    def __init__(self, server):
        super().__init__(
            server,
            {
                "method": ["GET", "POST", "PUT"],
                "url": "/echo",
                "alias": "/talkback",
            },
        )

    def handler(self, request, reply):
        reply.send({"result": {"url": request.url.path}})
