"""Report the service name and version."""

from routecore import RouteDefinition, __version__


class VersionRoute(RouteDefinition):
    def __init__(self, server):
        super().__init__(server, {"method": "GET", "url": "/version", "description": "Service version"})

    def handler(self, request, reply):
        reply.send({"result": {"name": self.server.name, "version": __version__}})
