"""ASGI middleware."""

from starlette.datastructures import QueryParams
from starlette.types import ASGIApp, Receive, Scope, Send


class MethodOverrideMiddleware:
    """Let HTML forms reach PUT and DELETE routes.

    A ``POST`` whose query string carries ``_method=PUT`` (or another
    allowed method) is dispatched as that method.
    """

    def __init__(
        self,
        app: ASGIApp,
        param: str = "_method",
        allowed_methods: tuple[str, ...] = ("PUT", "PATCH", "DELETE"),
    ) -> None:
        self.app = app
        self.param = param
        self.allowed_methods = allowed_methods

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["method"] == "POST":
            query = QueryParams(scope.get("query_string", b""))
            override = query.get(self.param, "").upper()
            if override in self.allowed_methods:
                scope["method"] = override
        await self.app(scope, receive, send)
