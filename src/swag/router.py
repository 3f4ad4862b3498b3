"""Route table of the documented application.

Any object with a ``routes()`` method returning ``Route`` entries can be
used as a router; ``Router`` is a small ordered table for applications that
declare their routes directly.
"""

from contextlib import contextmanager
from typing import Any

from pydantic import BaseModel, ConfigDict

HTTP_VERBS = ("get", "post", "put", "patch", "delete", "head", "options")


class Route(BaseModel):
    """One route entry."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    path: str  # /api/users/{id}
    verb: str  # get / post / ...
    handler: Any  # class or module holding the action
    action: str  # name of the handler function
    pipe_through: list[str] | None = None


class Router:
    """An ordered route table."""

    def __init__(self):
        self._routes: list[Route] = []
        self._prefix = ""
        self._pipe_through: list[str] = []

    def add(self, verb: str, path: str, handler, action: str, pipe_through: list[str] | None = None) -> Route:
        verb = verb.lower()
        if verb not in HTTP_VERBS:
            raise ValueError(f"Unsupported HTTP verb: {verb}")

        pipes = [*self._pipe_through, *(pipe_through or [])]
        route = Route(
            path=self._prefix + path,
            verb=verb,
            handler=handler,
            action=action,
            pipe_through=pipes or None,
        )
        self._routes.append(route)
        return route

    def get(self, path: str, handler, action: str, **kwargs) -> Route:
        return self.add("get", path, handler, action, **kwargs)

    def post(self, path: str, handler, action: str, **kwargs) -> Route:
        return self.add("post", path, handler, action, **kwargs)

    def put(self, path: str, handler, action: str, **kwargs) -> Route:
        return self.add("put", path, handler, action, **kwargs)

    def patch(self, path: str, handler, action: str, **kwargs) -> Route:
        return self.add("patch", path, handler, action, **kwargs)

    def delete(self, path: str, handler, action: str, **kwargs) -> Route:
        return self.add("delete", path, handler, action, **kwargs)

    @contextmanager
    def scope(self, prefix: str = "", pipe_through: list[str] | None = None):
        """Group routes under a path prefix and extra pipeline identifiers."""
        saved = (self._prefix, self._pipe_through)
        self._prefix = self._prefix + prefix
        self._pipe_through = [*self._pipe_through, *(pipe_through or [])]
        try:
            yield self
        finally:
            self._prefix, self._pipe_through = saved

    def routes(self) -> list[Route]:
        return list(self._routes)
