"""Ordered, append-only route table.

Registration order is dispatch priority: the dispatcher scans entries
front to back and the first acceptance wins.
"""

from collections.abc import Iterable, Iterator

from waypost._internal.types import Handler
from waypost.routing.pattern import compile_template
from waypost.routing.route import Route


class RouteTable:
    """Routes in registration order. Read-only once frozen.

    Usage::

        table = RouteTable()
        table.register("GET", "/users", list_users)
        table.register("GET", "/users/:id", get_user)
        table.freeze()
    """

    __slots__ = ("_frozen", "_routes")

    def __init__(self) -> None:
        self._routes: list[Route] = []
        self._frozen = False

    @classmethod
    def from_definitions(cls, definitions: Iterable[tuple[str, str, Handler]]) -> "RouteTable":
        """Build and freeze a table from ``(method, path, handler)`` tuples."""
        table = cls()
        for method, path, handler in definitions:
            table.register(method, path, handler)
        table.freeze()
        return table

    def register(self, method: str, template: str, handler: Handler) -> Route:
        """Compile *template* once and append a route.

        Raises ``MalformedTemplate`` if the template cannot be compiled,
        ``RuntimeError`` if the table is already frozen.
        """
        if self._frozen:
            msg = "Cannot register routes after the route table is frozen."
            raise RuntimeError(msg)
        route = Route(method=method, pattern=compile_template(template), handler=handler)
        self._routes.append(route)
        return route

    def freeze(self) -> None:
        """End registration. No more routes can be added."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def all(self) -> tuple[Route, ...]:
        """Return every route in registration order."""
        return tuple(self._routes)

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)
