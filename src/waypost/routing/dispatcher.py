"""First-match dispatcher.

Linear scan in registration order. A route accepts a request when its
method is equal to the request method (case-sensitive) and its pattern
matches the raw request-target. The first acceptance wins; there is no
most-specific-match ranking, so ``GET /users/:id`` registered before
``GET /users/new`` also answers ``/users/new``.
"""

import logging

from waypost.routing.route import MatchResult, RouteMatch
from waypost.routing.table import RouteTable

logger = logging.getLogger("waypost.routing")


class Dispatcher:
    """Select the route for a request.

    Holds a frozen ``RouteTable`` snapshot; dispatch is pure lookup and
    needs no locking across concurrent requests.
    """

    __slots__ = ("_routes",)

    def __init__(self, table: RouteTable) -> None:
        if not table.frozen:
            table.freeze()
        self._routes = table.all()

    def dispatch(self, method: str, raw_path: str) -> MatchResult:
        """Return the first ``RouteMatch`` for *method* and *raw_path*, or ``None``."""
        for route in self._routes:
            if route.method != method:
                continue
            found = route.pattern.match(raw_path)
            if found is None:
                continue
            logger.debug("%s %s -> %s %s", method, raw_path, route.method, route.path)
            return RouteMatch(route=route, path_params=found.params, query=found.query)

        logger.debug("%s %s -> no match", method, raw_path)
        return None
