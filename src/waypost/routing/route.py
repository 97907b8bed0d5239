"""Route and RouteMatch frozen dataclasses."""

from dataclasses import dataclass
from typing import TypeAlias

from waypost._internal.types import Handler
from waypost.routing.pattern import CompiledPattern


@dataclass(frozen=True, slots=True)
class Route:
    """A registered route. Created at startup, never mutated."""

    method: str
    pattern: CompiledPattern
    handler: Handler

    @property
    def path(self) -> str:
        """The template this route was registered with."""
        return self.pattern.template


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful dispatch."""

    route: Route
    path_params: dict[str, str]
    query: str | None = None

    @property
    def handler(self) -> Handler:
        return self.route.handler


# ``None`` means no route matched; not an error
MatchResult: TypeAlias = RouteMatch | None
