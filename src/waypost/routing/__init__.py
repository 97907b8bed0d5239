"""Routing — path template compiler, route table, and first-match dispatcher.

Routes are registered during setup and frozen before the first request;
dispatch is a linear scan in registration order.
"""

from waypost.routing.dispatcher import Dispatcher
from waypost.routing.pattern import CompiledPattern, PatternMatch, compile_template
from waypost.routing.route import MatchResult, Route, RouteMatch
from waypost.routing.table import RouteTable

__all__ = [
    "CompiledPattern",
    "Dispatcher",
    "MatchResult",
    "PatternMatch",
    "Route",
    "RouteMatch",
    "RouteTable",
    "compile_template",
]
