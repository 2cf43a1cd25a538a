"""Routing module - Route table and pattern matching."""

from regexroute_core.routing.router import (
    Route,
    RouteMatch,
    RouteTable,
    RouteTableFrozenError,
)
from regexroute_core.routing.matcher import PatternError, RegexMatcher

__all__ = [
    "Route",
    "RouteMatch",
    "RouteTable",
    "RouteTableFrozenError",
    "PatternError",
    "RegexMatcher",
]
