"""Router - Ordered route table.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, List, Optional, Tuple

from regexroute_core.routing.matcher import RegexMatcher, default_matcher

logger = logging.getLogger(__name__)


class RouteTableFrozenError(RuntimeError):
    """Raised when a route is added to a frozen table."""
    pass


@dataclass(frozen=True)
class Route:
    """Route definition.

    Pairs one compiled pattern with one handler. Immutable once created.
    """

    pattern: str
    regex: re.Pattern = field(repr=False)
    handler: Callable[..., Any] = field(repr=False)
    index: int = 0
    name: str = ""

    def match(self, path: str) -> Optional[List[str]]:
        """Match path against this route.

        Returns:
            List of captures if match, None otherwise
        """
        return RegexMatcher.captures(self.regex, path)


@dataclass(frozen=True)
class RouteMatch:
    """Result of resolving a path."""

    route: Route
    captures: List[str] = field(default_factory=list)

    @property
    def handler(self) -> Callable[..., Any]:
        return self.route.handler


class RouteTable:
    """Ordered route table.

    Registration order is match precedence: the first route whose
    pattern fully matches a path wins, whatever routes come after it.
    Routes are only ever appended.

    Writers take the lock and publish a new tuple; readers use whatever
    tuple is current without locking.

    Usage:
        table = RouteTable()
        table.add(r"/user/([0-9]+)", show_user)
        table.add(r".*", not_found)

        match = table.resolve("/user/42")
        if match:
            match.handler(request, response, match.captures)
    """

    def __init__(self, matcher: Optional[RegexMatcher] = None):
        self._matcher = matcher or default_matcher
        self._routes: Tuple[Route, ...] = ()
        self._frozen = False
        self._lock = threading.RLock()

    def add(
        self,
        pattern: str,
        handler: Callable[..., Any],
        name: str = "",
    ) -> Route:
        """Append a route.

        Args:
            pattern: Regular expression the whole path must match
            handler: Callable invoked on match
            name: Optional label used in logs

        Raises:
            PatternError: If pattern is not a valid regex
            RouteTableFrozenError: If the table has been frozen
        """
        if not callable(handler):
            raise TypeError(f"Route handler for {pattern!r} is not callable")

        regex = self._matcher.compile(pattern)

        with self._lock:
            if self._frozen:
                raise RouteTableFrozenError(
                    f"Cannot add route {pattern!r}: route table is frozen"
                )
            route = Route(
                pattern=pattern,
                regex=regex,
                handler=handler,
                index=len(self._routes),
                name=name,
            )
            self._routes = self._routes + (route,)

        logger.debug(
            f"Registered route #{route.index} {pattern!r} "
            f"({regex.groups} capture groups)"
        )
        return route

    def resolve(self, path: str) -> Optional[RouteMatch]:
        """Find the first route matching path.

        Returns:
            RouteMatch if a route matches, None otherwise
        """
        for route in self._routes:
            captures = route.match(path)
            if captures is not None:
                return RouteMatch(route=route, captures=captures)
        return None

    def freeze(self) -> None:
        """Reject any further registration."""
        with self._lock:
            if not self._frozen:
                logger.debug(f"Route table frozen with {len(self._routes)} routes")
            self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def routes(self) -> Tuple[Route, ...]:
        """Routes in registration order."""
        return self._routes

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)


__all__ = [
    "Route",
    "RouteMatch",
    "RouteTable",
    "RouteTableFrozenError",
]
