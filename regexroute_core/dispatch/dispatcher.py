"""Dispatcher - Regex request dispatch.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional

from regexroute_core.routing.router import RouteMatch, RouteTable

logger = logging.getLogger(__name__)

# handler(request, response, captures)
Handler = Callable[[Any, Any, List[str]], Any]


class Dispatcher:
    """Regex request dispatcher.

    Routes are (pattern, handler) pairs tried in the order they were
    added. A request is served by the handler of the first route whose
    pattern matches the request's whole path. The handler receives the
    request, the response and the list of captured subgroups.

    If no pattern matches, nothing is called and ``dispatch`` returns
    False. Register a catch-all route (``".*"``) last to serve a 404.

    Usage:
        dispatcher = Dispatcher()
        dispatcher.add(r"/user/([0-9]+)", show_user)
        dispatcher.add(r".*", not_found)

        dispatcher.dispatch(request, response)
    """

    def __init__(self, table: Optional[RouteTable] = None):
        self.table = table if table is not None else RouteTable()

    def add(
        self,
        pattern: str,
        handler: Handler,
        name: str = "",
    ) -> "Dispatcher":
        """Register a route.

        Args:
            pattern: Regular expression the whole path must match
            handler: Called as handler(request, response, captures)
            name: Optional route label

        Raises:
            PatternError: If pattern is not a valid regex
            RouteTableFrozenError: If routes have been frozen
        """
        self.table.add(pattern, handler, name=name)
        return self

    def route(self, pattern: str, name: str = "") -> Callable[[Handler], Handler]:
        """Decorator form of add()."""

        def decorator(handler: Handler) -> Handler:
            self.add(pattern, handler, name=name or getattr(handler, "__name__", ""))
            return handler

        return decorator

    def resolve(self, path: str) -> Optional[RouteMatch]:
        """Find the route that would serve path, without calling it."""
        return self.table.resolve(path)

    def dispatch(self, request: Any, response: Any) -> bool:
        """Serve a request.

        Args:
            request: Object with a ``path`` attribute
            response: Passed through to the handler

        Returns:
            True if a handler was called, False if no route matched
        """
        match = self.table.resolve(request.path)
        if match is None:
            logger.debug(f"No route matched {request.path!r}")
            return False

        route = match.route
        logger.debug(
            f"{request.path!r} -> route #{route.index} {route.pattern!r} "
            f"captures={match.captures}"
        )
        route.handler(request, response, match.captures)
        return True

    __call__ = dispatch

    def freeze(self) -> None:
        """Reject any further route registration."""
        self.table.freeze()

    def __len__(self) -> int:
        return len(self.table)


__all__ = [
    "Dispatcher",
    "Handler",
]
