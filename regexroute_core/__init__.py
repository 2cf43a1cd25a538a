"""RegexRoute - Regular expression request dispatch.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

RegexRoute serves HTTP requests by matching the request path against an
ordered list of regular expressions:
- Routes are (pattern, handler) pairs, tried in registration order
- A pattern must match the whole path
- The first matching route wins; later routes are never tried
- Captured subgroups are passed to the handler as a list of strings
- Unmatched paths call nothing; register ".*" last for a 404

Request Flow:
┌────────────────────────────────────────────────────────────────────┐
│  Request ──▶ Gateway ──▶ Dispatcher ──▶ RouteTable (first match)   │
│                              │                                      │
│                              ▼                                      │
│              handler(request, response, captures)                   │
└────────────────────────────────────────────────────────────────────┘

Usage:
    from regexroute_core import Dispatcher

    dispatcher = Dispatcher()

    def show_user(request, response, captures):
        response.write(f"user {captures[0]}")

    def not_found(request, response, captures):
        response.status = 404

    dispatcher.add(r"/user/([0-9]+)", show_user)
    dispatcher.add(r".*", not_found)

    dispatcher.dispatch(request, response)
"""

__version__ = "0.1.0"
__author__ = "BlackRoad OS, Inc."

# Routing
from regexroute_core.routing.router import (
    Route,
    RouteMatch,
    RouteTable,
    RouteTableFrozenError,
)
from regexroute_core.routing.matcher import PatternError, RegexMatcher

# Dispatch
from regexroute_core.dispatch.dispatcher import Dispatcher, Handler

# Gateway
from regexroute_core.gateway.server import Gateway
from regexroute_core.gateway.request import Request, Response

# Utils
from regexroute_core.utils.config import Config, load_config
from regexroute_core.utils.loader import RouteLoadError, register_routes
from regexroute_core.utils.log import configure_logging

__all__ = [
    # Version
    "__version__",
    # Routing
    "Route",
    "RouteMatch",
    "RouteTable",
    "RouteTableFrozenError",
    "PatternError",
    "RegexMatcher",
    # Dispatch
    "Dispatcher",
    "Handler",
    # Gateway
    "Gateway",
    "Request",
    "Response",
    # Utils
    "Config",
    "load_config",
    "RouteLoadError",
    "register_routes",
    "configure_logging",
]
