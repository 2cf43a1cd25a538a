"""Utils module - Configuration, route files and logging."""

from regexroute_core.utils.config import Config, load_config
from regexroute_core.utils.loader import (
    RouteDefinition,
    RouteLoadError,
    import_handler,
    load_route_definitions,
    parse_route_definitions,
    register_routes,
)
from regexroute_core.utils.log import configure_logging

__all__ = [
    "Config",
    "load_config",
    "RouteDefinition",
    "RouteLoadError",
    "import_handler",
    "load_route_definitions",
    "parse_route_definitions",
    "register_routes",
    "configure_logging",
]
