"""Route Loader - Load route definitions from files.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

Route file format (YAML or JSON):

    routes:
      - pattern: "/user/([0-9]+)"
        handler: "myapp.views:show_user"
        name: show_user
      - pattern: ".*"
        handler: "myapp.views:not_found"

Routes are registered in file order.
"""

from __future__ import annotations

import importlib
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Union

import yaml

from regexroute_core.routing.matcher import default_matcher

logger = logging.getLogger(__name__)


class RouteLoadError(Exception):
    """Raised when route definitions cannot be loaded."""
    pass


@dataclass
class RouteDefinition:
    """Route as declared in configuration."""

    pattern: str
    handler: str
    name: str = ""


def import_handler(spec: str) -> Callable[..., Any]:
    """Import a handler from a "package.module:attribute" string."""
    module_name, sep, attr_path = spec.partition(":")
    if not sep or not module_name or not attr_path:
        raise RouteLoadError(
            f"Handler {spec!r} must look like 'package.module:attribute'"
        )

    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise RouteLoadError(f"Cannot import module {module_name!r}: {e}") from e

    for attr in attr_path.split("."):
        try:
            target = getattr(target, attr)
        except AttributeError as e:
            raise RouteLoadError(
                f"Module {module_name!r} has no attribute {attr_path!r}"
            ) from e

    if not callable(target):
        raise RouteLoadError(f"Handler {spec!r} is not callable")
    return target


def parse_route_definitions(data: Union[Dict[str, Any], List[Any], None]) -> List[RouteDefinition]:
    """Validate raw route data.

    Accepts either a mapping with a ``routes`` key or the list itself.
    """
    if isinstance(data, dict):
        data = data.get("routes", [])
    if data is None:
        return []
    if not isinstance(data, list):
        raise RouteLoadError("'routes' must be a list")

    definitions = []
    for i, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise RouteLoadError(f"Route #{i} must be a mapping, got {type(entry).__name__}")
        pattern = entry.get("pattern")
        handler = entry.get("handler")
        if not isinstance(pattern, str):
            raise RouteLoadError(f"Route #{i} is missing a string 'pattern'")
        if not isinstance(handler, str):
            raise RouteLoadError(f"Route #{i} is missing a string 'handler'")
        definitions.append(
            RouteDefinition(pattern=pattern, handler=handler, name=str(entry.get("name", "")))
        )

    return definitions


def load_route_definitions(path: str) -> List[RouteDefinition]:
    """Load route definitions from a YAML or JSON file."""
    path_obj = Path(path)
    if not path_obj.is_file():
        raise RouteLoadError(f"Route file not found: {path}")

    try:
        with open(path_obj, "r", encoding="utf-8") as f:
            if path_obj.suffix == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as e:
        raise RouteLoadError(f"Cannot parse route file {path}: {e}") from e
    except OSError as e:
        raise RouteLoadError(f"Cannot read route file {path}: {e}") from e

    definitions = parse_route_definitions(data)
    logger.info(f"Loaded {len(definitions)} route definitions from {path}")
    return definitions


def register_routes(dispatcher: Any, definitions: List[RouteDefinition]) -> int:
    """Import handlers and register routes in order.

    Every handler is imported and every pattern compiled before the first
    route is added, so a bad entry leaves the dispatcher unchanged.

    Returns:
        Number of routes registered
    """
    resolved = []
    for definition in definitions:
        handler = import_handler(definition.handler)
        default_matcher.compile(definition.pattern)
        resolved.append((definition, handler))

    for definition, handler in resolved:
        dispatcher.add(definition.pattern, handler, name=definition.name)
    return len(resolved)


__all__ = [
    "RouteDefinition",
    "RouteLoadError",
    "import_handler",
    "parse_route_definitions",
    "load_route_definitions",
    "register_routes",
]
