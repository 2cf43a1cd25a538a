"""Gateway - Binds the dispatcher to HTTP requests.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Optional

from regexroute_core.dispatch.dispatcher import Dispatcher, Handler
from regexroute_core.gateway.request import Request, Response
from regexroute_core.utils.config import Config
from regexroute_core.utils.log import configure_logging
from regexroute_core.utils.loader import (
    load_route_definitions,
    parse_route_definitions,
    register_routes,
)

logger = logging.getLogger(__name__)


class Gateway:
    """HTTP front for a Dispatcher.

    The dispatcher is silent about unmatched paths; the gateway turns
    them into the configured not-found response.

    Usage:
        gateway = Gateway()
        gateway.route(r"/user/([0-9]+)", show_user)

        response = gateway.handle_request(Request("GET", "/user/42"))
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        dispatcher: Optional[Dispatcher] = None,
    ):
        self.config = config or Config()
        self.dispatcher = dispatcher if dispatcher is not None else Dispatcher()
        self._handled = 0
        self._not_found = 0
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: Config) -> "Gateway":
        """Build a gateway from config, setting up logging and routes.

        Routes from ``routes_file`` are registered before inline ``routes``.
        """
        configure_logging(config.log_level, config.log_format)
        gateway = cls(config)
        definitions = []
        if config.routes_file:
            definitions.extend(load_route_definitions(config.routes_file))
        definitions.extend(parse_route_definitions(config.routes))
        register_routes(gateway.dispatcher, definitions)
        logger.info(f"Gateway configured with {len(gateway.dispatcher)} routes")
        return gateway

    def route(self, pattern: str, handler: Handler, name: str = "") -> "Gateway":
        """Add a route.

        Args:
            pattern: Regular expression the whole path must match
            handler: Called as handler(request, response, captures)
            name: Optional route label
        """
        self.dispatcher.add(pattern, handler, name=name)
        return self

    def handle_request(self, request: Request) -> Response:
        """Handle a request.

        Handler exceptions are not caught.

        Returns:
            Response written by the handler, or the not-found response
        """
        if self.config.freeze_on_first_request and not self.dispatcher.table.frozen:
            self.dispatcher.freeze()

        response = Response()
        if self.dispatcher.dispatch(request, response):
            with self._lock:
                self._handled += 1
            return response

        with self._lock:
            self._not_found += 1
        logger.info(
            f"{request.method} {request.path} -> {self.config.not_found_status} (no route)"
        )
        return Response.error(
            int(self.config.not_found_status), str(self.config.not_found_body)
        )

    def handle_raw(self, data: bytes) -> bytes:
        """Handle a raw HTTP request and return the raw response."""
        try:
            request = Request.from_raw(data)
        except ValueError as e:
            logger.warning(f"Rejected malformed request: {e}")
            return Response.error(400).to_bytes()
        return self.handle_request(request).to_bytes()

    def get_stats(self) -> Dict[str, Any]:
        """Get gateway statistics."""
        return {
            "routes": len(self.dispatcher),
            "handled": self._handled,
            "not_found": self._not_found,
            "frozen": self.dispatcher.table.frozen,
        }


__all__ = [
    "Gateway",
]
