"""Gateway module - HTTP binding for the dispatcher."""

from regexroute_core.gateway.server import Gateway
from regexroute_core.gateway.request import Request, Response

__all__ = [
    "Gateway",
    "Request",
    "Response",
]
