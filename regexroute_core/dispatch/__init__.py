"""Dispatch module - Request dispatch to route handlers."""

from regexroute_core.dispatch.dispatcher import Dispatcher, Handler

__all__ = [
    "Dispatcher",
    "Handler",
]
