"""Logging setup.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Dict, Optional

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Handler added by configure_logging, per logger name
_installed: Dict[str, logging.Handler] = {}


class JSONFormatter(logging.Formatter):
    """One JSON object per log line."""

    def format(self, record: logging.LogRecord) -> str:
        data = {
            "time": time.strftime("%Y-%m-%dT%H:%M:%S", time.localtime(record.created)),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data)


def configure_logging(
    level: str = "INFO",
    fmt: str = "text",
    logger_name: str = "regexroute_core",
    handler: Optional[logging.Handler] = None,
) -> logging.Logger:
    """Attach a handler to the package logger.

    Args:
        level: Log level name
        fmt: "text" or "json"
        logger_name: Logger to configure
        handler: Handler to use (default: stderr stream)
    """
    log = logging.getLogger(logger_name)
    log.setLevel(level.upper())

    handler = handler or logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    previous = _installed.pop(logger_name, None)
    if previous is not None:
        log.removeHandler(previous)
    _installed[logger_name] = handler
    log.addHandler(handler)

    return log


__all__ = [
    "JSONFormatter",
    "configure_logging",
]
