"""Request/Response - HTTP request and response objects.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import json
import time
from http import HTTPStatus
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional, Union
from urllib.parse import parse_qsl, unquote


@dataclass
class Request:
    """HTTP Request object.

    Only ``path`` is read by the dispatcher; the rest is for handlers.
    """

    method: str
    path: str
    headers: Dict[str, str] = field(default_factory=dict)
    query: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    remote_addr: str = ""
    protocol: str = "HTTP/1.1"
    timestamp: float = field(default_factory=time.time)

    def text(self) -> str:
        """Get body as text."""
        return self.body.decode()

    def get_header(self, name: str, default: str = "") -> str:
        """Get header value (case-insensitive)."""
        for key, value in self.headers.items():
            if key.lower() == name.lower():
                return value
        return default

    @classmethod
    def from_raw(cls, data: bytes) -> "Request":
        """Parse request from raw HTTP data.

        The query string is split off and the path is percent-decoded,
        so patterns are written against the decoded path.
        """
        head, _, body = data.partition(b"\r\n\r\n")
        lines = head.split(b"\r\n")

        # Parse request line
        parts = lines[0].decode("latin-1").split(" ")
        if len(parts) < 2 or not parts[0]:
            raise ValueError(f"Malformed request line: {lines[0]!r}")
        method = parts[0]
        target = parts[1]
        protocol = parts[2] if len(parts) > 2 else "HTTP/1.1"

        path, _, query_string = target.partition("?")
        query = dict(parse_qsl(query_string, keep_blank_values=True))

        headers = {}
        for line in lines[1:]:
            if b":" in line:
                key, value = line.decode("latin-1").split(":", 1)
                headers[key.strip()] = value.strip()

        return cls(
            method=method,
            path=unquote(path),
            headers=headers,
            query=query,
            body=body,
            protocol=protocol,
        )


@dataclass
class Response:
    """HTTP Response object.

    Handlers write into it through ``write`` and ``set_header``.
    """

    status: int = 200
    body: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)

    STATUS_MESSAGES: ClassVar[Dict[int, str]] = {
        200: "OK",
        201: "Created",
        204: "No Content",
        301: "Moved Permanently",
        302: "Found",
        304: "Not Modified",
        400: "Bad Request",
        401: "Unauthorized",
        403: "Forbidden",
        404: "Not Found",
        405: "Method Not Allowed",
        406: "Not Acceptable",
        408: "Request Timeout",
        409: "Conflict",
        410: "Gone",
        413: "Payload Too Large",
        414: "URI Too Long",
        415: "Unsupported Media Type",
        418: "I'm a Teapot",
        422: "Unprocessable Entity",
        429: "Too Many Requests",
        451: "Unavailable For Legal Reasons",
        500: "Internal Server Error",
        501: "Not Implemented",
        502: "Bad Gateway",
        503: "Service Unavailable",
        504: "Gateway Timeout",
    }

    @property
    def status_message(self) -> str:
        """Get status message."""
        message = self.STATUS_MESSAGES.get(self.status)
        if message is None:
            try:
                message = HTTPStatus(self.status).phrase
            except ValueError:
                message = "Unknown"
        return message

    def write(self, data: Union[str, bytes]) -> int:
        """Append data to the body.

        Returns:
            Number of bytes written
        """
        if isinstance(data, str):
            data = data.encode()
        self.body += data
        return len(data)

    def set_header(self, name: str, value: str) -> "Response":
        """Set header value."""
        self.headers[name] = value
        return self

    def to_bytes(self) -> bytes:
        """Convert to raw HTTP response."""
        lines = [f"HTTP/1.1 {self.status} {self.status_message}"]

        headers = dict(self.headers)
        headers.setdefault("Content-Length", str(len(self.body)))
        for key, value in headers.items():
            lines.append(f"{key}: {value}")

        lines.append("")
        header_bytes = "\r\n".join(lines).encode("latin-1")

        return header_bytes + b"\r\n" + self.body

    @classmethod
    def json(
        cls,
        data: Any,
        status: int = 200,
        headers: Optional[Dict[str, str]] = None,
    ) -> "Response":
        """Create JSON response."""
        resp_headers = dict(headers or {})
        resp_headers["Content-Type"] = "application/json"
        return cls(status=status, body=json.dumps(data).encode(), headers=resp_headers)

    @classmethod
    def text(
        cls,
        text: str,
        status: int = 200,
        headers: Optional[Dict[str, str]] = None,
    ) -> "Response":
        """Create text response."""
        resp_headers = dict(headers or {})
        resp_headers["Content-Type"] = "text/plain"
        return cls(status=status, body=text.encode(), headers=resp_headers)

    @classmethod
    def error(
        cls,
        status: int,
        message: Optional[str] = None,
    ) -> "Response":
        """Create plain text error response."""
        msg = message if message is not None else cls.STATUS_MESSAGES.get(status, "Error")
        return cls.text(msg, status=status)


__all__ = [
    "Request",
    "Response",
]
