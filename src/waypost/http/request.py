"""Immutable HTTP request.

Frozen metadata plus the body the request pipeline attached. Each stage
that learns something new (parsed body, path parameters) derives a new
instance with ``dataclasses.replace``.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from waypost._internal.asgi import Receive, Scope
from waypost.http.headers import Headers


async def _no_body() -> dict[str, Any]:
    return {"type": "http.request", "body": b"", "more_body": False}


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``target`` is the request-target exactly as received (path plus
    optional ``?query``); it is what the dispatcher matches against.
    ``body`` is the parsed body, ``None`` until the pipeline attaches one.
    """

    method: str
    target: str
    path: str
    query_string: str = ""
    headers: Headers = field(default_factory=Headers)
    path_params: Mapping[str, str] = field(default_factory=dict)
    body: Any = None
    raw_body: bytes = b""
    http_version: str = "1.1"
    client: tuple[str, int] | None = None

    # Private: ASGI receive callable for reading the body
    _receive: Receive = field(default=_no_body, repr=False, compare=False)

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def content_length(self) -> int | None:
        """The Content-Length header as int, ``None`` if absent or invalid."""
        value = self.headers.get("content-length")
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            return None

    async def stream(self) -> AsyncGenerator[bytes]:
        """Yield the body in the chunks the server delivers."""
        while True:
            message = await self._receive()
            if message["type"] == "http.disconnect":
                break
            chunk = message.get("body", b"")
            if chunk:
                yield chunk
            if not message.get("more_body", False):
                break

    def with_body(self, raw: bytes, parsed: Any) -> Request:
        """Return a copy carrying the raw and parsed body."""
        return replace(self, raw_body=raw, body=parsed)

    def with_params(self, params: Mapping[str, str]) -> Request:
        """Return a copy carrying the matched path parameters."""
        return replace(self, path_params=params)

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Create a Request from an ASGI HTTP scope and receive callable."""
        path: str = scope["path"]
        raw_path: bytes = scope.get("raw_path") or path.encode("utf-8")
        query_string = scope.get("query_string", b"").decode("latin-1")

        target = raw_path.decode("latin-1")
        if query_string:
            target = f"{target}?{query_string}"

        client = scope.get("client")
        return cls(
            method=scope["method"],
            target=target,
            path=path,
            query_string=query_string,
            headers=Headers(tuple(scope.get("headers", ()))),
            http_version=scope.get("http_version", "1.1"),
            client=tuple(client) if client else None,
            _receive=receive,
        )
