"""HTTP response with chainable .with_*() transformation API, and the
per-request ``ResponseWriter`` handle given to route handlers.
"""

import json as json_module
from dataclasses import dataclass, replace
from typing import Any

from waypost.errors import ResponseAlreadyWritten


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations.

    Construct with a body, then chain ``.with_*()`` calls to set
    status and headers. Each call returns a new ``Response``.
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/plain; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()

    @classmethod
    def json(cls, data: Any, status: int = 200) -> "Response":
        """A JSON response. ``data`` must be serializable by ``json.dumps``."""
        return cls(
            body=json_module.dumps(data),
            status=status,
            content_type="application/json",
        )

    @classmethod
    def empty(cls, status: int) -> "Response":
        """A response with *status* and no body."""
        return cls(body=b"", status=status)

    def with_status(self, status: int) -> "Response":
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> "Response":
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_content_type(self, content_type: str) -> "Response":
        """Return a new Response with a different content type."""
        return replace(self, content_type=content_type)

    @property
    def body_bytes(self) -> bytes:
        if isinstance(self.body, bytes):
            return self.body
        return self.body.encode("utf-8")

    @property
    def text(self) -> str:
        if isinstance(self.body, str):
            return self.body
        return self.body.decode("utf-8")


class ResponseWriter:
    """The response handle a route handler writes to.

    A handler must write exactly one complete response before it returns,
    either in one call::

        response.write(Response.json(user, status=201))

    or status first, then body::

        response.write_head(204)
        response.end()

    A second write raises ``ResponseAlreadyWritten``.
    """

    __slots__ = ("_head", "_response")

    def __init__(self) -> None:
        self._response: Response | None = None
        self._head: Response | None = None

    @property
    def written(self) -> bool:
        return self._response is not None

    @property
    def response(self) -> Response | None:
        """The written response, or ``None`` if the handler wrote nothing."""
        return self._response

    def write(self, response: Response) -> None:
        """Record *response* as the complete response for this request."""
        if self._response is not None:
            msg = f"Response already written with status {self._response.status}"
            raise ResponseAlreadyWritten(msg)
        self._response = response

    def write_head(self, status: int, headers: dict[str, str] | None = None) -> "ResponseWriter":
        """Stage status and headers; ``end()`` completes the response."""
        if self._response is not None:
            msg = f"Response already written with status {self._response.status}"
            raise ResponseAlreadyWritten(msg)
        head = Response.empty(status)
        for name, value in (headers or {}).items():
            if name.lower() == "content-type":
                head = head.with_content_type(value)
            else:
                head = head.with_header(name, value)
        self._head = head
        return self

    def end(self, body: str | bytes = b"") -> None:
        """Complete the staged response (200 if ``write_head`` was not called)."""
        head = self._head or Response()
        self._head = None
        self.write(replace(head, body=body))
