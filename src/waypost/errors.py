"""Waypost exception hierarchy.

Shared across the route table, dispatcher, request pipeline, and ASGI
handler so every module raises and catches the same types.
"""

from dataclasses import dataclass


class WaypostError(Exception):
    """Base for all waypost-specific errors."""


class ConfigurationError(WaypostError):
    """Raised when app configuration is invalid.

    Surfaces at startup, never while serving requests.
    """


class MalformedTemplate(ConfigurationError):  # noqa: N818
    """A path template could not be compiled into a matcher.

    Fatal at registration time: a broken route would otherwise never match.
    """

    def __init__(self, template: object, reason: str) -> None:
        self.template = template
        self.reason = reason
        super().__init__(f"Malformed path template {template!r}: {reason}")


@dataclass(frozen=True, slots=True)
class HTTPError(WaypostError):
    """An error that maps directly to an HTTP status code.

    Raised by the request pipeline. The ASGI handler catches these and
    answers with a plain-text response carrying ``status``.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — no route matched the request."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class BadRequest(HTTPError):  # noqa: N818
    """400 — the request could not be read."""

    def __init__(self, detail: str = "Bad Request") -> None:
        super().__init__(status=400, detail=detail)


class RequestTimeout(HTTPError):  # noqa: N818
    """408 — the body did not arrive before the read deadline."""

    def __init__(self, detail: str = "Request Timeout") -> None:
        super().__init__(status=408, detail=detail)


class PayloadTooLarge(HTTPError):  # noqa: N818
    """413 — the body exceeds ``AppConfig.max_content_length``."""

    def __init__(self, limit: int, detail: str = "") -> None:
        super().__init__(
            status=413,
            detail=detail or f"Request body exceeds {limit} bytes",
        )


class ResponseError(WaypostError):
    """A handler broke the response contract.

    Treated as a programming defect: logged and answered with a 500.
    """


class ResponseAlreadyWritten(ResponseError):  # noqa: N818
    """The handler tried to write a second response."""


class ResponseNotWritten(ResponseError):  # noqa: N818
    """The handler returned without writing a response."""
