"""Request body stage: read the whole body, parse it as JSON, attach it.

Runs before dispatch. A body that is empty or not valid JSON is attached
as ``None``; it is up to the handler to decide whether that is an error.
"""

import json
import logging
from typing import Any

import anyio

from waypost.errors import PayloadTooLarge, RequestTimeout
from waypost.http.request import Request
from waypost.http.response import Response
from waypost.middleware.protocol import Next

logger = logging.getLogger("waypost.middleware")


async def read_body(request: Request, *, max_length: int, timeout: float) -> bytes:
    """Read the full request body.

    Raises ``PayloadTooLarge`` as soon as the declared or received size
    exceeds *max_length*, ``RequestTimeout`` if the body is not complete
    within *timeout* seconds.
    """
    declared = request.content_length
    if declared is not None and declared > max_length:
        raise PayloadTooLarge(max_length)

    chunks: list[bytes] = []
    received = 0
    try:
        with anyio.fail_after(timeout):
            async for chunk in request.stream():
                received += len(chunk)
                if received > max_length:
                    break
                chunks.append(chunk)
    except TimeoutError as exc:
        raise RequestTimeout(f"Body not received within {timeout:g}s") from exc

    # HTTPError is frozen; raise it outside the fail_after scope
    if received > max_length:
        raise PayloadTooLarge(max_length)
    return b"".join(chunks)


def parse_json_body(raw: bytes) -> Any:
    """Decode *raw* as JSON, or ``None`` if it is empty or invalid."""
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except (ValueError, RecursionError):
        logger.debug("Ignoring request body that is not valid JSON (%d bytes)", len(raw))
        return None


class JSONBody:
    """Pipeline stage that attaches the parsed JSON body to the request.

    Usage::

        app.add_middleware(JSONBody(max_length=64 * 1024))

    The app installs one automatically, configured from ``AppConfig``.
    """

    __slots__ = ("max_length", "timeout")

    def __init__(self, max_length: int = 1024 * 1024, timeout: float = 30.0) -> None:
        self.max_length = max_length
        self.timeout = timeout

    async def __call__(self, request: Request, next: Next) -> Response:
        raw = await read_body(request, max_length=self.max_length, timeout=self.timeout)
        return await next(request.with_body(raw, parse_json_body(raw)))
