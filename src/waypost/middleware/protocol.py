"""Middleware protocol and Next type alias.

A middleware is any callable matching::

    async def my_mw(request: Request, next: Next) -> Response: ...

No base class required. Middleware runs before dispatch, in
registration order, and may hand a derived request to ``next``.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol, TypeAlias

from waypost.http.request import Request
from waypost.http.response import Response

# The next stage in the chain (ends in dispatch)
Next: TypeAlias = Callable[[Request], Awaitable[Response]]


class Middleware(Protocol):
    """Protocol for waypost middleware.

    Accepts both functions and callable objects::

        async def timing(request: Request, next: Next) -> Response:
            start = time.monotonic()
            response = await next(request)
            return response.with_header("X-Time", f"{time.monotonic() - start:.3f}")
    """

    async def __call__(self, request: Request, next: Next) -> Response: ...
