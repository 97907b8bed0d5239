"""ASGI handler — translates ASGI scope/messages to waypost types.

The only component that touches raw ASGI directly. Builds a Request,
runs it through the middleware chain (body stage first), dispatches to
the first matching route, and sends the Response back through send().

Outcomes:

- no route matched: 404 with no body;
- ``HTTPError`` from the pipeline or a handler: plain-text status response;
- handler raised, or returned without writing: logged, 500;
- anything raised by the dispatcher itself propagates to the server.
"""

import logging
from collections.abc import Callable
from typing import Any

from waypost._internal.asgi import Receive, Scope, Send
from waypost._internal.invoke import invoke
from waypost.errors import HTTPError, ResponseNotWritten
from waypost.http.request import Request
from waypost.http.response import Response, ResponseWriter
from waypost.middleware.protocol import Next
from waypost.routing.dispatcher import Dispatcher
from waypost.routing.route import RouteMatch
from waypost.server.sender import send_response

logger = logging.getLogger("waypost.server")


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    dispatcher: Dispatcher,
    middleware: tuple[Callable[..., Any], ...] = (),
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)

    async def dispatch(req: Request) -> Response:
        match = dispatcher.dispatch(req.method, req.target)
        if match is None:
            return Response.empty(404)
        return await _invoke_handler(match, req)

    handler: Next = dispatch
    for mw in reversed(middleware):

        async def make_next(req: Request, _mw: Any = mw, _next: Next = handler) -> Response:
            return await _mw(req, _next)

        handler = make_next

    try:
        response = await handler(request)
    except HTTPError as exc:
        response = error_response(exc, request)

    await send_response(response, send)


async def _invoke_handler(match: RouteMatch, request: Request) -> Response:
    """Call the matched handler with (request, params, response writer)."""
    request = request.with_params(match.path_params)
    writer = ResponseWriter()
    try:
        await invoke(match.handler, request, match.path_params, writer)
        if not writer.written:
            msg = f"Handler {_handler_name(match)} returned without writing a response"
            raise ResponseNotWritten(msg)
    except HTTPError:
        raise
    except Exception:
        logger.exception(
            "500 %s %s (route %s %s)",
            request.method,
            request.target,
            match.route.method,
            match.route.path,
        )
        return Response("Internal Server Error", status=500)

    response = writer.response
    assert response is not None
    return response


def error_response(exc: HTTPError, request: Request) -> Response:
    """Map an ``HTTPError`` to a plain-text Response."""
    logger.debug("%d %s %s — %s", exc.status, request.method, request.target, exc.detail)
    response = Response(body=exc.detail, status=exc.status)
    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response


def _handler_name(match: RouteMatch) -> str:
    return getattr(match.handler, "__qualname__", repr(match.handler))
