"""Waypost application class.

Mutable during setup (route registration, middleware, hooks).
Frozen at runtime when app.run() or __call__() is first invoked.
"""

import threading
from collections.abc import Callable

from waypost._internal.asgi import Receive, Scope, Send
from waypost._internal.invoke import invoke
from waypost._internal.types import Handler, Hook
from waypost.config import AppConfig
from waypost.middleware.body import JSONBody
from waypost.middleware.protocol import Middleware
from waypost.routing.dispatcher import Dispatcher
from waypost.routing.route import Route
from waypost.routing.table import RouteTable
from waypost.server.handler import handle_request


class App:
    """The waypost application.

    Usage::

        app = App()

        @app.route("GET", "/users/:id")
        def get_user(request, params, response):
            response.write(Response.json({"id": params["id"]}))

    Templates are compiled when the route is registered, so a malformed
    template fails at import time rather than on the first request.
    Registration order is dispatch priority.

    Thread safety:
        The setup phase is single-threaded (decorators at import time).
        The freeze transition uses a Lock + double-check so exactly one
        thread builds the dispatcher.
    """

    __slots__ = (
        "_dispatcher",
        "_freeze_lock",
        "_frozen",
        "_middleware",
        "_middleware_list",
        "_shutdown_hooks",
        "_startup_hooks",
        "_table",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._table = RouteTable()
        self._middleware_list: list[Middleware] = []
        self._startup_hooks: list[Hook] = []
        self._shutdown_hooks: list[Hook] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state, set during _freeze()
        self._dispatcher: Dispatcher | None = None
        self._middleware: tuple[Callable[..., object], ...] = ()

    # -- Route registration --

    def route(self, method: str, path: str) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator.

        Args:
            method: HTTP method, compared case-sensitively (``"GET"``).
            path: Path template. Use ``:name`` for path parameters.
        """

        def decorator(func: Handler) -> Handler:
            self.add_route(method, path, func)
            return func

        return decorator

    def add_route(self, method: str, path: str, handler: Handler) -> Route:
        """Register a route. Raises ``MalformedTemplate`` on a bad template."""
        self._check_not_frozen()
        return self._table.register(method, path, handler)

    @property
    def routes(self) -> tuple[Route, ...]:
        """Registered routes in registration (dispatch) order."""
        return self._table.all()

    # -- Middleware --

    def add_middleware(self, middleware: Middleware) -> None:
        """Add a middleware. Runs after the built-in JSON body stage."""
        self._check_not_frozen()
        self._middleware_list.append(middleware)

    # -- Lifecycle hooks --

    def on_startup(self, func: Hook) -> Hook:
        """Decorator: run *func* (sync or async) once before serving."""
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Hook) -> Hook:
        """Decorator: run *func* (sync or async) once after serving stops."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- Serving --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Freeze the app and serve it with uvicorn."""
        from waypost.server.run import run_server

        self._ensure_frozen()
        run_server(
            self,
            host or self.config.host,
            port or self.config.port,
            log_level="debug" if self.config.debug else self.config.log_level,
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI entry point for ``http`` and ``lifespan`` scopes."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()
        assert self._dispatcher is not None

        await handle_request(
            scope,
            receive,
            send,
            dispatcher=self._dispatcher,
            middleware=self._middleware,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app before the first HTTP request, runs startup hooks,
        and reports failures back to the server instead of raising.
        """
        self._ensure_frozen()

        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    await self.startup()
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await self.shutdown()
                await send({"type": "lifespan.shutdown.complete"})
                return

    async def startup(self) -> None:
        """Run startup hooks in registration order."""
        for hook in self._startup_hooks:
            await invoke(hook)

    async def shutdown(self) -> None:
        """Run shutdown hooks in registration order."""
        for hook in self._shutdown_hooks:
            await invoke(hook)

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Freeze on first use; later calls return immediately."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Build the dispatcher and the middleware chain.

        Caller holds ``_freeze_lock``.
        """
        self._dispatcher = Dispatcher(self._table)
        body_stage = JSONBody(
            max_length=self.config.max_content_length,
            timeout=self.config.body_timeout,
        )
        self._middleware = (body_stage, *self._middleware_list)
        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes, middleware, and hooks before calling app.run()."
            )
            raise RuntimeError(msg)
