"""Waypost — a minimal HTTP request router.

Registers (method, path template) pairs, compiles each template into a
matcher with named parameters, and dispatches every request to the
first matching route in registration order.

Basic usage::

    from waypost import App, Response

    app = App()

    @app.route("GET", "/users/:id")
    def get_user(request, params, response):
        response.write(Response.json({"id": params["id"]}))

    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "BadRequest",
    "ConfigurationError",
    "Dispatcher",
    "HTTPError",
    "MalformedTemplate",
    "Middleware",
    "Next",
    "NotFound",
    "Request",
    "Response",
    "ResponseWriter",
    "RouteTable",
    "WaypostError",
    "compile_template",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import waypost`` fast while providing a clean top-level API.
    """
    if name == "App":
        from waypost.app import App

        return App

    if name == "AppConfig":
        from waypost.config import AppConfig

        return AppConfig

    if name == "Request":
        from waypost.http.request import Request

        return Request

    if name in ("Response", "ResponseWriter"):
        from waypost.http import response

        return getattr(response, name)

    if name in ("Dispatcher", "RouteTable", "compile_template"):
        import waypost.routing

        return getattr(waypost.routing, name)

    if name in ("Middleware", "Next"):
        from waypost.middleware import protocol

        return getattr(protocol, name)

    if name in (
        "BadRequest",
        "ConfigurationError",
        "HTTPError",
        "MalformedTemplate",
        "NotFound",
        "WaypostError",
    ):
        from waypost import errors

        return getattr(errors, name)

    msg = f"module 'waypost' has no attribute {name!r}"
    raise AttributeError(msg)
