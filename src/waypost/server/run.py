"""Development server.

Runs a live waypost App under uvicorn. The router itself never touches
sockets; uvicorn owns the listener and the transport loop.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = "info") -> None:
    """Send ``waypost.*`` log records to stderr at *level*."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger("waypost").setLevel(level.upper())


def run_server(app: object, host: str, port: int, *, log_level: str = "info") -> None:
    """Serve the ASGI *app* on ``host:port`` until interrupted.

    Args:
        app: ASGI callable (waypost App instance).
        host: Bind host address.
        port: Bind port number.
        log_level: Level name for both waypost and uvicorn loggers.
    """
    import uvicorn

    configure_logging(log_level)
    config = uvicorn.Config(app, host=host, port=port, log_level=log_level.lower())
    server = uvicorn.Server(config)
    server.run()
