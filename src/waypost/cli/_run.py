"""``waypost run`` — serve an app with uvicorn."""

import argparse
import sys

from waypost.cli._resolve import resolve_app
from waypost.errors import ConfigurationError


def run_command(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` and serve it; CLI flags override app config."""
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    from waypost.server.run import run_server

    app._ensure_frozen()
    log_level = args.log_level or ("debug" if app.config.debug else app.config.log_level)
    run_server(
        app,
        args.host or app.config.host,
        args.port or app.config.port,
        log_level=log_level,
    )
