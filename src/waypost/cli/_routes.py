"""``waypost routes`` — list registered routes in dispatch order."""

import argparse
import sys

from waypost.cli._resolve import resolve_app
from waypost.errors import ConfigurationError


def run_routes(args: argparse.Namespace) -> None:
    """Print METHOD, PATH, PARAMS and HANDLER for every route.

    Rows come out in registration order, which is the order the
    dispatcher tries them.
    """
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    routes = app.routes
    if not routes:
        print("No routes registered.")
        return

    rows: list[tuple[str, str, str, str]] = []
    for route in routes:
        handler_name = getattr(route.handler, "__name__", str(route.handler))
        params = ", ".join(route.pattern.param_names) or "-"
        rows.append((route.method, route.path, params, handler_name))

    max_method = max(6, *(len(r[0]) for r in rows))  # "METHOD" header
    max_path = max(4, *(len(r[1]) for r in rows))  # "PATH" header
    max_params = max(6, *(len(r[2]) for r in rows))  # "PARAMS" header

    fmt = f"{{:<{max_method}}}  {{:<{max_path}}}  {{:<{max_params}}}  {{}}"
    print(fmt.format("METHOD", "PATH", "PARAMS", "HANDLER"))
    sep_len = max_method + max_path + max_params + 6 + max(len(r[3]) for r in rows)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(fmt.format(*row))
