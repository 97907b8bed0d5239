"""Waypost CLI — serve an app and inspect its route table.

Entry point registered as ``waypost`` in ``pyproject.toml``::

    [project.scripts]
    waypost = "waypost.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``waypost`` command."""
    parser = argparse.ArgumentParser(
        prog="waypost",
        description="Waypost — a minimal first-match HTTP router.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- waypost run ------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Serve an app with uvicorn")
    run_parser.add_argument("app", help="Import string (e.g. myapp:app)")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument(
        "--log-level",
        default=None,
        choices=["critical", "error", "warning", "info", "debug"],
        help="Log level for waypost and uvicorn",
    )

    # -- waypost routes ---------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List routes in dispatch order")
    routes_parser.add_argument("app", help="Import string (e.g. myapp:app)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from waypost.cli._run import run_command

        run_command(args)
    elif args.command == "routes":
        from waypost.cli._routes import run_routes

        run_routes(args)
