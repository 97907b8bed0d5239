"""Turn a ``"package.module:name"`` target into an App."""

import importlib

from waypost.app import App


def resolve_app(target: str) -> App:
    """Import *target* and return the App it names.

    ``name`` defaults to ``app``. If it names a plain callable, the callable
    is treated as an app factory and invoked with no arguments.

    Raises:
        ModuleNotFoundError: The module part does not import.
        AttributeError: The module has no such name.
        TypeError: The name (or the factory's return value) is not an App.
    """
    module_name, _, name = target.partition(":")
    module = importlib.import_module(module_name)
    found = getattr(module, name or "app")

    if not isinstance(found, App) and callable(found):
        try:
            found = found()
        except Exception as exc:
            msg = f"App factory {target!r} failed: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(found, App):
        msg = f"{target!r} is a {type(found).__name__}, not a waypost.App instance"
        raise TypeError(msg)
    return found
