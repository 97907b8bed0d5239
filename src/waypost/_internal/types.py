"""Shared type aliases used across waypost modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Route handler: called as handler(request, params, response); sync or async
Handler: TypeAlias = Callable[..., Any]

# Startup / shutdown hook: sync or async, no arguments
Hook: TypeAlias = Callable[[], Any]
