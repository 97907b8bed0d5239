"""Middleware — the request pipeline that runs before dispatch.

The JSON body stage is installed by the app itself; user middleware
runs after it and sees the parsed body.
"""

from waypost.middleware.body import JSONBody, parse_json_body, read_body
from waypost.middleware.protocol import Middleware, Next

__all__ = [
    "JSONBody",
    "Middleware",
    "Next",
    "parse_json_body",
    "read_body",
]
