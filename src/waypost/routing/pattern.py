"""Path template compilation.

Turns a template such as ``/users/:id/groups/:groupId`` into a
``CompiledPattern``: one anchored regular expression plus the ordered
parameter names it captures.

Grammar::

    template  := "/" (literal | param)*
    param     := ":" [A-Za-z]+
    value     := [a-z0-9\\-_]+

A ``:`` that is not followed by a letter is matched as a literal colon.
Names are letters only while values allow digits, ``-`` and ``_``; the
asymmetry is part of the contract.
"""

import re
from dataclasses import dataclass

from waypost.errors import MalformedTemplate

# A parameter token inside a template
PARAM_TOKEN = re.compile(r":([A-Za-z]+)")

# What a single parameter value may contain
PARAM_VALUE = r"[a-z0-9\-_]+"

# Optional trailing query string, captured without the leading "?"
_QUERY_SUFFIX = r"(?:\?(.*))?"


@dataclass(frozen=True, slots=True)
class PatternMatch:
    """Result of a successful pattern match."""

    params: dict[str, str]
    query: str | None = None


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """A compiled path template. Immutable; safe to share across requests."""

    template: str
    regex: re.Pattern[str]
    param_names: tuple[str, ...]

    def match(self, raw_path: str) -> PatternMatch | None:
        """Match a raw request-target (path plus optional ``?query``).

        Returns ``None`` when the path does not match.
        """
        m = self.regex.match(raw_path)
        if m is None:
            return None
        *values, query = m.groups()
        return PatternMatch(params=dict(zip(self.param_names, values, strict=True)), query=query)

    def __repr__(self) -> str:
        return f"CompiledPattern({self.template!r})"


def compile_template(template: str) -> CompiledPattern:
    """Compile a path template into a ``CompiledPattern``.

    Pure and deterministic: compiling the same template twice yields
    patterns that agree on every path.

    Raises ``MalformedTemplate`` if the template is not a string, does
    not start with ``/``, repeats a parameter name, or produces an
    invalid regular expression.
    """
    if not isinstance(template, str):
        raise MalformedTemplate(template, f"expected str, got {type(template).__name__}")
    if not template.startswith("/"):
        raise MalformedTemplate(template, "must start with '/'")

    parts: list[str] = []
    names: list[str] = []
    pos = 0
    for token in PARAM_TOKEN.finditer(template):
        name = token.group(1)
        if name in names:
            raise MalformedTemplate(template, f"duplicate parameter ':{name}'")
        parts.append(re.escape(template[pos : token.start()]))
        parts.append(f"({PARAM_VALUE})")
        names.append(name)
        pos = token.end()
    parts.append(re.escape(template[pos:]))

    source = r"\A" + "".join(parts) + _QUERY_SUFFIX + r"\Z"
    try:
        regex = re.compile(source, re.DOTALL)
    except re.error as exc:
        raise MalformedTemplate(template, str(exc)) from exc

    return CompiledPattern(template=template, regex=regex, param_names=tuple(names))
