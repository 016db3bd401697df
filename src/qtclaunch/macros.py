"""``%{name}`` variable expansion for stored path templates."""

from __future__ import annotations

import re
from collections.abc import Mapping

_MACRO_PATTERN = re.compile(r"%\{([^{}]+)\}")


class MacroExpander:
    """Callable expander replacing ``%{name}`` with a known variable value.

    Unknown names are left in place so a missing variable stays visible in the
    resulting path.
    """

    def __init__(self, variables: Mapping[str, str] | None = None) -> None:
        self.variables: dict[str, str] = dict(variables or {})

    def __call__(self, text: str) -> str:
        return self.expand(text)

    def set_variable(self, name: str, value: str) -> None:
        self.variables[name] = value

    def expand(self, text: str) -> str:
        def replace(match: re.Match[str]) -> str:
            name = match.group(1)
            return self.variables.get(name, match.group(0))

        return _MACRO_PATTERN.sub(replace, text)


def parse_variable_assignment(raw: str) -> tuple[str, str]:
    name, sep, value = raw.partition("=")
    name = name.strip()
    if not sep or not name:
        raise ValueError(f"Expected NAME=VALUE, got: {raw!r}")
    return name, value
