"""Turn the tokens left after plugin selection into structured parameters.

Recognised option forms:

``--name=value``
    ``options["name"] = value`` (coerced, see below)
``--name``
    ``options["name"] = True``
``--no-name``
    ``options["name"] = False``
``-abc``
    ``options["a"] = options["b"] = options["c"] = True``
``--``
    every following token is positional

Values are coerced: ``true``/``false`` become booleans and numeric
strings become ``int`` or ``float``. Dashes inside option names are
kept as typed.
"""
from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

_INT = re.compile(r"^-?\d+$")
_FLOAT = re.compile(r"^-?(\d+\.\d*|\.\d+)$")


@dataclass
class Parameters:
    """Normalized parameters handed to a command through the context."""

    plugin: str | None = None
    command: str | None = None
    array: list[str] = field(default_factory=list)
    options: dict[str, Any] = field(default_factory=dict)
    raw: list[str] = field(default_factory=list)

    @property
    def string(self) -> str:
        """Positional parameters joined by single spaces."""
        return " ".join(self.array)

    @property
    def first(self) -> str | None:
        return self._at(0)

    @property
    def second(self) -> str | None:
        return self._at(1)

    @property
    def third(self) -> str | None:
        return self._at(2)

    def _at(self, index: int) -> str | None:
        return self.array[index] if index < len(self.array) else None


def _is_number(token: str) -> bool:
    return bool(_INT.match(token) or _FLOAT.match(token))


def coerce(value: str) -> Any:
    """Convert an option value string into bool, int or float where it looks like one."""
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if _INT.match(value):
        return int(value)
    if _FLOAT.match(value):
        return float(value)
    return value


def parse_tokens(tokens: Sequence[str]) -> tuple[list[str], dict[str, Any]]:
    """Split ``tokens`` into ``(positionals, options)``."""
    positionals: list[str] = []
    options: dict[str, Any] = {}
    only_positionals = False

    for token in tokens:
        if only_positionals or token == "-" or not token.startswith("-") or _is_number(token):
            positionals.append(token)
        elif token == "--":
            only_positionals = True
        elif token.startswith("--"):
            name, sep, value = token[2:].partition("=")
            if sep:
                options[name] = coerce(value)
            elif name.startswith("no-") and len(name) > 3:
                options[name[3:]] = False
            else:
                options[name] = True
        else:
            for letter in token[1:]:
                options[letter] = True

    return positionals, options


def normalize_params(
    plugin_name: str | None,
    command_name: str | None,
    tokens: Sequence[str] | None,
) -> Parameters:
    """Build ``Parameters`` for a resolved command.

    Parameters
    ----------
    plugin_name:
        Name of the resolved plugin.
    command_name:
        Name of the resolved command.
    tokens:
        The tokens left once the plugin name and the command path have
        been taken off the input.
    """
    raw = list(tokens or ())
    positionals, options = parse_tokens(raw)
    return Parameters(
        plugin=plugin_name,
        command=command_name,
        array=positionals,
        options=options,
        raw=raw,
    )
