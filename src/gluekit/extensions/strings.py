"""``context.strings``: string helpers for code generators."""
from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from gluekit.runtime.context import RunContext

# lower→Upper boundaries, acronym boundaries, digits
_WORD = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|\d+")


def words(value: str) -> list[str]:
    """Split ``value`` into lowercase words across case, dash, underscore and space boundaries."""
    return [word.lower() for word in _WORD.findall(value or "")]


def camel_case(value: str) -> str:
    parts = words(value)
    if not parts:
        return ""
    return parts[0] + "".join(part.capitalize() for part in parts[1:])


def pascal_case(value: str) -> str:
    return "".join(part.capitalize() for part in words(value))


def snake_case(value: str) -> str:
    return "_".join(words(value))


def kebab_case(value: str) -> str:
    return "-".join(words(value))


def upper_first(value: str) -> str:
    return value[:1].upper() + value[1:]


def lower_first(value: str) -> str:
    return value[:1].lower() + value[1:]


def is_blank(value: Any) -> bool:
    """``True`` for ``None`` and for strings that are empty after stripping."""
    return value is None or (isinstance(value, str) and not value.strip())


def is_not_blank(value: Any) -> bool:
    return not is_blank(value)


class Strings:
    camel_case = staticmethod(camel_case)
    pascal_case = staticmethod(pascal_case)
    snake_case = staticmethod(snake_case)
    kebab_case = staticmethod(kebab_case)
    upper_first = staticmethod(upper_first)
    lower_first = staticmethod(lower_first)
    is_blank = staticmethod(is_blank)
    is_not_blank = staticmethod(is_not_blank)
    words = staticmethod(words)


def setup(context: RunContext) -> None:
    context.strings = Strings()
