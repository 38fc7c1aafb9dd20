"""``context.meta``: information about the runtime a command is running in."""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gluekit.plugins.models import Command
    from gluekit.runtime.context import RunContext
    from gluekit.runtime.runtime import Runtime


def command_label(command: Command) -> str:
    """``"generate model (g, m)"``-style label for listings."""
    label = " ".join(command.command_path)
    if command.has_alias:
        label += f" ({', '.join(command.aliases)})"
    return label


def command_info(runtime: Runtime) -> list[list[str]]:
    """Rows of ``[label, description]`` for every visible command of every visible plugin."""
    rows: list[list[str]] = []
    for plugin in runtime.plugins:
        if plugin.hidden:
            continue
        for command in plugin.commands:
            if command.hidden:
                continue
            rows.append([command_label(command), command.description])
    return rows


class Meta:
    def __init__(self, context: RunContext) -> None:
        self._context = context

    @property
    def brand(self) -> str | None:
        runtime = self._context.runtime
        return runtime.brand if runtime is not None else None

    def command_info(self) -> list[list[str]]:
        if self._context.runtime is None:
            return []
        return command_info(self._context.runtime)


def setup(context: RunContext) -> None:
    context.meta = Meta(context)
