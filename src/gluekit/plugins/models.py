"""Records describing what a plugin contributes to a runtime.

A ``Plugin`` owns an ordered list of ``Command`` objects plus the
configuration defaults it ships with. An ``Extension`` is a named setup
callable that attaches a capability to every ``RunContext`` before a
command runs.
"""
from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from gluekit.runtime.context import RunContext

CommandBehavior = Callable[["RunContext"], Any]
ExtensionSetup = Callable[["RunContext"], None]


@dataclass(eq=False)
class Command:
    """An invocable unit inside a plugin.

    Parameters
    ----------
    name:
        The command's own name. For loaded commands this is the last
        segment of ``command_path``.
    command_path:
        Segments from the top level of the plugin down to this command,
        e.g. ``("generate", "model")``. A plugin's default command has the
        path ``(plugin_name,)``.
    aliases:
        Alternative names accepted in place of ``name``.
    run:
        The behavior invoked with the ``RunContext``. May return an
        awaitable. ``None`` means the command is resolvable but inert.
    description:
        One-line help text.
    hidden:
        Hidden commands are left out of command listings.
    file:
        Source file the command was loaded from, if any.

    Raises
    ------
    ValueError
        If ``command_path`` is empty.
    """

    name: str
    command_path: tuple[str, ...]
    aliases: tuple[str, ...] = ()
    run: CommandBehavior | None = None
    description: str = ""
    hidden: bool = False
    file: Path | None = None

    def __post_init__(self) -> None:
        self.command_path = tuple(self.command_path)
        self.aliases = tuple(self.aliases)
        if not self.command_path:
            raise ValueError(f"Command {self.name!r} must have a non-empty command_path.")

    @property
    def parent_path(self) -> tuple[str, ...]:
        """The command path without its final segment."""
        return self.command_path[:-1]

    @property
    def has_alias(self) -> bool:
        return bool(self.aliases)

    def matches(self, token: str) -> bool:
        """Return ``True`` if ``token`` is this command's name or one of its aliases."""
        return token == self.name or token in self.aliases


@dataclass(frozen=True)
class Extension:
    """A named capability attached to every context before a command runs."""

    name: str
    setup: ExtensionSetup


@dataclass(eq=False)
class Plugin:
    """A named bundle of commands plus default configuration.

    Parameters
    ----------
    name:
        Unique name within a runtime. Also the first token a user types
        to address this plugin explicitly.
    commands:
        Commands in load order. Order matters only for breaking ties
        between equally long command paths.
    defaults:
        Configuration shipped with the plugin. Runtime-level defaults for
        the same plugin override these key by key.
    extensions:
        Extensions the plugin contributes to the runtime when loaded.
    is_default:
        Marks the runtime's default plugin (the one used when the first
        token does not name a plugin).
    """

    name: str
    commands: list[Command] = field(default_factory=list)
    defaults: Mapping[str, Any] = field(default_factory=dict)
    extensions: list[Extension] = field(default_factory=list)
    description: str = ""
    hidden: bool = False
    is_default: bool = False
    directory: Path | None = None

    @property
    def default_command(self) -> Command | None:
        """The command whose path is exactly ``(self.name,)``, if any."""
        for command in self.commands:
            if command.command_path == (self.name,):
                return command
        return None

    def __repr__(self) -> str:
        return (
            f"Plugin(name={self.name!r}, "
            f"commands={[' '.join(c.command_path) for c in self.commands]}, "
            f"is_default={self.is_default})"
        )
