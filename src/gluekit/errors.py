"""Exception types raised by gluekit.

Dispatch itself never raises for a missing plugin or command; a
"no match" is reported through the returned ``RunContext``. The errors
below cover the setup phase: registering, looking up and loading
plugins, and reading configuration files.
"""
from __future__ import annotations


class GluekitError(Exception):
    """Base class for every error raised by gluekit."""


class PluginNotFoundError(GluekitError, KeyError):
    """Raised when a strict lookup asks for a plugin that is not registered."""

    def __init__(self, name: str, available: list[str] | None = None) -> None:
        self.plugin_name = name
        self.available = list(available or [])
        super().__init__(
            f"Plugin {name!r} is not registered. "
            f"Available plugins: {', '.join(self.available) or '(none)'}."
        )

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


class PluginAlreadyRegisteredError(GluekitError, ValueError):
    """Raised when a plugin name is added to a registry twice."""

    def __init__(self, name: str) -> None:
        self.plugin_name = name
        super().__init__(
            f"Plugin {name!r} is already registered. "
            "Plugin names must be unique within a runtime."
        )


class PluginLoadError(GluekitError):
    """Raised when a plugin directory cannot be turned into a ``Plugin``."""

    def __init__(self, directory: str, reason: str) -> None:
        self.directory = directory
        self.reason = reason
        super().__init__(f"Cannot load plugin from {directory}: {reason}")


class ConfigError(GluekitError):
    """Raised when a configuration file is not valid YAML or not a mapping."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid configuration in {path}: {reason}")
