"""Ordered registry of loaded plugins.

The registry keeps plugins in the order they were added and answers
lookups by name. Two lookup styles are offered:

* ``find`` is soft and returns ``None`` for an unknown name. Dispatch
  uses it, because an unknown plugin is a "no match" outcome rather
  than an error.
* ``get`` is strict and raises ``PluginNotFoundError``.

Example
-------
::

    from gluekit.plugins import Command, Plugin, PluginRegistry

    registry = PluginRegistry()
    registry.add(Plugin("args", commands=[Command("config", ("config",))]))

    registry.find("args")      # -> Plugin(name='args', ...)
    registry.find("missing")   # -> None
    "args" in registry         # -> True
"""
from __future__ import annotations

import logging
from collections.abc import Iterator

from gluekit.errors import PluginAlreadyRegisteredError, PluginNotFoundError
from gluekit.plugins.models import Plugin

logger = logging.getLogger(__name__)


class PluginRegistry:
    """Insertion-ordered collection of ``Plugin`` records keyed by name."""

    def __init__(self) -> None:
        self._plugins: dict[str, Plugin] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add(self, plugin: Plugin) -> Plugin:
        """Register ``plugin`` and return it.

        Raises
        ------
        PluginAlreadyRegisteredError
            If a plugin with the same name is already registered.
        TypeError
            If ``plugin`` is not a ``Plugin``.
        """
        if not isinstance(plugin, Plugin):
            raise TypeError(f"Cannot register {plugin!r}: expected a Plugin instance.")
        if plugin.name in self._plugins:
            raise PluginAlreadyRegisteredError(plugin.name)
        self._plugins[plugin.name] = plugin
        logger.debug(
            "Registered plugin %r with %d command(s)",
            plugin.name,
            len(plugin.commands),
        )
        return plugin

    def remove(self, name: str) -> Plugin:
        """Remove and return the plugin registered under ``name``.

        Raises
        ------
        PluginNotFoundError
            If ``name`` is not registered.
        """
        if name not in self._plugins:
            raise PluginNotFoundError(name, self.names())
        logger.debug("Removed plugin %r", name)
        return self._plugins.pop(name)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def find(self, name: str | None) -> Plugin | None:
        """Return the plugin called ``name``, or ``None``."""
        if name is None:
            return None
        return self._plugins.get(name)

    def get(self, name: str) -> Plugin:
        """Return the plugin called ``name``.

        Raises
        ------
        PluginNotFoundError
            If no plugin is registered under ``name``.
        """
        try:
            return self._plugins[name]
        except KeyError:
            raise PluginNotFoundError(name, self.names()) from None

    def names(self) -> list[str]:
        """Return plugin names in registration order."""
        return list(self._plugins)

    @property
    def default(self) -> Plugin | None:
        """The first plugin flagged ``is_default``, or ``None``."""
        for plugin in self._plugins.values():
            if plugin.is_default:
                return plugin
        return None

    def __iter__(self) -> Iterator[Plugin]:
        return iter(list(self._plugins.values()))

    def __contains__(self, name: object) -> bool:
        return name in self._plugins

    def __len__(self) -> int:
        return len(self._plugins)

    def __repr__(self) -> str:
        return f"PluginRegistry(plugins={self.names()})"
