"""The gluekit runtime: plugin setup plus command dispatch.

A ``Runtime`` is created once per process. During setup, plugins and
extensions are added to it; afterwards ``run`` is called once per
invocation and only reads the runtime's state.

Example
-------
::

    import asyncio

    from gluekit import Runtime

    runtime = Runtime("movie")
    runtime.load_all("./plugins")
    runtime.defaults = {"imdb": {"country": "CA"}}

    context = asyncio.run(runtime.run("imdb search alien"))
    if not context.matched:
        print("no such command")
    else:
        print(context.result)
"""
from __future__ import annotations

import inspect
import logging
import sys
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import Any

from gluekit.plugins.loader import load_all_from_directory, load_from_directory
from gluekit.plugins.models import Command, Extension, ExtensionSetup, Plugin
from gluekit.plugins.registry import PluginRegistry
from gluekit.runtime.config import build_config, read_config_file, split_config
from gluekit.runtime.context import RunContext
from gluekit.runtime.parameters import Parameters, normalize_params
from gluekit.runtime.resolver import command_arguments, find_command

logger = logging.getLogger(__name__)

COMMAND_DELIMITER = " "

# sys.argv holds the script path ahead of the user's tokens
ARGV_PREFIX_LENGTH = 1

Normalizer = Callable[[str, str, Sequence[str]], Parameters]


def split_command(raw_command: str | Sequence[str]) -> list[str]:
    """Turn a raw command string or token sequence into a token list."""
    if isinstance(raw_command, str):
        return [token for token in raw_command.split(COMMAND_DELIMITER) if token]
    return list(raw_command)


class Runtime:
    """Loads plugins and runs commands.

    Parameters
    ----------
    brand:
        Name of the toolkit. The plugin with this name (or the plugin
        flagged ``is_default``) handles input whose first token is not a
        plugin name.
    argv:
        Argument vector used when ``run`` is called without a command.
        Defaults to a copy of ``sys.argv`` taken at construction.
    normalizer:
        Builds ``Parameters`` from the tokens that did not address the
        command (``generate model User --force`` hands it
        ``["User", "--force"]``).
    core_extensions:
        When ``True``, the built-in ``strings``, ``print``, ``filesystem``
        and ``meta`` extensions are registered first.
    """

    def __init__(
        self,
        brand: str | None = None,
        *,
        argv: Sequence[str] | None = None,
        normalizer: Normalizer = normalize_params,
        core_extensions: bool = True,
    ) -> None:
        self.brand = brand
        self.argv: list[str] = list(sys.argv if argv is None else argv)
        self.normalizer = normalizer
        self.plugins = PluginRegistry()
        self.extensions: list[Extension] = []
        self.defaults: dict[str, dict[str, Any]] = {}
        self.config: dict[str, Any] = {}

        if core_extensions:
            self.add_core_extensions()

    def __repr__(self) -> str:
        return (
            f"Runtime(brand={self.brand!r}, plugins={self.plugin_names}, "
            f"extensions={[e.name for e in self.extensions]})"
        )

    # ------------------------------------------------------------------
    # Extensions
    # ------------------------------------------------------------------

    def add_core_extensions(self) -> None:
        """Register the built-in extensions.

        They use the same ``add_extension`` route as third-party ones.
        """
        from gluekit.extensions import CORE_EXTENSIONS

        for name, setup in CORE_EXTENSIONS:
            self.add_extension(name, setup)

    def add_extension(self, name: str, setup: ExtensionSetup) -> Runtime:
        """Register an extension and return the runtime for chaining.

        ``setup(context)`` is called with every context right before its
        command runs. It usually sets ``context.<name>``, but may adjust
        the context in any way.
        """
        self.extensions.append(Extension(name, setup))
        logger.debug("Registered extension %r", name)
        return self

    def attach_extensions(self, context: RunContext) -> None:
        """Run every extension's setup against ``context``, in registration order."""
        for extension in self.extensions:
            extension.setup(context)

    # ------------------------------------------------------------------
    # Plugins
    # ------------------------------------------------------------------

    def add_plugin(self, plugin: Plugin, *, default: bool = False) -> Plugin:
        """Register ``plugin`` along with the extensions it ships.

        Raises
        ------
        PluginAlreadyRegisteredError
            If a plugin of the same name is already registered.
        """
        if default:
            plugin.is_default = True
        self.plugins.add(plugin)
        for extension in plugin.extensions:
            self.add_extension(extension.name, extension.setup)
        return plugin

    def load(
        self,
        directory: str | Path,
        *,
        default: bool = False,
        command_file_pattern: str = "*.py",
        extension_file_pattern: str = "*.py",
    ) -> Plugin:
        """Load the plugin in ``directory`` and register it."""
        plugin = load_from_directory(
            directory,
            command_file_pattern=command_file_pattern,
            extension_file_pattern=extension_file_pattern,
        )
        return self.add_plugin(plugin, default=default)

    def load_all(
        self,
        directory: str | Path | None,
        *,
        matching: str | None = None,
        command_file_pattern: str = "*.py",
        extension_file_pattern: str = "*.py",
    ) -> list[Plugin]:
        """Load and register every plugin under ``directory``.

        Plugins whose name is already registered are skipped with a
        warning so that a project can shadow a globally installed plugin.
        """
        loaded: list[Plugin] = []
        for plugin in load_all_from_directory(
            directory,
            matching=matching,
            command_file_pattern=command_file_pattern,
            extension_file_pattern=extension_file_pattern,
        ):
            if plugin.name in self.plugins:
                logger.warning(
                    "Plugin %r from %s is already registered; skipping.",
                    plugin.name,
                    plugin.directory,
                )
                continue
            loaded.append(self.add_plugin(plugin))
        return loaded

    @property
    def plugin_names(self) -> list[str]:
        return self.plugins.names()

    @property
    def default_plugin(self) -> Plugin | None:
        """The plugin flagged ``is_default``, else the one named after the brand."""
        return self.plugins.default or self.plugins.find(self.brand)

    def find_plugin(self, name: str | None) -> Plugin | None:
        return self.plugins.find(name)

    def find_command(self, plugin: Plugin | None, tokens: Sequence[str] | None = None) -> Command | None:
        return find_command(plugin, tokens)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def configure(self, path: str | Path) -> Runtime:
        """Layer a YAML configuration file onto ``config`` and ``defaults``."""
        base, defaults = split_config(read_config_file(path))
        self.config.update(base)
        for plugin_name, values in defaults.items():
            self.defaults.setdefault(plugin_name, {}).update(values)
        return self

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _select_plugin(self, context: RunContext, tokens: list[str]) -> list[str]:
        """Fill in plugin and command names; return the tokens left for resolution."""
        if not tokens:
            context.plugin_name = self.brand
            context.command_name = self.brand
            context.plugin = self.default_plugin
            return tokens

        first = tokens[0]
        if first in self.plugins:
            context.plugin_name = first
            context.command_name = tokens[1] if len(tokens) > 1 else first
            context.plugin = self.plugins.find(first)
            return tokens[1:]

        context.plugin_name = self.brand
        context.command_name = first
        context.plugin = self.default_plugin
        return tokens

    async def run(
        self,
        raw_command: str | Sequence[str] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> RunContext:
        """Resolve and run a command.

        Parameters
        ----------
        raw_command:
            A space-separated command string or a token list. ``None``
            falls back to the runtime's ``argv``.
        options:
            Extra options merged over the parsed ones (these win).

        Returns
        -------
        RunContext
            The populated context. If ``context.plugin`` or
            ``context.command`` is ``None``, nothing matched and nothing
            ran.

        Raises
        ------
        Exception
            Whatever the command itself raises is propagated unchanged.
        """
        context = RunContext(runtime=self)

        tokens = split_command(self.argv if raw_command is None else raw_command)
        if tokens == self.argv:
            tokens = tokens[ARGV_PREFIX_LENGTH:]

        tokens = self._select_plugin(context, tokens)
        context.command = find_command(context.plugin, tokens)

        if context.plugin is None or context.command is None:
            logger.debug(
                "No command for plugin %r, command %r",
                context.plugin_name,
                context.command_name,
            )
            return context

        context.config = build_config(self.config, self.defaults, context.plugin)

        arguments = command_arguments(context.plugin, tokens)
        context.parameters = self.normalizer(context.plugin.name, context.command.name, arguments)
        context.parameters.options = {**context.parameters.options, **(options or {})}

        if context.command.run is not None:
            self.attach_extensions(context)
            logger.debug(
                "Running %r of plugin %r",
                " ".join(context.command.command_path),
                context.plugin.name,
            )
            result = context.command.run(context)
            if inspect.isawaitable(result):
                result = await result
            context.result = result

        return context
