"""gluekit: plugin-based command-line toolkit runtime.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import asyncio

    import gluekit

    runtime = gluekit.Runtime("movie")
    runtime.load("./plugins/movie", default=True)
    runtime.load_all("./plugins")

    context = asyncio.run(runtime.run("imdb search alien", {"limit": 5}))

    context.plugin       # Plugin(name='imdb', ...)
    context.command      # the "search" command
    context.parameters   # Parameters(array=['alien'], options={'limit': 5}, ...)
    context.result       # whatever the command returned

    gluekit.__version__
    '0.1.0'
"""
from __future__ import annotations

from gluekit.errors import (
    ConfigError,
    GluekitError,
    PluginAlreadyRegisteredError,
    PluginLoadError,
    PluginNotFoundError,
)
from gluekit.plugins import (
    Command,
    Extension,
    Plugin,
    PluginRegistry,
    load_all_from_directory,
    load_from_directory,
)
from gluekit.runtime import Parameters, RunContext, Runtime, find_command, normalize_params

__version__: str = "0.1.0"

__all__ = [
    "__version__",
    "Command",
    "ConfigError",
    "Extension",
    "GluekitError",
    "Parameters",
    "Plugin",
    "PluginAlreadyRegisteredError",
    "PluginLoadError",
    "PluginNotFoundError",
    "PluginRegistry",
    "RunContext",
    "Runtime",
    "find_command",
    "load_all_from_directory",
    "load_from_directory",
    "normalize_params",
]
