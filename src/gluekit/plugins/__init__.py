"""Plugin subsystem for gluekit.

``models`` holds the ``Plugin``, ``Command`` and ``Extension`` records,
``registry`` the ordered plugin collection, and ``loader`` turns plugin
directories on disk into ``Plugin`` objects.

A plugin directory looks like::

    my-plugin/
        plugin.yml          # name, description, hidden, defaults
        commands/
            my-plugin.py    # default command
            generate/
                model.py    # "generate model"
        extensions/
            greeting.py     # setup(context)
"""
from __future__ import annotations

from gluekit.plugins.loader import load_all_from_directory, load_from_directory
from gluekit.plugins.models import Command, Extension, Plugin
from gluekit.plugins.registry import PluginRegistry

__all__ = [
    "Command",
    "Extension",
    "Plugin",
    "PluginRegistry",
    "load_all_from_directory",
    "load_from_directory",
]
