"""Build ``Plugin`` objects from directories on disk.

Layout
------
A plugin directory may contain:

``plugin.yml``
    Optional manifest with ``name``, ``description``, ``hidden`` and a
    ``defaults`` mapping. Without it the directory name is used as the
    plugin name.
``commands/``
    One Python module per command. The path of the module relative to
    ``commands/`` becomes the command path, so ``commands/generate/model.py``
    is addressed as ``generate model``. A module named after the plugin
    is the plugin's default command.
``extensions/``
    One Python module per extension, each exposing ``setup(context)``.

Command modules may define:

* ``run(context)``: the behavior, plain or ``async``.
* ``NAME``: overrides the name taken from the file name. Commands nested
  below the module follow the new name.
* ``ALIASES``: a string or a list of strings.
* ``DESCRIPTION``: help text (falls back to the module docstring).
* ``HIDDEN``: leave the command out of listings.

Modules that fail to import are logged and skipped, so one broken
command does not take the rest of the plugin down. Files and directories
whose names start with ``_`` are private and never imported.
"""
from __future__ import annotations

import fnmatch
import importlib.util
import logging
import re
from pathlib import Path
from types import ModuleType
from typing import Any

import yaml

from gluekit.errors import PluginLoadError
from gluekit.plugins.models import Command, Extension, Plugin

logger = logging.getLogger(__name__)

MANIFEST_FILE = "plugin.yml"
COMMANDS_DIR = "commands"
EXTENSIONS_DIR = "extensions"

_UNSAFE = re.compile(r"\W")


def load_from_directory(
    directory: str | Path,
    *,
    name: str | None = None,
    command_file_pattern: str = "*.py",
    extension_file_pattern: str = "*.py",
) -> Plugin:
    """Load a single plugin from ``directory``.

    Parameters
    ----------
    directory:
        The plugin's root directory.
    name:
        Overrides both the manifest name and the directory name.
    command_file_pattern:
        Glob used to pick command modules under ``commands/``.
    extension_file_pattern:
        Glob used to pick extension modules under ``extensions/``.

    Returns
    -------
    Plugin
        The loaded plugin, not yet registered with any runtime.

    Raises
    ------
    PluginLoadError
        If ``directory`` does not exist or its manifest is malformed.
    """
    root = Path(directory)
    if not root.is_dir():
        raise PluginLoadError(str(root), "not a directory")

    manifest = _read_manifest(root)
    plugin_name = name or manifest.get("name") or root.name
    defaults = manifest.get("defaults") or {}
    if not isinstance(defaults, dict):
        raise PluginLoadError(str(root), "'defaults' in the manifest must be a mapping")

    plugin = Plugin(
        name=str(plugin_name),
        defaults=defaults,
        description=str(manifest.get("description") or ""),
        hidden=bool(manifest.get("hidden", False)),
        directory=root,
    )
    plugin.commands = _load_commands(plugin, root / COMMANDS_DIR, command_file_pattern)
    plugin.extensions = _load_extensions(plugin, root / EXTENSIONS_DIR, extension_file_pattern)

    logger.debug(
        "Loaded plugin %r from %s: %d command(s), %d extension(s)",
        plugin.name,
        root,
        len(plugin.commands),
        len(plugin.extensions),
    )
    return plugin


def load_all_from_directory(
    directory: str | Path | None,
    *,
    matching: str | None = None,
    command_file_pattern: str = "*.py",
    extension_file_pattern: str = "*.py",
) -> list[Plugin]:
    """Load every plugin found in the immediate sub-directories of ``directory``.

    Sub-directories starting with ``.`` or ``_`` are ignored. When
    ``matching`` is given, only sub-directory names matching that glob
    are loaded. A blank or missing ``directory`` yields an empty list.
    """
    if not directory or not str(directory).strip():
        return []
    root = Path(directory)
    if not root.is_dir():
        logger.debug("Plugin directory %s does not exist; nothing to load", root)
        return []

    plugins: list[Plugin] = []
    for child in sorted(root.iterdir()):
        if not child.is_dir() or child.name.startswith((".", "_")):
            continue
        if matching and not fnmatch.fnmatch(child.name, matching):
            continue
        plugins.append(
            load_from_directory(
                child,
                command_file_pattern=command_file_pattern,
                extension_file_pattern=extension_file_pattern,
            )
        )
    return plugins


def _read_manifest(root: Path) -> dict[str, Any]:
    path = root / MANIFEST_FILE
    if not path.is_file():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise PluginLoadError(str(root), f"invalid {MANIFEST_FILE}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise PluginLoadError(str(root), f"{MANIFEST_FILE} must contain a mapping")
    return data


def _import_file(path: Path, module_name: str) -> ModuleType:
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot create an import spec for {path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _module_name(kind: str, plugin_name: str, parts: tuple[str, ...]) -> str:
    safe = [_UNSAFE.sub("_", part) for part in (plugin_name, *parts)]
    return f"_gluekit_{kind}_" + "__".join(safe)


def _is_private(relative: Path) -> bool:
    return any(part.startswith("_") for part in relative.parts)


def _renamed_path(parts: tuple[str, ...], renames: dict[tuple[str, ...], tuple[str, ...]]) -> tuple[str, ...]:
    if not parts:
        return ()
    if parts in renames:
        return renames[parts]
    return (*_renamed_path(parts[:-1], renames), parts[-1])


def _load_commands(plugin: Plugin, commands_dir: Path, pattern: str) -> list[Command]:
    if not commands_dir.is_dir():
        return []

    loaded: list[tuple[ModuleType, tuple[str, ...], Path]] = []
    for path in sorted(commands_dir.rglob(pattern)):
        relative = path.relative_to(commands_dir)
        if not path.is_file() or _is_private(relative):
            continue
        file_path = relative.with_suffix("").parts
        try:
            module = _import_file(path, _module_name("command", plugin.name, file_path))
        except Exception:
            logger.exception(
                "Failed to import command %r of plugin %r from %s; skipping.",
                " ".join(file_path),
                plugin.name,
                path,
            )
            continue
        loaded.append((module, file_path, path))

    # A NAME on a parent module renames the segment for everything nested below it.
    renames: dict[tuple[str, ...], tuple[str, ...]] = {}
    for module, file_path, _ in sorted(loaded, key=lambda entry: len(entry[1])):
        name = getattr(module, "NAME", None) or file_path[-1]
        renames[file_path] = (*_renamed_path(file_path[:-1], renames), name)

    return [_command_from_module(module, renames[file_path], path) for module, file_path, path in loaded]


def _command_from_module(module: ModuleType, command_path: tuple[str, ...], path: Path) -> Command:
    name = command_path[-1]

    aliases = getattr(module, "ALIASES", ())
    if isinstance(aliases, str):
        aliases = (aliases,)

    description = getattr(module, "DESCRIPTION", None)
    if description is None:
        doc = (module.__doc__ or "").strip()
        description = doc.splitlines()[0] if doc else ""

    run = getattr(module, "run", None)
    return Command(
        name=name,
        command_path=command_path,
        aliases=tuple(aliases),
        run=run if callable(run) else None,
        description=description,
        hidden=bool(getattr(module, "HIDDEN", False)),
        file=path,
    )


def _load_extensions(plugin: Plugin, extensions_dir: Path, pattern: str) -> list[Extension]:
    if not extensions_dir.is_dir():
        return []

    extensions: list[Extension] = []
    for path in sorted(extensions_dir.glob(pattern)):
        if not path.is_file() or path.name.startswith("_"):
            continue
        try:
            module = _import_file(path, _module_name("extension", plugin.name, (path.stem,)))
        except Exception:
            logger.exception(
                "Failed to import extension %r of plugin %r from %s; skipping.",
                path.stem,
                plugin.name,
                path,
            )
            continue
        setup = getattr(module, "setup", None)
        if not callable(setup):
            logger.warning(
                "Extension module %s of plugin %r has no setup(context); skipping.",
                path,
                plugin.name,
            )
            continue
        extensions.append(Extension(getattr(module, "NAME", path.stem), setup))
    return extensions
