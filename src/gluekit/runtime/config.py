"""Configuration layering and project configuration files.

The effective configuration of an invocation is the runtime's base
``config`` with one extra key, the resolved plugin's name, holding the
plugin's shipped defaults overlaid with any runtime-level defaults for
that plugin::

    runtime.config   = {"loglevel": "info"}
    plugin.defaults  = {"color": "blue", "size": 1}
    runtime.defaults = {"args": {"color": "red"}}

    build_config(runtime.config, runtime.defaults, plugin)
    # {"loglevel": "info", "args": {"color": "red", "size": 1}}

Project configuration lives in a YAML file. Its ``defaults`` mapping
feeds ``Runtime.defaults``; every other top-level key feeds
``Runtime.config``.
"""
from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from gluekit.errors import ConfigError
from gluekit.plugins.models import Plugin

logger = logging.getLogger(__name__)

DEFAULTS_KEY = "defaults"


def merge_defaults(
    plugin_defaults: Mapping[str, Any] | None,
    overrides: Mapping[str, Any] | None,
) -> dict[str, Any]:
    """Shallow-merge ``overrides`` over ``plugin_defaults`` into a new dict."""
    return {**(plugin_defaults or {}), **(overrides or {})}


def build_config(
    base: Mapping[str, Any],
    runtime_defaults: Mapping[str, Mapping[str, Any]] | None,
    plugin: Plugin,
) -> dict[str, Any]:
    """Compute the effective configuration for an invocation of ``plugin``.

    Parameters
    ----------
    base:
        The runtime's base configuration. Deep-copied, never mutated.
    runtime_defaults:
        Per-plugin overrides keyed by plugin name.
    plugin:
        The resolved plugin; its ``defaults`` form the bottom layer.

    Returns
    -------
    dict[str, Any]
        A new mapping; ``result[plugin.name]`` is always present.
    """
    effective = copy.deepcopy(dict(base))
    overrides = (runtime_defaults or {}).get(plugin.name)
    effective[plugin.name] = merge_defaults(plugin.defaults, overrides)
    return effective


def read_config_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML configuration file.

    A missing or empty file yields an empty mapping.

    Raises
    ------
    ConfigError
        If the file is not valid YAML, is not a mapping, or its
        ``defaults`` entry is not a mapping of mappings.
    """
    config_path = Path(path)
    if not config_path.is_file():
        logger.debug("No configuration file at %s", config_path)
        return {}

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(str(config_path), str(exc)) from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(str(config_path), "top level must be a mapping")

    defaults = data.get(DEFAULTS_KEY) or {}
    if not isinstance(defaults, dict) or not all(isinstance(v, dict) for v in defaults.values()):
        raise ConfigError(
            str(config_path),
            f"{DEFAULTS_KEY!r} must map plugin names to mappings",
        )

    logger.debug("Read configuration from %s (%d key(s))", config_path, len(data))
    return data


def split_config(data: Mapping[str, Any]) -> tuple[dict[str, Any], dict[str, dict[str, Any]]]:
    """Split a configuration mapping into ``(base_config, plugin_defaults)``."""
    base = {key: value for key, value in data.items() if key != DEFAULTS_KEY}
    defaults = {name: dict(values) for name, values in (data.get(DEFAULTS_KEY) or {}).items()}
    return base, defaults
