"""Command resolution and dispatch.

The ``Runtime`` ties together plugin lookup, command resolution,
configuration layering, parameter normalization and the extension
pipeline. The remaining modules expose each step on its own so that it
can be used and tested in isolation.
"""
from __future__ import annotations

from gluekit.runtime.config import build_config, merge_defaults, read_config_file
from gluekit.runtime.context import RunContext
from gluekit.runtime.parameters import Parameters, normalize_params
from gluekit.runtime.resolver import NOT_FOUND, Found, NotFound, find_command
from gluekit.runtime.runtime import Runtime

__all__ = [
    "NOT_FOUND",
    "Found",
    "NotFound",
    "Parameters",
    "RunContext",
    "Runtime",
    "build_config",
    "find_command",
    "merge_defaults",
    "normalize_params",
    "read_config_file",
]
