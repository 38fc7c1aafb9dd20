"""Resolve a token path to a command inside a plugin.

The walk starts from an empty path. Each token is matched against the
commands that sit directly below the path accumulated so far, by name
or by alias. A hit replaces the accumulated path with the full path of
the matched command; a miss leaves it untouched and the token is
skipped. Among several hits the command with the shortest path wins,
and equally long paths keep their load order.

Once all tokens are consumed, an empty path means "use the plugin's
default command" (the one whose path is just the plugin name).
Otherwise the command whose path equals the accumulated path is
returned.

Example
-------
Given commands ``generate`` (alias ``g``) and ``generate model``
(alias ``m``)::

    find_command(plugin, ["g", "m", "User"])   # -> generate model
    find_command(plugin, ["g"])                # -> generate
    find_command(plugin, ["nope"])             # -> default command or None
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Union

from gluekit.plugins.models import Command, Plugin

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Found:
    """A token matched ``command``."""

    command: Command


@dataclass(frozen=True)
class NotFound:
    """A token matched nothing below the current path."""


NOT_FOUND = NotFound()

SegmentMatch = Union[Found, NotFound]


def by_path_length(commands: Iterable[Command]) -> list[Command]:
    """Return ``commands`` sorted shortest path first (stable)."""
    return sorted(commands, key=lambda command: len(command.command_path))


def match_segment(
    commands: Sequence[Command],
    prefix: tuple[str, ...],
    token: str,
) -> SegmentMatch:
    """Match a single ``token`` against the commands directly below ``prefix``.

    Parameters
    ----------
    commands:
        Candidate commands, already ordered by ``by_path_length``.
    prefix:
        The path accumulated so far.
    token:
        The token to match by name or alias.

    Returns
    -------
    Found | NotFound
        ``Found`` with the first matching command, or ``NOT_FOUND``.
    """
    for command in commands:
        if command.parent_path == prefix and command.matches(token):
            return Found(command)
    return NOT_FOUND


def walk(commands: Sequence[Command], tokens: Iterable[str]) -> tuple[tuple[str, ...], list[str]]:
    """Walk ``tokens`` and return ``(final_path, unmatched_tokens)``."""
    ordered = by_path_length(commands)
    path: tuple[str, ...] = ()
    unmatched: list[str] = []
    for token in tokens:
        step = match_segment(ordered, path, token)
        if isinstance(step, Found):
            path = step.command.command_path
        else:
            unmatched.append(token)
    return path, unmatched


def resolve_path(commands: Sequence[Command], tokens: Iterable[str]) -> tuple[str, ...]:
    """Walk ``tokens`` and return the final accumulated command path."""
    return walk(commands, tokens)[0]


def command_arguments(plugin: Plugin | None, tokens: Sequence[str] | None) -> list[str]:
    """Return the tokens of ``tokens`` that did not address a command."""
    if plugin is None or not plugin.commands:
        return list(tokens or ())
    return walk(plugin.commands, tokens or ())[1]


def find_command(plugin: Plugin | None, tokens: Sequence[str] | None = None) -> Command | None:
    """Return the command of ``plugin`` addressed by ``tokens``, or ``None``.

    Parameters
    ----------
    plugin:
        The plugin to search. ``None`` or a plugin without commands resolves
        to ``None``.
    tokens:
        The remaining input tokens. ``None`` is treated as empty.
    """
    if plugin is None or not plugin.commands:
        return None

    path = resolve_path(plugin.commands, tokens or ())

    if not path:
        command = plugin.default_command
        logger.debug(
            "No command matched %r in plugin %r; default command: %r",
            list(tokens or ()),
            plugin.name,
            command.name if command else None,
        )
        return command

    for command in plugin.commands:
        if command.command_path == path:
            logger.debug("Resolved %r in plugin %r to %r", list(tokens or ()), plugin.name, path)
            return command
    return None
