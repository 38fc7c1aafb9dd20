"""Per-invocation run context."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from gluekit.plugins.models import Command, Plugin
    from gluekit.runtime.parameters import Parameters
    from gluekit.runtime.runtime import Runtime


@dataclass
class RunContext:
    """Everything a command sees while it runs.

    A fresh context is created by every call to ``Runtime.run`` and is
    never shared between invocations. Extensions attach their
    capabilities as extra attributes (``context.print``,
    ``context.strings`` and so on).

    ``plugin_name`` is the name as selected from the input, or the
    runtime's brand when no plugin was named. When the runtime falls back
    to a plugin registered with ``default=True`` under another name,
    ``plugin_name`` stays the brand while ``plugin.name`` is that plugin's
    own name; use ``plugin.name`` for the plugin actually run.

    When ``plugin`` or ``command`` is ``None`` after ``run`` returns,
    nothing matched the input and ``config``, ``parameters`` and
    ``result`` are left unset.
    """

    runtime: Runtime | None = None
    plugin_name: str | None = None
    command_name: str | None = None
    plugin: Plugin | None = None
    command: Command | None = None
    config: dict[str, Any] = field(default_factory=dict)
    parameters: Parameters | None = None
    result: Any = None

    @property
    def matched(self) -> bool:
        """``True`` when both a plugin and a command were resolved."""
        return self.plugin is not None and self.command is not None

    @property
    def plugin_config(self) -> dict[str, Any]:
        """The merged configuration of the resolved plugin."""
        if self.plugin is None:
            return {}
        return self.config.get(self.plugin.name, {})
