#!/usr/bin/env python3
"""Example: plugins loaded from disk

Loads every plugin under ``examples/plugins`` and runs a nested command
by its aliases. The same thing from the shell::

    gluekit run --plugins examples/plugins greet s hi World

Usage:
    python examples/02_plugin_directory.py

Requirements:
    pip install gluekit
"""
from __future__ import annotations

import asyncio
from pathlib import Path

from gluekit import Runtime

PLUGINS = Path(__file__).parent / "plugins"


async def main() -> None:
    runtime = Runtime("greet", argv=[])
    runtime.load_all(PLUGINS)
    print(f"Loaded plugins: {runtime.plugin_names}")

    for raw in ("", "greet", "say hello World", "s hi World --shout"):
        context = await runtime.run(raw)
        print(f"{raw or '(empty)':<22} -> {context.result}")


if __name__ == "__main__":
    asyncio.run(main())
