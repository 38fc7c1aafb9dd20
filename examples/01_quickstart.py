#!/usr/bin/env python3
"""Example: in-memory plugins

Builds a runtime with a plugin defined in code, then dispatches a few
command strings through it.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install gluekit
"""
from __future__ import annotations

import asyncio

from gluekit import Command, Plugin, Runtime


def todo(context):
    return context.config["todo"]["items"]


async def add(context):
    item = context.parameters.string
    return f"added {item!r} (priority={context.parameters.options.get('priority', 'normal')})"


async def main() -> None:
    runtime = Runtime("todo", argv=[])
    runtime.add_plugin(
        Plugin(
            "todo",
            defaults={"items": ["write docs"]},
            commands=[
                Command("todo", ("todo",), run=todo, description="List items"),
                Command("add", ("add",), aliases=("a",), run=add, description="Add an item"),
            ],
        )
    )

    # Step 1: no tokens run the brand's default command
    context = await runtime.run("")
    print(f"default command -> {context.result}")

    # Step 2: aliases and options
    context = await runtime.run("a buy milk --priority=high")
    print(f"alias 'a'       -> {context.result}")

    # Step 3: project defaults override the plugin's own
    runtime.defaults = {"todo": {"items": ["ship it"]}}
    context = await runtime.run("")
    print(f"with overrides  -> {context.result}")

    # Step 4: nothing matched
    context = await runtime.run("unknown")
    print(f"no match        -> matched={context.matched}")


if __name__ == "__main__":
    asyncio.run(main())
