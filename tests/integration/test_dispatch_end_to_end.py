"""End-to-end dispatch over plugins loaded from disk."""
from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from gluekit import Runtime

FIXTURES = Path(__file__).parent.parent / "fixtures"


@pytest.fixture()
def movie_runtime(tmp_path: Path) -> Runtime:
    config = tmp_path / "gluekit.yml"
    config.write_text("env: test\ndefaults:\n  movie:\n    country: CA\n", encoding="utf-8")

    runtime = Runtime("movie", argv=[])
    runtime.load_all(FIXTURES / "good-plugins")
    runtime.configure(config)
    return runtime


def test_brand_default_command(movie_runtime: Runtime) -> None:
    context = asyncio.run(movie_runtime.run())
    assert context.plugin_name == "movie"
    assert context.result == "movie home"


def test_default_plugin_command_with_config_file(movie_runtime: Runtime) -> None:
    context = asyncio.run(movie_runtime.run("search star wars --limit=3", {"sort": "year"}))
    assert context.result == {
        "query": "star wars",
        "country": "CA",
        "options": {"limit": 3, "sort": "year"},
    }
    assert context.config["env"] == "test"


def test_explicit_plugin_nested_alias(movie_runtime: Runtime) -> None:
    context = asyncio.run(movie_runtime.run(["args", "g", "m", "Post", "--force"]))
    assert context.plugin_name == "args"
    assert context.command_name == "g"
    assert context.command.command_path == ("generate", "model")
    assert context.result == "model Post"
    assert context.parameters.options == {"force": True}


def test_explicit_plugin_default_command_echoes_arguments(movie_runtime: Runtime) -> None:
    context = asyncio.run(movie_runtime.run("args one two"))
    assert context.command.command_path == ("args",)
    assert context.result == ["one", "two"]


def test_command_info_lists_every_visible_command(movie_runtime: Runtime) -> None:
    context = asyncio.run(movie_runtime.run("args config"))
    labels = [label for label, _ in context.meta.command_info()]
    assert "generate model (m)" in labels
    assert "search (s)" in labels
    assert "secret" not in labels
