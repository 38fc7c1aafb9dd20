"""Shared test fixtures for gluekit.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

from pathlib import Path

import pytest

from gluekit import Command, Plugin, Runtime

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "gluekit"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def good_plugins() -> Path:
    return FIXTURES / "good-plugins"


@pytest.fixture()
def bad_plugins() -> Path:
    return FIXTURES / "bad-plugins"


@pytest.fixture()
def tools_plugin() -> Plugin:
    """An in-memory plugin with a default command, aliases and a nested command."""
    return Plugin(
        name="tools",
        defaults={"color": "blue"},
        commands=[
            Command("tools", ("tools",), run=lambda context: "default"),
            Command("generate", ("generate",), aliases=("g",), run=lambda context: "generate"),
            Command("model", ("generate", "model"), aliases=("m",), run=lambda context: "model"),
            Command("list", ("list",), aliases=("ls",), run=lambda context: "list"),
            Command("inert", ("inert",)),
        ],
    )


@pytest.fixture()
def runtime() -> Runtime:
    """A runtime without core extensions and with an empty argv."""
    return Runtime("tools", argv=[], core_extensions=False)
