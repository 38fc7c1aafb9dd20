"""CLI entry point for gluekit.

Invoked as::

    gluekit [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m gluekit.cli.main

Commands
--------
run         Resolve and run a plugin command
commands    List the commands of the loaded plugins
version     Show version information
"""
from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from gluekit.errors import GluekitError
from gluekit.extensions.meta import command_info
from gluekit.runtime import Runtime

console = Console()
err_console = Console(stderr=True)

DEFAULT_BRAND = "gluekit"


def _build_runtime(
    brand: str,
    plugin_roots: tuple[str, ...],
    plugin_dirs: tuple[str, ...],
    default_dir: str | None,
    config_file: str | None,
) -> Runtime:
    """Create a runtime and load everything the options point at, exiting on error."""
    runtime = Runtime(brand, argv=[])
    try:
        if default_dir:
            runtime.load(default_dir, default=True)
        for directory in plugin_dirs:
            runtime.load(directory)
        for root in plugin_roots:
            runtime.load_all(root)
        if config_file:
            runtime.configure(config_file)
    except GluekitError as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)
    return runtime


def _print_command_table(runtime: Runtime) -> None:
    rows = command_info(runtime)
    if not rows:
        console.print("  (No commands available. Point --plugins at a directory of plugins.)")
        return

    table = Table(show_header=True, box=None)
    table.add_column("Command", style="bold")
    table.add_column("Description")
    for label, description in rows:
        table.add_row(label, description)
    console.print(table)


def _runtime_options(func):
    """Attach the options shared by every command that needs a runtime."""
    options = [
        click.option("--brand", default=DEFAULT_BRAND, show_default=True, help="Name of the default plugin"),
        click.option(
            "--plugins",
            "plugin_roots",
            multiple=True,
            type=click.Path(file_okay=False),
            help="Directory whose sub-directories are plugins (repeatable)",
        ),
        click.option(
            "--plugin",
            "plugin_dirs",
            multiple=True,
            type=click.Path(file_okay=False),
            help="A single plugin directory (repeatable)",
        ),
        click.option(
            "--default",
            "default_dir",
            default=None,
            type=click.Path(file_okay=False),
            help="Plugin directory used as the default plugin",
        ),
        click.option(
            "--config",
            "config_file",
            default=None,
            type=click.Path(dir_okay=False),
            help="YAML file with base config and per-plugin defaults",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="gluekit")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log debug output to stderr")
def cli(verbose: bool) -> None:
    """Plugin-based command-line toolkit runtime."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from gluekit import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]gluekit[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# commands command
# ---------------------------------------------------------------------------


@cli.command(name="commands")
@_runtime_options
def commands_command(
    brand: str,
    plugin_roots: tuple[str, ...],
    plugin_dirs: tuple[str, ...],
    default_dir: str | None,
    config_file: str | None,
) -> None:
    """List the commands of every loaded plugin."""
    runtime = _build_runtime(brand, plugin_roots, plugin_dirs, default_dir, config_file)
    console.print(f"[bold]Plugins:[/bold] {', '.join(runtime.plugin_names) or '(none)'}")
    _print_command_table(runtime)


# ---------------------------------------------------------------------------
# run command
# ---------------------------------------------------------------------------


@cli.command(
    name="run",
    context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False},
)
@_runtime_options
@click.argument("tokens", nargs=-1, type=click.UNPROCESSED)
def run_command(
    brand: str,
    plugin_roots: tuple[str, ...],
    plugin_dirs: tuple[str, ...],
    default_dir: str | None,
    config_file: str | None,
    tokens: tuple[str, ...],
) -> None:
    """Resolve TOKENS to a plugin command and run it.

    Everything after the first token is passed to the command untouched.

    Examples:

    \b
        gluekit run --plugins ./plugins args config
        gluekit run --default ./plugins/movie search alien --limit=5
    """
    runtime = _build_runtime(brand, plugin_roots, plugin_dirs, default_dir, config_file)

    try:
        context = asyncio.run(runtime.run(list(tokens)))
    except Exception as exc:  # noqa: BLE001
        err_console.print(f"[red]Command failed:[/red] {exc}")
        sys.exit(1)

    if not context.matched:
        err_console.print(
            f"[red]Error:[/red] No command matches {' '.join(tokens) or '(empty input)'!r}."
        )
        _print_command_table(runtime)
        sys.exit(1)

    if context.result is not None:
        console.print(context.result)


if __name__ == "__main__":
    cli()
