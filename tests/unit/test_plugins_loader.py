"""Unit tests for gluekit.plugins.loader: building plugins from
directories, manifests, command modules and extension modules.
"""
from __future__ import annotations

import logging
from pathlib import Path

import pytest

from gluekit.errors import PluginLoadError
from gluekit.plugins.loader import load_all_from_directory, load_from_directory
from gluekit.runtime.resolver import find_command


def _paths(plugin) -> list[tuple[str, ...]]:
    return [command.command_path for command in plugin.commands]


# ===========================================================================
# load_from_directory
# ===========================================================================


class TestLoadFromDirectory:
    def test_manifest_name_and_defaults(self, good_plugins: Path) -> None:
        plugin = load_from_directory(good_plugins / "args")
        assert plugin.name == "args"
        assert plugin.defaults == {"color": "blue", "size": 1}
        assert plugin.description.startswith("Commands for")
        assert plugin.directory == good_plugins / "args"

    def test_name_override(self, good_plugins: Path) -> None:
        assert load_from_directory(good_plugins / "args", name="other").name == "other"

    def test_directory_name_used_without_manifest(self, good_plugins: Path) -> None:
        plugin = load_from_directory(good_plugins / "_ignored")
        assert plugin.name == "_ignored"
        assert plugin.defaults == {}

    def test_command_paths_follow_file_layout(self, good_plugins: Path) -> None:
        plugin = load_from_directory(good_plugins / "args")
        assert sorted(_paths(plugin)) == [
            ("args",),
            ("config",),
            ("generate",),
            ("generate", "model"),
            ("secret",),
        ]

    def test_private_modules_are_not_loaded(self, good_plugins: Path) -> None:
        plugin = load_from_directory(good_plugins / "args")
        assert all(not command.name.startswith("_") for command in plugin.commands)

    def test_module_attributes_become_command_fields(self, good_plugins: Path) -> None:
        plugin = load_from_directory(good_plugins / "args")
        by_name = {command.name: command for command in plugin.commands}

        assert by_name["config"].aliases == ("cfg",)
        assert by_name["config"].description == "Report the configured color."
        assert by_name["secret"].hidden is True
        assert by_name["secret"].description == "Not listed"
        assert callable(by_name["model"].run)
        assert by_name["model"].file == good_plugins / "args" / "commands" / "generate" / "model.py"

    def test_string_alias_is_wrapped(self, good_plugins: Path) -> None:
        plugin = load_from_directory(good_plugins / "movie")
        search = next(c for c in plugin.commands if c.name == "search")
        assert search.aliases == ("s",)

    def test_default_command_is_named_after_plugin(self, good_plugins: Path) -> None:
        plugin = load_from_directory(good_plugins / "movie")
        assert plugin.default_command is not None
        assert plugin.default_command.name == "movie"

    def test_extensions_are_loaded(self, good_plugins: Path) -> None:
        plugin = load_from_directory(good_plugins / "args")
        assert [e.name for e in plugin.extensions] == ["greeting"]

    def test_command_file_pattern(self, good_plugins: Path) -> None:
        plugin = load_from_directory(good_plugins / "args", command_file_pattern="con*.py")
        assert _paths(plugin) == [("config",)]

    def test_missing_directory_raises(self, tmp_path: Path) -> None:
        with pytest.raises(PluginLoadError) as exc_info:
            load_from_directory(tmp_path / "nope")
        assert exc_info.value.reason == "not a directory"

    def test_non_mapping_manifest_raises(self, bad_plugins: Path) -> None:
        with pytest.raises(PluginLoadError):
            load_from_directory(bad_plugins / "bad-manifest")

    def test_non_mapping_defaults_raise(self, tmp_path: Path) -> None:
        (tmp_path / "plugin.yml").write_text("defaults: [1, 2]\n", encoding="utf-8")
        with pytest.raises(PluginLoadError):
            load_from_directory(tmp_path)

    def test_broken_command_is_skipped_and_logged(
        self, bad_plugins: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.ERROR, logger="gluekit.plugins.loader"):
            plugin = load_from_directory(bad_plugins / "broken")
        assert _paths(plugin) == [("ok",)]
        assert "boom" in caplog.text

    def test_extension_without_setup_is_skipped(
        self, bad_plugins: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="gluekit.plugins.loader"):
            plugin = load_from_directory(bad_plugins / "broken")
        assert plugin.extensions == []
        assert "nosetup" in caplog.text

    def test_name_override_in_module(self, tmp_path: Path) -> None:
        commands = tmp_path / "commands"
        commands.mkdir()
        (commands / "ls_cmd.py").write_text('NAME = "ls"\n\ndef run(context):\n    return 1\n', encoding="utf-8")
        plugin = load_from_directory(tmp_path)
        assert _paths(plugin) == [("ls",)]

    def test_renamed_parent_carries_nested_commands(self, tmp_path: Path) -> None:
        nested = tmp_path / "commands" / "generate"
        nested.mkdir(parents=True)
        (tmp_path / "commands" / "generate.py").write_text(
            'NAME = "gen"\n\ndef run(context):\n    return "gen"\n', encoding="utf-8"
        )
        (nested / "model.py").write_text('def run(context):\n    return "model"\n', encoding="utf-8")

        plugin = load_from_directory(tmp_path, name="tools")

        assert sorted(_paths(plugin)) == [("gen",), ("gen", "model")]
        command = find_command(plugin, ["gen", "model"])
        assert command is not None
        assert command.run(None) == "model"

    def test_renames_apply_through_plain_directories(self, tmp_path: Path) -> None:
        deep = tmp_path / "commands" / "db" / "migrate"
        deep.mkdir(parents=True)
        (tmp_path / "commands" / "db" / "migrate.py").write_text('NAME = "mig"\n', encoding="utf-8")
        (deep / "up.py").write_text('NAME = "forward"\n', encoding="utf-8")

        plugin = load_from_directory(tmp_path)

        assert sorted(_paths(plugin)) == [("db", "mig"), ("db", "mig", "forward")]

    def test_private_subdirectory_is_not_loaded(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        shared = tmp_path / "commands" / "_shared"
        shared.mkdir(parents=True)
        (shared / "util.py").write_text('raise RuntimeError("imported")\n', encoding="utf-8")

        with caplog.at_level(logging.ERROR, logger="gluekit.plugins.loader"):
            plugin = load_from_directory(tmp_path)

        assert plugin.commands == []
        assert "util" not in caplog.text

    def test_fixture_private_package_is_skipped(
        self, good_plugins: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.ERROR, logger="gluekit.plugins.loader"):
            plugin = load_from_directory(good_plugins / "args")
        assert all("_shared" not in command.command_path for command in plugin.commands)
        assert caplog.text == ""

    def test_module_without_run_is_inert(self, tmp_path: Path) -> None:
        commands = tmp_path / "commands"
        commands.mkdir()
        (commands / "inert.py").write_text('"""Does nothing."""\n', encoding="utf-8")
        plugin = load_from_directory(tmp_path)
        assert plugin.commands[0].run is None
        assert plugin.commands[0].description == "Does nothing."


# ===========================================================================
# load_all_from_directory
# ===========================================================================


class TestLoadAllFromDirectory:
    def test_loads_each_subdirectory(self, good_plugins: Path) -> None:
        plugins = load_all_from_directory(good_plugins)
        assert [p.name for p in plugins] == ["args", "movie"]

    def test_matching_filters_directories(self, good_plugins: Path) -> None:
        plugins = load_all_from_directory(good_plugins, matching="mov*")
        assert [p.name for p in plugins] == ["movie"]

    @pytest.mark.parametrize("directory", [None, "", "   "])
    def test_blank_directory_is_empty(self, directory: str | None) -> None:
        assert load_all_from_directory(directory) == []

    def test_missing_directory_is_empty(self, tmp_path: Path) -> None:
        assert load_all_from_directory(tmp_path / "nope") == []
