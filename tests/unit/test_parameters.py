"""Unit tests for gluekit.runtime.parameters: option parsing, value
coercion and the Parameters accessors.
"""
from __future__ import annotations

import pytest

from gluekit.runtime.parameters import Parameters, coerce, normalize_params, parse_tokens


class TestCoerce:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("true", True),
            ("FALSE", False),
            ("42", 42),
            ("-7", -7),
            ("3.5", 3.5),
            (".5", 0.5),
            ("blue", "blue"),
            ("1.2.3", "1.2.3"),
        ],
    )
    def test_coerce(self, raw: str, expected: object) -> None:
        assert coerce(raw) == expected
        assert type(coerce(raw)) is type(expected)


class TestParseTokens:
    def test_positionals_only(self) -> None:
        assert parse_tokens(["a", "b"]) == (["a", "b"], {})

    def test_long_option_with_value(self) -> None:
        assert parse_tokens(["--limit=5"]) == ([], {"limit": 5})

    def test_value_may_contain_equals(self) -> None:
        assert parse_tokens(["--query=a=b"]) == ([], {"query": "a=b"})

    def test_long_flag(self) -> None:
        assert parse_tokens(["--force"]) == ([], {"force": True})

    def test_negated_flag(self) -> None:
        assert parse_tokens(["--no-color"]) == ([], {"color": False})

    def test_short_flags_are_split(self) -> None:
        assert parse_tokens(["-abc"]) == ([], {"a": True, "b": True, "c": True})

    def test_double_dash_ends_options(self) -> None:
        assert parse_tokens(["--", "--force", "-x"]) == (["--force", "-x"], {})

    def test_negative_numbers_and_single_dash_are_positional(self) -> None:
        assert parse_tokens(["-5", "-", "-1.5"]) == (["-5", "-", "-1.5"], {})

    def test_options_interleave_with_positionals(self) -> None:
        assert parse_tokens(["new", "--force", "app"]) == (["new", "app"], {"force": True})


class TestNormalizeParams:
    def test_splits_arguments_and_options(self) -> None:
        params = normalize_params("movie", "search", ["alien", "--limit=5"])
        assert params.plugin == "movie"
        assert params.command == "search"
        assert params.array == ["alien"]
        assert params.options == {"limit": 5}
        assert params.raw == ["alien", "--limit=5"]

    def test_empty_tokens(self) -> None:
        params = normalize_params("movie", "movie", [])
        assert params.array == []
        assert params.options == {}
        assert params.string == ""

    def test_none_tokens(self) -> None:
        assert normalize_params("movie", "movie", None).raw == []


class TestParametersAccessors:
    def test_first_second_third(self) -> None:
        params = Parameters(array=["a", "b", "c", "d"])
        assert (params.first, params.second, params.third) == ("a", "b", "c")

    def test_missing_positions_are_none(self) -> None:
        params = Parameters(array=["a"])
        assert params.second is None
        assert params.third is None

    def test_string_joins_array(self) -> None:
        assert Parameters(array=["star", "wars"]).string == "star wars"
