"""Tests for waypost.routing.pattern — path template compiler."""

import re

import pytest

from waypost.errors import ConfigurationError, MalformedTemplate
from waypost.routing.pattern import PARAM_TOKEN, CompiledPattern, compile_template


class TestCompile:
    def test_static_has_no_params(self) -> None:
        pattern = compile_template("/users")
        assert pattern.param_names == ()
        assert pattern.template == "/users"

    def test_param_names_in_encounter_order(self) -> None:
        pattern = compile_template("/users/:userId/groups/:groupId")
        assert pattern.param_names == ("userId", "groupId")

    def test_returns_compiled_pattern(self) -> None:
        pattern = compile_template("/users/:id")
        assert isinstance(pattern, CompiledPattern)
        assert isinstance(pattern.regex, re.Pattern)

    def test_frozen(self) -> None:
        pattern = compile_template("/users")
        with pytest.raises(AttributeError):
            pattern.template = "/other"  # type: ignore[misc]

    def test_token_grammar(self) -> None:
        assert PARAM_TOKEN.findall("/a/:one/b/:Two") == ["one", "Two"]

    def test_repr(self) -> None:
        assert repr(compile_template("/users/:id")) == "CompiledPattern('/users/:id')"


class TestLiteralMatch:
    def test_exact_path(self) -> None:
        match = compile_template("/users").match("/users")
        assert match is not None
        assert match.params == {}
        assert match.query is None

    def test_root(self) -> None:
        assert compile_template("/").match("/") is not None

    def test_different_path(self) -> None:
        assert compile_template("/users").match("/posts") is None

    def test_prefix_is_not_enough(self) -> None:
        pattern = compile_template("/users")
        assert pattern.match("/users/1") is None
        assert pattern.match("/api/users") is None

    def test_trailing_slash_is_significant(self) -> None:
        assert compile_template("/users").match("/users/") is None

    def test_trailing_newline_rejected(self) -> None:
        assert compile_template("/users").match("/users\n") is None

    def test_regex_metacharacters_are_literal(self) -> None:
        pattern = compile_template("/files/a.b+c")
        assert pattern.match("/files/a.b+c") is not None
        assert pattern.match("/files/aXbbc") is None

    def test_case_sensitive_literal(self) -> None:
        assert compile_template("/users").match("/Users") is None


class TestParams:
    def test_single_param(self) -> None:
        match = compile_template("/users/:id").match("/users/42")
        assert match is not None
        assert match.params == {"id": "42"}

    def test_two_params(self) -> None:
        match = compile_template("/users/:userId/groups/:groupId").match("/users/7/groups/9")
        assert match is not None
        assert match.params == {"userId": "7", "groupId": "9"}

    def test_param_inside_segment(self) -> None:
        match = compile_template("/files/:name.json").match("/files/report.json")
        assert match is not None
        assert match.params == {"name": "report"}

    def test_missing_segment(self) -> None:
        assert compile_template("/users/:id").match("/users") is None
        assert compile_template("/users/:id").match("/users/") is None

    def test_extra_segment(self) -> None:
        assert compile_template("/users/:id").match("/users/1/extra") is None

    @pytest.mark.parametrize("value", ["abc", "42", "a-b", "a_b", "uuid-1234_x", "-", "_"])
    def test_value_charset_accepted(self, value: str) -> None:
        match = compile_template("/users/:id").match(f"/users/{value}")
        assert match is not None
        assert match.params == {"id": value}

    @pytest.mark.parametrize("value", ["Alice", "a b", "a/b", "a.b", "a%20b", "ü"])
    def test_value_charset_rejected(self, value: str) -> None:
        assert compile_template("/users/:id").match(f"/users/{value}") is None

    def test_digits_end_the_name(self) -> None:
        pattern = compile_template("/v/:id2")
        assert pattern.param_names == ("id",)
        match = pattern.match("/v/abc2")
        assert match is not None
        assert match.params == {"id": "abc"}

    def test_underscore_ends_the_name(self) -> None:
        pattern = compile_template("/v/:user_id")
        assert pattern.param_names == ("user",)
        assert pattern.match("/v/x_id") is not None


class TestQuery:
    def test_query_captured(self) -> None:
        match = compile_template("/users").match("/users?search=ada&page=2")
        assert match is not None
        assert match.query == "search=ada&page=2"

    def test_query_with_params(self) -> None:
        match = compile_template("/users/:id").match("/users/3?verbose=1")
        assert match is not None
        assert match.params == {"id": "3"}
        assert match.query == "verbose=1"

    def test_empty_query(self) -> None:
        match = compile_template("/users").match("/users?")
        assert match is not None
        assert match.query == ""

    def test_query_not_parsed(self) -> None:
        match = compile_template("/users").match("/users?a=1&a=2&b")
        assert match is not None
        assert match.query == "a=1&a=2&b"


class TestMalformedToken:
    def test_colon_without_letter_is_literal(self) -> None:
        pattern = compile_template("/time/12:30")
        assert pattern.param_names == ()
        assert pattern.match("/time/12:30") is not None
        assert pattern.match("/time/12x30") is None

    def test_lone_colon_segment(self) -> None:
        pattern = compile_template("/a/:/b")
        assert pattern.param_names == ()
        assert pattern.match("/a/:/b") is not None

    def test_colon_digit(self) -> None:
        pattern = compile_template("/a/:1")
        assert pattern.param_names == ()
        assert pattern.match("/a/:1") is not None


class TestMalformedTemplate:
    def test_must_start_with_slash(self) -> None:
        with pytest.raises(MalformedTemplate, match="must start with '/'"):
            compile_template("users")

    def test_empty(self) -> None:
        with pytest.raises(MalformedTemplate):
            compile_template("")

    def test_not_a_string(self) -> None:
        with pytest.raises(MalformedTemplate, match="expected str"):
            compile_template(None)  # type: ignore[arg-type]

    def test_duplicate_names_rejected(self) -> None:
        with pytest.raises(MalformedTemplate, match="duplicate parameter ':id'") as exc_info:
            compile_template("/a/:id/b/:id")
        assert exc_info.value.template == "/a/:id/b/:id"

    def test_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError):
            compile_template("nope")


class TestDeterminism:
    PATHS = (
        "/users",
        "/users/42",
        "/users/42/groups/7",
        "/users/Abc",
        "/users/1/extra",
        "/users/x?q=1",
    )

    @pytest.mark.parametrize("template", ["/users", "/users/:id", "/users/:a/groups/:b"])
    def test_compiling_twice_agrees(self, template: str) -> None:
        first = compile_template(template)
        second = compile_template(template)
        assert first == second
        for path in self.PATHS:
            assert first.match(path) == second.match(path)
