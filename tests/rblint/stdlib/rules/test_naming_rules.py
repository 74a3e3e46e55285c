"""Tests for rblint.stdlib.rules.naming."""

from __future__ import annotations

import pytest

from rblint.kernel.linting.rules import BaseRule
from rblint.kernel.linting.source import TextBuffer
from rblint.stdlib.rules.naming import ConstantName, MethodName, VariableName


def _spots(rule: BaseRule, source: str) -> list[tuple[int, int, int]]:
    return [
        (d.line, d.column, d.location.length)
        for d in rule.check(TextBuffer.from_string(source))
    ]


class TestMethodName:
    def test_camel_case(self) -> None:
        assert _spots(MethodName(), "def fooBar\nend\n") == [(1, 5, 6)]

    def test_singleton_method(self) -> None:
        assert _spots(MethodName(), "def self.BadName\nend\n") == [(1, 10, 7)]

    @pytest.mark.parametrize(
        "source", ["def valid?\n", "def save!\n", "def name=(v)\n", "def ==(other)\n", "def _x\n"]
    )
    def test_accepted(self, source: str) -> None:
        assert _spots(MethodName(), source) == []

    def test_in_comment(self) -> None:
        assert _spots(MethodName(), "# def fooBar\n") == []


class TestVariableName:
    def test_camel_case(self) -> None:
        [diagnostic] = VariableName().check(TextBuffer.from_string("fooBar = 1\n"))
        assert (diagnostic.line, diagnostic.column, diagnostic.location.length) == (1, 1, 6)
        assert diagnostic.message == "Use snake_case for variable names."

    @pytest.mark.parametrize(
        "source",
        [
            "foo_bar = 1\n",
            "@fooBar = 1\n",
            "@@fooBar = 1\n",
            "$fooBar = 1\n",
            "self.fooBar = 1\n",
            "x == fooBar\n",
            "{ fooBar => 1 }\n",
            "puts 'fooBar = 1'\n",
            "MAX = 1\n",
        ],
    )
    def test_not_flagged(self, source: str) -> None:
        assert _spots(VariableName(), source) == []

    def test_without_spaces(self) -> None:
        assert _spots(VariableName(), "x = 1; myVal=2\n") == [(1, 8, 5)]


class TestConstantName:
    def test_class_name(self) -> None:
        assert _spots(ConstantName(), "class my_class\nend\n") == [(1, 7, 8)]

    def test_module_with_underscore(self) -> None:
        assert _spots(ConstantName(), "module Foo_Bar\nend\n") == [(1, 8, 7)]

    def test_pascal_case_constant(self) -> None:
        [diagnostic] = ConstantName().check(TextBuffer.from_string("MaxSize = 10\n"))
        assert (diagnostic.line, diagnostic.column, diagnostic.location.length) == (1, 1, 7)
        assert diagnostic.message == "Use SCREAMING_SNAKE_CASE for constants."

    @pytest.mark.parametrize(
        "source",
        [
            "class Admin < Base\nend\n",
            "module HTTPClient\nend\n",
            "MAX_SIZE = 10\n",
            "Point = Struct.new(:x, :y)\n",
            "Anon = Class.new(StandardError)\n",
            "Coord = Data.define(:lat, :lng)\n",
            "Foo::Bar = 1\n",
            "puts 'MaxSize = 10'\n",
            "Version == other\n",
        ],
    )
    def test_not_flagged(self, source: str) -> None:
        assert _spots(ConstantName(), source) == []
