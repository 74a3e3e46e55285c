"""Tests for rblint.stdlib.rules.metrics."""

from __future__ import annotations

import pytest

from rblint.kernel.linting.rules import BaseRule
from rblint.kernel.linting.source import TextBuffer
from rblint.stdlib.rules.metrics import MethodLength, ParameterLists, count_parameters


def _spots(rule: BaseRule, source: str) -> list[tuple[int, int, int]]:
    return [
        (d.line, d.column, d.location.length)
        for d in rule.check(TextBuffer.from_string(source))
    ]


def _method(body_lines: int, indent: str = "") -> str:
    body = "".join(f"{indent}  x{i} = {i}\n" for i in range(body_lines))
    return f"{indent}def foo\n{body}{indent}end\n"


class TestCountParameters:
    @pytest.mark.parametrize(
        ("params", "expected"),
        [
            ("", 0),
            ("a", 1),
            ("a, b", 2),
            ("*args, **kw, &blk", 3),
            ("a, opts = {x: 1, y: 2}", 2),
            ("a, list = [1, 2, 3]", 2),
        ],
    )
    def test_count(self, params: str, expected: int) -> None:
        assert count_parameters(params) == expected


class TestMethodLength:
    def test_default_limit(self) -> None:
        assert _spots(MethodLength(), _method(10)) == []
        assert _spots(MethodLength(), _method(11)) == [(1, 1, 3)]

    def test_message(self) -> None:
        [diagnostic] = MethodLength(max_lines=2).check(TextBuffer.from_string(_method(3)))
        assert diagnostic.message == "Method has too many lines. [3/2]"

    def test_blank_and_comment_lines_not_counted(self) -> None:
        source = "def foo\n  a\n  # c\n\n  b\nend\n"
        assert _spots(MethodLength(max_lines=2), source) == []

    def test_reports_at_def(self) -> None:
        assert _spots(MethodLength(max_lines=1), _method(2, indent="  ")) == [(1, 3, 3)]


class TestParameterLists:
    def test_too_many(self) -> None:
        rule = ParameterLists(max_parameters=2)
        [diagnostic] = rule.check(TextBuffer.from_string("def foo(a, b, c)\nend\n"))
        assert (diagnostic.line, diagnostic.column, diagnostic.location.length) == (1, 9, 7)
        assert diagnostic.message == "Avoid parameter lists longer than 2 parameters. [3/2]"

    def test_default_limit(self) -> None:
        assert _spots(ParameterLists(), "def foo(a, b, c, d, e)\nend\n") == []
        assert len(_spots(ParameterLists(), "def foo(a, b, c, d, e, f)\nend\n")) == 1

    def test_no_parentheses(self) -> None:
        assert _spots(ParameterLists(max_parameters=0), "def foo\nend\n") == []

    def test_in_comment(self) -> None:
        assert _spots(ParameterLists(max_parameters=1), "# def foo(a, b)\n") == []
