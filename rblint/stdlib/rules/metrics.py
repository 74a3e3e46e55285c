"""Metrics rules: method length and parameter counts."""

from __future__ import annotations

import re

from rblint.kernel.linting.models import Category, Diagnostic
from rblint.kernel.linting.rules import BaseRule
from rblint.kernel.linting.source import TextBuffer
from rblint.stdlib.rules._scan import is_blank, is_comment, iter_lines, method_blocks

DEFAULT_MAX_METHOD_LINES = 10
DEFAULT_MAX_PARAMETERS = 5

_PARAMETER_LIST_RE = re.compile(r"^\s*def\s+(?:self\.)?[^\s(]+\s*\(([^)]*)\)")


def count_parameters(parameter_list: str) -> int:
    """Count top-level comma-separated parameters.

    Commas nested inside brackets, braces or parentheses (default values
    such as ``opts = {a: 1, b: 2}``) do not separate parameters.
    """
    if not parameter_list.strip():
        return 0
    depth = 0
    count = 1
    for char in parameter_list:
        if char in "([{":
            depth += 1
        elif char in ")]}":
            depth -= 1
        elif char == "," and depth == 0:
            count += 1
    return count


class MethodLength(BaseRule):
    """Method bodies longer than the maximum, ignoring blank and comment lines."""

    rule_id = "Metrics/MethodLength"
    category = Category.METRICS
    description = "Checks that methods are not too long"

    def __init__(self, max_lines: int = DEFAULT_MAX_METHOD_LINES) -> None:
        self.max_lines = max_lines

    def check(self, buffer: TextBuffer) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for block in method_blocks(buffer):
            length = sum(
                1
                for number in block.body
                if not is_blank(buffer.lines[number - 1])
                and not is_comment(buffer.lines[number - 1])
            )
            if length > self.max_lines:
                diagnostics.append(
                    self.offense(
                        block.start,
                        block.column,
                        3,
                        f"Method has too many lines. [{length}/{self.max_lines}]",
                    )
                )
        return diagnostics


class ParameterLists(BaseRule):
    """Method definitions with more parameters than the maximum."""

    rule_id = "Metrics/ParameterLists"
    category = Category.METRICS
    description = "Checks that methods do not take too many parameters"

    def __init__(self, max_parameters: int = DEFAULT_MAX_PARAMETERS) -> None:
        self.max_parameters = max_parameters

    def check(self, buffer: TextBuffer) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for number, line in iter_lines(buffer):
            match = _PARAMETER_LIST_RE.match(line)
            if match is None:
                continue
            column = len(line) - len(line.lstrip()) + 1
            if buffer.in_string_or_comment(number, column):
                continue
            count = count_parameters(match.group(1))
            if count > self.max_parameters:
                diagnostics.append(
                    self.offense(
                        number,
                        match.start(1) + 1,
                        len(match.group(1)),
                        f"Avoid parameter lists longer than {self.max_parameters} "
                        f"parameters. [{count}/{self.max_parameters}]",
                    )
                )
        return diagnostics
