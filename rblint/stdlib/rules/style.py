"""Style rules."""

from __future__ import annotations

import re

from rblint.kernel.linting.models import Category, Diagnostic
from rblint.kernel.linting.rules import BaseRule
from rblint.kernel.linting.source import TextBuffer
from rblint.stdlib.rules._scan import is_blank, is_comment, iter_lines, method_blocks

_FROZEN_MAGIC_RE = re.compile(r"^#\s*frozen[_-]string[_-]literal:\s*(\w+)", re.IGNORECASE)
_DOUBLE_QUOTED_RE = re.compile(r'"((?:[^"\\]|\\.)*)"')
# Escapes that only mean something inside double quotes
_DOUBLE_ONLY_ESCAPES = frozenset("ntrabfveus0x\"'")
_NEGATED_CONDITION_RE = re.compile(r"\b(if|unless)\s+!(?!=)")
_RETURN_RE = re.compile(r"^\s*(return)(?:\s|\(|$)")
_OPPOSITE_KEYWORD = {"if": "unless", "unless": "if"}


def needs_double_quotes(body: str) -> bool:
    """Check whether a double-quoted literal's body relies on double quotes."""
    if "#{" in body or "#@" in body or "#$" in body or "'" in body:
        return True
    index = body.find("\\")
    while index >= 0:
        if index + 1 < len(body) and body[index + 1] in _DOUBLE_ONLY_ESCAPES:
            return True
        index = body.find("\\", index + 2)
    return False


class FrozenStringLiteralComment(BaseRule):
    """Files should start with ``# frozen_string_literal: true``.

    The magic comment may appear anywhere in the leading block of comment
    lines, which covers shebangs and encoding comments placed above it.
    """

    rule_id = "Style/FrozenStringLiteralComment"
    category = Category.STYLE
    description = "Checks for the frozen_string_literal magic comment"

    def check(self, buffer: TextBuffer) -> list[Diagnostic]:
        if buffer.is_empty:
            return []

        for number, line in iter_lines(buffer):
            stripped = line.strip()
            if not stripped.startswith("#"):
                break
            match = _FROZEN_MAGIC_RE.match(stripped)
            if match is None:
                continue
            if match.group(1).lower() != "true":
                return [
                    self.offense(
                        number, 1, len(line), "Frozen string literal comment must be set to `true`."
                    )
                ]
            return []

        return [self.offense(1, 1, 0, "Missing frozen string literal comment.")]


class StringLiterals(BaseRule):
    """Double-quoted strings that need neither interpolation nor escapes."""

    rule_id = "Style/StringLiterals"
    category = Category.STYLE
    description = "Prefers single-quoted strings when interpolation is not needed"

    def check(self, buffer: TextBuffer) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for number, line in iter_lines(buffer):
            if '"' not in line:
                continue
            for match in _DOUBLE_QUOTED_RE.finditer(line):
                column = match.start() + 1
                if buffer.in_string_or_comment(number, column):
                    continue
                if needs_double_quotes(match.group(1)):
                    continue
                diagnostics.append(
                    self.offense(
                        number,
                        column,
                        len(match.group(0)),
                        "Prefer single-quoted strings when you don't need "
                        "string interpolation or special symbols.",
                    )
                )
        return diagnostics


class NegatedIf(BaseRule):
    """``if !x`` and ``unless !x`` where the opposite keyword reads better.

    Compound conditions using ``&&`` or ``||`` are left alone.
    """

    rule_id = "Style/NegatedIf"
    category = Category.STYLE
    description = "Favors unless over if for negative conditions"

    def check(self, buffer: TextBuffer) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for number, line in iter_lines(buffer):
            if "&&" in line or "||" in line:
                continue
            for match in _NEGATED_CONDITION_RE.finditer(line):
                column = match.start() + 1
                if buffer.in_string_or_comment(number, column):
                    continue
                keyword = match.group(1)
                diagnostics.append(
                    self.offense(
                        number,
                        column,
                        len(match.group(0)),
                        f"Favor `{_OPPOSITE_KEYWORD[keyword]}` over `{keyword}` "
                        "for negative conditions.",
                    )
                )
        return diagnostics


class RedundantReturn(BaseRule):
    """An explicit ``return`` as the last statement of a method."""

    rule_id = "Style/RedundantReturn"
    category = Category.STYLE
    description = "Checks for redundant return expressions"

    def check(self, buffer: TextBuffer) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for block in method_blocks(buffer):
            last = None
            for number in reversed(block.body):
                line = buffer.lines[number - 1]
                if not is_blank(line) and not is_comment(line):
                    last = number
                    break
            if last is None:
                continue
            match = _RETURN_RE.match(buffer.lines[last - 1])
            if match is not None:
                diagnostics.append(
                    self.offense(last, match.start(1) + 1, 6, "Redundant `return` detected.")
                )
        return diagnostics


class EmptyMethod(BaseRule):
    """A multi-line method with nothing but blank lines in its body."""

    rule_id = "Style/EmptyMethod"
    category = Category.STYLE
    description = "Checks for empty method definitions spread over several lines"

    def check(self, buffer: TextBuffer) -> list[Diagnostic]:
        return [
            self.offense(
                block.start, block.column, 3, "Put empty method definitions on a single line."
            )
            for block in method_blocks(buffer)
            if all(is_blank(buffer.lines[number - 1]) for number in block.body)
        ]
