"""Lint rules: code that is probably a mistake."""

from __future__ import annotations

import re

from rblint.kernel.linting.models import Category, Diagnostic, Severity
from rblint.kernel.linting.rules import BaseRule
from rblint.kernel.linting.source import TextBuffer
from rblint.stdlib.rules._scan import is_comment, iter_lines

DEBUGGER_CALLS = (
    "binding.pry",
    "binding.irb",
    "binding.break",
    "byebug",
    "debugger",
    "pry",
    "save_and_open_page",
    "save_and_open_screenshot",
)

_LITERAL_CONDITION_RE = re.compile(r"\b(if|unless|while|until)\s+(true|false|nil)\b")
_METHOD_DEF_RE = re.compile(r"^\s*def\s+((?:self\.)?[A-Za-z_]\w*[?!=]?)")
_SCOPE_RE = re.compile(r"^(\s*)(?:class|module)\s+([A-Z][\w:]*)")
_ONE_LINE_END_RE = re.compile(r";\s*end\s*$")


class Debugger(BaseRule):
    """Leftover debugger entry points such as ``binding.pry``.

    Overlapping matches are reported once, longest call first, so
    ``binding.pry`` is not reported a second time as ``pry``.
    """

    rule_id = "Lint/Debugger"
    category = Category.LINT
    severity = Severity.WARNING
    description = "Checks for leftover debugging code"

    def __init__(self, calls: tuple[str, ...] = DEBUGGER_CALLS) -> None:
        ordered = sorted(calls, key=len, reverse=True)
        alternatives = "|".join(re.escape(call) for call in ordered)
        self._pattern = re.compile(rf"(?<![\w.])(?:{alternatives})\b")

    def check(self, buffer: TextBuffer) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for number, line in iter_lines(buffer):
            if is_comment(line):
                continue
            for match in self._pattern.finditer(line):
                if buffer.in_string_or_comment(number, match.start() + 1):
                    continue
                diagnostics.append(
                    self.offense(
                        number,
                        match.start() + 1,
                        len(match.group(0)),
                        f"Remove debugger entry point `{match.group(0)}`.",
                    )
                )
        return diagnostics


class LiteralInCondition(BaseRule):
    """A literal ``true``, ``false`` or ``nil`` used as a condition."""

    rule_id = "Lint/LiteralInCondition"
    category = Category.LINT
    severity = Severity.WARNING
    description = "Checks for literals used as conditions"

    def check(self, buffer: TextBuffer) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for number, line in iter_lines(buffer):
            for match in _LITERAL_CONDITION_RE.finditer(line):
                column = match.start() + 1
                if buffer.in_string_or_comment(number, column):
                    continue
                keyword, literal = match.groups()
                diagnostics.append(
                    self.offense(
                        number,
                        column,
                        len(match.group(0)),
                        f"Literal `{literal}` appeared as a condition of `{keyword}`.",
                    )
                )
        return diagnostics


class DuplicateMethods(BaseRule):
    """A method defined more than once in the same class or module.

    Scopes are tracked by indentation: a ``class`` or ``module`` line opens
    a scope that its matching ``end`` closes. Only the second and later
    definitions are reported.
    """

    rule_id = "Lint/DuplicateMethods"
    category = Category.LINT
    severity = Severity.WARNING
    description = "Checks for duplicate method definitions"

    def check(self, buffer: TextBuffer) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        # (indent, scope name) of each open class or module
        scopes: list[tuple[int, str]] = []
        seen: dict[tuple[str, str], int] = {}

        for number, line in iter_lines(buffer):
            stripped = line.strip()
            indent = len(line) - len(line.lstrip())
            if stripped == "end" or stripped.startswith("end "):
                if scopes and scopes[-1][0] == indent:
                    scopes.pop()
                continue

            scope_match = _SCOPE_RE.match(line)
            if scope_match is not None and buffer.in_code(number, indent + 1):
                if not _ONE_LINE_END_RE.search(line):
                    parent = scopes[-1][1] if scopes else ""
                    scopes.append((indent, f"{parent}::{scope_match.group(2)}"))
                continue

            def_match = _METHOD_DEF_RE.match(line)
            if def_match is None or not buffer.in_code(number, indent + 1):
                continue
            scope = scopes[-1][1] if scopes else ""
            key = (scope, def_match.group(1))
            first = seen.setdefault(key, number)
            if first != number:
                diagnostics.append(
                    self.offense(
                        number,
                        indent + 1,
                        3,
                        f"Method `{def_match.group(1)}` is defined at both line {first} "
                        f"and line {number}.",
                    )
                )
        return diagnostics
