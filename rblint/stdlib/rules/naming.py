"""Naming convention rules."""

from __future__ import annotations

import re

from rblint.kernel.linting.models import Category, Diagnostic
from rblint.kernel.linting.rules import BaseRule
from rblint.kernel.linting.source import TextBuffer
from rblint.stdlib.rules._scan import iter_lines

_METHOD_NAME_RE = re.compile(r"^\s*def\s+(?:self\.)?([A-Za-z_]\w*[?!=]?)")
_SNAKE_METHOD_RE = re.compile(r"^[a-z_][a-z0-9_]*[?!=]?$")

_ASSIGNMENT_RE = re.compile(r"([A-Za-z_]\w*)\s*=(?![=~>])")
_SNAKE_VARIABLE_RE = re.compile(r"^[a-z_][a-z0-9_]*$")

_CLASS_OR_MODULE_RE = re.compile(r"^\s*(?:class|module)\s+([A-Za-z_]\w*)")
_CONSTANT_ASSIGNMENT_RE = re.compile(r"(?<![\w:.@$])([A-Z]\w*)\s*=(?![=~>])")
_PASCAL_CASE_RE = re.compile(r"^[A-Z][A-Za-z0-9]*$")
_SCREAMING_SNAKE_RE = re.compile(r"^[A-Z][A-Z0-9_]*$")
# Constants bound to a new class may be PascalCase (``Point = Struct.new(...)``)
_CLASS_BUILDER_RE = re.compile(r"\s*(?:Struct|Class|Module)\.new\b|\s*Data\.define\b")

# Characters that make an assignment target something other than a local
_NON_LOCAL_PREFIXES = frozenset("@$.:")


class MethodName(BaseRule):
    """Method names must be snake_case. Operator methods are not checked."""

    rule_id = "Naming/MethodName"
    category = Category.NAMING
    description = "Method names should use snake_case"

    def check(self, buffer: TextBuffer) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for number, line in iter_lines(buffer):
            match = _METHOD_NAME_RE.match(line)
            if match is None:
                continue
            column = match.start(1) + 1
            if buffer.in_string_or_comment(number, column):
                continue
            name = match.group(1)
            if not _SNAKE_METHOD_RE.match(name):
                diagnostics.append(
                    self.offense(number, column, len(name), "Use snake_case for method names.")
                )
        return diagnostics


class VariableName(BaseRule):
    """Local variable names must be snake_case.

    Instance, class and global variables, attribute writers and constants
    are skipped.
    """

    rule_id = "Naming/VariableName"
    category = Category.NAMING
    description = "Variable names should use snake_case"

    def check(self, buffer: TextBuffer) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for number, line in iter_lines(buffer):
            if "=" not in line:
                continue
            for match in _ASSIGNMENT_RE.finditer(line):
                name = match.group(1)
                start = match.start(1)
                if name[0].isupper():
                    continue
                if start > 0 and line[start - 1] in _NON_LOCAL_PREFIXES:
                    continue
                column = start + 1
                if buffer.in_string_or_comment(number, column):
                    continue
                if not _SNAKE_VARIABLE_RE.match(name):
                    diagnostics.append(
                        self.offense(number, column, len(name), "Use snake_case for variable names.")
                    )
        return diagnostics


class ConstantName(BaseRule):
    """Constants must be SCREAMING_SNAKE_CASE; classes and modules PascalCase."""

    rule_id = "Naming/ConstantName"
    category = Category.NAMING
    description = (
        "Constants should use SCREAMING_SNAKE_CASE; classes and modules should use PascalCase"
    )

    def check(self, buffer: TextBuffer) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for number, line in iter_lines(buffer):
            declaration = _CLASS_OR_MODULE_RE.match(line)
            if declaration is not None:
                column = declaration.start(1) + 1
                name = declaration.group(1)
                if buffer.in_code(number, column) and not _PASCAL_CASE_RE.match(name):
                    diagnostics.append(
                        self.offense(
                            number,
                            column,
                            len(name),
                            "Use PascalCase for class and module names.",
                        )
                    )
                continue

            for match in _CONSTANT_ASSIGNMENT_RE.finditer(line):
                column = match.start(1) + 1
                name = match.group(1)
                if buffer.in_string_or_comment(number, column):
                    continue
                if _SCREAMING_SNAKE_RE.match(name):
                    continue
                if _CLASS_BUILDER_RE.match(line, match.end()):
                    continue
                diagnostics.append(
                    self.offense(number, column, len(name), "Use SCREAMING_SNAKE_CASE for constants.")
                )
        return diagnostics
