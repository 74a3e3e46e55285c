"""Gemfile rules.

Bundler rules report under the ``Bundler/`` prefix but belong to the
style category.
"""

from __future__ import annotations

import re
from collections.abc import Iterator

from rblint.kernel.linting.models import Category, Diagnostic
from rblint.kernel.linting.rules import BaseRule
from rblint.kernel.linting.source import TextBuffer
from rblint.stdlib.rules._scan import is_blank, iter_lines

_GEM_RE = re.compile(r"""^(\s*)gem\s+(['"])([^'"]+)\2""")
_SECTION_BREAK_RE = re.compile(r"^\s*(?:group|platforms?|end)\b")


def gem_declarations(buffer: TextBuffer) -> Iterator[tuple[int, int, str]]:
    """Yield ``(line, column, gem name)`` for each ``gem`` call in code."""
    for number, line in iter_lines(buffer):
        match = _GEM_RE.match(line)
        if match is None:
            continue
        column = len(match.group(1)) + 1
        if buffer.in_code(number, column):
            yield number, column, match.group(3)


def _sort_key(name: str) -> str:
    return name.lower()


class OrderedGems(BaseRule):
    """Gems within a section of the Gemfile must be in alphabetical order.

    Sections are separated by blank lines and by ``group``, ``platforms``
    and ``end`` lines.
    """

    rule_id = "Bundler/OrderedGems"
    category = Category.STYLE
    description = "Checks that gems are sorted alphabetically within groups"

    def check(self, buffer: TextBuffer) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        declarations = {number: (column, name) for number, column, name in gem_declarations(buffer)}
        previous: str | None = None

        for number, line in iter_lines(buffer):
            if is_blank(line) or _SECTION_BREAK_RE.match(line):
                previous = None
                continue
            if number not in declarations:
                continue
            column, name = declarations[number]
            if previous is not None and _sort_key(name) < _sort_key(previous):
                diagnostics.append(
                    self.offense(
                        number,
                        column,
                        len(line.strip()),
                        "Gems should be sorted in an alphabetical order within their "
                        f"section of the Gemfile. Gem `{name}` should appear before "
                        f"`{previous}`.",
                    )
                )
            previous = name
        return diagnostics


class DuplicatedGem(BaseRule):
    """A gem declared more than once."""

    rule_id = "Bundler/DuplicatedGem"
    category = Category.STYLE
    description = "Checks for gems declared more than once"

    def check(self, buffer: TextBuffer) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        first_seen: dict[str, int] = {}
        for number, column, name in gem_declarations(buffer):
            first = first_seen.setdefault(name, number)
            if first == number:
                continue
            diagnostics.append(
                self.offense(
                    number,
                    column,
                    3,
                    f"Gem `{name}` requirements already given on line {first} of the Gemfile.",
                )
            )
        return diagnostics
