"""Line-level scanning helpers shared by the built-in rules."""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass

from rblint.kernel.linting.source import TextBuffer

_DEF_RE = re.compile(r"^(\s*)def\s+(?:self\.)?([^\s(;=]+)")
_END_RE = re.compile(r"^\s*end\b")
_ONE_LINER_RE = re.compile(r";\s*end\s*$")
_ENDLESS_RE = re.compile(r"^\s*def\s+[^\s(]+(?:\([^)]*\))?\s*=[^=~>]")
_HEREDOC_RE = re.compile(r"""<<[~-]?(['"`]?)([A-Z_][A-Z0-9_]*)\1""")


@dataclass(frozen=True, slots=True)
class MethodBlock:
    """A ``def ... end`` block found by indentation matching."""

    name: str
    start: int
    end: int
    column: int

    @property
    def body(self) -> range:
        """Line numbers strictly between ``def`` and ``end``."""
        return range(self.start + 1, self.end)


def indent_of(line: str) -> int:
    return len(line) - len(line.lstrip(" \t"))


def is_blank(line: str) -> bool:
    return not line.strip()


def is_comment(line: str) -> bool:
    return line.lstrip().startswith("#")


def iter_lines(buffer: TextBuffer) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, line)`` pairs with 1-based numbering."""
    return enumerate(buffer.lines, start=1)


def comment_start(buffer: TextBuffer, number: int, line: str) -> int | None:
    """Index of the ``#`` that opens a comment on this line, if any."""
    for index, char in enumerate(line):
        if char == "#" and buffer.in_code(number, index + 1):
            return index
    return None


def code_part(buffer: TextBuffer, number: int, line: str) -> str:
    """The line with any trailing comment and whitespace removed."""
    marker = comment_start(buffer, number, line)
    return (line if marker is None else line[:marker]).rstrip()


def is_single_line_def(line: str) -> bool:
    """``def x; end`` and endless ``def x = y`` need no closing line."""
    return bool(_ONE_LINER_RE.search(line) or _ENDLESS_RE.match(line))


def heredoc_body_lines(buffer: TextBuffer) -> frozenset[int]:
    """Line numbers inside heredoc bodies, terminators included.

    Only upper-case identifiers are treated as heredoc openers, which keeps
    shifts such as ``items <<value`` out.
    """
    body: set[int] = set()
    pending: list[str] = []
    for number, line in iter_lines(buffer):
        if pending:
            body.add(number)
            if line.strip() == pending[0]:
                pending.pop(0)
            continue
        for match in _HEREDOC_RE.finditer(line):
            if buffer.in_code(number, match.start() + 1):
                pending.append(match.group(2))
    return frozenset(body)


def method_blocks(buffer: TextBuffer) -> list[MethodBlock]:
    """Find multi-line method definitions.

    A block ends at the first ``end`` with the same indentation as its
    ``def``. One-line and endless definitions are skipped, as are blocks
    whose closing ``end`` cannot be found.
    """
    blocks: list[MethodBlock] = []
    for number, line in iter_lines(buffer):
        match = _DEF_RE.match(line)
        if match is None:
            continue
        column = len(match.group(1)) + 1
        if buffer.in_string_or_comment(number, column):
            continue
        if is_single_line_def(line):
            continue

        indent = len(match.group(1))
        for end_number in range(number + 1, buffer.line_count + 1):
            candidate = buffer.lines[end_number - 1]
            if _END_RE.match(candidate) and indent_of(candidate) == indent:
                blocks.append(MethodBlock(match.group(2), number, end_number, column))
                break
    return blocks
