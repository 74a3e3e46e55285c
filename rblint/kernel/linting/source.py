"""In-memory, line-decomposed source files and the lexical context classifier."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

SYNTHETIC_PATH = "<string>"

_COMMENT = "#"
_SINGLE_QUOTE = "'"
_DOUBLE_QUOTE = '"'
_BACKSLASH = "\\"


def split_lines(content: str) -> tuple[str, ...]:
    """Split ``content`` into lines without their terminators.

    Only ``\\n`` ends a line; a trailing ``\\r`` is stripped from each line.
    A final newline does not start an extra empty line.
    """
    if not content:
        return ()
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return tuple(line[:-1] if line.endswith("\r") else line for line in lines)


@dataclass(frozen=True, slots=True)
class TextBuffer:
    """A loaded source file with precomputed lines.

    Attributes
    ----------
    path : Path
        File path, or a synthetic name for in-memory sources
    content : str
        Raw content, line terminators untouched
    lines : tuple[str, ...]
        Lines derived from ``content`` at construction
    """

    path: Path
    content: str
    lines: tuple[str, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "lines", split_lines(self.content))

    @classmethod
    def from_string(cls, content: str, path: str | Path = SYNTHETIC_PATH) -> TextBuffer:
        """Create a buffer from an in-memory string."""
        return cls(path=Path(path), content=content)

    @classmethod
    def from_path(cls, path: str | Path) -> TextBuffer:
        """Load a buffer from disk.

        The file is decoded as strict UTF-8 without newline translation so
        CRLF endings remain visible to rules.

        Raises
        ------
        OSError
            If the file cannot be read
        UnicodeDecodeError
            If the file is not valid UTF-8
        """
        path = Path(path)
        return cls(path=path, content=path.read_bytes().decode("utf-8"))

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.content

    def line(self, line_number: int) -> str | None:
        """Return the 1-based line, or None when out of range."""
        if line_number < 1 or line_number > len(self.lines):
            return None
        return self.lines[line_number - 1]

    def in_string_or_comment(self, line_number: int, column: int) -> bool:
        """Check whether a 1-based column lies inside a string literal or comment.

        Scans the line from its start up to, but not including, ``column``.
        This is a per-line heuristic: every line starts outside any string,
        so multi-line literals and heredocs are not tracked.

        Parameters
        ----------
        line_number : int
            1-based line number
        column : int
            1-based column (characters, not bytes)

        Returns
        -------
        bool
            True if the column is inside ``'...'``, ``"..."`` or after a
            ``#`` comment marker that is outside both quote kinds
        """
        line = self.line(line_number)
        if line is None:
            return False

        in_single = False
        in_double = False
        escaped = False

        for ch in line[: max(column - 1, 0)]:
            if escaped:
                escaped = False
                continue
            if ch == _BACKSLASH and in_double:
                escaped = True
                continue
            if ch == _COMMENT and not in_single and not in_double:
                return True
            if ch == _SINGLE_QUOTE and not in_double:
                in_single = not in_single
            if ch == _DOUBLE_QUOTE and not in_single:
                in_double = not in_double

        return in_single or in_double

    def in_code(self, line_number: int, column: int) -> bool:
        """Inverse of :meth:`in_string_or_comment`."""
        return not self.in_string_or_comment(line_number, column)
