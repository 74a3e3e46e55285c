"""Layout rules: whitespace, line endings, indentation and line length."""

from __future__ import annotations

import re

from rblint.kernel.linting.models import Category, Diagnostic
from rblint.kernel.linting.rules import BaseRule
from rblint.kernel.linting.source import TextBuffer
from rblint.stdlib.rules._scan import (
    code_part,
    comment_start,
    heredoc_body_lines,
    indent_of,
    is_blank,
    is_comment,
    is_single_line_def,
    iter_lines,
    method_blocks,
)

DEFAULT_MAX_LINE_LENGTH = 120
INDENT_WIDTH = 2

_BLOCK_OPENER_RE = re.compile(
    r"^(?:(?:private|protected|public|module_function)\s+)?"
    r"(?:def|class|module|if|unless|while|until|for|case|begin)(?=\s|$)"
)
_ASSIGNED_OPENER_RE = re.compile(r"=\s*(?:if|unless|case|begin)(?=\s|$)")
_DO_RE = re.compile(r"\bdo(?:\s*\|[^|]*\|)?$")
_SAME_LINE_END_RE = re.compile(r"\bend$")
_MIDDLE_KEYWORD_RE = re.compile(r"^(?:when|in|else|elsif|rescue|ensure)(?=\s|$)")
_CLOSER_RE = re.compile(r"^(?:end\b|[}\])])")
_END_KEYWORD_RE = re.compile(r"^end\b(?![?!=])")
_CONTINUATION_ENDINGS = (",", "\\", "&&", "||", "+", "-", "*", "=", ":")

_OPERATOR_RE = re.compile(
    r"<=>|===|<<=|>>=|\*\*=|\|\|=|&&=|->|=>|==|!=|=~|!~|<=|>=|\+=|-=|\*=|/=|\*\*|&&|\|\||[=+\-*/]"
)
_UNARY_CAPABLE = frozenset({"+", "-", "*", "**", "/"})
_UNARY_PRECEDERS = frozenset("=([{,!<>&|+-*/:?;.")
_DEF_NAME_RE = re.compile(r"^\s*def\s+(?:self\.)?\S+?(?=[(\s;]|$)")
_EXPONENT_RE = re.compile(r"\b\d[\d_]*(?:\.\d+)?[eE]$")
_SETTER_SYMBOL_RE = re.compile(r":[A-Za-z_]\w*$")
# Regexp and percent literals the string classifier does not know about
_LITERAL_RE = re.compile(
    r"(?:^|(?<=[\s(,=~!|&]))/(?![\s=])(?:\\.|[^/\\])*/"
    r"|%[wWiIqQrs](?:\([^)]*\)|\[[^\]]*\]|\{[^}]*\}|<[^>]*>)"
)


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


class TrailingWhitespace(BaseRule):
    """Whitespace at the end of a non-blank line."""

    rule_id = "Layout/TrailingWhitespace"
    category = Category.LAYOUT
    description = "Checks for trailing whitespace at the end of lines"

    def check(self, buffer: TextBuffer) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for number, line in iter_lines(buffer):
            if is_blank(line):
                continue
            stripped = line.rstrip()
            if len(stripped) < len(line):
                diagnostics.append(
                    self.offense(
                        number,
                        len(stripped) + 1,
                        len(line) - len(stripped),
                        "Trailing whitespace detected.",
                    )
                )
        return diagnostics


class TrailingEmptyLines(BaseRule):
    """A file must end with exactly one newline."""

    rule_id = "Layout/TrailingEmptyLines"
    category = Category.LAYOUT
    description = "Checks for a final newline and trailing blank lines"

    def check(self, buffer: TextBuffer) -> list[Diagnostic]:
        if buffer.is_empty:
            return []

        if not buffer.content.endswith("\n"):
            last = buffer.line_count
            return [self.offense(last, len(buffer.lines[-1]) + 1, 0, "Final newline missing.")]

        trailing = 0
        for line in reversed(buffer.lines):
            if line:
                break
            trailing += 1
        if trailing == 0:
            return []
        first_blank = buffer.line_count - trailing + 1
        message = f"{_plural(trailing, 'trailing blank line')} detected."
        return [self.offense(first_blank, 1, 0, message)]


class LeadingEmptyLines(BaseRule):
    """Blank lines before the first line of content."""

    rule_id = "Layout/LeadingEmptyLines"
    category = Category.LAYOUT
    description = "Checks for empty lines at the start of a file"

    def check(self, buffer: TextBuffer) -> list[Diagnostic]:
        leading = 0
        for line in buffer.lines:
            if line:
                break
            leading += 1
        if leading == 0:
            return []
        return [self.offense(1, 1, 0, f"{_plural(leading, 'leading empty line')} detected.")]


class EndOfLine(BaseRule):
    """Lines terminated by CRLF instead of LF.

    Works on the raw content, since buffer lines have their carriage
    returns stripped.
    """

    rule_id = "Layout/EndOfLine"
    category = Category.LAYOUT
    description = "Checks for CRLF line endings"

    def check(self, buffer: TextBuffer) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        segments = buffer.content.split("\n")
        # The last segment has no terminator
        for number, segment in enumerate(segments[:-1], start=1):
            if segment.endswith("\r"):
                diagnostics.append(
                    self.offense(number, len(segment), 1, "Carriage return character detected.")
                )
        return diagnostics


class IndentationStyle(BaseRule):
    """Tabs used in leading indentation."""

    rule_id = "Layout/IndentationStyle"
    category = Category.LAYOUT
    description = "Checks for tabs used for indentation"

    def check(self, buffer: TextBuffer) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for number, line in iter_lines(buffer):
            indent = line[: len(line) - len(line.lstrip())]
            tab = indent.find("\t")
            if tab >= 0:
                diagnostics.append(self.offense(number, tab + 1, 1, "Tab detected in indentation."))
        return diagnostics


class SpaceAfterComma(BaseRule):
    """A comma in code followed directly by another character."""

    rule_id = "Layout/SpaceAfterComma"
    category = Category.LAYOUT
    description = "Checks for missing space after commas"

    def check(self, buffer: TextBuffer) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for number, line in iter_lines(buffer):
            for index, char in enumerate(line[:-1]):
                if char != ",":
                    continue
                if line[index + 1] in " \t":
                    continue
                if buffer.in_string_or_comment(number, index + 1):
                    continue
                diagnostics.append(self.offense(number, index + 2, 1, "Space missing after comma."))
        return diagnostics


class LineLength(BaseRule):
    """Lines longer than the configured maximum."""

    rule_id = "Layout/LineLength"
    category = Category.LAYOUT
    description = "Checks that lines do not exceed the maximum length"

    def __init__(self, max_length: int = DEFAULT_MAX_LINE_LENGTH) -> None:
        if max_length < 1:
            raise ValueError("max_length must be >= 1")
        self.max_length = max_length

    def check(self, buffer: TextBuffer) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for number, line in iter_lines(buffer):
            if len(line) > self.max_length:
                diagnostics.append(
                    self.offense(
                        number,
                        self.max_length + 1,
                        len(line) - self.max_length,
                        f"Line is too long. [{len(line)}/{self.max_length}]",
                    )
                )
        return diagnostics


class EmptyLines(BaseRule):
    """Two or more consecutive blank lines."""

    rule_id = "Layout/EmptyLines"
    category = Category.LAYOUT
    description = "Checks for consecutive blank lines"

    def check(self, buffer: TextBuffer) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        run = 0
        for number, line in iter_lines(buffer):
            if not is_blank(line):
                run = 0
                continue
            run += 1
            if run > 1:
                diagnostics.append(self.offense(number, 1, 0, "Extra blank line detected."))
        return diagnostics


class LeadingCommentSpace(BaseRule):
    """A comment whose ``#`` is not followed by a space.

    Shebangs on the first line and ``##`` banner comments are accepted.
    """

    rule_id = "Layout/LeadingCommentSpace"
    category = Category.LAYOUT
    description = "Checks for missing space after # in comments"

    def check(self, buffer: TextBuffer) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for number, line in iter_lines(buffer):
            marker = comment_start(buffer, number, line)
            if marker is None:
                continue
            rest = line[marker + 1 :]
            if not rest or rest[0] in " #":
                continue
            if number == 1 and marker == 0 and rest.startswith("!"):
                continue
            diagnostics.append(self.offense(number, marker + 1, 2, "Missing space after `#`."))
        return diagnostics


class IndentationWidth(BaseRule):
    """Lines not indented by two spaces per nesting level.

    Nesting follows block keywords, trailing ``do`` and unbalanced brackets,
    at most one level per line. ``when``, ``else``, ``rescue`` and the other
    middle keywords sit one level out. Continuation lines, leading ``.``
    chains, heredoc bodies and tab-indented lines are not checked.
    """

    rule_id = "Layout/IndentationWidth"
    category = Category.LAYOUT
    description = "Checks for indentation that is not two spaces per level"

    def __init__(self, width: int = INDENT_WIDTH) -> None:
        if width < 1:
            raise ValueError("width must be >= 1")
        self.width = width

    def check(self, buffer: TextBuffer) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        heredocs = heredoc_body_lines(buffer)
        expected = 0
        continued = False

        for number, line in iter_lines(buffer):
            if number in heredocs or is_blank(line):
                continue
            code = code_part(buffer, number, line)
            head = code.lstrip()
            balance = self._bracket_balance(buffer, number, code)
            opens = self._opens_block(head) or balance > 0
            closes = bool(_END_KEYWORD_RE.match(head)) or balance < 0

            target = expected
            if _CLOSER_RE.match(head) or _MIDDLE_KEYWORD_RE.match(head):
                target = max(expected - self.width, 0)

            indent = line[: indent_of(line)]
            if (
                not continued
                and "\t" not in indent
                and not head.startswith((".", "&."))
                and len(indent) != target
            ):
                diagnostics.append(
                    self.offense(
                        number,
                        1,
                        max(len(indent), 1),
                        f"Expected indentation of {target} spaces, found {len(indent)}.",
                    )
                )

            expected = max(expected + self.width * (opens - closes), 0)
            if head:
                continued = head.endswith(_CONTINUATION_ENDINGS)
        return diagnostics

    @staticmethod
    def _opens_block(head: str) -> bool:
        if _SAME_LINE_END_RE.search(head) or is_single_line_def(head):
            return False
        return bool(
            _BLOCK_OPENER_RE.match(head) or _ASSIGNED_OPENER_RE.search(head) or _DO_RE.search(head)
        )

    @staticmethod
    def _bracket_balance(buffer: TextBuffer, number: int, code: str) -> int:
        balance = 0
        for index, char in enumerate(code):
            if char in "([{":
                delta = 1
            elif char in ")]}":
                delta = -1
            else:
                continue
            if buffer.in_code(number, index + 1):
                balance += delta
        return balance


class SpaceAroundOperators(BaseRule):
    """Binary operators in code without a space on each side.

    Unary ``+`` and ``-``, splats, ``**`` written tight on both sides,
    operator method names after ``def``, setter symbols such as ``:name=``
    and regexp or percent literals are left alone.
    """

    rule_id = "Layout/SpaceAroundOperators"
    category = Category.LAYOUT
    description = "Checks for missing spaces around operators"

    def check(self, buffer: TextBuffer) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        heredocs = heredoc_body_lines(buffer)
        for number, line in iter_lines(buffer):
            if number in heredocs or line.startswith(("=begin", "=end")):
                continue
            name = _DEF_NAME_RE.match(line)
            skip_until = name.end() if name is not None else 0
            literals = [match.span() for match in _LITERAL_RE.finditer(line)]

            for match in _OPERATOR_RE.finditer(line):
                start, end = match.span()
                operator = match.group()
                if start < skip_until or operator == "->":
                    continue
                if any(low <= start < high for low, high in literals):
                    continue
                space_before = start == 0 or line[start - 1].isspace()
                space_after = end >= len(line) or line[end].isspace()
                if space_before and space_after:
                    continue
                if self._is_exempt(line, start, end, operator):
                    continue
                if buffer.in_string_or_comment(number, start + 1):
                    continue

                if not space_before and not space_after:
                    message = f"Surrounding space missing for operator `{operator}`."
                elif not space_before:
                    message = f"Space missing before operator `{operator}`."
                else:
                    message = f"Space missing after operator `{operator}`."
                diagnostics.append(self.offense(number, start + 1, len(operator), message))
        return diagnostics

    @staticmethod
    def _is_exempt(line: str, start: int, end: int, operator: str) -> bool:
        prefix = line[:start]
        tight = 0 < start and end < len(line)
        tight = tight and not line[start - 1].isspace() and not line[end].isspace()
        if operator == "**" and tight:
            return True
        if operator == "=" and _SETTER_SYMBOL_RE.search(prefix):
            return True
        if operator in ("+", "-") and _EXPONENT_RE.search(prefix):
            return True
        if operator not in _UNARY_CAPABLE:
            return False
        before = prefix.rstrip()
        if not before or before[-1] in _UNARY_PRECEDERS:
            return True
        # `foo -1` and `puts *args`: spaced before, attached to the operand
        return line[start - 1].isspace() and end < len(line) and not line[end].isspace()


class EmptyLineBetweenDefs(BaseRule):
    """Sibling method definitions must be separated by a blank line.

    A definition is a sibling of the one whose ``end`` directly precedes it,
    ignoring comment lines, at the same indentation. One-line definitions
    may sit next to each other.
    """

    rule_id = "Layout/EmptyLineBetweenDefs"
    category = Category.LAYOUT
    description = "Checks for missing empty lines between method definitions"

    def check(self, buffer: TextBuffer) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        blocks = method_blocks(buffer)
        by_end = {block.end: block for block in blocks}
        for block in blocks:
            number = block.start - 1
            while number >= 1 and is_comment(buffer.lines[number - 1]):
                number -= 1
            previous = by_end.get(number)
            if previous is not None and previous.column == block.column:
                diagnostics.append(
                    self.offense(
                        block.start,
                        block.column,
                        3,
                        "Use empty lines between method definitions.",
                    )
                )
        return diagnostics


class SpaceInsideParens(BaseRule):
    """Spaces just inside ``(`` or just before ``)``.

    ``( )`` and a closing paren at the start of its line are accepted.
    """

    rule_id = "Layout/SpaceInsideParens"
    category = Category.LAYOUT
    description = "Checks for spaces immediately inside parentheses"

    def check(self, buffer: TextBuffer) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for number, line in iter_lines(buffer):
            if "(" not in line and ")" not in line:
                continue
            for index, char in enumerate(line):
                if char == "(":
                    after = line[index + 1 :]
                    gap = len(after) - len(after.lstrip(" "))
                    rest = after[gap:]
                    if not gap or not rest or rest[0] in ")#":
                        continue
                    column = index + 2
                elif char == ")":
                    before = line[:index]
                    gap = len(before) - len(before.rstrip(" "))
                    if not gap or not before.strip() or before.rstrip().endswith("("):
                        continue
                    column = index - gap + 1
                else:
                    continue
                if buffer.in_code(number, index + 1):
                    diagnostics.append(
                        self.offense(number, column, gap, "Space inside parentheses detected.")
                    )
        return diagnostics
