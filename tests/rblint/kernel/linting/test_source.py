"""Tests for rblint.kernel.linting.source."""

from __future__ import annotations

from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

from rblint.kernel.linting.source import TextBuffer, split_lines


def _buf(content: str) -> TextBuffer:
    return TextBuffer.from_string(content, "test.rb")


class TestSplitLines:
    def test_empty(self) -> None:
        assert split_lines("") == ()

    def test_trailing_newline_does_not_add_line(self) -> None:
        assert split_lines("a\nb\n") == ("a", "b")

    def test_no_trailing_newline(self) -> None:
        assert split_lines("a\nb") == ("a", "b")

    def test_crlf_stripped(self) -> None:
        assert split_lines("a\r\nb\r\n") == ("a", "b")

    def test_blank_lines_kept(self) -> None:
        assert split_lines("a\n\n\nb\n") == ("a", "", "", "b")


class TestTextBuffer:
    def test_from_string_defaults(self) -> None:
        buffer = TextBuffer.from_string("x = 1\n")
        assert buffer.path == Path("<string>")
        assert buffer.lines == ("x = 1",)
        assert buffer.line_count == 1
        assert not buffer.is_empty

    def test_empty_buffer(self) -> None:
        buffer = _buf("")
        assert buffer.is_empty
        assert buffer.line_count == 0
        assert buffer.line(1) is None

    def test_line_lookup_is_one_based(self) -> None:
        buffer = _buf("first\nsecond\n")
        assert buffer.line(1) == "first"
        assert buffer.line(2) == "second"
        assert buffer.line(0) is None
        assert buffer.line(3) is None

    def test_frozen(self) -> None:
        buffer = _buf("x\n")
        with pytest.raises(FrozenInstanceError):
            buffer.content = "y"  # type: ignore[misc]

    def test_from_path_keeps_crlf_in_content(self, tmp_path: Path) -> None:
        path = tmp_path / "crlf.rb"
        path.write_bytes(b"a = 1\r\nb = 2\r\n")
        buffer = TextBuffer.from_path(path)
        assert buffer.content == "a = 1\r\nb = 2\r\n"
        assert buffer.lines == ("a = 1", "b = 2")
        assert buffer.path == path

    def test_from_path_rejects_invalid_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "latin1.rb"
        path.write_bytes(b"name = '\xe9'\n")
        with pytest.raises(UnicodeDecodeError):
            TextBuffer.from_path(path)

    def test_from_path_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            TextBuffer.from_path(tmp_path / "missing.rb")


class TestInStringOrComment:
    def test_plain_code(self) -> None:
        buffer = _buf("x = 1\n")
        assert not buffer.in_string_or_comment(1, 1)
        assert not buffer.in_string_or_comment(1, 5)

    def test_after_comment_marker(self) -> None:
        buffer = _buf("x = 1 # note\n")
        # The marker itself is code; everything after it is comment
        assert not buffer.in_string_or_comment(1, 7)
        assert buffer.in_string_or_comment(1, 8)
        assert buffer.in_string_or_comment(1, 10)

    def test_whole_line_comment(self) -> None:
        buffer = _buf("# gem 'pry'\n")
        assert buffer.in_string_or_comment(1, 3)

    def test_inside_single_quotes(self) -> None:
        buffer = _buf("x = 'abc'\n")
        assert buffer.in_string_or_comment(1, 6)
        assert buffer.in_string_or_comment(1, 9)
        assert not buffer.in_string_or_comment(1, 10)

    def test_inside_double_quotes(self) -> None:
        buffer = _buf('x = "abc" + y\n')
        assert buffer.in_string_or_comment(1, 7)
        assert not buffer.in_string_or_comment(1, 11)

    def test_hash_inside_string_is_not_comment(self) -> None:
        buffer = _buf("x = 'a # b' + y\n")
        assert not buffer.in_string_or_comment(1, 15)

    def test_escaped_double_quote_stays_in_string(self) -> None:
        buffer = _buf('x = "a\\"b" + c\n')
        # The escaped quote does not close the literal
        assert buffer.in_string_or_comment(1, 9)
        assert not buffer.in_string_or_comment(1, 14)

    def test_backslash_in_single_quotes_is_literal(self) -> None:
        buffer = _buf("x = 'a\\' + y\n")
        # Single quotes do not process escapes: the quote after \ closes it
        assert not buffer.in_string_or_comment(1, 12)

    def test_double_quote_inside_single_quotes(self) -> None:
        buffer = _buf("x = '\"' + y\n")
        assert not buffer.in_string_or_comment(1, 11)

    def test_each_line_starts_outside_strings(self) -> None:
        buffer = _buf("x = 'unterminated\ny = 1\n")
        assert buffer.in_string_or_comment(1, 10)
        assert not buffer.in_string_or_comment(2, 1)

    def test_queries_out_of_column_order(self) -> None:
        buffer = _buf("x = 'abc' + y # c\n")
        assert buffer.in_string_or_comment(1, 17)
        assert buffer.in_string_or_comment(1, 7)
        assert not buffer.in_string_or_comment(1, 12)
        assert buffer.in_string_or_comment(1, 17)
        assert not buffer.in_string_or_comment(1, 3)

    def test_column_one_is_never_inside(self) -> None:
        buffer = _buf("'abc'\n")
        assert not buffer.in_string_or_comment(1, 1)

    def test_out_of_range_line(self) -> None:
        buffer = _buf("x\n")
        assert not buffer.in_string_or_comment(5, 1)

    def test_column_past_end_of_line(self) -> None:
        buffer = _buf("x = 'abc\n")
        assert buffer.in_string_or_comment(1, 100)

    def test_in_code_is_inverse(self) -> None:
        buffer = _buf("x = 1 # note\n")
        assert buffer.in_code(1, 1)
        assert not buffer.in_code(1, 9)

    def test_columns_count_characters_not_bytes(self) -> None:
        buffer = _buf("s = 'é' # ü\n")
        # 'é' is one character: the comment marker is at column 9
        assert not buffer.in_string_or_comment(1, 9)
        assert buffer.in_string_or_comment(1, 10)
