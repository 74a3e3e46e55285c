"""Tests for rblint.kernel.linting.rules."""

from __future__ import annotations

import pytest

from rblint.kernel.exceptions import ValidationError
from rblint.kernel.linting.models import Category, Diagnostic, Location, Severity
from rblint.kernel.linting.rules import BaseRule, Rule, invoke_rule, run_rules
from rblint.kernel.linting.source import TextBuffer


class _WordRule(BaseRule):
    """Reports every occurrence of a word, scanning lines bottom-up."""

    rule_id = "Lint/Word"
    category = Category.LINT
    description = "Reports a word"

    def __init__(self, word: str = "bad") -> None:
        self.word = word

    def check(self, buffer: TextBuffer) -> list[Diagnostic]:
        found = []
        for number in range(buffer.line_count, 0, -1):
            line = buffer.lines[number - 1]
            index = line.find(self.word)
            if index >= 0:
                found.append(self.offense(number, index + 1, len(self.word), "word"))
        return found


class _LineStartRule(BaseRule):
    rule_id = "Layout/LineStart"
    category = Category.LAYOUT
    severity = Severity.WARNING

    def check(self, buffer: TextBuffer) -> list[Diagnostic]:
        return [self.offense(n, 1, 0, "start") for n in range(1, buffer.line_count + 1)]


class _ExplodingRule(BaseRule):
    rule_id = "Lint/Explodes"
    category = Category.LINT

    def check(self, buffer: TextBuffer) -> list[Diagnostic]:
        raise RuntimeError("boom")


class _PlainRule:
    """Satisfies the protocol without inheriting from BaseRule."""

    rule_id = "Style/Plain"
    category = Category.STYLE
    severity = Severity.INFO
    description = "plain"

    def check(self, buffer: TextBuffer) -> list[Diagnostic]:
        return [
            Diagnostic(self.rule_id, "plain", self.severity, Location(1, 1))
        ] if buffer.lines else []


class TestBaseRule:
    def test_offense_uses_rule_identity(self) -> None:
        d = _LineStartRule().offense(2, 3, 4, "message")
        assert d.rule_id == "Layout/LineStart"
        assert d.severity is Severity.WARNING
        assert d.location == Location(2, 3, 4)

    def test_default_severity_is_convention(self) -> None:
        assert _WordRule.severity is Severity.CONVENTION

    def test_invalid_rule_id_rejected_at_class_creation(self) -> None:
        with pytest.raises(ValidationError):

            class _Broken(BaseRule):
                rule_id = "NoCategory"
                category = Category.LINT

                def check(self, buffer: TextBuffer) -> list[Diagnostic]:
                    return []

    def test_satisfies_protocol(self) -> None:
        assert isinstance(_WordRule(), Rule)
        assert isinstance(_PlainRule(), Rule)

    def test_repr(self) -> None:
        assert repr(_WordRule()) == "<_WordRule Lint/Word>"


class TestInvokeRule:
    def test_failure_yields_empty_list(self) -> None:
        assert invoke_rule(_ExplodingRule(), TextBuffer.from_string("x\n")) == []

    def test_returns_list(self) -> None:
        result = invoke_rule(_PlainRule(), TextBuffer.from_string("x\n"))
        assert isinstance(result, list)
        assert len(result) == 1


class TestRunRules:
    def test_sorted_by_location(self) -> None:
        buffer = TextBuffer.from_string("bad\nok\nbad\n")
        diagnostics = run_rules([_WordRule()], buffer)
        assert [(d.line, d.column) for d in diagnostics] == [(1, 1), (3, 1)]

    def test_ties_follow_rule_order(self) -> None:
        buffer = TextBuffer.from_string("bad\n")
        first = run_rules([_WordRule(), _LineStartRule()], buffer)
        assert [d.rule_id for d in first] == ["Lint/Word", "Layout/LineStart"]
        second = run_rules([_LineStartRule(), _WordRule()], buffer)
        assert [d.rule_id for d in second] == ["Layout/LineStart", "Lint/Word"]

    def test_failing_rule_does_not_affect_others(self) -> None:
        buffer = TextBuffer.from_string("bad\n")
        diagnostics = run_rules([_ExplodingRule(), _WordRule()], buffer)
        assert [d.rule_id for d in diagnostics] == ["Lint/Word"]

    def test_severity_override(self) -> None:
        buffer = TextBuffer.from_string("bad\n")
        diagnostics = run_rules(
            [_WordRule(), _LineStartRule()],
            buffer,
            {"Lint/Word": Severity.ERROR},
        )
        by_rule = {d.rule_id: d.severity for d in diagnostics}
        assert by_rule == {"Lint/Word": Severity.ERROR, "Layout/LineStart": Severity.WARNING}

    def test_empty_buffer(self) -> None:
        assert run_rules([_WordRule(), _PlainRule()], TextBuffer.from_string("")) == []

    def test_deterministic(self) -> None:
        buffer = TextBuffer.from_string("bad bad\nbad\n")
        rules = [_WordRule(), _LineStartRule()]
        assert run_rules(rules, buffer) == run_rules(rules, buffer)
