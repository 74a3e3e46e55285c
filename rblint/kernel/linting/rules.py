"""Lint rule protocol, rule base class and the per-buffer rule runner."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import ClassVar, Protocol, runtime_checkable

from rblint.kernel.linting.models import (
    Category,
    Diagnostic,
    Location,
    Severity,
    sort_diagnostics,
    validate_rule_id,
)
from rblint.kernel.linting.source import TextBuffer
from rblint.kernel.logging import get_logger

logger = get_logger(__name__)


@runtime_checkable
class Rule(Protocol):
    """Protocol for a single lint rule.

    ``check`` must be a pure function of the buffer: no state carried
    between calls and no mutation of shared structures, so one instance can
    check many buffers concurrently.
    """

    rule_id: str
    category: Category
    severity: Severity
    description: str

    def check(self, buffer: TextBuffer) -> list[Diagnostic]:
        """Run this rule against the buffer and return diagnostics."""
        ...


class BaseRule(ABC):
    """Convenience base class for rules.

    Subclasses declare identity as class attributes and implement
    :meth:`check`; :meth:`offense` builds diagnostics tagged with the
    rule's id and default severity.
    """

    rule_id: ClassVar[str]
    category: ClassVar[Category]
    severity: ClassVar[Severity] = Severity.CONVENTION
    description: ClassVar[str] = ""

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        if "rule_id" in cls.__dict__:
            validate_rule_id(cls.rule_id)

    @abstractmethod
    def check(self, buffer: TextBuffer) -> list[Diagnostic]:
        """Check a buffer and return all diagnostics found."""

    def offense(self, line: int, column: int, length: int, message: str) -> Diagnostic:
        """Build a diagnostic for this rule at the given location."""
        return Diagnostic(
            rule_id=self.rule_id,
            message=message,
            severity=self.severity,
            location=Location(line, column, length),
        )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.rule_id}>"


def invoke_rule(rule: Rule, buffer: TextBuffer) -> list[Diagnostic]:
    """Run one rule, converting any failure into an empty result.

    A rule that raises is reported in the log and contributes nothing for
    this buffer; it never produces a partial or invented diagnostic.
    """
    try:
        return list(rule.check(buffer))
    except Exception:
        logger.opt(exception=True).warning(
            "Rule {} failed on {}; skipping its diagnostics", rule.rule_id, buffer.path
        )
        return []


def run_rules(
    rules: Iterable[Rule],
    buffer: TextBuffer,
    severity_overrides: Mapping[str, Severity] | None = None,
) -> list[Diagnostic]:
    """Run rules against a buffer and return diagnostics sorted by location.

    Parameters
    ----------
    rules : Iterable[Rule]
        Rules to run, in order
    buffer : TextBuffer
        Source to check
    severity_overrides : Mapping[str, Severity] | None
        Per-rule severities replacing each rule's default

    Returns
    -------
    list[Diagnostic]
        Diagnostics ordered by (line, column); ties keep rule order and
        emission order
    """
    overrides = severity_overrides or {}
    diagnostics: list[Diagnostic] = []
    for rule in rules:
        found = invoke_rule(rule, buffer)
        override = overrides.get(rule.rule_id)
        if override is not None:
            found = [d.with_severity(override) for d in found]
        diagnostics.extend(found)
    return sort_diagnostics(diagnostics)
