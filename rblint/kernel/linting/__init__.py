"""Linting core: buffers, diagnostics, rule contract, registry and runner."""

from rblint.kernel.linting.models import (
    Category,
    Diagnostic,
    FileResult,
    Location,
    RunReport,
    Severity,
    validate_rule_id,
)
from rblint.kernel.linting.registry import RuleRegistry, configure_registry, parse_rule_list
from rblint.kernel.linting.rules import BaseRule, Rule, run_rules
from rblint.kernel.linting.runner import Runner
from rblint.kernel.linting.source import TextBuffer

__all__ = [
    "BaseRule",
    "Category",
    "Diagnostic",
    "FileResult",
    "Location",
    "Rule",
    "RuleRegistry",
    "RunReport",
    "Runner",
    "Severity",
    "TextBuffer",
    "configure_registry",
    "parse_rule_list",
    "run_rules",
    "validate_rule_id",
]
