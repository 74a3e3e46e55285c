"""Rule registry: the fixed rule set and its enabled/disabled overrides.

Enable and disable are plain set-membership toggles and are never checked
against the known rule ids. Configuration written for an older or newer
rule set can name rules this build does not have; disabling such a name
still records it, and ``enabled_count()`` reflects that.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING

from rblint.kernel.exceptions import ConfigurationError, ValidationError
from rblint.kernel.linting.models import Severity
from rblint.kernel.logging import get_logger

if TYPE_CHECKING:
    from rblint.kernel.config.models import LintConfig
    from rblint.kernel.linting.rules import Rule

logger = get_logger(__name__)

RULE_LIST_DELIMITER = ","


def parse_rule_list(text: str | Iterable[str] | None) -> list[str]:
    """Split a comma-separated rule list, trimming blanks.

    Examples
    --------
    >>> parse_rule_list("Layout/LineLength, Lint/Debugger,")
    ['Layout/LineLength', 'Lint/Debugger']
    """
    if text is None:
        return []
    items = text.split(RULE_LIST_DELIMITER) if isinstance(text, str) else list(text)
    return [item.strip() for item in items if item.strip()]


class RuleRegistry:
    """Holds all rules and tracks which ones are disabled."""

    __slots__ = ("_disabled", "_index", "_rules", "_severities")

    def __init__(self, rules: Sequence[Rule]) -> None:
        """Initialize the registry with its fixed rule set.

        Raises
        ------
        ValidationError
            If two rules share an identifier
        """
        self._rules: tuple[Rule, ...] = tuple(rules)
        self._index: dict[str, Rule] = {}
        for rule in self._rules:
            if rule.rule_id in self._index:
                raise ValidationError("rule_id", "duplicate rule identifier", rule.rule_id)
            self._index[rule.rule_id] = rule
        self._disabled: set[str] = set()
        self._severities: dict[str, Severity] = {}

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def rules(self) -> tuple[Rule, ...]:
        """All rules in registration order, enabled or not."""
        return self._rules

    @property
    def disabled(self) -> frozenset[str]:
        return frozenset(self._disabled)

    @property
    def severity_overrides(self) -> Mapping[str, Severity]:
        return dict(self._severities)

    def rule_ids(self) -> list[str]:
        """Identifiers of every rule, in registration order."""
        return [rule.rule_id for rule in self._rules]

    def get(self, rule_id: str) -> Rule | None:
        return self._index.get(rule_id)

    def enabled_rules(self) -> list[Rule]:
        """Currently enabled rules, in registration order."""
        return [rule for rule in self._rules if rule.rule_id not in self._disabled]

    def is_enabled(self, rule_id: str) -> bool:
        return rule_id not in self._disabled

    def total_count(self) -> int:
        return len(self._rules)

    def enabled_count(self) -> int:
        # Unknown disabled ids count too (see module docstring)
        return len(self._rules) - len(self._disabled)

    def severity_for(self, rule_id: str) -> Severity | None:
        """Configured severity override for a rule, if any."""
        return self._severities.get(rule_id)

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._index

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def disable(self, rule_id: str) -> None:
        self._disabled.add(rule_id)

    def enable(self, rule_id: str) -> None:
        self._disabled.discard(rule_id)

    def set_severity(self, rule_id: str, severity: Severity) -> None:
        self._severities[rule_id] = severity

    def apply_config(self, config: LintConfig) -> None:
        """Apply per-rule ``Enabled`` and ``Severity`` settings for known rules.

        Raises
        ------
        ConfigurationError
            If a severity override names no known severity
        """
        for rule_id in self.rule_ids():
            enabled = config.is_rule_enabled(rule_id)
            if enabled is True:
                self.enable(rule_id)
            elif enabled is False:
                self.disable(rule_id)

            override = config.severity_override(rule_id)
            if override is not None:
                try:
                    self.set_severity(rule_id, Severity.parse(override))
                except ValueError as e:
                    raise ConfigurationError(config.source or "<config>", str(e)) from e
        logger.debug(
            "Applied configuration: {} of {} rules enabled",
            self.enabled_count(),
            self.total_count(),
        )

    def apply_only(self, allowed: str | Iterable[str]) -> None:
        """Narrow the enabled set to exactly the named rules.

        Every rule not named is disabled; every named rule is enabled, even
        if configuration disabled it.
        """
        names = set(parse_rule_list(allowed))
        for rule_id in self.rule_ids():
            if rule_id in names:
                self.enable(rule_id)
            else:
                self.disable(rule_id)
        logger.debug("Allow-list applied: {} rules enabled", self.enabled_count())

    def apply_except(self, denied: str | Iterable[str]) -> None:
        """Disable each named rule unconditionally."""
        for rule_id in parse_rule_list(denied):
            self.disable(rule_id)
        logger.debug("Deny-list applied: {} rules enabled", self.enabled_count())


def configure_registry(
    registry: RuleRegistry,
    config: LintConfig | None = None,
    only: str | Iterable[str] | None = None,
    exclude: str | Iterable[str] | None = None,
) -> RuleRegistry:
    """Apply configuration, then the allow-list, then the deny-list.

    The deny-list runs last, so it disables a rule even when the
    configuration or the allow-list enabled it.
    """
    if config is not None:
        registry.apply_config(config)
    if only is not None:
        registry.apply_only(only)
    if exclude is not None:
        registry.apply_except(exclude)
    return registry
