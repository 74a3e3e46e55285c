"""Configuration data models for rblint.

The on-disk format mirrors RuboCop's ``.rubocop.yml``::

    AllCops:
      Exclude:
        - 'vendor/**/*'
      TargetRubyVersion: 3.0

    Layout/TrailingWhitespace:
      Enabled: false

    Lint/Debugger:
      Severity: error
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from rblint.kernel.linting.models import Severity


class RuleConfig(BaseModel):
    """Per-rule overrides. Unset fields mean "no override"."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    enabled: bool | None = Field(default=None, alias="Enabled")
    severity: str | None = Field(default=None, alias="Severity")

    @field_validator("severity")
    @classmethod
    def _validate_severity(cls, value: str | None) -> str | None:
        if value is None:
            return None
        Severity.parse(value)
        return value.strip().lower()


class GlobalConfig(BaseModel):
    """Settings under the ``AllCops`` key."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    exclude: list[str] = Field(default_factory=list, alias="Exclude")
    target_ruby_version: float | None = Field(default=None, alias="TargetRubyVersion")


class LintConfig(BaseModel):
    """Parsed linter configuration.

    Attributes
    ----------
    all_cops : GlobalConfig | None
        Global section, if present
    rules : dict[str, RuleConfig]
        Per-rule sections keyed by ``Category/Name`` identifier
    source : str | None
        Path the configuration was loaded from
    """

    model_config = ConfigDict(frozen=True)

    all_cops: GlobalConfig | None = None
    rules: dict[str, RuleConfig] = Field(default_factory=dict)
    source: str | None = None

    def is_rule_enabled(self, rule_id: str) -> bool | None:
        """Explicit enabled flag for a rule, or None when not configured."""
        entry = self.rules.get(rule_id)
        return entry.enabled if entry is not None else None

    def severity_override(self, rule_id: str) -> str | None:
        """Severity name configured for a rule, or None."""
        entry = self.rules.get(rule_id)
        return entry.severity if entry is not None else None

    @property
    def exclude(self) -> list[str]:
        return list(self.all_cops.exclude) if self.all_cops else []

    @property
    def root(self) -> Path | None:
        """Directory that exclusion globs are relative to."""
        return Path(self.source).parent if self.source else None

    @property
    def target_ruby_version(self) -> float | None:
        return self.all_cops.target_ruby_version if self.all_cops else None

    def summary(self) -> dict[str, Any]:
        """Plain-dict view used by logging."""
        return {
            "source": self.source,
            "rules": len(self.rules),
            "exclude": self.exclude,
            "target_ruby_version": self.target_ruby_version,
        }
