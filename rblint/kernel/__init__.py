"""rblint kernel - the public API of the linting core.

User-space code (``rblint.cli`` and applications embedding the linter)
should import from ``rblint.kernel``; kernel-space code
(``rblint.kernel.*``, ``rblint.stdlib.*``) may import from submodules.

The exports are grouped by category:
- Linting (buffers, diagnostics, rules, registry, runner)
- Configuration
- Discovery
- Exceptions
- Logging
"""

# ============================================================================
# 1. Exceptions
# ============================================================================
from rblint.kernel.exceptions import (
    ConfigurationError,
    RblintError,
    ResourceNotFoundError,
    ValidationError,
)

# ============================================================================
# 2. Logging
# ============================================================================
from rblint.kernel.logging import configure_logging, get_logger

# ============================================================================
# 3. Linting
# ============================================================================
from rblint.kernel.linting import (
    BaseRule,
    Category,
    Diagnostic,
    FileResult,
    Location,
    Rule,
    RuleRegistry,
    RunReport,
    Runner,
    Severity,
    TextBuffer,
    configure_registry,
    parse_rule_list,
    run_rules,
)

# ============================================================================
# 4. Configuration
# ============================================================================
from rblint.kernel.config import LintConfig, load_config

# ============================================================================
# 5. Discovery
# ============================================================================
from rblint.kernel.discovery import discover_ruby_files

__all__ = [
    # Exceptions
    "ConfigurationError",
    "RblintError",
    "ResourceNotFoundError",
    "ValidationError",
    # Logging
    "configure_logging",
    "get_logger",
    # Linting
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
    # Configuration
    "LintConfig",
    "load_config",
    # Discovery
    "discover_ruby_files",
]
