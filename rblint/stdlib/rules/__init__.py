"""Built-in Ruby lint rules.

The rule set is a fixed, ordered sequence. Nothing registers itself on
import; :func:`all_rules` is the single place the set is assembled.
"""

from __future__ import annotations

from rblint.kernel.linting.rules import Rule
from rblint.kernel.linting.registry import RuleRegistry
from rblint.stdlib.rules.bundler import DuplicatedGem, OrderedGems
from rblint.stdlib.rules.layout import (
    EmptyLineBetweenDefs,
    EmptyLines,
    EndOfLine,
    IndentationStyle,
    IndentationWidth,
    LeadingCommentSpace,
    LeadingEmptyLines,
    LineLength,
    SpaceAfterComma,
    SpaceAroundOperators,
    SpaceInsideParens,
    TrailingEmptyLines,
    TrailingWhitespace,
)
from rblint.stdlib.rules.lint import Debugger, DuplicateMethods, LiteralInCondition
from rblint.stdlib.rules.metrics import MethodLength, ParameterLists
from rblint.stdlib.rules.naming import ConstantName, MethodName, VariableName
from rblint.stdlib.rules.style import (
    EmptyMethod,
    FrozenStringLiteralComment,
    NegatedIf,
    RedundantReturn,
    StringLiterals,
)


def all_rules() -> list[Rule]:
    """Fresh instances of every built-in rule, in registration order."""
    return [
        # Layout
        TrailingWhitespace(),
        TrailingEmptyLines(),
        LeadingEmptyLines(),
        EndOfLine(),
        IndentationStyle(),
        IndentationWidth(),
        SpaceAfterComma(),
        SpaceAroundOperators(),
        EmptyLineBetweenDefs(),
        SpaceInsideParens(),
        LineLength(),
        EmptyLines(),
        LeadingCommentSpace(),
        # Style
        FrozenStringLiteralComment(),
        StringLiterals(),
        NegatedIf(),
        RedundantReturn(),
        EmptyMethod(),
        # Lint
        Debugger(),
        LiteralInCondition(),
        DuplicateMethods(),
        # Naming
        MethodName(),
        VariableName(),
        ConstantName(),
        # Metrics
        MethodLength(),
        ParameterLists(),
        # Bundler
        OrderedGems(),
        DuplicatedGem(),
    ]


def default_registry() -> RuleRegistry:
    """Registry holding every built-in rule, all enabled."""
    return RuleRegistry(all_rules())


__all__ = [
    "ConstantName",
    "Debugger",
    "DuplicateMethods",
    "DuplicatedGem",
    "EmptyLineBetweenDefs",
    "EmptyLines",
    "EmptyMethod",
    "EndOfLine",
    "FrozenStringLiteralComment",
    "IndentationStyle",
    "IndentationWidth",
    "LeadingCommentSpace",
    "LeadingEmptyLines",
    "LineLength",
    "LiteralInCondition",
    "MethodLength",
    "MethodName",
    "NegatedIf",
    "OrderedGems",
    "ParameterLists",
    "RedundantReturn",
    "SpaceAfterComma",
    "SpaceAroundOperators",
    "SpaceInsideParens",
    "StringLiterals",
    "TrailingEmptyLines",
    "TrailingWhitespace",
    "VariableName",
    "all_rules",
    "default_registry",
]
