"""
Textual linter for homy source files.

Rules work on the raw text, line by line or over the whole file, and share
no state with the interpreter.
"""

from __future__ import annotations

__all__ = [
    "HomyLinter",
    "LintContext",
    "LintFinding",
    "LintResult",
    "LintRule",
    "LineRule",
    "LintSeverity",
    "get_default_rules",
]

from .core import HomyLinter, LintContext, LintFinding, LintResult, LintSeverity
from .rules import LineRule, LintRule
from .builtin_rules import get_default_rules
