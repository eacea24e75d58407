"""Core linter infrastructure.

The linter works on raw text only. It never tokenizes, parses or evaluates
the program, so it also reports on files that would not run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from homy.config import LintConfig

from .rules import LineRule, LintRule


class LintSeverity(Enum):
    """Severity levels for lint findings."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass
class LintFinding:
    """A single lint finding."""
    rule_id: str
    message: str
    severity: LintSeverity
    line: int
    column: int
    path: str = ""
    suggestion: Optional[str] = None

    def format(self) -> str:
        """``path:line:column: [rule] message``"""
        return f"{self.path}:{self.line}:{self.column}: [{self.rule_id}] {self.message}"


@dataclass
class LintResult:
    """Result of linting one file."""
    path: str
    findings: List[LintFinding] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def has_issues(self) -> bool:
        """Check if any issues were found."""
        return len(self.findings) > 0

    def error_count(self) -> int:
        """Count of error-level findings."""
        return sum(1 for f in self.findings if f.severity == LintSeverity.ERROR)

    def warning_count(self) -> int:
        """Count of warning-level findings."""
        return sum(1 for f in self.findings if f.severity == LintSeverity.WARNING)


@dataclass
class LintContext:
    """Context provided to lint rules for analysis."""
    source_text: str
    file_path: str
    config: LintConfig = field(default_factory=LintConfig)

    def get_lines(self) -> List[str]:
        """Source lines split on ``\\n`` only; a trailing ``\\r`` stays on the line."""
        return self.source_text.split("\n")


class HomyLinter:
    """Textual linter for homy source files."""

    def __init__(self, rules: Optional[List[LintRule]] = None, config: Optional[LintConfig] = None):
        self.config = config or LintConfig()
        if rules is None:
            from .builtin_rules import get_default_rules

            rules = get_default_rules(self.config)
        self.rules = rules
        self.logger = logging.getLogger(__name__)

    def lint_source(self, source_text: str, file_path: str = "untitled.homy") -> LintResult:
        """
        Lint homy source text.

        Line rules run first, interleaved line by line, then whole-file rules
        in registration order.
        """
        context = LintContext(source_text=source_text, file_path=file_path, config=self.config)
        result = LintResult(path=file_path)

        line_rules = [rule for rule in self.rules if isinstance(rule, LineRule)]
        file_rules = [rule for rule in self.rules if not isinstance(rule, LineRule)]

        for number, line in enumerate(context.get_lines(), start=1):
            for rule in line_rules:
                result.findings.extend(self._run(rule, result, rule.check_line, line, number, context))

        for rule in file_rules:
            result.findings.extend(self._run(rule, result, rule.check, context))

        for finding in result.findings:
            finding.path = file_path
        self.logger.debug("Linted %s: %d finding(s)", file_path, len(result.findings))
        return result

    def lint_file(self, path: Path) -> LintResult:
        text = Path(path).read_text(encoding="utf-8")
        return self.lint_source(text, str(path))

    def _run(self, rule: LintRule, result: LintResult, check, *args) -> List[LintFinding]:
        try:
            return check(*args)
        except Exception as exc:
            self.logger.warning("Rule %s failed: %s", rule.rule_id, exc)
            result.warnings.append(f"Rule {rule.rule_id} encountered an error: {exc}")
            return []
