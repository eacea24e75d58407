"""Built-in lint rules for homy source files."""

from __future__ import annotations

import re
from typing import List, Optional

from homy.config import LintConfig

from .core import LintContext, LintFinding, LintSeverity
from .rules import LineRule, LintRule

_TRAILING_WHITESPACE = re.compile(r"\s+\Z")
_DECLARED_NAME = re.compile(r"\b(func|let|const)\s+([A-Za-z_][A-Za-z0-9_-]*)")


class LineLengthRule(LineRule):
    """Enforce maximum line length."""

    def __init__(self, max_length: int = 80):
        super().__init__(
            rule_id="line-length",
            description="Enforce maximum line length.",
        )
        self.max_length = max_length

    def check_line(self, line: str, line_number: int, context: LintContext) -> List[LintFinding]:
        if len(line) <= self.max_length:
            return []
        return [LintFinding(
            rule_id=self.rule_id,
            message=f"Line exceeds maximum length of {self.max_length} characters.",
            severity=LintSeverity.WARNING,
            line=line_number,
            column=self.max_length + 1,
        )]


class TrailingWhitespaceRule(LineRule):
    """Disallow trailing whitespace at the end of lines."""

    def __init__(self):
        super().__init__(
            rule_id="trailing-whitespace",
            description="Disallow trailing whitespace at the end of lines.",
        )

    def check_line(self, line: str, line_number: int, context: LintContext) -> List[LintFinding]:
        match = _TRAILING_WHITESPACE.search(line)
        if not line or match is None:
            return []
        return [LintFinding(
            rule_id=self.rule_id,
            message="Trailing whitespace found.",
            severity=LintSeverity.WARNING,
            line=line_number,
            column=match.start() + 1,
            suggestion="Remove the whitespace at the end of the line",
        )]


class BodyStyleSyntaxRule(LineRule):
    """``body@`` must be followed by `` (style:`` on the same line."""

    def __init__(self):
        super().__init__(
            rule_id="homy-body-style-syntax",
            description="Enforce correct syntax for `body@ (style:)`.",
        )

    def check_line(self, line: str, line_number: int, context: LintContext) -> List[LintFinding]:
        index = line.find("body@")
        if index == -1 or "body@ (style:" in line:
            return []
        return [LintFinding(
            rule_id=self.rule_id,
            message="`body@` must be immediately followed by ` (style:)` on the same line.",
            severity=LintSeverity.ERROR,
            line=line_number,
            column=index + 1,
            suggestion='Write the section header as body@ (style: "...")',
        )]


class WebPackageVersionSyncRule(LintRule):
    """Ensure ``web_mini_version()`` is used when ``web_package_mini()`` is present."""

    def __init__(self):
        super().__init__(
            rule_id="homy-web-package-version-sync",
            description="Ensure `web_mini_version()` is used when `web_package_mini()` is present.",
        )

    def check(self, context: LintContext) -> List[LintFinding]:
        text = context.source_text
        if "web_package_mini()" not in text or "web_mini_version()" in text:
            return []

        line_number, column = 1, 1
        for number, line in enumerate(context.get_lines(), start=1):
            index = line.find("web_package_mini()")
            if index != -1:
                line_number, column = number, index + 1
                break

        return [LintFinding(
            rule_id=self.rule_id,
            message="`web_mini_version()` must be present when `web_package_mini()` is used.",
            severity=LintSeverity.ERROR,
            line=line_number,
            column=column,
            suggestion="Add web_mini_version(); next to web_package_mini();",
        )]


class NamingConventionRule(LintRule):
    """Flag hyphenated function and variable names.

    Hyphens are legal in identifiers, but ``a-b`` reads as a subtraction and
    the formatter has to space binary operators to keep such names apart.
    """

    def __init__(self):
        super().__init__(
            rule_id="homy-naming-convention",
            description="Function and variable names should use camelCase or snake_case",
        )

    def check(self, context: LintContext) -> List[LintFinding]:
        findings = []
        for number, line in enumerate(context.get_lines(), start=1):
            for match in _DECLARED_NAME.finditer(line):
                keyword, name = match.group(1), match.group(2)
                if "-" not in name:
                    continue
                findings.append(LintFinding(
                    rule_id=self.rule_id,
                    message=f"{keyword} name '{name}' should use camelCase or snake_case",
                    severity=LintSeverity.INFO,
                    line=number,
                    column=match.start(2) + 1,
                    suggestion=f"Consider renaming to '{name.replace('-', '_')}'",
                ))
        return findings


def get_default_rules(config: Optional[LintConfig] = None) -> List[LintRule]:
    """Get the default set of lint rules, filtered by ``config``."""
    config = config or LintConfig()
    rules: List[LintRule] = [
        LineLengthRule(config.max_line_length),
        TrailingWhitespaceRule(),
        BodyStyleSyntaxRule(),
        WebPackageVersionSyncRule(),
        NamingConventionRule(),
    ]
    return [rule for rule in rules if config.is_enabled(rule.rule_id)]
