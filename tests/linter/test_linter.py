"""Tests for the textual linter."""

from typing import List

from homy.config import LintConfig
from homy.linter import (
    HomyLinter,
    LintContext,
    LintFinding,
    LintRule,
    LintSeverity,
    get_default_rules,
)


def _lint(source: str, config: LintConfig = None):
    return HomyLinter(config=config).lint_source(source, "app.homy")


def _by_rule(result, rule_id: str) -> List[LintFinding]:
    return [finding for finding in result.findings if finding.rule_id == rule_id]


class TestLineRules:
    def test_clean_file(self):
        source = 'name_app_mini("Demo");\nweb_package_mini();\nweb_mini_version();\n'
        result = _lint(source)
        assert not result.has_issues()

    def test_line_length(self):
        result = _lint("x" * 81 + "\n" + "y" * 80)
        findings = _by_rule(result, "line-length")
        assert len(findings) == 1
        assert (findings[0].line, findings[0].column) == (1, 81)
        assert findings[0].severity is LintSeverity.WARNING
        assert findings[0].message == "Line exceeds maximum length of 80 characters."

    def test_configured_line_length(self):
        result = _lint("x" * 30, LintConfig(max_line_length=20))
        findings = _by_rule(result, "line-length")
        assert findings[0].column == 21

    def test_trailing_whitespace_column(self):
        result = _lint("let a = 1;  \n\nlet b = 2;\t")
        findings = _by_rule(result, "trailing-whitespace")
        assert [(f.line, f.column) for f in findings] == [(1, 11), (3, 11)]

    def test_body_style_syntax(self):
        result = _lint('  body@(style: "a")\nbody@ (style: "b")')
        findings = _by_rule(result, "homy-body-style-syntax")
        assert len(findings) == 1
        assert (findings[0].line, findings[0].column) == (1, 3)
        assert findings[0].severity is LintSeverity.ERROR

    def test_line_rules_report_in_line_order(self):
        result = _lint("a \n" + "b" * 90)
        assert [f.line for f in result.findings] == [1, 2]


class TestFileRules:
    def test_web_package_without_version(self):
        result = _lint('name_app_mini("x");\n  web_package_mini();')
        findings = _by_rule(result, "homy-web-package-version-sync")
        assert len(findings) == 1
        assert (findings[0].line, findings[0].column) == (2, 3)
        assert findings[0].message == (
            "`web_mini_version()` must be present when `web_package_mini()` is used."
        )

    def test_web_package_with_version(self):
        result = _lint("web_package_mini();\nweb_mini_version();")
        assert _by_rule(result, "homy-web-package-version-sync") == []

    def test_text_match_ignores_meaning(self):
        # the rule is textual, so a comment mention still counts
        result = _lint("web_package_mini();\n// web_mini_version()")
        assert _by_rule(result, "homy-web-package-version-sync") == []

    def test_hyphenated_names(self):
        result = _lint("let my-value = 1;\nfunc do-it() {}\nconst ok_name = 2;")
        findings = _by_rule(result, "homy-naming-convention")
        assert [(f.line, f.column) for f in findings] == [(1, 5), (2, 6)]
        assert findings[0].severity is LintSeverity.INFO
        assert findings[0].suggestion == "Consider renaming to 'my_value'"

    def test_file_rules_follow_line_rules(self):
        result = _lint("web_package_mini(); \nlet a-b = 1;")
        assert [f.rule_id for f in result.findings] == [
            "trailing-whitespace",
            "homy-web-package-version-sync",
            "homy-naming-convention",
        ]


class TestConfiguration:
    def test_disabled_rules(self):
        rules = get_default_rules(LintConfig(disabled_rules=("line-length",)))
        assert "line-length" not in [rule.rule_id for rule in rules]

    def test_enabled_rules(self):
        rules = get_default_rules(LintConfig(enabled_rules=("trailing-whitespace",)))
        assert [rule.rule_id for rule in rules] == ["trailing-whitespace"]

    def test_default_rule_order(self):
        assert [rule.rule_id for rule in get_default_rules()] == [
            "line-length",
            "trailing-whitespace",
            "homy-body-style-syntax",
            "homy-web-package-version-sync",
            "homy-naming-convention",
        ]


class TestResults:
    def test_finding_format(self):
        result = _lint("let a = 1; ")
        assert result.findings[0].format() == (
            "app.homy:1:11: [trailing-whitespace] Trailing whitespace found."
        )

    def test_counts(self):
        result = _lint("body@x \nweb_package_mini();")
        assert result.error_count() == 2
        assert result.warning_count() == 1

    def test_failing_rule_becomes_warning(self, caplog):
        class BrokenRule(LintRule):
            def __init__(self):
                super().__init__(rule_id="broken", description="Always fails")

            def check(self, context: LintContext) -> List[LintFinding]:
                raise RuntimeError("boom")

        result = HomyLinter(rules=[BrokenRule()]).lint_source("let a = 1;", "app.homy")
        assert result.findings == []
        assert result.warnings == ["Rule broken encountered an error: boom"]
        assert "Rule broken failed: boom" in caplog.text

    def test_lint_file(self, homy_file):
        path = homy_file("let a = 1;   \n")
        result = HomyLinter().lint_file(path)
        assert result.path == str(path)
        assert result.findings[0].path == str(path)

    def test_does_not_need_valid_syntax(self):
        result = _lint('"unterminated\nlet = ;')
        assert not result.has_issues()
