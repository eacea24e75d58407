"""Base classes for lint rules."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from .core import LintContext, LintFinding


class LintRule(ABC):
    """Base class for rules that look at the whole file."""

    def __init__(self, rule_id: str, description: str):
        self.rule_id = rule_id
        self.description = description

    @abstractmethod
    def check(self, context: "LintContext") -> List["LintFinding"]:
        """
        Apply this rule to the given context.

        Args:
            context: Source text, path and lint settings

        Returns:
            List of lint findings
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.rule_id!r})"


class LineRule(LintRule):
    """Rule applied to one physical line at a time.

    The linter interleaves line rules: every line rule sees line 1 before
    any of them sees line 2, so findings come out in line order.
    """

    @abstractmethod
    def check_line(self, line: str, line_number: int, context: "LintContext") -> List["LintFinding"]:
        pass

    def check(self, context: "LintContext") -> List["LintFinding"]:
        findings: List["LintFinding"] = []
        for number, line in enumerate(context.get_lines(), start=1):
            findings.extend(self.check_line(line, number, context))
        return findings
