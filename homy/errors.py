"""Unified error model for the homy language.

Every stage of the pipeline raises a subclass of :class:`HomyError`:

- Lexical errors (``HomyLexerError``) for malformed source text
- Syntax errors (``HomySyntaxError``) with expected vs. found token kinds
- Binding errors (``HomyBindingError``) raised by the scope chain
- Runtime errors (``HomyRuntimeError``) raised while evaluating a program

Errors carry the source position of the construct that caused them and a
machine-readable ``code``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(eq=False)
class HomyError(Exception):
    """Base class for all homy errors."""

    message: str
    path: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None
    code: str = "HOMY_ERROR"

    def __str__(self) -> str:
        """Format error message with location."""
        parts = []

        if self.path:
            parts.append(f"File: {self.path}")

        if self.line is not None:
            if self.column is not None:
                parts.append(f"Line {self.line}:{self.column}")
            else:
                parts.append(f"Line {self.line}")

        parts.append(f"[{self.code}] {self.message}")

        return " | ".join(parts)

    def _with_details(self, details: List[str]) -> str:
        base = HomyError.__str__(self)
        if details:
            return base + "\n  " + "\n  ".join(details)
        return base


# ---------------------------------------------------------------------------
# Lexical errors
# ---------------------------------------------------------------------------


@dataclass(eq=False)
class HomyLexerError(HomyError):
    """Source text could not be split into tokens."""

    code: str = "LEXER_ERROR"


@dataclass(eq=False)
class UnterminatedCommentError(HomyLexerError):
    code: str = "UNTERMINATED_COMMENT"


@dataclass(eq=False)
class UnterminatedStringError(HomyLexerError):
    code: str = "UNTERMINATED_STRING"


@dataclass(eq=False)
class UnexpectedCharacterError(HomyLexerError):
    character: Optional[str] = None
    code: str = "UNEXPECTED_CHARACTER"


# ---------------------------------------------------------------------------
# Syntax errors
# ---------------------------------------------------------------------------


@dataclass(eq=False)
class HomySyntaxError(HomyError):
    """Syntax error with detailed context."""

    expected: List[str] = field(default_factory=list)
    found: Optional[str] = None
    suggestion: Optional[str] = None
    code: str = "SYNTAX_ERROR"

    def __str__(self) -> str:
        """Format syntax error with expectations and suggestions."""
        details = []

        if self.expected:
            if len(self.expected) == 1:
                details.append(f"Expected: {self.expected[0]}")
            else:
                details.append(f"Expected one of: {', '.join(self.expected)}")

        if self.found:
            details.append(f"Found: {self.found}")

        if self.suggestion:
            details.append(f"Suggestion: {self.suggestion}")

        return self._with_details(details)


@dataclass(eq=False)
class UnexpectedTokenError(HomySyntaxError):
    code: str = "UNEXPECTED_TOKEN"


@dataclass(eq=False)
class InvalidAssignmentTargetError(HomySyntaxError):
    code: str = "INVALID_ASSIGNMENT_TARGET"


@dataclass(eq=False)
class PropertyArityError(HomySyntaxError):
    """A domain property keyword was given the wrong number of arguments."""

    keyword: Optional[str] = None
    code: str = "PROPERTY_ARITY"


# ---------------------------------------------------------------------------
# Binding errors
# ---------------------------------------------------------------------------


@dataclass(eq=False)
class HomyBindingError(HomyError):
    """Error raised by the scope chain."""

    name: Optional[str] = None
    code: str = "BINDING_ERROR"


@dataclass(eq=False)
class DuplicateDeclarationError(HomyBindingError):
    """Duplicate declaration in the same scope."""

    first_line: Optional[int] = None
    first_column: Optional[int] = None
    code: str = "DUPLICATE_DECLARATION"

    def __str__(self) -> str:
        details = []
        if self.name:
            details.append(f"Duplicate name: {self.name}")
        if self.first_line:
            details.append(f"First declared at {self.first_line}:{self.first_column}")
        return self._with_details(details)


@dataclass(eq=False)
class UndeclaredNameError(HomyBindingError):
    """Reference to a name no enclosing scope declares."""

    available: List[str] = field(default_factory=list)
    code: str = "UNDECLARED_NAME"

    def __str__(self) -> str:
        """Format reference error with similar names."""
        details = []

        if self.name:
            details.append(f"Undefined: {self.name}")

        similar = self._find_similar(self.name, self.available) if self.name else []
        if similar:
            details.append(f"Did you mean: {', '.join(similar[:3])}?")

        return self._with_details(details)

    @staticmethod
    def _find_similar(target: str, candidates: List[str], max_distance: int = 2) -> List[str]:
        """Find similar names using Levenshtein distance."""
        def levenshtein(s1: str, s2: str) -> int:
            if len(s1) < len(s2):
                return levenshtein(s2, s1)
            if len(s2) == 0:
                return len(s1)
            previous_row = range(len(s2) + 1)
            for i, c1 in enumerate(s1):
                current_row = [i + 1]
                for j, c2 in enumerate(s2):
                    insertions = previous_row[j + 1] + 1
                    deletions = current_row[j] + 1
                    substitutions = previous_row[j] + (c1 != c2)
                    current_row.append(min(insertions, deletions, substitutions))
                previous_row = current_row
            return previous_row[-1]

        similar = [
            (name, levenshtein(target.lower(), name.lower()))
            for name in candidates
            if name != target
        ]
        similar.sort(key=lambda x: x[1])
        return [name for name, dist in similar if dist <= max_distance]


@dataclass(eq=False)
class ConstReassignmentError(HomyBindingError):
    """Assignment to a name declared with ``const``."""

    declared_line: Optional[int] = None
    declared_column: Optional[int] = None
    code: str = "CONST_REASSIGNMENT"

    def __str__(self) -> str:
        details = []
        if self.declared_line is not None:
            details.append(
                f"'{self.name}' was declared const at {self.declared_line}:{self.declared_column}"
            )
        return self._with_details(details)


# ---------------------------------------------------------------------------
# Runtime errors
# ---------------------------------------------------------------------------


@dataclass(eq=False)
class HomyRuntimeError(HomyError):
    """Raised when evaluation fails."""

    code: str = "RUNTIME_ERROR"


@dataclass(eq=False)
class NotCallableError(HomyRuntimeError):
    code: str = "NOT_CALLABLE"


@dataclass(eq=False)
class ArityMismatchError(HomyRuntimeError):
    expected: Optional[int] = None
    received: Optional[int] = None
    code: str = "ARITY_MISMATCH"


@dataclass(eq=False)
class OperandTypeError(HomyRuntimeError):
    """Type error in an operator or declaration."""

    expected_type: Optional[str] = None
    found_type: Optional[str] = None
    code: str = "TYPE_ERROR"

    def __str__(self) -> str:
        details = []
        if self.expected_type:
            details.append(f"Expected type: {self.expected_type}")
        if self.found_type:
            details.append(f"Found type: {self.found_type}")
        return self._with_details(details)


@dataclass(eq=False)
class DivisionByZeroError(HomyRuntimeError):
    code: str = "DIVISION_BY_ZERO"


@dataclass(eq=False)
class ControlFlowError(HomyRuntimeError):
    """``break`` or ``continue`` outside of a loop."""

    code: str = "CONTROL_FLOW"


@dataclass(eq=False)
class DuplicatePropertyError(HomyRuntimeError):
    """An application property was declared twice."""

    property_name: Optional[str] = None
    code: str = "DUPLICATE_PROPERTY"


@dataclass(eq=False)
class ContentCallError(HomyRuntimeError):
    """``Call(...)`` used where no body section is active."""

    code: str = "CONTENT_CALL"


@dataclass(eq=False)
class CallDepthError(HomyRuntimeError):
    code: str = "CALL_DEPTH_EXCEEDED"


@dataclass(eq=False)
class StepLimitError(HomyRuntimeError):
    code: str = "STEP_LIMIT_EXCEEDED"


@dataclass(eq=False)
class ConfigError(HomyError):
    """Invalid homy configuration."""

    code: str = "CONFIG_ERROR"


__all__ = [
    "HomyError",
    "HomyLexerError",
    "UnterminatedCommentError",
    "UnterminatedStringError",
    "UnexpectedCharacterError",
    "HomySyntaxError",
    "UnexpectedTokenError",
    "InvalidAssignmentTargetError",
    "PropertyArityError",
    "HomyBindingError",
    "DuplicateDeclarationError",
    "UndeclaredNameError",
    "ConstReassignmentError",
    "HomyRuntimeError",
    "NotCallableError",
    "ArityMismatchError",
    "OperandTypeError",
    "DivisionByZeroError",
    "ControlFlowError",
    "DuplicatePropertyError",
    "ContentCallError",
    "CallDepthError",
    "StepLimitError",
    "ConfigError",
]
