"""Expression nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Tuple, Union

from .base import Expression, NodeKind

Number = Union[int, float]


@dataclass(frozen=True)
class Identifier(Expression):
    """Variable reference: x"""
    kind: ClassVar[NodeKind] = NodeKind.IDENTIFIER
    name: str


@dataclass(frozen=True)
class NumberLiteral(Expression):
    kind: ClassVar[NodeKind] = NodeKind.NUMBER_LITERAL
    value: Number
    raw: str = field(default="", compare=False)


@dataclass(frozen=True)
class StringLiteral(Expression):
    kind: ClassVar[NodeKind] = NodeKind.STRING_LITERAL
    value: str


@dataclass(frozen=True)
class BooleanLiteral(Expression):
    kind: ClassVar[NodeKind] = NodeKind.BOOLEAN_LITERAL
    value: bool


@dataclass(frozen=True)
class NullLiteral(Expression):
    kind: ClassVar[NodeKind] = NodeKind.NULL_LITERAL


@dataclass(frozen=True)
class BinaryExpression(Expression):
    """Arithmetic, comparison or equality: left op right"""
    kind: ClassVar[NodeKind] = NodeKind.BINARY_EXPRESSION
    operator: str
    left: Expression
    right: Expression


@dataclass(frozen=True)
class LogicalExpression(Expression):
    """Short-circuiting ``&&`` / ``||``."""
    kind: ClassVar[NodeKind] = NodeKind.LOGICAL_EXPRESSION
    operator: str
    left: Expression
    right: Expression


@dataclass(frozen=True)
class UnaryExpression(Expression):
    kind: ClassVar[NodeKind] = NodeKind.UNARY_EXPRESSION
    operator: str
    operand: Expression


@dataclass(frozen=True)
class AssignmentExpression(Expression):
    """Assignment: target = value"""
    kind: ClassVar[NodeKind] = NodeKind.ASSIGNMENT_EXPRESSION
    target: Identifier
    value: Expression


@dataclass(frozen=True)
class CallExpression(Expression):
    """Function call: callee(arg1, arg2, ...)"""
    kind: ClassVar[NodeKind] = NodeKind.CALL_EXPRESSION
    callee: Expression
    arguments: Tuple[Expression, ...] = ()


@dataclass(frozen=True)
class ContentCall(Expression):
    """``Call(...)``: emits content into the active body section."""
    kind: ClassVar[NodeKind] = NodeKind.CONTENT_CALL
    arguments: Tuple[Expression, ...] = ()


__all__ = [
    "Number",
    "Identifier",
    "NumberLiteral",
    "StringLiteral",
    "BooleanLiteral",
    "NullLiteral",
    "BinaryExpression",
    "LogicalExpression",
    "UnaryExpression",
    "AssignmentExpression",
    "CallExpression",
    "ContentCall",
]
