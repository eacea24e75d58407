"""Core AST node definitions shared across the homy parser and evaluator."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar


class NodeKind(Enum):
    """Closed set of AST node kinds."""

    PROGRAM = "Program"
    BLOCK_STATEMENT = "BlockStatement"
    VARIABLE_DECLARATION = "VariableDeclaration"
    FUNCTION_DECLARATION = "FunctionDeclaration"
    PROPERTY_DECLARATION = "MiniAppPropertyDeclaration"
    BODY_DECLARATION = "BodyDeclaration"
    IF_STATEMENT = "IfStatement"
    WHILE_STATEMENT = "WhileStatement"
    FOR_STATEMENT = "ForStatement"
    RETURN_STATEMENT = "ReturnStatement"
    BREAK_STATEMENT = "BreakStatement"
    CONTINUE_STATEMENT = "ContinueStatement"
    EXPRESSION_STATEMENT = "ExpressionStatement"

    IDENTIFIER = "Identifier"
    NUMBER_LITERAL = "NumberLiteral"
    STRING_LITERAL = "StringLiteral"
    BOOLEAN_LITERAL = "BooleanLiteral"
    NULL_LITERAL = "NullLiteral"
    BINARY_EXPRESSION = "BinaryExpression"
    LOGICAL_EXPRESSION = "LogicalExpression"
    UNARY_EXPRESSION = "UnaryExpression"
    ASSIGNMENT_EXPRESSION = "AssignmentExpression"
    CALL_EXPRESSION = "CallExpression"
    CONTENT_CALL = "ContentCall"


class DeclarationKind(Enum):
    """Binding kind of a ``let``/``const`` declaration."""

    LET = "let"
    CONST = "const"

    def __str__(self) -> str:
        return self.value


class PropertyKind(Enum):
    """Application properties set by domain declarations.

    Each member carries the keyword spelling, the field it fills on the
    application description and the accepted argument count range.
    """

    APP_NAME = ("name_app_mini", "name", 1, 1)
    WEB_PACKAGE = ("web_package_mini", "is_web_package", 0, 0)
    WEB_VERSION = ("web_mini_version", "web_version", 0, 1)
    MINI_VERSION = ("mini_version", "mini_version", 1, 1)
    APP_ICON = ("mini_app_icon", "icon_path", 1, 1)

    def __init__(self, keyword: str, field_name: str, min_args: int, max_args: int):
        self.keyword = keyword
        self.field_name = field_name
        self.min_args = min_args
        self.max_args = max_args

    @classmethod
    def from_keyword(cls, keyword: str) -> "PropertyKind":
        for member in cls:
            if member.keyword == keyword:
                return member
        raise KeyError(keyword)

    def accepts(self, count: int) -> bool:
        return self.min_args <= count <= self.max_args

    def describe_arity(self) -> str:
        if self.min_args == self.max_args:
            plural = "" if self.min_args == 1 else "s"
            return f"{self.min_args} argument{plural}"
        return f"{self.min_args} to {self.max_args} arguments"


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes.

    ``line`` and ``column`` locate the node's first token. They do not take
    part in equality, so two trees parsed from differently laid out source
    compare equal when their structure and literal values match.
    """

    kind: ClassVar[NodeKind]

    line: int = field(default=0, compare=False, kw_only=True)
    column: int = field(default=0, compare=False, kw_only=True)


@dataclass(frozen=True)
class Expression(Node):
    """Base class for all expression types."""


@dataclass(frozen=True)
class Statement(Node):
    """Base class for all statement types."""


__all__ = [
    "NodeKind",
    "DeclarationKind",
    "PropertyKind",
    "Node",
    "Expression",
    "Statement",
]
