"""Statement and declaration nodes, including the homy domain declarations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional, Tuple, Union

from .base import DeclarationKind, Expression, Node, NodeKind, PropertyKind, Statement


@dataclass(frozen=True)
class Program(Node):
    """Root of the AST."""
    kind: ClassVar[NodeKind] = NodeKind.PROGRAM
    body: Tuple[Statement, ...] = ()


@dataclass(frozen=True)
class BlockStatement(Statement):
    kind: ClassVar[NodeKind] = NodeKind.BLOCK_STATEMENT
    body: Tuple[Statement, ...] = ()


@dataclass(frozen=True)
class VariableDeclaration(Statement):
    """``let x = 10;`` or ``const PI = 3.14;``"""
    kind: ClassVar[NodeKind] = NodeKind.VARIABLE_DECLARATION
    binding_kind: DeclarationKind
    name: str
    initializer: Optional[Expression] = None


@dataclass(frozen=True)
class FunctionDeclaration(Statement):
    """``func name(a, b) { ... }``"""
    kind: ClassVar[NodeKind] = NodeKind.FUNCTION_DECLARATION
    name: str
    parameters: Tuple[str, ...]
    body: BlockStatement


@dataclass(frozen=True)
class MiniAppPropertyDeclaration(Statement):
    """``name_app_mini("App");`` and the other application property keywords."""
    kind: ClassVar[NodeKind] = NodeKind.PROPERTY_DECLARATION
    property_kind: PropertyKind
    argument: Optional[Expression] = None


@dataclass(frozen=True)
class BodyDeclaration(Statement):
    """``body@ (style: "main.css") ... /body``"""
    kind: ClassVar[NodeKind] = NodeKind.BODY_DECLARATION
    style_reference: Expression
    content: Tuple[Statement, ...] = ()


@dataclass(frozen=True)
class IfStatement(Statement):
    kind: ClassVar[NodeKind] = NodeKind.IF_STATEMENT
    test: Expression
    consequent: BlockStatement
    alternate: Optional[Union[BlockStatement, "IfStatement"]] = None


@dataclass(frozen=True)
class WhileStatement(Statement):
    kind: ClassVar[NodeKind] = NodeKind.WHILE_STATEMENT
    test: Expression
    body: BlockStatement


@dataclass(frozen=True)
class ForStatement(Statement):
    """``for (init; test; update) { ... }``; every clause is optional."""
    kind: ClassVar[NodeKind] = NodeKind.FOR_STATEMENT
    init: Optional[Union[VariableDeclaration, "ExpressionStatement"]]
    test: Optional[Expression]
    update: Optional[Expression]
    body: BlockStatement


@dataclass(frozen=True)
class ReturnStatement(Statement):
    kind: ClassVar[NodeKind] = NodeKind.RETURN_STATEMENT
    value: Optional[Expression] = None


@dataclass(frozen=True)
class BreakStatement(Statement):
    kind: ClassVar[NodeKind] = NodeKind.BREAK_STATEMENT


@dataclass(frozen=True)
class ContinueStatement(Statement):
    kind: ClassVar[NodeKind] = NodeKind.CONTINUE_STATEMENT


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    kind: ClassVar[NodeKind] = NodeKind.EXPRESSION_STATEMENT
    expression: Expression


__all__ = [
    "Program",
    "BlockStatement",
    "VariableDeclaration",
    "FunctionDeclaration",
    "MiniAppPropertyDeclaration",
    "BodyDeclaration",
    "IfStatement",
    "WhileStatement",
    "ForStatement",
    "ReturnStatement",
    "BreakStatement",
    "ContinueStatement",
    "ExpressionStatement",
]
