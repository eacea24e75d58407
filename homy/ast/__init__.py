"""AST dataclasses representing homy programs.

The node set is closed: every node class carries a ``kind`` from
:class:`NodeKind`, and the evaluator dispatches on that kind.
"""

from .base import DeclarationKind, Expression, Node, NodeKind, PropertyKind, Statement
from .expressions import (
    AssignmentExpression,
    BinaryExpression,
    BooleanLiteral,
    CallExpression,
    ContentCall,
    Identifier,
    LogicalExpression,
    NullLiteral,
    Number,
    NumberLiteral,
    StringLiteral,
    UnaryExpression,
)
from .statements import (
    BlockStatement,
    BodyDeclaration,
    BreakStatement,
    ContinueStatement,
    ExpressionStatement,
    ForStatement,
    FunctionDeclaration,
    IfStatement,
    MiniAppPropertyDeclaration,
    Program,
    ReturnStatement,
    VariableDeclaration,
    WhileStatement,
)

__all__ = [
    "DeclarationKind",
    "Expression",
    "Node",
    "NodeKind",
    "PropertyKind",
    "Statement",
    "AssignmentExpression",
    "BinaryExpression",
    "BooleanLiteral",
    "CallExpression",
    "ContentCall",
    "Identifier",
    "LogicalExpression",
    "NullLiteral",
    "Number",
    "NumberLiteral",
    "StringLiteral",
    "UnaryExpression",
    "BlockStatement",
    "BodyDeclaration",
    "BreakStatement",
    "ContinueStatement",
    "ExpressionStatement",
    "ForStatement",
    "FunctionDeclaration",
    "IfStatement",
    "MiniAppPropertyDeclaration",
    "Program",
    "ReturnStatement",
    "VariableDeclaration",
    "WhileStatement",
]
