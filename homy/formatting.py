"""Render homy ASTs back to source text.

The output is canonical rather than faithful: comments and the original
layout are gone, and every compound sub-expression is wrapped in
parentheses. Re-lexing and re-parsing the output yields an AST equal to the
input.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

from homy.ast import (
    AssignmentExpression,
    BinaryExpression,
    BlockStatement,
    BodyDeclaration,
    CallExpression,
    ContentCall,
    Expression,
    ExpressionStatement,
    ForStatement,
    FunctionDeclaration,
    IfStatement,
    LogicalExpression,
    MiniAppPropertyDeclaration,
    NodeKind,
    NumberLiteral,
    Program,
    ReturnStatement,
    Statement,
    UnaryExpression,
    VariableDeclaration,
    WhileStatement,
)

_COMPOUND_KINDS = frozenset({
    NodeKind.BINARY_EXPRESSION,
    NodeKind.LOGICAL_EXPRESSION,
    NodeKind.UNARY_EXPRESSION,
    NodeKind.ASSIGNMENT_EXPRESSION,
})


class HomyFormatter:
    """Pretty-printer for homy programs."""

    def __init__(self, indent: str = "    "):
        self.indent = indent
        self.statement_formatters: Dict[NodeKind, Callable[[Statement, int], List[str]]] = {
            NodeKind.BLOCK_STATEMENT: self._format_block_statement,
            NodeKind.VARIABLE_DECLARATION: self._format_variable,
            NodeKind.FUNCTION_DECLARATION: self._format_function,
            NodeKind.PROPERTY_DECLARATION: self._format_property,
            NodeKind.BODY_DECLARATION: self._format_body,
            NodeKind.IF_STATEMENT: self._format_if,
            NodeKind.WHILE_STATEMENT: self._format_while,
            NodeKind.FOR_STATEMENT: self._format_for,
            NodeKind.RETURN_STATEMENT: self._format_return,
            NodeKind.BREAK_STATEMENT: lambda node, depth: [self._pad(depth) + "break;"],
            NodeKind.CONTINUE_STATEMENT: lambda node, depth: [self._pad(depth) + "continue;"],
            NodeKind.EXPRESSION_STATEMENT: self._format_expression_statement,
        }
        self.expression_formatters: Dict[NodeKind, Callable[[Expression], str]] = {
            NodeKind.IDENTIFIER: lambda node: node.name,
            NodeKind.NUMBER_LITERAL: self._format_number,
            NodeKind.STRING_LITERAL: lambda node: f'"{node.value}"',
            NodeKind.BOOLEAN_LITERAL: lambda node: "true" if node.value else "false",
            NodeKind.NULL_LITERAL: lambda node: "null",
            NodeKind.BINARY_EXPRESSION: self._format_binary,
            NodeKind.LOGICAL_EXPRESSION: self._format_binary,
            NodeKind.UNARY_EXPRESSION: self._format_unary,
            NodeKind.ASSIGNMENT_EXPRESSION: self._format_assignment,
            NodeKind.CALL_EXPRESSION: self._format_call,
            NodeKind.CONTENT_CALL: self._format_content_call,
        }

    def format_program(self, program: Program) -> str:
        lines: List[str] = []
        for statement in program.body:
            lines.extend(self.format_statement(statement, 0))
        return "\n".join(lines) + "\n" if lines else ""

    def format_statement(self, node: Statement, depth: int = 0) -> List[str]:
        return self.statement_formatters[node.kind](node, depth)

    def format_expression(self, node: Expression) -> str:
        return self.expression_formatters[node.kind](node)

    def _pad(self, depth: int) -> str:
        return self.indent * depth

    def _operand(self, node: Expression) -> str:
        text = self.format_expression(node)
        if node.kind in _COMPOUND_KINDS:
            return f"({text})"
        return text

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _block(self, block: BlockStatement, depth: int, header: str) -> List[str]:
        """Lines for ``header {`` ... ``}`` with the header at ``depth``."""
        lines = [f"{self._pad(depth)}{header}{{"]
        for statement in block.body:
            lines.extend(self.format_statement(statement, depth + 1))
        lines.append(self._pad(depth) + "}")
        return lines

    def _format_block_statement(self, node: BlockStatement, depth: int) -> List[str]:
        return self._block(node, depth, "")

    def _format_variable(self, node: VariableDeclaration, depth: int) -> List[str]:
        return [self._pad(depth) + self._variable_text(node)]

    def _variable_text(self, node: VariableDeclaration) -> str:
        if node.initializer is None:
            return f"{node.binding_kind.value} {node.name};"
        return f"{node.binding_kind.value} {node.name} = {self.format_expression(node.initializer)};"

    def _format_function(self, node: FunctionDeclaration, depth: int) -> List[str]:
        header = f"func {node.name}({', '.join(node.parameters)}) "
        return self._block(node.body, depth, header)

    def _format_property(self, node: MiniAppPropertyDeclaration, depth: int) -> List[str]:
        argument = "" if node.argument is None else self.format_expression(node.argument)
        return [f"{self._pad(depth)}{node.property_kind.keyword}({argument});"]

    def _format_body(self, node: BodyDeclaration, depth: int) -> List[str]:
        lines = [f"{self._pad(depth)}body@ (style: {self.format_expression(node.style_reference)})"]
        for statement in node.content:
            lines.extend(self.format_statement(statement, depth + 1))
        lines.append(self._pad(depth) + "/body;")
        return lines

    def _format_if(self, node: IfStatement, depth: int, prefix: str = "") -> List[str]:
        lines = self._block(node.consequent, depth, f"{prefix}if ({self.format_expression(node.test)}) ")
        alternate = node.alternate
        if alternate is None:
            return lines

        # the closing brace is re-emitted in front of "else"
        lines.pop()
        if isinstance(alternate, IfStatement):
            return lines + self._format_if(alternate, depth, prefix="} else ")
        return lines + self._block(alternate, depth, "} else ")

    def _format_while(self, node: WhileStatement, depth: int) -> List[str]:
        return self._block(node.body, depth, f"while ({self.format_expression(node.test)}) ")

    def _format_for(self, node: ForStatement, depth: int) -> List[str]:
        if node.init is None:
            init = ";"
        elif isinstance(node.init, VariableDeclaration):
            init = self._variable_text(node.init)
        else:
            init = f"{self.format_expression(node.init.expression)};"
        test = "" if node.test is None else " " + self.format_expression(node.test)
        update = "" if node.update is None else " " + self.format_expression(node.update)
        return self._block(node.body, depth, f"for ({init}{test};{update}) ")

    def _format_return(self, node: ReturnStatement, depth: int) -> List[str]:
        if node.value is None:
            return [self._pad(depth) + "return;"]
        return [f"{self._pad(depth)}return {self.format_expression(node.value)};"]

    def _format_expression_statement(self, node: ExpressionStatement, depth: int) -> List[str]:
        return [f"{self._pad(depth)}{self.format_expression(node.expression)};"]

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _format_number(self, node: NumberLiteral) -> str:
        if node.raw:
            return node.raw
        if isinstance(node.value, float) and node.value.is_integer():
            return f"{int(node.value)}.0"
        return repr(node.value)

    def _format_binary(self, node: BinaryExpression | LogicalExpression) -> str:
        return f"{self._operand(node.left)} {node.operator} {self._operand(node.right)}"

    def _format_unary(self, node: UnaryExpression) -> str:
        return f"{node.operator}{self._operand(node.operand)}"

    def _format_assignment(self, node: AssignmentExpression) -> str:
        return f"{self.format_expression(node.target)} = {self._operand(node.value)}"

    def _format_call(self, node: CallExpression) -> str:
        callee = self._operand(node.callee)
        return f"{callee}({self._arguments(node.arguments)})"

    def _format_content_call(self, node: ContentCall) -> str:
        return f"Call({self._arguments(node.arguments)})"

    def _arguments(self, arguments) -> str:
        return ", ".join(self.format_expression(argument) for argument in arguments)


def format_program(program: Program, indent: Optional[str] = None) -> str:
    """Render ``program`` as homy source text."""
    formatter = HomyFormatter() if indent is None else HomyFormatter(indent)
    return formatter.format_program(program)


__all__ = ["HomyFormatter", "format_program"]
