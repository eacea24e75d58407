"""Expression parsing methods for HomyParser.

Binding power, lowest to highest::

    assignment (right-assoc) -> || -> && -> == != -> < > <= >=
        -> + - -> * / % -> unary ! - -> call / primary
"""

from __future__ import annotations

from typing import Callable, Dict, List, Type, Union

from homy.ast import (
    AssignmentExpression,
    BinaryExpression,
    BooleanLiteral,
    CallExpression,
    ContentCall,
    Expression,
    Identifier,
    LogicalExpression,
    NullLiteral,
    NumberLiteral,
    StringLiteral,
    UnaryExpression,
)
from homy.errors import InvalidAssignmentTargetError, UnexpectedTokenError
from homy.lexer import TokenType

_EQUALITY_OPERATORS = {TokenType.EQ: "==", TokenType.NE: "!="}
_RELATIONAL_OPERATORS = {
    TokenType.LT: "<",
    TokenType.GT: ">",
    TokenType.LE: "<=",
    TokenType.GE: ">=",
}
_ADDITIVE_OPERATORS = {TokenType.PLUS: "+", TokenType.MINUS: "-"}
_MULTIPLICATIVE_OPERATORS = {
    TokenType.STAR: "*",
    TokenType.SLASH: "/",
    TokenType.PERCENT: "%",
}


class ExpressionParsingMixin:
    """Mixin with expression parsing methods."""

    def parse_expression(self) -> Expression:
        """Parse expression with operator precedence."""
        return self.parse_assignment()

    def parse_assignment(self) -> Expression:
        """Parse assignment (right-associative)."""
        target = self.parse_logical_or()

        if self.match(TokenType.ASSIGN):
            operator = self.advance()
            value = self.parse_assignment()
            if not isinstance(target, Identifier):
                raise InvalidAssignmentTargetError(
                    message="Invalid assignment target",
                    path=self.path,
                    line=operator.line,
                    column=operator.column,
                    expected=["identifier"],
                    found=target.kind.value,
                    suggestion="Only variables can be assigned to",
                )
            return AssignmentExpression(
                target=target, value=value, line=target.line, column=target.column
            )

        return target

    def parse_logical_or(self) -> Expression:
        return self._parse_binary_level(
            {TokenType.OR: "||"}, self.parse_logical_and, LogicalExpression
        )

    def parse_logical_and(self) -> Expression:
        return self._parse_binary_level(
            {TokenType.AND: "&&"}, self.parse_equality, LogicalExpression
        )

    def parse_equality(self) -> Expression:
        """Parse equality expression (==, !=)."""
        return self._parse_binary_level(_EQUALITY_OPERATORS, self.parse_relational)

    def parse_relational(self) -> Expression:
        """Parse relational expression (<, >, <=, >=)."""
        return self._parse_binary_level(_RELATIONAL_OPERATORS, self.parse_additive)

    def parse_additive(self) -> Expression:
        """Parse additive expression (+, -)."""
        return self._parse_binary_level(_ADDITIVE_OPERATORS, self.parse_multiplicative)

    def parse_multiplicative(self) -> Expression:
        """Parse multiplicative expression (*, /, %)."""
        return self._parse_binary_level(_MULTIPLICATIVE_OPERATORS, self.parse_unary)

    def _parse_binary_level(
        self,
        operators: Dict[TokenType, str],
        operand: Callable[[], Expression],
        node_type: Type[Union[BinaryExpression, LogicalExpression]] = BinaryExpression,
    ) -> Expression:
        """Left-associative loop shared by every binary precedence tier."""
        left = operand()

        while self.match(*operators):
            op = operators[self.advance().type]
            right = operand()
            left = node_type(
                operator=op, left=left, right=right, line=left.line, column=left.column
            )

        return left

    def parse_unary(self) -> Expression:
        """Parse unary expression (!, -)."""
        if self.match(TokenType.NOT, TokenType.MINUS):
            operator = self.advance()
            operand = self.parse_unary()
            return UnaryExpression(
                operator=operator.value,
                operand=operand,
                line=operator.line,
                column=operator.column,
            )

        return self.parse_call()

    def parse_call(self) -> Expression:
        """Parse a primary expression followed by any number of call suffixes."""
        expr = self.parse_primary()

        while self.match(TokenType.LPAREN):
            arguments = self.parse_arguments()
            expr = CallExpression(
                callee=expr, arguments=tuple(arguments), line=expr.line, column=expr.column
            )

        return expr

    def parse_arguments(self) -> List[Expression]:
        """Parse a parenthesized, comma separated argument list."""
        self.expect(TokenType.LPAREN)

        args: List[Expression] = []
        if not self.match(TokenType.RPAREN):
            while True:
                args.append(self.parse_expression())
                if not self.consume_if(TokenType.COMMA):
                    break

        self.expect(TokenType.RPAREN)
        return args

    def parse_primary(self) -> Expression:
        """Parse primary expression."""
        token = self.current()
        position = {"line": token.line, "column": token.column}

        if token.type == TokenType.NUMBER:
            self.advance()
            value = float(token.value) if "." in token.value else int(token.value)
            return NumberLiteral(value=value, raw=token.value, **position)

        if token.type == TokenType.STRING:
            self.advance()
            return StringLiteral(value=token.value, **position)

        if token.type == TokenType.BOOLEAN:
            self.advance()
            return BooleanLiteral(value=token.value == "true", **position)

        if token.type == TokenType.NULL:
            self.advance()
            return NullLiteral(**position)

        if token.type == TokenType.IDENTIFIER:
            self.advance()
            return Identifier(name=token.value, **position)

        if token.type == TokenType.LPAREN:
            self.advance()
            expr = self.parse_expression()
            self.expect(TokenType.RPAREN)
            return expr

        if token.type == TokenType.CALL:
            self.advance()
            arguments = self.parse_arguments()
            return ContentCall(arguments=tuple(arguments), **position)

        raise UnexpectedTokenError(
            message="Expected expression",
            path=self.path,
            line=token.line,
            column=token.column,
            expected=["expression"],
            found=token.describe(),
        )


__all__ = ["ExpressionParsingMixin"]
