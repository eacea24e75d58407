"""Recursive descent parser for the homy language.

The parser consumes the token list produced by :mod:`homy.lexer` in a
single pass and builds a :class:`~homy.ast.Program`. It is the only
component that knows the grammar and the operator precedence.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from homy.ast import Program
from homy.errors import HomySyntaxError, UnexpectedTokenError
from homy.lexer import Token, TokenType

from .expressions import ExpressionParsingMixin
from .statements import StatementParsingMixin

logger = logging.getLogger(__name__)


class HomyParser(StatementParsingMixin, ExpressionParsingMixin):
    """
    Recursive descent parser for homy.

    Grammar (informal)::

        program      := statement*
        statement    := propertyDecl | bodyDecl | funcDecl | varDecl | ifStmt
                      | whileStmt | forStmt | block | returnStmt | breakStmt
                      | continueStmt | exprStmt
        propertyDecl := propertyKeyword "(" arguments? ")" ";"
        bodyDecl     := "body" "@" "(" "style" ":" (STRING | IDENTIFIER) ")"
                        statement* "/" "body" ";"?
    """

    def __init__(self, tokens: Sequence[Token], *, path: str = ""):
        if not tokens or tokens[-1].type != TokenType.EOF:
            raise ValueError("token sequence must end with an EOF token")
        self.tokens = list(tokens)
        self.path = path
        self.pos = 0

    # ====================================================================
    # Token Management
    # ====================================================================

    def peek(self, offset: int = 0) -> Token:
        """Peek at token without consuming. Never runs past the EOF token."""
        pos = min(self.pos + offset, len(self.tokens) - 1)
        return self.tokens[pos]

    def current(self) -> Token:
        return self.peek(0)

    def previous(self) -> Optional[Token]:
        if self.pos == 0:
            return None
        return self.tokens[self.pos - 1]

    def advance(self) -> Token:
        """Consume and return current token."""
        token = self.current()
        if token.type != TokenType.EOF:
            self.pos += 1
        return token

    def match(self, *types: TokenType) -> bool:
        return self.current().type in types

    def consume_if(self, *types: TokenType) -> Optional[Token]:
        """Consume token if it matches any of the given types."""
        if self.match(*types):
            return self.advance()
        return None

    def expect(self, *types: TokenType) -> Token:
        """Expect one of the given token types and consume it."""
        token = self.current()
        if token.type not in types:
            raise UnexpectedTokenError(
                message="Unexpected token",
                path=self.path,
                line=token.line,
                column=token.column,
                expected=[t.describe() for t in types],
                found=token.describe(),
                suggestion=self._suggest_token_fix(token, types),
            )
        return self.advance()

    def error(self, message: str, token: Optional[Token] = None, suggestion: Optional[str] = None) -> HomySyntaxError:
        """Create a syntax error at the given (or current) token."""
        token = token or self.current()
        return HomySyntaxError(
            message=message,
            path=self.path,
            line=token.line,
            column=token.column,
            found=token.describe(),
            suggestion=suggestion,
        )

    def _suggest_token_fix(self, token: Token, expected: tuple[TokenType, ...]) -> Optional[str]:
        previous = self.previous()
        if TokenType.SEMICOLON in expected and previous is not None and previous.line < token.line:
            return f"Add ';' at the end of line {previous.line}"

        if TokenType.RBRACE in expected and token.type == TokenType.EOF:
            return "Close the block with '}'"

        if TokenType.LPAREN in expected and token.type == TokenType.SEMICOLON and previous is not None:
            return f"Did you mean {previous.value}()?"

        return None

    # ====================================================================
    # Entry point
    # ====================================================================

    def parse(self) -> Program:
        """Parse the whole token sequence into a Program."""
        first = self.current()
        body: List = []
        try:
            while not self.match(TokenType.EOF):
                body.append(self.parse_statement())
        except RecursionError:
            raise self.error(
                "Expression nested too deeply",
                suggestion="Split the expression into smaller let bindings",
            ) from None

        logger.debug("Parsed %d top-level statements from %s", len(body), self.path or "<source>")
        return Program(body=tuple(body), line=first.line, column=first.column)


__all__ = ["HomyParser"]
