"""Statement and declaration parsing methods for HomyParser."""

from __future__ import annotations

from typing import List, Optional, Union

from homy.ast import (
    BlockStatement,
    BodyDeclaration,
    BreakStatement,
    ContinueStatement,
    DeclarationKind,
    Expression,
    ExpressionStatement,
    ForStatement,
    FunctionDeclaration,
    Identifier,
    IfStatement,
    MiniAppPropertyDeclaration,
    PropertyKind,
    ReturnStatement,
    Statement,
    StringLiteral,
    VariableDeclaration,
    WhileStatement,
)
from homy.errors import PropertyArityError, UnexpectedTokenError
from homy.lexer import PROPERTY_KEYWORDS, TokenType


class StatementParsingMixin:
    """Mixin with statement and declaration parsing methods."""

    def parse_statement(self) -> Statement:
        """
        Parse one statement. Dispatch is driven by the leading keyword.

        Grammar:
            statement := propertyDecl | bodyDecl | funcDecl | varDecl
                       | ifStmt | whileStmt | forStmt | block
                       | returnStmt | breakStmt | continueStmt | exprStmt
        """
        token = self.current()

        if token.type in PROPERTY_KEYWORDS:
            return self.parse_property_declaration()

        handlers = {
            TokenType.BODY: self.parse_body_declaration,
            TokenType.FUNC: self.parse_function_declaration,
            TokenType.LET: self.parse_variable_declaration,
            TokenType.CONST: self.parse_variable_declaration,
            TokenType.IF: self.parse_if_statement,
            TokenType.WHILE: self.parse_while_statement,
            TokenType.FOR: self.parse_for_statement,
            TokenType.RETURN: self.parse_return_statement,
            TokenType.BREAK: self.parse_break_statement,
            TokenType.CONTINUE: self.parse_continue_statement,
            TokenType.LBRACE: self.parse_block,
        }
        handler = handlers.get(token.type)
        if handler is not None:
            return handler()

        return self.parse_expression_statement()

    # ------------------------------------------------------------------
    # Domain declarations
    # ------------------------------------------------------------------

    def parse_property_declaration(self) -> MiniAppPropertyDeclaration:
        """
        Parse an application property declaration.

        Grammar:
            propertyDecl := propertyKeyword "(" arguments? ")" ";"
        """
        keyword = self.advance()
        property_kind = PropertyKind.from_keyword(keyword.value)
        arguments = self.parse_arguments()

        if not property_kind.accepts(len(arguments)):
            raise PropertyArityError(
                message=(
                    f"{keyword.value}() takes {property_kind.describe_arity()}, "
                    f"got {len(arguments)}"
                ),
                path=self.path,
                line=keyword.line,
                column=keyword.column,
                expected=[property_kind.describe_arity()],
                found=f"{len(arguments)} argument(s)",
                keyword=keyword.value,
            )

        self.expect(TokenType.SEMICOLON)
        return MiniAppPropertyDeclaration(
            property_kind=property_kind,
            argument=arguments[0] if arguments else None,
            line=keyword.line,
            column=keyword.column,
        )

    def parse_body_declaration(self) -> BodyDeclaration:
        """
        Parse a body section.

        Grammar:
            bodyDecl := "body" "@" "(" "style" ":" (STRING | IDENTIFIER) ")"
                        statement* "/" "body" ";"?
        """
        keyword = self.expect(TokenType.BODY)
        self.expect(TokenType.AT)
        self.expect(TokenType.LPAREN)
        self.expect(TokenType.STYLE)
        self.expect(TokenType.COLON)

        style_token = self.expect(TokenType.STRING, TokenType.IDENTIFIER)
        style_reference: Expression
        if style_token.type == TokenType.STRING:
            style_reference = StringLiteral(
                value=style_token.value, line=style_token.line, column=style_token.column
            )
        else:
            style_reference = Identifier(
                name=style_token.value, line=style_token.line, column=style_token.column
            )
        self.expect(TokenType.RPAREN)

        content: List[Statement] = []
        while not self._at_body_terminator():
            token = self.current()
            if token.type == TokenType.EOF:
                raise UnexpectedTokenError(
                    message=f"Body section opened at line {keyword.line} is never closed",
                    path=self.path,
                    line=token.line,
                    column=token.column,
                    expected=["'/body'"],
                    found="end of input",
                    suggestion="Close the section with /body",
                )
            if token.type == TokenType.BODY:
                raise self.error("Body sections cannot be nested", token)
            content.append(self.parse_statement())

        self.expect(TokenType.SLASH)
        self.expect(TokenType.BODY)
        self.consume_if(TokenType.SEMICOLON)

        return BodyDeclaration(
            style_reference=style_reference,
            content=tuple(content),
            line=keyword.line,
            column=keyword.column,
        )

    def _at_body_terminator(self) -> bool:
        return self.match(TokenType.SLASH) and self.peek(1).type == TokenType.BODY

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------

    def parse_function_declaration(self) -> FunctionDeclaration:
        """
        Grammar:
            funcDecl := "func" IDENTIFIER "(" (IDENTIFIER ("," IDENTIFIER)*)? ")" block
        """
        keyword = self.expect(TokenType.FUNC)
        name = self.expect(TokenType.IDENTIFIER)
        self.expect(TokenType.LPAREN)

        parameters: List[str] = []
        if not self.match(TokenType.RPAREN):
            while True:
                param = self.expect(TokenType.IDENTIFIER)
                if param.value in parameters:
                    raise self.error(
                        f"Duplicate parameter '{param.value}' in function '{name.value}'",
                        param,
                    )
                parameters.append(param.value)
                if not self.consume_if(TokenType.COMMA):
                    break
        self.expect(TokenType.RPAREN)

        body = self.parse_block()
        return FunctionDeclaration(
            name=name.value,
            parameters=tuple(parameters),
            body=body,
            line=keyword.line,
            column=keyword.column,
        )

    def parse_variable_declaration(self) -> VariableDeclaration:
        """
        Grammar:
            varDecl := ("let" | "const") IDENTIFIER ("=" expression)? ";"
        """
        keyword = self.expect(TokenType.LET, TokenType.CONST)
        binding_kind = DeclarationKind(keyword.value)
        name = self.expect(TokenType.IDENTIFIER)

        initializer: Optional[Expression] = None
        if self.consume_if(TokenType.ASSIGN):
            initializer = self.parse_expression()
        elif binding_kind is DeclarationKind.CONST:
            raise UnexpectedTokenError(
                message=f"Missing initializer in const declaration of '{name.value}'",
                path=self.path,
                line=self.current().line,
                column=self.current().column,
                expected=[TokenType.ASSIGN.describe()],
                found=self.current().describe(),
            )

        self.expect(TokenType.SEMICOLON)
        return VariableDeclaration(
            binding_kind=binding_kind,
            name=name.value,
            initializer=initializer,
            line=keyword.line,
            column=keyword.column,
        )

    # ------------------------------------------------------------------
    # Control flow
    # ------------------------------------------------------------------

    def parse_block(self) -> BlockStatement:
        """
        Grammar:
            block := "{" statement* "}"
        """
        brace = self.expect(TokenType.LBRACE)
        body: List[Statement] = []
        while not self.match(TokenType.RBRACE, TokenType.EOF):
            body.append(self.parse_statement())
        self.expect(TokenType.RBRACE)
        return BlockStatement(body=tuple(body), line=brace.line, column=brace.column)

    def parse_if_statement(self) -> IfStatement:
        """
        Grammar:
            ifStmt := "if" "(" expression ")" block ("else" (block | ifStmt))?
        """
        keyword = self.expect(TokenType.IF)
        test = self._parse_parenthesized_test()
        consequent = self.parse_block()

        alternate: Optional[Union[BlockStatement, IfStatement]] = None
        if self.consume_if(TokenType.ELSE):
            if self.match(TokenType.IF):
                alternate = self.parse_if_statement()
            else:
                alternate = self.parse_block()

        return IfStatement(
            test=test,
            consequent=consequent,
            alternate=alternate,
            line=keyword.line,
            column=keyword.column,
        )

    def parse_while_statement(self) -> WhileStatement:
        keyword = self.expect(TokenType.WHILE)
        test = self._parse_parenthesized_test()
        body = self.parse_block()
        return WhileStatement(test=test, body=body, line=keyword.line, column=keyword.column)

    def parse_for_statement(self) -> ForStatement:
        """
        Grammar:
            forStmt := "for" "(" (varDecl | expression ";" | ";")
                       expression? ";" expression? ")" block
        """
        keyword = self.expect(TokenType.FOR)
        self.expect(TokenType.LPAREN)

        init: Optional[Union[VariableDeclaration, ExpressionStatement]] = None
        if self.match(TokenType.LET, TokenType.CONST):
            init = self.parse_variable_declaration()
        elif not self.consume_if(TokenType.SEMICOLON):
            init = self.parse_expression_statement()

        test = None
        if not self.match(TokenType.SEMICOLON):
            test = self.parse_expression()
        self.expect(TokenType.SEMICOLON)

        update = None
        if not self.match(TokenType.RPAREN):
            update = self.parse_expression()
        self.expect(TokenType.RPAREN)

        body = self.parse_block()
        return ForStatement(
            init=init,
            test=test,
            update=update,
            body=body,
            line=keyword.line,
            column=keyword.column,
        )

    def parse_return_statement(self) -> ReturnStatement:
        keyword = self.expect(TokenType.RETURN)
        value = None
        if not self.match(TokenType.SEMICOLON):
            value = self.parse_expression()
        self.expect(TokenType.SEMICOLON)
        return ReturnStatement(value=value, line=keyword.line, column=keyword.column)

    def parse_break_statement(self) -> BreakStatement:
        keyword = self.expect(TokenType.BREAK)
        self.expect(TokenType.SEMICOLON)
        return BreakStatement(line=keyword.line, column=keyword.column)

    def parse_continue_statement(self) -> ContinueStatement:
        keyword = self.expect(TokenType.CONTINUE)
        self.expect(TokenType.SEMICOLON)
        return ContinueStatement(line=keyword.line, column=keyword.column)

    def parse_expression_statement(self) -> ExpressionStatement:
        start = self.current()
        expression = self.parse_expression()
        self.expect(TokenType.SEMICOLON)
        return ExpressionStatement(expression=expression, line=start.line, column=start.column)

    def _parse_parenthesized_test(self) -> Expression:
        self.expect(TokenType.LPAREN)
        test = self.parse_expression()
        self.expect(TokenType.RPAREN)
        return test


__all__ = ["StatementParsingMixin"]
