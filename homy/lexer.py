"""Lexical analyzer (tokenizer) for the homy language.

Converts source text into a list of tokens for parsing. Comments and
whitespace are dropped; the list always ends with exactly one EOF token.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .errors import (
    UnexpectedCharacterError,
    UnterminatedCommentError,
    UnterminatedStringError,
)

logger = logging.getLogger(__name__)


class TokenType(Enum):
    """Token types for the homy language."""

    EOF = "EOF"

    # Literals
    IDENTIFIER = "IDENTIFIER"
    NUMBER = "NUMBER"
    STRING = "STRING"
    BOOLEAN = "BOOLEAN"
    NULL = "NULL"

    # Keywords - application properties
    NAME_APP_MINI = "name_app_mini"
    WEB_PACKAGE_MINI = "web_package_mini"
    WEB_MINI_VERSION = "web_mini_version"
    MINI_VERSION = "mini_version"
    MINI_APP_ICON = "mini_app_icon"

    # Keywords - body structure
    BODY = "body"
    STYLE = "style"
    CALL = "Call"

    # Keywords - general purpose
    FUNC = "func"
    RETURN = "return"
    IF = "if"
    ELSE = "else"
    FOR = "for"
    WHILE = "while"
    BREAK = "break"
    CONTINUE = "continue"
    LET = "let"
    CONST = "const"

    # Operators
    ASSIGN = "="
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    PERCENT = "%"
    EQ = "=="
    NE = "!="
    LT = "<"
    GT = ">"
    LE = "<="
    GE = ">="
    AND = "&&"
    OR = "||"
    NOT = "!"

    # Punctuation
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"
    LBRACKET = "["
    RBRACKET = "]"
    COMMA = ","
    SEMICOLON = ";"
    COLON = ":"
    DOT = "."
    AT = "@"

    def describe(self) -> str:
        """Human readable name used in error messages."""
        if self.name in _LITERAL_NAMES:
            return self.name.lower()
        if self in KEYWORDS.values():
            return f"keyword '{self.value}'"
        return f"'{self.value}'"


_LITERAL_NAMES = frozenset({"EOF", "IDENTIFIER", "NUMBER", "STRING", "BOOLEAN", "NULL"})


@dataclass(frozen=True)
class Token:
    """A single token with position information."""

    type: TokenType
    value: str
    line: int
    column: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"

    def describe(self) -> str:
        """Describe this token for the ``found`` field of syntax errors."""
        if self.type == TokenType.EOF:
            return "end of input"
        if self.type == TokenType.IDENTIFIER:
            return f"identifier '{self.value}'"
        if self.type == TokenType.NUMBER:
            return f"number {self.value}"
        if self.type == TokenType.STRING:
            return f'string "{self.value}"'
        if self.type in (TokenType.BOOLEAN, TokenType.NULL):
            return self.value
        return self.type.describe()


# Keyword mapping
KEYWORDS = {
    "name_app_mini": TokenType.NAME_APP_MINI,
    "web_package_mini": TokenType.WEB_PACKAGE_MINI,
    "web_mini_version": TokenType.WEB_MINI_VERSION,
    "mini_version": TokenType.MINI_VERSION,
    "mini_app_icon": TokenType.MINI_APP_ICON,

    "body": TokenType.BODY,
    "style": TokenType.STYLE,
    "Call": TokenType.CALL,

    "func": TokenType.FUNC,
    "return": TokenType.RETURN,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "for": TokenType.FOR,
    "while": TokenType.WHILE,
    "break": TokenType.BREAK,
    "continue": TokenType.CONTINUE,
    "let": TokenType.LET,
    "const": TokenType.CONST,

    "true": TokenType.BOOLEAN,
    "false": TokenType.BOOLEAN,
    "null": TokenType.NULL,
}


PROPERTY_KEYWORDS = frozenset({
    TokenType.NAME_APP_MINI,
    TokenType.WEB_PACKAGE_MINI,
    TokenType.WEB_MINI_VERSION,
    TokenType.MINI_VERSION,
    TokenType.MINI_APP_ICON,
})


# Two-character operators are matched before their one-character prefixes.
TWO_CHAR_OPERATORS = {
    "==": TokenType.EQ,
    "!=": TokenType.NE,
    "<=": TokenType.LE,
    ">=": TokenType.GE,
    "&&": TokenType.AND,
    "||": TokenType.OR,
}


SINGLE_CHAR_TOKENS = {
    "=": TokenType.ASSIGN,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "%": TokenType.PERCENT,
    "<": TokenType.LT,
    ">": TokenType.GT,
    "!": TokenType.NOT,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    ":": TokenType.COLON,
    ".": TokenType.DOT,
    "@": TokenType.AT,
}


_WHITESPACE = frozenset(" \t\r\n")


def _is_digit(char: Optional[str]) -> bool:
    return char is not None and "0" <= char <= "9"


def _is_identifier_start(char: Optional[str]) -> bool:
    return char is not None and (("a" <= char <= "z") or ("A" <= char <= "Z") or char == "_")


def _is_identifier_part(char: Optional[str]) -> bool:
    return _is_identifier_start(char) or _is_digit(char) or char == "-"


class Lexer:
    """Tokenizer for homy source code."""

    def __init__(self, source: str, path: str = ""):
        self.source = source
        self.path = path
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []

    def peek(self, offset: int = 0) -> Optional[str]:
        """Peek at character without consuming."""
        pos = self.pos + offset
        if pos < len(self.source):
            return self.source[pos]
        return None

    def advance(self) -> Optional[str]:
        """Consume and return current character."""
        if self.pos >= len(self.source):
            return None

        char = self.source[self.pos]
        self.pos += 1

        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        return char

    def add_token(self, token_type: TokenType, value: str, line: int, column: int) -> None:
        self.tokens.append(Token(type=token_type, value=value, line=line, column=column))

    def skip_whitespace(self) -> None:
        while self.peek() is not None and self.peek() in _WHITESPACE:
            self.advance()

    def skip_comment(self) -> bool:
        """Skip a ``//`` or ``/* */`` comment. Returns False if none starts here."""
        if self.peek() != "/" or self.peek(1) not in ("/", "*"):
            return False

        line, column = self.line, self.column
        self.advance()
        if self.advance() == "/":
            while self.peek() is not None and self.peek() != "\n":
                self.advance()
            return True

        while self.peek() is not None:
            if self.peek() == "*" and self.peek(1) == "/":
                self.advance()
                self.advance()
                return True
            self.advance()

        raise UnterminatedCommentError(
            message="Unterminated multi-line comment",
            path=self.path,
            line=line,
            column=column,
        )

    def read_string(self) -> None:
        """Read a double-quoted string literal. Content is taken verbatim."""
        line, column = self.line, self.column
        self.advance()  # opening quote
        chars = []

        while self.peek() is not None and self.peek() != '"':
            chars.append(self.advance())

        if self.peek() is None:
            raise UnterminatedStringError(
                message="Unterminated string literal",
                path=self.path,
                line=line,
                column=column,
            )

        self.advance()  # closing quote
        self.add_token(TokenType.STRING, "".join(chars), line, column)

    def read_number(self) -> None:
        line, column = self.line, self.column
        chars = []

        while _is_digit(self.peek()):
            chars.append(self.advance())

        if self.peek() == "." and _is_digit(self.peek(1)):
            chars.append(self.advance())
            while _is_digit(self.peek()):
                chars.append(self.advance())

        self.add_token(TokenType.NUMBER, "".join(chars), line, column)

    def read_identifier(self) -> None:
        """Read an identifier or keyword. Hyphens are allowed after the first character."""
        line, column = self.line, self.column
        chars = []
        while _is_identifier_part(self.peek()):
            chars.append(self.advance())

        value = "".join(chars)
        self.add_token(KEYWORDS.get(value, TokenType.IDENTIFIER), value, line, column)

    def read_operator(self) -> None:
        line, column = self.line, self.column
        char = self.peek()

        two_char = char + (self.peek(1) or "")
        if two_char in TWO_CHAR_OPERATORS:
            self.advance()
            self.advance()
            self.add_token(TWO_CHAR_OPERATORS[two_char], two_char, line, column)
            return

        if char in SINGLE_CHAR_TOKENS:
            self.advance()
            self.add_token(SINGLE_CHAR_TOKENS[char], char, line, column)
            return

        raise UnexpectedCharacterError(
            message=f"Unexpected character {char!r}",
            path=self.path,
            line=line,
            column=column,
            character=char,
        )

    def tokenize(self) -> List[Token]:
        """Tokenize the entire source."""
        while True:
            self.skip_whitespace()
            if self.peek() is None:
                break

            if self.skip_comment():
                continue

            char = self.peek()
            if char == '"':
                self.read_string()
            elif _is_digit(char):
                self.read_number()
            elif _is_identifier_start(char):
                self.read_identifier()
            else:
                self.read_operator()

        self.add_token(TokenType.EOF, "", self.line, self.column)
        logger.debug("Tokenized %s into %d tokens", self.path or "<source>", len(self.tokens))
        return self.tokens


def tokenize(source: str, path: str = "") -> List[Token]:
    """Tokenize homy source code."""
    lexer = Lexer(source, path)
    return lexer.tokenize()


__all__ = ["Token", "TokenType", "Lexer", "tokenize", "KEYWORDS", "PROPERTY_KEYWORDS"]
