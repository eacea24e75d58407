"""homy parser package.

Public API:
    parse(tokens, path) -> Program
    parse_source(source, path) -> Program
    HomyParser - the recursive descent parser class
"""

from typing import Sequence

from homy.ast import Program
from homy.lexer import Token, tokenize

from .parse import HomyParser


def parse(tokens: Sequence[Token], path: str = "") -> Program:
    """
    Parse a token sequence into a Program AST.

    Args:
        tokens: Tokens produced by :func:`homy.lexer.tokenize`, ending with EOF
        path: Optional file path for error reporting

    Returns:
        Program AST node

    Raises:
        HomySyntaxError: If the tokens do not form a valid program
    """
    return HomyParser(tokens, path=path).parse()


def parse_source(source: str, path: str = "") -> Program:
    """Tokenize and parse homy source text.

    Lexical errors are raised before the parser sees any token.
    """
    return parse(tokenize(source, path), path=path)


__all__ = ["parse", "parse_source", "HomyParser"]
