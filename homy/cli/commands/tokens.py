"""Tokens command: show the token stream of a source file."""

import argparse

from rich.console import Console
from rich.table import Table

from homy.lexer import tokenize

from ..errors import handle_cli_exception
from ._source import read_source


def cmd_tokens(args: argparse.Namespace) -> None:
    try:
        path, source = read_source(args)
        tokens = tokenize(source, str(path))
    except Exception as exc:
        handle_cli_exception(exc, verbose=args.verbose)

    table = Table(title=f"{path.name} ({len(tokens)} tokens)")
    table.add_column("Position", justify="right", style="cyan")
    table.add_column("Type", style="bold blue")
    table.add_column("Value", style="green")
    for token in tokens:
        table.add_row(f"{token.line}:{token.column}", token.type.name, token.value)
    Console().print(table)
