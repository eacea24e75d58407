"""Format command: print the canonical form of a source file."""

import argparse

from homy.formatting import format_program
from homy.parser import parse_source

from ..errors import handle_cli_exception
from ._source import read_source


def cmd_format(args: argparse.Namespace) -> None:
    """
    Handle the 'format' subcommand.

    Prints to stdout, or rewrites the file in place with ``--write``.
    Comments are not preserved.
    """
    try:
        path, source = read_source(args)
        formatted = format_program(parse_source(source, str(path)))
    except Exception as exc:
        handle_cli_exception(exc, verbose=args.verbose)

    if args.write:
        path.write_text(formatted, encoding="utf-8")
        print(f"Formatted {path}")
    else:
        print(formatted, end="")
