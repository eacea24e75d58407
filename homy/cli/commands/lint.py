"""
Lint command implementation.

Output follows ``path:line:column: [rule] message``, one finding per line,
and the command exits with status 1 when anything was reported.
"""

import argparse
import sys

from rich.console import Console

from homy.linter import HomyLinter

from ..errors import handle_cli_exception
from ._source import read_source


def cmd_lint(args: argparse.Namespace) -> None:
    """Handle the 'lint' subcommand."""
    try:
        path, source = read_source(args)
    except Exception as exc:
        handle_cli_exception(exc, verbose=args.verbose)

    linter = HomyLinter(config=args.homy_config.lint)
    result = linter.lint_source(source, str(path))
    console = Console(stderr=True)
    for warning in result.warnings:
        console.print(f"[yellow]{warning}[/yellow]")

    if not result.has_issues():
        print(f'No issues found in "{path.name}".')
        return

    print(f'Issues found in "{path.name}":')
    for finding in result.findings:
        print(finding.format())
    sys.exit(1)
