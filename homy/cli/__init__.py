"""
homy CLI entry point.

Subcommands::

    homy run FILE [--json]     execute a program, print its app description
    homy lint FILE             run the textual linter
    homy tokens FILE           show the token stream
    homy format FILE [--write] print the canonical source form

``homy FILE`` is shorthand for ``homy run FILE``.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from homy import __version__
from homy.config import HomyConfig, LOG_LEVELS, load_config

from .commands import cmd_format, cmd_lint, cmd_run, cmd_tokens
from .errors import handle_cli_exception

COMMANDS = {"run", "lint", "tokens", "format"}


def _configure_logging(log_level: Optional[str], config: HomyConfig) -> None:
    """Configure the ``homy`` logger from the CLI flag, environment or config."""
    # HOMY_LOG_LEVEL is already folded into config.log_level
    level_name = (log_level or config.log_level).lower()

    level_map = {
        'debug': logging.DEBUG,
        'info': logging.INFO,
        'warn': logging.WARNING,
        'warning': logging.WARNING,
        'error': logging.ERROR,
        'critical': logging.CRITICAL,
    }
    numeric_level = level_map.get(level_name, logging.INFO)

    homy_logger = logging.getLogger("homy")
    homy_logger.setLevel(numeric_level)

    if not homy_logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        handler.setFormatter(formatter)
        homy_logger.addHandler(handler)
        # Prevent propagation to root logger to avoid duplicate messages
        homy_logger.propagate = False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="homy language interpreter and tools",
        prog="homy",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        '--config',
        default=None,
        help='Path to a homy.toml configuration file'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Print full tracebacks and detailed CLI errors (or set HOMY_VERBOSE=1)'
    )
    parser.add_argument(
        '--log-level',
        choices=list(LOG_LEVELS) + ['warn'],
        default=None,
        help='Set logging level (or set HOMY_LOG_LEVEL)'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    run_parser = subparsers.add_parser('run', help='Execute a homy program')
    run_parser.add_argument('file', help='Path to the .homy source file')
    run_parser.add_argument(
        '--json', action='store_true', help='Print the application description as JSON'
    )
    run_parser.set_defaults(func=cmd_run)

    lint_parser = subparsers.add_parser('lint', help='Check source text against the style rules')
    lint_parser.add_argument('file', help='Path to the .homy source file')
    lint_parser.set_defaults(func=cmd_lint)

    tokens_parser = subparsers.add_parser('tokens', help='Print the token stream')
    tokens_parser.add_argument('file', help='Path to the .homy source file')
    tokens_parser.set_defaults(func=cmd_tokens)

    format_parser = subparsers.add_parser('format', help='Print the canonical source form')
    format_parser.add_argument('file', help='Path to the .homy source file')
    format_parser.add_argument(
        '--write', action='store_true', help='Rewrite the file in place'
    )
    format_parser.set_defaults(func=cmd_format)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main CLI entrypoint.

    Args:
        argv: Command-line arguments (None uses sys.argv[1:])
    """
    if argv is None:
        argv = sys.argv[1:]
    argv = list(argv)

    # Bare source file: treat as 'run'
    if argv and not argv[0].startswith('-') and argv[0] not in COMMANDS:
        argv = ['run'] + argv

    parser = build_parser()
    args = parser.parse_args(argv)

    if not getattr(args, 'func', None):
        parser.print_help(sys.stderr)
        sys.exit(1)

    try:
        config_path = Path(args.config) if args.config else None
        args.homy_config = load_config(Path.cwd(), config_path)
    except Exception as exc:
        handle_cli_exception(exc, verbose=args.verbose)

    _configure_logging(args.log_level, args.homy_config)
    args.func(args)


__all__ = ["main", "build_parser"]
