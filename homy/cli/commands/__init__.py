"""
CLI command modules.

Each module implements one ``homy`` subcommand as a ``cmd_*`` function
taking the parsed :class:`argparse.Namespace`.
"""

from .format import cmd_format
from .lint import cmd_lint
from .run import cmd_run
from .tokens import cmd_tokens

__all__ = ["cmd_format", "cmd_lint", "cmd_run", "cmd_tokens"]
