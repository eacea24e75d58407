"""
Error handling for the homy CLI.

CLI-level failures (bad arguments, missing files) are raised as
:class:`CLIError` subclasses. Interpreter failures arrive as
:class:`~homy.errors.HomyError`. Both are turned into a message on stderr
and a nonzero exit status by :func:`handle_cli_exception`.
"""

import os
import sys
import traceback
from typing import Any, Dict, NoReturn, Optional

from homy.errors import HomyError

LANGUAGE_NAME = "homy"

# Maximum length for traceback output in CLI
_CLI_TRACE_LIMIT = 4000


class CLIError(Exception):
    """
    Base exception for all CLI operations.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code
        hint: Optional suggestion for resolving the error
        context: Additional metadata about the error
    """

    def __init__(
        self,
        message: str,
        *,
        code: str,
        hint: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.hint = hint
        self.context = context or {}

    def __str__(self) -> str:
        return self.message


class CLIValidationError(CLIError):
    """Invalid command arguments or options."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('code', 'CLI_VALIDATION_ERROR')
        super().__init__(message, **kwargs)


class CLIFileNotFoundError(CLIError):
    """Source file does not exist."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('code', 'CLI_FILE_NOT_FOUND')
        super().__init__(message, **kwargs)


def format_cli_error(exc: BaseException, *, verbose: bool = False, include_traceback: bool = False) -> str:
    """
    Format exception for CLI display.

    Examples:
        >>> print(format_cli_error(CLIValidationError("Invalid file extension", hint="Use .homy")))
        Error: Invalid file extension
        Hint: Use .homy
    """
    lines = []

    if isinstance(exc, HomyError):
        lines.append(f"Runtime Error in {LANGUAGE_NAME} program:\n{exc}")
    elif isinstance(exc, CLIError):
        lines.append(f"Error: {exc.message}")
        if exc.hint:
            lines.append(f"Hint: {exc.hint}")
        if verbose and exc.context:
            lines.append("\nContext:")
            for key, value in exc.context.items():
                lines.append(f"  {key}: {value}")
    else:
        lines.append(f"Error: {exc.__class__.__name__}: {exc}")

    if include_traceback:
        lines.append("\nTraceback:")
        lines.append(format_traceback_excerpt())

    return "\n".join(lines)


def format_traceback_excerpt() -> str:
    """Current exception traceback, truncated to the CLI trace limit."""
    trace = traceback.format_exc().strip()
    if len(trace) <= _CLI_TRACE_LIMIT:
        return trace
    return f"{trace[:_CLI_TRACE_LIMIT - 3]}..."


def _env_flag(name: str) -> bool:
    val = os.getenv(name)
    if val is None:
        return False
    return val.strip().lower() in {"1", "true", "yes", "on"}


def cli_verbose_enabled(verbose_flag: bool = False) -> bool:
    """Explicit flag, or HOMY_VERBOSE / HOMY_DEBUG in the environment."""
    return verbose_flag or _env_flag("HOMY_VERBOSE") or _env_flag("HOMY_DEBUG")


def handle_cli_exception(exc: BaseException, *, verbose: bool = False, exit_code: int = 1) -> NoReturn:
    """
    Print ``exc`` on stderr and exit with ``exit_code``.

    Note:
        This function calls sys.exit() and does not return.
    """
    verbose_effective = cli_verbose_enabled(verbose)
    error_message = format_cli_error(
        exc,
        verbose=verbose_effective,
        include_traceback=verbose_effective,
    )
    print(error_message, file=sys.stderr)
    sys.exit(exit_code)
