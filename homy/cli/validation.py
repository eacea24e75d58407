"""
Validation for CLI arguments.

Source paths are checked here, before any file is read or handed to the
interpreter.
"""

import os
from pathlib import Path
from typing import Any, Optional

from .errors import CLIFileNotFoundError, CLIValidationError, LANGUAGE_NAME


def validate_path(value: Any, *, allow_none: bool = False, must_exist: bool = False) -> Optional[Path]:
    """
    Validate and convert value to Path.

    Raises:
        CLIValidationError: If value is not path-like
        CLIFileNotFoundError: If ``must_exist`` and the path is missing
    """
    if value is None:
        if allow_none:
            return None
        raise CLIValidationError(
            f"Usage: {LANGUAGE_NAME} <file_path>",
            hint="Provide the path of a source file"
        )

    if isinstance(value, (str, os.PathLike)):
        path = Path(value)
        if must_exist and not path.exists():
            raise CLIFileNotFoundError(
                f"File not found at {path}",
                hint="Ensure the file exists before running this command"
            )
        return path

    raise CLIValidationError(
        f"Expected path-like value, got {type(value).__name__}",
        hint="Provide a string or Path object"
    )


def validate_source_path(value: Any, extension: str = ".homy") -> Path:
    """Check that ``value`` names an existing file with the expected extension."""
    path = validate_path(value, must_exist=True)
    if path.suffix != extension:
        raise CLIValidationError(
            f"Invalid file extension. Expected {extension}",
            hint=f"Rename the file to end with {extension}",
            context={"path": str(path), "extension": path.suffix},
        )
    if not path.is_file():
        raise CLIValidationError(f"Not a file: {path}")
    return path
