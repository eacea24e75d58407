"""Shared helpers for commands that read a source file."""

import argparse
from pathlib import Path
from typing import Tuple

from homy.config import HomyConfig

from ..validation import validate_source_path


def read_source(args: argparse.Namespace) -> Tuple[Path, str]:
    """Validate ``args.file`` and return it with its text."""
    config: HomyConfig = args.homy_config
    path = validate_source_path(args.file, config.file_extension)
    return path, path.read_text(encoding="utf-8")
