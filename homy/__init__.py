"""homy: interpreter for the homy mini-app description language.

Typical use::

    import homy

    app = homy.run('name_app_mini("Demo");')
    print(app.to_json())
"""

from __future__ import annotations

from typing import Optional, TextIO

from .config import HomyConfig, RuntimeConfig, load_config
from .errors import HomyError
from .lexer import tokenize
from .parser import parse
from .runtime import AppDescription, Evaluator

__version__ = "0.1.0"


def run(
    source: str,
    path: str = "",
    config: Optional[RuntimeConfig] = None,
    output: Optional[TextIO] = None,
) -> AppDescription:
    """Lex, parse and evaluate ``source``.

    Each stage only starts once the previous one succeeded, so a lexical
    error means the parser never runs and a syntax error means nothing is
    evaluated. Performs no file I/O.
    """
    tokens = tokenize(source, path)
    program = parse(tokens, path=path)
    return Evaluator(config, path=path, output=output).run(program)


__all__ = [
    "__version__",
    "run",
    "AppDescription",
    "HomyConfig",
    "HomyError",
    "RuntimeConfig",
    "load_config",
]
