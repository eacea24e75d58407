"""
Run command implementation.

Executes a homy program and prints the application description it builds.
"""

import argparse

from rich.console import Console
from rich.table import Table

import homy
from homy.runtime import AppDescription

from ..errors import handle_cli_exception
from ._source import read_source


def cmd_run(args: argparse.Namespace) -> None:
    """
    Handle the 'run' subcommand.

    Prints a table of the application description, or its JSON form with
    ``--json``. Interpreter errors exit with status 1.
    """
    try:
        path, source = read_source(args)
        app = homy.run(source, path=str(path), config=args.homy_config.runtime)
    except Exception as exc:
        handle_cli_exception(exc, verbose=args.verbose)

    if args.json:
        print(app.to_json())
        return
    Console().print(render_app(app, path.name))


def render_app(app: AppDescription, title: str) -> Table:
    table = Table(title=title)
    table.add_column("Property", style="bold blue")
    table.add_column("Value", style="green")

    data = app.to_dict()
    for key in ("name", "isWebPackage", "webVersion", "miniVersion", "iconPath"):
        value = data[key]
        table.add_row(key, "-" if value is None else str(value))

    body = data["body"]
    if body is None:
        table.add_row("body", "-")
    else:
        table.add_row("body.styleReference", str(body["styleReference"]))
        for index, item in enumerate(body["content"]):
            table.add_row(f"body.content[{index}]", str(item))
    return table
