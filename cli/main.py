#!/usr/bin/env python3
"""
optimist CLI - speculative transitions for pure reducers

Main entrypoint for the optimist command-line tool.
"""

import typer
from rich.console import Console
from rich.table import Table

from optimist.logging_config import setup_logging

from cli.commands import log, replay

app = typer.Typer(
    name="optimist",
    help="Run action scripts through the optimist reconciler",
    add_completion=False,
)

console = Console()

app.add_typer(log.app, name="log", help="Transaction log operations")

app.command(name="replay")(replay.replay_command)


@app.callback()
def _configure() -> None:
    setup_logging()


@app.command()
def version():
    """Show version information."""
    from cli import __version__
    from optimist import __version__ as engine_version

    table = Table(show_header=False, box=None)
    table.add_row("[bold]optimist CLI[/bold]", f"v{__version__}")
    table.add_row("Reconciler", f"v{engine_version}")

    console.print(table)


def main():
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()
