#!/usr/bin/env python
"""Command line interface for noteblocks."""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from noteblocks.cli.commands import attach, classify, render, segments, upgrade

app = typer.Typer(help="Inspect, render and edit block-structured notes")
console = Console()

# Add commands
app.add_typer(segments.app, name="segments")
app.add_typer(render.app, name="render")
app.add_typer(upgrade.app, name="upgrade")
app.add_typer(classify.app, name="classify")
app.add_typer(attach.app, name="attach")


@app.callback()
def callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logs"),
):
    """Work with note JSON snapshots from the command line."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=Console(stderr=True),
                rich_tracebacks=True,
                show_time=True,
                log_time_format="%H:%M:%S",
            )
        ],
        force=True,
    )


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
