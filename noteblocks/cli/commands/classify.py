"""Classify command: show how URL attachments would render."""

from typing import List

import typer
from rich.console import Console
from rich.table import Table

from noteblocks.rendering.classifier import classify_url

app = typer.Typer(help="Classify URLs into render variants")
console = Console()


@app.callback(invoke_without_command=True)
def main(
    urls: List[str] = typer.Argument(..., help="One or more URLs"),
):
    """Print the render variant for each URL."""
    table = Table("URL", "Variant", "Embed ID", "Host")
    for url in urls:
        variant = classify_url(url)
        table.add_row(url, variant.kind.value, variant.embed_id or "", variant.hostname or "")
    console.print(table)
