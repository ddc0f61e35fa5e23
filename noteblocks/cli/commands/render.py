"""Render command: note snapshot to HTML."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from noteblocks.errors import NoteBlocksError
from noteblocks.rendering.options import RenderConfig
from noteblocks.rendering.renderer import NoteRenderer
from noteblocks.storage import read_note_file

app = typer.Typer(help="Render a note to HTML")
console = Console()


@app.callback(invoke_without_command=True)
def main(
    note_file: Path = typer.Argument(..., help="Note JSON snapshot"),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Write HTML here instead of stdout"),
    full_page: bool = typer.Option(False, "--full-page", help="Wrap output in a standalone page"),
    structured: Optional[bool] = typer.Option(
        None,
        "--structured/--flat",
        help="Force the structured or flat representation (default: structured when present)",
    ),
    editable: bool = typer.Option(False, "--editable", help="Render editing affordances"),
):
    """Render the note body."""
    try:
        note = read_note_file(note_file)
    except NoteBlocksError as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)

    renderer = NoteRenderer(RenderConfig(readonly=not editable))
    if full_page:
        output = renderer.render_full_page(note, structured=structured)
    else:
        output = renderer.render(note, structured=structured)

    if out is None:
        typer.echo(output)
        return
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(output, encoding="utf-8")
    console.print(f"Wrote [bold]{out}[/bold]")
