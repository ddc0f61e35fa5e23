"""Upgrade command: give a legacy note its structured form."""

from pathlib import Path

import typer
from rich.console import Console

from noteblocks.errors import NoteBlocksError
from noteblocks.storage import read_note_file, write_note_file
from noteblocks.structured import ensure_structured

app = typer.Typer(help="Build structured content for a flat-only note")
console = Console()


@app.callback(invoke_without_command=True)
def main(
    note_file: Path = typer.Argument(..., help="Note JSON snapshot (rewritten in place)"),
):
    """Convert flat content to blocks and save the note."""
    try:
        note = read_note_file(note_file)
    except NoteBlocksError as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)

    if note.structured_content is not None:
        console.print("[yellow]Note already has structured content[/yellow]")
        return

    doc = ensure_structured(note)
    write_note_file(note, note_file)
    console.print(f"Upgraded [bold]{note.id}[/bold]: {len(doc.blocks)} block(s)")
