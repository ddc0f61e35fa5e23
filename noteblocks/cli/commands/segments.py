"""Segments command: show how a note's flat content is split."""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from noteblocks.catalog import AttachmentCatalog
from noteblocks.codec import decode
from noteblocks.domain import AttachmentRef
from noteblocks.errors import NoteBlocksError
from noteblocks.mutations import dangling_references
from noteblocks.storage import read_note_file

app = typer.Typer(help="List the decoded segments of a note")
console = Console()


@app.callback(invoke_without_command=True)
def main(
    note_file: Path = typer.Argument(..., help="Note JSON snapshot"),
):
    """Print one row per text run or attachment reference."""
    try:
        note = read_note_file(note_file)
    except NoteBlocksError as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)

    catalog = AttachmentCatalog.for_note(note)
    table = Table("#", "Kind", "Attachment", "Literal")
    for i, seg in enumerate(decode(note.content)):
        if isinstance(seg, AttachmentRef):
            status = "" if seg.attachment_id in catalog else " [red](missing)[/red]"
            table.add_row(str(i), "attachment", seg.attachment_id + status, seg.raw_marker)
        else:
            table.add_row(str(i), "text", "", repr(seg.content))
    console.print(table)

    dangling = dangling_references(note)
    if dangling:
        console.print(f"[yellow]Dangling references:[/yellow] {', '.join(dangling)}")
