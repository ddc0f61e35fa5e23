"""Attach command: ingest files into a note and reference them."""

import asyncio
from pathlib import Path
from typing import List

import typer
from rich.console import Console

from noteblocks.errors import NoteBlocksError
from noteblocks.ingest import IncomingFile, IngestConfig, ingest_files
from noteblocks.mutations import FlatEditSession, StructuredEditSession, add_attachments
from noteblocks.storage import read_note_file, write_note_file

app = typer.Typer(help="Attach files to a note")
console = Console()


@app.callback(invoke_without_command=True)
def main(
    note_file: Path = typer.Argument(..., help="Note JSON snapshot (rewritten in place)"),
    files: List[Path] = typer.Argument(..., help="Files to attach"),
    max_bytes: int = typer.Option(
        IngestConfig().max_file_bytes, "--max-bytes", help="Per-file size limit"
    ),
):
    """Append files to the catalog and insert a reference for each."""
    try:
        note = read_note_file(note_file)
    except NoteBlocksError as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)

    report = asyncio.run(
        ingest_files(
            [IncomingFile.from_path(p) for p in files],
            IngestConfig(max_file_bytes=max_bytes),
        )
    )
    for failure in report.failures:
        console.print(f"[yellow]Skipped:[/yellow] {failure}")
    if not report.attachments:
        console.print("[yellow]Warning:[/yellow] Nothing attached")
        raise typer.Exit(1)

    add_attachments(note, report.attachments)
    if note.structured_content is not None:
        StructuredEditSession(note).insert_attachments(report.attachments)
    else:
        FlatEditSession(note).insert_attachments(report.attachments)
    write_note_file(note, note_file)
    for att in report.attachments:
        console.print(f"Attached [bold]{att.name}[/bold] as {att.id} ({att.kind.value})")
