"""
Persistence collaborator.

``NoteStore`` is the seam the rest of the package saves through: it accepts a
full note snapshot and later returns the same shape. ``JsonNoteStore`` keeps
one ``<note-id>.json`` file per note under a directory, using the camelCase
wire names. Writes replace the whole file (last writer wins).
"""

from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Iterator, Protocol, Union

from pydantic import ValidationError

from .errors import InvalidNoteError, NoteNotFound
from .models.note import Note

LOGGER = logging.getLogger(__name__)

_SAFE_ID = re.compile(r"[^A-Za-z0-9._-]")


class NoteStore(Protocol):
    def load(self, note_id: str) -> Note: ...

    def save(self, note: Note) -> None: ...


def read_note_file(path: Union[str, Path]) -> Note:
    p = Path(path)
    try:
        raw = p.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise NoteNotFound(str(p)) from e
    try:
        return Note.model_validate_json(raw)
    except ValidationError as e:
        raise InvalidNoteError(f"invalid note file {p}: {e.error_count()} error(s)", e.errors()) from e


def write_note_file(note: Note, path: Union[str, Path]) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    tmp = p.with_suffix(p.suffix + ".tmp")
    tmp.write_text(json.dumps(note.to_wire(), ensure_ascii=False, indent=2), encoding="utf-8")
    os.replace(tmp, p)
    LOGGER.debug("noteblocks.storage.write note=%s path=%s", note.id, p)
    return p


class JsonNoteStore:
    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def _path(self, note_id: str) -> Path:
        return self.root / f"{_SAFE_ID.sub('_', note_id)}.json"

    def load(self, note_id: str) -> Note:
        return read_note_file(self._path(note_id))

    def save(self, note: Note) -> None:
        write_note_file(note, self._path(note.id))

    def __iter__(self) -> Iterator[Note]:
        if not self.root.is_dir():
            return
        for p in sorted(self.root.glob("*.json")):
            try:
                yield read_note_file(p)
            except InvalidNoteError as e:
                LOGGER.warning("Skipping %s: %s", p, e)
